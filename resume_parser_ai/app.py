"""
Resume Parser – Streamlit frontend.
No business logic in layout; parsing runs through the cv_pipeline.
"""

import json

import streamlit as st

from resume_parser_ai.config import MAX_FILE_BYTES, SUPPORTED_EXTENSIONS, load_settings
from resume_parser_ai.cv_pipeline import run_cv_pipeline
from resume_parser_ai.schemas.result import ParseFailure

UPLOAD_TYPES = [ext.lstrip(".") for ext in SUPPORTED_EXTENSIONS]


@st.cache_resource
def _settings():
    """Settings are read from the environment once per server process."""
    return load_settings()


def _render_failure(envelope: dict) -> None:
    failure = ParseFailure.from_envelope(envelope)
    st.error(f"**{failure.error.type}**: {failure.error.message}")
    if failure.suggestion():
        st.info(failure.suggestion())
    details = {k: v for k, v in failure.error.details.items() if k != "suggestion"}
    if details:
        with st.expander("Details"):
            st.json(details)


def _render_success(envelope: dict) -> None:
    data = envelope["data"]
    personal = data.get("personal") or {}
    st.success(f"Parsed with `{envelope['model']}`")
    st.markdown(f"### {personal.get('fullName') or 'Unnamed candidate'}")
    contact = [personal.get(k) for k in ("email", "phone", "location") if personal.get(k)]
    if contact:
        st.caption(" · ".join(contact))
    skills = data.get("skills") or []
    if skills:
        st.markdown(" ".join(f"`{s}`" for s in skills[:30] if s and str(s).strip()))

    warnings = envelope.get("warnings") or []
    if warnings:
        with st.expander(f"Validation warnings ({len(warnings)})"):
            for w in warnings:
                st.markdown(f"- `{w['field']}`: {w['message']}")

    st.download_button(
        "Download JSON",
        data=json.dumps(data, indent=2, ensure_ascii=False).encode("utf-8"),
        file_name="resume.json",
        mime="application/json",
        key="download_json",
    )
    with st.expander("Structured data", expanded=True):
        st.json(data)
    with st.expander("Text sent to the model"):
        st.text(envelope["rawText"])


def render_layout() -> None:
    st.set_page_config(page_title="Resume Parser", layout="wide")
    st.title("Resume Parser")
    st.markdown("*Upload a PDF, DOCX or TXT resume to extract structured JSON.*")
    st.divider()

    settings = _settings()
    uploaded = st.file_uploader(
        f"Resume file (max {MAX_FILE_BYTES // (1024 * 1024)}MB)",
        type=UPLOAD_TYPES,
        key="resume_upload",
    )
    parse_clicked = st.button("Parse", type="primary", key="parse_btn", disabled=uploaded is None)

    if "result" not in st.session_state:
        st.session_state["result"] = None

    if parse_clicked and uploaded is not None:
        if not settings.api_key:
            st.session_state["result"] = None
            st.error("GROQ_API_KEY is not set. Add it to your .env file.")
        else:
            with st.spinner("Extracting text and parsing resume…"):
                st.session_state["result"] = run_cv_pipeline(uploaded.getvalue(), uploaded.name, settings)

    result = st.session_state.get("result")
    if not result:
        st.info("Choose a file, then click **Parse**.")
    elif result.get("success"):
        _render_success(result)
    else:
        _render_failure(result)


if __name__ == "__main__":
    render_layout()
