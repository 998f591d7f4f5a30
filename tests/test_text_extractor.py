import sys
import unittest
from io import BytesIO
from pathlib import Path
from unittest.mock import patch

from docx import Document as DocxDocument

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_parser_ai.config import ParserSettings  # noqa: E402
from resume_parser_ai.cv_pipeline import text_extractor  # noqa: E402
from resume_parser_ai.cv_pipeline.pdf_strategies import extract_raw_text  # noqa: E402
from resume_parser_ai.cv_pipeline.text_extractor import extract_raw, extract_text  # noqa: E402
from resume_parser_ai.errors import ErrorKind, ResumeParserError  # noqa: E402
from resume_parser_ai.schemas.document import Document  # noqa: E402
from resume_parser_ai.services.resume_gate import validate_resume_text  # noqa: E402
from resume_parser_ai.services.text_cleaner import sanitize_text  # noqa: E402

SAMPLE_RESUME = (Path(__file__).parent / "fixtures" / "sample_resume.txt").read_text(encoding="utf-8")
LONG_TEXT = "Jane Doe, Software Engineer. Experience with Python and SQL at Acme Corp since 2019."
SETTINGS = ParserSettings(api_key="test-key")


def _docx_bytes(paragraphs, table_rows=None) -> bytes:
    doc = DocxDocument()
    for text in paragraphs:
        doc.add_paragraph(text)
    if table_rows:
        table = doc.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for r, row in enumerate(table_rows):
            for c, value in enumerate(row):
                table.cell(r, c).text = value
    buf = BytesIO()
    doc.save(buf)
    return buf.getvalue()


class DocumentPreconditionTests(unittest.TestCase):
    def test_unsupported_extension(self):
        doc = Document(content=b"some bytes", filename="resume.xyz")
        with self.assertRaises(ResumeParserError) as ctx:
            extract_raw(doc, SETTINGS)
        err = ctx.exception
        self.assertEqual(err.kind, ErrorKind.FILE_ERROR)
        self.assertIn(".xyz", err.message)
        self.assertIn(".pdf, .docx, .txt", err.message)
        self.assertEqual(err.details["supportedFormats"], [".pdf", ".docx", ".txt"])

    def test_empty_file_regardless_of_extension(self):
        for name in ("resume.pdf", "resume.txt", "resume.xyz", "noext"):
            with self.subTest(name=name):
                with self.assertRaises(ResumeParserError) as ctx:
                    extract_raw(Document(content=b"", filename=name), SETTINGS)
                self.assertEqual(ctx.exception.kind, ErrorKind.FILE_ERROR)
                self.assertIn("empty", ctx.exception.message)

    def test_oversized_file(self):
        settings = SETTINGS.with_overrides(max_file_bytes=10)
        with self.assertRaises(ResumeParserError) as ctx:
            extract_raw(Document(content=b"x" * 11, filename="resume.txt"), settings)
        self.assertEqual(ctx.exception.kind, ErrorKind.FILE_ERROR)
        self.assertIn("too large", ctx.exception.message)
        self.assertEqual(ctx.exception.details["size"], 11)
        self.assertIn("suggestion", ctx.exception.details)

    def test_extension_is_case_insensitive(self):
        result = extract_raw(Document(content=SAMPLE_RESUME.encode(), filename="CV.TXT"), SETTINGS)
        self.assertEqual(result.method, "utf-8")


class ExtractionChainTests(unittest.TestCase):
    def test_short_result_falls_through_to_next_strategy(self):
        calls = []

        def first(content):
            calls.append("first")
            return "0123456789"

        def second(content):
            calls.append("second")
            return LONG_TEXT

        with patch.dict(text_extractor.STRATEGIES, {".pdf": [("first", first), ("second", second)]}):
            result = extract_raw(Document(content=b"%PDF", filename="cv.pdf"), SETTINGS)
        self.assertEqual(calls, ["first", "second"])
        self.assertEqual(result.method, "second")
        self.assertEqual(result.text, LONG_TEXT)
        self.assertEqual([a.method for a in result.attempts], ["first", "second"])

    def test_exception_falls_through_to_next_strategy(self):
        def broken(content):
            raise RuntimeError("boom")

        with patch.dict(text_extractor.STRATEGIES, {".pdf": [("broken", broken), ("ok", lambda c: LONG_TEXT)]}):
            result = extract_raw(Document(content=b"%PDF", filename="cv.pdf"), SETTINGS)
        self.assertEqual(result.method, "ok")
        self.assertEqual(result.attempts[0].error, "boom")

    def test_first_acceptable_result_stops_the_chain(self):
        def never(content):
            raise AssertionError("later strategy must not run")

        with patch.dict(text_extractor.STRATEGIES, {".pdf": [("fast", lambda c: LONG_TEXT), ("slow", never)]}):
            result = extract_raw(Document(content=b"%PDF", filename="cv.pdf"), SETTINGS)
        self.assertEqual(result.method, "fast")
        self.assertEqual(len(result.attempts), 1)

    def test_all_strategies_fail(self):
        def fail_one(content):
            raise ValueError("boom1")

        def fail_two(content):
            raise ValueError("boom2")

        strategies = [("a", fail_one), ("b", lambda c: "tiny"), ("c", fail_two)]
        with patch.dict(text_extractor.STRATEGIES, {".pdf": strategies}):
            with self.assertRaises(ResumeParserError) as ctx:
                extract_raw(Document(content=b"%PDF", filename="cv.pdf"), SETTINGS)
        err = ctx.exception
        self.assertEqual(err.kind, ErrorKind.EXTRACTION_ERROR)
        self.assertIn("PDF file appears to be empty", err.message)
        self.assertEqual(err.details["lastError"], "boom2")
        self.assertEqual([a["method"] for a in err.details["attempts"]], ["a", "b", "c"])
        self.assertTrue(err.details["suggestion"])

    def test_threshold_is_exclusive_and_configurable(self):
        fifty = "x" * 50
        with patch.dict(text_extractor.STRATEGIES, {".pdf": [("only", lambda c: fifty)]}):
            with self.assertRaises(ResumeParserError):
                extract_raw(Document(content=b"%PDF", filename="cv.pdf"), SETTINGS)
            result = extract_raw(
                Document(content=b"%PDF", filename="cv.pdf"),
                SETTINGS.with_overrides(min_extracted_chars=49),
            )
        self.assertEqual(result.text, fifty)

    def test_damaged_pdf_reaches_raw_scraper(self):
        content = (
            b"%PDF-1.4\n"
            b"BT (Jane Doe Senior Software Engineer at Acme Corp) Tj "
            b"(jane@example.com Experience Education Skills) Tj ET\n"
        )
        result = extract_raw(Document(content=content, filename="cv.pdf"), SETTINGS)
        self.assertEqual(result.method, "raw")
        self.assertIn("Jane Doe Senior Software Engineer", result.text)
        self.assertIn("jane@example.com", result.text)


class FormatStrategyTests(unittest.TestCase):
    def test_raw_scraper_unescapes_literals(self):
        self.assertEqual(extract_raw_text(rb"BT (Hello \(World\)) Tj (a\\b) Tj ET"), "Hello (World) a\\b")

    def test_raw_scraper_without_literals(self):
        with self.assertRaises(ValueError):
            extract_raw_text(b"%PDF-1.4 no strings here")

    def test_docx_paragraphs_and_tables(self):
        content = _docx_bytes(
            ["Jane Doe", "Senior Software Engineer at Acme Corp building data pipelines"],
            table_rows=[["Skills", "Python"], ["Education", "University of Texas"]],
        )
        result = extract_raw(Document(content=content, filename="cv.docx"), SETTINGS)
        self.assertEqual(result.method, "python-docx")
        self.assertIn("Jane Doe", result.text)
        self.assertIn("Skills | Python", result.text)
        self.assertIn("University of Texas", result.text)

    def test_empty_docx(self):
        with self.assertRaises(ResumeParserError) as ctx:
            extract_raw(Document(content=_docx_bytes([]), filename="cv.docx"), SETTINGS)
        self.assertEqual(ctx.exception.kind, ErrorKind.EXTRACTION_ERROR)
        self.assertIn("DOCX file appears to be empty", ctx.exception.message)

    def test_corrupt_docx(self):
        with self.assertRaises(ResumeParserError) as ctx:
            extract_raw(Document(content=b"definitely not a zip archive", filename="cv.docx"), SETTINGS)
        self.assertEqual(ctx.exception.kind, ErrorKind.EXTRACTION_ERROR)
        self.assertTrue(ctx.exception.details["lastError"])

    def test_whitespace_txt(self):
        with self.assertRaises(ResumeParserError) as ctx:
            extract_raw(Document(content=b"   \n\n  ", filename="cv.txt"), SETTINGS)
        self.assertEqual(ctx.exception.message, "TXT file is empty")


class ExtractTextTests(unittest.TestCase):
    def test_plain_text_resume_end_to_end(self):
        doc = Document(content=SAMPLE_RESUME.encode("utf-8"), filename="resume.txt")
        bounded = extract_text(doc, SETTINGS)
        cleaned = sanitize_text(SAMPLE_RESUME)
        self.assertTrue(validate_resume_text(cleaned).valid)
        self.assertEqual(bounded, cleaned)

    def test_non_resume_text_is_rejected(self):
        doc = Document(content=("lorem ipsum dolor sit amet " * 10).encode(), filename="notes.txt")
        with self.assertRaises(ResumeParserError) as ctx:
            extract_text(doc, SETTINGS)
        err = ctx.exception
        self.assertEqual(err.kind, ErrorKind.EXTRACTION_ERROR)
        self.assertIn("does not appear to be a resume", err.message)
        self.assertTrue(err.details["preview"].startswith("lorem ipsum"))

    def test_long_text_is_bounded(self):
        body = SAMPLE_RESUME + ("Delivered another project on time.\n" * 50)
        doc = Document(content=body.encode(), filename="resume.txt")
        bounded = extract_text(doc, SETTINGS.with_overrides(max_llm_chars=300))
        self.assertLessEqual(len(bounded), 300)
        self.assertTrue(bounded.startswith("Jane Doe"))


if __name__ == "__main__":
    unittest.main()
