"""Structured resume returned by the model, validated after recovery."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl


class PersonalInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    full_name: Optional[str] = Field(default=None, alias="fullName")
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    portfolio: Optional[HttpUrl] = None


class WorkExperience(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    company: str
    title: str
    start_date: Optional[str] = Field(default=None, alias="startDate")
    end_date: Optional[str] = Field(default=None, alias="endDate")
    current: Optional[bool] = None
    description: Optional[str] = None
    location: Optional[str] = None


class Education(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    institution: str
    degree: Optional[str] = None
    field: Optional[str] = None
    graduation_date: Optional[str] = Field(default=None, alias="graduationDate")
    gpa: Optional[str] = None


class ResumeCandidate(BaseModel):
    """Resume as extracted by the model. Field names follow the prompt's JSON keys via aliases."""

    model_config = ConfigDict(populate_by_name=True)

    personal: PersonalInfo
    summary: Optional[str] = None
    experience: Optional[List[WorkExperience]] = None
    education: Optional[List[Education]] = None
    skills: Optional[List[str]] = None
