"""
Data models

- camelCase on the wire and on disk, snake_case in Python
- Create models carry the required fields, Update models enumerate what is mutable
- Anything not listed on an Update model (id, patientId, startDate) is ignored
- Response models pass through keys they do not declare and render numbers in text fields as strings
"""
from typing import Annotated, Optional, List, Literal
from datetime import datetime
from pydantic import AfterValidator, BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel


Permission = Literal["therapist", "admin"]


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    return value


NonBlankStr = Annotated[str, AfterValidator(_not_blank)]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore", coerce_numbers_to_str=True
    )


class StoredModel(CamelModel):
    """Read side of a stored record; undeclared keys are kept"""
    model_config = ConfigDict(extra="allow")


# Exercises

class ExerciseCreate(CamelModel):
    name: NonBlankStr            = Field(...,  description="Exercise name")
    category: Optional[str]      = Field(None, description="Category (e.g. 'mobility', 'strength')")
    instructions: Optional[str]  = Field(None, description="Free-text instructions")
    reps: Optional[str]          = Field(None, description="Repetitions")
    sets: Optional[str]          = Field(None, description="Sets")
    duration: Optional[str]      = Field(None, description="Duration")


class ExerciseUpdate(CamelModel):
    id: Optional[str]            = Field(None, description="Exercise to update")
    name: Optional[NonBlankStr]  = None
    category: Optional[str]      = None
    instructions: Optional[str]  = None
    reps: Optional[str]          = None
    sets: Optional[str]          = None
    duration: Optional[str]      = None


class Exercise(StoredModel):
    id: str                      = Field(...,  description="Exercise unique identifier (auto-generated)")
    name: Optional[str]          = None
    category: Optional[str]      = None
    instructions: Optional[str]  = None
    reps: Optional[str]          = None
    sets: Optional[str]          = None
    duration: Optional[str]      = None


# Patients

class PatientCreate(CamelModel):
    first_name: NonBlankStr      = Field(...,  description="First name")
    last_name: Optional[str]     = Field(None, description="Last name")
    email: Optional[str]         = Field(None, description="Email address")
    phone: Optional[str]         = Field(None, description="Phone number")
    date_of_birth: Optional[str] = Field(None, description="Date of birth (format: YYYY-MM-DD)")
    notes: Optional[str]         = Field(None, description="Clinical notes")


class PatientUpdate(CamelModel):
    id: Optional[str]            = Field(None, description="Patient to update")
    first_name: Optional[NonBlankStr] = None
    last_name: Optional[str]     = None
    email: Optional[str]         = None
    phone: Optional[str]         = None
    date_of_birth: Optional[str] = None
    notes: Optional[str]         = None


class Patient(StoredModel):
    id: str                      = Field(...,  description="Patient unique identifier (auto-generated)")
    first_name: Optional[str]    = None
    last_name: Optional[str]     = None
    email: Optional[str]         = None
    phone: Optional[str]         = None
    date_of_birth: Optional[str] = None
    notes: Optional[str]         = None
    start_date: Optional[str]    = Field(None, description="Creation date (YYYY-MM-DD, server-assigned)")


# Programs

class ProgramCreate(CamelModel):
    patient_id: str              = Field(...,  min_length=1, description="Patient this program belongs to")
    exercise_ids: List[str]      = Field(...,  min_length=1, description="Ordered exercise ids")
    frequency: str               = Field("daily", description="One of daily, 2x/day, weekly, 2x/week")


class ProgramUpdate(CamelModel):
    id: Optional[str]                    = Field(None, description="Program to update")
    exercise_ids: Optional[List[str]]    = Field(None, min_length=1)
    frequency: Optional[str]             = None


class Program(StoredModel):
    id: str                      = Field(...,  description="Program unique identifier (auto-generated)")
    patient_id: Optional[str]    = None
    exercise_ids: List[str]      = Field(default_factory=list)
    frequency: Optional[str]     = None
    start_date: Optional[str]    = Field(None, description="Start date (YYYY-MM-DD, set once at creation)")


class ProgramDetail(Program):
    """
    Program with its references resolved

    Exercise ids that no longer resolve are skipped.
    """
    patient: Optional[Patient]   = Field(None, description="Owning patient, if it still exists")
    exercises: List[Exercise]    = Field(default_factory=list, description="Resolved exercises, in program order")


# Therapists (relational store, column names kept as stored)

class TherapistCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    firstname: Optional[str]     = Field(None, description="First name")
    lastname: Optional[str]      = Field(None, description="Last name")
    email: NonBlankStr           = Field(...,  description="Email, joins to the authenticated identity")
    clinic: Optional[str]        = Field(None, description="Clinic name")
    permission: Permission       = Field("therapist", description="'therapist' or 'admin'")


class TherapistUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: Optional[str]                    = Field(None, description="Therapist to update")
    firstname: Optional[str]             = None
    lastname: Optional[str]              = None
    email: Optional[NonBlankStr]         = None
    clinic: Optional[str]                = None
    permission: Optional[Permission]     = None


class Therapist(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    firstname: Optional[str]     = None
    lastname: Optional[str]      = None
    email: str
    clinic: Optional[str]        = None
    permission: Permission
    createdat: Optional[datetime] = None


# Auth

class Credentials(CamelModel):
    email: str                   = Field(...,  min_length=3, description="Account email")
    password: str                = Field(...,  min_length=6, description="Account password")


class Token(CamelModel):
    access_token: str
    token_type: str              = "bearer"
    email: str


class CurrentUser(CamelModel):
    email: str
    is_admin: bool               = False
