"""
Database module

Document store (exercises, patients, programs) and relational store
(therapists, accounts), plus the data models shared by both.
"""

from physioflow.database.document_store import DocumentStore, empty_document
from physioflow.database.repositories import (
    DocumentCollection,
    ExerciseRepository,
    PatientRepository,
    ProgramRepository,
)
from physioflow.database.relational import make_engine, make_session_factory
from physioflow.database.therapists import TherapistRepository

__all__ = [
    "DocumentStore",
    "empty_document",
    "DocumentCollection",
    "ExerciseRepository",
    "PatientRepository",
    "ProgramRepository",
    "make_engine",
    "make_session_factory",
    "TherapistRepository",
]
