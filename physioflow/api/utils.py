"""
Shared dependencies for API endpoints

Repositories and the auth service are created once in create_app() and
kept on app.state; endpoints receive them through these helpers.
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from physioflow.core.errors import BadRequest, Forbidden
from physioflow.database import (
    ExerciseRepository,
    PatientRepository,
    ProgramRepository,
    TherapistRepository,
)
from physioflow.services import admin_gate
from physioflow.services.auth import AuthService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


def get_exercise_repository(request: Request) -> ExerciseRepository:
    return request.app.state.exercises


def get_patient_repository(request: Request) -> PatientRepository:
    return request.app.state.patients


def get_program_repository(request: Request) -> ProgramRepository:
    return request.app.state.programs


def get_therapist_repository(request: Request) -> TherapistRepository:
    return request.app.state.therapists


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth


def get_current_email(
    token: Optional[str] = Depends(oauth2_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> str:
    """
    Email of the signed-in user, 401 if the bearer token is missing or invalid
    """
    return auth.current_email(token)


def require_id(item_id: Optional[str]) -> str:
    """
    Raises BadRequest (400) when an update/delete arrives without an id
    """
    if not item_id:
        raise BadRequest("ID required")
    return item_id


def admin_gate_dependency(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    auth: AuthService = Depends(get_auth_service),
    therapists: TherapistRepository = Depends(get_therapist_repository),
):
    """
    Server-side admin gate for therapist mutations

    Only active when ENFORCE_ADMIN_GATE is on. While the roster has no admin
    yet, any signed-in user may write so the first admin can be created.
    """
    if not request.app.state.enforce_admin_gate:
        return
    email = auth.current_email(token)
    roster = therapists.list()
    if not admin_gate.has_admin(roster):
        return
    if not admin_gate.is_admin(roster, email):
        raise Forbidden("Admin permission required")
