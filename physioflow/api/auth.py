"""
Authentication endpoints

Sign up / sign in return a bearer token; /auth/me reports the signed-in
email and whether the therapist roster marks it as admin.
"""
from typing import Optional
from fastapi import APIRouter, Depends

from physioflow.database import TherapistRepository
from physioflow.database.schemas import Credentials, CurrentUser, Token
from physioflow.services.auth import AuthService
from physioflow.api.utils import (
    get_auth_service,
    get_current_email,
    get_therapist_repository,
    oauth2_scheme,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=Token)
async def sign_up(credentials: Credentials, auth: AuthService = Depends(get_auth_service)):
    """
    Create an account and sign it in (409 if the email is taken)
    """
    token = auth.sign_up(credentials.email, credentials.password)
    return Token(access_token=token, email=credentials.email)


@router.post("/login", response_model=Token)
async def sign_in(credentials: Credentials, auth: AuthService = Depends(get_auth_service)):
    token = auth.sign_in(credentials.email, credentials.password)
    return Token(access_token=token, email=credentials.email)


@router.post("/logout")
async def sign_out(token: Optional[str] = Depends(oauth2_scheme), auth: AuthService = Depends(get_auth_service)):
    auth.sign_out(token)
    return {"success": True}


@router.get("/me", response_model=CurrentUser)
async def current_user(
    email: str = Depends(get_current_email),
    therapists: TherapistRepository = Depends(get_therapist_repository),
):
    return CurrentUser(email=email, is_admin=therapists.is_admin(email))
