"""
Authentication

Opaque capability used by the API: sign up, sign in, sign out, verify.
Accounts live in the relational store, passwords are hashed with passlib,
sessions are signed JWTs whose subject is the account email.
"""
import logging
import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional, Set

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from physioflow.core.errors import Conflict, StoreUnavailable, Unauthorized
from physioflow.database.relational import AccountRow

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    return pwd_context.verify(plain_password, password_hash)


class AuthService:
    def __init__(self, session_factory: sessionmaker, secret_key: str,
                 algorithm: str = "HS256", expire_minutes: int = 60):
        self._session_factory = session_factory
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes
        # Revoked token ids, kept for the life of the process
        self._revoked: Set[str] = set()
        self._revoked_lock = threading.Lock()

    def create_access_token(self, email: str) -> str:
        expire = datetime.now(timezone.utc) + timedelta(minutes=self.expire_minutes)
        claims = {"sub": email, "jti": uuid.uuid4().hex, "exp": expire}
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def _decode(self, token: str) -> dict:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            raise Unauthorized("Could not validate credentials")
        if not payload.get("sub") or not payload.get("jti"):
            raise Unauthorized("Could not validate credentials")
        return payload

    def _verify(self, token: Optional[str]) -> dict:
        """Decode once and reject missing or signed-out tokens"""
        if not token:
            raise Unauthorized("Not authenticated")
        payload = self._decode(token)
        with self._revoked_lock:
            if payload["jti"] in self._revoked:
                raise Unauthorized("Session has been signed out")
        return payload

    def sign_up(self, email: str, password: str) -> str:
        try:
            with self._session_factory() as session, session.begin():
                session.add(AccountRow(email=email, password_hash=hash_password(password)))
        except IntegrityError:
            raise Conflict("Account already exists")
        except SQLAlchemyError as e:
            raise StoreUnavailable(str(e)) from e
        logger.info(f"Account created for {email}")
        return self.create_access_token(email)

    def sign_in(self, email: str, password: str) -> str:
        try:
            with self._session_factory() as session:
                account = session.scalars(select(AccountRow).where(AccountRow.email == email)).first()
        except SQLAlchemyError as e:
            raise StoreUnavailable(str(e)) from e
        if account is None or not verify_password(password, account.password_hash):
            raise Unauthorized("Invalid email or password")
        return self.create_access_token(email)

    def sign_out(self, token: Optional[str]):
        payload = self._verify(token)
        with self._revoked_lock:
            self._revoked.add(payload["jti"])
        logger.info(f"Signed out {payload['sub']}")

    def current_email(self, token: Optional[str]) -> str:
        """
        Verify a bearer token and return the signed-in email
        """
        return self._verify(token)["sub"]
