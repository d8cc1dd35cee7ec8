"""
Therapist roster (relational store)

Row-level insert/update/delete; each call runs in its own session and
transaction. Unlike the document resources, update and delete need an id
and an unknown update target is reported.
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from physioflow.core.errors import BadRequest, NotFound, StoreUnavailable
from physioflow.database.relational import TherapistRow
from physioflow.database.schemas import Therapist
from physioflow.services import admin_gate

logger = logging.getLogger(__name__)

MUTABLE_FIELDS = ("firstname", "lastname", "email", "clinic", "permission")
NOT_NULL_FIELDS = ("email", "permission")


class TherapistRepository:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with self._session_factory() as session, session.begin():
                yield session
        except SQLAlchemyError as e:
            logger.error(f"Therapist store error: {e}")
            raise StoreUnavailable(str(e)) from e

    def list(self) -> List[Therapist]:
        """
        All therapists, newest first
        """
        with self._session() as session:
            rows = session.scalars(
                select(TherapistRow).order_by(TherapistRow.createdat.desc(), TherapistRow.id.desc())
            )
            return [Therapist.model_validate(row) for row in rows]

    def create(self, payload: Dict[str, Any]) -> Therapist:
        fields = {k: v for k, v in payload.items() if k in MUTABLE_FIELDS}
        with self._session() as session:
            row = TherapistRow(**fields)
            session.add(row)
            session.flush()
            therapist = Therapist.model_validate(row)
        logger.info(f"Created therapist {therapist.id}")
        return therapist

    def update(self, patch: Dict[str, Any]) -> Therapist:
        therapist_id = patch.get('id')
        if not therapist_id:
            raise BadRequest("ID required")
        with self._session() as session:
            row = session.get(TherapistRow, therapist_id)
            if row is None:
                raise NotFound("Therapist not found")
            for key in MUTABLE_FIELDS:
                if key in patch and not (patch[key] is None and key in NOT_NULL_FIELDS):
                    setattr(row, key, patch[key])
            session.flush()
            therapist = Therapist.model_validate(row)
        logger.info(f"Updated therapist {therapist_id}")
        return therapist

    def delete(self, therapist_id: Optional[str]) -> bool:
        if not therapist_id:
            raise BadRequest("ID required")
        with self._session() as session:
            session.execute(delete(TherapistRow).where(TherapistRow.id == therapist_id))
        logger.info(f"Deleted therapist {therapist_id}")
        return True

    def is_admin(self, email: Optional[str]) -> bool:
        return admin_gate.is_admin(self.list(), email)
