"""
Admin capability gate

A user is admin iff a therapist row has exactly their email (case-sensitive,
as stored) and permission "admin". Nothing is read from the session itself.
"""
from typing import Any, Iterable, Optional


def _field(therapist: Any, name: str) -> Any:
    if isinstance(therapist, dict):
        return therapist.get(name)
    return getattr(therapist, name, None)


def is_admin(therapists: Iterable[Any], current_email: Optional[str]) -> bool:
    """
    Works on dicts, ORM rows or pydantic models
    """
    if not current_email:
        return False
    return any(
        _field(t, "email") == current_email and _field(t, "permission") == "admin"
        for t in therapists
    )


def has_admin(therapists: Iterable[Any]) -> bool:
    return any(_field(t, "permission") == "admin" for t in therapists)
