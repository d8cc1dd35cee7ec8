"""
Therapist roster endpoints (relational store)

Mutations pass through the admin gate, which is a no-op unless
ENFORCE_ADMIN_GATE is set.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from physioflow.database import TherapistRepository
from physioflow.database.schemas import Therapist, TherapistCreate, TherapistUpdate
from physioflow.api.utils import admin_gate_dependency, get_therapist_repository

router = APIRouter(tags=["therapists"])


@router.get("/therapists", response_model=List[Therapist])
async def list_therapists(therapists: TherapistRepository = Depends(get_therapist_repository)):
    """
    All therapists, newest first
    """
    return therapists.list()


@router.post("/therapists", response_model=Therapist, dependencies=[Depends(admin_gate_dependency)])
async def create_therapist(
    therapist: TherapistCreate,
    therapists: TherapistRepository = Depends(get_therapist_repository),
):
    return therapists.create(therapist.model_dump())


@router.patch("/therapists", response_model=Therapist, dependencies=[Depends(admin_gate_dependency)])
async def update_therapist(
    updates: TherapistUpdate,
    therapists: TherapistRepository = Depends(get_therapist_repository),
):
    """
    Update the therapist named by `id` in the body

    400 if `id` is missing, 404 if no such therapist.
    """
    return therapists.update(updates.model_dump(exclude_unset=True))


@router.delete("/therapists", dependencies=[Depends(admin_gate_dependency)])
async def delete_therapist(
    item_id: Optional[str] = Query(None, alias="id"),
    therapists: TherapistRepository = Depends(get_therapist_repository),
):
    therapists.delete(item_id)
    return {"success": True}
