"""
Patient roster endpoints
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from physioflow.database import PatientRepository
from physioflow.database.schemas import Patient, PatientCreate, PatientUpdate
from physioflow.api.utils import get_patient_repository, require_id

router = APIRouter(tags=["patients"])


@router.get("/patients", response_model=List[Patient], response_model_exclude_none=True)
async def list_patients(patients: PatientRepository = Depends(get_patient_repository)):
    return patients.list()


@router.get("/patients/{patient_id}", response_model=Patient, response_model_exclude_none=True)
async def get_patient(patient_id: str, patients: PatientRepository = Depends(get_patient_repository)):
    return patients.get(patient_id)


@router.post("/patients", response_model=Patient, response_model_exclude_none=True)
async def create_patient(
    patient: PatientCreate,
    patients: PatientRepository = Depends(get_patient_repository),
):
    """
    Save patient (intake form)

    Returns the created patient with its generated id and startDate.
    """
    return patients.create(patient.model_dump(by_alias=True, exclude_none=True))


@router.patch("/patients", response_model=Patient, response_model_exclude_none=True)
async def update_patient(
    updates: PatientUpdate,
    patients: PatientRepository = Depends(get_patient_repository),
):
    patient_id = require_id(updates.id)
    patch = updates.model_dump(by_alias=True, exclude_unset=True, exclude_none=True, exclude={"id"})
    return patients.update(patient_id, patch)


@router.delete("/patients")
async def delete_patient(
    item_id: Optional[str] = Query(None, alias="id"),
    patients: PatientRepository = Depends(get_patient_repository),
):
    """
    Delete patient and every program that belongs to them
    """
    patients.delete(require_id(item_id))
    return {"success": True}
