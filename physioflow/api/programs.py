"""
Exercise program endpoints
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from physioflow.database import ProgramRepository
from physioflow.database.schemas import Program, ProgramCreate, ProgramDetail, ProgramUpdate
from physioflow.api.utils import get_program_repository, require_id

router = APIRouter(tags=["programs"])


@router.get("/programs", response_model=List[Program], response_model_exclude_none=True)
async def list_programs(programs: ProgramRepository = Depends(get_program_repository)):
    return programs.list()


@router.get("/programs/{program_id}", response_model=ProgramDetail, response_model_exclude_none=True)
async def get_program(program_id: str, programs: ProgramRepository = Depends(get_program_repository)):
    """
    Program with its patient and exercises resolved

    Exercises deleted since the program was created are left out.
    """
    return programs.detail(program_id)


@router.post("/programs", response_model=Program, response_model_exclude_none=True)
async def create_program(
    program: ProgramCreate,
    programs: ProgramRepository = Depends(get_program_repository),
):
    """
    Create a program for an existing patient

    Returns 404 if the patient does not exist. startDate is set to today.
    """
    return programs.create(program.model_dump(by_alias=True, exclude_none=True))


@router.patch("/programs", response_model=Program, response_model_exclude_none=True)
async def update_program(
    updates: ProgramUpdate,
    programs: ProgramRepository = Depends(get_program_repository),
):
    """
    Update exerciseIds and/or frequency; patientId and startDate never change
    """
    program_id = require_id(updates.id)
    patch = updates.model_dump(by_alias=True, exclude_unset=True, exclude_none=True, exclude={"id"})
    return programs.update(program_id, patch)


@router.delete("/programs")
async def delete_program(
    item_id: Optional[str] = Query(None, alias="id"),
    programs: ProgramRepository = Depends(get_program_repository),
):
    programs.delete(require_id(item_id))
    return {"success": True}
