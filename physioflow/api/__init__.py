# API routes
from fastapi import APIRouter
from physioflow.api.exercises import router as exercises_router
from physioflow.api.patients import router as patients_router
from physioflow.api.programs import router as programs_router
from physioflow.api.therapists import router as therapists_router
from physioflow.api.auth import router as auth_router

# Combine all routers
router = APIRouter()
router.include_router(exercises_router)
router.include_router(patients_router)
router.include_router(programs_router)
router.include_router(therapists_router)
router.include_router(auth_router)

__all__ = ["router"]
