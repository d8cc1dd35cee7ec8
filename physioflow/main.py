"""
FastAPI app

- create_app() opens both stores once and shares them through app.state
- CORS configured for the browser client
- Every error renders as {"error": <message>}
- Basic health check
"""
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file early
project_root = Path(__file__).parent.parent
load_dotenv(dotenv_path=project_root / '.env')

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from physioflow.api import router
from physioflow.api.middleware import TimingMiddleware
from physioflow.core import config
from physioflow.core.errors import PhysioFlowError
from physioflow.database import (
    DocumentStore,
    ExerciseRepository,
    PatientRepository,
    ProgramRepository,
    TherapistRepository,
    make_engine,
    make_session_factory,
)
from physioflow.services.auth import AuthService

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


def register_error_handlers(app: FastAPI):
    @app.exception_handler(PhysioFlowError)
    async def physioflow_error_handler(request: Request, exc: PhysioFlowError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=422, content={"error": _validation_message(exc)})


def create_app(
    data_file: Optional[str] = None,
    database_url: Optional[str] = None,
    enforce_admin_gate: Optional[bool] = None,
) -> FastAPI:
    """
    Build the app with both stores opened once

    Arguments override the environment-derived config (used by tests).
    """
    app = FastAPI(title="PhysioFlow")

    store = DocumentStore(data_file or config.DATA_FILE)
    engine = make_engine(database_url or config.DATABASE_URL)
    session_factory = make_session_factory(engine)

    app.state.document_store = store
    app.state.engine = engine
    app.state.exercises = ExerciseRepository(store)
    app.state.patients = PatientRepository(store)
    app.state.programs = ProgramRepository(store)
    app.state.therapists = TherapistRepository(session_factory)
    app.state.auth = AuthService(
        session_factory,
        secret_key=config.SECRET_KEY,
        algorithm=config.ALGORITHM,
        expire_minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES,
    )
    app.state.enforce_admin_gate = (
        config.ENFORCE_ADMIN_GATE if enforce_admin_gate is None else enforce_admin_gate
    )

    # Add timing middleware for performance monitoring
    app.add_middleware(TimingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(router, prefix="/api/v1")

    @app.get("/")
    async def root():
        """
        Basic health check
        """
        return {"status": "ok"}

    logger.info(f"PhysioFlow started (data_file={store.path}, admin_gate={app.state.enforce_admin_gate})")
    return app


app = create_app()
