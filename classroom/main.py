# /classroom/main.py

import logging

# --- Core FastAPI Imports ---
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

# --- Application-specific Router Imports ---
from .routers import (
    students_router,
    assignments_router,
    grades_router,
    attendance_router,
    communications_router,
    dashboard_router,
    reports_router,
)

# --- Service Imports for Startup Logic ---
from . import config
from .services.data_service import build_table_client
from .services.exceptions import (
    BoundaryUnavailableError,
    ClassroomError,
    InvalidArgumentError,
    NotFoundError,
    ValidationFailedError,
    WriteFailedError,
)

logger = logging.getLogger(__name__)

# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Runs once at startup. Tests may pre-install their own client.
    config.configure_logging()
    owns_client = getattr(app.state, "table_client", None) is None
    if owns_client:
        app.state.table_client = build_table_client()
    yield
    # Runs once at shutdown.
    if owns_client:
        await app.state.table_client.close()
        app.state.table_client = None

# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="Classroom Admin API",
    description="Student roster, grading, attendance and parent communication for a single class.",
    version="1.0.0",
    lifespan=lifespan
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Error Translation ---
ERROR_STATUS_CODES = {
    InvalidArgumentError: 400,
    NotFoundError: 404,
    ValidationFailedError: 422,
    WriteFailedError: 502,
    BoundaryUnavailableError: 503,
}


@app.exception_handler(ClassroomError)
async def classroom_error_handler(request: Request, exc: ClassroomError):
    status_code = next(
        (code for kind, code in ERROR_STATUS_CODES.items() if isinstance(exc, kind)),
        500,
    )
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    content = {"detail": str(exc), "error": type(exc).__name__}
    if isinstance(exc, ValidationFailedError):
        content["field"] = exc.field
    return JSONResponse(status_code=status_code, content=content)

# --- API Router Inclusion ---
app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(students_router.router, prefix="/api/students", tags=["Students"])
app.include_router(assignments_router.router, prefix="/api/assignments", tags=["Assignments"])
app.include_router(grades_router.router, prefix="/api/grades", tags=["Grades"])
app.include_router(attendance_router.router, prefix="/api/attendance", tags=["Attendance"])
app.include_router(communications_router.router, prefix="/api/communications", tags=["Communications"])
app.include_router(reports_router.router, prefix="/api/reports", tags=["Reports"])

# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "Classroom Admin API is running!", "version": app.version}
