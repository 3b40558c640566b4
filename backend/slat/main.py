"""
SLAT Attendance API - FastAPI Application Entry Point.

This is the main application module that:
1. Builds the FastAPI app from explicit Settings (create_app)
2. Sets up structured JSON logging
3. Implements request ID middleware (X-Request-ID header)
4. Converts framework validation errors and store faults into the
   standard response envelope
5. Registers all API route handlers and the health check endpoint

The application follows a modular architecture:
- routes/: API endpoint handlers
- services/: Domain operations returning Outcome values
- models/: SQLAlchemy ORM models
- responses.py: The response envelope
- logging_config.py: Structured logging configuration
- database.py: Engine and session management
"""

import time
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from slat.config import Settings
from slat.database import build_engine, build_session_factory, create_tables
from slat.logging_config import (
    setup_logging, get_logger, log_with_context,
    request_id_var, generate_request_id
)
from slat.responses import Outcome, render
from slat.routes import courses, lecturers, students, lectures, reports
from slat.services.access import generate_access_code
from slat.services.mailer import SmtpMailer

VERSION = "1.0.0"


def create_app(settings: Optional[Settings] = None, mailer=None,
               code_generator: Callable[[], int] = generate_access_code) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Runtime settings; read from the environment when omitted
        mailer: Object with send(recipient, subject, html_body); an
            SmtpMailer over the configured server when omitted
        code_generator: Produces access codes
    """
    settings = settings or Settings.from_env()

    # ──────────────────────────────────────────────────────────────
    # Initialize structured logging BEFORE anything else
    # ──────────────────────────────────────────────────────────────
    setup_logging(settings)
    logger = get_logger("http")

    engine = build_engine(settings.database_url)

    # Auto-create tables for SQLite; PostgreSQL uses Alembic migrations
    if settings.is_sqlite:
        log_with_context(logger, "INFO", "Using SQLite, creating tables directly")
        create_tables(engine)

    app = FastAPI(
        title="SLAT Attendance API",
        description=(
            "Attendance management for lectures: courses, lecturers and students, "
            "lecture attendance marking, emailed access codes and attendance rankings."
        ),
        version=VERSION,
        docs_url="/docs",        # Swagger UI at /docs
        redoc_url="/redoc"       # ReDoc at /redoc
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.mailer = mailer or SmtpMailer(settings)
    app.state.code_generator = code_generator

    # ──────────────────────────────────────────────────────────────
    # CORS Middleware - client apps call the API from other origins
    # ──────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"]
    )

    # ──────────────────────────────────────────────────────────────
    # Request ID Middleware
    #
    # Generates a unique UUID per incoming request and:
    # 1. Stores it in a context variable (available to all log entries)
    # 2. Returns it in the X-Request-ID response header
    # 3. Logs request start/end with latency measurement
    # ──────────────────────────────────────────────────────────────
    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        req_id = generate_request_id()
        request_id_var.set(req_id)

        start_time = time.time()

        # Query parameters are not logged: they carry access codes
        log_with_context(logger, "INFO",
            f"Request started: {request.method} {request.url.path}",
            context={"request_id": req_id},
            extra_data={
                "ip": request.client.host if request.client else "unknown",
                "user_agent": request.headers.get("user-agent", ""),
            })

        response = await call_next(request)

        duration_ms = (time.time() - start_time) * 1000
        response.headers["X-Request-ID"] = req_id

        log_with_context(logger, "INFO",
            f"Request completed: {request.method} {request.url.path} → {response.status_code}",
            context={"request_id": req_id},
            extra_data={
                "duration_ms": round(duration_ms, 2),
                "status_code": response.status_code
            })

        return response

    # ──────────────────────────────────────────────────────────────
    # Error envelopes for failures raised outside the services
    # ──────────────────────────────────────────────────────────────
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        problems = []
        for error in exc.errors():
            location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
            problems.append("{}: {}".format(location, error.get("msg")) if location else error.get("msg"))
        return render(Outcome.bad_request("Invalid request. " + "; ".join(problems)))

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        log_with_context(get_logger("db"), "ERROR",
            "Unhandled database error on {} {}: {}".format(request.method, request.url.path, str(exc)))
        return render(Outcome.fail(500, str(exc)))

    # ──────────────────────────────────────────────────────────────
    # Register API routes
    # ──────────────────────────────────────────────────────────────
    app.include_router(courses.router, tags=["Courses"])
    app.include_router(lecturers.router, tags=["Lecturers"])
    app.include_router(students.router, tags=["Students"])
    app.include_router(lectures.router, tags=["Lectures"])
    app.include_router(reports.router, tags=["Reports"])

    @app.get("/health", tags=["Health"])
    def health_check():
        """Health check endpoint for container health checks and monitoring."""
        return {"status": "healthy", "service": "slat-attendance-api", "version": VERSION}

    @app.get("/", tags=["Root"])
    def root():
        """Root endpoint with API information."""
        return {
            "service": "SLAT Attendance API",
            "version": VERSION,
            "docs": "/docs",
            "health": "/health",
            "endpoints": {
                "courses": "POST /courses, POST /courses/batch, GET /courses, GET /courses/{id}",
                "lecturers": "POST /lecturers, POST /lecturers/batch, GET /lecturers, GET /lecturers/{id}",
                "students": "POST /students, POST /students/batch, GET /students, GET /students/{matric}",
                "assignments": "POST /lecturer-courses, POST /student-courses",
                "lectures": "POST /lectures, GET /lectures/{id}/attendees",
                "attendance": "POST /attendance",
                "access": "GET /lecturers/access/request, GET /students/access/request",
                "reports": "GET /reports/students-ranking, /reports/courses-ranking, /reports/lecturers-ranking"
            }
        }

    return app


def run():
    """Console entry point: serve the application with uvicorn."""
    import uvicorn

    settings = Settings.from_env()
    uvicorn.run(
        "slat.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
    )


if __name__ == "__main__":
    run()
