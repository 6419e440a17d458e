import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobtracker.core import config
from jobtracker.core.errors import (
    AuthenticationRequired,
    BackendError,
    MalformedDataError,
    RecordNotFound,
    TrackerError,
)
from jobtracker.core.logging_config import sanitize_log_data, setup_logging

# ✅ Import All API Routes
from jobtracker.api.routes import (
    applications,
    chart_configs,
    custom_fields,
    health,
    preferences,
    session,
    stats,
)

setup_logging(config.LOG_LEVEL, config.LOG_DIR)
logger = logging.getLogger(__name__)


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="Job Tracker API")

# ✅ CORS LOCKDOWN: ONLY ALLOW THE FRONTEND
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",      # local frontend
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(applications.router)
app.include_router(custom_fields.router)
app.include_router(preferences.router)
app.include_router(chart_configs.router)
app.include_router(stats.router)
app.include_router(session.router)
app.include_router(health.router)


# ============================================
# ✅ ERROR MAPPING
# ============================================

@app.exception_handler(AuthenticationRequired)
async def authentication_required_handler(request: Request, exc: AuthenticationRequired):
    return JSONResponse(status_code=401, content={"detail": str(exc)})


@app.exception_handler(RecordNotFound)
async def record_not_found_handler(request: Request, exc: RecordNotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc) or "Not found"})


@app.exception_handler(BackendError)
async def backend_error_handler(request: Request, exc: BackendError):
    logger.error(f"Backend error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": str(exc) or "Remote store unavailable"})


@app.exception_handler(MalformedDataError)
async def malformed_data_handler(request: Request, exc: MalformedDataError):
    logger.error(f"Malformed stored data: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Stored data could not be read"})


@app.exception_handler(TrackerError)
async def tracker_error_handler(request: Request, exc: TrackerError):
    logger.error(f"Unhandled tracker error: {exc}")
    return JSONResponse(status_code=500, content={"detail": str(exc) or "Internal error"})


# ============================================
# ✅ STARTUP
# ============================================

@app.on_event("startup")
def on_startup():
    logger.info(
        f"Starting Job Tracker API: {sanitize_log_data({'database_url': config.DATABASE_URL, 'local_storage_dir': config.LOCAL_STORAGE_DIR})}"
    )
    if config.RUN_MIGRATIONS:
        from jobtracker.db.migrate import run_migrations
        run_migrations()
    else:
        from jobtracker.db.init_db import init_db
        init_db()


# ============================================
# ✅ HEALTH CHECK ROOT ENDPOINT
# ============================================

@app.get("/")
def root():
    return {"status": "Job Tracker API running"}
