# medcon/main.py

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from medcon.common.database.database import SessionLocal, connect_to_db, close_db_connection
from medcon.common.database.storage import SqlKeyValueStore
from medcon.common.config import settings
from medcon.common.errors import ClinicError
from medcon.common.logging_config import configure_logging
from medcon.common.state import ClinicState
from medcon.router.routers import include_routers

logger = logging.getLogger(__name__)

# Lifespan context manager for startup and shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    connect_to_db()
    app.state.clinic = ClinicState.load(SqlKeyValueStore(SessionLocal))
    logger.info("Clinic state loaded: %d visits, %d doctors", len(app.state.clinic.visits), len(app.state.clinic.doctors))
    yield
    close_db_connection()

# Initialize FastAPI app with lifespan manager
app = FastAPI(
    title="Medcon API",
    description="Front desk, consultation billing and inventory for a small outpatient clinic",
    version="1.0.0",
    lifespan=lifespan
)

# Middleware for CORS using allowed origins from settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Domain errors become {"detail": message} with the error's status code
@app.exception_handler(ClinicError)
async def clinic_error_handler(request: Request, exc: ClinicError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

# Include routers from a separate file
include_routers(app)

# Root endpoint
@app.get("/", response_class=HTMLResponse)
async def root():
    return f"""<!DOCTYPE html>
<html lang="es">
<head>
    <meta charset="UTF-8">
    <title>{settings.CLINIC_NAME} API</title>
</head>
<body>
    <h1>{settings.CLINIC_NAME} API</h1>
    <p>Recepción, consultas, facturación e inventario.</p>
    <p><a href="/docs">Swagger UI</a> &middot; <a href="/redoc">ReDoc</a></p>
</body>
</html>
"""
