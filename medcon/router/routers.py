# medcon/router/routers.py

from fastapi import FastAPI
from medcon.auth.auth_controller import router as auth_router
from medcon.modules.visits.visits_controller import router as visits_router
from medcon.modules.patients.patients_controller import router as patients_router
from medcon.modules.catalog.catalog_controller import router as catalog_router
from medcon.modules.dashboard.dashboard_controller import router as dashboard_router
from medcon.modules.backup.backup_controller import router as backup_router
from medcon.modules.inventory.inventory_controller import router as inventory_router

def include_routers(app: FastAPI) -> None:
    """Include all API routers in the FastAPI application."""
    app.include_router(auth_router)
    app.include_router(visits_router)
    app.include_router(patients_router)
    app.include_router(catalog_router)
    app.include_router(dashboard_router)
    app.include_router(backup_router)
    app.include_router(inventory_router)
