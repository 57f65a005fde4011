# medcon/auth/auth_controller.py

from fastapi import APIRouter, Depends

from medcon.auth import auth_service, schemas
from medcon.auth.dependencies import get_current_identity
from medcon.common.state import ClinicState, get_clinic_state
from medcon.models.entities import Identity

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=schemas.LoginResponse)
async def login(
    credentials: schemas.LoginRequest,
    state: ClinicState = Depends(get_clinic_state),
):
    """
    Authenticate with the front-desk credentials or a doctor's login.

    - **username**: Admin, assistant or doctor username
    - **password**: Password
    """
    identity, access_token = auth_service.login_user(
        state=state,
        username=credentials.username,
        password=credentials.password,
    )
    return schemas.LoginResponse(access_token=access_token, identity=identity)


@router.get("/me", response_model=Identity)
async def me(current_identity: Identity = Depends(get_current_identity)):
    """Return the identity carried by the bearer token."""
    return current_identity
