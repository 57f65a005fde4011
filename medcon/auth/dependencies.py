# medcon/auth/dependencies.py

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
import jwt

from medcon.auth.auth_service import claims_to_identity
from medcon.common.config import settings
from medcon.common.state import ClinicState, get_clinic_state
from medcon.models.entities import Identity
from medcon.models.models import UserRole

bearer_scheme = HTTPBearer()


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    state: ClinicState = Depends(get_clinic_state),
) -> Identity:
    """
    Dependency to retrieve the current identity based on the JWT token provided in the Authorization header.
    """
    token = credentials.credentials

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials. Please log in again.",
        headers={"WWW-Authenticate": "Bearer"}
    )
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        identity = claims_to_identity(payload)
    except jwt.InvalidTokenError:
        raise credentials_exception
    except (KeyError, ValueError) as e:
        raise credentials_exception from e

    # A doctor removed from the catalog loses access immediately
    if identity.role == UserRole.DOCTOR and state.find_doctor(identity.id) is None:
        raise credentials_exception
    return identity
