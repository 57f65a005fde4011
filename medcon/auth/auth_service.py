# medcon/auth/auth_service.py

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

import jwt
from fastapi import HTTPException, status
from passlib.context import CryptContext

from medcon.common.config import settings
from medcon.common.state import ClinicState
from medcon.common.utils.global_messages import GlobalMessages
from medcon.models.entities import Identity
from medcon.models.models import UserRole

# Initialize the password context (bcrypt)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify that the provided password matches the hashed password."""
    return pwd_context.verify(plain_password, hashed_password)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: timedelta = None) -> str:
    """Create a JWT token including an expiration date."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta if expires_delta else timedelta(minutes=15))
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    return encoded_jwt


def identity_to_claims(identity: Identity) -> dict:
    return {
        "sub": identity.id or identity.role.value,
        "role": identity.role.value,
        "name": identity.name,
    }


def claims_to_identity(payload: dict) -> Identity:
    """Rebuild the identity carried by a decoded token. Raises KeyError/ValueError on bad claims."""
    role = UserRole(payload["role"])
    return Identity(
        role=role,
        id=payload["sub"] if role == UserRole.DOCTOR else None,
        name=payload["name"],
    )


def _fixed_credentials_match(username: str, password: str, expected_user: str, expected_password: str) -> bool:
    user_ok = secrets.compare_digest(username.encode(), expected_user.encode())
    password_ok = secrets.compare_digest(password.encode(), expected_password.encode())
    return user_ok and password_ok


def authenticate(state: ClinicState, username: str, password: str) -> Optional[Identity]:
    """
    Resolve credentials to a role-tagged identity.

    Admin and assistant use the fixed credentials from settings; doctors log in
    with the optional credentials stored on their catalog profile.
    """
    if _fixed_credentials_match(username, password, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD):
        return Identity(role=UserRole.ADMIN, name="Administrador")
    if _fixed_credentials_match(username, password, settings.ASSISTANT_USERNAME, settings.ASSISTANT_PASSWORD):
        return Identity(role=UserRole.ASSISTANT, name="Asistente")

    doctor = next((d for d in state.doctors if d.username and d.username == username), None)
    if doctor and doctor.password_hash and verify_password(password, doctor.password_hash):
        return Identity(role=UserRole.DOCTOR, id=doctor.id, name=doctor.name)
    return None


def login_user(state: ClinicState, username: str, password: str) -> Tuple[Identity, str]:
    """Authenticate and issue an access token."""
    identity = authenticate(state, username, password)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=GlobalMessages.INVALID_CREDENTIALS,
        )

    access_token = create_access_token(
        identity_to_claims(identity),
        expires_delta=timedelta(minutes=settings.JWT_EXPIRATION_MINUTES),
    )
    return identity, access_token
