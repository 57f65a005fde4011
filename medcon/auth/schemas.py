# medcon/auth/schemas.py

from pydantic import BaseModel, Field

from medcon.models.entities import Identity


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    identity: Identity
