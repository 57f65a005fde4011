# medcon/modules/catalog/schemas.py
"""Catalog module Pydantic schemas."""

from typing import List, Optional
from pydantic import BaseModel, Field

from medcon.models.entities import DoctorProfile, Procedure


class DoctorCreateRequest(BaseModel):
    name: str
    specialty: str
    phone: str = ""
    email: str = ""
    consultation_share_percent: float = Field(default=50.0, allow_inf_nan=False)
    procedure_share_percent: float = Field(default=40.0, allow_inf_nan=False)
    username: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=4)
    default_room: Optional[str] = None


class DoctorUpdateRequest(BaseModel):
    name: Optional[str] = None
    specialty: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    consultation_share_percent: Optional[float] = Field(default=None, allow_inf_nan=False)
    procedure_share_percent: Optional[float] = Field(default=None, allow_inf_nan=False)
    username: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=4)
    default_room: Optional[str] = None


class DoctorResponse(BaseModel):
    """Doctor profile without credential material."""
    id: str
    name: str
    specialty: str
    phone: str
    email: str
    consultation_share_percent: float
    procedure_share_percent: float
    username: Optional[str] = None
    has_login: bool = False
    default_room: Optional[str] = None

    @classmethod
    def from_profile(cls, doctor: DoctorProfile) -> "DoctorResponse":
        return cls(
            **doctor.model_dump(exclude={"password_hash"}),
            has_login=bool(doctor.username and doctor.password_hash),
        )


class DoctorActionResponse(BaseModel):
    success: bool
    message: str
    doctor: Optional[DoctorResponse] = None
    warning: Optional[str] = None


class ProcedureCreateRequest(BaseModel):
    name: str
    price: float = Field(allow_inf_nan=False)


class ProcedureActionResponse(BaseModel):
    success: bool
    message: str
    procedure: Optional[Procedure] = None
    warning: Optional[str] = None


class RoomListResponse(BaseModel):
    rooms: List[str]
