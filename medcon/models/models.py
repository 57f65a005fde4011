# medcon/models/models.py

import enum

from sqlalchemy import JSON, Column, DateTime, String, func
from sqlalchemy.orm import declarative_base

Base = declarative_base()


# ============================================================================
# ENUMS
# ============================================================================

class UserRole(str, enum.Enum):
    ADMIN = "admin"
    ASSISTANT = "assistant"
    DOCTOR = "doctor"


class VisitStatus(str, enum.Enum):
    WAITING = "WAITING"
    IN_CONSULTATION = "IN_CONSULTATION"
    COMPLETED = "COMPLETED"


class PaymentMethod(str, enum.Enum):
    CASH_USD = "Efectivo $"
    MOBILE_PAYMENT = "Pago Móvil"
    ZELLE = "Zelle"
    BINANCE = "Binance"
    CASHEA = "Cashea"
    BANK_TRANSFER = "Transferencia Bancaria"
    CASH_BS = "Efectivo Bs."
    BIOPAGO = "Biopago"


class DashboardPeriod(str, enum.Enum):
    TODAY = "today"
    MONTH = "month"
    ALL = "all"


# ============================================================================
# STORAGE MODELS
# ============================================================================

class StoredCollection(Base):
    """One JSON document per storage key (doctors, procedures, visits, ...)."""
    __tablename__ = "stored_collections"

    key = Column(String(100), primary_key=True)
    value = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<StoredCollection(key={self.key})>"
