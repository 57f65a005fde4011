# medcon/modules/billing/billing_service.py
"""
Billing engine: pure revenue-split and payment arithmetic.

Nothing here touches clinic state. Amounts are kept at full float precision;
rounding to two decimals happens only when rendering (see
``format_amount``).
"""

import math
from typing import List, Optional, Sequence

from medcon.common.errors import ValidationError
from medcon.models.entities import PaymentRecord, Procedure
from medcon.models.models import PaymentMethod

from .schemas import Bill, DoctorShares, PaymentSummary

# Allowed gap between total cost and payments before a visit can be closed
PAYMENT_TOLERANCE = 0.1


def compute_bill(
    base_cost: float,
    procedures: Sequence[Procedure],
    shares: Optional[DoctorShares] = None,
) -> Bill:
    """
    Compute the total cost and the doctor/clinic split for a consultation.

    The doctor's procedure share is one flat rate applied to every procedure
    price. Without a resolvable doctor the clinic keeps the whole total.
    """
    procedures_cost = sum(p.price for p in procedures)
    total_cost = base_cost + procedures_cost

    doctor_earnings = 0.0
    if shares is not None:
        doctor_earnings = base_cost * shares.consultation_share_percent / 100 + sum(
            p.price * shares.procedure_share_percent / 100 for p in procedures
        )

    return Bill(
        base_cost=base_cost,
        procedures_cost=procedures_cost,
        total_cost=total_cost,
        doctor_earnings=doctor_earnings,
        clinic_earnings=total_cost - doctor_earnings,
    )


def reconcile_payments(payments: Sequence[PaymentRecord], total_cost: float) -> PaymentSummary:
    """Sum the payments; a negative remaining amount means overpayment."""
    paid_amount = sum(p.amount for p in payments)
    return PaymentSummary(paid_amount=paid_amount, remaining_amount=total_cost - paid_amount)


def is_settled(summary: PaymentSummary) -> bool:
    return summary.remaining_amount <= PAYMENT_TOLERANCE


class BillDraft:
    """Worksheet for a bill being assembled before a consultation is closed."""

    def __init__(self, base_cost: float = 0.0):
        self.base_cost = base_cost
        self.procedures: List[Procedure] = []
        self.payments: List[PaymentRecord] = []

    def toggle_procedure(self, procedure: Procedure) -> None:
        if any(p.id == procedure.id for p in self.procedures):
            self.procedures = [p for p in self.procedures if p.id != procedure.id]
        else:
            self.procedures.append(procedure)

    def add_payment(self, method: PaymentMethod, amount: float) -> PaymentRecord:
        if not 0 < amount < math.inf:
            raise ValidationError("Payment amount must be a finite amount greater than zero.")
        record = PaymentRecord(method=method, amount=amount)
        self.payments.append(record)
        return record

    def remove_payment(self, index: int) -> PaymentRecord:
        if not 0 <= index < len(self.payments):
            raise ValidationError(f"No payment at position {index}.")
        return self.payments.pop(index)

    def bill(self, shares: Optional[DoctorShares] = None) -> Bill:
        return compute_bill(self.base_cost, self.procedures, shares)

    def summary(self) -> PaymentSummary:
        return reconcile_payments(self.payments, self.bill().total_cost)
