"""
Tests for the billing engine.

Covers the revenue split, payment reconciliation with its 0.1 tolerance
and the bill worksheet used before closing a consultation.
"""
import pytest

from medcon.common.errors import ValidationError
from medcon.models.entities import PaymentRecord, Procedure
from medcon.models.models import PaymentMethod
from medcon.modules.billing.billing_service import (
    PAYMENT_TOLERANCE, BillDraft, compute_bill, is_settled, reconcile_payments,
)
from medcon.modules.billing.schemas import DoctorShares


SHARES = DoctorShares(consultation_share_percent=50, procedure_share_percent=40)
ECO = Procedure(id="eco", name="Ecografía", price=50.0)


def pay(amount, method=PaymentMethod.CASH_USD):
    return PaymentRecord(method=method, amount=amount)


# ============================================================================
# compute_bill
# ============================================================================

class TestComputeBill:
    def test_consultation_with_one_procedure(self):
        bill = compute_bill(100.0, [ECO], SHARES)

        assert bill.total_cost == pytest.approx(150.0)
        assert bill.procedures_cost == pytest.approx(50.0)
        assert bill.doctor_earnings == pytest.approx(70.0)
        assert bill.clinic_earnings == pytest.approx(80.0)

    def test_procedure_share_applies_to_every_procedure(self):
        citology = Procedure(id="cit", name="Citología", price=25.0)
        bill = compute_bill(0.0, [ECO, citology], SHARES)

        assert bill.total_cost == pytest.approx(75.0)
        assert bill.doctor_earnings == pytest.approx(30.0)

    def test_split_always_adds_up_to_total(self):
        bill = compute_bill(33.33, [ECO, ECO], DoctorShares(consultation_share_percent=37.5, procedure_share_percent=12.5))
        assert bill.doctor_earnings + bill.clinic_earnings == pytest.approx(bill.total_cost)

    def test_without_doctor_clinic_keeps_everything(self):
        bill = compute_bill(100.0, [ECO])

        assert bill.doctor_earnings == 0
        assert bill.clinic_earnings == pytest.approx(150.0)

    def test_free_visit(self):
        bill = compute_bill(0.0, [], SHARES)
        assert bill.total_cost == 0
        assert bill.doctor_earnings == 0
        assert bill.clinic_earnings == 0


# ============================================================================
# reconcile_payments / is_settled
# ============================================================================

class TestReconcilePayments:
    def test_split_payment_is_settled(self):
        summary = reconcile_payments([pay(60), pay(40, PaymentMethod.ZELLE)], 100.0)

        assert summary.paid_amount == pytest.approx(100.0)
        assert summary.remaining_amount == pytest.approx(0.0)
        assert is_settled(summary)

    def test_underpayment_is_not_settled(self):
        summary = reconcile_payments([pay(90)], 100.0)

        assert summary.remaining_amount == pytest.approx(10.0)
        assert not is_settled(summary)

    def test_small_gap_within_tolerance(self):
        assert is_settled(reconcile_payments([pay(99.95)], 100.0))

    def test_gap_just_over_tolerance(self):
        assert not is_settled(reconcile_payments([pay(99.85)], 100.0))

    def test_overpayment_is_negative_remaining(self):
        summary = reconcile_payments([pay(120)], 100.0)

        assert summary.remaining_amount == pytest.approx(-20.0)
        assert is_settled(summary)

    def test_no_payments_on_free_visit(self):
        assert is_settled(reconcile_payments([], 0.0))

    def test_tolerance_value(self):
        assert PAYMENT_TOLERANCE == 0.1


# ============================================================================
# BillDraft
# ============================================================================

class TestBillDraft:
    def test_toggle_adds_then_removes(self):
        draft = BillDraft(base_cost=100.0)

        draft.toggle_procedure(ECO)
        assert draft.bill().total_cost == pytest.approx(150.0)

        draft.toggle_procedure(ECO)
        assert draft.procedures == []
        assert draft.bill().total_cost == pytest.approx(100.0)

    def test_payments_update_summary(self):
        draft = BillDraft(base_cost=100.0)
        draft.add_payment(PaymentMethod.CASH_USD, 60)
        draft.add_payment(PaymentMethod.MOBILE_PAYMENT, 40)

        assert is_settled(draft.summary())

        removed = draft.remove_payment(0)
        assert removed.amount == 60
        assert draft.summary().remaining_amount == pytest.approx(60.0)

    @pytest.mark.parametrize("amount", [0, -5, float("inf"), float("nan")])
    def test_add_payment_rejects_non_positive(self, amount):
        with pytest.raises(ValidationError):
            BillDraft().add_payment(PaymentMethod.CASH_USD, amount)

    def test_remove_payment_out_of_range(self):
        with pytest.raises(ValidationError):
            BillDraft().remove_payment(0)

    def test_bill_uses_shares(self):
        draft = BillDraft(base_cost=100.0)
        draft.toggle_procedure(ECO)

        assert draft.bill(SHARES).doctor_earnings == pytest.approx(70.0)
