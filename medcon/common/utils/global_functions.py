# medcon/common/utils/global_functions.py
import uuid
from datetime import datetime, timezone


def new_id() -> str:
    """Return a fresh random identity string."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def format_amount(amount: float) -> str:
    """Two-decimal rendering for presentation only."""
    return f"{amount:.2f}"
