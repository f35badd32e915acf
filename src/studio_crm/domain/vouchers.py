"""Domain models for gift vouchers."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class VoucherProduct:
    """A voucher the studio offers for sale."""

    id: UUID
    name: str
    description: str | None
    price: float
    validity_months: int
    is_active: bool
    created_at: datetime


@dataclass(frozen=True)
class VoucherSale:
    """A sold voucher and its redemption state."""

    id: UUID
    product_id: UUID
    voucher_code: str
    buyer_name: str
    buyer_email: str
    client_id: UUID | None
    amount: float
    payment_status: str
    status: str
    expires_on: date
    redeemed_at: datetime | None
    redemption_notes: str | None
    created_at: datetime
    product_name: str | None = None
