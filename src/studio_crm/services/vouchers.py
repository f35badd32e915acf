"""Services for selling and redeeming gift vouchers."""

import calendar
import secrets
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID

from studio_crm.domain.vouchers import VoucherProduct, VoucherSale
from studio_crm.errors import NotFoundError, ValidationError

VOUCHER_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
VOUCHER_CODE_LENGTH = 8


class VoucherRepository(Protocol):
    """Persistence interface for vouchers."""

    def create_product(self, values: dict[str, object]) -> VoucherProduct:
        """Insert a voucher product and return it."""

    def get_product(self, product_id: UUID) -> VoucherProduct | None:
        """Return a voucher product by id, if present."""

    def create_sale(self, values: dict[str, object]) -> VoucherSale:
        """Insert a voucher sale and return it."""

    def list_sales(
        self,
        *,
        payment_status: str | None,
        status: str | None,
        client_id: UUID | None,
        limit: int,
    ) -> list[VoucherSale]:
        """Return sales, newest first."""

    def find_sale(self, voucher_code: str) -> VoucherSale | None:
        """Return the sale for a code, if any."""

    def redeem_sale(
        self, voucher_code: str, *, notes: str | None, redeemed_at: datetime
    ) -> VoucherSale | None:
        """Redeem an active paid voucher, returning None when none matched."""


@dataclass
class VoucherService:
    """Application service for vouchers."""

    repository: VoucherRepository

    def create_product(self, values: dict[str, object]) -> VoucherProduct:
        """Create a voucher product."""
        return self.repository.create_product({"is_active": True, **values})

    def sell(
        self,
        product_id: UUID,
        *,
        buyer_name: str,
        buyer_email: str,
        client_id: UUID | None = None,
        payment_status: str = "PAID",
    ) -> VoucherSale:
        """Issue a voucher code for a product."""
        product = self.repository.get_product(product_id)
        if product is None:
            raise NotFoundError(f"Voucher product not found: {product_id}")
        if not product.is_active:
            raise ValidationError("voucher_product_id", "Product is not on sale")
        today = datetime.now(tz=UTC).date()
        return self.repository.create_sale(
            {
                "product_id": product_id,
                "voucher_code": generate_voucher_code(),
                "buyer_name": buyer_name,
                "buyer_email": buyer_email.lower(),
                "client_id": client_id,
                "amount": product.price,
                "payment_status": payment_status,
                "status": "ACTIVE",
                "expires_on": add_months(today, product.validity_months),
            }
        )

    def list_sales(
        self, *, status: str = "all", client_id: UUID | None = None, limit: int = 25
    ) -> list[VoucherSale]:
        """Return sales filtered by payment or redemption state."""
        payment_status = status if status in {"PENDING", "PAID"} else None
        redemption = "REDEEMED" if status == "REDEEMED" else None
        return self.repository.list_sales(
            payment_status=payment_status,
            status=redemption,
            client_id=client_id,
            limit=limit,
        )

    def redeem(self, voucher_code: str, notes: str | None = None) -> VoucherSale:
        """Redeem a voucher code."""
        code = voucher_code.strip().upper()
        sale = self.repository.find_sale(code)
        if sale is None:
            raise NotFoundError(f"Voucher not found: {code}")
        if sale.expires_on < datetime.now(tz=UTC).date():
            raise ValidationError(
                "voucher_code", f"Voucher expired on {sale.expires_on}"
            )
        redeemed = self.repository.redeem_sale(
            code, notes=notes, redeemed_at=datetime.now(tz=UTC)
        )
        if redeemed is None:
            if sale.status == "REDEEMED":
                raise ValidationError(
                    "voucher_code", "Voucher has already been redeemed"
                )
            raise ValidationError("voucher_code", "Voucher has not been paid")
        return redeemed


def generate_voucher_code() -> str:
    """Return a random code without easily confused characters."""
    return "".join(
        secrets.choice(VOUCHER_ALPHABET) for _ in range(VOUCHER_CODE_LENGTH)
    )


def add_months(start: date, months: int) -> date:
    """Shift a date by whole months, clamping to the end of the month."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)
