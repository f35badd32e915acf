"""SQL implementation for voucher products and sales."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import insert, select, update

from studio_crm.adapters.database import Database, row_to, utcnow
from studio_crm.adapters.sql_tables import voucher_products, voucher_sales
from studio_crm.domain.vouchers import VoucherProduct, VoucherSale
from studio_crm.services.vouchers import VoucherRepository


def _select_sales():  # type: ignore[no-untyped-def]
    return select(
        voucher_sales, voucher_products.c.name.label("product_name")
    ).join(voucher_products, voucher_products.c.id == voucher_sales.c.product_id)


@dataclass
class SqlVoucherRepository(VoucherRepository):
    """SQL-backed repository for vouchers."""

    database: Database

    def create_product(self, values: dict[str, object]) -> VoucherProduct:
        """Insert a voucher product and return it."""
        now = utcnow()
        product_id = uuid4()
        with self.database.transaction() as connection:
            connection.execute(
                insert(voucher_products).values(
                    id=product_id, **values, created_at=now, updated_at=now
                )
            )
            row = connection.execute(
                select(voucher_products).where(voucher_products.c.id == product_id)
            ).mappings().one()
        return row_to(VoucherProduct, row)

    def get_product(self, product_id: UUID) -> VoucherProduct | None:
        """Return a voucher product by id, if present."""
        with self.database.transaction() as connection:
            row = connection.execute(
                select(voucher_products).where(voucher_products.c.id == product_id)
            ).mappings().first()
        return row_to(VoucherProduct, row) if row else None

    def create_sale(self, values: dict[str, object]) -> VoucherSale:
        """Insert a voucher sale and return it."""
        now = utcnow()
        sale_id = uuid4()
        with self.database.transaction() as connection:
            connection.execute(
                insert(voucher_sales).values(
                    id=sale_id, **values, created_at=now, updated_at=now
                )
            )
            row = connection.execute(
                _select_sales().where(voucher_sales.c.id == sale_id)
            ).mappings().one()
        return row_to(VoucherSale, row)

    def list_sales(
        self,
        *,
        payment_status: str | None,
        status: str | None,
        client_id: UUID | None,
        limit: int,
    ) -> list[VoucherSale]:
        """Return sales, newest first."""
        statement = (
            _select_sales().order_by(voucher_sales.c.created_at.desc()).limit(limit)
        )
        if payment_status:
            statement = statement.where(
                voucher_sales.c.payment_status == payment_status
            )
        if status:
            statement = statement.where(voucher_sales.c.status == status)
        if client_id is not None:
            statement = statement.where(voucher_sales.c.client_id == client_id)
        with self.database.transaction() as connection:
            rows = connection.execute(statement).mappings().all()
        return [row_to(VoucherSale, row) for row in rows]

    def find_sale(self, voucher_code: str) -> VoucherSale | None:
        """Return the sale for a code, if any."""
        with self.database.transaction() as connection:
            row = connection.execute(
                _select_sales().where(voucher_sales.c.voucher_code == voucher_code)
            ).mappings().first()
        return row_to(VoucherSale, row) if row else None

    def redeem_sale(
        self, voucher_code: str, *, notes: str | None, redeemed_at: datetime
    ) -> VoucherSale | None:
        """Redeem an active paid voucher, returning None when none matched."""
        with self.database.transaction() as connection:
            result = connection.execute(
                update(voucher_sales)
                .where(
                    voucher_sales.c.voucher_code == voucher_code,
                    voucher_sales.c.status == "ACTIVE",
                    voucher_sales.c.payment_status == "PAID",
                )
                .values(
                    status="REDEEMED",
                    redeemed_at=redeemed_at,
                    redemption_notes=notes,
                    updated_at=redeemed_at,
                )
            )
            if result.rowcount == 0:
                return None
            row = connection.execute(
                _select_sales().where(voucher_sales.c.voucher_code == voucher_code)
            ).mappings().one()
        return row_to(VoucherSale, row)
