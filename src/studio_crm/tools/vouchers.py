"""Gift voucher tools."""

from typing import Literal
from uuid import UUID

from pydantic import EmailStr, Field

from studio_crm.services.vouchers import VoucherService
from studio_crm.tools.contract import Tool, ToolParameters, ToolResult, success


class CreateVoucherProductParams(ToolParameters):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    price: float = Field(ge=0)
    validity_months: int = Field(default=12, ge=1, le=60)


class SellVoucherParams(ToolParameters):
    voucher_product_id: UUID
    buyer_name: str = Field(min_length=1, max_length=255)
    buyer_email: EmailStr
    client_id: UUID | None = None
    payment_status: Literal["PENDING", "PAID", "FAILED"] = "PAID"


class ReadVoucherSalesParams(ToolParameters):
    status: Literal["all", "PENDING", "PAID", "REDEEMED"] = "all"
    client_id: UUID | None = None
    limit: int = Field(default=25, ge=1, le=100)


class RedeemVoucherParams(ToolParameters):
    voucher_code: str = Field(min_length=1, max_length=32)
    notes: str | None = None


def voucher_tools(vouchers: VoucherService) -> list[Tool]:
    """Build tools for gift vouchers."""

    async def create_voucher_product(params: CreateVoucherProductParams) -> ToolResult:
        product = vouchers.create_product(params.model_dump())
        return success(product_id=product.id, product=product)

    async def sell_voucher(params: SellVoucherParams) -> ToolResult:
        sale = vouchers.sell(
            params.voucher_product_id,
            buyer_name=params.buyer_name,
            buyer_email=params.buyer_email,
            client_id=params.client_id,
            payment_status=params.payment_status,
        )
        return success(
            voucher_code=sale.voucher_code,
            expires_on=sale.expires_on,
            sale=sale,
        )

    async def read_voucher_sales(params: ReadVoucherSalesParams) -> ToolResult:
        sales = vouchers.list_sales(
            status=params.status, client_id=params.client_id, limit=params.limit
        )
        return success(count=len(sales), sales=sales)

    async def redeem_voucher(params: RedeemVoucherParams) -> ToolResult:
        sale = vouchers.redeem(params.voucher_code, params.notes)
        return success(
            sale=sale,
            message=f"Voucher {sale.voucher_code} redeemed",
        )

    return [
        Tool(
            name="create_voucher_product",
            description="Offer a new gift voucher product.",
            parameters=CreateVoucherProductParams,
            execute=create_voucher_product,
        ),
        Tool(
            name="sell_voucher",
            description="Sell a voucher and issue its redemption code.",
            parameters=SellVoucherParams,
            execute=sell_voucher,
        ),
        Tool(
            name="read_voucher_sales",
            description="List voucher sales by payment or redemption state.",
            parameters=ReadVoucherSalesParams,
            execute=read_voucher_sales,
        ),
        Tool(
            name="redeem_voucher",
            description="Redeem a voucher code against a session.",
            parameters=RedeemVoucherParams,
            execute=redeem_voucher,
        ),
    ]
