"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import date
from decimal import Decimal
from typing import List, Literal, Optional


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case accepted on input"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProductTerms(CamelModel):
    """Product price and per-unit installment"""

    id: Optional[str] = None
    name: Optional[str] = None
    price: Decimal = Field(..., ge=0, description="Unit price")
    installment_amount: Decimal = Field(..., gt=0, description="Per-period payment for one unit")


class LineItemTerms(CamelModel):
    """Product-quantity pairing"""

    product: ProductTerms
    quantity: int = Field(..., ge=1)


class SchedulePreviewRequest(CamelModel):
    """Request body for POST /v1/schedule/preview"""

    agreement: Literal["weekly", "fortnightly", "fifteen_and_last"]
    total_price: Decimal = Field(..., ge=0)
    products: List[LineItemTerms] = Field(default_factory=list)
    start_date: Optional[date] = Field(None, description="Anchor date (default: today)")


class PaymentSchema(CamelModel):
    """Payment referenced by an installment allocation"""

    type: Optional[str] = None
    type_label: Optional[str] = None
    reference_number: Optional[str] = None


class InstallmentPaymentSchema(CamelModel):
    """Share of a payment allocated to an installment"""

    amount: float
    payment: Optional[PaymentSchema] = None


class InstallmentSchema(CamelModel):
    """Single period of a contract schedule"""

    due_date: str  # ISO-8601 date-time at local midnight
    installment_amount: float
    formatted_amount: str
    debt: Optional[float] = None  # first generated entry only
    remaining_balance: Optional[float] = None
    paid_at: Optional[date] = None
    installment_payments: List[InstallmentPaymentSchema] = Field(default_factory=list)
    generated: bool


class ScheduleResponse(CamelModel):
    """Response for schedule endpoints"""

    contract_id: Optional[str] = None
    contract_code: Optional[int] = None
    agreement: str
    total_price: float
    total_price_text: str
    generated: bool
    source: str
    installments: List[InstallmentSchema]
