"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

AGREEMENTS = ("weekly", "fortnightly", "fifteen_and_last")

# A fortnightly invoice covers two nominal weekly periods
FORTNIGHTLY_FAMILY = ("fortnightly", "fifteen_and_last")


@dataclass(frozen=True)
class Product:
    """Product as configured for installment sales"""

    price: Decimal
    installment_amount: Decimal  # per-period contribution for one unit
    product_id: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class ContractLineItem:
    """One product-quantity pairing within a contract"""

    product: Product
    quantity: int

    @property
    def total_cost(self) -> Decimal:
        return self.product.price * self.quantity


@dataclass(frozen=True)
class Contract:
    """Agreement between a vendor and a customer, read-only here"""

    agreement: str  # "weekly" | "fortnightly" | "fifteen_and_last"
    total_price: Decimal
    products: List[ContractLineItem] = field(default_factory=list)
    contract_id: Optional[str] = None
    code: Optional[int] = None


@dataclass(frozen=True)
class Payment:
    """Payment recorded by the backend"""

    type: Optional[str] = None  # binance, zelle, cash, ...
    reference_number: Optional[str] = None


@dataclass(frozen=True)
class InstallmentPayment:
    """Share of a payment allocated to one installment"""

    amount: Decimal
    payment: Optional[Payment] = None


@dataclass
class Installment:
    """One scheduled payment period for the whole contract"""

    due_date: date
    amount: Decimal
    debt: Optional[Decimal] = None  # first generated entry only
    remaining_balance: Optional[Decimal] = None
    line_item_amounts: List[Decimal] = field(default_factory=list)
    installment_payments: List[InstallmentPayment] = field(default_factory=list)
    paid_at: Optional[date] = None
    generated: bool = True
