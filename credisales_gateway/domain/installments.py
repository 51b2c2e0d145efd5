"""Installment schedule generation for credit-sales contracts"""

from dataclasses import dataclass
from datetime import date, tzinfo
from decimal import Decimal
from typing import List, Optional
from credisales_gateway.domain.models import (
    AGREEMENTS,
    FORTNIGHTLY_FAMILY,
    Contract,
    ContractLineItem,
    Installment,
)
from credisales_gateway.domain.exceptions import InvalidContractTermsError
from credisales_gateway.utils.date_utils import next_due_date, today_in


@dataclass
class _LineItemPlan:
    """Amortization state of one line item"""

    remaining: Decimal
    installment: Decimal


def adjusted_installment(line_item: ContractLineItem, agreement: str) -> Decimal:
    """Per-period contribution of a line item, doubled for fortnightly cadences"""
    factor = 2 if agreement in FORTNIGHTLY_FAMILY else 1
    return line_item.product.installment_amount * line_item.quantity * factor


def validate_contract_terms(contract: Contract) -> None:
    """
    Reject contracts the amortization loop cannot finish.

    Raises:
        InvalidContractTermsError: unknown agreement, non-positive
            installment amount, quantity below one, negative price,
            or a non-finite amount
    """
    if contract.agreement not in AGREEMENTS:
        raise InvalidContractTermsError(f"Unknown agreement: {contract.agreement!r}")

    for index, item in enumerate(contract.products):
        if not (item.product.price.is_finite() and item.product.installment_amount.is_finite()):
            raise InvalidContractTermsError(
                f"Line item {index}: price and installment amount must be finite, "
                f"got {item.product.price} and {item.product.installment_amount}"
            )
        if type(item.quantity) is not int or item.quantity < 1:
            raise InvalidContractTermsError(
                f"Line item {index}: quantity must be a positive integer, got {item.quantity!r}"
            )
        if item.product.installment_amount <= 0:
            raise InvalidContractTermsError(
                f"Line item {index}: installment amount must be positive, "
                f"got {item.product.installment_amount}"
            )
        if item.product.price < 0:
            raise InvalidContractTermsError(
                f"Line item {index}: price cannot be negative, got {item.product.price}"
            )


def generate_installments_from_contract(
    contract: Contract,
    start_date: date | None = None,
    tz: Optional[tzinfo] = None,
) -> List[Installment]:
    """
    Synthesize the installment schedule of a contract.

    Used when the backend has not persisted a schedule yet. Line items
    amortize independently but are billed together: each period sums the
    contribution of every item that still owes, and an item whose balance
    is below its contribution pays off exactly in its last period.

    Args:
        contract: Contract with agreement and line items
        start_date: Anchor date (default: today in tz)
        tz: Time zone defining "today"; None uses the host's local day

    Returns:
        Installments ordered by due date. Only the first carries `debt`
        (the contract total price); all carry `remaining_balance`.

    Raises:
        InvalidContractTermsError: see validate_contract_terms

    Example:
        weekly, one item price 100 x 1, installment 30
        → [30, 30, 30, 10] on four consecutive Saturdays
    """
    validate_contract_terms(contract)

    anchor = start_date if start_date is not None else today_in(tz)

    plans = [
        _LineItemPlan(
            remaining=item.total_cost,
            installment=adjusted_installment(item, contract.agreement),
        )
        for item in contract.products
    ]
    balance = sum((plan.remaining for plan in plans), Decimal("0"))

    installments: List[Installment] = []
    is_first = True

    while any(plan.remaining > 0 for plan in plans):
        amounts = []
        for plan in plans:
            if plan.remaining <= 0:
                amounts.append(Decimal("0"))
            elif plan.remaining >= plan.installment:
                plan.remaining -= plan.installment
                amounts.append(plan.installment)
            else:
                # Final partial period for this item
                amounts.append(plan.remaining)
                plan.remaining = Decimal("0")

        period_amount = sum(amounts, Decimal("0"))
        balance -= period_amount

        due_date = next_due_date(anchor, contract.agreement, is_first)

        installments.append(
            Installment(
                due_date=due_date,
                amount=period_amount,
                debt=contract.total_price if is_first else None,
                remaining_balance=balance,
                line_item_amounts=amounts,
            )
        )

        anchor = due_date
        is_first = False

    return installments
