"""Unit tests for installment schedule generation"""

import pytest
from datetime import date, timedelta, timezone
from decimal import Decimal
from credisales_gateway.domain.installments import (
    adjusted_installment,
    generate_installments_from_contract,
    validate_contract_terms,
)
from credisales_gateway.domain.exceptions import InvalidContractTermsError
from credisales_gateway.domain.models import Contract, ContractLineItem, Product
from credisales_gateway.utils.date_utils import today_in

SATURDAY = 5


def test_amortization_completeness(sample_contract: Contract, monday: date):
    """Each line item is paid off exactly, no overshoot"""
    installments = generate_installments_from_contract(sample_contract, start_date=monday)

    for index, item in enumerate(sample_contract.products):
        paid = sum(inst.line_item_amounts[index] for inst in installments)
        assert paid == item.total_cost

    assert sum(inst.amount for inst in installments) == Decimal("160")


def test_line_items_amortize_independently(sample_contract: Contract, monday: date):
    """Shorter item drops out, longer one keeps billing"""
    installments = generate_installments_from_contract(sample_contract, start_date=monday)

    assert [inst.amount for inst in installments] == [
        Decimal("40"), Decimal("40"), Decimal("40"), Decimal("20"), Decimal("20"),
    ]
    assert [inst.due_date for inst in installments] == [
        date(2025, 3, 8), date(2025, 3, 15), date(2025, 3, 22), date(2025, 3, 29), date(2025, 4, 5),
    ]
    assert [inst.remaining_balance for inst in installments] == [
        Decimal("120"), Decimal("80"), Decimal("40"), Decimal("20"), Decimal("0"),
    ]


def test_final_partial_period(contract_factory, monday: date):
    """Last period pays only what is left"""
    contract = contract_factory("weekly", ("100", "30", 1))
    installments = generate_installments_from_contract(contract, start_date=monday)

    assert [inst.amount for inst in installments] == [
        Decimal("30"), Decimal("30"), Decimal("30"), Decimal("10"),
    ]
    assert all(inst.amount > 0 for inst in installments)


def test_single_fully_covered_period(contract_factory, monday: date):
    contract = contract_factory("weekly", ("50", "60", 1))
    installments = generate_installments_from_contract(contract, start_date=monday)

    assert len(installments) == 1
    assert installments[0].amount == Decimal("50")


def test_quantity_multiplies_cost_and_installment(contract_factory, monday: date):
    contract = contract_factory("weekly", ("25", "10", 3))
    installments = generate_installments_from_contract(contract, start_date=monday)

    assert [inst.amount for inst in installments] == [Decimal("30"), Decimal("30"), Decimal("15")]


@pytest.mark.parametrize("agreement", ["weekly", "fortnightly", "fifteen_and_last"])
def test_due_dates_strictly_increasing(sample_contract: Contract, monday: date, agreement: str):
    contract = Contract(agreement=agreement, total_price=sample_contract.total_price, products=sample_contract.products)
    installments = generate_installments_from_contract(contract, start_date=monday)

    due_dates = [inst.due_date for inst in installments]
    assert all(a < b for a, b in zip(due_dates, due_dates[1:]))


@pytest.mark.parametrize("agreement", ["weekly", "fortnightly"])
def test_weekly_family_lands_on_saturday(contract_factory, agreement: str):
    contract = contract_factory(agreement, ("1000", "15", 1))
    for start in (date(2025, 3, 3) + timedelta(days=i) for i in range(7)):
        installments = generate_installments_from_contract(contract, start_date=start)
        assert all(inst.due_date.weekday() == SATURDAY for inst in installments)


def test_first_period_debt_marker(contract_factory, monday: date):
    """Only the first entry carries the contract total price"""
    contract = contract_factory("weekly", ("100", "20", 1), total_price="150")
    installments = generate_installments_from_contract(contract, start_date=monday)

    assert installments[0].debt == Decimal("150")
    assert all(inst.debt is None for inst in installments[1:])


def test_fortnightly_skip_behavior(sample_contract: Contract, monday: date):
    """First due is the next Saturday, later ones are 14 days apart; amounts doubled"""
    contract = Contract(agreement="fortnightly", total_price=sample_contract.total_price, products=sample_contract.products)
    installments = generate_installments_from_contract(contract, start_date=monday)

    assert [inst.due_date for inst in installments] == [
        date(2025, 3, 8), date(2025, 3, 22), date(2025, 4, 5),
    ]
    assert [inst.amount for inst in installments] == [Decimal("80"), Decimal("60"), Decimal("20")]


def test_fifteen_and_last_cadence(sample_contract: Contract):
    contract = Contract(agreement="fifteen_and_last", total_price=sample_contract.total_price, products=sample_contract.products)
    installments = generate_installments_from_contract(contract, start_date=date(2025, 1, 10))

    assert [inst.due_date for inst in installments] == [
        date(2025, 1, 15), date(2025, 1, 31), date(2025, 2, 15),
    ]
    assert [inst.amount for inst in installments] == [Decimal("80"), Decimal("60"), Decimal("20")]


def test_empty_contract(contract_factory):
    contract = contract_factory("weekly")
    assert generate_installments_from_contract(contract) == []


def test_free_product_needs_no_installments(contract_factory, monday: date):
    contract = contract_factory("weekly", ("0", "10", 1))
    assert generate_installments_from_contract(contract, start_date=monday) == []


def test_default_start_date_is_today(contract_factory):
    contract = contract_factory("weekly", ("100", "20", 1))
    before = today_in(timezone.utc)
    installments = generate_installments_from_contract(contract, tz=timezone.utc)

    assert 1 <= (installments[0].due_date - before).days <= 7


def test_generated_entries_have_no_payments(sample_contract: Contract, monday: date):
    installments = generate_installments_from_contract(sample_contract, start_date=monday)
    assert all(inst.installment_payments == [] and inst.generated for inst in installments)


def test_adjusted_installment_doubles_for_fortnightly_family():
    item = ContractLineItem(product=Product(price=Decimal("100"), installment_amount=Decimal("7.5")), quantity=2)

    assert adjusted_installment(item, "weekly") == Decimal("15")
    assert adjusted_installment(item, "fortnightly") == Decimal("30")
    assert adjusted_installment(item, "fifteen_and_last") == Decimal("30")


@pytest.mark.parametrize(
    "price,installment,quantity",
    [
        ("100", "0", 1),  # would never finish
        ("100", "-5", 1),
        ("100", "10", 0),
        ("-1", "10", 1),
    ],
)
def test_invalid_terms_rejected(contract_factory, price: str, installment: str, quantity: int):
    contract = contract_factory("weekly", (price, installment, quantity))
    with pytest.raises(InvalidContractTermsError):
        generate_installments_from_contract(contract, start_date=date(2025, 3, 3))


def test_unknown_agreement_rejected(contract_factory):
    with pytest.raises(InvalidContractTermsError, match="monthly"):
        validate_contract_terms(contract_factory("monthly", ("100", "10", 1)))


def test_non_integer_quantity_rejected():
    item = ContractLineItem(product=Product(price=Decimal("10"), installment_amount=Decimal("5")), quantity=1.5)
    with pytest.raises(InvalidContractTermsError):
        validate_contract_terms(Contract(agreement="weekly", total_price=Decimal("15"), products=[item]))


@pytest.mark.parametrize(
    "price,installment",
    [
        ("100", "NaN"),
        ("NaN", "10"),
        ("Infinity", "10"),  # balance would never shrink
        ("100", "Infinity"),
        ("100", "-Infinity"),
    ],
)
def test_non_finite_terms_rejected(contract_factory, price: str, installment: str):
    contract = contract_factory("weekly", (price, installment, 1), total_price="100")
    with pytest.raises(InvalidContractTermsError, match="finite"):
        generate_installments_from_contract(contract, start_date=date(2025, 3, 3))


@pytest.mark.parametrize("quantity", [True, False])
def test_boolean_quantity_rejected(quantity: bool):
    item = ContractLineItem(product=Product(price=Decimal("10"), installment_amount=Decimal("5")), quantity=quantity)
    with pytest.raises(InvalidContractTermsError, match="quantity"):
        validate_contract_terms(Contract(agreement="weekly", total_price=Decimal("10"), products=[item]))
