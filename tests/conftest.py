"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from typing import Dict, List
from zoneinfo import ZoneInfo
from fastapi.testclient import TestClient
from credisales_gateway.api.main import create_app
from credisales_gateway.api.dependencies import get_backend_client, get_timezone
from credisales_gateway.domain.exceptions import ContractNotFoundError
from credisales_gateway.domain.models import Contract, ContractLineItem, Installment, Product


class FakeBackendClient:
    """In-memory stand-in for the credit-sales backend"""

    def __init__(self):
        self.contracts: Dict[str, Contract] = {}
        self.installments: Dict[str, List[Installment]] = {}
        self.error: Exception | None = None

    async def get_contract(self, contract_id: str) -> Contract:
        if self.error:
            raise self.error
        if contract_id not in self.contracts:
            raise ContractNotFoundError(f"Contract {contract_id} not found")
        return self.contracts[contract_id]

    async def get_installments(self, contract_id: str) -> List[Installment]:
        if self.error:
            raise self.error
        return self.installments.get(contract_id, [])


def make_contract(agreement: str, *items: tuple, total_price: str | None = None, **kwargs) -> Contract:
    """Contract from (price, installment_amount, quantity) tuples"""
    products = [
        ContractLineItem(
            product=Product(price=Decimal(price), installment_amount=Decimal(installment)),
            quantity=quantity,
        )
        for price, installment, quantity in items
    ]
    if total_price is None:
        total = sum((item.total_cost for item in products), Decimal("0"))
    else:
        total = Decimal(total_price)
    return Contract(agreement=agreement, total_price=total, products=products, **kwargs)


@pytest.fixture
def monday() -> date:
    return date(2025, 3, 3)


@pytest.fixture
def sample_contract() -> Contract:
    """Two products with different installment sizes"""
    return make_contract(
        "weekly",
        ("100", "20", 1),  # 5 periods
        ("30", "10", 2),  # 20 per period, 3 periods
        contract_id="c-1",
        code=1024,
    )


@pytest.fixture
def fake_backend() -> FakeBackendClient:
    return FakeBackendClient()


@pytest.fixture
def client(fake_backend: FakeBackendClient) -> TestClient:
    """Create FastAPI test client with the fake backend"""
    app = create_app()

    app.dependency_overrides[get_backend_client] = lambda: fake_backend
    app.dependency_overrides[get_timezone] = lambda: ZoneInfo("America/Caracas")
    return TestClient(app)


@pytest.fixture
def contract_factory():
    return make_contract
