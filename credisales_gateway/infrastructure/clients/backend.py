"""Credit-sales backend HTTP client for contracts and persisted installments"""

import asyncio
import logging
from datetime import date, datetime, tzinfo
from decimal import Decimal
from typing import Any, Dict, List, Optional

import httpx

from credisales_gateway.config import settings
from credisales_gateway.domain.exceptions import BackendAPIError, ContractNotFoundError
from credisales_gateway.domain.models import (
    Contract,
    ContractLineItem,
    Installment,
    InstallmentPayment,
    Payment,
    Product,
)
from credisales_gateway.infrastructure.observability.metrics import (
    backend_fetch_failures_counter,
    backend_latency_histogram,
)

logger = logging.getLogger(__name__)


def _decimal(value: Any) -> Decimal:
    return Decimal(str(value))


def _optional_decimal(value: Any) -> Optional[Decimal]:
    return _decimal(value) if value not in (None, "") else None


def _parse_date(value: str, tz: Optional[tzinfo] = None) -> date:
    """
    Calendar day of an ISO date or date-time string.

    The backend serializes local midnight as UTC, so aware timestamps are
    converted to tz before taking the day. Naive ones are taken as is.
    """
    moment = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if moment.tzinfo is not None and tz is not None:
        moment = moment.astimezone(tz)
    return moment.date()


def parse_contract(data: Dict[str, Any]) -> Contract:
    """Build a Contract from the backend payload (camelCase or snake_case keys)"""
    total_price = data.get("totalPrice", data.get("total_price"))
    return Contract(
        contract_id=data.get("id"),
        code=data.get("code"),
        agreement=data["agreement"],
        total_price=_decimal(total_price),
        products=[
            ContractLineItem(
                product=Product(
                    product_id=item["product"].get("id"),
                    name=item["product"].get("name"),
                    price=_decimal(item["product"]["price"]),
                    installment_amount=_decimal(
                        item["product"].get("installmentAmount", item["product"].get("installment_amount"))
                    ),
                ),
                quantity=int(item["quantity"]),
            )
            for item in data.get("products", [])
        ],
    )


def parse_installment(data: Dict[str, Any], tz: Optional[tzinfo] = None) -> Installment:
    """Build a persisted Installment from the backend payload, dates as days in tz"""
    return Installment(
        due_date=_parse_date(data["dueDate"], tz),
        amount=_decimal(data["installmentAmount"]),
        debt=_optional_decimal(data.get("debt")),
        paid_at=_parse_date(data["paidAt"], tz) if data.get("paidAt") else None,
        installment_payments=[
            InstallmentPayment(
                amount=_decimal(allocation["amount"]),
                payment=Payment(
                    type=allocation["payment"].get("type"),
                    reference_number=allocation["payment"].get("referenceNumber"),
                )
                if allocation.get("payment")
                else None,
            )
            for allocation in data.get("installmentPayments") or []
        ],
        generated=False,
    )


class BackendClient:
    """Client for the credit-sales REST API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        token: str | None = None,
        tz: tzinfo | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.backend_api_base).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self.token = token or settings.backend_api_token
        self.tz = tz if tz is not None else settings.tzinfo
        self.max_retries = settings.backend_max_retries
        self.backoff_base = settings.backend_backoff_base
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    async def _get(self, path: str, endpoint: str) -> httpx.Response:
        """
        GET with retry on 5xx and network failures.

        Retry strategy:
        - Exponential backoff: base, 2*base, 4*base, ...
        - 4xx responses are returned to the caller without retrying

        Raises:
            BackendAPIError: After the last failed attempt
        """
        attempt = 0
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self._headers(),
            transport=self.transport,
        ) as client:
            while True:
                try:
                    with backend_latency_histogram.time():
                        response = await client.get(path)
                    if response.status_code < 500:
                        return response
                    response.raise_for_status()

                except (httpx.HTTPStatusError, httpx.RequestError) as e:
                    attempt += 1
                    backend_fetch_failures_counter.labels(endpoint=endpoint).inc()

                    if attempt >= self.max_retries:
                        if isinstance(e, httpx.TimeoutException):
                            raise BackendAPIError(f"Backend API timeout after {self.timeout}s") from e
                        if isinstance(e, httpx.HTTPStatusError):
                            raise BackendAPIError(f"Backend API error: {e.response.status_code}") from e
                        raise BackendAPIError(f"Backend API unreachable: {e}") from e

                    backoff = self.backoff_base * (2 ** (attempt - 1))
                    logger.warning(
                        f"Backend call failed, retrying in {backoff}s",
                        extra={"endpoint": endpoint, "attempt": attempt},
                    )
                    await asyncio.sleep(backoff)

    async def get_contract(self, contract_id: str) -> Contract:
        """
        Fetch a contract with its line items.

        Raises:
            ContractNotFoundError: Backend answered 404
            BackendAPIError: On timeout, HTTP errors, or invalid response
        """
        response = await self._get(f"/contract/{contract_id}", endpoint="contract")
        if response.status_code == 404:
            raise ContractNotFoundError(f"Contract {contract_id} not found")

        try:
            response.raise_for_status()
            return parse_contract(response.json())
        except httpx.HTTPStatusError as e:
            raise BackendAPIError(f"Backend API error: {e.response.status_code}") from e
        except (KeyError, ValueError, TypeError, ArithmeticError) as e:
            raise BackendAPIError(f"Invalid contract data from backend: {e}") from e

    async def get_installments(self, contract_id: str) -> List[Installment]:
        """
        Fetch the persisted schedule of a contract.

        An unknown contract or one without a schedule yields an empty list.

        Raises:
            BackendAPIError: On timeout, HTTP errors, or invalid response
        """
        response = await self._get(f"/installment/contract/{contract_id}", endpoint="installments")
        if response.status_code == 404:
            return []

        try:
            response.raise_for_status()
            installments = [parse_installment(item, self.tz) for item in response.json()]
        except httpx.HTTPStatusError as e:
            raise BackendAPIError(f"Backend API error: {e.response.status_code}") from e
        except (KeyError, ValueError, TypeError, ArithmeticError) as e:
            raise BackendAPIError(f"Invalid installment data from backend: {e}") from e

        return sorted(installments, key=lambda inst: inst.due_date)
