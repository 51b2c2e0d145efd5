"""Contract schedule resolution: persisted schedule first, generated fallback"""

import logging
from dataclasses import dataclass
from datetime import date, tzinfo
from typing import List, Optional

from credisales_gateway.domain.installments import generate_installments_from_contract
from credisales_gateway.domain.models import Contract, Installment
from credisales_gateway.infrastructure.clients.backend import BackendClient

logger = logging.getLogger(__name__)


@dataclass
class Schedule:
    """Installments of a contract and where they came from"""

    contract: Contract
    installments: List[Installment]
    source: str  # "backend" | "generated" | "preview"

    @property
    def generated(self) -> bool:
        return self.source != "backend"


def preview_schedule(
    contract: Contract,
    start_date: date | None = None,
    tz: Optional[tzinfo] = None,
) -> Schedule:
    """Generate a schedule for contract terms that are not stored anywhere yet"""
    installments = generate_installments_from_contract(contract, start_date=start_date, tz=tz)
    return Schedule(contract=contract, installments=installments, source="preview")


async def resolve_contract_schedule(
    contract_id: str,
    backend: BackendClient,
    tz: Optional[tzinfo] = None,
) -> Schedule:
    """
    Schedule of a stored contract.

    Flow:
    1. Fetch the contract from the backend
    2. Fetch the persisted installments
    3. When none are persisted yet (contract just created), generate them

    Raises:
        ContractNotFoundError: Unknown contract
        BackendAPIError: Backend unavailable or returned bad data
        InvalidContractTermsError: Stored terms cannot be amortized
    """
    contract = await backend.get_contract(contract_id)
    persisted = await backend.get_installments(contract_id)

    if persisted:
        return Schedule(contract=contract, installments=persisted, source="backend")

    logger.info(
        "No persisted installments, generating schedule",
        extra={"contract_id": contract_id, "agreement": contract.agreement},
    )
    installments = generate_installments_from_contract(contract, tz=tz)
    return Schedule(contract=contract, installments=installments, source="generated")
