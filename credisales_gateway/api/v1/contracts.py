"""GET /v1/contracts/{contract_id}/installments - Contract installment schedule"""

import time
import logging
from zoneinfo import ZoneInfo
from fastapi import APIRouter, Depends, HTTPException, Request

from credisales_gateway.api.v1.schemas import ScheduleResponse
from credisales_gateway.api.v1.presenters import present_schedule
from credisales_gateway.api.dependencies import get_backend_client, get_request_id, get_timezone
from credisales_gateway.infrastructure.clients.backend import BackendClient
from credisales_gateway.domain.exceptions import (
    BackendAPIError,
    ContractNotFoundError,
    InvalidContractTermsError,
)
from credisales_gateway.services.schedule import resolve_contract_schedule
from credisales_gateway.infrastructure.observability.metrics import record_schedule, invalid_terms_counter
from credisales_gateway.infrastructure.observability.logging import log_schedule

router = APIRouter()


@router.get(
    "/contracts/{contract_id}/installments",
    response_model=ScheduleResponse,
    response_model_exclude_none=True,
)
async def get_contract_installments(
    contract_id: str,
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
    tz: ZoneInfo = Depends(get_timezone),
):
    """
    Retrieve the installment schedule of a contract.

    Flow:
    1. Fetch contract and persisted installments from the backend
    2. Generate the schedule when the backend has none yet
    3. Return it with `generated` telling the two apart
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        schedule = await resolve_contract_schedule(contract_id, backend, tz=tz)

    except ContractNotFoundError as e:
        logging.warning(f"Contract not found: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail="Contract not found")

    except InvalidContractTermsError as e:
        invalid_terms_counter.inc()
        logging.warning(f"Invalid contract terms: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except BackendAPIError as e:
        logging.error(f"Backend API error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Backend service unavailable")

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_schedule(schedule.source, schedule.contract.agreement, len(schedule.installments))
    log_schedule(request_id, contract_id, schedule.source, len(schedule.installments), duration_ms)

    return present_schedule(schedule, tz)
