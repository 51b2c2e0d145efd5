"""POST /v1/schedule/preview - Installment schedule for unsaved contract terms"""

import time
import logging
from zoneinfo import ZoneInfo
from fastapi import APIRouter, Depends, HTTPException, Request

from credisales_gateway.api.v1.schemas import SchedulePreviewRequest, ScheduleResponse
from credisales_gateway.api.v1.presenters import present_schedule
from credisales_gateway.api.dependencies import get_request_id, get_timezone
from credisales_gateway.domain.models import Contract, ContractLineItem, Product
from credisales_gateway.domain.exceptions import InvalidContractTermsError
from credisales_gateway.services.schedule import preview_schedule
from credisales_gateway.infrastructure.observability.metrics import record_schedule, invalid_terms_counter
from credisales_gateway.infrastructure.observability.logging import log_schedule

router = APIRouter()


@router.post("/schedule/preview", response_model=ScheduleResponse, response_model_exclude_none=True)
def create_schedule_preview(
    request_body: SchedulePreviewRequest,
    request: Request,
    tz: ZoneInfo = Depends(get_timezone),
):
    """
    Generate the installment schedule a contract would get.

    Used by the contract form before the contract is saved. Nothing is
    persisted.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    contract = Contract(
        agreement=request_body.agreement,
        total_price=request_body.total_price,
        products=[
            ContractLineItem(
                product=Product(
                    product_id=item.product.id,
                    name=item.product.name,
                    price=item.product.price,
                    installment_amount=item.product.installment_amount,
                ),
                quantity=item.quantity,
            )
            for item in request_body.products
        ],
    )

    try:
        schedule = preview_schedule(contract, start_date=request_body.start_date, tz=tz)
    except InvalidContractTermsError as e:
        invalid_terms_counter.inc()
        logging.warning(f"Invalid contract terms: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    record_schedule(schedule.source, contract.agreement, len(schedule.installments))
    log_schedule(request_id, None, schedule.source, len(schedule.installments), duration_ms)

    return present_schedule(schedule, tz)
