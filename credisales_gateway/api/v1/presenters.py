"""Domain schedule → response schema conversion"""

from datetime import tzinfo
from typing import Optional

from credisales_gateway.api.v1.schemas import (
    InstallmentPaymentSchema,
    InstallmentSchema,
    PaymentSchema,
    ScheduleResponse,
)
from credisales_gateway.domain.formatting import amount_in_words, format_money, translate_payment_method
from credisales_gateway.domain.models import Installment
from credisales_gateway.services.schedule import Schedule
from credisales_gateway.utils.date_utils import to_midnight_iso


def present_installment(installment: Installment, tz: Optional[tzinfo] = None) -> InstallmentSchema:
    return InstallmentSchema(
        due_date=to_midnight_iso(installment.due_date, tz),
        installment_amount=float(installment.amount),
        formatted_amount=format_money(installment.amount),
        debt=float(installment.debt) if installment.debt is not None else None,
        remaining_balance=(
            float(installment.remaining_balance) if installment.remaining_balance is not None else None
        ),
        paid_at=installment.paid_at,
        installment_payments=[
            InstallmentPaymentSchema(
                amount=float(allocation.amount),
                payment=PaymentSchema(
                    type=allocation.payment.type,
                    type_label=translate_payment_method(allocation.payment.type) if allocation.payment.type else None,
                    reference_number=allocation.payment.reference_number,
                )
                if allocation.payment
                else None,
            )
            for allocation in installment.installment_payments
        ],
        generated=installment.generated,
    )


def present_schedule(schedule: Schedule, tz: Optional[tzinfo] = None) -> ScheduleResponse:
    contract = schedule.contract
    return ScheduleResponse(
        contract_id=contract.contract_id,
        contract_code=contract.code,
        agreement=contract.agreement,
        total_price=float(contract.total_price),
        total_price_text=amount_in_words(contract.total_price).upper(),
        generated=schedule.generated,
        source=schedule.source,
        installments=[present_installment(inst, tz) for inst in schedule.installments],
    )
