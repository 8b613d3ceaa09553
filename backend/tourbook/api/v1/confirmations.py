"""Confirmation lookup and voucher download."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse

from tourbook.schemas.checkout import ConfirmationRead
from tourbook.services import confirmation_service, confirmation_store
from tourbook.services.confirmation_service import ConfirmationRecord

router = APIRouter(prefix="/confirmations", tags=["confirmations"])


def _require(confirmation_id: str) -> ConfirmationRecord:
    record = confirmation_store.get(confirmation_id)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Confirmation not found"
        )
    return record


@router.get(
    "/{confirmation_id}",
    response_model=ConfirmationRead,
    summary="Read a confirmation issued in this session",
)
async def get_confirmation(confirmation_id: str) -> ConfirmationRead:
    return ConfirmationRead.model_validate(_require(confirmation_id))


@router.get(
    "/{confirmation_id}/voucher",
    response_class=PlainTextResponse,
    summary="Download the voucher as plain text",
)
async def download_voucher(confirmation_id: str) -> PlainTextResponse:
    record = _require(confirmation_id)
    return PlainTextResponse(
        confirmation_service.to_voucher_text(record),
        headers={
            "Content-Disposition": f'attachment; filename="reserva-{record.confirmation_id}.txt"'
        },
    )
