"""Checkout endpoints."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from tourbook.api import deps
from tourbook.api.v1.drafts import draft_from_request
from tourbook.core.config import PromotionRule, get_settings
from tourbook.core.settings import PricingSettings
from tourbook.schemas.checkout import CheckoutRequest, ConfirmationRead
from tourbook.services import checkout_service, confirmation_store
from tourbook.services.catalog_service import ListingRef
from tourbook.services.checkout_service import CheckoutSession, CheckoutValidationError
from tourbook.services.confirmation_service import ContactDetails

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/checkout", tags=["checkout"])

_CHECKOUT_LIMIT = deps.parse_rate(get_settings().rate_limit_checkout, fallback=(20, 60))
_CHECKOUT_RATE_DEP = deps.rate_dependency(_CHECKOUT_LIMIT)


@router.post(
    "",
    response_model=ConfirmationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a checkout",
    dependencies=[_CHECKOUT_RATE_DEP],
)
async def submit_checkout(
    payload: CheckoutRequest,
    catalog: Annotated[dict[str, ListingRef], Depends(deps.get_catalog)],
    rates: Annotated[PricingSettings, Depends(deps.get_rates)],
    promotions: Annotated[dict[str, PromotionRule], Depends(deps.get_promotions)],
) -> ConfirmationRead:
    draft = draft_from_request(
        payload.draft, catalog=catalog, rates=rates, promotions=promotions
    )
    session = CheckoutSession(
        draft=draft,
        contact=ContactDetails(**payload.contact.model_dump()),
        terms_accepted=payload.terms_accepted,
        special_requests=payload.special_requests,
    )
    try:
        record = checkout_service.submit(session)
    except CheckoutValidationError as exc:
        logger.info("Checkout rejected on %s", exc.field)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=exc.to_dict()
        ) from exc
    confirmation_store.put(record)
    return ConfirmationRead.model_validate(record)
