"""Checkout validation and confirmation issuance."""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass

from tourbook.core.config import get_settings
from tourbook.security.redact import mask_email, mask_phone
from tourbook.services.confirmation_service import (
    ConfirmationRecord,
    ContactDetails,
    generate_confirmation_id,
)
from tourbook.services.draft_service import ReservationDraft

logger = logging.getLogger(__name__)

_REQUIRED_CONTACT_FIELDS: tuple[tuple[str, str], ...] = (
    ("full_name", "Full name is required"),
    ("email", "Email is required"),
    ("phone", "Phone is required"),
    ("country", "Country is required"),
)


class CheckoutValidationError(ValueError):
    """Raised when a checkout cannot be submitted; names the offending field."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(slots=True)
class CheckoutSession:
    """Guest input collected for a single checkout attempt."""

    draft: ReservationDraft
    contact: ContactDetails
    terms_accepted: bool = False
    special_requests: str | None = None


def validate(session: CheckoutSession) -> None:
    """Raise for the first failing condition, in display order."""

    for field_name, message in _REQUIRED_CONTACT_FIELDS:
        value = getattr(session.contact, field_name)
        if value is None or not str(value).strip():
            raise CheckoutValidationError(field_name, message)
    if session.terms_accepted is not True:
        raise CheckoutValidationError(
            "terms_accepted", "You must accept the terms and conditions"
        )
    if not session.draft.is_priceable:
        raise CheckoutValidationError(
            "dates", "Check-out must be after check-in for at least one guest"
        )


def submit(
    session: CheckoutSession,
    *,
    now: datetime.datetime | None = None,
    prefix: str | None = None,
) -> ConfirmationRecord:
    """Validate ``session`` and issue its confirmation.

    Nothing is produced unless every check passes.
    """

    validate(session)
    now = now or datetime.datetime.now(datetime.UTC)
    prefix = prefix or get_settings().confirmation_prefix
    contact = ContactDetails(
        full_name=session.contact.full_name.strip(),
        email=session.contact.email.strip(),
        phone=session.contact.phone.strip(),
        country=session.contact.country.strip(),
    )
    requests = (session.special_requests or "").strip() or None
    draft = session.draft
    record = ConfirmationRecord(
        confirmation_id=generate_confirmation_id(prefix, now=now),
        listing=draft.listing,
        check_in=draft.check_in,
        check_out=draft.check_out,
        guests=draft.guests,
        contact=contact,
        breakdown=draft.breakdown,
        created_at=now,
        special_requests=requests,
    )
    logger.info(
        "Checkout confirmed %s for %s (%s, %s)",
        record.confirmation_id,
        draft.listing.id,
        mask_email(contact.email),
        mask_phone(contact.phone),
    )
    return record
