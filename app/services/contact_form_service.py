"""
Relays website contact-form submissions into Pipedrive.

Pipeline: verify the reCAPTCHA token, require name and email, create the
person, then either a lead (message in a custom field) or a deal (message in
an attached note), depending on the configured capture mode.
"""

import logging
from typing import Any, Dict, Optional

from .captcha_service import CaptchaService
from .crm_service import CrmError, PipedriveClient

logger = logging.getLogger(__name__)


class CaptchaRejected(Exception):
    pass


class MissingContactFields(Exception):
    pass


class ContactFormService:

    def __init__(
        self,
        captcha: CaptchaService,
        crm: PipedriveClient,
        capture_mode: str = "deal",
        lead_message_field: str = "",
    ):
        self.captcha = captcha
        self.crm = crm
        self.capture_mode = capture_mode
        self.lead_message_field = lead_message_field

    async def submit(
        self,
        name: Optional[str],
        email: Optional[str],
        phone: Optional[str],
        message: Optional[str],
        token: Optional[str],
    ) -> Dict[str, Any]:
        verification = await self.captcha.verify(token)
        if not verification.get("success"):
            raise CaptchaRejected("reCAPTCHA failed")

        if not name or not email:
            raise MissingContactFields("Name and email are required")

        person = await self.crm.create_person(name, email, phone)
        person_id = person.get("id")
        logger.info(f"[CONTACT FORM] Created person {person_id}")

        if self.capture_mode == "lead":
            lead = await self.crm.create_lead(
                f"Lead from Website - {name}", person_id, self.lead_message_field, message
            )
            logger.info(f"[CONTACT FORM] Created lead {lead.get('id')} for person {person_id}")
            return {"success": True, "person": person, "lead": lead}

        deal = await self.crm.create_deal(f"Deal from Website - {name}", person_id)
        deal_id = deal.get("id")
        logger.info(f"[CONTACT FORM] Created deal {deal_id} for person {person_id}")

        if message:
            try:
                await self.crm.add_note(message, person_id, deal_id)
            except CrmError as e:
                # Deal is already created; note failures are only logged
                logger.warning(f"[CONTACT FORM] Note for deal {deal_id} not saved: {e.detail}")

        return {"success": True, "person": person, "deal": deal}
