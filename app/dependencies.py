from typing import AsyncIterator

import httpx

from .config import settings
from .db import init_db
from .services.captcha_service import CaptchaService
from .services.contact_form_service import ContactFormService
from .services.crm_service import PipedriveClient


async def ensure_db():
    """
    FastAPI dependency: call on routes/routers requiring DB.
    First call triggers init_beanie once; subsequent calls are cheap.
    """
    await init_db()


async def get_contact_form_service() -> AsyncIterator[ContactFormService]:
    """One outbound HTTP client per submission, shared by the CAPTCHA and CRM calls."""
    async with httpx.AsyncClient(timeout=httpx.Timeout(settings.OUTBOUND_TIMEOUT_SECONDS)) as client:
        yield ContactFormService(
            captcha=CaptchaService(client, settings.RECAPTCHA_SECRET_KEY, settings.RECAPTCHA_VERIFY_URL),
            crm=PipedriveClient(client, settings.PIPEDRIVE_BASE_URL, settings.PIPEDRIVE_API_TOKEN),
            capture_mode=settings.CRM_CAPTURE_MODE,
            lead_message_field=settings.PIPEDRIVE_LEAD_MESSAGE_FIELD,
        )
