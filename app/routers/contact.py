import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..dependencies import get_contact_form_service
from ..services.captcha_service import CaptchaVerificationError
from ..services.contact_form_service import (
    CaptchaRejected,
    ContactFormService,
    MissingContactFields,
)
from ..services.crm_service import CrmError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["contact"])

# The website form posts from another origin
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "*",
}


class ContactForm(BaseModel):
    # Presence of name/email is checked after the CAPTCHA, not by the schema
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[Union[str, int, float]] = None  # Number inputs post JSON numbers
    message: Optional[str] = None
    token: Optional[str] = None


def _error(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error},
        headers=CORS_HEADERS,
    )


@router.options("/contact-form")
async def contact_form_preflight():
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers=CORS_HEADERS)


@router.post("/contact-form")
async def submit_contact_form(
    form: ContactForm,
    service: ContactFormService = Depends(get_contact_form_service),
):
    """Forward a website contact form to Pipedrive as a person plus a lead or deal"""
    try:
        result = await service.submit(
            name=form.name,
            email=form.email,
            phone=str(form.phone) if form.phone is not None else None,
            message=form.message,
            token=form.token,
        )
    except CaptchaRejected as e:
        logger.warning(f"[CONTACT FORM] reCAPTCHA rejected submission from {form.email}")
        return _error(status.HTTP_400_BAD_REQUEST, str(e))
    except MissingContactFields as e:
        logger.warning("[CONTACT FORM] Missing name/email")
        return _error(status.HTTP_400_BAD_REQUEST, str(e))
    except CaptchaVerificationError as e:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))
    except CrmError as e:
        logger.error(f"[CONTACT FORM] CRM call failed: {e.detail}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, e.detail)
    except Exception as e:
        logger.error(f"[CONTACT FORM] Unexpected error: {str(e)}", exc_info=True)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed")

    return JSONResponse(status_code=status.HTTP_200_OK, content=result, headers=CORS_HEADERS)
