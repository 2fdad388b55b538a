import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class CaptchaVerificationError(Exception):
    """The verification service could not be reached or answered garbage"""


class CaptchaService:
    """Checks reCAPTCHA response tokens against the siteverify endpoint"""

    def __init__(self, client: httpx.AsyncClient, secret_key: str, verify_url: str):
        self.client = client
        self.secret_key = secret_key
        self.verify_url = verify_url

    async def verify(self, token: Optional[str]) -> Dict[str, Any]:
        """Return the verification payload; its `success` flag decides."""
        try:
            response = await self.client.post(
                self.verify_url,
                data={"secret": self.secret_key, "response": token or ""},
            )
            response.raise_for_status()
            verification = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"[CAPTCHA] Verification request failed: {str(e)}")
            raise CaptchaVerificationError("CAPTCHA verification failed") from e

        logger.info(f"[CAPTCHA] Verification result: success={verification.get('success')}, errors={verification.get('error-codes')}")
        return verification
