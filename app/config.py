import logging
from typing import List, Literal

from pydantic_settings import BaseSettings

# Set up logging for this module
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # Database
    MONGO_URI: str
    MONGO_DB_NAME: str = "marketing_admin"  # Used when the URI has no path
    MONGO_APP_NAME: str = "marketing-admin"

    # reCAPTCHA
    RECAPTCHA_SECRET_KEY: str = ""
    RECAPTCHA_VERIFY_URL: str = "https://www.google.com/recaptcha/api/siteverify"

    # Pipedrive CRM
    PIPEDRIVE_API_TOKEN: str = ""
    PIPEDRIVE_BASE_URL: str = "https://prowork.pipedrive.com/api/v1"
    PIPEDRIVE_LEAD_MESSAGE_FIELD: str = "d47d2029837b3d1857da3900e5f887178986ab4c"
    CRM_CAPTURE_MODE: Literal["deal", "lead"] = "deal"

    OUTBOUND_TIMEOUT_SECONDS: float = 10.0

    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"


def _redact(value: str, keep: int = 6) -> str:
    return f"{value[:keep]}**** (redacted)" if value else "None"


# Log settings loading (redact sensitive values)
settings = Settings()
logger.info("[CONFIG] Settings loaded successfully")
logger.info(f"[CONFIG] Mongo URI: {_redact(settings.MONGO_URI, 10)}")
logger.info(f"[CONFIG] reCAPTCHA secret: {_redact(settings.RECAPTCHA_SECRET_KEY)}")
logger.info(f"[CONFIG] Pipedrive token: {_redact(settings.PIPEDRIVE_API_TOKEN)}")
logger.info(f"[CONFIG] Pipedrive base URL: {settings.PIPEDRIVE_BASE_URL}")
logger.info(f"[CONFIG] CRM capture mode: {settings.CRM_CAPTURE_MODE}")
