from beanie import Indexed
from pydantic import Field

from .base import TimestampedDocument
from .enums import MediaType

# The single splash screen document is addressed by this key
SPLASH_SCREEN_KEY = "default"


class SplashScreen(TimestampedDocument):
    key: Indexed(str, unique=True) = SPLASH_SCREEN_KEY
    title: str = Field(..., min_length=1)
    media_url: str = Field(..., min_length=1)
    media_type: MediaType = MediaType.IMAGE
    duration: int = Field(5, ge=1)  # seconds
    background_color: str = "#ffffff"

    class Settings:
        name = "splash_screens"
        validate_on_save = True
