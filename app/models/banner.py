from pydantic import Field

from .base import TimestampedDocument
from .enums import BannerSection

DEFAULT_TEMPLATE = "template1"
DEFAULT_COLLECTION_BG = "#f7ed57"


class Banner(TimestampedDocument):
    title: str = Field(..., min_length=1)
    image_url: str = Field(..., min_length=1)
    link: str = ""  # Shown as "Id" in the admin UI
    section: BannerSection = BannerSection.TOP
    order: int = 0
    template: str = DEFAULT_TEMPLATE
    collection_title: str = ""
    collection_image: str = ""
    collection_bg: str = DEFAULT_COLLECTION_BG

    class Settings:
        name = "banners"  # collection name
        validate_on_save = True
