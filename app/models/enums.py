from enum import Enum


class BannerSection(str, Enum):
    """Fixed display slots on the app home screen"""

    TOP = "top"
    SECTION_1 = "section-1"
    SECTION_2 = "section-2"
    SECTION_3 = "section-3"


class MediaType(str, Enum):
    """Splash screen media kinds"""

    IMAGE = "image"
    GIF = "gif"
    VIDEO = "video"
