"""
Request bodies for the banner and splash screen endpoints.

Field names are snake_case in Python and camelCase on the wire.
Enum-valued fields are accepted as plain strings here; the document models
validate them before anything is stored.
"""

from typing import Optional
from pydantic import BaseModel, Field

from ..models.banner import DEFAULT_COLLECTION_BG, DEFAULT_TEMPLATE
from ..models.enums import BannerSection, MediaType


class BannerCreateRequest(BaseModel):
    title: str
    image_url: str = Field(..., alias="imageUrl")
    link: str = ""
    section: str = BannerSection.TOP.value
    order: int = 0
    template: str = DEFAULT_TEMPLATE
    collection_title: str = Field("", alias="collectionTitle")
    collection_image: str = Field("", alias="collectionImage")
    collection_bg: str = Field(DEFAULT_COLLECTION_BG, alias="collectionBg")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "title": "Sale",
                "imageUrl": "https://cdn.example.com/banners/sale.png",
                "section": "section-1",
                "order": 2,
            }
        }


class BannerUpdateRequest(BaseModel):
    title: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")
    link: Optional[str] = None
    section: Optional[str] = None
    order: Optional[int] = None
    template: Optional[str] = None
    collection_title: Optional[str] = Field(None, alias="collectionTitle")
    collection_image: Optional[str] = Field(None, alias="collectionImage")
    collection_bg: Optional[str] = Field(None, alias="collectionBg")

    class Config:
        populate_by_name = True


class SplashScreenRequest(BaseModel):
    title: str
    media_url: str = Field(..., alias="mediaUrl")
    media_type: str = Field(MediaType.IMAGE.value, alias="mediaType")
    duration: int = 5
    background_color: str = Field("#ffffff", alias="backgroundColor")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "title": "Summer launch",
                "mediaUrl": "https://cdn.example.com/splash/summer.mp4",
                "mediaType": "video",
                "duration": 4,
                "backgroundColor": "#000000",
            }
        }
