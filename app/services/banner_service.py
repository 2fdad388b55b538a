import logging
from typing import Any, Dict, List, Optional

from beanie import PydanticObjectId
from beanie.exceptions import DocumentNotFound
from bson import ObjectId

from ..models.banner import Banner
from ..models.enums import BannerSection

logger = logging.getLogger(__name__)


def _parse_id(banner_id: str) -> Optional[PydanticObjectId]:
    if not ObjectId.is_valid(banner_id):
        return None
    return PydanticObjectId(banner_id)


class BannerService:

    @staticmethod
    async def list_banners(section: Optional[str] = None) -> List[Banner]:
        query = {"section": section} if section else {}
        return await Banner.find(query).sort("+order").to_list()

    @staticmethod
    async def create_banner(fields: Dict[str, Any]) -> Banner:
        banner = Banner(**fields)
        await banner.insert()
        logger.info(f"[BANNERS] Created banner {banner.id} in section {BannerSection(banner.section).value}")
        return banner

    @staticmethod
    async def get_banner_by_id(banner_id: str) -> Optional[Banner]:
        object_id = _parse_id(banner_id)
        if object_id is None:
            return None
        return await Banner.get(object_id)

    @staticmethod
    async def update_banner(banner_id: str, changes: Dict[str, Any]) -> Optional[Banner]:
        """
        Apply only the given fields; nothing is defaulted. The whole document
        is validated on save, so a bad section or a null title is rejected
        before anything is written.
        """
        banner = await BannerService.get_banner_by_id(banner_id)
        if not banner:
            return None

        for field, value in changes.items():
            setattr(banner, field, value)
        banner.update_timestamp()
        try:
            await banner.replace()
        except DocumentNotFound:
            # Deleted after it was read
            return None

        logger.info(f"[BANNERS] Updated banner {banner_id}: {sorted(changes)}")
        return await Banner.get(banner.id)

    @staticmethod
    async def delete_banner(banner_id: str) -> bool:
        banner = await BannerService.get_banner_by_id(banner_id)
        if not banner:
            return False

        await banner.delete()
        logger.info(f"[BANNERS] Deleted banner {banner_id}")
        return True
