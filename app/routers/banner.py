import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError

from ..dependencies import ensure_db
from ..models.banner import Banner
from ..models.enums import BannerSection
from ..services.banner_service import BannerService
from ..utils import format_validation_error
from .schemas import BannerCreateRequest, BannerUpdateRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/banners", tags=["Banners"], dependencies=[Depends(ensure_db)])


def banner_to_dict(banner: Banner) -> Dict[str, Any]:
    return {
        "id": str(banner.id),
        "title": banner.title,
        "imageUrl": banner.image_url,
        "link": banner.link,
        "section": BannerSection(banner.section).value,
        "order": banner.order,
        "template": banner.template,
        "collectionTitle": banner.collection_title,
        "collectionImage": banner.collection_image,
        "collectionBg": banner.collection_bg,
        "createdAt": banner.created_at,
        "updatedAt": banner.updated_at,
    }


@router.get("", response_model=List[Dict[str, Any]])
async def list_banners(
    section: Optional[str] = Query(None, description="Only return banners in this section"),
):
    """All banners, optionally limited to one section, ordered by `order`"""
    try:
        banners = await BannerService.list_banners(section)
        return [banner_to_dict(b) for b in banners]
    except Exception as e:
        logger.error(f"[BANNERS] Error fetching banners: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch banners",
        )


@router.post("", response_model=Dict[str, Any])
async def create_banner(payload: BannerCreateRequest):
    try:
        banner = await BannerService.create_banner(payload.model_dump())
        return banner_to_dict(banner)
    except ValidationError as e:
        logger.warning(f"[BANNERS] Rejected banner: {str(e)}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=format_validation_error(e))
    except Exception as e:
        logger.error(f"[BANNERS] Error creating banner: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create banner",
        )


@router.put("/{banner_id}", response_model=Dict[str, Any])
async def update_banner(banner_id: str, payload: BannerUpdateRequest):
    """Apply the fields present in the body; omitted fields are left alone"""
    try:
        banner = await BannerService.update_banner(banner_id, payload.model_dump(exclude_unset=True))
    except ValidationError as e:
        logger.warning(f"[BANNERS] Rejected update for {banner_id}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=format_validation_error(e))
    except Exception as e:
        logger.error(f"[BANNERS] Error updating banner {banner_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update banner",
        )

    if not banner:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Banner not found")
    return banner_to_dict(banner)


@router.delete("/{banner_id}", response_model=Dict[str, Any])
async def delete_banner(banner_id: str):
    try:
        deleted = await BannerService.delete_banner(banner_id)
    except Exception as e:
        logger.error(f"[BANNERS] Error deleting banner {banner_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete banner",
        )

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Banner not found")
    return {"message": "Banner deleted successfully"}
