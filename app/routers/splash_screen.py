import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError

from ..dependencies import ensure_db
from ..models.enums import MediaType
from ..models.splash_screen import SplashScreen
from ..services.splash_screen_service import SplashScreenService
from ..utils import format_validation_error
from .schemas import SplashScreenRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/splash-screen", tags=["Splash Screen"], dependencies=[Depends(ensure_db)])


def splash_screen_to_dict(splash_screen: SplashScreen) -> Dict[str, Any]:
    return {
        "id": str(splash_screen.id),
        "title": splash_screen.title,
        "mediaUrl": splash_screen.media_url,
        "mediaType": MediaType(splash_screen.media_type).value,
        "duration": splash_screen.duration,
        "backgroundColor": splash_screen.background_color,
        "createdAt": splash_screen.created_at,
        "updatedAt": splash_screen.updated_at,
    }


@router.get("", response_model=Optional[Dict[str, Any]])
async def get_splash_screen():
    """The current splash screen, or null when none has been configured"""
    try:
        splash_screen = await SplashScreenService.get_splash_screen()
        return splash_screen_to_dict(splash_screen) if splash_screen else None
    except Exception as e:
        logger.error(f"[SPLASH] Error fetching splash screen: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch splash screen",
        )


@router.post("", response_model=Dict[str, Any])
async def upsert_splash_screen(payload: SplashScreenRequest):
    """Create the splash screen, or overwrite it if one already exists"""
    try:
        splash_screen = await SplashScreenService.upsert_splash_screen(payload.model_dump())
        return splash_screen_to_dict(splash_screen)
    except ValidationError as e:
        logger.warning(f"[SPLASH] Rejected splash screen: {str(e)}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=format_validation_error(e))
    except Exception as e:
        logger.error(f"[SPLASH] Error updating splash screen: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update splash screen",
        )
