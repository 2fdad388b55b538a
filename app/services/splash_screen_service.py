import logging
from typing import Any, Dict, Optional

from pymongo.errors import DuplicateKeyError

from ..models.splash_screen import SPLASH_SCREEN_KEY, SplashScreen

logger = logging.getLogger(__name__)

MUTABLE_FIELDS = ("title", "media_url", "media_type", "duration", "background_color")


class SplashScreenService:

    @staticmethod
    async def get_splash_screen() -> Optional[SplashScreen]:
        return await SplashScreen.find_one(SplashScreen.key == SPLASH_SCREEN_KEY)

    @staticmethod
    async def _overwrite(splash_screen: SplashScreen, fields: Dict[str, Any]) -> SplashScreen:
        for field in MUTABLE_FIELDS:
            setattr(splash_screen, field, fields[field])
        splash_screen.update_timestamp()
        await splash_screen.save()
        return splash_screen

    @staticmethod
    async def upsert_splash_screen(fields: Dict[str, Any]) -> SplashScreen:
        """
        Overwrite the singleton splash screen, creating it on first use.

        `fields` must carry all five mutable fields. The unique index on
        `key` guarantees a single document; losing an insert race falls back
        to overwriting the winner.
        """
        existing = await SplashScreenService.get_splash_screen()
        if existing:
            logger.info(f"[SPLASH] Updating splash screen {existing.id}")
            return await SplashScreenService._overwrite(existing, fields)

        splash_screen = SplashScreen(key=SPLASH_SCREEN_KEY, **{f: fields[f] for f in MUTABLE_FIELDS})
        try:
            await splash_screen.insert()
            logger.info(f"[SPLASH] Created splash screen {splash_screen.id}")
            return splash_screen
        except DuplicateKeyError:
            logger.warning("[SPLASH] Concurrent create detected, overwriting existing document")
            existing = await SplashScreenService.get_splash_screen()
            return await SplashScreenService._overwrite(existing, fields)
