#!/usr/bin/env python3
"""
One-off migration for databases written by the previous admin app.

That app stored camelCase keys (imageUrl, collectionBg, createdAt, ...) and
kept the splash screen in a `splashscreens` collection with no fixed key.
This script renames the banner keys in place and copies the most recently
updated legacy splash screen into `splash_screens` under the fixed key.
It is safe to run more than once.

Usage:
    python scripts/migrate_legacy_schema.py

Requirements:
    - .env file with MONGO_URI (same as main app)
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Dict

project_root = Path(__file__).parent.parent
sys.path.append(str(project_root))

from app.db import get_db_client, get_db_name
from app.models.splash_screen import SPLASH_SCREEN_KEY

logger = logging.getLogger(__name__)

BANNER_RENAMES = {
    "imageUrl": "image_url",
    "collectionTitle": "collection_title",
    "collectionImage": "collection_image",
    "collectionBg": "collection_bg",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}

SPLASH_RENAMES = {
    "mediaUrl": "media_url",
    "mediaType": "media_type",
    "backgroundColor": "background_color",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}

LEGACY_SPLASH_COLLECTION = "splashscreens"


async def migrate_banners(database) -> int:
    result = await database["banners"].update_many(
        {"$or": [{legacy: {"$exists": True}} for legacy in BANNER_RENAMES]},
        {"$rename": BANNER_RENAMES},
    )
    logger.info(f"[MIGRATE] Renamed legacy keys on {result.modified_count} banners")
    return result.modified_count


async def migrate_splash_screen(database) -> bool:
    target = database["splash_screens"]
    if await target.find_one({"key": SPLASH_SCREEN_KEY}):
        logger.info("[MIGRATE] Splash screen already migrated")
        return False

    legacy = await database[LEGACY_SPLASH_COLLECTION].find_one(sort=[("updatedAt", -1)])
    if not legacy:
        logger.info("[MIGRATE] No legacy splash screen found")
        return False

    document: Dict[str, Any] = {"key": SPLASH_SCREEN_KEY}
    for field, value in legacy.items():
        if field in ("_id", "__v"):
            continue
        document[SPLASH_RENAMES.get(field, field)] = value

    await target.insert_one(document)
    logger.info(f"[MIGRATE] Copied legacy splash screen {legacy['_id']}")
    return True


async def migrate_legacy_documents(database) -> None:
    await migrate_banners(database)
    await migrate_splash_screen(database)


async def main():
    client = await get_db_client()
    await migrate_legacy_documents(client.get_database(get_db_name()))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    try:
        asyncio.run(main())
    except Exception as e:
        logger.error(f"[MIGRATE] Migration failed: {str(e)}", exc_info=True)
        sys.exit(1)
