import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from magnet_rss.schemas.magnet import MagnetState
from magnet_rss.services.kv_store import (
    LAST_UPDATED_KEY,
    LATEST_MAGNET_KEY,
    KeyValueStore,
)

logger = logging.getLogger(__name__)


def _parse_timestamp(raw: Optional[str]) -> Optional[datetime]:
    if not raw:
        return None
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        logger.warning("Ignoring unparseable %s value: %r", LAST_UPDATED_KEY, raw)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


async def get_latest_magnet(store: KeyValueStore) -> Optional[MagnetState]:
    """Read the current magnet link and its timestamp.

    Returns None until the first successful update. A missing timestamp is
    not an error; callers default it to "now".
    """
    magnet, raw_updated_at = await asyncio.gather(
        store.get(LATEST_MAGNET_KEY),
        store.get(LAST_UPDATED_KEY),
    )
    if not magnet:
        return None
    return MagnetState(magnet=magnet, updated_at=_parse_timestamp(raw_updated_at))


async def set_latest_magnet(store: KeyValueStore, magnet: str) -> MagnetState:
    """Replace the current magnet link; both keys describe the same write."""
    updated_at = datetime.now(timezone.utc)
    await store.put_many(
        {
            LATEST_MAGNET_KEY: magnet,
            LAST_UPDATED_KEY: updated_at.isoformat(),
        }
    )
    return MagnetState(magnet=magnet, updated_at=updated_at)
