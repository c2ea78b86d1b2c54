import logging

from fastapi import Security
from fastapi.security import APIKeyHeader
from starlette.requests import Request

from magnet_rss.database import settings
from magnet_rss.exceptions import MisconfiguredError, UnauthorizedError
from magnet_rss.services.kv_store import KeyValueStore
from magnet_rss.services.security import timing_safe_equal

logger = logging.getLogger(__name__)

# The raw header is compared as a whole ("Bearer <secret>").
authorization_header = APIKeyHeader(name="Authorization", auto_error=False)


def _decode_header(value: str) -> str | None:
    # Starlette decodes header bytes as latin-1; clients send the secret as UTF-8.
    try:
        return value.encode("latin-1").decode("utf-8")
    except UnicodeError:
        return None


async def verify_bearer_token(
    authorization: str | None = Security(authorization_header),
) -> None:
    secret = settings.get_bearer_secret()
    if secret is None:
        logger.error("Update rejected: MAGNET_RSS_KEY is not configured")
        raise MisconfiguredError()
    expected = f"Bearer {secret}"
    provided = _decode_header(authorization) if authorization else None
    if not provided or not timing_safe_equal(provided, expected):
        logger.warning("Update rejected: missing or invalid bearer token")
        raise UnauthorizedError()


def get_store(request: Request) -> KeyValueStore:
    return request.app.state.store
