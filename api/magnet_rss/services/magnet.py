"""Magnet link grammar and display-name extraction."""

import re
from typing import Optional
from urllib.parse import unquote_plus

DEFAULT_DISPLAY_NAME = "Latest Torrent"

# xt must come first; dn and tr may follow in any order and repeat.
MAGNET_PATTERN = re.compile(
    r"magnet:\?xt=urn:btih:[a-z0-9]{32,40}(?:&(?:dn|tr)=[^&\s]*)*",
    re.IGNORECASE,
)

_DISPLAY_NAME_PATTERN = re.compile(r"[?&]dn=([^&]*)")


def is_valid_magnet(value: object) -> bool:
    if not isinstance(value, str) or not value:
        return False
    return MAGNET_PATTERN.fullmatch(value) is not None


def extract_display_name(magnet: str) -> Optional[str]:
    """Return the URL-decoded ``dn`` parameter, or None when absent.

    A value that does not decode as UTF-8 is returned as-is.
    """
    match = _DISPLAY_NAME_PATTERN.search(magnet)
    if match is None:
        return None
    raw = match.group(1)
    try:
        name = unquote_plus(raw, errors="strict")
    except UnicodeDecodeError:
        name = raw
    return name or None


def display_name_for(magnet: str) -> str:
    return extract_display_name(magnet) or DEFAULT_DISPLAY_NAME
