from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Optional

from magnet_rss.services.magnet import display_name_for

_XML_ENTITIES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "'": "&apos;",
    '"': "&quot;",
}


def xml_escape(text: str) -> str:
    """Replace the five XML special characters with entity references."""
    return "".join(_XML_ENTITIES.get(c, c) for c in text)


def cdata(text: str) -> str:
    # "]]>" cannot appear inside a CDATA section; split it across two.
    return "<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def generate_rss_feed(
    magnet: str,
    updated_at: Optional[datetime],
    site_url: str,
    feed_url: str,
    title: str = "Latest Magnet Link",
    description: str = "This feed provides the latest magnet link.",
) -> str:
    """Render the stored magnet link as an RSS 2.0 document with one item.

    ``updated_at`` of None means "now". The magnet link is emitted verbatim
    inside CDATA for ``link``/``description`` and escaped for ``guid``.
    """
    published = format_datetime(
        (updated_at or datetime.now(timezone.utc)).astimezone(timezone.utc),
        usegmt=True,
    )
    item_title = xml_escape(display_name_for(magnet))

    return f"""<?xml version="1.0" encoding="UTF-8" ?>
<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom">
<channel>
  <title>{xml_escape(title)}</title>
  <link>{xml_escape(site_url)}</link>
  <atom:link href="{xml_escape(feed_url)}" rel="self" type="application/rss+xml" />
  <description>{xml_escape(description)}</description>
  <lastBuildDate>{published}</lastBuildDate>
  <item>
    <title>{item_title}</title>
    <link>{cdata(magnet)}</link>
    <guid isPermaLink="false">{xml_escape(magnet)}</guid>
    <pubDate>{published}</pubDate>
    <description>{cdata("Magnet Link: " + magnet)}</description>
  </item>
</channel>
</rss>
"""
