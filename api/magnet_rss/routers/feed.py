from fastapi import APIRouter, Depends
from fastapi.responses import Response
from starlette.requests import Request

from magnet_rss.database import settings
from magnet_rss.dependencies import get_store
from magnet_rss.exceptions import NotAvailableError
from magnet_rss.services.kv_store import KeyValueStore
from magnet_rss.services.magnet_service import get_latest_magnet
from magnet_rss.services.rss_service import generate_rss_feed

router = APIRouter(tags=["feed"])


@router.get("/rss")
async def rss_feed(
    request: Request,
    store: KeyValueStore = Depends(get_store),
):
    state = await get_latest_magnet(store)
    if state is None:
        raise NotAvailableError()

    rss_xml = generate_rss_feed(
        state.magnet,
        state.updated_at,
        site_url=str(request.base_url).rstrip("/"),
        feed_url=str(request.url_for("rss_feed")),
        title=settings.feed_title,
        description=settings.feed_description,
    )
    return Response(
        content=rss_xml,
        media_type="application/xml; charset=utf-8",
        headers={"Cache-Control": f"s-maxage={settings.feed_cache_seconds}"},
    )
