"""Integration tests for /rss endpoint."""

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from xml.etree import ElementTree

TEST_SECRET = "test-secret-for-testing"
AUTH_HEADER = {"Authorization": f"Bearer {TEST_SECRET}"}

MAGNET = (
    "magnet:?xt=urn:btih:c9e15763f722f23e98a29decdfae341b98d53056"
    "&dn=My%20File&tr=udp%3A%2F%2Ftracker.example%3A80"
)


async def test_rss_feed_before_any_update(client):
    response = await client.get("/rss")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Magnet link not set yet."}


async def test_rss_feed_after_update(client):
    update = await client.post("/update", json={"magnet": MAGNET}, headers=AUTH_HEADER)
    assert update.status_code == 200

    response = await client.get("/rss")
    assert response.status_code == 200
    assert f"<link><![CDATA[{MAGNET}]]></link>" in response.text
    escaped = MAGNET.replace("&", "&amp;")
    assert f'<guid isPermaLink="false">{escaped}</guid>' in response.text

    root = ElementTree.fromstring(response.text)
    item = root.find(".//item")
    assert item.find("title").text == "My File"
    assert item.find("link").text == MAGNET


async def test_rss_feed_headers(client, store):
    await store.put("latest_magnet", MAGNET)
    response = await client.get("/rss")
    assert response.headers["content-type"] == "application/xml; charset=utf-8"
    assert response.headers["cache-control"] == "s-maxage=3600"
    assert "content-security-policy" not in response.headers


async def test_rss_feed_self_links(client, store):
    await store.put("latest_magnet", MAGNET)
    response = await client.get("/rss")
    root = ElementTree.fromstring(response.text)
    channel = root.find("channel")
    assert channel.find("link").text == "http://test"
    atom_link = channel.find("{http://www.w3.org/2005/Atom}link")
    assert atom_link.get("href") == "http://test/rss"


async def test_rss_feed_uses_stored_timestamp(client, store):
    await store.put_many(
        {
            "latest_magnet": MAGNET,
            "last_updated": "2026-01-15T10:00:00+00:00",
        }
    )
    response = await client.get("/rss")
    root = ElementTree.fromstring(response.text)
    assert root.find(".//item/pubDate").text == "Thu, 15 Jan 2026 10:00:00 GMT"


async def test_rss_feed_missing_timestamp_defaults_to_now(client, store):
    await store.put("latest_magnet", MAGNET)
    response = await client.get("/rss")
    assert response.status_code == 200
    root = ElementTree.fromstring(response.text)
    pub_date = root.find(".//item/pubDate").text
    assert str(datetime.now(timezone.utc).year) in pub_date


async def test_rss_feed_unparseable_timestamp_defaults_to_now(client, store):
    await store.put_many({"latest_magnet": MAGNET, "last_updated": "yesterday"})
    before = datetime.now(timezone.utc).replace(microsecond=0)
    response = await client.get("/rss")
    assert response.status_code == 200
    root = ElementTree.fromstring(response.text)
    pub_date = parsedate_to_datetime(root.find(".//item/pubDate").text)
    assert before <= pub_date <= datetime.now(timezone.utc)


async def test_rss_feed_timestamp_without_identifier(client, store):
    await store.put("last_updated", "2026-01-15T10:00:00+00:00")
    response = await client.get("/rss")
    assert response.status_code == 404


async def test_rss_feed_storage_failure(client, store, monkeypatch):
    from magnet_rss.services.kv_store import StorageError

    async def failing_get(key):
        raise StorageError("boom")

    monkeypatch.setattr(store, "get", failing_get)
    response = await client.get("/rss")
    assert response.status_code == 500
    assert response.json()["success"] is False
    assert "boom" not in response.text
