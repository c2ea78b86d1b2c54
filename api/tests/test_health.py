async def test_health_ok(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.text == "OK"


async def test_health_does_not_touch_store(client, store):
    await client.get("/health")
    assert await store.get("latest_magnet") is None
