import pytest

from pinmap.middleware.security_headers import SECURITY_HEADERS


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/healthz", "/nope"])
async def test_security_headers_present(app_client, path):
    r = await app_client.get(path)
    for name, value in SECURITY_HEADERS.items():
        assert r.headers.get(name) == value


@pytest.mark.asyncio
async def test_security_headers_on_validation_error(app_client):
    r = await app_client.post("/pins", json={})
    assert r.status_code == 400
    assert r.headers.get("X-Content-Type-Options") == "nosniff"
