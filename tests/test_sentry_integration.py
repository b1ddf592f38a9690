import pytest
from httpx import ASGITransport, AsyncClient

from pinmap import main
from pinmap.main import create_app
from tests.factories import memory_settings


@pytest.mark.asyncio
async def test_healthz_ok_without_sentry(monkeypatch):
    # Ensure SENTRY_DSN is unset
    monkeypatch.delenv("SENTRY_DSN", raising=False)
    app = create_app(memory_settings())
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        r = await ac.get("/healthz")
        assert r.status_code == 200
        assert r.json() == {"ok": True}


@pytest.mark.parametrize("raw, expected", [("0.1", 0.1), ("5", 0.2), ("-1", 0.0), ("junk", 0.0)])
def test_sentry_init_clamps_trace_rate(monkeypatch, raw, expected):
    captured = {}
    monkeypatch.setenv("SENTRY_DSN", "https://key@sentry.example/1")
    monkeypatch.setenv("SENTRY_TRACES_RATE", raw)
    monkeypatch.setattr(main.sentry_sdk, "init", lambda **kw: captured.update(kw))

    main._init_sentry("staging")

    assert captured["environment"] == "staging"
    assert captured["traces_sample_rate"] == expected
    assert captured["send_default_pii"] is False
