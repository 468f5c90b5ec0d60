"""Tests for the cron client that calls the reset trigger."""

import httpx
import pytest

from app.jobs import reset_tasks_cron
from app.jobs.reset_tasks_cron import ResetTriggerError, trigger_reset


@pytest.mark.asyncio
async def test_trigger_sends_bearer_secret():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["auth"] = request.headers.get("authorization")
        return httpx.Response(200, json={"success": True, "updated_count": 2, "message": "2 tasks were reset successfully"})

    result = await trigger_reset("http://api.test", "s3cret", transport=httpx.MockTransport(handler))

    assert seen == {"path": "/api/reset-tasks", "auth": "Bearer s3cret"}
    assert result["updated_count"] == 2


@pytest.mark.asyncio
async def test_trigger_without_secret_sends_no_header():
    def handler(request: httpx.Request) -> httpx.Response:
        assert "authorization" not in request.headers
        return httpx.Response(200, json={"success": True, "updated_count": 0})

    result = await trigger_reset("http://api.test", None, transport=httpx.MockTransport(handler))

    assert result["success"] is True


@pytest.mark.asyncio
async def test_trigger_raises_on_error_status():
    transport = httpx.MockTransport(lambda request: httpx.Response(401, json={"detail": "Unauthorized"}))

    with pytest.raises(ResetTriggerError) as exc_info:
        await trigger_reset("http://api.test", "wrong", transport=transport)

    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_main_exit_codes(monkeypatch):
    async def ok(base_url, secret):
        return {"message": "1 tasks were reset successfully", "updated_count": 1}

    async def failing(base_url, secret):
        raise ResetTriggerError(500, "boom")

    monkeypatch.setattr(reset_tasks_cron, "trigger_reset", ok)
    assert await reset_tasks_cron.main() == 0

    monkeypatch.setattr(reset_tasks_cron, "trigger_reset", failing)
    assert await reset_tasks_cron.main() == 1
