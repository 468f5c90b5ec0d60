"""
Cron client for the daily task reset.

Calls the reset trigger over HTTP so the job runs inside the API process.

Usage:
    python -m app.jobs.reset_tasks_cron

System crontab entry (midnight every day):
    0 0 * * * cd /path/to/project && python -m app.jobs.reset_tasks_cron
"""

import asyncio
import os
import sys
from typing import Any, Dict, Optional

import httpx
from dotenv import load_dotenv

from app.middleware.cron_auth import get_cron_secret
from app.utils.logger import cron_logger

RESET_PATH = "/api/reset-tasks"


class ResetTriggerError(Exception):
    """The reset endpoint answered with a non-200 status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Reset endpoint returned {status_code}: {body}")


async def trigger_reset(
    base_url: str,
    secret: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    timeout: float = 60.0,
) -> Dict[str, Any]:
    """
    POST to the reset endpoint and return its JSON summary.

    Raises:
        ResetTriggerError: If the endpoint does not answer 200
        httpx.HTTPError: On connection failures
    """
    headers = {"Authorization": f"Bearer {secret}"} if secret else {}
    async with httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout) as client:
        response = await client.post(RESET_PATH, json={}, headers=headers)

    if response.status_code != 200:
        raise ResetTriggerError(response.status_code, response.text)
    return response.json()


async def main() -> int:
    """Run one trigger; returns the process exit code."""
    load_dotenv()
    base_url = os.getenv("APP_URL", "http://localhost:8000")

    cron_logger.info("Starting task reset", base_url=base_url)
    try:
        result = await trigger_reset(base_url, get_cron_secret())
    except (ResetTriggerError, httpx.HTTPError) as e:
        cron_logger.error("Task reset failed", error=str(e))
        return 1

    cron_logger.info(
        result.get("message", "Task reset finished"),
        updated_count=result.get("updated_count", 0),
        errors=result.get("errors", []),
    )
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
