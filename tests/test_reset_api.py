"""Tests for the HTTP reset trigger and its status query."""

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from app.db.config import get_engine
from app.main import app
from app.middleware.cron_auth import SECRET_ENV_VARS
from app.models.task import TaskState
from app.routers.reset import get_reset_executor
from app.services.reset_executor import ResetExecutor
from app.services.task_store import TaskStore


@pytest.fixture
def client(engine, monkeypatch):
    for name in SECRET_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("RESET_TIMEOUT_SECONDS", raising=False)
    app.dependency_overrides[get_engine] = lambda: engine
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_trigger_resets_due_tasks(client, make_task, load_task):
    today = date.today()
    due = make_task(due_date=today)
    later = make_task(due_date=today + timedelta(days=2))

    response = client.post("/api/reset-tasks")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["updated_count"] == 1
    assert body["tasks_checked"] == 2
    assert body["date"] == today.isoformat()
    assert body["errors"] == []
    assert load_task(due).state == TaskState.PENDING
    assert load_task(due).due_date == today + timedelta(days=1)
    assert load_task(later).state == TaskState.COMPLETED


def test_trigger_twice_is_idempotent(client, make_task):
    make_task(due_date=date.today())

    first = client.post("/api/reset-tasks").json()
    second = client.post("/api/reset-tasks").json()

    assert first["updated_count"] == 1
    assert second["updated_count"] == 0


def test_trigger_requires_secret_when_configured(client, monkeypatch, make_task, load_task):
    monkeypatch.setenv("CRON_SECRET", "s3cret")
    task_id = make_task(due_date=date.today())

    missing = client.post("/api/reset-tasks")
    wrong = client.post("/api/reset-tasks", headers={"Authorization": "Bearer nope"})

    assert missing.status_code == 401
    assert wrong.status_code == 401
    assert "Traceback" not in wrong.text
    assert load_task(task_id).state == TaskState.COMPLETED


def test_trigger_accepts_bearer_secret(client, monkeypatch, make_task):
    monkeypatch.setenv("CRON_SECRET", "s3cret")
    make_task(due_date=date.today())

    response = client.post("/api/reset-tasks", headers={"Authorization": "Bearer s3cret"})

    assert response.status_code == 200
    assert response.json()["updated_count"] == 1


def test_cron_alias_accepts_query_secret_on_get(client, monkeypatch, make_task):
    monkeypatch.setenv("VERCEL_CRON_SECRET", "s3cret")
    make_task(due_date=date.today())

    response = client.get("/api/cron/reset-tasks", params={"secret": "s3cret"})

    assert response.status_code == 200
    assert response.json()["updated_count"] == 1


def test_run_failure_returns_500_with_summary(client):
    class BrokenStore(TaskStore):
        def find_due_tasks(self):
            raise ConnectionError("connection refused")

        def apply_reset(self, task_id, new_state, new_remaining_occurrences, new_due_date):
            raise AssertionError("not reached")

        def count_due_tasks(self):
            return 0

    app.dependency_overrides[get_reset_executor] = lambda: ResetExecutor(BrokenStore())

    response = client.post("/api/reset-tasks")

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["updated_count"] == 0
    assert len(body["errors"]) == 1


def test_status_counts_without_mutating(client, make_task, load_task):
    today = date.today()
    task_id = make_task(due_date=today)
    make_task(due_date=today + timedelta(days=1))
    make_task(state=TaskState.PENDING, due_date=today)

    response = client.get("/api/reset-tasks")

    assert response.status_code == 200
    body = response.json()
    assert body["tasks_to_reset"] == 2
    assert body["current_date"] == today.isoformat()
    assert body["reset_executed_today"] is False
    assert "counters" in body["metrics"]
    assert load_task(task_id).state == TaskState.COMPLETED


def test_status_reports_logged_run(client, make_task):
    make_task(due_date=date.today())
    client.post("/api/reset-tasks")

    body = client.get("/api/reset-tasks").json()

    assert body["tasks_to_reset"] == 0
    assert body["reset_executed_today"] is True
    assert body["metrics"]["counters"]["tasks_reset_total"] == 1


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"
