"""Ciclo de vida de la tarea periódica de vencimientos."""

import asyncio
import threading
from datetime import timedelta

import pytest

from app.models.notification import Notification
from app.services import expiration_scheduler
from app.services.expiration_scheduler import ExpirationScheduler
from app.utils.helpers import utcnow
from tests.conftest import TestingSession


def test_run_once_sweeps_with_its_own_session(db, seed_users, make_document):
    make_document(expiration_date=utcnow() + timedelta(days=3, hours=1))
    scheduler = ExpirationScheduler(TestingSession, interval_seconds=3600)

    result = asyncio.run(scheduler.run_once())

    assert result is not None
    assert result.reminders_sent == 1
    assert db.query(Notification).count() == 2


def test_overlapping_sweep_is_skipped(monkeypatch):
    started = threading.Event()
    release = threading.Event()
    calls = []

    def slow_sweep(session):
        calls.append(session)
        started.set()
        release.wait(timeout=5)

    monkeypatch.setattr(expiration_scheduler, "check_expiring_documents", slow_sweep)
    scheduler = ExpirationScheduler(TestingSession, interval_seconds=3600)

    worker = threading.Thread(target=scheduler.run_sweep)
    worker.start()
    assert started.wait(timeout=5)

    assert scheduler.run_sweep() is None
    release.set()
    worker.join(timeout=5)
    assert len(calls) == 1


def test_sweep_errors_are_logged_and_swallowed(monkeypatch, caplog):
    def broken(session):
        raise RuntimeError("database offline")

    monkeypatch.setattr(expiration_scheduler, "check_expiring_documents", broken)
    scheduler = ExpirationScheduler(TestingSession, interval_seconds=3600)

    assert scheduler.run_sweep() is None
    assert "Error al revisar documentos" in caplog.text
    # El cerrojo se libera para el siguiente intervalo.
    assert scheduler.run_sweep() is None
    assert caplog.text.count("Error al revisar documentos") == 2


def test_start_runs_immediately_and_repeats_until_stopped(monkeypatch):
    calls = []

    def counting_sweep(session):
        calls.append(session)

    monkeypatch.setattr(expiration_scheduler, "check_expiring_documents", counting_sweep)

    async def scenario():
        scheduler = ExpirationScheduler(TestingSession, interval_seconds=0.01)
        scheduler.start()
        assert scheduler.is_running
        for _ in range(200):
            if len(calls) >= 3:
                break
            await asyncio.sleep(0.01)
        await scheduler.stop()
        return scheduler

    scheduler = asyncio.run(scenario())
    assert len(calls) >= 3
    assert not scheduler.is_running


def test_loop_survives_failing_sweeps(monkeypatch):
    calls = []

    def failing(session):
        calls.append(session)
        raise RuntimeError("boom")

    monkeypatch.setattr(expiration_scheduler, "check_expiring_documents", failing)

    async def scenario():
        scheduler = ExpirationScheduler(TestingSession, interval_seconds=0.01)
        scheduler.start()
        for _ in range(200):
            if len(calls) >= 2:
                break
            await asyncio.sleep(0.01)
        await scheduler.stop()

    asyncio.run(scenario())
    assert len(calls) >= 2


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        ExpirationScheduler(TestingSession, interval_seconds=0)
