from __future__ import annotations

from datetime import datetime

import pytest

from fellowship_attendance.attendance.service import AttendanceService
from fellowship_attendance.database.store import build_memory_store
from fellowship_attendance.main import create_app
from fellowship_attendance.members.service import MemberService
from fellowship_attendance.reports.service import ReportService
from fellowship_attendance.sessions.service import SessionService


def fake_qr(data: str) -> str:
    return f"qr:{data}"


@pytest.fixture
def fixed_now():
    return datetime(2026, 3, 1, 9, 30, 0)


@pytest.fixture
def store():
    return build_memory_store()


@pytest.fixture
def member_service(store):
    return MemberService(store.members)


@pytest.fixture
def session_service(store):
    return SessionService(store.sessions, base_url="https://att.example.org", qr_renderer=fake_qr)


@pytest.fixture
def attendance_service(store):
    return AttendanceService(store.attendance, store.members, store.sessions)


@pytest.fixture
def report_service(store):
    return ReportService(store.attendance, store.members, store.sessions)


@pytest.fixture
def app(store):
    app = create_app("fellowship_attendance.settings.testing", store=store)
    return app


@pytest.fixture
def client(app):
    return app.test_client()
