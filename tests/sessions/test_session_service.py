from __future__ import annotations

from datetime import date, datetime

import pytest

from fellowship_attendance.core.exceptions import SessionNotActiveError, ValidationError
from fellowship_attendance.sessions.memory_session_repository import InMemorySessionRepository
from fellowship_attendance.sessions.service import SessionService, build_scan_url


def _fake_qr(data: str) -> str:
    return f"qr:{data}"


def test_create_session_is_active_with_scan_url_and_qr(session_service, fixed_now):
    created = session_service.create_session("Sunday Service", now=fixed_now)
    s = created.session

    assert s.is_active is True
    assert s.name == "Sunday Service"
    assert s.session_date == fixed_now.date()
    assert s.scan_url == f"https://att.example.org/scan/{s.session_id}"
    assert created.qr_code_image == f"qr:{s.scan_url}"
    assert session_service.get_active_session() == s


def test_new_session_deactivates_previous_one(session_service):
    sunday = session_service.create_session("Sunday Service", now=datetime(2026, 3, 1, 9, 0)).session
    evening = session_service.create_session("Evening Service", now=datetime(2026, 3, 1, 18, 0)).session

    active = session_service.get_active_session()
    assert active.session_id == evening.session_id

    by_id = {s.session_id: s for s in session_service.list_sessions()}
    assert by_id[sunday.session_id].is_active is False
    assert [s for s in by_id.values() if s.is_active] == [active]


def test_list_sessions_newest_first(session_service):
    session_service.create_session("A", now=datetime(2026, 3, 1, 9, 0))
    session_service.create_session("B", now=datetime(2026, 3, 8, 9, 0))

    assert [s.name for s in session_service.list_sessions()] == ["B", "A"]


def test_no_active_session_is_none_not_error(session_service):
    assert session_service.get_active_session() is None


def test_explicit_session_date_and_base_url(session_service, fixed_now):
    s = session_service.create_session(
        "Retreat", session_date=date(2026, 4, 2), base_url="http://10.0.0.5:5000/", now=fixed_now
    ).session

    assert s.session_date == date(2026, 4, 2)
    assert s.scan_url == f"http://10.0.0.5:5000/scan/{s.session_id}"


def test_create_session_requires_name(session_service):
    with pytest.raises(ValidationError):
        session_service.create_session("   ")


def test_create_session_requires_some_base_url():
    svc = SessionService(InMemorySessionRepository(), qr_renderer=_fake_qr)

    with pytest.raises(ValidationError):
        svc.create_session("Sunday Service")


def test_scan_session_only_for_active_session(session_service):
    old = session_service.create_session("Old", now=datetime(2026, 3, 1, 9, 0)).session
    new = session_service.create_session("New", now=datetime(2026, 3, 8, 9, 0)).session

    assert session_service.get_scan_session(new.session_id) == new
    with pytest.raises(SessionNotActiveError):
        session_service.get_scan_session(old.session_id)
    with pytest.raises(SessionNotActiveError):
        session_service.get_scan_session("missing")


def test_build_scan_url_trims_trailing_slash():
    assert build_scan_url("https://x.org/", "abc") == "https://x.org/scan/abc"


def test_interleaved_creates_can_leave_two_active_sessions():
    # Known race: deactivate-then-insert is two operations. Here the second create
    # runs entirely between the first create's deactivate and its insert.
    class InterleavingSessions(InMemorySessionRepository):
        def __init__(self):
            super().__init__()
            self.hook = None

        def insert(self, session):
            hook, self.hook = self.hook, None
            if hook:
                hook()
            return super().insert(session)

    repo = InterleavingSessions()
    svc = SessionService(repo, base_url="https://att.example.org", qr_renderer=_fake_qr)
    repo.hook = lambda: svc.create_session("Second", now=datetime(2026, 3, 1, 10, 0))

    svc.create_session("First", now=datetime(2026, 3, 1, 9, 0))

    active = [s for s in svc.list_sessions() if s.is_active]
    assert sorted(s.name for s in active) == ["First", "Second"]
    # Readers still get a single answer: the newest active session.
    assert svc.get_active_session().name == "Second"
