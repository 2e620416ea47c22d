from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from fellowship_attendance.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from fellowship_attendance.attendance.service import AttendanceService
from fellowship_attendance.core.exceptions import (
    AlreadyMarkedError,
    MemberNotFoundError,
    NoActiveSessionError,
    SessionNotActiveError,
    ValidationError,
)


@pytest.fixture
def ada(member_service):
    return member_service.register_member("Ada Lovelace", "ada@x.com")


@pytest.fixture
def sunday(session_service, fixed_now):
    return session_service.create_session("Sunday Service", now=fixed_now).session


def test_first_attendance_is_first_time_and_sets_first_scan(attendance_service, store, ada, sunday, fixed_now):
    result = attendance_service.mark_attendance(sunday.session_id, ada.member_id, now=fixed_now)

    assert result.is_first_time is True
    assert result.message == "Welcome Ada Lovelace! First time attendance recorded."
    assert result.timestamp == fixed_now
    record = store.attendance.get_for_session_and_member(sunday.session_id, ada.member_id)
    assert record.record_id == result.record_id
    assert record.marked_manually is False
    assert store.members.get_by_id(ada.member_id).first_scan_at == fixed_now


def test_later_attendance_is_not_first_time(attendance_service, session_service, store, ada, sunday, fixed_now):
    attendance_service.mark_attendance(sunday.session_id, ada.member_id, now=fixed_now)
    later = fixed_now + timedelta(days=7)
    next_week = session_service.create_session("Sunday Service", now=later).session

    result = attendance_service.mark_attendance(next_week.session_id, ada.member_id, now=later)

    assert result.is_first_time is False
    assert result.message == "Attendance marked for Ada Lovelace!"
    # first scan is never overwritten
    assert store.members.get_by_id(ada.member_id).first_scan_at == fixed_now


def test_marking_twice_fails_and_keeps_one_record(attendance_service, store, ada, sunday):
    attendance_service.mark_attendance(sunday.session_id, ada.member_id)

    with pytest.raises(AlreadyMarkedError):
        attendance_service.mark_attendance(sunday.session_id, ada.member_id)

    assert len(store.attendance.list_for_session(sunday.session_id)) == 1
    assert store.attendance.count_for_member(ada.member_id) == 1


def test_unknown_session_is_rejected_without_record(attendance_service, store, ada):
    with pytest.raises(SessionNotActiveError):
        attendance_service.mark_attendance("no-such-session", ada.member_id)

    assert store.attendance.count_for_member(ada.member_id) == 0


def test_inactive_session_is_rejected(attendance_service, session_service, ada, sunday, fixed_now):
    session_service.create_session("Evening", now=fixed_now + timedelta(hours=8))

    with pytest.raises(SessionNotActiveError):
        attendance_service.mark_attendance(sunday.session_id, ada.member_id)


def test_unknown_member(attendance_service, sunday):
    with pytest.raises(MemberNotFoundError):
        attendance_service.mark_attendance(sunday.session_id, "nobody")


def test_missing_ids(attendance_service):
    with pytest.raises(ValidationError):
        attendance_service.mark_attendance("", "x")
    with pytest.raises(ValidationError):
        attendance_service.mark_attendance("x", None)


def test_manual_marks_active_session(attendance_service, store, ada, sunday):
    result = attendance_service.mark_manual(ada.member_id)

    assert result.message == "Ada Lovelace marked present manually!"
    assert result.is_first_time is True
    record = store.attendance.get_for_session_and_member(sunday.session_id, ada.member_id)
    assert record.marked_manually is True


def test_manual_without_active_session(attendance_service, ada):
    with pytest.raises(NoActiveSessionError):
        attendance_service.mark_manual(ada.member_id)


def test_manual_then_scan_is_already_marked(attendance_service, ada, sunday):
    attendance_service.mark_manual(ada.member_id)

    with pytest.raises(AlreadyMarkedError):
        attendance_service.mark_attendance(sunday.session_id, ada.member_id)


def test_lost_insert_race_is_reported_as_already_marked(store, ada, sunday):
    class RacingAttendance(InMemoryAttendanceRepository):
        # The pre-check misses the concurrent insert; the store still refuses.
        def get_for_session_and_member(self, session_id, member_id):
            return None

    attendance = RacingAttendance()
    svc = AttendanceService(attendance, store.members, store.sessions)
    svc.mark_attendance(sunday.session_id, ada.member_id, now=datetime(2026, 3, 1, 9, 31))

    with pytest.raises(AlreadyMarkedError):
        svc.mark_attendance(sunday.session_id, ada.member_id, now=datetime(2026, 3, 1, 9, 32))

    assert attendance.count_for_member(ada.member_id) == 1
