from __future__ import annotations

import threading
from datetime import date, datetime

import pytest

from fellowship_attendance.attendance.model import AttendanceRecord
from fellowship_attendance.core.exceptions import DuplicateKeyError
from fellowship_attendance.members.model import Member
from fellowship_attendance.sessions.model import AttendanceSession


def _member(member_id="m1", email="a@x.com"):
    return Member(
        member_id=member_id,
        name="A",
        email=email,
        phone="",
        address="",
        created_at=datetime(2026, 1, 1, 8, 0),
    )


def _record(record_id, session_id="s1", member_id="m1"):
    return AttendanceRecord(
        record_id=record_id,
        session_id=session_id,
        member_id=member_id,
        scanned_at=datetime(2026, 1, 1, 9, 0),
        is_first_time=False,
    )


def test_member_insert_rejects_duplicate_id_and_email(store):
    store.members.insert(_member())

    with pytest.raises(DuplicateKeyError):
        store.members.insert(_member(member_id="m1", email="b@x.com"))
    with pytest.raises(DuplicateKeyError):
        store.members.insert(_member(member_id="m2", email="A@X.com"))
    assert store.members.count() == 1


def test_set_first_scan_only_once(store):
    store.members.insert(_member())

    assert store.members.set_first_scan("m1", datetime(2026, 1, 2)) is True
    assert store.members.set_first_scan("m1", datetime(2026, 1, 9)) is False
    assert store.members.set_first_scan("ghost", datetime(2026, 1, 9)) is False
    assert store.members.get_by_id("m1").first_scan_at == datetime(2026, 1, 2)


def test_deactivate_all_returns_changed_count(store):
    for i, active in enumerate([True, True, False]):
        store.sessions.insert(
            AttendanceSession(
                session_id=f"s{i}",
                name=f"S{i}",
                session_date=date(2026, 1, 1),
                scan_url=f"http://x/scan/s{i}",
                is_active=active,
                created_at=datetime(2026, 1, 1, 8, i),
            )
        )

    assert store.sessions.deactivate_all() == 2
    assert store.sessions.get_active() is None
    assert store.sessions.deactivate_all() == 0


def test_attendance_insert_rejects_same_pair(store):
    store.attendance.insert(_record("r1"))

    with pytest.raises(DuplicateKeyError):
        store.attendance.insert(_record("r2"))
    store.attendance.insert(_record("r3", session_id="s2"))

    assert store.attendance.count_for_member("m1") == 2


def test_concurrent_inserts_of_same_pair_leave_one_record(store):
    barrier = threading.Barrier(8)
    outcomes = []

    def worker(i):
        barrier.wait()
        try:
            store.attendance.insert(_record(f"r{i}"))
            outcomes.append("ok")
        except DuplicateKeyError:
            outcomes.append("dup")

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count("ok") == 1
    assert outcomes.count("dup") == 7
    assert len(store.attendance.list_for_session("s1")) == 1
