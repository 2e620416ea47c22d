from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import isoformat_z
from ..common.http import error_response, json_body, store_failure
from ..container import Container
from ..core.exceptions import (
    AlreadyMarkedError,
    MemberNotFoundError,
    SessionNotActiveError,
    StoreError,
    ValidationError,
)


def register(app: Flask, container: Container) -> None:
    def _result_json(result):
        return jsonify(
            {
                "message": result.message,
                "isFirstTime": result.is_first_time,
                "recordId": result.record_id,
                "timestamp": isoformat_z(result.timestamp),
            }
        )

    @app.route("/api/attendance", methods=["POST"], endpoint="mark_attendance")
    def mark_attendance():
        data = json_body()
        if not data.get("sessionId") or not data.get("memberId"):
            return error_response("Session ID and Member ID are required", 400)

        try:
            result = container.attendance_service.mark_attendance(data["sessionId"], data["memberId"])
        except (ValidationError, SessionNotActiveError, AlreadyMarkedError) as e:
            return error_response(str(e), 400)
        except MemberNotFoundError as e:
            return error_response(str(e), 404)
        except StoreError as e:
            return store_failure(app, "Failed to mark attendance", e)
        return _result_json(result)

    @app.route("/api/attendance/manual", methods=["POST"], endpoint="mark_attendance_manual")
    def mark_attendance_manual():
        member_id = json_body().get("memberId")
        if not member_id:
            return error_response("Member ID is required", 400)

        try:
            result = container.attendance_service.mark_manual(member_id)
        except (ValidationError, SessionNotActiveError, AlreadyMarkedError) as e:
            return error_response(str(e), 400)
        except MemberNotFoundError as e:
            return error_response(str(e), 404)
        except StoreError as e:
            return store_failure(app, "Failed to mark attendance manually", e)
        return _result_json(result)
