from __future__ import annotations

import csv
import io

from flask import Flask, jsonify

from ..common.datetime_utils import today_utc
from ..common.http import store_failure
from ..container import Container
from ..core.exceptions import StoreError


def register(app: Flask, container: Container) -> None:
    def _write_membership_csv(*, rows, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=["id", "name", "email", "phone", "present"])
        writer.writeheader()
        for r in rows:
            writer.writerow(
                {
                    "id": r.member_id,
                    "name": r.name,
                    "email": r.email,
                    "phone": r.phone,
                    "present": "yes" if r.present else "no",
                }
            )

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/attendance/current", methods=["GET"], endpoint="current_attendance")
    def current_attendance():
        try:
            rows = container.report_service.current_attendance_report()
        except StoreError as e:
            return store_failure(app, "Failed to fetch attendance", e)
        return jsonify([r.to_json() for r in rows])

    @app.route("/api/sessions/<session_id>/stats", methods=["GET"], endpoint="session_stats")
    def session_stats(session_id: str):
        try:
            stats = container.report_service.session_statistics(session_id)
        except StoreError as e:
            return store_failure(app, "Failed to fetch statistics", e)
        return jsonify(stats.to_json())

    @app.route("/api/reports/membership", methods=["GET"], endpoint="membership_report")
    def membership_report():
        try:
            rows = container.report_service.full_membership_report()
        except StoreError as e:
            return store_failure(app, "Failed to build membership report", e)
        return jsonify(
            [
                {"id": r.member_id, "name": r.name, "email": r.email, "phone": r.phone, "present": r.present}
                for r in rows
            ]
        )

    @app.route("/api/reports/membership.csv", methods=["GET"], endpoint="membership_report_csv")
    def membership_report_csv():
        try:
            rows = container.report_service.full_membership_report()
        except StoreError as e:
            return store_failure(app, "Failed to build membership report", e)
        filename = f"membership_{today_utc().strftime('%Y%m%d')}.csv"
        return _write_membership_csv(rows=rows, filename=filename)
