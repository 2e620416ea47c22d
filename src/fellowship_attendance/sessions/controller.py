from __future__ import annotations

from flask import Flask, jsonify, render_template, request

from ..common.http import error_response, json_body, store_failure
from ..container import Container
from ..core.exceptions import SessionNotActiveError, StoreError, ValidationError


def register(app: Flask, container: Container) -> None:
    def _base_url() -> str:
        # Configured public address wins; otherwise whatever host the organizer used.
        return app.config.get("PUBLIC_BASE_URL") or request.host_url

    @app.route("/", methods=["GET"], endpoint="dashboard")
    def dashboard():
        return render_template("dashboard.html")

    @app.route("/api/sessions", methods=["POST"], endpoint="create_session")
    def create_session():
        name = json_body().get("sessionName")
        try:
            created = container.session_service.create_session(name, base_url=_base_url())
        except ValidationError as e:
            return error_response(str(e), 400)
        except StoreError as e:
            return store_failure(app, "Failed to create session", e)

        s = created.session
        return jsonify(
            {
                "sessionId": s.session_id,
                "sessionName": s.name,
                "sessionDate": s.session_date.isoformat(),
                "qrData": s.scan_url,
                "qrCodeImage": created.qr_code_image,
                "message": "Session created successfully",
            }
        )

    @app.route("/api/sessions", methods=["GET"], endpoint="list_sessions")
    def list_sessions():
        try:
            sessions = container.session_service.list_sessions()
        except StoreError as e:
            return store_failure(app, "Failed to fetch sessions", e)
        return jsonify([s.to_json() for s in sessions])

    @app.route("/api/sessions/active", methods=["GET"], endpoint="active_session")
    def active_session():
        try:
            session = container.session_service.get_active_session()
        except StoreError as e:
            return store_failure(app, "Failed to fetch active session", e)
        if not session:
            return error_response("No active session found", 404)

        return jsonify({**session.to_json(), "qrCodeImage": container.session_service.qr_for(session)})

    @app.route("/scan/<session_id>", methods=["GET"], endpoint="scan_page")
    def scan_page(session_id: str):
        try:
            session = container.session_service.get_scan_session(session_id)
        except SessionNotActiveError:
            return render_template("invalid_session.html"), 404
        except StoreError as e:
            app.logger.error("Failed to load scan page: %s", e)
            return render_template("store_unavailable.html"), 500
        return render_template("scan.html", attendance_session=session)
