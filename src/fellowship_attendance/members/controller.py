from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import error_response, json_body, store_failure
from ..container import Container
from ..core.exceptions import EmailExistsError, MemberNotFoundError, StoreError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/members", methods=["GET"], endpoint="list_members")
    def list_members():
        try:
            members = container.member_service.list_members()
        except StoreError as e:
            return store_failure(app, "Failed to fetch members", e)
        return jsonify([m.to_json() for m in members])

    @app.route("/api/members", methods=["POST"], endpoint="add_member")
    def add_member():
        data = json_body()
        try:
            member = container.member_service.register_member(
                data.get("name"),
                data.get("email"),
                data.get("phone"),
                data.get("address"),
            )
        except ValidationError as e:
            return error_response(str(e), 400)
        except EmailExistsError as e:
            return error_response(str(e), 409, code="EMAIL_EXISTS")
        except StoreError as e:
            return store_failure(app, "Failed to add member. Please try again.", e)

        return jsonify({**member.to_json(), "message": "Member added successfully"}), 201

    @app.route("/api/members/<member_id>", methods=["DELETE"], endpoint="delete_member")
    def delete_member(member_id: str):
        try:
            container.member_service.delete_member(member_id)
        except MemberNotFoundError as e:
            return error_response(str(e), 404)
        except StoreError as e:
            return store_failure(app, "Failed to delete member", e)
        return jsonify({"message": "Member deleted successfully"})

    @app.route("/api/check-email", methods=["POST"], endpoint="check_email")
    def check_email():
        email = json_body().get("email")
        try:
            exists = container.member_service.email_exists(email)
        except ValidationError:
            return error_response("Email is required", 400)
        except StoreError as e:
            return store_failure(app, "Failed to check email", e)
        return jsonify({"exists": exists, "email": email.strip().lower()})
