from __future__ import annotations

from flask import Flask, jsonify, request


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def error_response(message: str, status: int, **extra):
    return jsonify({"error": message, **extra}), status


def store_failure(app: Flask, message: str, exc: Exception):
    """500 for a store error: logged in full, detail only shown in DEBUG."""

    app.logger.error("%s: %s", message, exc)
    body = {"error": message}
    if app.config.get("DEBUG"):
        body["details"] = str(exc)
    return jsonify(body), 500
