from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.constants import READ_FAILED_MESSAGE
from ..core.exceptions import ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        return "Attendance Backend is running!", 200

    @app.route("/api/mark_attendance", methods=["POST"], endpoint="api_mark_attendance")
    def api_mark_attendance():
        body = request.get_json(silent=True)
        try:
            payload = container.attendance_service.mark_attendance(body)
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        return jsonify(payload), 200

    @app.route("/api/get_attendance", methods=["GET"], endpoint="api_get_attendance")
    def api_get_attendance():
        try:
            rows = container.attendance_service.get_recent_attendance()
        except Exception as e:
            logger.error("Error fetching attendance data: %s", e)
            return jsonify({"message": READ_FAILED_MESSAGE, "error": str(e)}), 500
        return jsonify(rows), 200
