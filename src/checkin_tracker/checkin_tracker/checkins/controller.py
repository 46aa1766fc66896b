from __future__ import annotations

import csv
import io
import logging
from functools import wraps

from flask import Flask, jsonify, request, send_file, session

from ..common.validators import clean_subject, normalize_tenant
from ..container import Container
from ..core.exceptions import StoreError

logger = logging.getLogger(__name__)


def _payload() -> dict:
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def register(app: Flask, container: Container) -> None:
    checkins = container.checkin_service

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not session.get("owner"):
                return jsonify({"success": False, "message": "Please log in to continue"}), 401
            return view(*args, **kwargs)

        return wrapper

    def current_owner() -> str:
        return session["owner"]

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        owner = normalize_tenant(_payload().get("owner"))
        if owner is None:
            return jsonify({"success": False, "message": "Owner name is required"}), 400

        session.clear()
        session["owner"] = owner
        logger.info("Owner %s logged in", owner)
        return jsonify({"success": True, "owner": owner})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    @login_required
    def list_students():
        result = checkins.list_subjects(current_owner())
        return jsonify({"students": list(result.items), "degraded": result.degraded, "error": result.error})

    @app.route("/api/students", methods=["POST"], endpoint="add_student")
    @login_required
    def add_student():
        name = clean_subject(_payload().get("name"))
        if name is not None:
            checkins.register_subject(current_owner(), name)
        return jsonify({"success": True, "student": name})

    @app.route("/api/students/<name>/week", methods=["GET"], endpoint="student_week")
    @login_required
    def student_week(name: str):
        return jsonify(checkins.week_snapshot(current_owner(), name).to_dict())

    @app.route("/api/students/<name>/checkins", methods=["POST"], endpoint="add_checkin")
    @login_required
    def add_checkin(name: str):
        note = _payload().get("note")
        count = checkins.add_check_in(current_owner(), name, note if isinstance(note, str) else None)
        return jsonify({"success": True, "count": count})

    @app.route("/api/students/<name>/clear", methods=["POST"], endpoint="clear_week")
    @login_required
    def clear_week(name: str):
        checkins.clear_week(current_owner(), name)
        return jsonify({"success": True, "count": 0})

    @app.route("/api/students/<name>/end-week", methods=["POST"], endpoint="end_week")
    @login_required
    def end_week(name: str):
        owner = current_owner()
        try:
            closed = checkins.end_week(owner, name)
        except StoreError:
            return (
                jsonify(
                    {
                        "success": False,
                        "message": "Could not save the week, please try again",
                        "count": checkins.current_count(owner, name),
                    }
                ),
                503,
            )
        except Exception:
            logger.exception("End week failed for %s/%s", owner, name)
            return jsonify({"success": False, "message": "System error while ending the week"}), 500

        if closed is None:
            return jsonify({"success": False, "message": "Student name is required"}), 400
        return jsonify(
            {
                "success": True,
                "week_ending": closed.week_ending.strftime("%Y-%m-%d"),
                "count": closed.count,
            }
        )

    @app.route("/api/students/<name>/history", methods=["GET"], endpoint="student_history")
    @login_required
    def student_history(name: str):
        result = checkins.weekly_history(current_owner(), name)
        return jsonify(
            {
                "history": [t.to_dict() for t in result.items],
                "degraded": result.degraded,
                "error": result.error,
            }
        )

    @app.route("/api/students/<name>/history.csv", methods=["GET"], endpoint="export_history")
    @login_required
    def export_history(name: str):
        result = checkins.weekly_history(current_owner(), name)

        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(["Week Ending (Friday)", "Check-Ins", "Notes"])
        for total in result.items:
            writer.writerow([total.week_ending.strftime("%Y-%m-%d"), total.count, total.annotation_summary])

        data = io.BytesIO(buffer.getvalue().encode("utf-8-sig"))
        safe_name = "".join(ch if ch.isalnum() else "_" for ch in (clean_subject(name) or "student"))
        return send_file(
            data,
            mimetype="text/csv",
            as_attachment=True,
            download_name=f"checkins_{safe_name}.csv",
        )
