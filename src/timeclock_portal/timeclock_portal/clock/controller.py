from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, session

from ..common.datetime_utils import now_utc
from ..common.validators import require_int
from ..common.web import client_ip, json_body, login_required
from ..container import Container
from ..core.exceptions import NotFoundError
from ..employees.model import Employee
from .model import ClockSession


def session_json(s: Optional[ClockSession]) -> Optional[dict]:
    if s is None:
        return None
    origin = s.origin
    return {
        "session_id": s.session_id,
        "employee_id": s.employee_id,
        "employee_name": s.employee_name,
        "clock_in": s.clock_in.isoformat(),
        "clock_out": s.clock_out.isoformat() if s.clock_out else None,
        "location": s.location.value,
        "location_label": s.location.label,
        "hours_worked": str(s.elapsed(now_utc())),
        "ip_address": origin.ip if origin else None,
        "city": origin.city if origin else None,
        "country": origin.country if origin else None,
        "timezone": origin.timezone if origin else None,
    }


def employee_json(e: Employee) -> dict:
    return {
        "employee_id": e.employee_id,
        "name": e.name,
        "email": e.email,
        "manager": e.manager,
        "location": e.location,
        "created_at": e.created_at.isoformat(),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="employee_login")
    def employee_login():
        body = json_body()
        origin = container.geo_lookup.resolve(client_ip())
        employee = container.roster_service.login(body.get("name", ""), body.get("company", ""), origin=origin)

        session["employee_id"] = employee.employee_id
        session["name"] = employee.name

        open_session = container.clock_registry.get_open_session(employee.employee_id)
        return jsonify({"employee": employee_json(employee), "open_session": session_json(open_session)})

    @app.route("/api/logout", methods=["POST"], endpoint="employee_logout")
    def employee_logout():
        session.pop("employee_id", None)
        session.pop("name", None)
        return jsonify({"ok": True})

    @app.route("/api/clock/status", methods=["GET"], endpoint="clock_status")
    @login_required
    def clock_status():
        open_session = container.clock_registry.get_open_session(int(session["employee_id"]))
        return jsonify({"clocked_in": open_session is not None, "open_session": session_json(open_session)})

    @app.route("/api/clock/in", methods=["POST"], endpoint="clock_in")
    @login_required
    def clock_in():
        body = json_body()
        origin = container.geo_lookup.resolve(client_ip())
        created = container.clock_registry.clock_in(int(session["employee_id"]), body.get("location", ""), origin)
        return jsonify({"session": session_json(created)}), 201

    @app.route("/api/clock/out", methods=["POST"], endpoint="clock_out")
    @login_required
    def clock_out():
        employee_id = int(session["employee_id"])
        session_id = json_body().get("session_id")
        if session_id is None:
            open_session = container.clock_registry.get_open_session(employee_id)
            if not open_session:
                raise NotFoundError("You are not clocked in")
            session_id = open_session.session_id

        session_id = require_int(session_id, "session_id")
        origin = container.geo_lookup.resolve(client_ip())
        closed = container.clock_registry.clock_out(session_id, origin, employee_id=employee_id)
        return jsonify({"session": session_json(closed)})

    @app.route("/api/clock/history", methods=["GET"], endpoint="clock_history")
    @login_required
    def clock_history():
        rows = container.clock_registry.history(int(session["employee_id"]))
        return jsonify({"sessions": [session_json(r) for r in rows]})
