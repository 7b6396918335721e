from __future__ import annotations

from flask import Flask, jsonify, request

from ..audit.model import AuditEvent
from ..clock.controller import session_json
from ..common.web import admin_required, csv_response, date_arg
from ..container import Container
from .aggregates import ALL


def event_json(e: AuditEvent) -> dict:
    return {
        "event_id": e.event_id,
        "action": e.action.value,
        "action_label": e.action.label,
        "employee_name": e.actor.name if e.actor else None,
        "employee_email": e.actor.email if e.actor else None,
        "ip_address": e.origin.ip if e.origin else None,
        "location_data": e.origin.location_data() if e.origin else None,
        "details": e.details,
        "created_at": e.created_at.isoformat(),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/dashboard", methods=["GET"], endpoint="admin_dashboard")
    @admin_required
    def admin_dashboard():
        day = date_arg()
        report = container.reporting_service.day_report(day, location=request.args.get("location", ALL))
        return jsonify(
            {
                "date": day.isoformat(),
                "summary": report.summary.as_dict(),
                "sessions": [session_json(r) | {"manager": r.manager} for r in report.rows],
            }
        )

    @app.route("/api/admin/dashboard.csv", methods=["GET"], endpoint="admin_dashboard_csv")
    @admin_required
    def admin_dashboard_csv():
        day = date_arg()
        text = container.reporting_service.export_sessions_csv(day, location=request.args.get("location", ALL))
        return csv_response(app, text, f"time-entries-{day.isoformat()}.csv")

    @app.route("/api/admin/audit", methods=["GET"], endpoint="admin_audit")
    @admin_required
    def admin_audit():
        day = date_arg()
        events = container.reporting_service.audit_for_day(day, action=request.args.get("action", ALL))
        return jsonify({"date": day.isoformat(), "events": [event_json(e) for e in events]})

    @app.route("/api/admin/audit.csv", methods=["GET"], endpoint="admin_audit_csv")
    @admin_required
    def admin_audit_csv():
        day = date_arg()
        text = container.reporting_service.export_audit_csv(day, action=request.args.get("action", ALL))
        return csv_response(app, text, f"audit-logs-{day.isoformat()}.csv")
