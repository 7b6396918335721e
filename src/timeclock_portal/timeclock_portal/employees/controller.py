from __future__ import annotations

from flask import Flask, jsonify, request

from ..audit.model import AuditActor
from ..clock.controller import employee_json
from ..common.web import admin_required, csv_response, json_body
from ..container import Container
from ..core.exceptions import EmptyInputError
from .importer import import_template


def register(app: Flask, container: Container) -> None:
    def _admin_actor() -> AuditActor:
        return AuditActor(name="admin")

    @app.route("/api/admin/employees", methods=["GET"], endpoint="list_employees")
    @admin_required
    def list_employees():
        employees = container.roster_service.list_employees()
        return jsonify({"employees": [employee_json(e) for e in employees]})

    @app.route("/api/admin/employees", methods=["POST"], endpoint="add_employee")
    @admin_required
    def add_employee():
        body = json_body()
        employee = container.roster_service.add_employee(
            body.get("name", ""),
            body.get("email"),
            body.get("manager"),
            location=body.get("location"),
            actor=_admin_actor(),
        )
        return jsonify({"employee": employee_json(employee)}), 201

    @app.route("/api/admin/employees/<int:employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @admin_required
    def delete_employee(employee_id: int):
        container.roster_service.remove_employee(employee_id)
        return jsonify({"ok": True})

    @app.route("/api/admin/employees/import", methods=["POST"], endpoint="import_employees")
    @admin_required
    def import_employees():
        upload = request.files.get("file")
        if upload is not None:
            raw_text = upload.read().decode("utf-8-sig")
        else:
            raw_text = request.get_data(as_text=True)
        if not raw_text:
            raise EmptyInputError("Import file is empty")

        report = container.roster_service.bulk_import(raw_text, actor=_admin_actor())
        return jsonify(
            {
                "added": [employee_json(e) for e in report.added],
                "rejected": [{"line": r.line, "reason": r.reason} for r in report.rejected],
                "summary": report.summary(),
            }
        )

    @app.route("/api/admin/employees/import-template", methods=["GET"], endpoint="import_template")
    @admin_required
    def download_import_template():
        return csv_response(app, import_template(), "employee-import-template.csv")
