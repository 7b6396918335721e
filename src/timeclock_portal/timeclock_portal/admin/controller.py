from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import client_ip, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/login", methods=["POST"], endpoint="admin_login")
    def admin_login():
        origin = container.geo_lookup.resolve(client_ip())
        container.admin_auth_service.authenticate(json_body().get("password", ""), origin=origin)
        session["is_admin"] = True
        return jsonify({"ok": True})

    @app.route("/api/admin/logout", methods=["POST"], endpoint="admin_logout")
    def admin_logout():
        session.pop("is_admin", None)
        return jsonify({"ok": True})
