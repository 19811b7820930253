from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import make_auth_guards, query_date
from ..container import Container


def register(app: Flask, container: Container) -> None:
    _, hr_required = make_auth_guards(container.token_service)

    @app.route("/api/dashboard/stats", methods=["GET"], endpoint="dashboard_stats")
    @hr_required
    def dashboard_stats():
        stats = container.reporting_service.daily_stats(query_date("date"))
        return jsonify(stats.to_dict())
