from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.http import json_body, make_auth_guards
from ..container import Container


def register(app: Flask, container: Container) -> None:
    token_required, _ = make_auth_guards(container.token_service)

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        data = json_body()
        token, user = container.auth_service.login(data.get("email", ""), data.get("password", ""))
        return jsonify({"token": token, "user": user.to_dict()})

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @token_required
    def me():
        return jsonify(container.user_service.me(g.actor.user_id).to_dict())

    @app.route("/api/auth/profile", methods=["PUT"], endpoint="auth_profile")
    @token_required
    def update_profile():
        data = json_body()
        user = container.user_service.update_profile(
            g.actor.user_id,
            name=data.get("name"),
            email=data.get("email"),
        )
        return jsonify(user.to_dict())

    @app.route("/api/auth/password", methods=["PUT"], endpoint="auth_password")
    @token_required
    def change_password():
        data = json_body()
        container.user_service.change_password(
            g.actor.user_id,
            current_password=data.get("currentPassword", ""),
            new_password=data.get("newPassword", ""),
        )
        return jsonify({"message": "Password updated"})
