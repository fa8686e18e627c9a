from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serializers import auth_json, user_json
from ..container import Container
from .interceptor import token_required


def register(app: Flask, container: Container) -> None:
    authenticated = token_required(tokens=container.token_service, users=container.users_repo)

    @app.route("/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        data = request.get_json(silent=True) or {}
        result = container.auth_service.register(
            username=data.get("username", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            first_name=data.get("firstName", ""),
            last_name=data.get("lastName", ""),
            role=data.get("role"),
            department=data.get("department"),
            position=data.get("position"),
            hourly_rate=data.get("hourlyRate"),
        )
        return jsonify(auth_json(result))

    @app.route("/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        data = request.get_json(silent=True) or {}
        result = container.auth_service.login(data.get("username", ""), data.get("password", ""))
        return jsonify(auth_json(result))

    @app.route("/auth/validate", methods=["GET"], endpoint="auth_validate")
    @authenticated
    def auth_validate(caller):
        return jsonify({"valid": True, "username": caller.username, "message": "Token is valid"})

    @app.route("/auth/me", methods=["GET"], endpoint="auth_me")
    @authenticated
    def auth_me(caller):
        return jsonify(user_json(container.auth_service.current_user(caller)))
