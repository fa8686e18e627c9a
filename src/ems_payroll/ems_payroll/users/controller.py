from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.interceptor import token_required
from ..common.serializers import user_json
from ..common.validators import parse_bool, parse_role
from ..container import Container
from .model import UserChanges


def register(app: Flask, container: Container) -> None:
    authenticated = token_required(tokens=container.token_service, users=container.users_repo)

    @app.route("/users", methods=["GET"], endpoint="users_list")
    @authenticated
    def users_list(caller):
        users = container.user_service.list_users(caller=caller)
        return jsonify([user_json(u) for u in users])

    @app.route("/users/<int:user_id>", methods=["GET"], endpoint="users_get")
    @authenticated
    def users_get(user_id: int, caller):
        return jsonify(user_json(container.user_service.get_user(caller=caller, user_id=user_id)))

    @app.route("/users/<int:user_id>", methods=["PUT"], endpoint="users_update")
    @authenticated
    def users_update(user_id: int, caller):
        data = request.get_json(silent=True) or {}
        role = data.get("role")
        changes = UserChanges(
            email=data.get("email"),
            first_name=data.get("firstName"),
            last_name=data.get("lastName"),
            department=data.get("department"),
            position=data.get("position"),
            hourly_rate=data.get("hourlyRate"),
            role=parse_role(role) if role is not None else None,
            password=data.get("password"),
        )
        user = container.user_service.update_user(caller=caller, user_id=user_id, changes=changes)
        return jsonify(user_json(user))

    @app.route("/users/<int:user_id>/status", methods=["PUT"], endpoint="users_status")
    @authenticated
    def users_status(user_id: int, caller):
        enabled = parse_bool(request.args.get("enabled"), "enabled")
        user = container.user_service.update_status(caller=caller, user_id=user_id, enabled=enabled)
        return jsonify(user_json(user))

    @app.route("/users/<int:user_id>", methods=["DELETE"], endpoint="users_delete")
    @authenticated
    def users_delete(user_id: int, caller):
        container.user_service.delete_user(caller=caller, user_id=user_id)
        return jsonify({"message": "User deleted successfully"})
