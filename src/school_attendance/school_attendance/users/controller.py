from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import admin_required, current_role, handle_errors, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    @handle_errors("Login failed")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(
            data.get("username", ""),
            data.get("password", ""),
            data.get("role", ""),
        )

        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value

        return jsonify({"user": s_user.to_dict()})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "message": "Logged out"})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    @handle_errors("Failed to fetch user")
    def me():
        user = container.users_repo.get_by_id(session["user_id"])
        if not user:
            session.clear()
            return jsonify({"success": False, "message": "Session expired", "reason": "invalid credentials"}), 401
        return jsonify({"user": user.to_dict()})

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @admin_required
    @handle_errors("Failed to fetch users")
    def list_users():
        return jsonify([u.to_dict() for u in container.user_service.list_users()])

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    @admin_required
    @handle_errors("Failed to create user")
    def create_user():
        user = container.user_service.create_account(current_role=current_role(), data=json_body())
        return jsonify(user.to_dict()), 201
