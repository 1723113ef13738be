from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, get_jwt

from libms.exceptions import NotFound, ValidationError
from libms.repositories.user_repo import UserRepo
from libms.services.auth_service import AuthService
from libms.utils.decorators import current_user_id

auth_bp = Blueprint("auth", __name__)


def _user_dict(user):
    return {"id": user.id, "username": user.username, "email": user.email, "role": user.role}


@auth_bp.post("/register")
def register():
    data = request.get_json(silent=True) or {}

    username = (data.get("username") or "").strip()
    email = (data.get("email") or "").strip()
    password = (data.get("password") or "").strip()

    if not username or not email or not password:
        raise ValidationError("Validation failed.", details=["username, email and password are required."])

    # role is never taken from the client
    user = AuthService.register(username=username, email=email, password=password)
    return jsonify({"success": True, "data": _user_dict(user)}), 201


@auth_bp.post("/login")
def login():
    data = request.get_json(silent=True) or {}
    access, refresh, user = AuthService.login(
        (data.get("username") or "").strip(),
        (data.get("password") or "").strip()
    )
    return jsonify({
        "success": True,
        "access_token": access,
        "refresh_token": refresh,
        "user": _user_dict(user),
    })


@auth_bp.post("/refresh")
@jwt_required(refresh=True)
def refresh():
    access, refresh_token = AuthService.refresh(current_user_id(), get_jwt()["jti"])
    return jsonify({"success": True, "access_token": access, "refresh_token": refresh_token})


@auth_bp.post("/logout")
@jwt_required(refresh=True)
def logout():
    # the presented refresh token can no longer be exchanged
    claims = get_jwt()
    AuthService.logout(current_user_id(), claims["jti"], claims["type"])
    return jsonify({"success": True, "message": "Logged out."})


@auth_bp.get("/me")
@jwt_required()
def me():
    user = UserRepo.get_by_id(current_user_id())
    if not user:
        raise NotFound("User not found.")

    claims = get_jwt()
    data = _user_dict(user)
    data["role"] = claims.get("role", user.role)
    return jsonify({"success": True, "user": data})
