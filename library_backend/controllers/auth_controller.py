from flask import Blueprint, jsonify

from library_backend.services.auth_service import AuthService
from library_backend.utils.validators import get_json_object

auth_bp = Blueprint("auth", __name__, url_prefix="/api")


@auth_bp.post("/register")
def register():
    data = get_json_object()
    user = AuthService.register(data.get("name"), data.get("email"), data.get("password"))
    return jsonify(user), 201


@auth_bp.post("/login")
def login():
    data = get_json_object()
    return jsonify(AuthService.login(data.get("email"), data.get("password")))


@auth_bp.get("/my-profile/<int:user_id>")
def my_profile(user_id: int):
    return jsonify(AuthService.profile(user_id))
