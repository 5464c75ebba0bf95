from flask import request, jsonify
from flask_jwt_extended import jwt_required
from docfolio.content_store import auth
from . import v1_bp, store


@v1_bp.route("/auth/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "Invalid request body"}), 400

    email = data.get("email")
    password = data.get("password")

    if not email or not password:
        return jsonify({"error": "Email and password required"}), 400

    tokens = auth.sign_in(store, email, password)
    if not tokens:
        return jsonify({"error": "Invalid credentials"}), 401

    return jsonify(tokens), 200


@v1_bp.route("/auth/logout", methods=["POST"])
@jwt_required()
def logout():
    auth.sign_out(store)
    return jsonify({"message": "Signed out"}), 200


@v1_bp.route("/auth/me", methods=["GET"])
def me():
    user = auth.current_user(store)
    if not user:
        return jsonify({"user": None}), 200

    return jsonify({
        "user": {
            "id": user.id,
            "email": user.email,
            "role": user.role,
            "is_admin": user.is_admin,
        }
    }), 200
