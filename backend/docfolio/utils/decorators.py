from functools import wraps
from flask import jsonify
from flask_jwt_extended import get_jwt, jwt_required

def roles_required(*allowed_roles):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            claims = get_jwt()

            if claims.get("role") not in allowed_roles:
                return jsonify({"error": "Insufficient permissions"}), 403

            return fn(*args, **kwargs)
        return wrapper
    return decorator

def admin_required(fn):
    """JWT required and the token must carry the admin role."""
    return jwt_required()(roles_required("admin")(fn))
