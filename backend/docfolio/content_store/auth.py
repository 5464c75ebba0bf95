# docfolio/content_store/auth.py
from typing import Optional

from flask import current_app
from flask_jwt_extended import (
    create_access_token,
    get_jwt,
    get_jwt_identity,
    verify_jwt_in_request,
)
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from docfolio.models.user import User, RevokedToken
from docfolio.extensions import db


def sign_in(store, email: str, password: str) -> Optional[dict]:
    """
    Exchange credentials for an access token.

    Returns None for unknown users, wrong passwords and disabled accounts.
    """
    user = store.single("users", eq={"email": email})

    if not user or not user.check_password(password):
        current_app.logger.info(f"Failed sign-in attempt for {email}")
        return None

    if not user.is_active:
        current_app.logger.info(f"Sign-in refused for disabled account {email}")
        return None

    access_token = create_access_token(
        identity=user.id,
        additional_claims={"role": user.role},
    )
    return {"access_token": access_token}


def sign_out(store) -> None:
    """Revoke the token used for the current request."""
    jti = get_jwt()["jti"]
    store.insert("revoked_tokens", {"jti": jti})


def current_user(store) -> Optional[User]:
    """
    The signed-in user, or None for anonymous viewers.

    Expired, revoked or malformed tokens are logged and treated as
    anonymous, so public views keep working. Admin routes still reject
    them through jwt_required.
    """
    try:
        verify_jwt_in_request(optional=True)
    except (JWTExtendedException, PyJWTError) as exc:
        current_app.logger.info(f"Ignoring unusable access token: {exc}")
        return None

    user_id = get_jwt_identity()
    if not user_id:
        return None

    user = store.single("users", eq={"id": user_id})
    if not user or not user.is_active:
        return None
    return user


def register_auth_callbacks(jwt):
    @jwt.token_in_blocklist_loader
    def check_if_token_revoked(jwt_header, jwt_payload):
        jti = jwt_payload["jti"]
        return db.session.query(RevokedToken.id).filter_by(jti=jti).first() is not None
