from werkzeug.security import generate_password_hash, check_password_hash
from docfolio.extensions import db
from .base import BaseModel

class User(BaseModel):
    __tablename__ = 'users'

    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)

    role = db.Column(db.String(50), nullable=False, default='admin')
    is_active = db.Column(db.Boolean, default=True)

    @property
    def is_admin(self):
        return self.role == "admin"

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)


class RevokedToken(BaseModel):
    __tablename__ = "revoked_tokens"

    jti = db.Column(db.String(36), nullable=False, unique=True, index=True)
