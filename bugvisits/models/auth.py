# bugvisits/models/auth.py
import secrets

from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

from bugvisits.extensions import db


class User(db.Model, UserMixin):
    __tablename__ = "user"
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, index=True, nullable=False)
    name = db.Column(db.String(255))
    password_hash = db.Column(db.String(255))
    api_key = db.Column(db.String(64), unique=True, index=True, nullable=True)
    # Flask-Login reads `is_active`; 0 disables both session and API-key login
    is_active = db.Column(db.Integer, default=1, nullable=False)

    groups = db.relationship(
        "Group",
        secondary="user_group_map",
        back_populates="members",
        lazy="select",
    )

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def new_api_key(self) -> str:
        self.api_key = secrets.token_hex(20)
        return self.api_key

    def __repr__(self):
        return f"<User {self.id} {self.email}>"


class Group(db.Model):
    __tablename__ = "groups"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), unique=True, nullable=False)
    description = db.Column(db.String(255))

    members = db.relationship(
        "User",
        secondary="user_group_map",
        back_populates="groups",
        lazy="select",
    )


class UserGroupMap(db.Model):
    __tablename__ = "user_group_map"
    user_id = db.Column(db.Integer, db.ForeignKey("user.id", ondelete="CASCADE"), primary_key=True)
    group_id = db.Column(db.Integer, db.ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True)
