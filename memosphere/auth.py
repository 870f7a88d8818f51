import logging
import re

from flask import Blueprint, jsonify, request, session
from flask_login import LoginManager, current_user, login_required, login_user, logout_user

from memosphere import storage
from memosphere.passwords import hash_password, random_password, verify_password
from memosphere.schemas import Credentials, FederatedIdentity
from memosphere.sessions import regenerate_session

logger = logging.getLogger(__name__)

login_manager = LoginManager()

bp = Blueprint("auth", __name__, url_prefix="/api")


@login_manager.user_loader
def load_user(user_id):
    try:
        return storage.get_user(int(user_id))
    except (TypeError, ValueError):
        return None


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({"message": "Unauthorized"}), 401


def _start_session(user):
    regenerate_session(session)
    login_user(user)
    session.permanent = True


def _derive_username(identity):
    if identity.email:
        base = identity.email.split("@")[0]
    else:
        base = identity.display_name or "user"
    base = re.sub(r"[^a-z0-9._-]+", "", base.lower().replace(" ", ".")) or "user"

    candidate = base
    suffix = 2
    while storage.get_user_by_username(candidate) is not None:
        candidate = f"{base}{suffix}"
        suffix += 1
    return candidate


@bp.route("/register", methods=["POST"])
def register():
    credentials = Credentials.model_validate(request.get_json(silent=True) or {})
    if storage.get_user_by_username(credentials.username) is not None:
        return jsonify({"message": "Username already exists"}), 400

    user = storage.create_user(credentials.username, hash_password(credentials.password))
    logger.info("Registered user %s", user.id)
    _start_session(user)
    return jsonify(user.to_dict()), 201


@bp.route("/login", methods=["POST"])
def login():
    credentials = Credentials.model_validate(request.get_json(silent=True) or {})
    user = storage.get_user_by_username(credentials.username)
    if user is None or not verify_password(credentials.password, user.password):
        return jsonify({"message": "Invalid username or password"}), 401

    _start_session(user)
    return jsonify(user.to_dict())


@bp.route("/firebase-auth", methods=["POST"])
def federated_login():
    """Bind a provider identity to an account, provisioning one on first sign-in."""
    identity = FederatedIdentity.model_validate(request.get_json(silent=True) or {})
    profile = {
        "display_name": identity.display_name,
        "email": identity.email,
        "photo_url": identity.photo_url,
    }

    user = storage.get_user_by_firebase_uid(identity.uid)
    if user is None:
        user = storage.create_user(
            _derive_username(identity),
            hash_password(random_password()),
            firebase_uid=identity.uid,
            **profile,
        )
        logger.info("Provisioned user %s for federated identity", user.id)
    else:
        user = storage.update_user(user.id, **profile)

    _start_session(user)
    return jsonify(user.to_dict())


@bp.route("/logout", methods=["POST"])
def logout():
    logout_user()
    session.clear()
    return jsonify({"message": "Logged out"})


@bp.route("/user", methods=["GET"])
@login_required
def get_current_user():
    return jsonify(current_user.to_dict())
