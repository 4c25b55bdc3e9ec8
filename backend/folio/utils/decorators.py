from functools import wraps
from flask import current_app, g, jsonify
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request
from folio.content.validation import validate_section_key
from folio.extensions import db
from folio.models.user import AdminUser

def admin_required(fn):
    """
    Resolve the JWT subject to an active admin and expose it as
    ``g.current_user``.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()

        if get_jwt().get("role") != "admin":
            return jsonify({"error": "Insufficient permissions"}), 403

        user = db.session.get(AdminUser, int(get_jwt_identity()))
        if not user or not user.is_active:
            return jsonify({"error": "Admin account missing or disabled"}), 401

        g.current_user = user
        return fn(*args, **kwargs)
    return wrapper

def section_known(fn):
    """
    Reject unknown section keys before the view runs.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        validate_section_key(kwargs["section"], current_app.config["CONTENT_SECTIONS"])
        return fn(*args, **kwargs)
    return wrapper
