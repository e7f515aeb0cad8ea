from functools import wraps
from flask import g, jsonify
from flask_jwt_extended import verify_jwt_in_request
from portfolio.store import get_store

def admin_required(fn):
    """Any signed-in operator is an admin; there are no finer roles."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()

        session = get_store().get_session()
        if session is None:
            return jsonify({"error": "AuthError", "message": "Not signed in"}), 401

        g.current_session = session
        return fn(*args, **kwargs)
    return wrapper

def confirmed(args):
    """Destructive actions are only carried out with ``?confirm=true``."""
    return str(args.get("confirm", "")).lower() in ("1", "true", "yes")
