# reset_api/api/password_reset.py
# Password reset flow, mounted at /api/password-reset.
# Request handlers are registered on this blueprint by the password reset
# feature; the server only owns the mount point.

from flask import Blueprint

bp = Blueprint('password_reset', __name__)
