# reset_api/api/user.py
# User management, mounted at /api/user.
# Request handlers are registered on this blueprint by the user feature;
# the server only owns the mount point.

from flask import Blueprint

bp = Blueprint('user', __name__)
