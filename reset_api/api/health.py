# reset_api/api/health.py

from flask import Blueprint, jsonify

bp = Blueprint('health', __name__)


@bp.route('/health', methods=['GET'])
def health_route():
    """
    Liveness check. Reports that the process is up.

    The database is deliberately not consulted: this endpoint answers 200
    even while MongoDB is unreachable.
    """
    return jsonify({"status": "OK", "message": "Server is running"}), 200
