# reset_api/api/__init__.py
"""
HTTP route collections, one blueprint per module.

- health.py: liveness endpoint (/api/health)
- password_reset.py: password reset flow (/api/password-reset)
- user.py: user management (/api/user)
"""
