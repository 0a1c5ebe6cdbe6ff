# reset_api/cors.py
"""
Cross-origin policy for the API.

The decision logic lives in `CorsPolicy` so it can be evaluated without a
running app. `install_cors()` wires it into Flask: a `before_request` gate
rejects disallowed origins, and flask-cors emits the response headers for
everything that gets through.
"""

import logging
from flask import g, request
from flask_cors import CORS
from .errors import CorsOriginRejected

logger = logging.getLogger(__name__)

WILDCARD = '*'

ALLOWED_METHODS = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']

# Headers flask-cors may set; stripped again from rejected responses
CORS_RESPONSE_HEADERS = (
    'Access-Control-Allow-Origin',
    'Access-Control-Allow-Credentials',
    'Access-Control-Allow-Methods',
    'Access-Control-Allow-Headers',
    'Access-Control-Expose-Headers',
    'Access-Control-Max-Age',
)


def _split_scheme(value):
    """Splits 'https://host:port' into ('https', 'host:port'). Scheme is None if absent."""
    scheme, sep, rest = value.partition('://')
    if not sep:
        return None, value.lower()
    return scheme.lower(), rest.lower()


class CorsPolicy:
    """
    Decides whether a cross-origin request may proceed.

    Rules, in order:
        1. Requests without an Origin header (curl, server-to-server) pass.
        2. Outside production every origin passes.
        3. In production with an empty allow-list every origin passes.
           This is unsafe and is logged as a warning at startup.
        4. Otherwise the origin must match an allow-list entry by exact
           equality, the literal '*' entry, or as a subdomain of the entry
           once schemes are stripped.
    """

    def __init__(self, allowed_origins=(), production=False):
        self._allowed_origins = tuple(allowed_origins)
        self._production = production

    @classmethod
    def from_settings(cls, settings):
        return cls(settings.allowed_origins, production=settings.is_production)

    @property
    def allowed_origins(self):
        return self._allowed_origins

    @property
    def production(self):
        return self._production

    @property
    def allows_all(self):
        """True when no origin can ever be rejected."""
        return (not self._production
                or not self._allowed_origins
                or WILDCARD in self._allowed_origins)

    def is_allowed(self, origin):
        if not origin:
            return True
        if not self._production:
            return True
        if not self._allowed_origins:
            return True

        for entry in self._allowed_origins:
            if entry == WILDCARD or entry == origin:
                return True
            if self._matches_suffix(origin, entry):
                return True
        return False

    @staticmethod
    def _matches_suffix(origin, entry):
        """
        Subdomain match: 'https://app.example.com' matches entry 'example.com'
        and entry 'https://example.com', but not 'http://example.com' and not
        'https://badexample.com'.
        """
        origin_scheme, origin_host = _split_scheme(origin)
        entry_scheme, entry_host = _split_scheme(entry.rstrip('/'))

        if not entry_host:
            return False
        if entry_scheme is not None and entry_scheme != origin_scheme:
            return False

        return origin_host == entry_host or origin_host.endswith('.' + entry_host)

    def check(self, origin):
        """
        Raises:
            CorsOriginRejected: If the origin is not allowed.
        """
        if self.is_allowed(origin):
            return
        logger.error(f"CORS blocked: {origin}")
        raise CorsOriginRejected(origin)

    def describe(self):
        """Human readable summary for the startup log."""
        if not self._production:
            return "All origins (development mode)"
        if not self._allowed_origins:
            return "All origins (no allow-list configured)"
        if self.allows_all:
            return "All origins (wildcard entry)"
        return ', '.join(self._allowed_origins)

    def __repr__(self):
        return f"CorsPolicy(allowed_origins={self._allowed_origins!r}, production={self._production!r})"


def install_cors(app, policy):
    """Attaches the policy and flask-cors to the app."""

    app.logger.info(f"Allowed CORS origins: {policy.describe()}")
    if policy.production and not policy.allowed_origins:
        app.logger.warning(
            "FRONTEND_URL is not set in production - accepting requests from ALL origins. "
            "Set FRONTEND_URL or CORS_ALLOWED_ORIGINS to restrict access."
        )

    @app.before_request
    def enforce_cors_policy():
        try:
            policy.check(request.headers.get('Origin'))
        except CorsOriginRejected:
            g.cors_rejected = True
            raise

    # Registered before flask-cors so that it runs after it
    @app.after_request
    def strip_cors_headers_from_rejections(response):
        if g.get('cors_rejected'):
            for header in CORS_RESPONSE_HEADERS:
                response.headers.pop(header, None)
        return response

    # Every origin reaching flask-cors has passed the gate, so reflect it.
    # send_wildcard stays off: credentials need the concrete origin echoed.
    CORS(app, supports_credentials=True, methods=ALLOWED_METHODS)

    app.extensions['cors_policy'] = policy
    return policy
