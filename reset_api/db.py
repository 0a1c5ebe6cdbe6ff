# reset_api/db.py
"""
MongoDB connection bootstrap.

`mongo` follows the Flask extension pattern (`mongo.init_app(app, settings)`).
The first round trip to the server happens on a background thread so a slow
or unreachable database never delays startup: the outcome is logged and
recorded in `mongo.status`, and the HTTP server keeps running either way.
There is no retry; route handlers that need the database fail on their own
when it is unreachable.
"""

import logging
import threading
from pymongo import MongoClient
from pymongo.errors import PyMongoError
from .config import DEFAULT_DATABASE_NAME

logger = logging.getLogger(__name__)

DISCONNECTED = 'disconnected'
CONNECTING = 'connecting'
CONNECTED = 'connected'
FAILED = 'failed'


class Mongo:

    def __init__(self):
        self._client = None
        self.status = DISCONNECTED
        self.error = None
        self._lock = threading.Lock()
        self._finished = threading.Event()
        self._thread = None

    def init_app(self, app, settings):
        """Creates the client and starts the connection attempt without blocking."""
        # One event per attempt, so a superseded thread cannot finish the new one
        finished = threading.Event()
        with self._lock:
            self._finished.set()
            self._finished = finished
            self.status = CONNECTING
            self.error = None
        app.extensions['mongo'] = self

        try:
            # MongoClient connects lazily; this does not touch the network
            client = MongoClient(
                settings.mongodb_uri,
                serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
            )
        except (PyMongoError, ValueError) as e:
            # Malformed URI, port or options. Logged like any other connection error.
            with self._lock:
                self._client = None
                self._record_failure(e)
            finished.set()
            return

        with self._lock:
            self._client = client

        self._thread = threading.Thread(
            target=self._connect,
            args=(client, finished),
            name='mongo-connect',
            daemon=True,
        )
        self._thread.start()

    def _connect(self, client, finished):
        try:
            client.admin.command('ping')
        except Exception as e:
            with self._lock:
                # Ignored when superseded by a later init_app() or closed
                if client is self._client:
                    self._record_failure(e)
        else:
            with self._lock:
                if client is self._client:
                    self.status = CONNECTED
                    logger.info("MongoDB connected successfully")
        finally:
            finished.set()

    def _record_failure(self, error):
        self.status = FAILED
        self.error = error
        logger.error(f"MongoDB connection error: {error}")

    @property
    def client(self):
        """The MongoClient. Raises RuntimeError before init_app() or after a failed construction."""
        client = self._client
        if client is None:
            raise RuntimeError("MongoDB client is not available. Was init_app() called?")
        return client

    @property
    def database(self):
        """The database named in the URI, or 'passwordreset' when it names none."""
        return self.client.get_default_database(default=DEFAULT_DATABASE_NAME)

    def wait(self, timeout=None):
        """Blocks until the connection attempt has finished. Returns False on timeout."""
        return self._finished.wait(timeout)

    def close(self):
        with self._lock:
            client, self._client = self._client, None
            self.status = DISCONNECTED
            self._finished.set()
        if client is not None:
            client.close()


mongo = Mongo()
