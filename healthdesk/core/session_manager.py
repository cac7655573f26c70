"""
Document session lifecycle.

One SessionManager exists per process. It is built once by the service
container and injected into request handlers; the start-up clear runs at
most once even when several callers race to trigger it.

Dependencies: healthdesk.boundary.vdb, healthdesk.models.session
System role: Session domain business logic
"""

import logging
import secrets
import string
import threading
import time

from healthdesk.boundary.vdb.vector_store_client import VectorStoreClient
from healthdesk.models.session import SessionConfig, SessionInfo

logger = logging.getLogger(__name__)

_SUFFIX_ALPHABET = string.digits + string.ascii_lowercase


def _now_ms() -> int:
    return int(time.time() * 1000)


def new_session_id(now_ms: int | None = None) -> str:
    """Build 'session_{epoch_ms}_{9 base36 chars}'."""
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(9))
    return f"session_{now_ms if now_ms is not None else _now_ms()}_{suffix}"


def created_at_ms(session_id: str) -> int:
    """Recover the creation timestamp embedded in a session id."""
    try:
        return int(session_id.split("_")[1])
    except (IndexError, ValueError) as e:
        raise ValueError(f"Malformed session id: {session_id}") from e


class SessionManager:
    """Owns the session id and the document clearing policy."""

    def __init__(
        self,
        store: VectorStoreClient,
        config: SessionConfig | None = None,
    ) -> None:
        """
        Initialize session manager.

        Args:
            store: Vector store whose documents belong to the session
            config: Clearing policy (clear everything on start by default)
        """
        self._store = store
        self._config = config or SessionConfig()
        self._session_id = new_session_id()
        self._lock = threading.Lock()
        self._initialized = False

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self, config: SessionConfig | None = None) -> None:
        """
        Apply config and run the start-up clear if enabled.

        Args:
            config: New clearing policy (keeps the current one if None)
        """
        with self._lock:
            if config is not None:
                self._config = config
            self._run_start_clear()
            self._initialized = True

    def ensure_initialized(self) -> None:
        """Run initialize() once; later and concurrent callers are no-ops."""
        with self._lock:
            if self._initialized:
                return
            self._run_start_clear()
            self._initialized = True

    def _run_start_clear(self) -> None:
        before = self._store.document_count()
        if self._config.clear_on_start and self._config.clear_method == "all":
            self._store.clear_all()
        after = self._store.document_count()
        logger.info(
            "Session initialized",
            extra={
                "session_id": self._session_id,
                "clear_method": self._config.clear_method,
                "clear_on_start": self._config.clear_on_start,
                "documents_before": before,
                "documents_after": after,
            },
        )

    def get_info(self) -> SessionInfo:
        """Session state with a live document count."""
        return SessionInfo(
            session_id=self._session_id,
            document_count=self._store.document_count(),
            config=self._config,
            uptime_ms=max(_now_ms() - created_at_ms(self._session_id), 0),
        )

    def clear_current(self) -> None:
        """Delete every document regardless of the configured clear method."""
        with self._lock:
            self._store.clear_all()
        logger.info("Session documents cleared", extra={"session_id": self._session_id})
