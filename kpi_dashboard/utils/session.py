"""Session guard: credential checks, login/logout and the background expiry watcher."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

from kpi_dashboard.utils.config import SESSION_CHECK_SECONDS, SESSION_TTL_SECONDS
from kpi_dashboard.utils.constants import (
    FOOTBALL_DATA_KEY,
    ID_TOKEN_KEY,
    SESSION_TIME_KEY,
    TEAM_NAMES_KEY,
)
from kpi_dashboard.utils.storage import KeyValueStore

logger = logging.getLogger("kpi_dashboard")


def login(store: KeyValueStore, token: str, now: Optional[float] = None) -> None:
    """Store the credential and stamp the session start time."""
    token = (token or "").strip()
    if not token:
        raise ValueError("Token must not be empty")
    store.set(ID_TOKEN_KEY, token)
    store.set(SESSION_TIME_KEY, str(time.time() if now is None else now))
    logger.info("Session started")


def is_authorized(
    store: KeyValueStore,
    ttl_seconds: float = SESSION_TTL_SECONDS,
    now: Optional[float] = None,
) -> bool:
    """True when a token is stored and the session is younger than ttl_seconds."""
    token = store.get(ID_TOKEN_KEY)
    if not token:
        return False
    raw_time = store.get(SESSION_TIME_KEY)
    try:
        started = float(raw_time)
    except (TypeError, ValueError):
        return False
    now = time.time() if now is None else now
    return now - started < ttl_seconds


def get_token(store: KeyValueStore) -> Optional[str]:
    return store.get(ID_TOKEN_KEY) or None


def logout(store: KeyValueStore) -> None:
    """Drop the credential, cached data and every other stored key."""
    for key in (ID_TOKEN_KEY, SESSION_TIME_KEY, FOOTBALL_DATA_KEY, TEAM_NAMES_KEY):
        store.remove(key)
    store.clear()
    logger.info("Session ended, local storage cleared")


class SessionWatcher:
    """Polls an authorization check on a background thread.

    The check runs once immediately and then every ``interval`` seconds. On the
    first failed check ``expired`` is set, ``on_expired`` is called once and the
    loop ends. The owner must call ``stop()`` on teardown.

    Usage:
        watcher = SessionWatcher(lambda: is_authorized(store))
        watcher.start()
        ...
        if watcher.expired.is_set():
            redirect_to_login()
        watcher.stop()
    """

    def __init__(
        self,
        check: Callable[[], bool],
        on_expired: Optional[Callable[[], None]] = None,
        interval: float = SESSION_CHECK_SECONDS,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.check = check
        self.on_expired = on_expired
        self.interval = interval
        self.expired = threading.Event()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "SessionWatcher":
        if self.is_running:
            return self
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="session-watcher", daemon=True)
        self._thread.start()
        return self

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout if timeout is not None else self.interval + 1)
        self._thread = None

    def _run(self) -> None:
        while True:
            try:
                authorized = self.check()
            except Exception:
                logger.exception("Session check failed, treating session as expired")
                authorized = False
            if not authorized:
                logger.info("Session expired")
                self.expired.set()
                if self.on_expired is not None:
                    self.on_expired()
                return
            if self._stop.wait(self.interval):
                return

    def __enter__(self) -> "SessionWatcher":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
