"""
Current snapshot holder.

The application keeps exactly one reference to the current Snapshot per
process. It is replaced wholesale after every successful backend mutation and
whenever it is older than SNAPSHOT_MAX_AGE_SECONDS; it is never modified in
place.
"""

import logging
import threading
import time
from typing import Optional

from flask import current_app

from backend import ACTION_INIT, get_backend
from models.snapshot import Snapshot, build_snapshot
from utils.datetime_helpers import get_now, get_timezone

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'studio_snapshot'


class SnapshotStore:
    """Holds the current snapshot and when it was fetched."""

    def __init__(self, max_age_seconds: float = 60):
        self.max_age_seconds = max_age_seconds
        self._snapshot: Optional[Snapshot] = None
        self._fetched_at: Optional[float] = None
        self._lock = threading.Lock()

    @property
    def current(self) -> Optional[Snapshot]:
        return self._snapshot

    def is_stale(self) -> bool:
        if self._snapshot is None:
            return True
        if not self.max_age_seconds:
            return False
        return time.monotonic() - self._fetched_at > self.max_age_seconds

    def replace(self, snapshot: Snapshot) -> None:
        with self._lock:
            self._snapshot = snapshot
            self._fetched_at = time.monotonic()

    def clear(self) -> None:
        with self._lock:
            self._snapshot = None
            self._fetched_at = None


def init_snapshot_store(app) -> None:
    """Attach an empty SnapshotStore to the app."""
    app.extensions[EXTENSION_KEY] = SnapshotStore(
        app.config.get('SNAPSHOT_MAX_AGE_SECONDS', 60)
    )


def get_store() -> SnapshotStore:
    return current_app.extensions[EXTENSION_KEY]


def reload_snapshot() -> Snapshot:
    """
    Fetch the full data set from the backend and make it current.

    Returns:
        The new Snapshot

    Raises:
        BackendError: The init call failed; the previous snapshot stays current
    """
    result = get_backend().call(ACTION_INIT)
    snapshot = build_snapshot(result, loaded_at=get_now(), tz=get_timezone())
    get_store().replace(snapshot)
    logger.debug(
        "Snapshot loaded: %d slots, %d packages, %d customers",
        len(snapshot.slots), len(snapshot.templates), len(snapshot.customers)
    )
    return snapshot


def get_snapshot(force: bool = False) -> Snapshot:
    """
    Get the current snapshot, reloading it when missing or stale.

    Args:
        force: Reload even if the cached snapshot is fresh

    Returns:
        Snapshot
    """
    store = get_store()
    if force or store.is_stale():
        return reload_snapshot()
    return store.current
