# Overview: Service-layer operations for local storage; keyed JSON blobs in SQLite.

from __future__ import annotations

import json
import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..models import StorageEntry

logger = logging.getLogger(__name__)


PRODUCTS_KEY = "boutique.products"
CATEGORIES_KEY = "boutique.categories"
USER_KEY = "boutique.user"
SETTINGS_KEY = "boutique.settings"


class LocalStorage:
    """
    Key/value store of JSON snapshots.

    Every write replaces the whole value for its key. Callers must run
    inside an application context.
    """

    def _commit(self, key: str) -> None:
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("Storage write failed for %s", key)
            raise

    def get_item(self, key: str) -> Any | None:
        entry = db.session.get(StorageEntry, key)
        if entry is None:
            return None
        return json.loads(entry.value_json)

    def set_item(self, key: str, value: Any) -> None:
        payload = json.dumps(value)
        entry = db.session.get(StorageEntry, key)
        if entry is None:
            db.session.add(StorageEntry(key=key, value_json=payload))
        else:
            entry.value_json = payload
        self._commit(key)
        logger.debug("Stored %s (%d bytes)", key, len(payload))

    def remove_item(self, key: str) -> None:
        entry = db.session.get(StorageEntry, key)
        if entry is None:
            return
        db.session.delete(entry)
        self._commit(key)

    def clear(self) -> None:
        db.session.query(StorageEntry).delete()
        self._commit("*")

    def keys(self) -> list[str]:
        return [key for (key,) in db.session.query(StorageEntry.key).order_by(StorageEntry.key.asc())]
