from __future__ import annotations

from ..extensions import db
from boutique_pos.time_utils import utcnow


class StorageEntry(db.Model):
    """
    One keyed blob of local storage.

    WHY: Each value is a full JSON snapshot that replaces the previous one;
    there are no partial updates and no schema versions.
    """
    __tablename__ = "storage_entries"

    key = db.Column(db.String(128), primary_key=True)
    value_json = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)
