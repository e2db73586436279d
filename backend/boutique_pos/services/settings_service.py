# Overview: Service-layer operations for store settings; admin/manager only.

from __future__ import annotations

import logging

from ..decorators import require_role
from ..models import Identity, StoreSettings
from ..permissions import MANAGE_SETTINGS, VIEW_USER_ACCESS
from ..validation import ValidationError
from .auth_service import CredentialVerifier
from .session_service import SessionService
from .storage_service import SETTINGS_KEY, LocalStorage

logger = logging.getLogger(__name__)

BOOL_FIELDS = {"receipt_show_logo", "receipt_show_tax_details"}


def load_store_settings(storage: LocalStorage) -> StoreSettings:
    """Stored settings merged over defaults. No role check (receipts need it)."""
    saved = storage.get_item(SETTINGS_KEY)
    if not saved:
        return StoreSettings()
    return StoreSettings.from_dict(saved)


def _clean_changes(changes: dict) -> dict:
    unknown = sorted(set(changes) - StoreSettings.field_names())
    if unknown:
        raise ValidationError(f"Unknown settings: {', '.join(unknown)}")

    cleaned = {}
    for key, value in changes.items():
        if key in BOOL_FIELDS:
            if not isinstance(value, bool):
                raise ValidationError(f"{key} must be true or false")
            cleaned[key] = value
        else:
            if value is None:
                raise ValidationError(f"{key} cannot be null")
            cleaned[key] = str(value).strip()
    return cleaned


class SettingsService:
    def __init__(self, storage: LocalStorage, session: SessionService, verifier: CredentialVerifier):
        self.storage = storage
        self.session = session
        self.verifier = verifier

    @require_role(MANAGE_SETTINGS, "view settings")
    def get_settings(self) -> StoreSettings:
        return load_store_settings(self.storage)

    @require_role(MANAGE_SETTINGS, "change settings")
    def save_settings(self, changes: dict) -> StoreSettings:
        cleaned = _clean_changes(changes)
        merged = load_store_settings(self.storage).to_dict()
        merged.update(cleaned)
        settings = StoreSettings.from_dict(merged)
        self.storage.set_item(SETTINGS_KEY, settings.to_dict())
        logger.info("Settings saved by %s: %s", self.session.current_user.email, ", ".join(sorted(cleaned)))
        return settings

    @require_role(VIEW_USER_ACCESS, "view user accounts")
    def list_users(self) -> list[Identity]:
        return self.verifier.list_identities()
