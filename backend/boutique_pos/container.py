# Overview: Explicitly constructed service objects shared by the application.

from __future__ import annotations

from dataclasses import dataclass

from flask import Flask, current_app, has_app_context

from .services.auth_service import CredentialVerifier, StaticCredentialVerifier
from .services.cart_service import Cart
from .services.catalog_service import CatalogStore
from .services.report_service import ReportService
from .services.session_service import SessionService
from .services.settings_service import SettingsService
from .services.storage_service import LocalStorage

EXTENSION_KEY = "boutique_pos"


@dataclass
class PosServices:
    storage: LocalStorage
    verifier: CredentialVerifier
    session: SessionService
    catalog: CatalogStore
    cart: Cart
    reports: ReportService
    settings: SettingsService

    def load(self) -> None:
        """Restore persisted state. Requires an application context."""
        self.session.load()
        self.catalog.load()

    def close(self) -> None:
        self.cart.close()
        self.catalog.close()
        self.session.close()


def build_services(app: Flask, verifier: CredentialVerifier | None = None) -> PosServices:
    config = app.config
    storage = LocalStorage()
    verifier = verifier or StaticCredentialVerifier(rounds=config["BCRYPT_ROUNDS"])
    session = SessionService(storage, verifier, login_delay=config["LOGIN_DELAY_SECONDS"])
    catalog = CatalogStore(
        storage,
        seed=config["SEED_CATALOG"],
        low_stock_threshold=config["LOW_STOCK_THRESHOLD"],
    )
    cart = Cart(catalog, session)
    reports = ReportService(
        cart,
        session,
        top_n=config["TOP_PRODUCTS_LIMIT"],
        export_dir=config["REPORT_EXPORT_DIR"],
        low_stock_threshold=config["LOW_STOCK_THRESHOLD"],
        clock=cart.clock,
    )
    settings = SettingsService(storage, session, verifier)
    return PosServices(
        storage=storage,
        verifier=verifier,
        session=session,
        catalog=catalog,
        cart=cart,
        reports=reports,
        settings=settings,
    )


def get_services() -> PosServices:
    """
    Services of the current application.

    Raises RuntimeError outside an application context or when the app was
    not built by create_app(); both are construction errors.
    """
    if not has_app_context():
        raise RuntimeError("get_services() must be used within an application context")
    services = current_app.extensions.get(EXTENSION_KEY)
    if services is None:
        raise RuntimeError("Boutique POS services are not initialized; use create_app()")
    return services
