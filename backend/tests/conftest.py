"""
Pytest fixtures for Boutique POS backend tests.

Provides an application on an in-memory SQLite storage database with no
login delay, plus the service container and signed-in sessions.
"""

import pytest

from boutique_pos import create_app, shutdown_app
from boutique_pos.container import get_services
from boutique_pos.extensions import db


def _build_app(tmp_path, **overrides):
    config = {
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'LOGIN_DELAY_SECONDS': 0,
        'BCRYPT_ROUNDS': 4,
        'REPORT_EXPORT_DIR': str(tmp_path / "exports"),
        'SEED_CATALOG': False,
    }
    config.update(overrides)
    return create_app(config)


@pytest.fixture(scope='function')
def app(tmp_path):
    """Application with an empty catalog."""
    app = _build_app(tmp_path)
    with app.app_context():
        yield app
        shutdown_app(app)
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def seeded_app(tmp_path):
    """Application whose catalog is seeded with the demo products."""
    app = _build_app(tmp_path, SEED_CATALOG=True)
    with app.app_context():
        yield app
        shutdown_app(app)
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def services(app):
    return get_services()


@pytest.fixture(scope='function')
def catalog(services):
    return services.catalog


@pytest.fixture(scope='function')
def cart(services):
    return services.cart


@pytest.fixture(scope='function')
def as_admin(services):
    return services.session.login("admin@boutique.com", "admin123")


@pytest.fixture(scope='function')
def as_manager(services):
    return services.session.login("manager@boutique.com", "manager123")


@pytest.fixture(scope='function')
def as_cashier(services):
    return services.session.login("cashier@boutique.com", "cashier123")


@pytest.fixture(scope='function')
def product_a(catalog):
    """Product A: stock 5, price 10.00."""
    return catalog.add_product({"name": "Product A", "price": "10.00", "stock": 5})
