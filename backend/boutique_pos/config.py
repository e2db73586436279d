# backend/boutique_pos/config.py
from __future__ import annotations
import os


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # Local storage blobs live in backend/instance/boutique.sqlite3
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///boutique.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Simulated round-trip for the mock credential check
    LOGIN_DELAY_SECONDS = float(os.environ.get("LOGIN_DELAY_SECONDS", "0.5"))
    BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", "12"))

    LOW_STOCK_THRESHOLD = int(os.environ.get("LOW_STOCK_THRESHOLD", "5"))
    TOP_PRODUCTS_LIMIT = int(os.environ.get("TOP_PRODUCTS_LIMIT", "5"))
    REPORT_EXPORT_DIR = os.environ.get("REPORT_EXPORT_DIR", "exports")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Seed the demo catalog when storage holds no products yet
    SEED_CATALOG = os.environ.get("SEED_CATALOG", "true").lower() == "true"
