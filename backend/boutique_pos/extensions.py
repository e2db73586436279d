# Overview: Flask extension instances for the local storage database.

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
