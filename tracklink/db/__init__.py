"""
Tracklink Database Module.

Provides database connection management and repositories for the tracking store.
Uses SQLAlchemy Core with Cloud SQL Python Connector.
"""

from tracklink.db.connection import DatabaseConnection
from tracklink.db.unit_of_work import UnitOfWork

__all__ = ["DatabaseConnection", "UnitOfWork"]
