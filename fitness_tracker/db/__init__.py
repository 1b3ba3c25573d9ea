"""Database package: engine, session, base, transactions."""

from fitness_tracker.db.session import Database, get_db
from fitness_tracker.db.transaction import transaction

__all__ = ["Database", "get_db", "transaction"]
