"""
Database module - relational (SQLAlchemy) and MongoDB connections.
"""
from careers.db.database import get_db_session, execute_raw_sql, test_database_connection
from careers.db.mongodb import get_collection, test_mongo_connection

__all__ = [
    "get_db_session",
    "execute_raw_sql",
    "test_database_connection",
    "get_collection",
    "test_mongo_connection"
]
