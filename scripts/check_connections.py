#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify both database connections are working.
Usage: python scripts/check_connections.py
"""
import sys
sys.path.insert(0, '.')

from careers.db.database import test_database_connection
from careers.db.mongodb import test_mongo_connection
from careers.core.config import get_settings


def main():
    settings = get_settings()
    print("=" * 50)
    print("CAMPUS CAREERS - CONNECTION CHECK")
    print("=" * 50)

    print("\n[1] Checking relational database...")
    if settings.database_url:
        print(f"    URL: {settings.database_url}")
    else:
        print(f"    URL: postgresql://{settings.postgres_user}:****@{settings.postgres_host}:{settings.postgres_port}/{settings.postgres_db}")
    ok_db = test_database_connection()
    print("    Database: CONNECTED" if ok_db else "    Database: FAILED")

    print("\n[2] Checking MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    ok_mongo = test_mongo_connection()
    print("    MongoDB: CONNECTED" if ok_mongo else "    MongoDB: FAILED")

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)
    return 0 if ok_db and ok_mongo else 1


if __name__ == "__main__":
    sys.exit(main())
