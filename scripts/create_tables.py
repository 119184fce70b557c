"""
Create the Tracklink tables.

Connects with the same settings as the API (DATABASE_URL, or Cloud SQL via
INSTANCE_CONNECTION_NAME / DB_USER / DB_NAME) and creates any missing tables.
"""

import sys

from dotenv import load_dotenv

from tracklink.config import Settings
from tracklink.db import DatabaseConnection
from tracklink.db.tables import metadata


def main():
    """Main function."""
    load_dotenv()
    settings = Settings.from_env()

    print("🚀 Tracklink Schema Tool")
    print("=" * 50)

    if not settings.is_database_configured:
        print("❌ Database not configured")
        print("   Set DATABASE_URL, or INSTANCE_CONNECTION_NAME and DB_USER")
        sys.exit(1)

    print("\nTables:")
    for table in metadata.sorted_tables:
        print(f"  - {table.name}")

    print("\n⚠️  This will create missing tables in:")
    if settings.database_url:
        print(f"   URL: {settings.database_url}")
    else:
        print(f"   Instance: {settings.instance_connection_name}")
        print(f"   Database: {settings.db_name}")
        print(f"   User: {settings.db_user}")

    response = input("\nProceed? (yes/no): ").strip().lower()
    if response not in ["yes", "y"]:
        print("❌ Cancelled")
        sys.exit(0)

    try:
        DatabaseConnection.initialize(
            database_url=settings.database_url,
            instance_connection_name=settings.instance_connection_name,
            db_name=settings.db_name,
            db_user=settings.db_user,
        )
        DatabaseConnection.create_tables()
    except Exception as e:
        print(f"❌ Failed to create tables: {e}")
        sys.exit(1)
    finally:
        DatabaseConnection.close()

    print("\n" + "=" * 50)
    print("✅ Tables created successfully!")


if __name__ == "__main__":
    main()
