# init_db.py (in backend folder)

from sqlalchemy import inspect

from messagely.infra.database import check_connection, engine, init_db
from messagely.utils.logger import setup_logger


def reset_db():
    """Drop and recreate all tables"""
    if not check_connection(engine):
        raise SystemExit("❌ Cannot reach the database, check DATABASE_URL / DB_* settings")

    print("⚠️  Dropping and recreating all tables...")
    init_db(engine, drop=True)
    print("✅ Database initialized successfully!")

    # Print created tables
    inspector = inspect(engine)
    tables = inspector.get_table_names()
    print(f"\nCreated tables: {tables}")

    for table in tables:
        columns = inspector.get_columns(table)
        print(f"\n{table}:")
        for col in columns:
            print(f"  - {col['name']}: {col['type']}")


if __name__ == "__main__":
    setup_logger()
    reset_db()
