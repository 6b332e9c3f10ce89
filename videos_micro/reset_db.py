"""
Database Reset Script

Drops every table the service owns and recreates them empty.
"""

import sys
import logging
from pathlib import Path

from sqlalchemy import MetaData

# Add this directory to Python path
sys.path.insert(0, str(Path(__file__).parent))

logger = logging.getLogger(__name__)


def reset_database(engine=None) -> list:
    """Drop and recreate all tables, returning the table names now present"""
    from models.other_models import Base

    if engine is None:
        from db.database import engine

    logger.info("Dropping all tables...")
    Base.metadata.drop_all(bind=engine)

    logger.info("Recreating database structure...")
    Base.metadata.create_all(bind=engine)

    metadata = MetaData()
    metadata.reflect(bind=engine)
    tables = sorted(metadata.tables.keys())

    logger.info(f"Database reset complete, {len(tables)} tables: {', '.join(tables)}")
    return tables


def main():
    print("DATABASE RESET TOOL")
    print("This will DELETE ALL DATA in your database!")
    print()

    response = input("Type 'RESET' to continue or anything else to cancel: ").strip()

    if response != 'RESET':
        print("Cancelled. Database unchanged.")
        return

    tables = reset_database()
    print(f"Database is now empty. Tables: {', '.join(tables)}")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
