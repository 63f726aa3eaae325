"""
Database initialization script
Creates all tables and optionally resets them
"""
import argparse

from loguru import logger

from storefront.config import get_settings
from storefront.utils.database import create_tables, drop_tables
from storefront.utils.logger import setup_logging


def init_database():
    """Initialize the database by creating all tables"""
    logger.info("Creating database tables...")
    create_tables()
    logger.info("Database tables created successfully!")


def reset_database():
    """Reset the database by dropping and recreating all tables"""
    logger.info("Dropping existing tables...")
    drop_tables()
    logger.info("Creating new tables...")
    create_tables()
    logger.info("Database reset successfully!")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Database management script")
    parser.add_argument("--init", action="store_true", help="Initialize database")
    parser.add_argument("--reset", action="store_true", help="Reset database")

    args = parser.parse_args(argv)

    if args.reset or args.init:
        settings = get_settings()
        setup_logging(settings.log_dir, settings.log_level, name="init_db")

    if args.reset:
        reset_database()
    elif args.init:
        init_database()
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
