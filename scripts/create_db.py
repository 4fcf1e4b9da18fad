"""Create the database, its tables, and optionally a first company admin.

Environment:
    DATABASE_URL            target database (a PostgreSQL database is created if missing)
    BOOTSTRAP_COMPANY_NAME  optional company to register
    BOOTSTRAP_COMPANY_CODE
    BOOTSTRAP_ADMIN_EMAIL   optional admin user for that company
    BOOTSTRAP_ADMIN_PASSWORD
"""

import logging
import os
from urllib.parse import urlparse

import psycopg2
from dotenv import load_dotenv
from psycopg2 import sql

load_dotenv()

from dealerhub.core.logging_config import configure_logging  # noqa: E402
from dealerhub.database.db import get_db_session, get_engine  # noqa: E402
from dealerhub.models import Base  # noqa: E402
from dealerhub.repositories import CompanyRepository, UserRepository  # noqa: E402
from dealerhub.services.company_service import CompanyService  # noqa: E402
from dealerhub.services.user_service import UserService  # noqa: E402

logger = logging.getLogger("scripts.create_db")


def create_database(db_url: str) -> None:
    """Create the PostgreSQL database named in ``db_url`` when it does not exist."""
    result = urlparse(db_url.replace("+psycopg2", ""))
    database = result.path[1:]
    conn = psycopg2.connect(
        database="postgres",
        user=result.username,
        password=result.password,
        host=result.hostname,
        port=result.port,
    )
    conn.autocommit = True
    try:
        with conn.cursor() as cursor:
            cursor.execute("SELECT 1 FROM pg_catalog.pg_database WHERE datname = %s", (database,))
            if cursor.fetchone():
                logger.info("create_db.exists", extra={"event": "create_db.exists"})
                return
            cursor.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(database)))
            logger.info("create_db.created", extra={"event": "create_db.created"})
    finally:
        conn.close()


def create_tables() -> None:
    Base.metadata.create_all(bind=get_engine())
    logger.info("create_db.tables_created", extra={"event": "create_db.tables_created"})


def bootstrap_admin() -> None:
    company_name = os.getenv("BOOTSTRAP_COMPANY_NAME")
    company_code = os.getenv("BOOTSTRAP_COMPANY_CODE")
    email = os.getenv("BOOTSTRAP_ADMIN_EMAIL")
    password = os.getenv("BOOTSTRAP_ADMIN_PASSWORD")
    if not (company_name and company_code):
        return

    with get_db_session() as db:
        company = CompanyRepository(db).find_by_name_and_code(company_name, company_code)
        if company is None:
            company = CompanyService(db).register(company_name, company_code)
        if not (email and password) or UserRepository(db).find_by_email(email) is not None:
            return
        user = UserService(db).register(
            name="Administrator",
            email=email,
            employee_number="ADMIN",
            phone_number="010-0000-0000",
            password=password,
            password_confirmation=password,
            company_name=company.name,
            company_code=company.code,
            is_admin=True,
        )
        logger.info(
            "create_db.admin_bootstrapped",
            extra={"event": "create_db.admin_bootstrapped", "company_id": company.id, "user_id": user.id},
        )


def main() -> None:
    configure_logging()
    db_url = os.getenv("DATABASE_URL", "")
    if db_url.startswith("postgresql"):
        create_database(db_url)
    create_tables()
    bootstrap_admin()


if __name__ == "__main__":
    main()
