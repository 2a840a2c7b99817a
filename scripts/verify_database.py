"""
Database connectivity check.

Opens the configured database and runs a trivial query. Exits 0 when the
database answers, 1 otherwise.
"""

import sys

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from backend.app.core.config import settings
from backend.app.db.session import build_engine


def check_db(database_url: str) -> bool:
    engine = build_engine(database_url)
    print(f"Testing connection to: {engine.url.render_as_string(hide_password=True)}")
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        print(f"❌ Connection Failed: {e}")
        return False
    finally:
        engine.dispose()
    
    print("✅ Connection Successful!")
    return True


if __name__ == "__main__":
    sys.exit(0 if check_db(settings.database_url) else 1)
