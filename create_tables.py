"""Create the schema directly from the ORM models, for local development without Alembic."""
import argparse

from loguru import logger

from app.db import models  # noqa: F401  # Registers the tables on Base.metadata
from app.db.base import Base
from app.db.session import engine


def main() -> None:
    parser = argparse.ArgumentParser(description="Create GreenThumb database tables")
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop existing users, plants and push subscriptions first",
    )
    args = parser.parse_args()

    if args.drop:
        logger.warning("Dropping tables", url=engine.url.render_as_string(hide_password=True))
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created", tables=sorted(Base.metadata.tables))


if __name__ == "__main__":
    main()
