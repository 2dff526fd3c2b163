import logging
import re
from pathlib import Path

from sqlmodel import SQLModel, create_engine

from .config import get_config

logger = logging.getLogger(__name__)

config = get_config()

connect_args = {"check_same_thread": False} if "sqlite" in config.database.url else {}
engine = create_engine(config.database.url, echo=False, connect_args=connect_args)


def init_db(target_engine=None) -> None:
    # Register the key-value table with SQLModel metadata
    from ..models.kv import KeyValueEntry  # noqa: F401

    target = target_engine or engine

    # Ensure the database directory exists for file-backed SQLite
    match = re.search(r"sqlite:///(.+)", str(target.url))
    if match and match.group(1) != ":memory:":
        Path(match.group(1)).parent.mkdir(parents=True, exist_ok=True)

    SQLModel.metadata.create_all(target)
    logger.debug("Database ready at %s", target.url)
