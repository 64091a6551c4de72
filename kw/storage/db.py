import sqlite3
from pathlib import Path
from kw.utils.log import get_logger

logger = get_logger(__name__)

def get_connection(db_path: str | Path) -> sqlite3.Connection:
    """
    Open an existing SQLite database read-only,
    with rows returned as sqlite3.Row.

    Raises FileNotFoundError if the file does not exist, rather than
    letting sqlite create an empty database.
    """
    path = Path(db_path)
    if not path.is_file():
        raise FileNotFoundError(f"No such database: {path}")
    logger.debug("Opening %s read-only", path)
    conn = sqlite3.connect(f"{path.resolve().as_uri()}?mode=ro", uri=True)
    conn.row_factory = sqlite3.Row
    return conn
