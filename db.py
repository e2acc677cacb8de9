"""
Database layer for the URL redirect service.
Reads path -> url rows from a SQLite file.

Expected schema:

    CREATE TABLE pathsurls (
        ID INTEGER PRIMARY KEY,
        Path TEXT,
        URL TEXT NOT NULL
    )
"""

import sqlite3
import logging
from contextlib import closing
from pathlib import Path
from typing import Any, List

from errors import QueryError, ScanError, SourceIOError
from models import RouteEntry

logger = logging.getLogger(__name__)

SELECT_ROUTES = "SELECT Path, URL FROM pathsurls"


def get_connection(file_path: str) -> sqlite3.Connection:
    """Open a read-only SQLite connection; the file is never created"""
    uri = Path(file_path).absolute().as_uri() + "?mode=ro"
    return sqlite3.connect(uri, uri=True)


def scan_text(value: Any) -> str:
    """Read one column value as a string"""
    if value is None:
        raise ValueError("converting NULL to string is unsupported")
    if isinstance(value, bytes):
        return value.decode('utf-8')
    return str(value)


def parse_sqlite_db(file_path: str) -> List[RouteEntry]:
    """
    Read every row of the pathsurls table

    Args:
        file_path (str): Path of the SQLite database file

    Returns:
        list: RouteEntry objects in row order

    Raises:
        SourceIOError: The database file cannot be opened
        QueryError: The query fails or the rows cannot be iterated
        ScanError: A row cannot be read as two strings
    """
    try:
        conn = get_connection(file_path)
    except sqlite3.Error as e:
        logger.error(f"Error opening database {file_path}: {e}")
        raise SourceIOError(file_path, "open db", e) from e

    # Decode TEXT columns in scan_text so bad UTF-8 is reported per row
    conn.text_factory = bytes

    with closing(conn):
        try:
            cursor = conn.execute(SELECT_ROUTES)
        except sqlite3.Error as e:
            logger.error(f"Error querying database {file_path}: {e}")
            raise QueryError(file_path, "retrieve data of db", e) from e

        with closing(cursor):
            entries = []
            try:
                for row in cursor:
                    try:
                        path, url = (scan_text(value) for value in row)
                    except ValueError as e:
                        logger.error(f"Error scanning row of database {file_path}: {e}")
                        raise ScanError(file_path, "scan columns values of db", e) from e
                    entries.append(RouteEntry(path=path, url=url))
            except sqlite3.Error as e:
                logger.error(f"Error iterating rows of database {file_path}: {e}")
                raise QueryError(file_path, "iterate rows of db", e) from e

    logger.info(f"Read {len(entries)} rows from database {file_path}")
    return entries
