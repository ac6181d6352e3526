"""Scoped transactions over an autocommit SQLite connection."""

import sqlite3
from contextlib import contextmanager
from typing import Iterator


@contextmanager
def unit_of_work(connection: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """
    Run the enclosed writes as one transaction.

    Commits when the block exits normally and rolls back before
    re-raising when it does not, so a failed block leaves no
    partial writes behind.

    The connection must be in autocommit mode (isolation_level=None).
    """
    connection.execute("BEGIN")
    try:
        yield connection
    except BaseException:
        # SQLite may already have rolled back on its own (e.g. SQLITE_FULL)
        if connection.in_transaction:
            connection.execute("ROLLBACK")
        raise
    connection.execute("COMMIT")
