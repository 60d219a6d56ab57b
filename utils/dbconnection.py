import logging
import sqlite3

logger = logging.getLogger(__name__)


class DatabaseConnection:
    """
    A context manager class to handle SQLite database connections.
    It opens one connection and one transaction per `with` block and hands out
    exec_params, the single call the repositories depend on.
    """
    def __init__(self, db_path):
        self.db_path = db_path
        self.connection = None
        self.cursor = None

    def __enter__(self):
        """Connect to the database and start a transaction."""
        try:
            self.connection = sqlite3.connect(self.db_path, isolation_level=None)
            self.connection.row_factory = sqlite3.Row
            self.connection.execute("PRAGMA foreign_keys = ON")
            self.cursor = self.connection.cursor()
            self.cursor.execute("BEGIN")
            return self
        except sqlite3.Error:
            logger.exception("SQLite connection error for %s", self.db_path)
            if self.connection:
                self.connection.close()
                self.connection = None
            raise

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Commit changes or rollback, and close the connection."""
        if self.connection:
            try:
                if exc_type is None:
                    try:
                        self.connection.commit()
                    except sqlite3.Error:
                        logger.exception("Commit failed, rolling back")
                        self.connection.rollback()
                        raise
                else:
                    logger.debug("Rolling back transaction after %s", exc_type.__name__)
                    self.connection.rollback()
            finally:
                self.cursor.close()
                self.connection.close()
                self.cursor = None
                self.connection = None
        return False

    def exec_params(self, sql, params=()):
        """
        Executes one parameterized statement and returns every result row as a
        dictionary. Statements that produce no rows return an empty list.
        """
        if self.cursor is None:
            raise RuntimeError("DatabaseConnection must be used inside a 'with' block")
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Executing %s", " ".join(sql.split()))
        self.cursor.execute(sql, params)
        return [dict(row) for row in self.cursor.fetchall()]

    def execute_script(self, script):
        """Runs a multi-statement script such as the schema DDL."""
        if self.cursor is None:
            raise RuntimeError("DatabaseConnection must be used inside a 'with' block")
        for statement in script.split(";"):
            if statement.strip():
                self.cursor.execute(statement)


SQLITE_INTEGER_MIN = -2 ** 63
SQLITE_INTEGER_MAX = 2 ** 63 - 1


def overflows_sqlite_integer(value):
    """True for Python ints the driver cannot bind to a 64-bit SQLite INTEGER."""
    return isinstance(value, int) and not SQLITE_INTEGER_MIN <= value <= SQLITE_INTEGER_MAX
