import logging

from models.post import Post
from repositories.errors import PostNotFoundError, RowParseError
from utils.dbconnection import overflows_sqlite_integer

logger = logging.getLogger(__name__)


class PostRepository:
    """
    Manages post-related database operations.
    Every statement goes through the injected connection's exec_params with
    '?' placeholders; values are never formatted into the SQL text.
    """
    def __init__(self, db_connection):
        self.db = db_connection

    def all(self):
        """
        Retrieves every post.
        No ORDER BY is applied, so rows come back in whatever order the
        database yields them.
        """
        query = "SELECT id, title, content, views, account_id FROM posts;"
        logger.debug("Fetching all posts")
        rows = self.db.exec_params(query, ())
        return [self._row_to_post(row) for row in rows]

    def find(self, post_id):
        """
        Retrieves a single post by its ID.
        Raises PostNotFoundError when no row matches.
        """
        if overflows_sqlite_integer(post_id):
            logger.debug("Post id %s is outside the INTEGER range", post_id)
            raise PostNotFoundError(post_id)
        query = "SELECT id, title, content, views, account_id FROM posts WHERE id = ?;"
        rows = self.db.exec_params(query, (post_id,))
        if not rows:
            logger.debug("Post %s not found", post_id)
            raise PostNotFoundError(post_id)
        return self._row_to_post(rows[0])

    def create(self, post):
        """
        Inserts a new post and returns the id the database assigned to it.
        The given Post is left untouched.
        """
        query = """
            INSERT INTO posts (title, content, views, account_id)
            VALUES (?, ?, ?, ?)
            RETURNING id;
        """
        params = (post.title, post.content, post.views, post.account_id)
        rows = self.db.exec_params(query, params)
        new_id = self._parse_int(rows[0], "id")
        logger.debug("Created post %s", new_id)
        return new_id

    def delete(self, post_id):
        """Deletes a post by its ID. A missing ID is not an error."""
        if overflows_sqlite_integer(post_id):
            return
        query = "DELETE FROM posts WHERE id = ?;"
        logger.debug("Deleting post %s", post_id)
        self.db.exec_params(query, (post_id,))

    def update(self, post):
        """
        Overwrites the stored fields of the post identified by post.id.
        An id no row can have leaves the table untouched, like any missing id.
        """
        if overflows_sqlite_integer(post.id):
            return
        query = """
            UPDATE posts
            SET title = ?, content = ?, views = ?, account_id = ?
            WHERE id = ?;
        """
        params = (post.title, post.content, post.views, post.account_id, post.id)
        logger.debug("Updating post %s", post.id)
        self.db.exec_params(query, params)

    def _row_to_post(self, row):
        post = Post()
        post.id = self._parse_int(row, "id")
        post.title = self._get(row, "title")
        post.content = self._get(row, "content")
        post.views = self._parse_int(row, "views")
        post.account_id = self._parse_int(row, "account_id")
        return post

    @staticmethod
    def _get(row, column):
        try:
            return row[column]
        except (KeyError, IndexError):
            raise RowParseError(column, None) from None

    @classmethod
    def _parse_int(cls, row, column):
        value = cls._get(row, column)
        # bool is an int subclass but never a valid column value here
        if isinstance(value, bool):
            raise RowParseError(column, value)
        # REAL affinity keeps fractions; int() would truncate them
        if isinstance(value, float) and not value.is_integer():
            raise RowParseError(column, value)
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError) as e:
            raise RowParseError(column, value) from e
