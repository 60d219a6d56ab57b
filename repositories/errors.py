"""Errors raised by the post repository."""


class PostRepositoryError(Exception):
    """Base exception for repository operations."""
    pass


class PostNotFoundError(PostRepositoryError):
    """Raised when no row matches the requested post id."""

    def __init__(self, post_id):
        self.post_id = post_id
        super().__init__(f"Post {post_id} not found")


class RowParseError(PostRepositoryError):
    """Raised when a result row cannot be decoded into a Post."""

    def __init__(self, column, value):
        self.column = column
        self.value = value
        super().__init__(f"Cannot parse column '{column}' from value {value!r}")
