class Post:
    """
    A single row of the posts table.
    Fields are assigned freely after construction; nothing is validated here,
    the schema is the only place constraints live.
    """
    def __init__(self, id=None, title=None, content=None, views=0, account_id=None):
        self.id = id
        self.title = title
        self.content = content
        self.views = views
        self.account_id = account_id

    def __repr__(self):
        return (f"Post(id={self.id!r}, title={self.title!r}, content={self.content!r}, "
                f"views={self.views!r}, account_id={self.account_id!r})")
