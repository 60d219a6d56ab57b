from models.post import Post


def test_new_post_has_no_id():
    post = Post(title="t", content="c", account_id=1)

    assert post.id is None
    assert post.views == 0


def test_fields_can_be_assigned_after_construction():
    post = Post()
    post.id = 3
    post.title = "Hello"
    post.content = "World"
    post.views = 8
    post.account_id = 2

    assert (post.id, post.title, post.content, post.views, post.account_id) == \
        (3, "Hello", "World", 8, 2)
    assert "Hello" in repr(post)
