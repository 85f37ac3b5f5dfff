from datetime import datetime, timedelta

from forum.crud import PostScope, crud_comment, crud_post, crud_post_vote
from forum.models import UserStatus
from forum.schemas.post import SortKey, SortOrder

BASE_TIME = datetime(2024, 5, 1, 12, 0, 0)


def ids(rows):
    return [row.Post.id for row in rows]


def test_suspended_authors_hidden_unless_requested(db_session, make_user, make_post) -> None:
    active = make_user()
    suspended = make_user(status=UserStatus.SUSPENDED)
    visible_post = make_post(active)
    hidden_post = make_post(suspended)

    public = ids(crud_post.list_posts(db_session, scope=PostScope.all(), include_suspended=False))
    admin = ids(crud_post.list_posts(db_session, scope=PostScope.all(), include_suspended=True))

    assert visible_post.id in public
    assert hidden_post.id not in public
    assert set(admin) == {visible_post.id, hidden_post.id}


def test_visibility_applies_to_every_scope(db_session, make_user, make_post, category) -> None:
    suspended = make_user(status=UserStatus.SUSPENDED)
    liker = make_user()
    post = make_post(suspended)
    crud_post_vote.toggle(db_session, user_id=liker.id, target_id=post.id, is_like=True)

    for scope in (
        PostScope.category(category.id),
        PostScope.author(suspended.id),
        PostScope.liked_by(liker.id),
    ):
        assert crud_post.list_posts(db_session, scope=scope) == []
        assert ids(crud_post.list_posts(db_session, scope=scope, include_suspended=True)) == [post.id]


def test_rows_carry_counts_and_names(db_session, make_user, make_post, make_comment, category) -> None:
    author = make_user("tolkienfan")
    other = make_user()
    post = make_post(author)
    make_comment(post, other)
    make_comment(post, author)
    crud_post_vote.toggle(db_session, user_id=other.id, target_id=post.id, is_like=True)
    crud_post_vote.toggle(db_session, user_id=author.id, target_id=post.id, is_like=False)

    row = crud_post.get_post(db_session, post_id=post.id)

    assert row.username == "tolkienfan"
    assert row.category_name == category.name
    assert (row.likes_count, row.dislikes_count, row.comments_count) == (1, 1, 2)


def test_comment_count_includes_suspended_authors(db_session, make_user, make_post, make_comment) -> None:
    author = make_user()
    post = make_post(author)
    make_comment(post, make_user(status=UserStatus.SUSPENDED))

    assert crud_post.get_post(db_session, post_id=post.id).comments_count == 1


def test_scopes(db_session, make_user, make_post, make_category) -> None:
    alice, bob = make_user(), make_user()
    poetry = make_category("Poetry")
    a1 = make_post(alice)
    a2 = make_post(alice, category_id=poetry.id)
    b1 = make_post(bob)
    crud_post_vote.toggle(db_session, user_id=bob.id, target_id=a1.id, is_like=True)
    crud_post_vote.toggle(db_session, user_id=bob.id, target_id=a2.id, is_like=False)

    assert set(ids(crud_post.list_posts(db_session, scope=PostScope.author(alice.id)))) == {a1.id, a2.id}
    assert ids(crud_post.list_posts(db_session, scope=PostScope.category(poetry.id))) == [a2.id]
    # A dislike does not count as a liked post.
    assert ids(crud_post.list_posts(db_session, scope=PostScope.liked_by(bob.id))) == [a1.id]
    assert ids(crud_post.list_posts(db_session, scope=PostScope.liked_by(alice.id))) == []
    assert len(crud_post.list_posts(db_session)) == 3
    assert b1.id in ids(crud_post.list_posts(db_session))


def test_sort_by_date(db_session, make_user, make_post) -> None:
    user = make_user()
    old = make_post(user, created_at=BASE_TIME)
    new = make_post(user, created_at=BASE_TIME + timedelta(days=1))
    middle = make_post(user, created_at=BASE_TIME + timedelta(hours=1))

    desc_rows = crud_post.list_posts(db_session, sort_by=SortKey.DATE, sort_order=SortOrder.DESC)
    asc_rows = crud_post.list_posts(db_session, sort_by="date", sort_order="asc")

    assert ids(desc_rows) == [new.id, middle.id, old.id]
    assert ids(asc_rows) == [old.id, middle.id, new.id]


def test_sort_by_likes_and_comments(db_session, make_user, make_post, make_comment) -> None:
    user = make_user()
    voters = [make_user() for _ in range(2)]
    quiet = make_post(user, created_at=BASE_TIME)
    popular = make_post(user, created_at=BASE_TIME)
    chatty = make_post(user, created_at=BASE_TIME)
    for voter in voters:
        crud_post_vote.toggle(db_session, user_id=voter.id, target_id=popular.id, is_like=True)
    crud_post_vote.toggle(db_session, user_id=user.id, target_id=chatty.id, is_like=False)
    for _ in range(3):
        make_comment(chatty, user)

    by_likes = ids(crud_post.list_posts(db_session, sort_by="likes", sort_order="desc"))
    by_comments = ids(crud_post.list_posts(db_session, sort_by="comments", sort_order="desc"))

    assert by_likes[0] == popular.id
    # Equal like counts fall back to id in the same direction.
    assert by_likes[1:] == [chatty.id, quiet.id]
    assert by_comments[0] == chatty.id


def test_title_sort_is_bytewise(db_session, make_user, make_post) -> None:
    user = make_user()
    for title in ["banana", "Zebra", "apple", "Apple", "_underscore"]:
        make_post(user, title=title)

    rows = crud_post.list_posts(db_session, sort_by="title", sort_order="asc")
    titles = [row.Post.title for row in rows]

    assert titles == ["Apple", "Zebra", "_underscore", "apple", "banana"]
    assert titles == sorted(titles, key=lambda t: t.encode("utf-8"))


def test_ties_broken_by_id_in_sort_direction(db_session, make_user, make_post) -> None:
    user = make_user()
    posts = [make_post(user, title="Same", created_at=BASE_TIME) for _ in range(3)]
    post_ids = [p.id for p in posts]

    for key in ("date", "title", "likes", "comments"):
        assert ids(crud_post.list_posts(db_session, sort_by=key, sort_order="asc")) == post_ids
        assert ids(crud_post.list_posts(db_session, sort_by=key, sort_order="desc")) == post_ids[::-1]


def test_unknown_sort_falls_back_to_date_desc(db_session, make_user, make_post) -> None:
    user = make_user()
    old = make_post(user, title="b", created_at=BASE_TIME)
    new = make_post(user, title="a", created_at=BASE_TIME + timedelta(days=1))

    rows = crud_post.list_posts(db_session, sort_by="popularity", sort_order="sideways")

    assert ids(rows) == [new.id, old.id]
    assert SortKey.parse(None) is SortKey.DATE
    assert SortOrder.parse(None) is SortOrder.DESC


def test_sort_values_ignore_case(db_session, make_user, make_post) -> None:
    user = make_user()
    old = make_post(user, title="b", created_at=BASE_TIME)
    new = make_post(user, title="a", created_at=BASE_TIME + timedelta(days=1))

    rows = crud_post.list_posts(db_session, sort_by="DATE", sort_order="ASC")

    assert ids(rows) == [old.id, new.id]
    assert SortKey.parse("Title") is SortKey.TITLE
    assert SortOrder.parse("Asc") is SortOrder.ASC



def test_get_post_hides_suspended_author(db_session, make_user, make_post) -> None:
    post = make_post(make_user(status=UserStatus.SUSPENDED))

    assert crud_post.get_post(db_session, post_id=post.id) is None
    assert crud_post.get_post(db_session, post_id=post.id, include_suspended=True) is not None
    assert crud_post.get_post(db_session, post_id=9999, include_suspended=True) is None


def test_list_comments_order_and_visibility(db_session, make_user, make_post, make_comment) -> None:
    user = make_user()
    suspended = make_user(status=UserStatus.SUSPENDED)
    post = make_post(user)
    first = make_comment(post, user)
    hidden = make_comment(post, suspended)
    reply = make_comment(post, user, parent=first)

    public = crud_comment.list_comments(db_session, post_id=post.id)
    everything = crud_comment.list_comments(db_session, post_id=post.id, include_suspended=True)

    assert [row.Comment.id for row in public] == [first.id, reply.id]
    assert [row.Comment.id for row in everything] == [first.id, hidden.id, reply.id]
    assert public[0].username == user.username
    assert (public[0].likes_count, public[0].dislikes_count) == (0, 0)


def test_search_posts(db_session, make_user, make_post) -> None:
    user = make_user()
    dune = make_post(user, title="Rereading Dune", content="Spice", created_at=BASE_TIME)
    other = make_post(user, title="Favourite poems", content="Reminds me of DUNE", created_at=BASE_TIME + timedelta(hours=1))
    make_post(user, title="Unrelated", content="Nothing here")
    hidden = make_post(make_user(status=UserStatus.SUSPENDED), title="Dune sequels")

    rows = crud_post.search_posts(db_session, term="  dune ")

    assert ids(rows) == [other.id, dune.id]
    assert hidden.id in ids(crud_post.search_posts(db_session, term="dune", include_suspended=True))
    assert crud_post.search_posts(db_session, term="   ") == []


def test_search_treats_wildcards_literally(db_session, make_user, make_post) -> None:
    user = make_user()
    make_post(user, title="100% worth it")
    make_post(user, title="1000 pages")

    assert [row.Post.title for row in crud_post.search_posts(db_session, term="100%")] == ["100% worth it"]


def test_search_suggestions_limit_and_fields(db_session, make_user, make_post) -> None:
    user = make_user()
    created = [
        make_post(user, title=f"Book club {i}", created_at=BASE_TIME + timedelta(minutes=i))
        for i in range(7)
    ]

    rows = crud_post.search_suggestions(db_session, term="club")

    assert len(rows) == 5
    assert [row.id for row in rows] == [p.id for p in created[::-1][:5]]
    assert rows[0].title == "Book club 6"
