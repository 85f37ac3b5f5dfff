from forum.models import UserStatus


def test_search_results(client, make_user, make_post) -> None:
    user = make_user()
    make_post(user, title="Moby Dick notes", content="whale")
    make_post(user, title="Poetry", content="A whale of a poem")
    make_post(user, title="Gardening", content="roses")
    make_post(make_user(status=UserStatus.SUSPENDED), title="Whale songs")

    response = client.get("/api/v1/search", params={"q": " WHALE "})

    assert response.status_code == 200
    body = response.json()
    assert body["query"] == "WHALE"
    assert body["total"] == 2
    assert {p["title"] for p in body["posts"]} == {"Moby Dick notes", "Poetry"}


def test_empty_search(client, make_user, make_post) -> None:
    make_post(make_user())

    body = client.get("/api/v1/search", params={"q": "  "}).json()

    assert body["posts"] == []
    assert body["total"] == 0


def test_search_suggestions(client, make_user, make_post) -> None:
    user = make_user()
    posts = [make_post(user, title=f"Dune part {i}") for i in range(6)]
    make_post(user, title="Foundation")

    response = client.get("/api/v1/search/suggestions", params={"q": "dune"})

    assert response.status_code == 200
    suggestions = response.json()
    assert len(suggestions) == 5
    assert set(suggestions[0]) == {"id", "title"}
    assert suggestions[0]["id"] == posts[-1].id


def test_suggestions_for_blank_term(client) -> None:
    assert client.get("/api/v1/search/suggestions").json() == []


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "healthy"}
