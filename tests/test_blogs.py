"""Blog endpoint tests."""

import re

import pytest

CONTENT = " ".join(["Writing small services with clear boundaries pays off."] * 10)

BLOG = {
    "title": "Lessons from my first internship",
    "content": CONTENT,
    "excerpt": "What I learned shipping real code",
    "category": "Career",
    "tags": ["career", "internship"],
    "isPublished": True,
}


def create_blog(client, headers, **overrides):
    response = client.post("/api/blogs", headers=headers, json={**BLOG, **overrides})
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
def blog(client, auth_headers):
    return create_blog(client, auth_headers)


def test_create_blog_derives_fields(blog, auth_headers):
    assert blog["slug"] == "lessons-from-my-first-internship"
    assert blog["authorId"] == auth_headers.user_id
    assert blog["readTime"] == 1
    assert blog["publishedAt"] is not None
    assert blog["comments"] == []


def test_read_time_rounds_up(client, auth_headers):
    blog = create_blog(client, auth_headers, content="word " * 450)
    assert blog["readTime"] == 3


def test_draft_has_no_publish_time(client, auth_headers):
    draft = create_blog(client, auth_headers, isPublished=False)
    assert draft["publishedAt"] is None

    updated = client.put(
        f"/api/blogs/{draft['id']}", headers=auth_headers, json={"isPublished": True}
    ).json()["data"]
    assert updated["publishedAt"] is not None


def test_create_blog_validates_lengths(client, auth_headers):
    response = client.post(
        "/api/blogs",
        headers=auth_headers,
        json={**BLOG, "content": "Too short", "excerpt": "Short"},
    )
    assert response.status_code == 400
    fields = {e["field"] for e in response.json()["errors"]}
    assert fields == {"content", "excerpt"}


def test_duplicate_slug_rejected(client, auth_headers, blog):
    response = client.post("/api/blogs", headers=auth_headers, json=BLOG)
    assert response.status_code == 400
    assert response.json()["message"] == "Slug already exists"


def test_explicit_slug(client, auth_headers):
    blog = create_blog(client, auth_headers, slug="custom-slug")
    assert blog["slug"] == "custom-slug"


def test_list_blogs_paginates_newest_first(client, auth_headers):
    created = [
        create_blog(client, auth_headers, title=f"Tech post number {i}", category="Technology")
        for i in range(5)
    ]

    response = client.get("/api/blogs", params={"category": "Technology", "limit": 2})
    body = response.json()
    assert body["count"] == 2
    assert body["total"] == 5
    assert body["pages"] == 3
    assert body["page"] == 1
    assert [b["id"] for b in body["data"]] == [created[4]["id"], created[3]["id"]]
    assert "content" not in body["data"][0]


def test_list_blogs_by_tags_and_search(client, auth_headers):
    create_blog(client, auth_headers, title="Async patterns", tags=["python", "async"])
    create_blog(client, auth_headers, title="Flexbox tricks", tags=["css"])

    by_tag = client.get("/api/blogs", params={"tags": "css,rust"}).json()
    assert [b["title"] for b in by_tag["data"]] == ["Flexbox tricks"]

    by_search = client.get("/api/blogs", params={"search": "ASYNC"}).json()
    assert [b["title"] for b in by_search["data"]] == ["Async patterns"]


def test_drafts_hidden(client, auth_headers, other_headers):
    draft = create_blog(client, auth_headers, title="Unfinished thoughts", isPublished=False)

    assert client.get("/api/blogs").json()["total"] == 0
    assert client.get(f"/api/blogs/{draft['id']}", headers=other_headers).status_code == 404
    assert client.get(f"/api/blogs/slug/{draft['slug']}").status_code == 404
    assert client.get(f"/api/blogs/{draft['id']}", headers=auth_headers).status_code == 200
    assert client.get("/api/blogs/my", headers=auth_headers).json()["count"] == 1


def test_get_by_slug_counts_views(client, blog):
    client.get(f"/api/blogs/slug/{blog['slug']}")
    response = client.get(f"/api/blogs/slug/{blog['slug']}")
    assert response.status_code == 200
    assert response.json()["data"]["views"] == 2
    assert response.json()["data"]["content"] == CONTENT


def test_like_blog(client, blog, other_headers):
    response = client.post(f"/api/blogs/{blog['id']}/like", headers=other_headers)
    assert response.json() == {
        "success": True,
        "message": "Blog liked",
        "data": {"likes": 1, "isLiked": True},
    }

    response = client.post(f"/api/blogs/{blog['id']}/like", headers=other_headers)
    assert response.json()["message"] == "Blog unliked"
    assert response.json()["data"] == {"likes": 0, "isLiked": False}


def test_comments_and_replies(client, blog, auth_headers, other_headers):
    response = client.post(
        f"/api/blogs/{blog['id']}/comments", headers=other_headers, json={"content": "  Great read!  "}
    )
    assert response.status_code == 200
    comment = response.json()["data"]
    assert comment["content"] == "Great read!"
    assert comment["user"]["id"] == other_headers.user_id

    response = client.post(
        f"/api/blogs/{blog['id']}/comments/{comment['id']}/replies",
        headers=auth_headers,
        json={"content": "Thanks!"},
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Reply added successfully"

    full = client.get(f"/api/blogs/{blog['id']}").json()["data"]
    assert full["comments"][0]["replies"][0]["content"] == "Thanks!"

    # Author is notified of the comment, commenter of the reply
    author_types = [n["type"] for n in client.get("/api/notifications", headers=auth_headers).json()["data"]]
    commenter_types = [n["type"] for n in client.get("/api/notifications", headers=other_headers).json()["data"]]
    assert author_types == ["comment"]
    assert commenter_types == ["reply"]


def test_blank_comment_rejected(client, blog, other_headers):
    response = client.post(
        f"/api/blogs/{blog['id']}/comments", headers=other_headers, json={"content": "   "}
    )
    assert response.status_code == 400


def test_reply_to_missing_comment(client, blog, auth_headers):
    response = client.post(
        f"/api/blogs/{blog['id']}/comments/9999/replies",
        headers=auth_headers,
        json={"content": "Hello"},
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Comment not found"


def test_categories_and_tags(client, auth_headers):
    create_blog(client, auth_headers, title="Post about tooling", category="Programming", tags=["tools"])
    create_blog(client, auth_headers, title="Draft about careers", tags=["career"], isPublished=False)

    assert client.get("/api/blogs/categories").json()["data"] == ["Career", "Programming"]
    assert client.get("/api/blogs/tags").json()["data"] == ["career", "tools"]


def test_only_author_can_modify(client, blog, other_headers, auth_headers):
    url = f"/api/blogs/{blog['id']}"
    assert client.put(url, headers=other_headers, json={"title": "Taken over"}).status_code == 404
    assert client.delete(url, headers=other_headers).status_code == 404
    assert client.delete(url, headers=auth_headers).json()["message"] == "Blog post deleted successfully"


def test_non_ascii_tags_filter_and_search(client, auth_headers):
    create_blog(client, auth_headers, title="Coffee shop coding", tags=["café", "remote"])
    create_blog(client, auth_headers, title="Office hours", tags=["office"])

    assert "café" in client.get("/api/blogs/tags").json()["data"]

    by_tag = client.get("/api/blogs", params={"tags": "café"}).json()
    assert [b["title"] for b in by_tag["data"]] == ["Coffee shop coding"]

    by_search = client.get("/api/blogs", params={"search": "café"}).json()
    assert [b["title"] for b in by_search["data"]] == ["Coffee shop coding"]


@pytest.mark.parametrize("term", ["%", "_"])
def test_search_wildcards_match_literally(client, auth_headers, term):
    create_blog(client, auth_headers, title="Plain title here")

    assert client.get("/api/blogs", params={"search": term}).json()["total"] == 0


def test_search_matches_literal_percent(client, auth_headers):
    create_blog(client, auth_headers, title="Hitting 100% coverage")
    create_blog(client, auth_headers, title="Hitting 1000 users")

    body = client.get("/api/blogs", params={"search": "100%"}).json()
    assert [b["title"] for b in body["data"]] == ["Hitting 100% coverage"]


def test_update_recomputes_read_time(client, auth_headers, blog):
    assert blog["readTime"] == 1

    response = client.put(
        f"/api/blogs/{blog['id']}", headers=auth_headers, json={"content": "word " * 650}
    )
    assert response.status_code == 200
    assert response.json()["data"]["readTime"] == 4


def test_title_without_ascii_gets_generated_slug(client, auth_headers):
    first = create_blog(client, auth_headers, title="Привет, мир")
    second = create_blog(client, auth_headers, title="Заметки студента")

    assert re.fullmatch(r"post-[a-z0-9]{8}", first["slug"])
    assert re.fullmatch(r"post-[a-z0-9]{8}", second["slug"])
    assert first["slug"] != second["slug"]
    assert client.get(f"/api/blogs/slug/{first['slug']}").json()["data"]["id"] == first["id"]
