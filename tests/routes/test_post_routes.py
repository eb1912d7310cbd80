"""End-to-end tests for the post endpoints."""

from collections.abc import Awaitable, Callable
from typing import Any
from uuid import uuid4

from httpx import AsyncClient
from pytest import fixture, mark

RegisterUser = Callable[..., Awaitable[dict[str, Any]]]

CONTENT = "Some content for the post"


def bearer(user: dict[str, Any]) -> dict[str, str]:
    return {"Authorization": f"Bearer {user['token']}"}


@fixture
async def ada(register_user: RegisterUser) -> dict[str, Any]:
    return await register_user()


@fixture
async def grace(register_user: RegisterUser) -> dict[str, Any]:
    return await register_user(name="Grace Hopper", email="grace@example.com")


async def create_post(
    client: AsyncClient,
    user: dict[str, Any],
    title: str = "Hello World",
    **fields: Any,
) -> dict[str, Any]:
    response = await client.post(
        "/api/posts",
        json={"title": title, "content": CONTENT, **fields},
        headers=bearer(user),
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["post"]


class TestCreatePost:
    """Test cases for POST /api/posts."""

    async def test_create(self, client: AsyncClient, ada: dict[str, Any]) -> None:
        response = await client.post(
            "/api/posts",
            json={"title": "Hello World", "content": CONTENT, "tags": ["intro"]},
            headers=bearer(ada),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "success"
        post = body["data"]["post"]
        assert post["slug"] == "hello-world"
        assert post["status"] == "draft"
        assert post["tags"] == ["intro"]
        assert post["authorId"] == ada["id"]
        assert post["author"] == {"id": ada["id"], "name": "Ada Lovelace", "email": "ada@example.com"}
        assert post["createdAt"].endswith("Z")
        assert post["updatedAt"].endswith("Z")

    async def test_same_title_twice(self, client: AsyncClient, ada: dict[str, Any]) -> None:
        first = await create_post(client, ada)
        second = await create_post(client, ada)
        assert first["slug"] == "hello-world"
        assert second["slug"] == "hello-world-1"

    @mark.parametrize(
        ("payload", "field"),
        [
            ({"title": "Hi", "content": CONTENT}, "title"),
            ({"title": "Hello World", "content": "short"}, "content"),
            ({"title": "Hello World", "content": CONTENT, "status": "archived"}, "status"),
            ({"title": "Hello World", "content": CONTENT, "tags": ["x" * 31]}, "tags.0"),
        ],
    )
    async def test_invalid_payload(
        self,
        client: AsyncClient,
        ada: dict[str, Any],
        payload: dict[str, Any],
        field: str,
    ) -> None:
        response = await client.post("/api/posts", json=payload, headers=bearer(ada))

        assert response.status_code == 400
        assert [error["field"] for error in response.json()["errors"]] == [field]


class TestGetPost:
    """Test cases for GET /api/posts/{slug}."""

    async def test_published_is_public(self, client: AsyncClient, ada: dict[str, Any]) -> None:
        await create_post(client, ada, status="published")
        response = await client.get("/api/posts/hello-world")

        assert response.status_code == 200
        assert response.json()["data"]["post"]["title"] == "Hello World"

    async def test_draft_visible_to_author(self, client: AsyncClient, ada: dict[str, Any]) -> None:
        await create_post(client, ada)
        response = await client.get("/api/posts/hello-world", headers=bearer(ada))
        assert response.status_code == 200

    async def test_draft_hidden_from_anonymous(self, client: AsyncClient, ada: dict[str, Any]) -> None:
        await create_post(client, ada)
        response = await client.get("/api/posts/hello-world")

        assert response.status_code == 404
        assert response.json() == {"status": "fail", "message": "Post not found"}

    async def test_draft_forbidden_to_other_user(
        self,
        client: AsyncClient,
        ada: dict[str, Any],
        grace: dict[str, Any],
    ) -> None:
        await create_post(client, ada)
        response = await client.get("/api/posts/hello-world", headers=bearer(grace))

        assert response.status_code == 403
        assert response.json()["status"] == "fail"

    async def test_long_folded_title_is_fetchable(
        self,
        client: AsyncClient,
        ada: dict[str, Any],
    ) -> None:
        post = await create_post(client, ada, "㎉" * 200, status="published")
        assert len(post["slug"]) == 300

        response = await client.get(f"/api/posts/{post['slug']}")
        assert response.status_code == 200
        assert response.json()["data"]["post"]["id"] == post["id"]

    async def test_unknown_slug(self, client: AsyncClient) -> None:
        response = await client.get("/api/posts/does-not-exist")
        assert response.status_code == 404


class TestListPosts:
    """Test cases for GET /api/posts."""

    async def test_visibility(
        self,
        client: AsyncClient,
        ada: dict[str, Any],
        grace: dict[str, Any],
    ) -> None:
        await create_post(client, ada, "Ada public", status="published")
        await create_post(client, ada, "Ada draft")
        await create_post(client, grace, "Grace public", status="published")
        await create_post(client, grace, "Grace draft")

        anonymous = await client.get("/api/posts")
        assert {p["slug"] for p in anonymous.json()["data"]["posts"]} == {
            "ada-public",
            "grace-public",
        }

        as_ada = await client.get("/api/posts", headers=bearer(ada))
        assert {p["slug"] for p in as_ada.json()["data"]["posts"]} == {
            "ada-public",
            "ada-draft",
            "grace-public",
        }

        drafts = await client.get("/api/posts", params={"status": "draft"}, headers=bearer(ada))
        assert [p["slug"] for p in drafts.json()["data"]["posts"]] == ["ada-draft"]

    async def test_other_authors_drafts(
        self,
        client: AsyncClient,
        ada: dict[str, Any],
        grace: dict[str, Any],
    ) -> None:
        response = await client.get(
            "/api/posts",
            params={"status": "draft", "author": grace["id"]},
            headers=bearer(ada),
        )
        assert response.status_code == 403
        assert response.json()["message"] == "You can only view your own draft posts"

    async def test_pagination(self, client: AsyncClient, ada: dict[str, Any]) -> None:
        for n in range(3):
            await create_post(client, ada, f"Post number {n}", status="published")

        response = await client.get("/api/posts", params={"page": 2, "limit": 2})

        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data["posts"]) == 1
        assert data["pagination"] == {"page": 2, "limit": 2, "total": 3, "pages": 2}

    async def test_defaults(self, client: AsyncClient) -> None:
        response = await client.get("/api/posts")

        assert response.status_code == 200
        assert response.json()["data"] == {
            "posts": [],
            "pagination": {"page": 1, "limit": 10, "total": 0, "pages": 0},
        }

    async def test_tag_and_search(self, client: AsyncClient, ada: dict[str, Any]) -> None:
        await create_post(client, ada, "Async Python", status="published", tags=["python"])
        await create_post(client, ada, "Rust ownership", status="published", tags=["rust"])

        by_tag = await client.get("/api/posts", params={"tag": "rust"})
        assert [p["slug"] for p in by_tag.json()["data"]["posts"]] == ["rust-ownership"]

        by_search = await client.get("/api/posts", params={"search": "python"})
        assert [p["slug"] for p in by_search.json()["data"]["posts"]] == ["async-python"]

    async def test_tag_and_search_are_trimmed(self, client: AsyncClient, ada: dict[str, Any]) -> None:
        await create_post(client, ada, "Async Python", status="published", tags=["python"])

        by_tag = await client.get("/api/posts", params={"tag": "  python "})
        assert [p["slug"] for p in by_tag.json()["data"]["posts"]] == ["async-python"]

        by_search = await client.get("/api/posts", params={"search": " async "})
        assert [p["slug"] for p in by_search.json()["data"]["posts"]] == ["async-python"]

    @mark.parametrize(
        "params",
        [
            {"page": 0},
            {"limit": 0},
            {"limit": 101},
            {"status": "archived"},
            {"author": "not-a-uuid"},
        ],
    )
    async def test_invalid_query(self, client: AsyncClient, params: dict[str, Any]) -> None:
        response = await client.get("/api/posts", params=params)
        assert response.status_code == 400


class TestUpdatePost:
    """Test cases for PUT /api/posts/{post_id}."""

    async def test_rename(self, client: AsyncClient, ada: dict[str, Any]) -> None:
        post = await create_post(client, ada)
        response = await client.put(
            f"/api/posts/{post['id']}",
            json={"title": "A Better Title", "status": "published"},
            headers=bearer(ada),
        )

        assert response.status_code == 200
        updated = response.json()["data"]["post"]
        assert updated["slug"] == "a-better-title"
        assert updated["status"] == "published"
        assert updated["content"] == CONTENT

        old = await client.get("/api/posts/hello-world")
        assert old.status_code == 404
        new = await client.get("/api/posts/a-better-title")
        assert new.status_code == 200

    async def test_not_author(
        self,
        client: AsyncClient,
        ada: dict[str, Any],
        grace: dict[str, Any],
    ) -> None:
        post = await create_post(client, ada)
        response = await client.put(
            f"/api/posts/{post['id']}",
            json={"title": "Hijacked"},
            headers=bearer(grace),
        )

        assert response.status_code == 403
        assert response.json()["message"] == "You can only update your own posts"

    async def test_invalid_id(self, client: AsyncClient, ada: dict[str, Any]) -> None:
        response = await client.put(
            "/api/posts/not-a-uuid",
            json={"title": "Whatever"},
            headers=bearer(ada),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid post ID"

    async def test_unknown_id(self, client: AsyncClient, ada: dict[str, Any]) -> None:
        response = await client.put(
            f"/api/posts/{uuid4()}",
            json={"title": "Whatever"},
            headers=bearer(ada),
        )
        assert response.status_code == 404

    async def test_requires_token(self, client: AsyncClient, ada: dict[str, Any]) -> None:
        post = await create_post(client, ada)
        response = await client.put(f"/api/posts/{post['id']}", json={"title": "Anonymous"})
        assert response.status_code == 401


class TestDeletePost:
    """Test cases for DELETE /api/posts/{post_id}."""

    async def test_delete(self, client: AsyncClient, ada: dict[str, Any]) -> None:
        post = await create_post(client, ada, status="published")
        response = await client.delete(f"/api/posts/{post['id']}", headers=bearer(ada))

        assert response.status_code == 204
        assert response.content == b""

        assert (await client.get("/api/posts/hello-world")).status_code == 404
        listing = await client.get("/api/posts")
        assert listing.json()["data"]["pagination"]["total"] == 0

        again = await client.delete(f"/api/posts/{post['id']}", headers=bearer(ada))
        assert again.status_code == 404

    async def test_slug_reused_after_delete(self, client: AsyncClient, ada: dict[str, Any]) -> None:
        post = await create_post(client, ada)
        await client.delete(f"/api/posts/{post['id']}", headers=bearer(ada))

        replacement = await create_post(client, ada)
        assert replacement["slug"] == "hello-world"

    async def test_not_author(
        self,
        client: AsyncClient,
        ada: dict[str, Any],
        grace: dict[str, Any],
    ) -> None:
        post = await create_post(client, ada)
        response = await client.delete(f"/api/posts/{post['id']}", headers=bearer(grace))

        assert response.status_code == 403
        assert response.json()["message"] == "You can only delete your own posts"

    async def test_invalid_id(self, client: AsyncClient, ada: dict[str, Any]) -> None:
        response = await client.delete("/api/posts/42", headers=bearer(ada))
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid post ID"


class TestDraftLifecycle:
    """A draft stays private until its author publishes it."""

    async def test_register_login_create_publish(self, client: AsyncClient) -> None:
        register = await client.post(
            "/api/auth/register",
            json={"name": "Ada Lovelace", "email": "ada@example.com", "password": "s3cret!"},
        )
        assert register.status_code == 201

        login = await client.post(
            "/api/auth/login",
            json={"email": "ada@example.com", "password": "s3cret!"},
        )
        assert login.status_code == 200
        headers = {"Authorization": f"Bearer {login.json()['data']['token']}"}

        created = await client.post(
            "/api/posts",
            json={"title": "Hello World", "content": CONTENT},
            headers=headers,
        )
        assert created.status_code == 201
        post = created.json()["data"]["post"]
        assert post["status"] == "draft"

        assert (await client.get("/api/posts/hello-world")).status_code == 404
        assert (await client.get("/api/posts/hello-world", headers=headers)).status_code == 200

        published = await client.put(
            f"/api/posts/{post['id']}",
            json={"status": "published"},
            headers=headers,
        )
        assert published.status_code == 200
        assert published.json()["data"]["post"]["slug"] == "hello-world"

        public = await client.get("/api/posts/hello-world")
        assert public.status_code == 200
        assert public.json()["data"]["post"]["status"] == "published"
