"""End-to-end tests for the blog through the ASGI interface."""

from typing import Any

import pytest

from inkwell.app import Blog
from inkwell.config import BlogConfig
from inkwell.data.errors import StoreError
from inkwell.data.posts import PostStore
from inkwell.models import SUCCESS_MESSAGE, Post
from inkwell.testing import TestClient

HI = {"action": "add", "header": "Hi", "content": "World", "slug": "hi"}


async def _add(client: TestClient, **overrides: str):
    return await client.post("/save/add/", form={**HI, **overrides})


class TestRedirects:
    @pytest.mark.parametrize("path", ["/", "/home", "/nope/", "/posts/hi", "/favicon.ico"])
    async def test_unmatched_path_redirects_home(self, client: TestClient, path: str) -> None:
        response = await client.get(path)
        assert response.status == 302
        assert response.header("location") == "/home/"


class TestReadPages:
    async def test_empty_home(self, client: TestClient) -> None:
        response = await client.get("/home/")
        assert response.status == 200
        assert "text/html" in response.content_type
        assert "No posts yet" in response.text

    async def test_home_lists_posts(self, client: TestClient) -> None:
        await _add(client)
        response = await client.get("/home/")
        assert 'href="/post/hi"' in response.text
        assert ">Hi<" in response.text

    async def test_view_post(self, client: TestClient) -> None:
        await _add(client)
        response = await client.get("/post/hi")
        assert response.status == 200
        assert "World" in response.text

    async def test_view_unknown_post(self, client: TestClient) -> None:
        response = await client.get("/post/missing")
        assert response.status == 404
        assert "Post not found" in response.text

    async def test_view_post_without_slug(self, client: TestClient) -> None:
        response = await client.get("/post/")
        assert response.status == 404

    async def test_post_content_is_escaped(self, client: TestClient) -> None:
        await _add(client, header="<script>alert(1)</script>")
        response = await client.get("/post/hi")
        assert "<script>alert(1)</script>" not in response.text
        assert "&lt;script&gt;" in response.text

    async def test_new_form(self, client: TestClient) -> None:
        response = await client.get("/new/")
        assert response.status == 200
        assert 'action="/save/add/"' in response.text

    async def test_edit_form_prefilled(self, client: TestClient) -> None:
        await _add(client)
        response = await client.get("/edit/hi")
        assert response.status == 200
        assert 'action="/save/update/"' in response.text
        assert 'value="Hi"' in response.text

    async def test_delete_form(self, client: TestClient) -> None:
        response = await client.get("/delete/hi")
        assert response.status == 200
        assert 'action="/save/del/"' in response.text
        assert 'value="hi"' in response.text

    async def test_head_has_no_body(self, client: TestClient) -> None:
        response = await client.request("HEAD", "/home/")
        assert response.status == 200
        assert response.body == b""


class TestSave:
    async def test_add(self, client: TestClient, blog: Blog) -> None:
        response = await _add(client)
        assert response.status == 200
        assert SUCCESS_MESSAGE in response.text
        assert await blog.store.count() == 1

    async def test_kind_from_path_segment(self, client: TestClient, blog: Blog) -> None:
        form = {k: v for k, v in HI.items() if k != "action"}
        response = await client.post("/save/add/", form=form)
        assert response.status == 200
        assert await blog.store.get_by_slug("hi") is not None

    async def test_update(self, client: TestClient) -> None:
        await _add(client)
        response = await client.post(
            "/save/update/",
            form={"action": "update", "header": "Hello", "content": "Earth", "slug": "hi"},
        )
        assert response.status == 200
        page = await client.get("/post/hi")
        assert "Earth" in page.text

    async def test_delete_with_del_segment(self, client: TestClient, blog: Blog) -> None:
        await _add(client)
        response = await client.post("/save/del/", form={"slug": "hi"})
        assert response.status == 200
        assert await blog.store.count() == 0
        home = await client.get("/home/")
        assert 'href="/post/hi"' not in home.text

    async def test_delete_missing_reports_failure(self, client: TestClient) -> None:
        response = await client.post("/save/del/", form={"action": "delete", "slug": "missing"})
        assert response.status == 422
        assert "Sorry! This attempt to delete the post failed" in response.text

    async def test_update_missing_reports_failure(self, client: TestClient) -> None:
        response = await client.post(
            "/save/update/",
            form={"action": "update", "header": "A", "content": "B", "slug": "missing"},
        )
        assert response.status == 422
        assert "Sorry! This attempt to update the post failed" in response.text

    async def test_duplicate_add_reports_failure(self, client: TestClient, blog: Blog) -> None:
        await _add(client)
        response = await _add(client, header="Other")
        assert response.status == 422
        assert (await blog.store.get_by_slug("hi")).header == "Hi"

    async def test_slug_is_normalized(self, client: TestClient, blog: Blog) -> None:
        await _add(client, slug="  Hi  ")
        assert await blog.store.get_by_slug("hi") is not None

    @pytest.mark.parametrize(
        "overrides",
        [{"slug": ""}, {"slug": "has space"}, {"slug": "a/b"}, {"header": ""}, {"content": "  "}],
    )
    async def test_invalid_submission_rejected(
        self, client: TestClient, blog: Blog, overrides: dict[str, str]
    ) -> None:
        response = await _add(client, **overrides)
        assert response.status == 422
        assert "Sorry! This attempt to add a new post failed" in response.text
        assert await blog.store.count() == 0

    async def test_unknown_kind(self, client: TestClient) -> None:
        response = await client.post("/save/publish/", form={"slug": "hi"})
        assert response.status == 400

    async def test_unparseable_body(self, client: TestClient) -> None:
        response = await client.post(
            "/save/add/",
            body=b'{"slug": "hi"}',
            headers={"content-type": "application/json"},
        )
        assert response.status == 400

    async def test_get_not_allowed(self, client: TestClient) -> None:
        response = await client.get("/save/add/")
        assert response.status == 405
        assert response.header("allow") == "POST"

    async def test_post_to_read_page_not_allowed(self, client: TestClient) -> None:
        response = await client.post("/home/", form={})
        assert response.status == 405


class TestReadCache:
    async def test_reads_between_writes_query_once(self, client: TestClient, blog: Blog) -> None:
        for _ in range(3):
            await client.get("/home/")
        assert blog.cache.refresh_count == 1

    async def test_successful_write_invalidates(self, client: TestClient, blog: Blog) -> None:
        await client.get("/home/")
        await _add(client)
        assert blog.cache.stale
        response = await client.get("/home/")
        assert 'href="/post/hi"' in response.text
        assert blog.cache.refresh_count == 2

    async def test_update_and_delete_refresh_the_list(self, client: TestClient, blog: Blog) -> None:
        await _add(client)
        home = await client.get("/home/")
        assert ">Hi<" in home.text
        assert blog.cache.refresh_count == 1

        response = await client.post(
            "/save/update/",
            form={"action": "update", "header": "Hi2", "content": "World2", "slug": "hi"},
        )
        assert response.status == 200
        home = await client.get("/home/")
        assert ">Hi2<" in home.text
        assert blog.cache.refresh_count == 2
        assert await blog.cache.all_posts() == (Post(header="Hi2", content="World2", slug="hi"),)

        response = await client.post("/save/del/", form={"action": "delete", "slug": "hi"})
        assert response.status == 200
        home = await client.get("/home/")
        assert 'href="/post/hi"' not in home.text
        assert "No posts yet" in home.text
        assert blog.cache.refresh_count == 3

    async def test_failed_write_keeps_snapshot(self, client: TestClient, blog: Blog) -> None:
        await client.get("/home/")
        await client.post("/save/del/", form={"slug": "missing"})
        assert not blog.cache.stale
        await client.get("/home/")
        assert blog.cache.refresh_count == 1


class TestStoreFailures:
    async def test_store_error_is_scoped_to_request(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def broken(self: PostStore) -> list[Any]:
            msg = "connection refused"
            raise StoreError(msg)

        monkeypatch.setattr(PostStore, "list_all", broken)
        response = await client.get("/home/")
        assert response.status == 503
        assert 'data-status="503"' in response.text

        monkeypatch.undo()
        response = await client.get("/home/")
        assert response.status == 200

    async def test_store_error_during_write(
        self, client: TestClient, blog: Blog, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def broken(self: PostStore, post: Any) -> int:
            msg = "connection reset"
            raise StoreError(msg)

        await client.get("/home/")
        monkeypatch.setattr(PostStore, "insert", broken)
        response = await _add(client)
        assert response.status == 500
        assert "Sorry! This attempt to add a new post failed" in response.text
        assert not blog.cache.stale

    async def test_unreachable_database(self, tmp_path) -> None:
        blog = Blog(BlogConfig(database_url=f"sqlite:///{tmp_path / 'missing' / 'blog.db'}"))
        client = TestClient(blog)
        response = await client.get("/home/")
        assert response.status == 503


class TestTemplateOverrides:
    async def test_template_dir_takes_precedence(self, tmp_path, db_url: str) -> None:
        (tmp_path / "home.html").write_text("custom home: {{ posts | length }}")
        blog = Blog(BlogConfig(database_url=db_url, template_dir=tmp_path))
        async with TestClient(blog) as client:
            response = await client.get("/home/")
        assert response.text == "custom home: 0"

    async def test_broken_template_is_500(self, tmp_path, db_url: str) -> None:
        (tmp_path / "home.html").write_text("{{ posts | no_such_filter }}")
        blog = Blog(BlogConfig(database_url=db_url, template_dir=tmp_path))
        async with TestClient(blog) as client:
            response = await client.get("/home/")
            assert response.status == 500
            assert (await client.get("/new/")).status == 200


class TestLifespan:
    async def test_startup_and_shutdown(self, blog: Blog) -> None:
        messages = iter([{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}])
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return next(messages)

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await blog({"type": "lifespan"}, receive, send)
        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]

    async def test_startup_failure_reported(self, tmp_path) -> None:
        blog = Blog(BlogConfig(database_url=f"sqlite:///{tmp_path / 'missing' / 'blog.db'}"))
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return {"type": "lifespan.startup"}

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await blog({"type": "lifespan"}, receive, send)
        assert sent[0]["type"] == "lifespan.startup.failed"
