"""Tests for the notes example."""

from pageshell.testing import TestClient


class TestNotesApp:
    """Verify every page of the notes example through the ASGI pipeline."""

    async def test_landing_lists_notes(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/")
            assert response.status == 200
            assert 'href="/notes/1"' in response.text
            assert 'data-view="Grid"' in response.text
            assert 'data-view="2D Graph"' not in response.text

    async def test_note_offers_graph_views(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.fragment("/notes/2")
            assert "A shell that never goes blank." in response.text
            assert 'data-view="3D Graph"' in response.text

    async def test_unknown_note_shows_error_card(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/notes/99")
            assert response.status == 200
            assert 'role="alert"' in response.text
            assert 'id="site-footer"' in response.text

    async def test_lazy_pages(self, example_app) -> None:
        async with TestClient(example_app) as client:
            about = await client.fragment("/about")
            nested = await client.fragment("/help/shortcuts")
            assert "Notes is a pageshell demo." in about.text
            assert "Every page under /help lands here." in nested.text

    async def test_broken_page_keeps_shell(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/broken")
            assert "X failed" in response.text
            assert 'id="site-nav"' in response.text

    async def test_not_found(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/nowhere")
            assert response.status == 404
            assert "404 - Not Found" in response.text

    async def test_logout_switches_links(self, example_app) -> None:
        async with TestClient(example_app) as client:
            before = await client.get("/nowhere")
            assert 'href="/account"' in before.text
            await client.post("/logout")
            after = await client.get("/nowhere")
            assert 'href="/login"' in after.text
            assert 'href="/signup"' in after.text
