"""Tests for pageshell.routing.navigator: navigation state machine."""

import asyncio
import logging

import pytest

from pageshell.routing.navigator import Navigator
from pageshell.routing.route import RouteEntry
from pageshell.routing.router import Router


def landing() -> str:
    return "<h1>Landing</h1>"


def about() -> str:
    return "<h1>About</h1>"


def user(id: int) -> str:  # noqa: A002
    return f"<h1>User {id}</h1>"


def broken() -> str:
    msg = "X failed"
    raise RuntimeError(msg)


def _loader(component):
    async def load():
        return component

    return load


def _navigator(*entries: RouteEntry) -> Navigator:
    router = Router()
    for entry in entries:
        router.add(entry)
    router.compile()
    return Navigator(router)


@pytest.fixture
def navigator() -> Navigator:
    return _navigator(
        RouteEntry("/", _loader(landing)),
        RouteEntry("/about", _loader(about)),
        RouteEntry("/users/{id:int}", _loader(user)),
        RouteEntry("/broken", _loader(broken)),
    )


class TestNavigate:
    def test_initial_state(self, navigator: Navigator) -> None:
        assert navigator.state == "no-match"
        assert navigator.page is None
        assert navigator.generation == 0

    def test_match(self, navigator: Navigator) -> None:
        match = navigator.navigate("/about")
        assert match is not None
        assert match.entry.path == "/about"
        assert navigator.state == "matched"
        assert navigator.current_path == "/about"
        assert navigator.page is not None
        assert navigator.view_state is not None
        assert navigator.view_state.presented == "loading"

    def test_no_match_shows_not_found(self, navigator: Navigator) -> None:
        assert navigator.navigate("/missing") is None
        assert navigator.state == "no-match"
        assert navigator.page is None
        assert navigator.view_state is None
        html = str(navigator.render_outlet())
        assert "404 - Not Found" in html
        assert "does not exist" in html

    def test_custom_not_found_text(self) -> None:
        router = Router()
        router.compile()
        nav = Navigator(router, not_found_title="Nothing here", not_found_detail=None)
        nav.navigate("/x")
        html = str(nav.render_outlet())
        assert "Nothing here" in html
        assert "card-text" not in html

    def test_each_navigation_builds_fresh_page(self, navigator: Navigator) -> None:
        navigator.navigate("/about")
        first = navigator.page
        navigator.navigate("/about")
        assert navigator.page is not first
        assert navigator.generation == 2

    def test_navigating_away_drops_page(self, navigator: Navigator) -> None:
        navigator.navigate("/about")
        navigator.navigate("/missing")
        assert navigator.page is None
        assert navigator.match is None

    def test_props_reach_page(self, navigator: Navigator) -> None:
        navigator.navigate("/users/42")
        assert navigator.page is not None
        assert navigator.page.deferred.props == {"id": 42}


class TestSettle:
    async def test_resolves_active_page(self, navigator: Navigator) -> None:
        navigator.navigate("/users/7")
        await navigator.settle()
        assert "User 7" in str(navigator.render_outlet())
        assert navigator.view_state.presented == "resolved"  # type: ignore[union-attr]

    async def test_settle_without_page_is_noop(self, navigator: Navigator) -> None:
        navigator.navigate("/missing")
        await navigator.settle()
        assert "404 - Not Found" in str(navigator.render_outlet())

    async def test_render_failure_stays_in_outlet(self, navigator: Navigator) -> None:
        navigator.navigate("/broken")
        await navigator.settle()
        html = str(navigator.render_outlet())
        assert "X failed" in html
        assert navigator.view_state.presented == "error"  # type: ignore[union-attr]

    async def test_error_clears_on_next_navigation(self, navigator: Navigator) -> None:
        navigator.navigate("/broken")
        await navigator.settle()
        navigator.render_outlet()

        navigator.navigate("/about")
        await navigator.settle()
        html = str(navigator.render_outlet())
        assert "About" in html
        assert "X failed" not in html

    async def test_stale_resolution_is_discarded(self, caplog: pytest.LogCaptureFixture) -> None:
        release = asyncio.Event()

        async def slow_loader():
            await release.wait()
            return about

        nav = _navigator(
            RouteEntry("/slow", slow_loader),
            RouteEntry("/", _loader(landing)),
        )
        nav.navigate("/slow")
        stale_page = nav.page
        task = asyncio.create_task(nav.settle())
        await asyncio.sleep(0)

        nav.navigate("/")
        release.set()
        with caplog.at_level(logging.DEBUG, logger="pageshell.navigator"):
            await task

        # The /slow page never received its component
        assert stale_page is not None
        assert stale_page.deferred.pending is True
        assert any("Discarding stale resolution" in r.getMessage() for r in caplog.records)

        await nav.settle()
        assert "Landing" in str(nav.render_outlet())


class TestReport:
    def test_report_into_active_page(self, navigator: Navigator) -> None:
        navigator.navigate("/about")
        assert navigator.report(RuntimeError("button handler failed")) is True
        html = str(navigator.render_outlet())
        assert "button handler failed" in html
        assert navigator.view_state.presented == "error"  # type: ignore[union-attr]

    def test_report_without_page(
        self, navigator: Navigator, caplog: pytest.LogCaptureFixture
    ) -> None:
        navigator.navigate("/missing")
        with caplog.at_level(logging.ERROR, logger="pageshell.navigator"):
            assert navigator.report(RuntimeError("orphan")) is False
        assert any("orphan" in r.getMessage() for r in caplog.records)
        assert "404 - Not Found" in str(navigator.render_outlet())
