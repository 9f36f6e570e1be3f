"""Tests for pageshell.routing.router: ordered first-match-wins router."""

import pytest

from pageshell.errors import ConfigurationError
from pageshell.routing.route import RouteEntry
from pageshell.routing.router import Router, normalize_path, parse_path


def _loader() -> object:
    return lambda: "ok"


def _entry(path: str, *, exact: bool = True, name: str | None = None) -> RouteEntry:
    return RouteEntry(path=path, loader=_loader, exact=exact, name=name)


def _router(*entries: RouteEntry) -> Router:
    r = Router()
    for entry in entries:
        r.add(entry)
    r.compile()
    return r


class TestParsePath:
    def test_static(self) -> None:
        segments = parse_path("/users")
        assert len(segments) == 1
        assert segments[0].value == "users"
        assert segments[0].is_param is False

    def test_multi_static(self) -> None:
        segments = parse_path("/api/v2/users")
        assert [s.value for s in segments] == ["api", "v2", "users"]

    def test_param(self) -> None:
        segments = parse_path("/users/{id}")
        assert segments[1].is_param is True
        assert segments[1].param_name == "id"
        assert segments[1].param_type == "str"

    def test_typed_param(self) -> None:
        segments = parse_path("/users/{id:int}")
        assert segments[1].param_type == "int"

    def test_root(self) -> None:
        assert parse_path("/") == []

    def test_rejects_angle_param(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            parse_path("/share/<slug>")
        assert "<param>" in str(exc_info.value)
        assert "/share/<slug>" in str(exc_info.value)

    def test_rejects_unknown_converter(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown converter"):
            parse_path("/users/{id:uuid}")

    @pytest.mark.parametrize("path", ["/users/{user-id}", "/users/{}", "/users/{1st:int}"])
    def test_rejects_invalid_parameter_name(self, path: str) -> None:
        with pytest.raises(ConfigurationError, match="not a valid identifier"):
            parse_path(path)


class TestNormalizePath:
    def test_trailing_slash(self) -> None:
        assert normalize_path("/about/") == "/about"

    def test_repeated_slashes(self) -> None:
        assert normalize_path("//a//b") == "/a/b"

    def test_root(self) -> None:
        assert normalize_path("/") == "/"
        assert normalize_path("") == "/"


class TestExactMatching:
    def test_root(self) -> None:
        match = _router(_entry("/")).match("/")
        assert match is not None
        assert match.entry.path == "/"
        assert match.path_params == {}

    def test_exact_root_does_not_match_children(self) -> None:
        assert _router(_entry("/")).match("/about") is None

    def test_exact_does_not_match_nested(self) -> None:
        r = _router(_entry("/docs"))
        assert r.match("/docs") is not None
        assert r.match("/docs/intro") is None

    def test_trailing_slash_matches(self) -> None:
        assert _router(_entry("/about")).match("/about/") is not None

    def test_trailing_newline_does_not_match(self) -> None:
        r = _router(_entry("/about"), _entry("/users/{id:int}"))
        assert r.match("/about\n") is None
        assert r.match("/users/7\n") is None

    def test_no_match_returns_none(self) -> None:
        assert _router(_entry("/about")).match("/missing") is None

    def test_empty_router(self) -> None:
        assert _router().match("/") is None


class TestPrefixMatching:
    def test_matches_itself_and_nested(self) -> None:
        r = _router(_entry("/docs", exact=False))
        assert r.match("/docs") is not None
        assert r.match("/docs/intro") is not None
        assert r.match("/docs/a/b/c") is not None

    def test_does_not_match_sibling_prefix(self) -> None:
        assert _router(_entry("/docs", exact=False)).match("/docsearch") is None

    def test_root_prefix_matches_everything(self) -> None:
        r = _router(_entry("/", exact=False))
        assert r.match("/") is not None
        assert r.match("/anything/at/all") is not None


class TestFirstMatchWins:
    def test_registration_order_decides(self) -> None:
        r = _router(_entry("/about", name="first"), _entry("/about", name="second"))
        match = r.match("/about")
        assert match is not None
        assert match.entry.name == "first"

    def test_broad_entry_shadows_later_ones(self) -> None:
        r = _router(_entry("/", exact=False, name="catch-all"), _entry("/about", name="about"))
        match = r.match("/about")
        assert match is not None
        assert match.entry.name == "catch-all"

    def test_narrow_entry_before_broad_entry(self) -> None:
        r = _router(_entry("/about", name="about"), _entry("/", exact=False, name="catch-all"))
        assert r.match("/about").entry.name == "about"  # type: ignore[union-attr]
        assert r.match("/other").entry.name == "catch-all"  # type: ignore[union-attr]

    def test_routes_keep_registration_order(self) -> None:
        r = _router(_entry("/b"), _entry("/a"), _entry("/c"))
        assert [e.path for e in r.routes] == ["/b", "/a", "/c"]


class TestParams:
    def test_str_param(self) -> None:
        match = _router(_entry("/users/{name}")).match("/users/ada")
        assert match is not None
        assert match.path_params == {"name": "ada"}
        assert match.props == {"name": "ada"}

    def test_int_param_is_converted(self) -> None:
        match = _router(_entry("/users/{id:int}")).match("/users/42")
        assert match is not None
        assert match.path_params == {"id": "42"}
        assert match.props == {"id": 42}

    def test_int_param_rejects_text(self) -> None:
        assert _router(_entry("/users/{id:int}")).match("/users/ada") is None

    def test_float_param(self) -> None:
        match = _router(_entry("/price/{amount:float}")).match("/price/9.5")
        assert match is not None
        assert match.props == {"amount": 9.5}

    def test_path_param_consumes_rest(self) -> None:
        match = _router(_entry("/files/{filepath:path}")).match("/files/a/b/c.txt")
        assert match is not None
        assert match.props == {"filepath": "a/b/c.txt"}

    def test_prefix_entry_with_param(self) -> None:
        match = _router(_entry("/users/{id:int}", exact=False)).match("/users/7/settings")
        assert match is not None
        assert match.props == {"id": 7}

    def test_duplicate_param_rejected(self) -> None:
        r = Router()
        with pytest.raises(ConfigurationError, match="Duplicate parameter"):
            r.add(_entry("/a/{id}/b/{id}"))


class TestCompile:
    def test_add_after_compile_raises(self) -> None:
        r = _router(_entry("/"))
        with pytest.raises(RuntimeError, match="after compilation"):
            r.add(_entry("/about"))

    def test_malformed_path_fails_at_add(self) -> None:
        r = Router()
        with pytest.raises(ConfigurationError):
            r.add(_entry("/users/<id>"))
