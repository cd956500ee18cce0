"""Tests for Application bootstrap, accessors and the active request stack."""

import os
from pathlib import Path

import pytest

from keystone.config import ConfigContainer
from keystone.display import JinjaParser, ViewManager
from keystone.errors import ConfigurationError, PropertyNotFoundError
from keystone.foundation import (
    Application,
    Environment,
    LocalRequest,
    Router,
    Security,
)
from keystone.services import ServiceContainer


class TestConstruction:
    """Test application bootstrap."""

    def test_demo_application_scenario(self, container: ServiceContainer, app_dir: Path) -> None:
        """Verify the demo scenario: name and namespace are kept as given."""
        app = container.resolve("application", "demo", str(app_dir), "Demo", "dev")

        assert isinstance(app, Application)
        assert app.get_name() == "demo"
        assert app.get_namespace() == "Demo"
        assert app.environment.name == "dev"

    def test_path_is_absolute_normalised_and_trailing_separated(
        self, container: ServiceContainer, app_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Verify relative and unnormalised paths are resolved."""
        monkeypatch.chdir(app_dir.parent)

        app = container.resolve("application", "demo", "./demo/../demo", "Demo", "dev")

        assert os.path.isabs(app.path)
        assert app.path.endswith(os.sep)
        assert app.get_path() == os.path.realpath(app_dir) + os.sep

    def test_accepts_path_objects(self, container: ServiceContainer, app_dir: Path) -> None:
        """Verify pathlib paths are accepted as the application path."""
        app = container.resolve("application", "demo", app_dir, "Demo", "dev")

        assert app.path == os.path.realpath(app_dir) + os.sep

    def test_nonexistent_path_raises_configuration_error(
        self, container: ServiceContainer
    ) -> None:
        """Verify a missing directory aborts construction."""
        with pytest.raises(ConfigurationError, match="does not exist"):
            container.resolve("application", "demo", "/nonexistent", "Demo", "dev")

    def test_file_path_raises_configuration_error(
        self, container: ServiceContainer, tmp_path: Path
    ) -> None:
        """Verify a regular file is not accepted as an application path."""
        file_path = tmp_path / "not-a-dir"
        file_path.write_text("")

        with pytest.raises(ConfigurationError):
            container.resolve("application", "demo", str(file_path), "Demo", "dev")

    def test_invalid_path_constructs_no_collaborators(self, container: ServiceContainer) -> None:
        """Verify nothing is resolved from the container when the path is invalid."""
        resolved: list[str] = []
        original_resolve = container.resolve

        def tracking_resolve(name, *args, **kwargs):
            resolved.append(name)
            return original_resolve(name, *args, **kwargs)

        container.resolve = tracking_resolve  # type: ignore[method-assign]

        with pytest.raises(ConfigurationError):
            Application(container, "demo", "/nonexistent", "Demo", "dev")
        assert resolved == []

    def test_collaborators_are_built_from_container(self, app: Application) -> None:
        """Verify every collaborator has the expected type and is bound to the app."""
        assert isinstance(app.config, ConfigContainer)
        assert isinstance(app.environment, Environment)
        assert isinstance(app.security, Security)
        assert isinstance(app.view_manager, ViewManager)
        assert isinstance(app.router, Router)
        assert app.environment.app is app
        assert app.environment.config is app.config

    def test_config_is_scoped_to_app_path_with_global_parent(
        self, app: Application, global_config: ConfigContainer
    ) -> None:
        """Verify the config searches the app path and falls back to the global config."""
        global_config.set("site.title", "Keystone")

        assert app.config.paths == [Path(app.path)]
        assert app.config.parent is global_config
        assert app.config.get("site.title") == "Keystone"

    def test_view_manager_uses_app_path_and_cache(self, app: Application) -> None:
        """Verify the view manager finds templates in the app and caches under it."""
        assert app.view_manager.finder.paths == [Path(app.path)]
        assert app.view_manager.cache_path == Path(app.path + "cache")
        parser = app.view_manager.parsers["j2"]
        assert isinstance(parser, JinjaParser)
        assert parser.paths == [str(Path(app.path))]

    def test_collaborator_failure_propagates(
        self, container: ServiceContainer, app_dir: Path
    ) -> None:
        """Verify errors from collaborator constructors are not wrapped."""

        def failing_router(container, app):
            raise RuntimeError("router unavailable")

        container.add("router", failing_router)

        with pytest.raises(RuntimeError, match="router unavailable"):
            container.resolve("application", "demo", str(app_dir), "Demo", "dev")

    def test_collaborators_are_not_replaced(self, app: Application) -> None:
        """Verify accessors return the same owned instances every time."""
        assert app.get_config() is app.config
        assert app.get_environment() is app.environment
        assert app.get_router() is app.router
        assert app.get_view_manager() is app.view_manager

    def test_applications_coexist_independently(
        self, container: ServiceContainer, tmp_path: Path
    ) -> None:
        """Verify two applications in one container share no collaborators or stack."""
        (tmp_path / "one").mkdir()
        (tmp_path / "two").mkdir()
        one = container.resolve("application", "one", str(tmp_path / "one"), "One", "dev")
        two = container.resolve("application", "two", str(tmp_path / "two"), "Two", "prod")

        one.set_active_request(one.get_request("/a"))

        assert one.config is not two.config
        assert one.router is not two.router
        assert two.get_active_request() is None
        assert one.config.parent is two.config.parent


class TestGetProperty:
    """Test dynamic accessor lookup."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("name", "demo"),
            ("namespace", "Demo"),
            ("viewManager", "view_manager"),
            ("view_manager", "view_manager"),
            ("config", "config"),
        ],
    )
    def test_known_properties(self, app: Application, name: str, expected: str) -> None:
        """Verify names resolve through their get_* accessor."""
        value = app.get_property(name)

        if expected in ("view_manager", "config"):
            assert value is getattr(app, expected)
        else:
            assert value == expected

    def test_unknown_property_raises(self, app: Application) -> None:
        """Verify unknown names raise PropertyNotFoundError."""
        with pytest.raises(PropertyNotFoundError, match="colour"):
            app.get_property("colour")

    @pytest.mark.parametrize("name", ["property", "Property"])
    def test_lookup_helper_is_not_a_property(self, app: Application, name: str) -> None:
        """Verify get_property does not dispatch to itself."""
        with pytest.raises(PropertyNotFoundError, match=name):
            app.get_property(name)

    def test_accessors_needing_arguments_are_not_properties(
        self, app: Application, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Verify get_* methods with required parameters are not treated as properties."""
        monkeypatch.setattr(app, "get_greeting", lambda name: f"Hello {name}", raising=False)

        with pytest.raises(PropertyNotFoundError, match="greeting"):
            app.get_property("greeting")

    def test_property_not_found_is_attribute_error(self) -> None:
        """Verify PropertyNotFoundError can be caught as AttributeError."""
        assert issubclass(PropertyNotFoundError, AttributeError)


class TestGetRequest:
    """Test request construction."""

    def test_returns_local_request_for_cleaned_uri(self, app: Application) -> None:
        """Verify the URI is cleaned before the request is built."""
        request = app.get_request("/users//42/./profile/")

        assert isinstance(request, LocalRequest)
        assert request.uri == "/users/42/profile"
        assert request.app is app

    def test_uri_defaults_to_global_input_path_info(self, app: Application) -> None:
        """Verify the global input's path info is used when no URI is given."""
        request = app.get_request()

        assert request.uri == "/welcome"

    def test_default_uri_is_relative_to_base_url(
        self, container: ServiceContainer, app_dir: Path
    ) -> None:
        """Verify the environment's base URL is stripped from the global URI."""
        (app_dir / "config").mkdir()
        (app_dir / "config" / "environment.yaml").write_text("base_url: /welcome\n")
        app = container.resolve("application", "demo", str(app_dir), "Demo", "dev")

        assert app.get_request().uri == "/"

    def test_request_is_not_made_active(self, app: Application) -> None:
        """Verify get_request() leaves the request stack alone."""
        app.get_request("/a")

        assert app.get_active_request() is None
        assert len(app.requests) == 0

    def test_input_is_passed_to_request(self, app: Application) -> None:
        """Verify input variables reach the request's input."""
        request = app.get_request("/search", {"query": {"q": "keystone"}})

        assert request.input.get_param("q") == "keystone"


class TestActiveRequestStack:
    """Test the active request stack protocol."""

    def test_set_then_get_returns_same_request(self, app: Application) -> None:
        """Verify the pushed request is the active one."""
        request = app.get_request("/a")

        app.set_active_request(request)

        assert app.get_active_request() is request

    def test_reset_on_empty_stack_is_noop(self, app: Application) -> None:
        """Verify resetting an empty stack neither fails nor changes anything."""
        assert app.reset_active_request() is app
        assert app.get_active_request() is None
        assert len(app.requests) == 0

    def test_methods_chain(self, app: Application) -> None:
        """Verify push and pop return the application."""
        assert app.set_active_request(None) is app
        assert app.reset_active_request() is app

    def test_none_marker_counts_as_entry(self, app: Application) -> None:
        """Verify an explicit None marker occupies a stack slot."""
        outer = app.get_request("/outer")
        app.set_active_request(outer).set_active_request(None)

        assert app.get_active_request() is None
        assert len(app.requests) == 2

        app.reset_active_request()
        assert app.get_active_request() is outer

    @pytest.mark.parametrize(("pushes", "pops"), [(1, 0), (3, 1), (3, 2), (3, 3), (5, 4)])
    def test_n_pushes_m_pops(self, app: Application, pushes: int, pops: int) -> None:
        """Verify the top is the (N-M)-th pushed request, or None when N == M."""
        requests = [app.get_request(f"/r{i}") for i in range(pushes)]
        for request in requests:
            app.set_active_request(request)
        for _ in range(pops):
            app.reset_active_request()

        expected = requests[pushes - pops - 1] if pushes > pops else None
        assert app.get_active_request() is expected
        assert len(app.requests) == pushes - pops

    def test_get_does_not_mutate(self, app: Application) -> None:
        """Verify reading the active request leaves the stack unchanged."""
        app.set_active_request(app.get_request("/a"))

        app.get_active_request()
        app.get_active_request()

        assert len(app.requests) == 1
