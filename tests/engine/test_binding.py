"""Tests for binding plans and the BindingApplier."""

import asyncio

import pytest

from fetchcell.contracts import BindingError, FetchSpec, UnknownFetchTypeError
from fetchcell.engine import BindingApplier, BindVariable, ExecuteScript, InstallStylesheet, plan_binding
from fetchcell.environment import Environment


class TestPlanBinding:
    """plan_binding() is pure: it only describes the side effect."""

    @pytest.mark.parametrize("fetch_type", ["text", "json", "blob"])
    def test_variable_kinds(self, fetch_type: str) -> None:
        spec = FetchSpec(fetch_type=fetch_type, file_path="a", var_name="data")
        assert plan_binding(spec, {"k": 1}) == BindVariable(name="data", value={"k": 1})

    def test_script_from_bytes(self) -> None:
        spec = FetchSpec(fetch_type="js", file_path="lib.js")
        assert plan_binding(spec, b"x = 1") == ExecuteScript(content=b"x = 1", origin="lib.js")

    def test_script_from_text(self) -> None:
        spec = FetchSpec(fetch_type="js", file_path="lib.js")
        assert plan_binding(spec, "x = 1") == ExecuteScript(content=b"x = 1", origin="lib.js")

    def test_stylesheet_keyed_by_path(self) -> None:
        spec = FetchSpec(fetch_type="css", file_path="theme.css")
        assert plan_binding(spec, b"h1 {}") == InstallStylesheet(text="h1 {}", key="theme.css")

    def test_unknown_kind(self) -> None:
        spec = FetchSpec(fetch_type="xml", file_path="feed.xml", var_name="feed")
        with pytest.raises(UnknownFetchTypeError) as exc_info:
            plan_binding(spec, "<feed/>")
        assert exc_info.value.detail == "unknown fetch type"


class TestBindingApplier:
    """Tests for BindingApplier.apply()."""

    def test_bind_variable_last_write_wins(self, environment: Environment, applier: BindingApplier) -> None:
        asyncio.run(applier.apply(BindVariable(name="x", value="first")))
        asyncio.run(applier.apply(BindVariable(name="x", value="second")))

        assert environment.namespace["x"] == "second"

    def test_execute_script_returns_marker(self, environment: Environment, applier: BindingApplier) -> None:
        detail = asyncio.run(applier.apply(ExecuteScript(content=b"y = 2", origin="lib.js")))

        assert detail == "script loaded (5 bytes)"
        assert environment.namespace["y"] == 2

    def test_execute_script_failure(self, applier: BindingApplier) -> None:
        with pytest.raises(BindingError, match="NameError"):
            asyncio.run(applier.apply(ExecuteScript(content=b"undefined_name", origin="bad.js")))

    def test_install_stylesheet_is_idempotent_per_key(self, environment: Environment, applier: BindingApplier) -> None:
        asyncio.run(applier.apply(InstallStylesheet(text="a {}", key="style.css")))
        asyncio.run(applier.apply(InstallStylesheet(text="b {}", key="style.css")))

        assert environment.stylesheets.keys() == ["style.css"]

    def test_unsupported_command(self, applier: BindingApplier) -> None:
        with pytest.raises(TypeError, match="unsupported binding command"):
            asyncio.run(applier.apply("not a command"))  # type: ignore[arg-type]
