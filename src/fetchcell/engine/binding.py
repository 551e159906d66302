# src/fetchcell/engine/binding.py
"""BindingApplier - turns a retrieved resource into its side effect.

Binding is split into two stages:

1. plan_binding(spec, resource) -> BindingCommand
   Pure. A dispatch table maps each FetchType to a planner that describes
   the side effect without performing it.

2. BindingApplier.apply(command) -> detail
   Performs the side effect against the Environment.

Binding modes:
- TEXT, JSON, BLOB -> BindVariable: write into the namespace (cannot fail)
- JS -> ExecuteScript: run the payload once (fails with BindingError)
- CSS -> InstallStylesheet: replace-by-key install (cannot fail)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import structlog

from fetchcell.contracts import FetchSpec, FetchType, UnknownFetchTypeError
from fetchcell.environment import Environment, InstalledStylesheet

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class BindVariable:
    name: str
    value: Any


@dataclass(frozen=True, slots=True)
class ExecuteScript:
    content: bytes
    origin: str


@dataclass(frozen=True, slots=True)
class InstallStylesheet:
    text: str
    key: str


BindingCommand = BindVariable | ExecuteScript | InstallStylesheet


def _plan_variable(spec: FetchSpec, resource: Any) -> BindingCommand:
    return BindVariable(name=spec.var_name, value=resource)


def _plan_script(spec: FetchSpec, resource: Any) -> BindingCommand:
    content = resource.encode("utf-8") if isinstance(resource, str) else bytes(resource)
    return ExecuteScript(content=content, origin=spec.file_path)


def _plan_stylesheet(spec: FetchSpec, resource: Any) -> BindingCommand:
    text = resource.decode("utf-8") if isinstance(resource, bytes | bytearray) else str(resource)
    return InstallStylesheet(text=text, key=spec.file_path)


_PLANNERS: dict[FetchType, Callable[[FetchSpec, Any], BindingCommand]] = {
    FetchType.TEXT: _plan_variable,
    FetchType.JSON: _plan_variable,
    FetchType.BLOB: _plan_variable,
    FetchType.JS: _plan_script,
    FetchType.CSS: _plan_stylesheet,
}


def plan_binding(spec: FetchSpec, resource: Any) -> BindingCommand:
    """Describe the side effect for a retrieved resource.

    Raises:
        UnknownFetchTypeError: If spec.fetch_type is not a recognised kind
    """
    kind = spec.kind
    if kind is None:
        raise UnknownFetchTypeError(spec.fetch_type)
    return _PLANNERS[kind](spec, resource)


class BindingApplier:
    """Applies binding commands to a shared Environment.

    Example:
        applier = BindingApplier(environment)
        await applier.apply(plan_binding(spec, "file contents"))
    """

    def __init__(self, environment: Environment) -> None:
        self._env = environment

    @property
    def environment(self) -> Environment:
        return self._env

    def bind_variable(self, name: str, value: Any) -> None:
        """Bind value under name; overwrites any previous binding."""
        self._env.namespace.bind(name, value)

    async def execute_script(self, content: bytes, origin: str) -> str:
        """Execute a script payload once.

        Returns:
            The loaded marker

        Raises:
            BindingError: If the script fails to load or run
        """
        return await self._env.scripts.execute(content, origin)

    def install_stylesheet(self, text: str, key: str) -> InstalledStylesheet:
        """Install a stylesheet, removing any previous one with the same key first."""
        return self._env.stylesheets.install(text, key)

    async def apply(self, command: BindingCommand) -> str | None:
        """Perform a planned side effect.

        Returns:
            A detail message when the binding mode produces one (scripts),
            otherwise None
        """
        match command:
            case BindVariable(name=name, value=value):
                self.bind_variable(name, value)
                return None
            case ExecuteScript(content=content, origin=origin):
                return await self.execute_script(content, origin)
            case InstallStylesheet(text=text, key=key):
                self.install_stylesheet(text, key)
                return None
        raise TypeError(f"unsupported binding command: {command!r}")
