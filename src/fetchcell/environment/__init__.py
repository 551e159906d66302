"""Binding surfaces: the namespace, script execution and stylesheets.

Environment bundles the three so that one object can be passed to the
binding layer and shared across evaluations.
"""

from dataclasses import dataclass, field

from fetchcell.environment.namespace import Namespace
from fetchcell.environment.scripts import LoadedScript, ScriptHandle, ScriptRunner
from fetchcell.environment.stylesheets import InstalledStylesheet, StylesheetRegistry


@dataclass
class Environment:
    """Long-lived state that directives mutate.

    There is no teardown; bindings persist across evaluations until
    overwritten.
    """

    namespace: Namespace = field(default_factory=Namespace)
    stylesheets: StylesheetRegistry = field(default_factory=StylesheetRegistry)
    scripts: ScriptRunner = field(init=False)

    def __post_init__(self) -> None:
        self.scripts = ScriptRunner(self.namespace)


__all__ = [
    "Environment",
    "InstalledStylesheet",
    "LoadedScript",
    "Namespace",
    "ScriptHandle",
    "ScriptRunner",
    "StylesheetRegistry",
]
