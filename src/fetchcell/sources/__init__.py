"""Resource sources used by the FetchExecutor.

Directives with isRelPath=True go to ParentContextSource, all others to
LocalSource.
"""

from fetchcell.sources.base import BaseSource, decode_payload
from fetchcell.sources.local import LocalSource
from fetchcell.sources.parent import ParentContextSource

__all__ = [
    "BaseSource",
    "LocalSource",
    "ParentContextSource",
    "decode_payload",
]
