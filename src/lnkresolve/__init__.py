"""lnkresolve -- resolve Windows .lnk shortcut targets (MS-SHLLINK)."""

__version__ = "0.1.0"

from ._types import TargetType
from .listing import has_subdirectory, iter_resolved
from .resolver import (
    MalformedInputError,
    ResolveError,
    TargetTypeMismatchError,
    links_to_directory,
    resolve,
)

__all__ = [
    "resolve",
    "links_to_directory",
    "iter_resolved",
    "has_subdirectory",
    "TargetType",
    "ResolveError",
    "MalformedInputError",
    "TargetTypeMismatchError",
    "__version__",
]
