"""List directories, following .lnk shortcuts to their resolved targets."""

import logging
from collections.abc import Iterator
from pathlib import Path

from ._types import TargetType
from .resolver import ResolveError, resolve

LOGGER = logging.getLogger(__name__)

LNK_SUFFIX = ".lnk"


def _is_shortcut(path: Path) -> bool:
    return path.suffix.lower() == LNK_SUFFIX and path.is_file()


def _resolve_entry(path: Path, target_type: TargetType) -> Path | None:
    """Resolve one shortcut, or return None if it should be skipped."""
    try:
        target = Path(resolve(path, target_type))
    except (ResolveError, OSError) as e:
        LOGGER.debug("Skipping shortcut %s: %s", path, e)
        return None
    if not target.exists():
        LOGGER.debug("Skipping shortcut %s: target %s does not exist", path, target)
        return None
    return target


def _walk(
    directory: Path,
    target_type: TargetType,
    recursive: bool,
    seen: set[Path],
    strict: bool = False,
) -> Iterator[Path]:
    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        if strict:
            raise
        LOGGER.debug("Skipping directory %s: %s", directory, e)
        return
    seen.add(directory.resolve())
    for entry in entries:
        if _is_shortcut(entry):
            target = _resolve_entry(entry, target_type)
            if target is None:
                continue
            yield target
            if recursive and target.is_dir() and target.resolve() not in seen:
                yield from _walk(target, target_type, recursive, seen)
        elif entry.is_dir():
            yield entry
            if recursive and entry.resolve() not in seen:
                yield from _walk(entry, target_type, recursive, seen)
        else:
            yield entry


def iter_resolved(
    directory: str | Path,
    target_type: TargetType | str = TargetType.ANY,
    recursive: bool = False,
) -> Iterator[Path]:
    """Yield the entries of *directory*, replacing shortcuts by their targets.

    Shortcuts that fail to resolve, resolve to the wrong kind of entity
    (per *target_type*), or point at a path that does not exist are skipped.
    Other entries are yielded unchanged.  With *recursive*, subdirectories
    and directory targets are descended into; a directory already entered
    during the same walk is not entered again.  Nested directories that
    cannot be listed are skipped; an unreadable *directory* itself raises
    :class:`OSError` on first iteration.
    """
    return _walk(
        Path(directory), TargetType(target_type), recursive, set(), strict=True
    )


def has_subdirectory(directory: str | Path) -> bool:
    """Return True if *directory* holds a subdirectory or a directory shortcut.

    Unlike :func:`iter_resolved`, entries are checked in listing order and a
    shortcut counts once it resolves as a directory, whether or not its
    target exists locally.
    """
    for entry in Path(directory).iterdir():
        if entry.is_dir():
            return True
        if _is_shortcut(entry):
            try:
                resolve(entry, TargetType.DIRECTORY)
            except (ResolveError, OSError) as e:
                LOGGER.debug("Ignoring shortcut %s: %s", entry, e)
                continue
            return True
    return False
