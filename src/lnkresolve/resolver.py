"""Resolve the target path of a Windows .lnk file (MS-SHLLINK).

The decoder runs as a strict pipeline over an immutable buffer:

1. header validation (minimum size and the ShellLink class identifier),
2. LinkFlags / FileAttributes decoding and the caller's target-type check,
3. locating the LinkInfo structure behind the optional LinkTargetIDList,
4. extracting LocalBasePath + CommonPathSuffix in ANSI or UTF-16LE.

Every read is bounds-checked; anything that would leave the buffer raises
:class:`MalformedInputError`.
"""

import codecs
import logging
import struct
from pathlib import Path

from ._constants import (
    ANSI_CODEPAGE,
    CLSID_OFFSET,
    FILE_ATTRIBUTE_DIRECTORY,
    FILE_ATTRIBUTES_OFFSET,
    HAS_LINK_TARGET_ID_LIST,
    HEADER_SIZE,
    ID_LIST_SIZE_FIELD,
    IS_UNICODE,
    LI_COMMON_PATH_SUFFIX,
    LI_COMMON_PATH_SUFFIX_UNICODE,
    LI_HEADER_SIZE,
    LI_LEGACY_HEADER_SIZE,
    LI_LOCAL_BASE_PATH,
    LI_LOCAL_BASE_PATH_UNICODE,
    LINK_CLSID,
    LINK_FLAGS_OFFSET,
    MIN_LINK_SIZE,
)
from ._types import Source, TargetType
from ._util import find_null, find_utf16le_null

LOGGER = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------
class ResolveError(Exception):
    """Base class for errors raised while resolving a shortcut."""


class MalformedInputError(ResolveError):
    """Raised when data is not a Shell Link or its offsets leave the buffer."""


class TargetTypeMismatchError(ResolveError):
    """Raised when the link's target kind contradicts the requested type."""

    def __init__(self, expected: TargetType, is_directory: bool):
        self.expected = expected
        self.is_directory = is_directory
        actual = "directory" if is_directory else "file"
        super().__init__(f"Link points to a {actual}, expected: {expected.value}")


# ---------------------------------------------------------------------------
# Low-level readers
# ---------------------------------------------------------------------------
def _check_range(data, off, size):
    if off + size > len(data):
        raise MalformedInputError(
            f"Read of {size} byte(s) at 0x{off:X} runs past the end of the "
            f"{len(data)}-byte buffer"
        )


def _read_u8(data, off):
    _check_range(data, off, 1)
    return data[off]


def _read_u16(data, off):
    _check_range(data, off, 2)
    return struct.unpack_from("<H", data, off)[0]


def _read_u32(data, off):
    _check_range(data, off, 4)
    return struct.unpack_from("<I", data, off)[0]


def _read_ansi_string(data, off, codepage):
    length = find_null(data, off)
    if length < 0:
        raise MalformedInputError(f"Unterminated 8-bit string at 0x{off:X}")
    return data[off : off + length].decode(codepage, errors="replace")


def _read_utf16_string(data, off):
    length = find_utf16le_null(data, off)
    if length < 0:
        raise MalformedInputError(f"Unterminated UTF-16 string at 0x{off:X}")
    return data[off : off + length].decode("utf-16-le", errors="replace")


# ---------------------------------------------------------------------------
# Pipeline stages
# ---------------------------------------------------------------------------
def _validate_header(data: bytes) -> None:
    if len(data) < MIN_LINK_SIZE:
        raise MalformedInputError(
            f"Data too short for a Shell Link ({len(data)} bytes, "
            f"need >= {MIN_LINK_SIZE})"
        )
    if data[CLSID_OFFSET : CLSID_OFFSET + len(LINK_CLSID)] != LINK_CLSID:
        raise MalformedInputError("Data is not in Shell Link format (bad CLSID)")


def _check_target_type(is_directory: bool, target_type: TargetType) -> None:
    if (target_type is TargetType.DIRECTORY and not is_directory) or (
        target_type is TargetType.FILE and is_directory
    ):
        raise TargetTypeMismatchError(target_type, is_directory)


def _link_info_offset(data: bytes, link_flags: int) -> int:
    """Return the offset of LinkInfo, skipping the LinkTargetIDList if any."""
    id_list_length = 0
    if link_flags & HAS_LINK_TARGET_ID_LIST:
        id_list_length = _read_u16(data, HEADER_SIZE) + ID_LIST_SIZE_FIELD
    return HEADER_SIZE + id_list_length


def _has_unicode_paths(data: bytes, start: int, link_flags: int) -> bool:
    # A header larger than the legacy 28 bytes stands in for the formal
    # "LinkInfoHeaderSize >= 0x24" rule.
    if not link_flags & IS_UNICODE:
        return False
    return _read_u32(data, start + LI_HEADER_SIZE) > LI_LEGACY_HEADER_SIZE


def _extract_target(data: bytes, start: int, is_unicode: bool, codepage: str) -> str:
    if is_unicode:
        base_off = start + _read_u32(data, start + LI_LOCAL_BASE_PATH_UNICODE)
        suffix_off = start + _read_u32(data, start + LI_COMMON_PATH_SUFFIX_UNICODE)
        base = _read_utf16_string(data, base_off)
        suffix = _read_utf16_string(data, suffix_off)
    else:
        # Only the low byte of each ANSI offset field is consulted.
        base_off = start + _read_u8(data, start + LI_LOCAL_BASE_PATH)
        suffix_off = start + _read_u8(data, start + LI_COMMON_PATH_SUFFIX)
        base = _read_ansi_string(data, base_off, codepage)
        suffix = _read_ansi_string(data, suffix_off, codepage)

    LOGGER.debug(
        "LinkInfo@0x%X %s base@0x%X suffix@0x%X",
        start,
        "UTF-16" if is_unicode else codepage,
        base_off,
        suffix_off,
    )
    return base + suffix


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def links_to_directory(data: bytes) -> bool:
    """Return True if the Shell Link in *data* marks its target a directory.

    Raises :class:`MalformedInputError` if *data* is not a Shell Link.
    """
    _validate_header(data)
    return bool(data[FILE_ATTRIBUTES_OFFSET] & FILE_ATTRIBUTE_DIRECTORY)


def resolve(
    source: Source,
    target_type: TargetType | str = TargetType.ANY,
    *,
    codepage: str = ANSI_CODEPAGE,
) -> str:
    """Resolve the absolute target path stored in a .lnk file.

    Args:
        source: Raw bytes of a .lnk file, or a file path (str or Path) to
            read them from.
        target_type: Only resolve if the link points to this kind of entity.
            Accepts a :class:`TargetType` or its value (``"file"`` etc.).
        codepage: Encoding of 8-bit (non-Unicode) path strings.

    Raises:
        MalformedInputError: The data is too short, is not a Shell Link, or
            its offsets point outside the buffer.
        TargetTypeMismatchError: The target kind contradicts *target_type*.
        LookupError: *codepage* is not a known codec.
    """
    codecs.lookup(codepage)
    if isinstance(source, (str, Path)):
        data = Path(source).read_bytes()
    else:
        data = bytes(source)
    target_type = TargetType(target_type)

    _validate_header(data)

    link_flags = data[LINK_FLAGS_OFFSET]
    is_directory = bool(data[FILE_ATTRIBUTES_OFFSET] & FILE_ATTRIBUTE_DIRECTORY)
    _check_target_type(is_directory, target_type)

    start = _link_info_offset(data, link_flags)
    is_unicode = _has_unicode_paths(data, start, link_flags)
    target = _extract_target(data, start, is_unicode, codepage)
    if not target:
        raise MalformedInputError(f"LinkInfo at 0x{start:X} holds an empty path")
    return target
