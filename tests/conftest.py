"""Shared fixtures for lnkresolve tests."""

import struct

import pytest

from lnkresolve._constants import LINK_CLSID

CLSID_MY_COMPUTER = b"\xe0\x4f\xd0\x20\xea\x3a\x69\x10\xa2\xd8\x08\x00\x2b\x30\x30\x9d"


def _build_header(flags: int, attrs: int) -> bytes:
    hdr = bytearray(0x4C)
    struct.pack_into("<I", hdr, 0, 0x4C)  # HeaderSize
    hdr[4:20] = LINK_CLSID
    struct.pack_into("<I", hdr, 20, flags)  # LinkFlags
    struct.pack_into("<I", hdr, 24, attrs)  # FileAttributes
    struct.pack_into("<I", hdr, 60, 1)  # ShowCommand: SW_SHOWNORMAL
    return bytes(hdr)


def _build_idlist() -> bytes:
    """IDList holding a single My Computer root item."""
    body = b"\x1f\x50" + CLSID_MY_COMPUTER
    items = struct.pack("<H", len(body) + 2) + body
    items += struct.pack("<H", 0)  # terminator
    return struct.pack("<H", len(items)) + items


def _build_linkinfo(base: str, suffix: str, unicode_fields: bool) -> bytes:
    """LinkInfo with VolumeID, ANSI paths and optionally Unicode paths."""
    vol_id = bytearray()
    vol_id += struct.pack("<I", 0)  # VolumeIDSize (fill later)
    vol_id += struct.pack("<I", 3)  # DriveType: FIXED
    vol_id += struct.pack("<I", 0x4A2D5E79)  # DriveSerialNumber
    vol_id += struct.pack("<I", 0x10)  # VolumeLabelOffset
    vol_id += b"\x00"
    struct.pack_into("<I", vol_id, 0, len(vol_id))

    base_ansi = base.encode("cp1252", errors="replace") + b"\x00"
    suffix_ansi = suffix.encode("cp1252", errors="replace") + b"\x00"
    base_uni = base.encode("utf-16-le") + b"\x00\x00"
    suffix_uni = suffix.encode("utf-16-le") + b"\x00\x00"

    hdr_size = 0x24 if unicode_fields else 0x1C
    vol_offset = hdr_size
    base_offset = vol_offset + len(vol_id)
    suffix_offset = base_offset + len(base_ansi)
    uni_base_offset = suffix_offset + len(suffix_ansi)
    uni_suffix_offset = uni_base_offset + len(base_uni)

    info = bytearray()
    info += struct.pack("<I", 0)  # LinkInfoSize (fill later)
    info += struct.pack("<I", hdr_size)  # LinkInfoHeaderSize
    info += struct.pack("<I", 0x01)  # Flags: VolumeIDAndLocalBasePath
    info += struct.pack("<I", vol_offset)  # VolumeIDOffset
    info += struct.pack("<I", base_offset)  # LocalBasePathOffset
    info += struct.pack("<I", 0)  # CommonNetworkRelativeLinkOffset
    info += struct.pack("<I", suffix_offset)  # CommonPathSuffixOffset
    if unicode_fields:
        info += struct.pack("<I", uni_base_offset)  # LocalBasePathOffsetUnicode
        info += struct.pack("<I", uni_suffix_offset)  # CommonPathSuffixOffsetUnicode
    info += vol_id
    info += base_ansi
    info += suffix_ansi
    if unicode_fields:
        info += base_uni
        info += suffix_uni
    struct.pack_into("<I", info, 0, len(info))
    return bytes(info)


def build_test_lnk(
    base: str,
    suffix: str = "",
    *,
    directory: bool = False,
    unicode: bool = False,
    unicode_fields: bool | None = None,
    id_list: bool = True,
    pad_to: int = 0x100,
) -> bytes:
    """Pack a minimal .lnk whose LinkInfo holds *base* + *suffix*.

    *unicode* sets the IsUnicode flag; *unicode_fields* (default: same as
    *unicode*) controls whether LinkInfo carries the Unicode offset fields.
    The result is zero-padded up to *pad_to* bytes.
    """
    if unicode_fields is None:
        unicode_fields = unicode

    flags = 0x02  # HasLinkInfo
    if id_list:
        flags |= 0x01
    if unicode:
        flags |= 0x80
    attrs = 0x10 if directory else 0x20  # DIRECTORY / ARCHIVE

    out = bytearray(_build_header(flags, attrs))
    if id_list:
        out += _build_idlist()
    out += _build_linkinfo(base, suffix, unicode_fields)
    out += struct.pack("<I", 0)  # TerminalBlock
    if len(out) < pad_to:
        out += bytes(pad_to - len(out))
    return bytes(out)


def link_info_start(data: bytes) -> int:
    """Offset of LinkInfo in a buffer produced by :func:`build_test_lnk`."""
    if data[0x14] & 0x01:
        return 0x4C + struct.unpack_from("<H", data, 0x4C)[0] + 2
    return 0x4C


@pytest.fixture
def make_lnk():
    """Factory fixture wrapping :func:`build_test_lnk`."""
    return build_test_lnk


@pytest.fixture
def ascii_file_lnk():
    return build_test_lnk("C:\\test\\a.txt")


@pytest.fixture
def ascii_dir_lnk():
    return build_test_lnk("C:\\test", directory=True)


@pytest.fixture
def unicode_file_lnk():
    return build_test_lnk("C:\\test\\\u2606.txt", unicode=True)


@pytest.fixture
def unicode_dir_lnk():
    return build_test_lnk("C:\\test\\\u2606", directory=True, unicode=True)


@pytest.fixture
def link_info_offset():
    """Helper returning the LinkInfo offset of a built .lnk buffer."""
    return link_info_start
