"""MS-SHLLINK constants used to locate a shortcut's target path."""

# ---------------------------------------------------------------------------
# ANSI code page
# ---------------------------------------------------------------------------
# 8-bit LinkInfo strings are encoded with the code page of the system that
# created the link.  CP-1252 covers Western/English Windows and is a strict
# superset of ASCII; callers can override it per call.
ANSI_CODEPAGE = "cp1252"

# ---------------------------------------------------------------------------
# ShellLinkHeader
# ---------------------------------------------------------------------------
LINK_CLSID = b"\x01\x14\x02\x00\x00\x00\x00\x00\xc0\x00\x00\x00\x00\x00\x00\x46"

MIN_LINK_SIZE = 0xFF
HEADER_SIZE = 0x4C

CLSID_OFFSET = 0x04
LINK_FLAGS_OFFSET = 0x14
FILE_ATTRIBUTES_OFFSET = 0x18

# ---------------------------------------------------------------------------
# LinkFlags / FileAttributes bits
# ---------------------------------------------------------------------------
HAS_LINK_TARGET_ID_LIST = 0x01
IS_UNICODE = 0x80

FILE_ATTRIBUTE_DIRECTORY = 0x10

# IDListSize excludes its own two bytes.
ID_LIST_SIZE_FIELD = 2

# ---------------------------------------------------------------------------
# LinkInfo (offsets relative to the start of the structure)
# ---------------------------------------------------------------------------
LI_HEADER_SIZE = 0x04
LI_LOCAL_BASE_PATH = 0x10
LI_COMMON_PATH_SUFFIX = 0x18
LI_LOCAL_BASE_PATH_UNICODE = 0x1C
LI_COMMON_PATH_SUFFIX_UNICODE = 0x20

# Headers larger than this carry the two Unicode offset fields above.
LI_LEGACY_HEADER_SIZE = 28
