"""Internal helpers for scanning null-terminated strings."""


def find_null(data: bytes, start: int = 0) -> int:
    """Find the first zero byte at or after *start*.

    Returns its offset relative to *start*, or ``-1`` if the data ends first.
    """
    pos = data.find(b"\x00", start)
    if pos < 0:
        return -1
    return pos - start


def find_utf16le_null(data: bytes, start: int = 0) -> int:
    """Find the first UTF-16LE null terminator (two zero bytes at even offset).

    Returns the byte offset of the null terminator relative to *start*,
    or ``-1`` if the data ends before one is found.  A trailing odd byte is
    not a complete code unit and never terminates the scan.  The result is
    always even.
    """
    pos = start
    end = len(data) - 1
    while pos < end:
        if data[pos] == 0 and data[pos + 1] == 0:
            return pos - start
        pos += 2
    return -1
