import os

from errors import SourceLoadError


def _reason(e: OSError) -> str:
    return e.strerror or str(e)


def read_source(path: str) -> bytes:
    """Read a program file fully into memory.

    Every failure is reported as a SourceLoadError naming the stage that
    failed (open, seek, size or read) and the system reason.
    """
    try:
        f = open(path, "rb")
    except OSError as e:
        raise SourceLoadError(path, "open", _reason(e))

    with f:
        try:
            f.seek(0, os.SEEK_END)
            size = f.tell()
            f.seek(0)
        except OSError as e:
            raise SourceLoadError(path, "seek", _reason(e))

        if size < 0:
            raise SourceLoadError(path, "size", f"invalid file size {size}")

        try:
            data = f.read(size)
        except OSError as e:
            raise SourceLoadError(path, "read", _reason(e))

    if len(data) != size:
        raise SourceLoadError(path, "read", f"short read ({len(data)} of {size} bytes)")
    return bytes(data)
