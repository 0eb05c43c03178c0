"""Filesystem helpers."""

import os
import tempfile
from pathlib import Path


def write_bytes_atomic(path: Path, data: bytes) -> None:
    """Write bytes to a file atomically (temp file in the same directory, then replace)."""
    path = Path(path)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix='.tmp_')
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


def write_text_atomic(path: Path, text: str) -> None:
    """Write UTF-8 text to a file atomically."""
    write_bytes_atomic(path, text.encode('utf-8'))


def is_temp_file(path: Path) -> bool:
    """True for temp files left behind by an interrupted atomic write."""
    return Path(path).name.startswith('.tmp_')
