"""Whole-file artifact writes."""

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

# Same permissions as a plain open(): rw for everyone, minus the umask.
_ARTIFACT_MODE = 0o666


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


@contextmanager
def open_artifact(filepath: str | Path) -> Iterator[BinaryIO]:
    """Open an artifact for a full rewrite.

    Bytes go to a temporary file next to the target, which replaces the target
    only once the block exits cleanly. The target therefore never holds stale
    trailing bytes from a longer previous run, nor a half-written artifact.

    Args:
        filepath: Final artifact path. Parent directories are created if missing.

    Yields:
        Binary file object to write to
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            yield f
        os.chmod(tmp_path, _ARTIFACT_MODE & ~_current_umask())
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
