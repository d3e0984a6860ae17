"""Write-to-temp-then-rename helper for output files."""

import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO


@contextmanager
def atomic_output(path: str, mode: str = "wb", buffering: int = -1, **open_kwargs) -> Iterator[IO]:
    """
    Open a temporary file next to `path` and rename it over `path` on success.

    If the body raises, the temporary file is removed and `path` is left
    untouched, so a reader never sees a partially written output.
    """
    target = Path(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with open(fd, mode, buffering=buffering, **open_kwargs) as handle:
            yield handle
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
