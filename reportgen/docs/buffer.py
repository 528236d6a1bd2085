from __future__ import annotations

import os
import tempfile
from typing import Optional


class OutputWriteError(OSError):
    """The output artifact could not be written."""


class OutputBuffer:
    """Temporary file next to `out_path`, moved into place only on commit().

    Used as a context manager: leaving the block without commit() (for
    example because rendering raised) removes the temporary file, so no
    half-written document ever appears at `out_path`.
    """

    def __init__(self, out_path: str) -> None:
        self.out_path = os.path.abspath(out_path)
        self.path: Optional[str] = None

    def __enter__(self) -> "OutputBuffer":
        out_dir = os.path.dirname(self.out_path)
        base = os.path.basename(self.out_path)
        try:
            os.makedirs(out_dir, exist_ok=True)
            fd, self.path = tempfile.mkstemp(prefix=f".{base}.", suffix=".part", dir=out_dir)
            os.close(fd)
        except OSError as exc:
            raise OutputWriteError(f"Cannot write to {out_dir}: {exc}") from exc
        return self

    def commit(self) -> str:
        try:
            os.replace(self.path, self.out_path)
        except OSError as exc:
            raise OutputWriteError(f"Cannot save {self.out_path}: {exc}") from exc
        self.path = None
        return self.out_path

    def cleanup(self) -> None:
        if self.path and os.path.exists(self.path):
            os.remove(self.path)
        self.path = None

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()
