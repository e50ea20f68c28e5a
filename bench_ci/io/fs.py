"""bench_ci.io.fs

Atomic, stable filesystem writers.

Why this module exists
----------------------
Packaged artifacts are uploaded and then read back by the comparison service
by URL. A half-written ``<sha>.json`` left behind by an interrupted copy would
be published as-is, so every write here goes to a temp file in the target
directory first and is moved into place with ``os.replace``.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import Callable, List


def _atomic_write(path: Path, write_fn: Callable, *, mode: str, encoding: str = "utf-8") -> None:
    """Write a file atomically by writing to a temp file and os.replace()."""

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f"{p.name}.", suffix=".tmp", dir=str(p.parent))
    tmp_path = Path(tmp_name)

    try:
        if "b" in mode:
            f = os.fdopen(fd, mode)
        else:
            f = os.fdopen(fd, mode, encoding=encoding)
        with f:
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())

        os.replace(tmp_path, p)
    finally:
        # If os.replace fails, best-effort cleanup of the temp file.
        try:
            if tmp_path.exists():
                tmp_path.unlink()
        except OSError:
            pass


def write_text_atomic(path: Path, text: str, *, encoding: str = "utf-8") -> None:
    """Write UTF-8 text atomically."""

    def _write(f) -> None:
        f.write(text)

    _atomic_write(Path(path), _write, mode="w", encoding=encoding)


def copy_file_atomic(src: Path, dst: Path) -> Path:
    """Copy *src* to *dst* byte-for-byte, atomically. Returns *dst*.

    Raises FileNotFoundError if *src* does not exist.
    """

    src_path = Path(src)
    if not src_path.is_file():
        raise FileNotFoundError(f"Source file not found: {src_path}")

    def _write(f) -> None:
        with src_path.open("rb") as fin:
            shutil.copyfileobj(fin, f)

    dst_path = Path(dst)
    _atomic_write(dst_path, _write, mode="wb")
    return dst_path


def read_text(path: Path, *, encoding: str = "utf-8") -> str:
    with Path(path).open("r", encoding=encoding) as f:
        return f.read()


def reset_dir(path: Path) -> Path:
    """Remove *path* if it exists and recreate it empty."""

    p = Path(path)
    if p.exists():
        shutil.rmtree(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


def empty_dir(path: Path) -> List[str]:
    """Best-effort removal of every entry inside *path* (the dir itself stays).

    Never raises; returns a list of human-readable errors instead.
    """

    errors: List[str] = []
    p = Path(path)
    if not p.exists() or not p.is_dir():
        return errors

    for child in p.iterdir():
        try:
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()
        except OSError as e:
            errors.append(f"{child}: {e}")
    return errors
