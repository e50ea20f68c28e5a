"""bench_ci.io

Filesystem contracts and IO helpers.

Design principle
----------------
Where the benchmark tool leaves its raw result and where packaged artifacts
are staged for upload is a public contract: the runner, the packager, the
local report renderer and the publisher all depend on it. This module
centralizes those rules so they evolve in one place.
"""

from __future__ import annotations

from .fs import copy_file_atomic, empty_dir, read_text, reset_dir, write_text_atomic
from .layout import ARTIFACT_EXTENSION, ResultsLayout, artifact_filename

__all__ = [
    "ARTIFACT_EXTENSION",
    "ResultsLayout",
    "artifact_filename",
    "copy_file_atomic",
    "empty_dir",
    "read_text",
    "reset_dir",
    "write_text_atomic",
]
