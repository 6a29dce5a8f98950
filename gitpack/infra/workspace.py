# -----------------------------------------------------------------------------
# WORKSPACE SCOPES
# -----------------------------------------------------------------------------
# Acquire / run / always release helpers for the per-invocation temp
# directory and the process working directory.
# -----------------------------------------------------------------------------

import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

WORKSPACE_PREFIX = "gitpack"


@contextmanager
def scoped_workspace(prefix: str = WORKSPACE_PREFIX) -> Iterator[Path]:
    """Temporary directory that is removed on every exit path."""
    with tempfile.TemporaryDirectory(prefix=prefix, ignore_cleanup_errors=True) as tmp:
        yield Path(tmp)


@contextmanager
def working_directory(path: Path) -> Iterator[Path]:
    """Run the block with `path` as the process working directory."""
    previous = os.getcwd()
    os.chdir(path)
    try:
        yield Path(path)
    finally:
        os.chdir(previous)
