"""
Pytest configuration and fixtures for gitpack tests.
"""

import io
import sys
import zipfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from gitpack.config import GitPackConfig  # noqa: E402
from gitpack.core.placeholders import PlaceholderExpander  # noqa: E402


def build_zip(entries: dict, modes: dict | None = None) -> bytes:
    """
    Build an in-memory zip.

    Args:
        entries: name -> bytes/str content; names ending in "/" are directories.
        modes: name -> POSIX mode (including file type bits) stored in the entry.
    """
    modes = modes or {}
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, content in entries.items():
            info = zipfile.ZipInfo(name)
            if name in modes:
                info.external_attr = modes[name] << 16
            if isinstance(content, str):
                content = content.encode("utf-8")
            zf.writestr(info, content or b"")
    return buffer.getvalue()


def fake_response(status_code=200, body=b"", headers=None, reason="OK"):
    """A requests.Response stand-in usable as a context manager."""
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.headers = headers or {}
    response.iter_content.return_value = [body[i : i + 4] for i in range(0, len(body), 4)]
    return response


@pytest.fixture
def expander():
    """Expander with the default prefix and a known sudo user."""
    return PlaceholderExpander(prefix="/usr/local", sudo_user="builder")


@pytest.fixture
def config():
    """Config built without reading the real environment."""
    return GitPackConfig.from_env({})


@pytest.fixture
def zip_factory(tmp_path):
    """Write a zip built from entries to disk and return its path."""

    def _make(entries: dict, modes: dict | None = None, name: str = "repo.zip") -> Path:
        path = tmp_path / name
        path.write_bytes(build_zip(entries, modes))
        return path

    return _make


@pytest.fixture
def zip_bytes():
    """The build_zip helper, for tests that need archive bytes."""
    return build_zip


@pytest.fixture
def response_factory():
    """The fake_response helper, for tests that patch requests.get."""
    return fake_response
