# -----------------------------------------------------------------------------
# INFRASTRUCTURE LAYER
# -----------------------------------------------------------------------------
# Contains low-level infrastructure wrappers:
# - RepositoryFetcher: Archive download from the code-hosting service
# - extract_archive: Zip extraction into the workspace
# - scoped_workspace / working_directory: Always-released scopes
# -----------------------------------------------------------------------------

from .archive import ArchiveError, extract_archive
from .github_client import FetchError, RepositoryFetcher, build_archive_url
from .workspace import scoped_workspace, working_directory

__all__ = [
    "ArchiveError", "extract_archive",
    "FetchError", "RepositoryFetcher", "build_archive_url",
    "scoped_workspace", "working_directory",
]
