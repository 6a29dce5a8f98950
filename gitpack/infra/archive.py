# -----------------------------------------------------------------------------
# ARCHIVE EXTRACTION
# -----------------------------------------------------------------------------
# Responsibility: Unpack a downloaded repository zip into the workspace.
#
# Rules:
# - Entries whose destination already exists are skipped, never overwritten
# - Entries that would land outside the destination are rejected, including
#   entries routed outside through a previously extracted symlink
# - POSIX permission bits are restored so repository scripts stay executable
# - Symlink entries are recreated as symlinks
# -----------------------------------------------------------------------------

import os
import shutil
import stat
import zipfile
from pathlib import Path

from rich.console import Console
from rich.markup import escape

console = Console()


class ArchiveError(Exception):
    """Raised when an archive is corrupt, unsafe, or has no repository root."""

    pass


def _destination(dest_dir: Path, member_name: str) -> Path:
    """Resolve where an entry lands, refusing anything outside dest_dir."""
    target = Path(os.path.normpath(dest_dir / member_name))
    if os.path.commonpath([dest_dir, target]) != str(dest_dir):
        raise ArchiveError(f"Archive entry escapes destination: {member_name}")
    return target


def _check_resolved(real_dest: str, target: Path, member_name: str) -> None:
    """Refuse an entry whose parent directory resolves outside the destination."""
    parent = os.path.realpath(target.parent)
    if os.path.commonpath([real_dest, parent]) != real_dest:
        raise ArchiveError(f"Archive entry escapes destination through a symlink: {member_name}")


def _extract_member(zf: zipfile.ZipFile, info: zipfile.ZipInfo, target: Path) -> None:
    mode = info.external_attr >> 16

    if info.is_dir():
        target.mkdir(parents=True, exist_ok=True)
        return

    target.parent.mkdir(parents=True, exist_ok=True)

    if stat.S_ISLNK(mode):
        link_target = zf.read(info).decode("utf-8")
        os.symlink(link_target, target)
        return

    with zf.open(info) as src, open(target, "wb") as out:
        shutil.copyfileobj(src, out)

    permissions = stat.S_IMODE(mode)
    if permissions:
        os.chmod(target, permissions)


def archive_root(names: list[str]) -> str | None:
    """The single top-level directory shared by every entry, if there is one."""
    tops = {name.split("/", 1)[0] for name in names if name}
    if len(tops) != 1:
        return None
    top = tops.pop()
    if not any(name.startswith(top + "/") for name in names):
        return None
    return top


def extract_archive(archive_path: Path, dest_dir: Path, default_root: str) -> Path:
    """
    Extract a repository zip and return the repository directory.

    Args:
        archive_path: The downloaded zip file.
        dest_dir: Directory to extract into.
        default_root: Repository directory name to use when the archive does
            not have exactly one top-level directory.

    Returns:
        Path of the extracted repository root.

    Raises:
        ArchiveError: If the archive is unreadable or unsafe, or the root
            directory does not exist after extraction.
    """
    dest_dir = Path(os.path.abspath(dest_dir))
    real_dest = os.path.realpath(dest_dir)
    console.print(f"[cyan][ARCHIVE] Extracting {escape(Path(archive_path).name)}...[/cyan]")

    try:
        with zipfile.ZipFile(archive_path) as zf:
            members = zf.infolist()
            for info in members:
                target = _destination(dest_dir, info.filename)
                if os.path.lexists(target):
                    continue
                # earlier symlink entries may redirect this one
                _check_resolved(real_dest, target, info.filename)
                _extract_member(zf, info, target)
    except zipfile.BadZipFile as e:
        raise ArchiveError(f"Could not read archive {archive_path}: {e}") from e

    root = archive_root([info.filename for info in members]) or default_root
    repo_dir = dest_dir / root
    if not repo_dir.is_dir():
        raise ArchiveError(f"Repository directory {root} not found in archive")

    console.print(f"[green][ARCHIVE] Extracted {len(members)} entries to {escape(str(repo_dir))}[/green]")
    return repo_dir
