# -----------------------------------------------------------------------------
# MANIFEST LOCATOR
# -----------------------------------------------------------------------------
# Responsibility: Find the `gitpack` section of a repository's manifest.
#
# Probe order (first usable hit wins):
#   <repo>/.gitpack.yaml, <repo>/.manifest.yaml, <repo>/.dep.yaml
#   then the same three names under ./, .gitpack/, .github/, .gitlab/, .meta/
#
# A candidate that is missing, unreadable, not YAML, or has no mapping under
# `gitpack` is skipped. Running out of candidates is "not found" (None), not
# an error.
# -----------------------------------------------------------------------------

from pathlib import Path
from typing import Any

import yaml
from rich.console import Console
from rich.markup import escape

console = Console()

MANIFEST_KEY = "gitpack"
MANIFEST_NAMES = (".gitpack.yaml", ".manifest.yaml", ".dep.yaml")
MANIFEST_DIRS = (".", ".gitpack", ".github", ".gitlab", ".meta")


def candidate_paths(repo_dir: Path) -> list[Path]:
    """All manifest locations for a repository, in priority order, without repeats."""
    repo_dir = Path(repo_dir)
    ordered = [repo_dir / name for name in MANIFEST_NAMES]
    ordered += [repo_dir / sub / name for sub in MANIFEST_DIRS for name in MANIFEST_NAMES]

    # pathlib drops "." segments, so <repo>/./x and <repo>/x compare equal
    return list(dict.fromkeys(ordered))


def try_load_manifest(path: Path) -> dict[str, Any] | None:
    """
    Load one candidate file.

    Returns:
        The mapping under `gitpack`, or None if the file is absent or unusable.
    """
    if not path.is_file():
        return None

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        console.print(f"[yellow][MANIFEST] Skipping {escape(str(path))}: {escape(str(e))}[/yellow]")
        return None

    if not isinstance(data, dict):
        return None

    section = data.get(MANIFEST_KEY)
    if section is None:
        return None
    if not isinstance(section, dict):
        console.print(f"[yellow][MANIFEST] Skipping {escape(str(path))}: '{MANIFEST_KEY}' is not a mapping[/yellow]")
        return None
    return section


def locate_manifest(repo_dir: Path) -> dict[str, Any] | None:
    """
    Search a repository for its manifest.

    Args:
        repo_dir: Root of the extracted repository.

    Returns:
        The `gitpack` section of the first usable candidate, or None.
    """
    for path in candidate_paths(repo_dir):
        section = try_load_manifest(path)
        if section is not None:
            console.print(f"[green][MANIFEST] Loaded {escape(str(path))}[/green]")
            return section

    console.print(f"[yellow][MANIFEST] No manifest found under {escape(str(repo_dir))}[/yellow]")
    return None
