# -----------------------------------------------------------------------------
# THE PACK
# -----------------------------------------------------------------------------
# Responsibility: The runnable form of a manifest. Identity, the files it
# owns (placeholders already expanded) and its `add` / `rm` action lists.
# Lives only for the duration of one command.
# -----------------------------------------------------------------------------

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from gitpack.core.actions import ActionList
from gitpack.core.placeholders import PlaceholderExpander
from gitpack.domain.models import ManifestDocument


class ManifestError(Exception):
    """Raised when a `gitpack` section cannot be turned into a Package."""

    pass


@dataclass(frozen=True)
class Package:
    """A loaded pack, ready to have its `add` or `rm` actions run."""

    name: str
    category: str
    files: tuple[str, ...]
    add: ActionList
    rm: ActionList

    @classmethod
    def from_manifest(cls, section: Mapping[str, Any], expander: PlaceholderExpander) -> "Package":
        """
        Build a Package from the `gitpack` section of a manifest.

        Args:
            section: The mapping found under the top-level `gitpack` key.
            expander: Expands placeholders in file paths and scripts.

        Raises:
            ManifestError: If the section is not a mapping.
        """
        if not isinstance(section, Mapping):
            raise ManifestError(f"gitpack section must be a mapping, got {type(section).__name__}")

        try:
            doc = ManifestDocument.model_validate(dict(section))
        except ValidationError as e:
            raise ManifestError(f"Invalid gitpack section: {e}") from e

        return cls(
            name=doc.name,
            category=doc.category,
            files=tuple(expander.expand(f) for f in doc.files),
            add=ActionList.from_manifest(doc.add, expander),
            rm=ActionList.from_manifest(doc.rm, expander),
        )

    def __str__(self) -> str:
        return f"{self.name} ({self.category or 'uncategorised'})"
