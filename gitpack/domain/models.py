# Copyright 2026 Pramod Kumar Voola
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# -----------------------------------------------------------------------------
# DOMAIN MODELS - TARGETS & MANIFESTS
# -----------------------------------------------------------------------------
# These Pydantic models describe what the user asked for (RefSpec + Command)
# and what a repository declares about itself (ManifestDocument).
#
# The manifest model is deliberately lenient: a `gitpack` section written by
# hand in some third-party repository is coerced into shape rather than
# rejected. Strictness lives in RefSpec, where bad input is a usage error.
# -----------------------------------------------------------------------------

import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_REF = "main"

# owner/repo or owner/repo@ref; neither owner nor repo may contain "/" or "@"
REFSPEC_PATTERN = re.compile(r"^(?P<owner>[^/@]+)/(?P<name>[^/@]+)(?:@(?P<ref>.+))?$")


class InvalidRefSpecError(ValueError):
    """Raised when a target is not of the form <owner>/<repo>[@<ref>]."""

    pass


class Command(str, Enum):
    """
    The two operations a pack supports.

    Each maps to the manifest section of the same name.
    """

    ADD = "add"
    RM = "rm"


class RefSpec(BaseModel):
    """
    A parsed <owner>/<repo>[@<ref>] target.

    The ref defaults to "main" when omitted.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    owner: str = Field(..., min_length=1, description="Repository owner (user or organisation)")
    name: str = Field(..., min_length=1, description="Repository name")
    ref: str = Field(DEFAULT_REF, min_length=1, description="Branch, tag or commit to fetch")

    @classmethod
    def parse(cls, text: str) -> "RefSpec":
        """
        Parse a command-line target.

        Args:
            text: "owner/repo" or "owner/repo@ref"

        Returns:
            The parsed RefSpec.

        Raises:
            InvalidRefSpecError: If the text does not match the expected form.
        """
        match = REFSPEC_PATTERN.match(text or "")
        if match is None:
            raise InvalidRefSpecError(f"Invalid format for <owner>/<repo>[@<ref>]: {text!r}")

        try:
            return cls(
                owner=match.group("owner"),
                name=match.group("name"),
                ref=match.group("ref") or DEFAULT_REF,
            )
        except ValidationError as e:
            # whitespace-only parts strip down to empty
            raise InvalidRefSpecError(f"Invalid format for <owner>/<repo>[@<ref>]: {text!r}") from e

    @property
    def archive_stem(self) -> str:
        """Conventional top-level directory name inside the repository archive."""
        return f"{self.name}-{self.ref.replace('/', '-')}"

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}@{self.ref}"


def _as_entry_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, (str, dict)):
        return [value]
    return []


class ManifestDocument(BaseModel):
    """
    The raw `gitpack` section of a manifest file.

    Fields:
    - name, category: anything, coerced to text; missing means ""
    - files: one path or a list of paths, still carrying placeholders
    - add, rm: action entries, interpreted later by ActionList

    Unknown keys are ignored so manifests can carry extra metadata.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    category: str = ""
    files: list[str] = Field(default_factory=list)
    add: list[Any] = Field(default_factory=list)
    rm: list[Any] = Field(default_factory=list)

    @field_validator("name", "category", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("files", mode="before")
    @classmethod
    def _coerce_files(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value if item is not None]
        return [str(value)]

    @field_validator("add", "rm", mode="before")
    @classmethod
    def _coerce_section(cls, value: Any) -> list[Any]:
        return _as_entry_list(value)
