# -----------------------------------------------------------------------------
# PLACEHOLDER EXPANSION
# -----------------------------------------------------------------------------
# Manifest strings may carry {{token}} markers that are only known on the
# installing machine:
# - {{prefix}}: the configured install prefix
# - {{sudo.user}}: the user who invoked sudo, or "" when not under sudo
#
# Unknown markers are left untouched.
# -----------------------------------------------------------------------------

import os
from collections.abc import Mapping

PREFIX_TOKEN = "{{prefix}}"
SUDO_USER_TOKEN = "{{sudo.user}}"


class PlaceholderExpander:
    """
    Pure string substitution over a fixed token table.

    The table is captured at construction, so expanding the same string twice
    always gives the same result.
    """

    def __init__(self, prefix: str, sudo_user: str = "") -> None:
        self._table: dict[str, str] = {
            PREFIX_TOKEN: prefix,
            SUDO_USER_TOKEN: sudo_user,
        }

    @classmethod
    def from_env(cls, prefix: str, environ: Mapping[str, str] | None = None) -> "PlaceholderExpander":
        """Build an expander whose {{sudo.user}} comes from SUDO_USER."""
        environ = os.environ if environ is None else environ
        return cls(prefix=prefix, sudo_user=environ.get("SUDO_USER", ""))

    @property
    def table(self) -> dict[str, str]:
        return dict(self._table)

    def expand(self, text: str) -> str:
        for token, value in self._table.items():
            text = text.replace(token, value)
        return text
