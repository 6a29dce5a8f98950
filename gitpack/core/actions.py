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
# ACTIONS - WHAT A MANIFEST ASKS US TO DO
# -----------------------------------------------------------------------------
# Responsibility: Turn the `add` / `rm` sections of a manifest into runnable
# steps and run them with short-circuit semantics.
#
# Two kinds of step exist:
# - ScriptAction: `{sh: "cmd"}` or `{sh: ["cmd1", "cmd2"]}` - shell commands
# - RemoveAction: the literal `remove_files` - delete the pack's files
#
# Parsing is tolerant: an entry of any other shape contributes nothing.
# A section that yields no steps gets a single RemoveAction.
#
# Ordinary failures (non-zero exit, undeletable file) are reported as False,
# never raised.
# -----------------------------------------------------------------------------

import subprocess
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.markup import escape

from gitpack.core.placeholders import PlaceholderExpander

if TYPE_CHECKING:
    from gitpack.core.package import Package

console = Console()

REMOVE_FILES_ENTRY = "remove_files"
SCRIPT_KEY = "sh"


class Action(ABC):
    """A single step of an install or remove procedure."""

    @abstractmethod
    def run(self, package: "Package") -> bool:
        """Run the step; True only if every sub-step succeeded."""
        ...

    def describe(self) -> str:
        return self.__class__.__name__


class RemoveAction(Action):
    """
    Delete every file the pack declares.

    All deletions are attempted even after one fails, so a partial removal
    leaves as little behind as possible. The result is still False if any
    single deletion failed.
    """

    def run(self, package: "Package") -> bool:
        ok = True
        for path in package.files:
            try:
                Path(path).unlink()
                console.print(f"[green][ACTION] Removed {escape(path)}[/green]")
            except OSError as e:
                console.print(f"[red][ACTION] Could not remove {escape(path)}: {escape(str(e))}[/red]")
                ok = False
        return ok

    def describe(self) -> str:
        return "remove declared files"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, RemoveAction)

    def __hash__(self) -> int:
        return hash(REMOVE_FILES_ENTRY)


class ScriptAction(Action):
    """Run shell command lines in order, stopping at the first failure."""

    def __init__(self, scripts: Sequence[str], expander: PlaceholderExpander) -> None:
        self.scripts: tuple[str, ...] = tuple(scripts)
        self._expander = expander

    def run_command(self, script: str) -> bool:
        """
        Expand placeholders in one command line and run it through the shell.

        Returns:
            True if the shell exited with status 0.
        """
        command = self._expander.expand(script)
        console.print(f"[cyan][ACTION] $ {escape(command)}[/cyan]")

        try:
            result = subprocess.run(command, shell=True)
        except OSError as e:
            console.print(f"[red][ACTION] Could not start shell: {escape(str(e))}[/red]")
            return False

        if result.returncode != 0:
            console.print(f"[red][ACTION] Command failed (exit {result.returncode}): {escape(command)}[/red]")
            return False
        return True

    def run(self, package: "Package") -> bool:
        return all(self.run_command(script) for script in self.scripts)

    def describe(self) -> str:
        return f"sh: {list(self.scripts)}"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ScriptAction) and other.scripts == self.scripts

    def __hash__(self) -> int:
        return hash(self.scripts)


def parse_action(entry: Any, expander: PlaceholderExpander) -> Action | None:
    """
    Interpret one manifest entry.

    Args:
        entry: A `{sh: ...}` mapping or the string "remove_files".
        expander: Used by script actions at run time.

    Returns:
        The matching Action, or None for an unrecognised entry (it is dropped).
    """
    if isinstance(entry, dict):
        scripts = entry.get(SCRIPT_KEY)
        if isinstance(scripts, str):
            return ScriptAction([scripts], expander)
        if isinstance(scripts, (list, tuple)) and all(isinstance(s, str) for s in scripts):
            return ScriptAction(scripts, expander)
        return None

    if isinstance(entry, str) and entry == REMOVE_FILES_ENTRY:
        return RemoveAction()

    return None


class ActionList:
    """
    Ordered, never-empty sequence of actions.

    run() stops at the first action that fails; later actions are not tried.
    """

    def __init__(self, actions: Iterable[Action] = ()) -> None:
        self.actions: tuple[Action, ...] = tuple(actions) or (RemoveAction(),)

    @classmethod
    def from_manifest(cls, entries: Iterable[Any], expander: PlaceholderExpander) -> "ActionList":
        """Build from a manifest section, dropping entries of unknown shape."""
        actions = []
        for entry in entries:
            action = parse_action(entry, expander)
            if action is None:
                console.print(f"[yellow][ACTION] Ignoring unrecognised entry: {escape(repr(entry))}[/yellow]")
                continue
            actions.append(action)
        return cls(actions)

    def run(self, package: "Package") -> bool:
        for action in self.actions:
            console.print(f"[cyan][ACTION] {escape(action.describe())}[/cyan]")
            if not action.run(package):
                return False
        return True

    def __len__(self) -> int:
        return len(self.actions)

    def __iter__(self):
        return iter(self.actions)

    def __repr__(self) -> str:
        return f"ActionList({[a.describe() for a in self.actions]})"
