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
# THE TOOL - ORCHESTRATOR
# -----------------------------------------------------------------------------
# Responsibility: Run one `add` or `rm` command end to end.
# Connects: Workspace -> RepositoryFetcher -> ManifestLocator -> Package -> Actions
#
# Every step reports failure as False; nothing is rolled back. The temporary
# workspace is released and the working directory restored on every path.
# -----------------------------------------------------------------------------

from pathlib import Path

from rich.console import Console
from rich.markup import escape

from gitpack.config import GitPackConfig
from gitpack.core.manifest import locate_manifest
from gitpack.core.package import ManifestError, Package
from gitpack.core.placeholders import PlaceholderExpander
from gitpack.domain.models import Command, RefSpec
from gitpack.infra.archive import ArchiveError
from gitpack.infra.github_client import FetchError, RepositoryFetcher
from gitpack.infra.workspace import scoped_workspace, working_directory

console = Console()


class Tool:
    """
    The gitpack orchestrator.

    Pipeline: temp dir -> download + extract -> find manifest -> build Package
    -> run `add` or `rm` actions.
    """

    def __init__(
        self,
        config: GitPackConfig,
        fetcher: RepositoryFetcher | None = None,
        expander: PlaceholderExpander | None = None,
    ) -> None:
        self._config = config
        self._fetcher = fetcher or RepositoryFetcher(config)
        self._expander = expander or PlaceholderExpander.from_env(config.prefix)

    def load_package(self, repo_dir: Path) -> Package | None:
        """Find and build the repository's Package, or None if there is none."""
        section = locate_manifest(repo_dir)
        if section is None:
            return None

        try:
            return Package.from_manifest(section, self._expander)
        except ManifestError as e:
            console.print(f"[red][GITPACK] {escape(str(e))}[/red]")
            return None

    def run(self, command: Command, refspec: RefSpec) -> bool:
        """
        Execute a command against a repository.

        Args:
            command: Command.ADD or Command.RM.
            refspec: The repository to fetch.

        Returns:
            True if every action of the chosen section succeeded.
        """
        command = Command(command)
        console.print(f"[cyan][GITPACK] {command.value} {escape(str(refspec))}[/cyan]")

        with scoped_workspace() as work_dir:
            try:
                repo_dir = self._fetcher.fetch(refspec, work_dir)
            except (FetchError, ArchiveError) as e:
                console.print(f"[red][GITPACK] Error: {escape(str(e))}[/red]")
                return False

            with working_directory(repo_dir):
                package = self.load_package(repo_dir)
                if package is None:
                    console.print(
                        f"[red][GITPACK] .gitpack.yaml not found or could not be loaded from {escape(str(repo_dir))}[/red]"
                    )
                    return False

                console.print(f"[cyan][GITPACK] Pack: {escape(str(package))}[/cyan]")
                actions = package.add if command is Command.ADD else package.rm
                ok = actions.run(package)

        if ok:
            console.print(f"[green][GITPACK] {command.value} {escape(str(refspec))}: done[/green]")
        else:
            console.print(f"[red][GITPACK] {command.value} {escape(str(refspec))}: failed[/red]")
        return ok
