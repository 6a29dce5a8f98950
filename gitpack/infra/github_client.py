# -----------------------------------------------------------------------------
# GITHUB INFRASTRUCTURE - Repository Archives
# -----------------------------------------------------------------------------
# Responsibility: Download the zip archive of <owner>/<repo>@<ref> and unpack
# it into the invocation's workspace.
#
# Features:
# - Optional token sent as "Authorization: token <value>" on every request
# - Redirects followed by hand, bounded by max_redirects
# - Body streamed to disk in chunks
#
# Security:
# - Tokens are NEVER logged in plain text
# -----------------------------------------------------------------------------

from pathlib import Path
from urllib.parse import urljoin

import requests
from rich.console import Console
from rich.markup import escape

from gitpack.config import GitPackConfig
from gitpack.domain.models import RefSpec
from gitpack.infra.archive import extract_archive

console = Console()

REDIRECT_STATUSES = frozenset({301, 302, 303, 307, 308})
CHUNK_SIZE = 64 * 1024


class FetchError(Exception):
    """Raised when a repository archive cannot be downloaded."""

    pass


def build_archive_url(refspec: RefSpec, host: str) -> str:
    """Archive URL for a target, e.g. https://codeload.github.com/o/r/zip/main."""
    return f"https://{host}/{refspec.owner}/{refspec.name}/zip/{refspec.ref}"


class RepositoryFetcher:
    """
    Downloads and unpacks repository archives.

    One instance per invocation; holds the credentials and limits from the
    invocation's GitPackConfig.
    """

    def __init__(self, config: GitPackConfig) -> None:
        self._token = config.token
        self._host = config.archive_host
        self._max_redirects = config.max_redirects
        self._timeout = config.http_timeout

    def _headers(self) -> dict[str, str]:
        if self._token:
            return {"Authorization": f"token {self._token}"}
        return {}

    def _sanitize_output(self, text: str) -> str:
        """Mask the access token in error text, e.g. a URL echoed by requests."""
        if not self._token:
            return text
        return text.replace(self._token, "[REDACTED]")

    def download_file(self, url: str, destination: Path) -> None:
        """
        Stream a URL to a file, following redirects.

        Args:
            url: Where to start.
            destination: File to write the final response body to.

        Raises:
            FetchError: On network errors, a non-200 final response, or too
                many redirects.
        """
        redirects = 0
        while True:
            console.print(f"[cyan][FETCH] GET {escape(url)}[/cyan]")
            try:
                response = requests.get(
                    url,
                    headers=self._headers(),
                    stream=True,
                    allow_redirects=False,
                    timeout=self._timeout,
                )
            except requests.RequestException as e:
                raise FetchError(f"Download of {url} failed: {self._sanitize_output(str(e))}")

            with response:
                if response.status_code in REDIRECT_STATUSES:
                    location = response.headers.get("Location")
                    if not location:
                        raise FetchError(
                            f"Download of {url} failed: HTTP {response.status_code} without Location"
                        )
                    redirects += 1
                    if redirects > self._max_redirects:
                        raise FetchError(
                            f"Download of {url} failed: more than {self._max_redirects} redirects"
                        )
                    url = urljoin(url, location)
                    continue

                if response.status_code != 200:
                    raise FetchError(
                        f"Download of {url} failed: HTTP {response.status_code} {response.reason or ''}".rstrip()
                    )

                try:
                    with open(destination, "wb") as f:
                        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                            if chunk:
                                f.write(chunk)
                except requests.RequestException as e:
                    raise FetchError(
                        f"Download of {url} interrupted: {self._sanitize_output(str(e))}"
                    )

            console.print(f"[green][FETCH] Saved {escape(destination.name)}[/green]")
            return

    def fetch(self, refspec: RefSpec, work_dir: Path) -> Path:
        """
        Download and extract a repository.

        Args:
            refspec: Which repository and ref to fetch.
            work_dir: Scratch directory owned by the caller.

        Returns:
            Path of the extracted repository root.

        Raises:
            FetchError: If the download fails.
            ArchiveError: If the archive cannot be extracted.
        """
        url = build_archive_url(refspec, self._host)
        archive_path = Path(work_dir) / f"{refspec.archive_stem}.zip"

        self.download_file(url, archive_path)
        return extract_archive(archive_path, Path(work_dir), default_root=refspec.archive_stem)
