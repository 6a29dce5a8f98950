# -----------------------------------------------------------------------------
# GITPACK - COMMAND LINE INTERFACE
# -----------------------------------------------------------------------------
# Responsibility: Turn argv into a validated (Command, RefSpec, GitPackConfig)
# and hand it to the Tool.
#
#   gitpack [--token TOKEN] [--prefix PATH] [-h|--help] add|rm <owner>/<repo>[@<ref>]
#
# Exit status: 0 on success, 1 on any pipeline or target error, 2 when
# argparse rejects the arguments.
# -----------------------------------------------------------------------------

import argparse
import sys

from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from gitpack import __version__
from gitpack.config import DEFAULT_PREFIX, GitPackConfig
from gitpack.core.tool import Tool
from gitpack.domain.models import Command, InvalidRefSpecError, RefSpec

console = Console()

USAGE = "gitpack [options] add|rm <owner>/<repo>[@<ref>]"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitpack",
        usage=USAGE,
        description="Install or remove software using the gitpack manifest of a GitHub repository.",
    )
    parser.add_argument("--token", help="GitHub Personal Access Token")
    parser.add_argument(
        "--prefix", help=f"Install prefix substituted for {{{{prefix}}}} (default: {DEFAULT_PREFIX})"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("command", choices=[c.value for c in Command], help="add or rm")
    parser.add_argument("target", metavar="<owner>/<repo>[@<ref>]", help="Repository to use")
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Run gitpack.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:]).

    Returns:
        Process exit status.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        refspec = RefSpec.parse(args.target)
    except InvalidRefSpecError as e:
        console.print(f"[red][GITPACK] {escape(str(e))}[/red]")
        console.print(f"Usage: {USAGE}", markup=False)
        return 1

    try:
        config = GitPackConfig.from_env(token=args.token, prefix=args.prefix)
    except ValidationError as e:
        console.print(f"[red][GITPACK] Invalid configuration:[/red] {escape(str(e))}")
        return 1

    ok = Tool(config).run(Command(args.command), refspec)
    return 0 if ok else 1


def cli() -> None:
    """Console-script entry point."""
    load_dotenv(find_dotenv(usecwd=True))
    sys.exit(main())


if __name__ == "__main__":
    cli()
