#!/usr/bin/env python3

import argparse
import argcomplete
import logging
import os
import sys

from abc import ABC, abstractmethod
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from .ai import do, explain
from .config import load_config
from .context import build_prompt, get_all_directory_contents, get_directory_contents
from .errors import AssistantError
from .shell import resolve_shell_kind
from .shell.session import SessionOutcome

logger = logging.getLogger(__name__)


class Argument(ABC):
    def __init__(self, help: str, kwargs: Optional[dict] = None):
        self.help = help
        self.kwargs = kwargs if kwargs is not None else {}

    @abstractmethod
    def add_to_parser(self, parser: argparse.ArgumentParser):
        pass


class OptionalArg(Argument):
    def __init__(
        self,
        short_option: str,
        long_option: str,
        help: str,
        kwargs: Optional[dict] = None,
    ):
        super().__init__(help=help, kwargs=kwargs)
        self.short_option = short_option
        self.long_option = long_option

    def add_to_parser(self, parser: argparse.ArgumentParser):
        parser.add_argument(
            self.short_option, self.long_option, help=self.help, **self.kwargs
        )


class PositionalArg(Argument):
    def __init__(self, name: str, help: str, kwargs: Optional[dict] = None):
        super().__init__(help=help, kwargs=kwargs)
        self.name = name

    def add_to_parser(self, parser: argparse.ArgumentParser):
        parser.add_argument(self.name, help=self.help, **self.kwargs)


ARGUMENTS: List[Argument] = [
    OptionalArg(
        short_option="-c",
        long_option="--chat",
        help="Get an explanation instead of commands to run.",
        kwargs={"action": "store_true"},
    ),
    OptionalArg(
        short_option="-a",
        long_option="--all",
        help="Include all subdirectories and files in the context sent to the AI.",
        kwargs={"action": "store_true"},
    ),
    OptionalArg(
        short_option="-f",
        long_option="--files",
        help="Include a snippet of each file's content in the context sent to the AI.",
        kwargs={"action": "store_true"},
    ),
    OptionalArg(
        short_option="-v",
        long_option="--verbose",
        help="Print debug logs.",
        kwargs={"action": "store_true"},
    ),
    PositionalArg(
        name="prompt",
        help="What you want to do, in plain English.",
    ),
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shelp",
        description="Turn plain English into shell commands you can review, edit and run.",
    )
    for arg in ARGUMENTS:
        arg.add_to_parser(parser)
    return parser


def setup_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=verbose)],
        force=True,
    )
    # Keep the HTTP client libraries quiet unless something goes wrong.
    for noisy_logger in ("httpx", "httpcore", "openai", "anthropic"):
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)


def _directory_context(directory: str, args: argparse.Namespace) -> str:
    if args.all:
        return get_all_directory_contents(directory, include_files=args.files)
    return get_directory_contents(directory, include_files=args.files)


def run_cli(argv: Optional[List[str]] = None) -> int:
    """
    Parses command-line arguments and runs the assistant.

    Args:
        argv: A list of strings representing the command-line arguments.
              If None, `sys.argv[1:]` is used automatically by `parse_args`.

    Returns:
        The process exit status.
    """
    parser = build_parser()

    # Enable argument auto-completion.
    argcomplete.autocomplete(parser)

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        current_dir = os.getcwd()
        prompt = build_prompt(_directory_context(current_dir, args), args.prompt)

        config = load_config()
        shell = resolve_shell_kind(config.shell)
        logger.debug("Using %s with model %s on %s", config.llm.provider, config.llm.model, shell)

        if args.chat:
            explain(config, shell, prompt)
            return 0

        result = do(config, shell, prompt, working_directory=current_dir)
    except (AssistantError, OSError) as e:
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        print(file=sys.stderr)
        return 130

    if result.outcome == SessionOutcome.COMPLETED:
        logger.info("Session completed in %s", result.working_directory)
    else:
        logger.warning("Session %s in %s", result.outcome.value, result.working_directory)
    return 0


def main():
    """The main entry point for the command-line interface, called by the `shelp` script."""
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
