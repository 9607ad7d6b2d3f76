import json
import sys
from argparse import ArgumentParser, Namespace
from typing import Optional, Sequence

from setupkit.config import Config, UIAdapter, VirtualUIConfig, get_config, loader
from setupkit.config.version import get_version
from setupkit.log import setup
from setupkit.ui.base import UIBase
from setupkit.ui.console import ConsoleUI
from setupkit.ui.virtual import VirtualUI


def parse_arguments(argv: Optional[Sequence[str]] = None) -> Namespace:
    """
    Parse command-line arguments.

    Available arguments:
        --help: Show the help message
        --verbose: Stream package manager output live
        --quiet: Suppress most output
        --config: Path to the configuration file
        --show-config: Output the current configuration to stdout
        --level: Log level (debug,info,warning,error,critical)
        --answers: JSON file with preset answers (non-interactive mode)
        --version: Show the version and exit

    Commands:
        init <project-name>: Create a new project

    :param argv: Arguments to parse (defaults to `sys.argv`).
    :return: Parsed arguments object.
    """
    version = get_version()

    parser = ArgumentParser(
        prog="cli-frameworks-setup",
        description="Set up a new Vite + React or Vue TypeScript project",
    )
    parser.add_argument("-v", "--verbose", help="Stream package manager output live", action="store_true")
    parser.add_argument("-q", "--quiet", help="Suppress most output", action="store_true")
    parser.add_argument("--config", help="Path to the configuration file", required=False)
    parser.add_argument("--show-config", help="Output the current configuration to stdout", action="store_true")
    parser.add_argument("--level", help="Log level (debug,info,warning,error,critical)", required=False)
    parser.add_argument("--answers", help="JSON file with preset answers (non-interactive mode)", required=False)
    parser.add_argument("--version", action="version", version=version)

    subparsers = parser.add_subparsers(dest="command")
    init_parser = subparsers.add_parser("init", help="Create a new project")
    init_parser.add_argument("project_name", help="Name of the project directory to create")

    args = parser.parse_args(argv)
    if args.command is None and not args.show_config:
        parser.error("a command is required (try: init <project-name>)")
    return args


def load_answers(path: str) -> dict:
    """
    Load preset answers from a JSON file.

    :param path: Path to the answers file.
    :return: Mapping of question name to answer.
    """
    with open(path, "r", encoding="utf-8") as f:
        answers = json.load(f)

    if not isinstance(answers, dict):
        raise ValueError("expected a JSON object mapping question names to answers")
    return answers


def load_config(args: Namespace) -> Optional[Config]:
    """
    Load JSON configuration file and apply command-line arguments.

    :param args: Command-line arguments.
    :return: Configuration object, or None if config couldn't be loaded.
    """
    if args.config:
        try:
            config = loader.load(args.config)
        except OSError as err:
            print(f"Error reading config file {args.config}: {err}", file=sys.stderr)
            return None
        except ValueError as err:
            print(f"Error parsing config file {args.config}: {err}", file=sys.stderr)
            return None
    else:
        config = Config()

    if args.level:
        config.log.level = args.level.upper()

    if args.answers:
        try:
            answers = load_answers(args.answers)
        except (OSError, ValueError) as err:
            print(f"Error loading answers file {args.answers}: {err}", file=sys.stderr)
            return None
        config.ui = VirtualUIConfig(answers=answers)

    if args.verbose:
        config.ui.verbose = True
    if args.quiet:
        config.ui.quiet = True

    try:
        Config.model_validate(config.model_dump())
    except ValueError as err:
        print(f"Configuration error: {err}", file=sys.stderr)
        return None

    loader.config = config
    return config


def show_config():
    """
    Print the current configuration to stdout.
    """
    cfg = get_config()
    print(cfg.model_dump_json(indent=2))


def create_ui(config: Config) -> UIBase:
    if config.ui.type == UIAdapter.VIRTUAL:
        return VirtualUI(config.ui.answers, verbose=config.ui.verbose, quiet=config.ui.quiet)
    return ConsoleUI(verbose=config.ui.verbose, quiet=config.ui.quiet)


def init(argv: Optional[Sequence[str]] = None) -> tuple[Optional[UIBase], Optional[Config], Namespace]:
    """
    Initialize the application.

    Parses the command line, loads configuration, sets up logging and UI.

    :param argv: Command-line arguments (defaults to `sys.argv`).
    :return: Tuple with UI, configuration, and command-line arguments.
    """
    args = parse_arguments(argv)
    config = load_config(args)
    if not config:
        return (None, None, args)

    setup(config.log, force=True)

    return (create_ui(config), config, args)


__all__ = ["parse_arguments", "load_answers", "load_config", "show_config", "create_ui", "init"]
