"""CLI Entry Point - Version management"""

from pathlib import Path

from clean_vibe.config import load_config
from clean_vibe.errors import VibeError
from clean_vibe.git import GitRepository
from clean_vibe.output import dim, print_error
from clean_vibe.process import CommandRunner
from clean_vibe.prompts import PromptCancelled, TerminalPrompter
from clean_vibe.release import ReleaseManager

from clean_vibe.cli.args import parse_version_args
from clean_vibe.cli.commands import (
    display_check, display_history, display_status, display_suggestion, run_dev, run_publish,
)
from clean_vibe.cli.utils import setup_logging


def _dispatch(args, manager: ReleaseManager, runner: CommandRunner) -> int:
    command = args.command or 'status'

    if command == 'status':
        return display_status(manager)
    if command == 'suggest':
        return display_suggestion(manager)
    if command == 'history':
        return display_history(manager, args.limit)
    if command == 'check':
        return display_check(manager)
    if command == 'patch':
        outcome = manager.quick_patch(' '.join(args.description) or None)
        return 0 if outcome.completed else 1
    if command == 'bump':
        manager.interactive_bump()
        return 0
    if command == 'release':
        push = False if args.no_push else None
        manager.release(args.type, push=push, assume_yes=args.yes)
        return 0
    if command == 'dev':
        return run_dev(manager, runner, args.action)
    raise VibeError(f"Unknown command: {command}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the version CLI."""
    args = parse_version_args(argv)
    setup_logging(args.verbose)

    root = Path(args.root).resolve() if args.root else Path.cwd()
    config = load_config(root)
    runner = CommandRunner(root)

    try:
        if args.command == 'publish':
            return run_publish(config, runner, args.type)
        manager = ReleaseManager(root, config, GitRepository(root), TerminalPrompter(), runner)
        return _dispatch(args, manager, runner)
    except PromptCancelled:
        print(dim("Cancelled."))
        return 0
    except VibeError as e:
        print_error(str(e))
        return 1
    except KeyboardInterrupt:
        print()
        return 130
