"""CLI Argument Parsing"""

import argparse
import argcomplete

from clean_vibe import BUMP_TYPES, __version__

DEV_ACTIONS = ['check', 'test', 'format']


def build_template_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='clean-vibe',
        description='Copy AI agent instructions for a project type into .github/instructions.md',
        epilog='Example: clean-vibe (pick a category and template interactively)'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-l', '--list', action='store_true', help='List available templates and exit')
    parser.add_argument('-d', '--dir', type=str, metavar='PATH', help='Target project directory (default: current directory)')
    parser.add_argument('--verbose', action='store_true', help='Show debug logging')

    return parser


def build_version_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='vibe-version',
        description='Semantic version, changelog and release management',
        epilog='Example: vibe-version patch "Fix critical bug"'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-C', '--root', type=str, metavar='PATH', help='Project root (default: current directory)')
    parser.add_argument('--verbose', action='store_true', help='Show debug logging')

    sub = parser.add_subparsers(dest='command', metavar='COMMAND')

    sub.add_parser('status', help='Show version status dashboard (default)')
    sub.add_parser('suggest', help='Suggest the next version from commits since the last tag')

    patch = sub.add_parser('patch', help='Quick patch release')
    patch.add_argument('description', nargs='*', help='Release description')

    sub.add_parser('bump', help='Interactive version bump')

    history = sub.add_parser('history', help='Show version history')
    history.add_argument('-n', '--limit', type=int, metavar='N', help='Number of releases to show')

    sub.add_parser('check', help='Compare manifest version, tags and working tree')

    release = sub.add_parser('release', help='Full release: checks, tests, changelog, tag, push')
    release.add_argument('type', nargs='?', choices=BUMP_TYPES, help='Release type (asked if omitted)')
    release.add_argument('--no-push', action='store_true', help='Commit and tag locally only')
    release.add_argument('-y', '--yes', action='store_true', help='Answer yes to every confirmation')

    dev = sub.add_parser('dev', help='Development checks')
    dev.add_argument('action', nargs='?', choices=DEV_ACTIONS, default='check', help='check (default), test or format')

    publish = sub.add_parser('publish', help='Trigger the remote release workflow')
    publish.add_argument('type', nargs='?', default='patch', help='patch (default), minor or major')

    return parser


def parse_template_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_template_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)


def parse_version_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_version_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
