"""Changelog Builder - Render categorized commits as a Markdown section."""

import re
from datetime import date as date_type
from pathlib import Path

from clean_vibe.versioning.commits import CommitCategories

DEFAULT_LINK_BASE = '../../commit/'

DEFAULT_HEADER = (
    "# Changelog\n"
    "\n"
    "All notable changes to this project will be documented in this file.\n"
    "\n"
    "The format is based on [Keep a Changelog](https://keepachangelog.com/en/1.0.0/),\n"
    "and this project adheres to [Semantic Versioning](https://semver.org/spec/v2.0.0.html).\n"
    "\n"
)

# Display order of sections: (bucket, heading). Uncategorized commits are not listed.
CHANGELOG_SECTIONS = [
    ('breaking', '🚨 BREAKING CHANGES'),
    ('feature', '✨ New Features'),
    ('fix', '🐛 Bug Fixes'),
    ('security', '🔒 Security'),
    ('performance', '⚡ Performance'),
    ('docs', '📚 Documentation'),
    ('refactor', '♻️ Code Refactoring'),
    ('test', '🧪 Tests'),
    ('style', '💄 Styling'),
    ('chore', '🔧 Maintenance'),
]

PREFIX_RE = re.compile(
    r'^(feat|feature|fix|docs|style|refactor|test|chore|perf|security)(\([^)]*\))?!?:\s*',
    re.IGNORECASE,
)


def clean_subject(message: str) -> str:
    """Strip the conventional commit prefix for display."""
    return PREFIX_RE.sub('', message.strip(), count=1)


def generate_changelog_entry(version: str, categories: CommitCategories,
                             description: str | None = None,
                             release_date: date_type | None = None,
                             link_base: str = DEFAULT_LINK_BASE) -> str:
    release_date = release_date or date_type.today()
    entry = f"## [{version}] - {release_date.isoformat()}\n\n"

    if description:
        entry += f"{description}\n\n"

    for bucket, title in CHANGELOG_SECTIONS:
        items = categories.bucket(bucket)
        if not items:
            continue
        entry += f"### {title}\n\n"
        for commit in items:
            entry += f"- {clean_subject(commit.message)} ([{commit.hash}]({link_base}{commit.hash}))\n"
        entry += "\n"

    return entry


def insert_entry(changelog: str, entry: str) -> str:
    """Place `entry` before the newest existing release section.

    With no release sections yet, the entry goes after the header block.
    """
    if not changelog.strip():
        return DEFAULT_HEADER + entry

    lines = changelog.split('\n')
    for i, line in enumerate(lines):
        if line.startswith('## '):
            head = '\n'.join(lines[:i])
            tail = '\n'.join(lines[i:])
            return f"{head}\n{entry}{tail}" if head else f"{entry}{tail}"

    if not changelog.endswith('\n'):
        changelog += '\n'
    if not changelog.endswith('\n\n'):
        changelog += '\n'
    return changelog + entry


def update_changelog(path: Path, entry: str) -> None:
    """Read, insert and fully rewrite the changelog file."""
    existing = path.read_text(encoding='utf-8') if path.exists() else ''
    path.write_text(insert_entry(existing, entry), encoding='utf-8')
