"""Versioning Package"""

from clean_vibe.versioning.semver import Version, next_version, get_semver_increase
from clean_vibe.versioning.commits import (
    CommitCategories, classify_commit, categorize_commits, suggest_bump_type, version_reasoning,
)
from clean_vibe.versioning.changelog import (
    CHANGELOG_SECTIONS, clean_subject, generate_changelog_entry, insert_entry, update_changelog,
)
from clean_vibe.versioning.history import VersionHistory, VersionHistoryEntry, VersionHistoryStore
from clean_vibe.versioning.manifest import Manifest
from clean_vibe.versioning.engine import Suggestion, VersionEngine

__all__ = [
    "Version",
    "next_version",
    "get_semver_increase",
    "CommitCategories",
    "classify_commit",
    "categorize_commits",
    "suggest_bump_type",
    "version_reasoning",
    "CHANGELOG_SECTIONS",
    "clean_subject",
    "generate_changelog_entry",
    "insert_entry",
    "update_changelog",
    "VersionHistory",
    "VersionHistoryEntry",
    "VersionHistoryStore",
    "Manifest",
    "Suggestion",
    "VersionEngine",
]
