"""Version Suggestion Engine - Recommend the next release from commit history."""

import logging
from dataclasses import dataclass

from clean_vibe.git import CommitRecord, VersionControl
from clean_vibe.versioning.commits import (
    CommitCategories, categorize_commits, suggest_bump_type, version_reasoning,
)
from clean_vibe.versioning.semver import next_version

logger = logging.getLogger(__name__)


@dataclass
class Suggestion:
    """Recommended next release and the evidence behind it."""
    current_version: str
    type: str
    version: str
    reasoning: str
    tag: str | None
    commits: list[CommitRecord]
    categories: CommitCategories

    @property
    def commit_count(self) -> int:
        return len(self.commits)

    @property
    def nothing_to_release(self) -> bool:
        return not self.commits


class VersionEngine:
    """Derives a suggested bump from commits since the last tag."""

    def __init__(self, repo: VersionControl):
        self.repo = repo

    def commits_since_last_tag(self) -> tuple[str | None, list[CommitRecord]]:
        tag = self.repo.current_tag()
        commits = self.repo.commits_since(tag)
        logger.debug("%d commit(s) since %s", len(commits), tag or 'the first commit')
        return tag, commits

    def suggest(self, current_version: str) -> Suggestion:
        tag, commits = self.commits_since_last_tag()
        categories = categorize_commits(commits)
        bump_type = suggest_bump_type(categories)
        return Suggestion(
            current_version=current_version,
            type=bump_type,
            version=next_version(current_version, bump_type),
            reasoning=version_reasoning(categories),
            tag=tag,
            commits=commits,
            categories=categories,
        )
