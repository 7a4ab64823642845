"""Commit classification into changelog buckets."""

from dataclasses import dataclass, field

from clean_vibe import COMMIT_CATEGORIES
from clean_vibe.git import CommitRecord


def classify_commit(commit: CommitRecord) -> str:
    """Return the single bucket a commit belongs to. First match wins."""
    message = commit.message.lower()
    body = (commit.body or '').lower()

    if 'breaking' in message or 'breaking' in body:
        return 'breaking'
    if message.startswith(('feat', 'feature')):
        return 'feature'
    if message.startswith('fix'):
        return 'fix'
    if message.startswith('docs'):
        return 'docs'
    if message.startswith('style'):
        return 'style'
    if message.startswith('refactor'):
        return 'refactor'
    if message.startswith('test'):
        return 'test'
    if message.startswith('perf'):
        return 'performance'
    if message.startswith('security') or 'vulnerability' in message:
        return 'security'
    if message.startswith('chore'):
        return 'chore'
    return 'other'


@dataclass
class CommitCategories:
    """Commits grouped by bucket, preserving log order within each bucket."""
    breaking: list[CommitRecord] = field(default_factory=list)
    feature: list[CommitRecord] = field(default_factory=list)
    fix: list[CommitRecord] = field(default_factory=list)
    docs: list[CommitRecord] = field(default_factory=list)
    style: list[CommitRecord] = field(default_factory=list)
    refactor: list[CommitRecord] = field(default_factory=list)
    test: list[CommitRecord] = field(default_factory=list)
    performance: list[CommitRecord] = field(default_factory=list)
    security: list[CommitRecord] = field(default_factory=list)
    chore: list[CommitRecord] = field(default_factory=list)
    other: list[CommitRecord] = field(default_factory=list)

    def bucket(self, name: str) -> list[CommitRecord]:
        if name not in COMMIT_CATEGORIES:
            raise KeyError(name)
        return getattr(self, name)

    def counts(self) -> dict[str, int]:
        return {name: len(self.bucket(name)) for name in COMMIT_CATEGORIES}

    @property
    def total(self) -> int:
        return sum(self.counts().values())

    @property
    def is_empty(self) -> bool:
        return self.total == 0


def categorize_commits(commits: list[CommitRecord]) -> CommitCategories:
    categories = CommitCategories()
    for commit in commits:
        categories.bucket(classify_commit(commit)).append(commit)
    return categories


def suggest_bump_type(categories: CommitCategories) -> str:
    if categories.breaking:
        return 'major'
    if categories.feature:
        return 'minor'
    return 'patch'


def version_reasoning(categories: CommitCategories) -> str:
    """Human-readable justification for the suggested bump."""
    reasons = []
    if categories.breaking:
        reasons.append(f"{len(categories.breaking)} breaking change(s)")
    if categories.feature:
        reasons.append(f"{len(categories.feature)} new feature(s)")
    if categories.fix:
        reasons.append(f"{len(categories.fix)} bug fix(es)")
    return ', '.join(reasons) if reasons else 'Minor changes and improvements'
