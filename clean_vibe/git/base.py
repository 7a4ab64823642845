"""Version Control Base Classes and Shared Code"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict

# Fields joined by the unit separator, commits terminated by the record separator,
# so subjects and multi-line bodies may contain any printable text.
FIELD_SEP = '\x1f'
RECORD_SEP = '\x1e'
LOG_FORMAT = FIELD_SEP.join(['%h', '%s', '%an', '%ad', '%b']) + RECORD_SEP


@dataclass(frozen=True)
class CommitRecord:
    """One commit parsed from git log."""
    hash: str
    message: str
    author: str = ""
    date: str = ""
    body: str = ""

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'CommitRecord':
        return cls(
            hash=data.get('hash', ''),
            message=data.get('message', ''),
            author=data.get('author', ''),
            date=data.get('date', ''),
            body=data.get('body', ''),
        )


def parse_log(output: str) -> list[CommitRecord]:
    """Parse `git log --pretty=format:LOG_FORMAT` output."""
    commits = []
    for record in output.split(RECORD_SEP):
        record = record.strip('\n')
        if not record.strip():
            continue
        parts = record.split(FIELD_SEP, 4)
        if len(parts) < 2:
            continue
        parts += [''] * (5 - len(parts))
        hash_, message, author, date, body = parts
        commits.append(CommitRecord(
            hash=hash_.strip(),
            message=message.strip(),
            author=author.strip(),
            date=date.strip(),
            body=body.strip(),
        ))
    return commits


class VersionControl(ABC):
    """The slice of a version control system the release tooling needs."""

    @abstractmethod
    def current_tag(self) -> str | None:
        """Most recent tag reachable from HEAD, or None."""

    @abstractmethod
    def commits_since(self, tag: str | None) -> list[CommitRecord]:
        """Commits after `tag` up to HEAD, newest first. All commits if tag is None."""

    @abstractmethod
    def create_tag(self, name: str, message: str) -> None:
        pass

    @abstractmethod
    def commit(self, paths: list[str], message: str) -> None:
        """Stage `paths` and commit them."""

    @abstractmethod
    def is_clean(self) -> bool:
        pass

    @abstractmethod
    def status(self) -> str:
        """Porcelain status output (empty when clean)."""

    @abstractmethod
    def current_branch(self) -> str:
        pass

    @abstractmethod
    def last_commit(self) -> str | None:
        """"<short hash> <subject>" of HEAD, or None for an empty repository."""

    @abstractmethod
    def push(self, remote: str, branch: str, tags: bool = True) -> None:
        pass

    def count_commits_since(self, tag: str | None) -> int:
        return len(self.commits_since(tag))
