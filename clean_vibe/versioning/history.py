"""
Version History

Persisted record of releases in .version-history.json:

{
    "versions": [<entry>, ...],        newest first
    "lastRelease": <entry> | null,
    "totalReleases": 3,
    "created": "2026-01-01T00:00:00+00:00",
    "updated": "2026-03-01T00:00:00+00:00"
}

State is loaded, transformed and persisted explicitly through
VersionHistoryStore; nothing is cached between calls.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from clean_vibe.errors import ValidationError
from clean_vibe.git import CommitRecord
from clean_vibe.versioning.semver import get_semver_increase

MAX_COMMIT_DETAILS = 10


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class VersionHistoryEntry:
    """One release."""
    version: str
    type: str
    description: str
    date: str
    commits: int
    commit_details: list[CommitRecord] = field(default_factory=list)
    previous_version: str | None = None
    semver_increase: str = 'none'

    @classmethod
    def create(cls, version: str, bump_type: str, description: str,
               commits: list[CommitRecord], previous_version: str,
               date: str | None = None) -> 'VersionHistoryEntry':
        return cls(
            version=version,
            type=bump_type,
            description=description,
            date=date or _now(),
            commits=len(commits),
            commit_details=list(commits[:MAX_COMMIT_DETAILS]),
            previous_version=previous_version,
            semver_increase=get_semver_increase(previous_version, version),
        )

    @property
    def day(self) -> str:
        return self.date.split('T')[0]

    def to_dict(self) -> dict:
        return {
            'version': self.version,
            'type': self.type,
            'description': self.description,
            'date': self.date,
            'commits': self.commits,
            'commitDetails': [c.to_dict() for c in self.commit_details],
            'previousVersion': self.previous_version,
            'semverIncrease': self.semver_increase,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'VersionHistoryEntry':
        try:
            return cls(
                version=data['version'],
                type=data.get('type', 'patch'),
                description=data.get('description') or '',
                date=data.get('date', ''),
                commits=int(data.get('commits', 0)),
                commit_details=[CommitRecord.from_dict(c) for c in data.get('commitDetails', [])],
                previous_version=data.get('previousVersion'),
                semver_increase=data.get('semverIncrease', 'none'),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ValidationError(f"Malformed version history entry: {e}")


@dataclass
class VersionHistory:
    """All recorded releases plus bookkeeping timestamps."""
    versions: list[VersionHistoryEntry] = field(default_factory=list)
    created: str = field(default_factory=_now)
    updated: str | None = None

    @property
    def total_releases(self) -> int:
        return len(self.versions)

    @property
    def last_release(self) -> VersionHistoryEntry | None:
        return self.versions[0] if self.versions else None

    def add(self, entry: VersionHistoryEntry) -> VersionHistoryEntry:
        self.versions.insert(0, entry)
        self.updated = _now()
        return entry

    def to_dict(self) -> dict:
        data = {
            'versions': [v.to_dict() for v in self.versions],
            'lastRelease': self.last_release.to_dict() if self.last_release else None,
            'totalReleases': self.total_releases,
            'created': self.created,
        }
        if self.updated:
            data['updated'] = self.updated
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'VersionHistory':
        if not isinstance(data, dict) or not isinstance(data.get('versions', []), list):
            raise ValidationError("Version history must be an object with a 'versions' list")
        return cls(
            versions=[VersionHistoryEntry.from_dict(v) for v in data.get('versions', [])],
            created=data.get('created') or _now(),
            updated=data.get('updated'),
        )


class VersionHistoryStore:
    """Reads and fully rewrites the history document."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> VersionHistory:
        """Load history. A missing file gives an empty, unsaved history."""
        if not self.path.exists():
            return VersionHistory()
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Could not parse {self.path}: {e}")
        return VersionHistory.from_dict(data)

    def save(self, history: VersionHistory) -> Path:
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(history.to_dict(), f, indent=2, ensure_ascii=False)
            f.write('\n')
        return self.path

    def record(self, entry: VersionHistoryEntry) -> VersionHistory:
        """Load, append `entry`, persist, and return the new history."""
        history = self.load()
        history.add(entry)
        self.save(history)
        return history
