"""Semantic version parsing and arithmetic."""

import re
from dataclasses import dataclass

from clean_vibe import BUMP_TYPES
from clean_vibe.errors import ValidationError

SEMVER_RE = re.compile(
    r'^v?(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)'
    r'(?:-(?P<prerelease>[0-9A-Za-z.-]+))?(?:\+(?P<build>[0-9A-Za-z.-]+))?$'
)


@dataclass(frozen=True, order=True)
class Version:
    """A major.minor.patch version. Pre-release and build suffixes are dropped."""
    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str) -> 'Version':
        match = SEMVER_RE.match(text.strip()) if text else None
        if not match:
            raise ValidationError(f"Invalid semantic version: '{text}'")
        return cls(int(match['major']), int(match['minor']), int(match['patch']))

    def bump(self, bump_type: str) -> 'Version':
        if bump_type == 'major':
            return Version(self.major + 1, 0, 0)
        if bump_type == 'minor':
            return Version(self.major, self.minor + 1, 0)
        if bump_type == 'patch':
            return Version(self.major, self.minor, self.patch + 1)
        raise ValidationError(f"Invalid version type: {bump_type}. Use {', '.join(BUMP_TYPES)}")

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def next_version(current: str, bump_type: str) -> str:
    """Apply a patch/minor/major increment to a version string."""
    return str(Version.parse(current).bump(bump_type))


def get_semver_increase(previous: str, version: str) -> str:
    """Which component grew from `previous` to `version`: major, minor, patch or none."""
    old, new = Version.parse(previous), Version.parse(version)
    if new <= old:
        return 'none'
    if new.major != old.major:
        return 'major'
    if new.minor != old.minor:
        return 'minor'
    return 'patch'
