"""Git Operations Package"""

from clean_vibe.git.base import CommitRecord, VersionControl, parse_log, LOG_FORMAT
from clean_vibe.git.repository import GitRepository

__all__ = [
    "CommitRecord",
    "VersionControl",
    "GitRepository",
    "parse_log",
    "LOG_FORMAT",
]
