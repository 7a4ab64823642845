"""Release Package"""

from clean_vibe.release.manager import (
    PreparedRelease,
    ReleaseManager,
    ReleaseOutcome,
    ReleaseState,
    ReleaseStepError,
)

__all__ = [
    "PreparedRelease",
    "ReleaseManager",
    "ReleaseOutcome",
    "ReleaseState",
    "ReleaseStepError",
]
