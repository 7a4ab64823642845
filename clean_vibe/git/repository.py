"""Git Repository - Run git as a subprocess for the release tooling."""

import logging
import subprocess
from pathlib import Path

from clean_vibe.errors import RepositoryUnavailableError, SubprocessFailureError
from clean_vibe.git.base import CommitRecord, VersionControl, LOG_FORMAT, parse_log

logger = logging.getLogger(__name__)


class GitRepository(VersionControl):
    """VersionControl backed by the git executable."""

    def __init__(self, root: str | Path | None = None):
        self.root = Path(root) if root else Path.cwd()
        if not self.root.is_dir():
            raise RepositoryUnavailableError(f"Not a directory: {self.root}")
        self._verify_git_available()
        self._verify_in_repo()

    def _run_git(self, *args: str) -> str:
        """Run a git command in the repository root and return stdout."""
        command = ['git', *args]
        logger.debug("Running: %s (cwd=%s)", ' '.join(command), self.root)
        try:
            result = subprocess.run(
                command,
                cwd=self.root,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise SubprocessFailureError(f"git {' '.join(args)}", e.returncode, e.stderr or "")
        except FileNotFoundError:
            raise RepositoryUnavailableError("Git is not installed or not in PATH")

    def _verify_git_available(self) -> None:
        """Fail fast if git isn't available."""
        try:
            self._run_git('--version')
        except SubprocessFailureError:
            raise RepositoryUnavailableError("Git is not installed or not in PATH")

    def _verify_in_repo(self) -> None:
        """Fail fast if we're not in a git repository."""
        try:
            self._run_git('rev-parse', '--git-dir')
        except SubprocessFailureError:
            raise RepositoryUnavailableError(f"Not inside a git repository: {self.root}")

    def _has_commits(self) -> bool:
        try:
            self._run_git('rev-parse', '--verify', 'HEAD')
            return True
        except SubprocessFailureError:
            return False

    def current_tag(self) -> str | None:
        try:
            tag = self._run_git('describe', '--tags', '--abbrev=0').strip()
        except SubprocessFailureError:
            return None
        return tag or None

    def commits_since(self, tag: str | None) -> list[CommitRecord]:
        if not self._has_commits():
            return []
        revision = f"{tag}..HEAD" if tag else 'HEAD'
        output = self._run_git('log', revision, f'--pretty=format:{LOG_FORMAT}', '--date=short')
        return parse_log(output)

    def count_commits_since(self, tag: str | None) -> int:
        if not self._has_commits():
            return 0
        revision = f"{tag}..HEAD" if tag else 'HEAD'
        return int(self._run_git('rev-list', '--count', revision).strip() or 0)

    def create_tag(self, name: str, message: str) -> None:
        self._run_git('tag', '-a', name, '-m', message)

    def commit(self, paths: list[str], message: str) -> None:
        self._run_git('add', '--', *paths)
        # Commit only the given paths; anything else already staged stays in the index
        self._run_git('commit', '-m', message, '--', *paths)

    def status(self) -> str:
        return self._run_git('status', '--porcelain')

    def is_clean(self) -> bool:
        return self.status().strip() == ''

    def current_branch(self) -> str:
        try:
            return self._run_git('branch', '--show-current').strip() or 'HEAD'
        except SubprocessFailureError:
            return 'unknown'

    def last_commit(self) -> str | None:
        if not self._has_commits():
            return None
        return self._run_git('log', '-1', '--pretty=format:%h %s').strip() or None

    def push(self, remote: str, branch: str, tags: bool = True) -> None:
        args = ['push', remote, branch]
        if tags:
            args.append('--tags')
        self._run_git(*args)
