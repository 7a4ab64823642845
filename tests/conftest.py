"""Shared fixtures: in-memory git, scripted prompts, recorded commands."""

import re
from datetime import date

import pytest

from clean_vibe.config import Config
from clean_vibe.errors import SubprocessFailureError
from clean_vibe.git import CommitRecord, VersionControl
from clean_vibe.prompts import Prompter, PromptCancelled
from clean_vibe.release import ReleaseManager

ANSI_RE = re.compile(r'\033\[[0-9;]*m')

RELEASE_DAY = date(2026, 3, 14)


def make_commits(*messages, body=""):
    """Build CommitRecords with predictable hashes, newest first like git log."""
    return [
        CommitRecord(hash=f"abc{i:04d}", message=m, author="Dev", date="2026-03-01", body=body)
        for i, m in enumerate(messages)
    ]


class FakeRepository(VersionControl):
    """In-memory VersionControl. Set `fail_on` to make a method raise."""

    def __init__(self, commits=None, tag=None, status="", branch="main"):
        self.commits = list(commits or [])
        self.tag = tag
        self._status = status
        self.branch = branch
        self.fail_on: set[str] = set()
        self.tags_created: list[tuple[str, str]] = []
        self.commits_made: list[tuple[list[str], str]] = []
        self.pushes: list[tuple[str, str, bool]] = []

    def _maybe_fail(self, name):
        if name in self.fail_on:
            raise SubprocessFailureError(f"git {name}", 128, "fatal: simulated failure")

    def current_tag(self):
        return self.tag

    def commits_since(self, tag):
        return list(self.commits)

    def create_tag(self, name, message):
        self._maybe_fail('tag')
        self.tags_created.append((name, message))
        self.tag = name
        self.commits = []

    def commit(self, paths, message):
        self._maybe_fail('commit')
        self.commits_made.append((list(paths), message))

    def status(self):
        return self._status

    def is_clean(self):
        return not self._status.strip()

    def current_branch(self):
        return self.branch

    def last_commit(self):
        if not self.commits:
            return None
        return f"{self.commits[0].hash} {self.commits[0].message}"

    def push(self, remote, branch, tags=True):
        self._maybe_fail('push')
        self.pushes.append((remote, branch, tags))


class ScriptedPrompter(Prompter):
    """Answers prompts from a queue. A None answer cancels."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.asked: list[str] = []

    def _next(self, message):
        self.asked.append(message)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {message}")
        answer = self.answers.pop(0)
        if answer is None:
            raise PromptCancelled()
        return answer

    def choose_one(self, message, options, default=None):
        answer = self._next(message)
        values = [value for _, value in options]
        assert answer in values, f"{answer!r} not among {values}"
        return answer

    def confirm(self, message, default=True):
        return self._next(message)

    def read_text(self, message, default=""):
        answer = self._next(message)
        return answer if answer != "" else default


class RecordingRunner:
    """CommandRunner stand-in that records commands; `failing` ones raise."""

    def __init__(self, failing=()):
        self.failing = set(failing)
        self.commands: list[str] = []

    def run(self, command):
        self.commands.append(command)
        if command in self.failing:
            raise SubprocessFailureError(command, 1)


@pytest.fixture
def strip_ansi():
    def _strip(text: str) -> str:
        return ANSI_RE.sub('', text)
    return _strip


@pytest.fixture
def project(tmp_path):
    """A project root with a pyproject.toml at version 1.2.3."""
    (tmp_path / "pyproject.toml").write_text(
        '[build-system]\n'
        'requires = ["setuptools"]\n'
        '\n'
        '[project]\n'
        'name = "demo"\n'
        'version = "1.2.3"  # bumped by vibe-version\n'
        'dependencies = []\n'
        '\n'
        '[tool.demo]\n'
        'version = "unrelated"\n',
        encoding='utf-8',
    )
    return tmp_path


@pytest.fixture
def config():
    return Config(test_command="pytest -q", format_command="", build_command="")


@pytest.fixture
def make_manager(project, config):
    """Factory: ReleaseManager over the fake repo with scripted answers."""
    def _make(repo=None, prompter=None, runner=None):
        return ReleaseManager(
            project, config,
            repo or FakeRepository(),
            prompter=prompter or ScriptedPrompter(),
            runner=runner or RecordingRunner(),
            today=RELEASE_DAY,
        )
    return _make
