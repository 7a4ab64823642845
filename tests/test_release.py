"""
Tests for the release flows: quick patch, interactive bump and full release.

Git, prompts and shell commands are replaced by in-memory fakes, so these
run without a repository. Run with:
    pytest tests/test_release.py -v
"""

import json

import pytest

from clean_vibe.errors import ValidationError
from clean_vibe.output import Colors, colorize_category
from clean_vibe.prompts import PromptCancelled
from clean_vibe.release import ReleaseState, ReleaseStepError
from clean_vibe.versioning import Manifest

from tests.conftest import FakeRepository, RecordingRunner, ScriptedPrompter, make_commits

RELEASE_FILES = ["pyproject.toml", "CHANGELOG.md", ".version-history.json"]


def manifest_version(project):
    return Manifest(project / "pyproject.toml").read_version()


def read_history(project):
    return json.loads((project / ".version-history.json").read_text(encoding="utf-8"))


@pytest.fixture
def repo():
    return FakeRepository(commits=make_commits("feat: add login", "fix: null check", "chore: bump deps"),
                          tag="v1.2.3")


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------

class TestPrepare:

    def test_prepare_touches_nothing(self, make_manager, project, repo):
        release = make_manager(repo).prepare("minor", "New stuff")
        assert release.version == "1.3.0"
        assert release.previous_version == "1.2.3"
        assert release.tag_name == "v1.3.0"
        assert release.changelog_entry.startswith("## [1.3.0] - 2026-03-14\n\nNew stuff\n\n")
        assert manifest_version(project) == "1.2.3"
        assert not (project / "CHANGELOG.md").exists()

    def test_invalid_type(self, make_manager):
        with pytest.raises(ValidationError, match="Invalid version type"):
            make_manager().prepare("huge")

    def test_tag_prefix_from_config(self, make_manager, config, repo):
        config.tag_prefix = "release-"
        assert make_manager(repo).prepare("patch").tag_name == "release-1.2.4"

    def test_link_base_from_config(self, make_manager, config, repo):
        config.commit_link_base = "https://example.com/c/"
        entry = make_manager(repo).prepare("patch").changelog_entry
        assert "(https://example.com/c/abc0000)" in entry


# ---------------------------------------------------------------------------
# Quick patch
# ---------------------------------------------------------------------------

class TestQuickPatch:

    def test_writes_files_and_tags(self, make_manager, project, repo):
        outcome = make_manager(repo).quick_patch("Fix critical bug")

        assert outcome.completed
        assert outcome.steps == [ReleaseState.WRITE_FILES, ReleaseState.TAG, ReleaseState.DONE]
        assert manifest_version(project) == "1.2.4"

        changelog = (project / "CHANGELOG.md").read_text(encoding="utf-8")
        assert "## [1.2.4] - 2026-03-14" in changelog
        assert "Fix critical bug" in changelog

        history = read_history(project)
        assert history["totalReleases"] == 1
        assert history["versions"][0]["version"] == "1.2.4"
        assert history["versions"][0]["previousVersion"] == "1.2.3"
        assert history["versions"][0]["commits"] == 3

        assert repo.commits_made == [(RELEASE_FILES, "chore(release): 1.2.4\n\nFix critical bug")]
        assert repo.tags_created == [("v1.2.4", "Release v1.2.4")]
        assert repo.pushes == []

    def test_default_description(self, make_manager, project):
        make_manager().quick_patch()
        assert read_history(project)["versions"][0]["description"] == "Patch release"

    def test_allowed_without_commits(self, make_manager, project):
        repo = FakeRepository(tag="v1.2.3")
        assert make_manager(repo).quick_patch().completed
        assert repo.tags_created[0][0] == "v1.2.4"

    def test_two_patches_accumulate_history(self, make_manager, project, repo):
        manager = make_manager(repo)
        manager.quick_patch("one")
        manager.quick_patch("two")
        history = read_history(project)
        assert [v["version"] for v in history["versions"]] == ["1.2.5", "1.2.4"]
        assert history["totalReleases"] == 2
        changelog = (project / "CHANGELOG.md").read_text(encoding="utf-8")
        assert changelog.index("[1.2.5]") < changelog.index("[1.2.4]")


# ---------------------------------------------------------------------------
# Interactive bump
# ---------------------------------------------------------------------------

class TestInteractiveBump:

    def test_nothing_to_release(self, make_manager, project, capsys, strip_ansi):
        prompter = ScriptedPrompter()
        outcome = make_manager(FakeRepository(tag="v1.2.3"), prompter).interactive_bump()

        assert outcome.state == ReleaseState.IDLE
        assert prompter.asked == []
        assert "Nothing to release" in strip_ansi(capsys.readouterr().out)
        assert not (project / ".version-history.json").exists()

    def test_accepts_suggested_description(self, make_manager, project, repo):
        prompter = ScriptedPrompter("minor", "", True)
        outcome = make_manager(repo, prompter).interactive_bump()

        assert outcome.completed
        assert prompter.asked == [
            "What type of version bump?",
            "Release description (optional)",
            "Create minor release v1.3.0?",
        ]
        assert manifest_version(project) == "1.3.0"
        entry = read_history(project)["versions"][0]
        assert entry["description"] == "1 new feature(s), 1 bug fix(es)"
        assert entry["semverIncrease"] == "minor"
        assert repo.tags_created == [("v1.3.0", "Release v1.3.0")]

    def test_override_type(self, make_manager, project, repo):
        outcome = make_manager(repo, ScriptedPrompter("major", "Rewrite", True)).interactive_bump()
        assert outcome.release.version == "2.0.0"
        assert manifest_version(project) == "2.0.0"

    def test_declined_confirmation_writes_nothing(self, make_manager, project, repo):
        outcome = make_manager(repo, ScriptedPrompter("patch", "x", False)).interactive_bump()

        assert outcome.state == ReleaseState.IDLE
        assert outcome.release.version == "1.2.4"
        assert manifest_version(project) == "1.2.3"
        assert not (project / "CHANGELOG.md").exists()
        assert repo.tags_created == []

    def test_cancelled_prompt_propagates(self, make_manager, project, repo):
        with pytest.raises(PromptCancelled):
            make_manager(repo, ScriptedPrompter(None)).interactive_bump()
        assert manifest_version(project) == "1.2.3"


# ---------------------------------------------------------------------------
# Full release
# ---------------------------------------------------------------------------

class TestRelease:

    def test_full_release_with_push(self, make_manager, project, repo):
        runner = RecordingRunner()
        outcome = make_manager(repo, ScriptedPrompter(True, True), runner).release("minor")

        assert outcome.completed
        assert outcome.pushed
        assert outcome.steps == [
            ReleaseState.CHECK_CLEAN, ReleaseState.PREVIEW, ReleaseState.CONFIRM,
            ReleaseState.TEST, ReleaseState.WRITE_FILES, ReleaseState.TAG,
            ReleaseState.PUSH, ReleaseState.DONE,
        ]
        assert runner.commands == ["pytest -q"]
        assert manifest_version(project) == "1.3.0"
        assert repo.tags_created == [("v1.3.0", "Release v1.3.0")]
        assert repo.pushes == [("origin", "main", True)]

    def test_chooses_type_when_omitted(self, make_manager, project, repo):
        prompter = ScriptedPrompter("major", True, False)
        outcome = make_manager(repo, prompter).release()

        assert prompter.asked[0] == "What type of release is this?"
        assert ReleaseState.CHOOSE_TYPE in outcome.steps
        assert outcome.release.version == "2.0.0"
        assert not outcome.pushed
        assert repo.pushes == []
        assert repo.tags_created == [("v2.0.0", "Release v2.0.0")]

    def test_no_push_and_yes_never_prompt(self, make_manager, repo):
        prompter = ScriptedPrompter()
        outcome = make_manager(repo, prompter).release("patch", push=False, assume_yes=True)

        assert outcome.completed
        assert prompter.asked == []
        assert repo.pushes == []
        assert ReleaseState.PUSH not in outcome.steps

    def test_nothing_to_release(self, make_manager, project):
        outcome = make_manager(FakeRepository(tag="v1.2.3")).release("patch", assume_yes=True)
        assert outcome.state == ReleaseState.IDLE
        assert manifest_version(project) == "1.2.3"

    def test_dirty_tree_declined(self, make_manager, project):
        repo = FakeRepository(commits=make_commits("fix: a"), status=" M app.py\n")
        prompter = ScriptedPrompter(False)
        outcome = make_manager(repo, prompter).release("patch")

        assert outcome.state == ReleaseState.IDLE
        assert outcome.steps == [ReleaseState.CHECK_CLEAN]
        assert prompter.asked == ["Do you want to continue? (changes stay uncommitted)"]
        assert manifest_version(project) == "1.2.3"

    def test_dirty_tree_accepted(self, make_manager):
        repo = FakeRepository(commits=make_commits("fix: a"), status=" M app.py\n")
        outcome = make_manager(repo, ScriptedPrompter(True, True, False)).release("patch")
        assert outcome.completed

    def test_declined_confirmation(self, make_manager, project, repo):
        runner = RecordingRunner()
        outcome = make_manager(repo, ScriptedPrompter(False), runner).release("patch")

        assert outcome.state == ReleaseState.IDLE
        assert outcome.steps[-1] == ReleaseState.CONFIRM
        assert runner.commands == []
        assert manifest_version(project) == "1.2.3"

    def test_push_question_asked_before_any_changes(self, make_manager, project, repo):
        runner = RecordingRunner()
        prompter = ScriptedPrompter(True, None)
        with pytest.raises(PromptCancelled):
            make_manager(repo, prompter, runner).release("patch")

        assert prompter.asked == ["Create release v1.2.4?", "Push changes to remote repository?"]
        assert runner.commands == []
        assert manifest_version(project) == "1.2.3"
        assert not (project / "CHANGELOG.md").exists()
        assert not (project / ".version-history.json").exists()
        assert repo.commits_made == []
        assert repo.tags_created == []

    def test_preview_colors_sections_by_category(self, make_manager, repo, capsys, monkeypatch):
        monkeypatch.setattr("clean_vibe.output.COLORS_ENABLED", True)
        make_manager(repo).release("patch", push=False, assume_yes=True)

        out = capsys.readouterr().out
        assert f"{Colors.BOLD}{Colors.GREEN}### ✨ New Features{Colors.RESET}" in out
        assert f"{Colors.BOLD}{Colors.YELLOW}### 🐛 Bug Fixes{Colors.RESET}" in out
        assert f"{Colors.BOLD}{Colors.DIM}### 🔧 Maintenance{Colors.RESET}" in out

    def test_unknown_category_rejected(self):
        with pytest.raises(KeyError):
            colorize_category("misc", "### Misc")

    def test_failing_tests_stop_before_writing(self, make_manager, project, repo):
        runner = RecordingRunner(failing={"pytest -q"})
        with pytest.raises(ReleaseStepError) as exc:
            make_manager(repo, ScriptedPrompter(True, False), runner).release("patch")

        assert exc.value.step == ReleaseState.TEST
        assert "Release failed during 'test'" in str(exc.value)
        assert manifest_version(project) == "1.2.3"
        assert not (project / "CHANGELOG.md").exists()
        assert repo.tags_created == []

    def test_format_failure_only_warns(self, make_manager, config, repo, capsys, strip_ansi):
        config.format_command = "black ."
        runner = RecordingRunner(failing={"black ."})
        outcome = make_manager(repo, runner=runner).release("patch", push=False, assume_yes=True)

        assert outcome.completed
        assert runner.commands == ["black .", "pytest -q"]
        assert "Code formatting failed" in strip_ansi(capsys.readouterr().out)

    def test_build_runs_after_tests(self, make_manager, config, repo):
        config.build_command = "python -m build"
        runner = RecordingRunner()
        outcome = make_manager(repo, runner=runner).release("patch", push=False, assume_yes=True)

        assert runner.commands == ["pytest -q", "python -m build"]
        assert outcome.steps.index(ReleaseState.BUILD) < outcome.steps.index(ReleaseState.WRITE_FILES)

    def test_skipped_steps_when_unconfigured(self, make_manager, config, repo):
        config.test_command = ""
        runner = RecordingRunner()
        outcome = make_manager(repo, runner=runner).release("patch", push=False, assume_yes=True)

        assert runner.commands == []
        assert ReleaseState.TEST not in outcome.steps
        assert ReleaseState.FORMAT not in outcome.steps

    def test_tag_failure_keeps_written_files(self, make_manager, project, repo):
        repo.fail_on = {"commit"}
        with pytest.raises(ReleaseStepError) as exc:
            make_manager(repo).release("patch", push=False, assume_yes=True)

        assert exc.value.step == ReleaseState.TAG
        assert manifest_version(project) == "1.2.4"
        assert read_history(project)["versions"][0]["version"] == "1.2.4"
        assert repo.tags_created == []

    def test_push_failure_after_tag(self, make_manager, repo):
        repo.fail_on = {"push"}
        with pytest.raises(ReleaseStepError) as exc:
            make_manager(repo).release("patch", push=True, assume_yes=True)

        assert exc.value.step == ReleaseState.PUSH
        assert repo.tags_created == [("v1.2.4", "Release v1.2.4")]

    def test_remote_and_branch_from_config(self, make_manager, config, repo):
        config.remote = "upstream"
        config.branch = "develop"
        make_manager(repo).release("patch", push=True, assume_yes=True)
        assert repo.pushes == [("upstream", "develop", True)]

    def test_invalid_type(self, make_manager, repo):
        with pytest.raises(ValidationError):
            make_manager(repo).release("huge")
