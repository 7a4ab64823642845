"""Release Manager - Version bumps, changelog, history and tagging."""

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path

from clean_vibe import BUMP_TYPES
from clean_vibe.config import Config
from clean_vibe.errors import VibeError, ValidationError
from clean_vibe.git import CommitRecord, VersionControl
from clean_vibe.output import (
    ARROW, BULLET, bold, colorize_bump_type, colorize_category, dim, heading, info, label,
    success, warning,
    print_rule, print_success, print_warning,
)
from clean_vibe.process import CommandRunner
from clean_vibe.prompts import Prompter, TerminalPrompter
from clean_vibe.versioning import (
    CHANGELOG_SECTIONS, CommitCategories, Manifest, Suggestion, VersionEngine, VersionHistory,
    VersionHistoryEntry, VersionHistoryStore, categorize_commits, generate_changelog_entry,
    next_version, update_changelog,
)

logger = logging.getLogger(__name__)

BUMP_DESCRIPTIONS = {
    'patch': 'Bug fixes',
    'minor': 'New features',
    'major': 'Breaking changes',
}


class ReleaseState(Enum):
    """Steps of the release flow, in order."""
    IDLE = 'idle'
    CHECK_CLEAN = 'check clean'
    CHOOSE_TYPE = 'choose type'
    PREVIEW = 'preview'
    CONFIRM = 'confirm'
    FORMAT = 'format'
    TEST = 'test'
    BUILD = 'build'
    WRITE_FILES = 'write files'
    TAG = 'tag'
    PUSH = 'push'
    DONE = 'done'


class ReleaseStepError(VibeError):
    """A release step failed. Side effects of earlier steps are left in place."""

    def __init__(self, step: ReleaseState, cause: Exception):
        self.step = step
        self.cause = cause
        super().__init__(f"Release failed during '{step.value}': {cause}")


@dataclass
class PreparedRelease:
    """Everything needed to write and tag one release."""
    version: str
    previous_version: str
    type: str
    description: str
    tag_name: str
    commits: list[CommitRecord]
    categories: CommitCategories
    changelog_entry: str


@dataclass
class ReleaseOutcome:
    """Where a flow stopped. IDLE means cancelled or nothing to do."""
    state: ReleaseState
    release: PreparedRelease | None = None
    steps: list[ReleaseState] = field(default_factory=list)
    pushed: bool = False

    @property
    def completed(self) -> bool:
        return self.state == ReleaseState.DONE


class ReleaseManager:
    """Drives version bumps for the project at `root`."""

    def __init__(self, root: Path, config: Config, repo: VersionControl,
                 prompter: Prompter | None = None, runner: CommandRunner | None = None,
                 today: date | None = None):
        self.root = Path(root)
        self.config = config
        self.repo = repo
        self.prompter = prompter or TerminalPrompter()
        self.runner = runner or CommandRunner(self.root)
        self.today = today
        self.manifest = Manifest(self.root / config.manifest)
        self.changelog_path = self.root / config.changelog
        self.history_store = VersionHistoryStore(self.root / config.history_file)
        self._steps: list[ReleaseState] = []

    # ------------------------------------------------------------------
    # Building blocks
    # ------------------------------------------------------------------

    def current_version(self) -> str:
        return self.manifest.read_version()

    def suggest(self) -> Suggestion:
        return VersionEngine(self.repo).suggest(self.current_version())

    def load_history(self) -> VersionHistory:
        return self.history_store.load()

    def tag_name(self, version: str) -> str:
        return f"{self.config.tag_prefix}{version}"

    def prepare(self, bump_type: str, description: str | None = None,
                commits: list[CommitRecord] | None = None) -> PreparedRelease:
        """Compute the next version and its changelog entry without touching disk."""
        if bump_type not in BUMP_TYPES:
            raise ValidationError(f"Invalid version type: {bump_type}. Use {', '.join(BUMP_TYPES)}")
        current = self.current_version()
        if commits is None:
            commits = self.repo.commits_since(self.repo.current_tag())
        categories = categorize_commits(commits)
        version = next_version(current, bump_type)
        entry = generate_changelog_entry(
            version, categories, description,
            release_date=self.today, link_base=self.config.commit_link_base,
        )
        return PreparedRelease(
            version=version,
            previous_version=current,
            type=bump_type,
            description=description or '',
            tag_name=self.tag_name(version),
            commits=commits,
            categories=categories,
            changelog_entry=entry,
        )

    def write_files(self, release: PreparedRelease) -> VersionHistory:
        """Update manifest, changelog and history. Each file is fully rewritten."""
        self.manifest.write_version(release.version)
        print_success(f"Updated {self.config.manifest} version to {release.version}")

        update_changelog(self.changelog_path, release.changelog_entry)
        print_success(f"Updated {self.config.changelog}")

        entry = VersionHistoryEntry.create(
            version=release.version,
            bump_type=release.type,
            description=release.description,
            commits=release.commits,
            previous_version=release.previous_version,
        )
        history = self.history_store.record(entry)
        logger.debug("History now holds %d release(s)", history.total_releases)
        return history

    def tag(self, release: PreparedRelease) -> None:
        """Commit the release files and create an annotated tag."""
        message = f"chore(release): {release.version}"
        if release.description:
            message += f"\n\n{release.description}"
        self.repo.commit(
            [self.config.manifest, self.config.changelog, self.config.history_file],
            message,
        )
        self.repo.create_tag(release.tag_name, f"Release {release.tag_name}")
        print_success(f"Created git tag {release.tag_name}")

    def push(self) -> None:
        self.repo.push(self.config.remote, self.config.branch, tags=True)
        print_success(f"Pushed to {self.config.remote}/{self.config.branch} with tags")

    # ------------------------------------------------------------------
    # Flows
    # ------------------------------------------------------------------

    def _enter(self, state: ReleaseState) -> None:
        logger.debug("Release state -> %s", state.value)
        self._steps.append(state)

    def _outcome(self, state: ReleaseState, release: PreparedRelease | None = None,
                 pushed: bool = False) -> ReleaseOutcome:
        if state != ReleaseState.IDLE:
            self._enter(state)
        return ReleaseOutcome(state=state, release=release, steps=list(self._steps), pushed=pushed)

    def _run_step(self, state: ReleaseState, action, *args) -> None:
        self._enter(state)
        try:
            action(*args)
        except (VibeError, OSError) as e:
            raise ReleaseStepError(state, e) from e

    def _write_and_tag(self, release: PreparedRelease) -> None:
        self._run_step(ReleaseState.WRITE_FILES, self.write_files, release)
        self._run_step(ReleaseState.TAG, self.tag, release)

    def preview(self, release: PreparedRelease) -> None:
        counts = release.categories
        print(label(f"\nFound {len(release.commits)} commits since last release:"))
        if counts.feature:
            print(f"  ✨ {len(counts.feature)} features")
        if counts.fix:
            print(f"  🐛 {len(counts.fix)} bug fixes")
        if counts.breaking:
            print(f"  💥 {len(counts.breaking)} breaking changes")
        if counts.docs:
            print(f"  📚 {len(counts.docs)} documentation updates")

        print(info("\n📝 Changelog preview:"))
        print_rule()
        section_buckets = {f"### {title}": bucket for bucket, title in CHANGELOG_SECTIONS}
        for line in release.changelog_entry.rstrip().split('\n'):
            bucket = section_buckets.get(line)
            print(colorize_category(bucket, line) if bucket else line)
        print_rule()

    def quick_patch(self, description: str | None = None) -> ReleaseOutcome:
        """Patch release without prompts: write files, commit and tag."""
        self._steps = []
        release = self.prepare('patch', description or 'Patch release')
        print(label(f"Creating quick patch: {release.previous_version} {ARROW} {release.version}"))
        self._write_and_tag(release)
        print(success(bold(f"🎉 Patch {release.tag_name} created successfully!")))
        return self._outcome(ReleaseState.DONE, release)

    def _bump_choices(self, current: str, suggestion: Suggestion) -> list[tuple[str, str]]:
        choices = [
            (f"{colorize_bump_type(t, t.capitalize())} ({next_version(current, t)}) - {BUMP_DESCRIPTIONS[t]}", t)
            for t in BUMP_TYPES
        ]
        choices.append((f"{warning('Smart Suggestion')} ({suggestion.version}) - {suggestion.reasoning}", suggestion.type))
        return choices

    def interactive_bump(self) -> ReleaseOutcome:
        """Choose type, describe, confirm, then write files, commit and tag."""
        self._steps = []
        suggestion = self.suggest()
        if suggestion.nothing_to_release:
            print_warning("No commits found since last tag. Nothing to release.")
            return self._outcome(ReleaseState.IDLE)

        print(heading("\n🚀 Interactive Version Management\n"))
        bump_type = self.prompter.choose_one(
            "What type of version bump?",
            self._bump_choices(suggestion.current_version, suggestion),
            default=suggestion.type,
        )
        description = self.prompter.read_text("Release description (optional)", default=suggestion.reasoning)
        release = self.prepare(bump_type, description, commits=suggestion.commits)

        if not self.prompter.confirm(f"Create {bump_type} release {release.tag_name}?", default=True):
            print(label("Release cancelled."))
            return self._outcome(ReleaseState.IDLE, release)

        self._write_and_tag(release)
        print(success(bold(f"🎉 Release {release.tag_name} created successfully!")))
        print(label("\nNext steps:"))
        print(f"  {info(f'git push {self.config.remote} {self.config.branch} --tags')} - Push changes and tags")
        return self._outcome(ReleaseState.DONE, release)

    def release(self, bump_type: str | None = None, push: bool | None = None,
                assume_yes: bool = False) -> ReleaseOutcome:
        """Full release: clean check, type, preview, confirm, checks, write, tag, push.

        A failing step raises ReleaseStepError naming it; files written before
        a tagging failure are not rolled back.
        """
        self._steps = []
        if bump_type is not None and bump_type not in BUMP_TYPES:
            raise ValidationError(f"Invalid version type: {bump_type}. Use {', '.join(BUMP_TYPES)}")

        print(heading("🚀 Release Manager\n"))

        self._enter(ReleaseState.CHECK_CLEAN)
        status = self.repo.status()
        if status.strip():
            print_warning("You have uncommitted changes:")
            print(status.rstrip())
            if not assume_yes and not self.prompter.confirm(
                    "Do you want to continue? (changes stay uncommitted)", default=False):
                print(label("Please commit your changes and try again."))
                return self._outcome(ReleaseState.IDLE)

        suggestion = self.suggest()
        if suggestion.nothing_to_release:
            print_warning("No commits found since last tag. Nothing to release.")
            return self._outcome(ReleaseState.IDLE)

        if bump_type is None:
            self._enter(ReleaseState.CHOOSE_TYPE)
            current = suggestion.current_version
            bump_type = self.prompter.choose_one(
                "What type of release is this?",
                [(f"{t.capitalize()} ({current} {ARROW} {next_version(current, t)}) - {BUMP_DESCRIPTIONS[t]}", t)
                 for t in BUMP_TYPES],
                default=suggestion.type,
            )

        self._enter(ReleaseState.PREVIEW)
        release = self.prepare(bump_type, suggestion.reasoning, commits=suggestion.commits)
        print(f"{label('Current version:')} {release.previous_version}")
        print(f"{label('New version:')} {success(release.version)}")
        self.preview(release)

        self._enter(ReleaseState.CONFIRM)
        if not assume_yes and not self.prompter.confirm(f"Create release {release.tag_name}?", default=True):
            print(label("Release cancelled."))
            return self._outcome(ReleaseState.IDLE, release)

        # Every question is answered before the first side effect
        if push is None:
            push = assume_yes or self.prompter.confirm("Push changes to remote repository?", default=True)

        if self.config.format_command:
            self._enter(ReleaseState.FORMAT)
            try:
                self.runner.run(self.config.format_command)
                print_success("Code formatted")
            except VibeError as e:
                logger.debug("Formatter failed: %s", e)
                print_warning("Code formatting failed (continuing anyway)")

        if self.config.test_command:
            print(label("Running tests..."))
            self._run_step(ReleaseState.TEST, self.runner.run, self.config.test_command)
            print_success("Tests passed")

        if self.config.build_command:
            print(label("Building artifacts..."))
            self._run_step(ReleaseState.BUILD, self.runner.run, self.config.build_command)
            print_success("Build finished")

        self._run_step(ReleaseState.WRITE_FILES, self.write_files, release)
        self._run_step(ReleaseState.TAG, self.tag, release)

        if push:
            self._run_step(ReleaseState.PUSH, self.push)

        print(success(bold(f"\n🎉 Release {release.tag_name} completed successfully!")))
        if not push:
            print(warning("\nChanges committed locally only."))
            print("Run the following to push when ready:")
            print(f"  {info(f'git push {self.config.remote} {self.config.branch} --tags')}")
        else:
            print(dim(f"\n{BULLET} CI will run tests and publish the release for {release.tag_name}"))
        return self._outcome(ReleaseState.DONE, release, pushed=push)
