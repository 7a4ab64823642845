"""CLI Commands - Reports and helper workflows for vibe-version"""

from clean_vibe import BUMP_TYPES
from clean_vibe.config import Config
from clean_vibe.errors import SubprocessFailureError, ValidationError
from clean_vibe.output import (
    colorize_bump_type, dim, heading, info, label, success, warning,
    print_error, print_field, print_success, print_warning,
)
from clean_vibe.process import CommandRunner
from clean_vibe.release import ReleaseManager
from clean_vibe.versioning import next_version


def display_status(manager: ReleaseManager) -> int:
    """Version status dashboard. Reads only; the history file is never written."""
    history = manager.load_history()
    suggestion = manager.suggest()
    recent = manager.config.recent_commits

    print(heading("\n📦 Version Status Dashboard\n"))
    print_field("Current Version", success(suggestion.current_version))
    print_field("Last Tag", success(suggestion.tag) if suggestion.tag else dim("None"))
    print_field("Total Releases", warning(str(history.total_releases)))
    print_field("Commits Since Tag", warning(str(suggestion.commit_count)))

    if history.last_release:
        print_field("Last Release", f"{info(history.last_release.version)} ({history.last_release.day})")

    if suggestion.nothing_to_release:
        print(f"\n{warning('Nothing to release:')} no commits since {suggestion.tag or 'the first commit'}")
        return 0

    print(f"\n{info('🤖 Smart Suggestion:')}")
    print(f"  {success(suggestion.version)} ({colorize_bump_type(suggestion.type)})")
    print(f"  {dim('Reason:')} {suggestion.reasoning}")

    print(f"\n{label('Recent commits:')}")
    for commit in suggestion.commits[:recent]:
        print(f"  {dim(commit.hash)} {commit.message}")
    if suggestion.commit_count > recent:
        print(f"  {dim(f'... and {suggestion.commit_count - recent} more')}")
    return 0


def display_suggestion(manager: ReleaseManager) -> int:
    suggestion = manager.suggest()
    if suggestion.nothing_to_release:
        print(warning(f"Nothing to release: no commits since {suggestion.tag or 'the first commit'}"))
        return 0
    print(info(f"Suggested next version: {success(suggestion.version)} ({suggestion.type})"))
    print(dim(f"Reasoning: {suggestion.reasoning}"))
    return 0


def display_history(manager: ReleaseManager, limit: int | None = None) -> int:
    history = manager.load_history()
    limit = limit if limit and limit > 0 else manager.config.history_limit

    print(heading("\n📚 Version History\n"))

    if not history.versions:
        print(dim("No version history found."))
        return 0

    for index, entry in enumerate(history.versions[:limit]):
        marker = '🏷️ ' if index == 0 else '  '
        print(f"{marker}{colorize_bump_type(entry.type, entry.version)} {dim(f'({entry.type})')} - {entry.day}")
        if entry.description:
            print(f"    {dim(entry.description)}")
        print(f"    {dim(f'{entry.commits} commits')}")
        print()

    if len(history.versions) > limit:
        print(dim(f"... and {len(history.versions) - limit} more versions"))
    return 0


def display_check(manager: ReleaseManager) -> int:
    """Compare manifest version with the latest tag and report working tree state."""
    repo = manager.repo
    prefix = manager.config.tag_prefix
    current = manager.current_version()
    tag = repo.current_tag()
    tagged_version = tag[len(prefix):] if tag and prefix and tag.startswith(prefix) else tag
    commits = repo.count_commits_since(tag)
    clean = repo.is_clean()

    print(heading("📦 Version Information\n"))
    print_field("Current Version", success(current))

    if tag:
        print_field("Latest Tag", success(tag))
        if tagged_version != current:
            print_warning(f"Version mismatch: {manager.config.manifest} ({current}) != tag ({tagged_version})")
        else:
            print_success("Version matches latest tag")
    else:
        print_field("Latest Tag", dim("No tags found"))

    print_field("Commits since tag", warning(str(commits)))
    print_field("Current Branch", info(repo.current_branch()))
    print_field("Git Status", success("Clean") if clean else warning("Uncommitted changes"))
    print_field("Last Commit", dim(repo.last_commit() or "No commits found"))

    if commits > 0 and tag:
        print(f"\n{info('💡 Suggested next version:')}")
        for bump_type, reason in (('patch', 'bug fixes'), ('minor', 'new features'), ('major', 'breaking changes')):
            print(f"  {dim(bump_type.capitalize() + ':')} {next_version(current, bump_type)} ({reason})")
        print(f"\n{label('To create a release:')}")
        print(f"  {info('vibe-version release')}        # Interactive release")
        print(f"  {info('vibe-version release patch')}  # Patch release")

    if not clean:
        print(f"\n{warning('You have uncommitted changes.')}")
        print(f"{label('Run')} {info('git status')} {label('to see details.')}")
    return 0


def _run_check_step(runner: CommandRunner, command: str, description: str) -> bool:
    print(label(f"\n🔄 {description}..."))
    try:
        runner.run(command)
    except SubprocessFailureError as e:
        print_error(f"{description} failed ({e.returncode})")
        return False
    print_success(f"{description} completed")
    return True


def run_dev(manager: ReleaseManager, runner: CommandRunner, action: str) -> int:
    """Pre-commit workflow: format, test, or the combined check."""
    config = manager.config
    print(heading("🚀 Development Workflow\n"))

    if action == 'format':
        if not config.format_command:
            print_warning("No format_command configured in .viberc")
            return 1
        return 0 if _run_check_step(runner, config.format_command, "Formatting code") else 1

    if action == 'test':
        if not config.test_command:
            print_warning("No test_command configured in .viberc")
            return 1
        return 0 if _run_check_step(runner, config.test_command, "Running tests") else 1

    ok = True
    if config.format_check_command:
        if not _run_check_step(runner, config.format_check_command, "Checking code formatting"):
            ok = False
            if config.format_command:
                print(warning(f"💡 Run `{config.format_command}` to fix formatting issues"))
    if config.test_command:
        ok = _run_check_step(runner, config.test_command, "Running tests") and ok
    display_check(manager)

    if ok:
        print(success("\n✅ All checks passed! Ready to commit."))
        return 0
    print(warning("\n❌ Some checks failed. Please fix before committing."))
    return 1


def run_publish(config: Config, runner: CommandRunner, bump_type: str) -> int:
    """Trigger the release workflow through the GitHub CLI."""
    if bump_type not in BUMP_TYPES:
        raise ValidationError(f"Invalid version type '{bump_type}'. Use: {', '.join(BUMP_TYPES)}")

    print(label(f"🎯 Publishing {bump_type} release via GitHub Actions..."))
    try:
        runner.run(f"gh workflow run {config.release_workflow} -f version={bump_type}")
    except SubprocessFailureError:
        print_warning("Could not trigger workflow via the gh CLI. Manual options:")
        print(f"\n  1. Open the Actions tab, select {info(config.release_workflow)} and click \"Run workflow\"")
        print(f"     with version \"{bump_type}\"")
        print("  2. Or create a GitHub release with a new tag")
        return 1

    print_success("Release workflow triggered successfully!")
    print(dim("The workflow will run tests, bump the version, publish the package and create the release."))
    return 0
