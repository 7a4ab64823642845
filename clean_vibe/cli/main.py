"""CLI Main Entry Point - Template copy"""

from pathlib import Path

from clean_vibe.errors import VibeError
from clean_vibe.output import bold, dim, info, label, warning, print_error, print_success
from clean_vibe.prompts import Prompter, PromptCancelled, TerminalPrompter
from clean_vibe.templates import OUTPUT_PATH, TemplateRegistry

from clean_vibe.cli.args import parse_template_args
from clean_vibe.cli.utils import setup_logging

PROJECT_KINDS = {
    'fe': 'frontend',
    'be': 'backend',
    'github': 'GitHub automation',
}


def _display_templates(registry: TemplateRegistry) -> None:
    """Print every category with its templates."""
    for category_id in registry.list_categories():
        category = registry.get_category(category_id)
        print(f"\n{bold(category.name)} {dim(f'({category.id})')} - {category.description}")
        for entry in category.templates:
            print(f"  {info(f'{category.id}/{entry.id}')}  {entry.description}")
    print()


def _choose_template(registry: TemplateRegistry, prompter: Prompter) -> tuple[str, str]:
    """Ask for a category, then a template within it."""
    category_id = prompter.choose_one(
        "Select a category:",
        [(f"{c.name} - {c.description}", c.id)
         for c in (registry.get_category(cid) for cid in registry.list_categories())],
    )
    category = registry.get_category(category_id)
    template_id = prompter.choose_one(
        f"Select a {category.name.lower()} template:",
        [(f"{entry.name} - {entry.description}", entry.id) for entry in category.templates],
    )
    return category_id, template_id


def _display_next_steps(category_id: str) -> None:
    kind = PROJECT_KINDS.get(category_id, category_id)
    print(warning("\nNext steps:"))
    print(f"1. Review the instructions in {OUTPUT_PATH.as_posix()}")
    print("2. Share this file with your AI agent")
    print(f"3. The AI agent will use these instructions to create your {kind} project\n")


def run(prompter: Prompter, target_dir: Path, registry: TemplateRegistry | None = None) -> int:
    """Interactive template selection and copy.

    Returns:
        int: Exit code
    """
    registry = registry or TemplateRegistry()

    print(label("🚀 Clean Vibe - PRD Generator\n"))
    print(dim("Generate comprehensive instructions for AI agents to build well-structured applications."))

    try:
        category_id, template_id = _choose_template(registry, prompter)
    except PromptCancelled:
        print(dim("Cancelled."))
        return 0

    try:
        target = registry.materialize(category_id, template_id, target_dir)
    except (VibeError, OSError) as e:
        print_error(f"Error copying instructions: {e}")
        return 1

    described = registry.describe(category_id, template_id)
    print_success(f"Successfully copied {described.template} instructions to {target}")
    _display_next_steps(category_id)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the template CLI."""
    args = parse_template_args(argv)
    setup_logging(args.verbose)

    registry = TemplateRegistry()
    if args.list:
        _display_templates(registry)
        return 0

    target_dir = Path(args.dir) if args.dir else Path.cwd()
    try:
        return run(TerminalPrompter(), target_dir, registry)
    except KeyboardInterrupt:
        print()
        return 130
