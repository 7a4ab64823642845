"""Template Registry - Map (category, template) ids to instruction documents."""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from clean_vibe.errors import NotFoundError, SourceMissingError

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent

# Destination of a materialized template, relative to the target project root
OUTPUT_PATH = Path('.github') / 'instructions.md'


@dataclass(frozen=True)
class TemplateEntry:
    """A single instructions document in the catalog."""
    id: str
    name: str
    description: str
    source: str  # relative to the registry's base directory


@dataclass(frozen=True)
class TemplateCategory:
    """A group of related templates (frontend, backend, ...)."""
    id: str
    name: str
    description: str
    templates: tuple[TemplateEntry, ...]

    def get(self, template_id: str) -> TemplateEntry | None:
        for entry in self.templates:
            if entry.id == template_id:
                return entry
        return None


@dataclass(frozen=True)
class TemplateInfo:
    """Result of TemplateRegistry.describe()."""
    category: str
    template: str
    description: str
    source: str


DEFAULT_CATEGORIES = (
    TemplateCategory(
        id='fe',
        name='Frontend',
        description='Frontend application templates',
        templates=(
            TemplateEntry(
                id='react',
                name='React',
                description='React with TypeScript, React Query, Zustand, React Router DOM, CSS Modules, React Aria, and Yarn',
                source='fe/react/instructions.md',
            ),
            TemplateEntry(
                id='vanilla',
                name='Vanilla JavaScript',
                description='Vanilla JavaScript/TypeScript with Vite, modern CSS, and accessibility features',
                source='fe/vanilla/instructions.md',
            ),
        ),
    ),
    TemplateCategory(
        id='be',
        name='Backend',
        description='Backend API templates',
        templates=(
            TemplateEntry(
                id='node-express',
                name='Node.js + Express',
                description='Node.js Express API with TypeScript, Prisma, PostgreSQL, Redis, and JWT authentication',
                source='be/node-express/instructions.md',
            ),
            TemplateEntry(
                id='python-django',
                name='Python + Django',
                description='Django REST API with PostgreSQL, Redis, Celery, and JWT authentication',
                source='be/python-django/instructions.md',
            ),
        ),
    ),
    TemplateCategory(
        id='github',
        name='GitHub',
        description='GitHub repository setup templates',
        templates=(
            TemplateEntry(
                id='workflows',
                name='GitHub Workflows',
                description='Complete GitHub Actions workflows for CI/CD, testing, and automation',
                source='github/workflows/instructions.md',
            ),
        ),
    ),
)


class TemplateRegistry:
    """Static catalog of instruction templates."""

    def __init__(self, categories: tuple[TemplateCategory, ...] = DEFAULT_CATEGORIES,
                 base_dir: Path = TEMPLATES_DIR):
        self._categories = {c.id: c for c in categories}
        self.base_dir = Path(base_dir)

    def list_categories(self) -> list[str]:
        return list(self._categories)

    def get_category(self, category_id: str) -> TemplateCategory:
        category = self._categories.get(category_id)
        if category is None:
            raise NotFoundError(f'Category "{category_id}" not found')
        return category

    def list_templates(self, category_id: str | None = None) -> list[str]:
        """Template ids within a category, or "category/template" for all."""
        if category_id is None:
            return [
                f"{category.id}/{entry.id}"
                for category in self._categories.values()
                for entry in category.templates
            ]
        return [entry.id for entry in self.get_category(category_id).templates]

    def describe(self, category_id: str, template_id: str) -> TemplateInfo | None:
        """Look up a template, returning None if the pair is unknown."""
        category = self._categories.get(category_id)
        if category is None:
            return None
        entry = category.get(template_id)
        if entry is None:
            return None
        return TemplateInfo(
            category=category.name,
            template=entry.name,
            description=entry.description,
            source=entry.source,
        )

    def source_path(self, category_id: str, template_id: str) -> Path:
        category = self.get_category(category_id)
        entry = category.get(template_id)
        if entry is None:
            raise NotFoundError(f'Template "{template_id}" not found in category "{category_id}"')
        return self.base_dir / entry.source

    def materialize(self, category_id: str, template_id: str, destination_root: str | Path) -> Path:
        """Copy a template to <destination_root>/.github/instructions.md.

        Any existing file at the destination is overwritten. Nothing is
        written unless both ids resolve and the source document exists.

        Returns:
            Absolute path of the written file
        """
        source = self.source_path(category_id, template_id)
        if not source.is_file():
            raise SourceMissingError(f"Template file not found: {source}")

        target = (Path(destination_root) / OUTPUT_PATH).resolve()
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
        logger.debug("Copied %s -> %s", source, target)
        return target


_default_registry = TemplateRegistry()


def get_available_categories() -> list[str]:
    return _default_registry.list_categories()


def get_available_templates(category_id: str | None = None) -> list[str]:
    return _default_registry.list_templates(category_id)


def get_template_info(category_id: str, template_id: str) -> TemplateInfo | None:
    return _default_registry.describe(category_id, template_id)


def generate_instructions(category_id: str, template_id: str, target_dir: str | Path | None = None) -> Path:
    """Materialize a template into target_dir (default: current directory)."""
    return _default_registry.materialize(category_id, template_id, target_dir or Path.cwd())


__all__ = [
    "TemplateEntry",
    "TemplateCategory",
    "TemplateInfo",
    "TemplateRegistry",
    "DEFAULT_CATEGORIES",
    "OUTPUT_PATH",
    "TEMPLATES_DIR",
    "get_available_categories",
    "get_available_templates",
    "get_template_info",
    "generate_instructions",
]
