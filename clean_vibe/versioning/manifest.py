"""Project manifest version field (pyproject.toml or package.json style)."""

import json
import re
import tomllib
from pathlib import Path

from clean_vibe.errors import NotFoundError, ValidationError

TABLE_RE = re.compile(r'^\s*\[\s*([^\]]+?)\s*\]\s*(#.*)?$')
VERSION_RE = re.compile(r'^(?P<key>\s*version\s*=\s*)(?P<quote>["\'])(?P<value>[^"\']*)(?P=quote)(?P<rest>.*)$')


class Manifest:
    """Reads and updates the version of a project manifest in place."""

    def __init__(self, path: Path):
        self.path = Path(path)

    @property
    def is_toml(self) -> bool:
        return self.path.suffix == '.toml'

    def _ensure_exists(self) -> None:
        if not self.path.is_file():
            raise NotFoundError(f"Project manifest not found: {self.path}")

    def read_version(self) -> str:
        self._ensure_exists()
        if self.is_toml:
            try:
                data = tomllib.loads(self.path.read_text(encoding='utf-8'))
            except tomllib.TOMLDecodeError as e:
                raise ValidationError(f"Could not parse {self.path}: {e}")
            version = data.get('project', {}).get('version')
        else:
            try:
                data = json.loads(self.path.read_text(encoding='utf-8'))
            except json.JSONDecodeError as e:
                raise ValidationError(f"Could not parse {self.path}: {e}")
            version = data.get('version') if isinstance(data, dict) else None

        if not isinstance(version, str):
            raise ValidationError(f"No static version field in {self.path}")
        return version

    def write_version(self, version: str) -> None:
        self._ensure_exists()
        if self.is_toml:
            self._write_toml(version)
        else:
            self._write_json(version)

    def _write_json(self, version: str) -> None:
        data = json.loads(self.path.read_text(encoding='utf-8'))
        data['version'] = version
        self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + '\n', encoding='utf-8')

    def _write_toml(self, version: str) -> None:
        """Rewrite `version = "..."` in the [project] table, leaving other lines untouched."""
        lines = self.path.read_text(encoding='utf-8').splitlines(keepends=True)
        table = None
        for i, line in enumerate(lines):
            header = TABLE_RE.match(line)
            if header:
                table = header.group(1)
                continue
            if table != 'project':
                continue
            match = VERSION_RE.match(line.rstrip('\r\n'))
            if match:
                ending = line[len(line.rstrip('\r\n')):]
                lines[i] = f"{match['key']}{match['quote']}{version}{match['quote']}{match['rest']}{ending}"
                self.path.write_text(''.join(lines), encoding='utf-8')
                return
        raise ValidationError(f"No static version field in the [project] table of {self.path}")
