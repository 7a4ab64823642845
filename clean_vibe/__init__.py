"""
Clean Vibe

Instruction scaffolding for AI agents, plus release and version tooling.
"""

__version__ = "1.0.2"

# Commit categories in classification priority order (first match wins).
# Used by: versioning/commits.py, versioning/changelog.py, output (colors)
COMMIT_CATEGORIES = [
    'breaking',
    'feature',
    'fix',
    'docs',
    'style',
    'refactor',
    'test',
    'performance',
    'security',
    'chore',
    'other',
]

BUMP_TYPES = ['patch', 'minor', 'major']
