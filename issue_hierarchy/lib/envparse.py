"""
Parser for --env-file credential files.

Holds GITHUB_TOKEN, GITHUB_REPOSITORY and friends as KEY=value lines. The
file is never sourced, so anything a shell would expand is refused rather
than passed to gh as a literal token.
"""

import re
from pathlib import Path
from typing import Optional

# A token copied from `export GITHUB_TOKEN=$(gh auth token)` must not be
# taken at face value
SHELL_EXPANSION = re.compile(r'`|\$\(|\$\{|;|&&|\|')

KEY_PATTERN = re.compile(r'^[A-Z][A-Z0-9_]*$')
EXPORT_PREFIX = "export "
QUOTES = ('"', "'")


def _parse_line(lineno: int, line: str) -> Optional[tuple[str, str]]:
    """Return (key, value) for a setting line, None for blanks and comments."""
    line = line.strip()
    if not line or line.startswith('#'):
        return None
    if line.startswith(EXPORT_PREFIX):
        line = line[len(EXPORT_PREFIX):].lstrip()

    key, sep, value = line.partition('=')
    if not sep:
        raise ValueError(f"Line {lineno}: Invalid syntax (expected KEY=value)")
    key, value = key.strip(), value.strip()

    if not KEY_PATTERN.match(key):
        raise ValueError(f"Line {lineno}: Invalid key '{key}' (use upper-case names like GITHUB_TOKEN)")
    if len(value) >= 2 and value[0] == value[-1] and value[0] in QUOTES:
        value = value[1:-1]
    if SHELL_EXPANSION.search(value):
        raise ValueError(f"Line {lineno}: Forbidden pattern in {key}; put the literal value in the file")
    return key, value


def parse_env(text: str) -> dict[str, str]:
    """
    Parse credential file content into a dict. Later keys override earlier ones.

    Raises:
        ValueError: on a malformed line or a value needing shell expansion
    """
    settings = {}
    for lineno, line in enumerate(text.splitlines(), 1):
        parsed = _parse_line(lineno, line)
        if parsed is not None:
            key, value = parsed
            settings[key] = value
    return settings


def load_env(filepath: str | Path) -> dict[str, str]:
    """
    Read and parse a credential file.

    Raises:
        FileNotFoundError: if file doesn't exist
        ValueError: if a line is malformed
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Env file not found: {filepath}")
    return parse_env(path.read_text())
