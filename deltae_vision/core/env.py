"""Where DELTAE_* settings come from.

Lookup order (first wins):
  1. The process environment.
  2. One .env file: the --env-file path if given, else the first .env found
     walking up from the current directory, stopping at a .git boundary.

Only DELTAE_* keys are read from the file, and os.environ is never modified.
The merged mapping is handed to core.config.
"""

import os
from collections import ChainMap
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

PREFIX = 'DELTAE_'


@dataclass
class Environment:
    path: Path | None = None  # the .env file that was read, if any
    values: Mapping[str, str] = field(default_factory=dict)


def _find_dotenv(start: Path) -> Path | None:
    """Walk up from start, return first .env found, stop at .git boundary."""
    current = start.resolve()
    for directory in (current, *current.parents):
        candidate = directory / '.env'
        if candidate.is_file():
            return candidate
        # .git is a directory in a clone and a file in a worktree
        if (directory / '.git').exists():
            return None
    return None


def _parse_line(line: str) -> tuple[str, str] | None:
    line = line.strip()
    if not line or line.startswith('#'):
        return None
    if line.startswith('export '):
        line = line[len('export ') :].lstrip()
    key, sep, value = line.partition('=')
    key = key.strip()
    if not sep or not key:
        return None
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in '"\'':
        return key, value[1:-1]
    return key, value.split(' #', 1)[0].rstrip()


def _parse_dotenv(path: Path) -> dict[str, str]:
    """DELTAE_* assignments in a .env file. KEY=value, quoted values, `export` and trailing comments."""
    result: dict[str, str] = {}
    for line in path.read_text(encoding='utf-8').splitlines():
        parsed = _parse_line(line)
        if parsed and parsed[0].startswith(PREFIX):
            result[parsed[0]] = parsed[1]
    return result


def load_env(env_file: str | None = None, environ: Mapping[str, str] | None = None) -> Environment:
    """Layer a .env file under the process environment.

    A missing explicit file is ignored, as is a tree with no .env.
    """
    base = os.environ if environ is None else environ
    path = Path(env_file) if env_file else _find_dotenv(Path.cwd())
    if path is None or not path.is_file():
        return Environment(values=base)
    return Environment(path=path, values=ChainMap(base, _parse_dotenv(path)))
