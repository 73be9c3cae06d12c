"""Environment configuration for aura-tool.

Load order (first wins):
  1. Existing OS environment variables, never overwritten.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Recognised settings:
  AURA_JPEG_QUALITY   JPEG quality for overlay output, 1-95 (default 90)
  AURA_ACCENTS        0/false/no/off disables crown and side glows
"""

import os
from pathlib import Path

from aura_reader.core.codec import DEFAULT_QUALITY

_FALSE = {'0', 'false', 'no', 'off'}


def _find_dotenv(start: Path) -> Path | None:
    """Walk up from start, return first .env found, stop at .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / '.env'
        if candidate.is_file():
            return candidate
        # .git can be a dir (clone) or a file (worktree)
        if (current / '.git').exists():
            return None
        if current.parent == current:
            return None
        current = current.parent


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Parse KEY=value / KEY="value" lines. Comments and malformed lines are skipped."""
    result: dict[str, str] = {}
    for raw in path.read_text(encoding='utf-8').splitlines():
        line = raw.strip()
        if line.startswith('export '):
            line = line[len('export ') :].lstrip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, _, value = line.partition('=')
        key = key.strip()
        if key:
            result[key] = value.strip().strip('"').strip("'")
    return result


def load_env(env_file: str | None = None) -> Path | None:
    """Load .env into os.environ for keys not already set.

    Returns the path that was loaded, or None if no .env was found/used.
    """
    if env_file:
        path: Path | None = Path(env_file)
        if not path.is_file():
            return None
    else:
        path = _find_dotenv(Path.cwd())
        if path is None:
            return None

    for key, value in _parse_dotenv(path).items():
        os.environ.setdefault(key, value)
    return path


def jpeg_quality(explicit: int | None = None) -> int:
    """Explicit value, else AURA_JPEG_QUALITY, else the default; clamped to 1-95."""
    if explicit is None:
        raw = os.environ.get('AURA_JPEG_QUALITY', '').strip()
        try:
            explicit = int(raw) if raw else DEFAULT_QUALITY
        except ValueError:
            explicit = DEFAULT_QUALITY
    return max(1, min(95, explicit))


def accents_enabled(disable_flag: bool = False) -> bool:
    """False when --no-accents is given or AURA_ACCENTS is a false-ish value."""
    if disable_flag:
        return False
    return os.environ.get('AURA_ACCENTS', '1').strip().lower() not in _FALSE
