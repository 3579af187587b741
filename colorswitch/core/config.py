"""Configuration for colorswitch: .env loading and Settings.

Resolution order (first wins):
  1. Command-line flags (applied by the CLI on top of Settings).
  2. OS environment variables — a .env file never overwrites them.
  3. The .env file given by --env-file, or the first .env found walking up
     from the working directory. The walk stops at the repository root
     (a .git directory, or a .git file for worktrees).
  4. Built-in defaults.

Variables:
  COLORSWITCH_CLAMP_SATURATION  clamp boosted saturation to [0, 1]  (default true)
  COLORSWITCH_WORKERS           engine thread-pool size             (default 1)
  COLORSWITCH_CAPTION           add a caption strip to output PNGs  (default false)
"""

import os
from dataclasses import dataclass
from pathlib import Path

_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off'}


@dataclass
class Settings:
    clamp_saturation: bool = True
    max_workers: int = 1
    caption: bool = False


def find_dotenv(start: Path) -> Path | None:
    """Return the nearest .env at or above start, without crossing a .git boundary."""
    for directory in [start.resolve(), *start.resolve().parents]:
        candidate = directory / '.env'
        if candidate.is_file():
            return candidate
        if (directory / '.git').exists():
            return None
    return None


def parse_dotenv(path: Path) -> dict[str, str]:
    """Parse KEY=value lines. Quotes around values and a leading 'export ' are stripped."""
    values: dict[str, str] = {}
    for raw in path.read_text(encoding='utf-8').splitlines():
        line = raw.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        if line.startswith('export '):
            line = line[len('export ') :]
        key, _, value = line.partition('=')
        key = key.strip()
        if key:
            values[key] = value.strip().strip('"').strip("'")
    return values


def load_env(env_file: str | None = None) -> Path | None:
    """Copy .env entries into os.environ where unset. Returns the file used, if any."""
    if env_file:
        path: Path | None = Path(env_file)
        if not path.is_file():
            return None
    else:
        path = find_dotenv(Path.cwd())
        if path is None:
            return None

    for key, value in parse_dotenv(path).items():
        os.environ.setdefault(key, value)
    return path


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == '':
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f'{name}: expected a boolean (1/0, true/false, yes/no, on/off), got {raw!r}')


def _env_int(name: str, default: int, minimum: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f'{name}: expected an integer, got {raw!r}') from None
    if value < minimum:
        raise ValueError(f'{name}: must be >= {minimum}, got {value}')
    return value


def load_settings() -> Settings:
    """Build Settings from the current environment."""
    return Settings(
        clamp_saturation=_env_bool('COLORSWITCH_CLAMP_SATURATION', True),
        max_workers=_env_int('COLORSWITCH_WORKERS', 1, minimum=1),
        caption=_env_bool('COLORSWITCH_CAPTION', False),
    )
