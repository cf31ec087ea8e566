"""
monday-cli shared configuration, constants, and module-level state.
Only imports monday_cli.exceptions from the project.
"""

import os
import tempfile

from monday_cli.exceptions import CliError, SetupError  # noqa: F401

# ---------------------------------------------------------------------------
# .env path and helpers
# ---------------------------------------------------------------------------

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
_PROJECT_ROOT = os.path.dirname(_PACKAGE_DIR)

ENV_PATH = os.path.join(_PROJECT_ROOT, ".env")

# Keys that may also come from the process environment (containers, CI).
_ENV_KEYS = (
    "MONDAY_API_TOKEN",
    "MONDAY_API_URL",
    "MONDAY_API_VERSION",
    "MONDAY_HTTP_TIMEOUT_SECONDS",
    "MONDAY_HTTP_MAX_RETRIES",
    "MONDAY_HTTP_RETRY_BASE_SECONDS",
    "MONDAY_HTTP_MAX_RESPONSE_BYTES",
    "MONDAY_HTTP_LOG",
    "MONDAY_HTTP_LOG_SAMPLE_RATE",
    "MONDAY_ITEMS_PAGE_LIMIT",
    "MONDAY_MCP_RESPONSE_MODE",
)


def load_env():
    """Read .env into a dict. Keys missing from the file fall back to os.environ."""
    env = {}
    if os.path.exists(ENV_PATH):
        with open(ENV_PATH) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, val = line.split("=", 1)
                    env[key.strip()] = val.strip()
    for key in _ENV_KEYS:
        if key not in env and os.environ.get(key):
            env[key] = os.environ[key]
    return env


def save_env_value(key, value):
    """Update or add a key in the .env file (atomic write-then-rename)."""
    lines = []
    found = False
    if os.path.exists(ENV_PATH):
        with open(ENV_PATH) as f:
            lines = f.readlines()
    for i, line in enumerate(lines):
        if line.strip().startswith(f"{key}="):
            lines[i] = f"{key}={value}\n"
            found = True
            break
    if not found:
        lines.append(f"{key}={value}\n")
    env_dir = os.path.dirname(ENV_PATH) or "."
    fd, tmp_path = tempfile.mkstemp(dir=env_dir, prefix=".env_tmp_")
    try:
        with os.fdopen(fd, "w") as f:
            f.writelines(lines)
        os.replace(tmp_path, ENV_PATH)
    except Exception:
        try:
            os.remove(tmp_path)
        except OSError:
            pass
        raise
    # Owner-only on Unix/Mac. No-op on Windows.
    try:
        os.chmod(ENV_PATH, 0o600)
    except (OSError, NotImplementedError):
        pass


def _env_bool(key, default=False):
    """Parse common boolean env formats."""
    raw = env.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(key, default):
    """Parse integer env values with fallback."""
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(key, default):
    """Parse float env values with fallback."""
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

VERSION = "0.3.0"
CONTRACT_SCHEMA_VERSION = "1.0"

DEFAULT_API_URL = "https://api.monday.com/v2"
DEFAULT_API_VERSION = "2024-01"
VALID_FORMATS = ("json", "table")

# ---------------------------------------------------------------------------
# Module-level state (loaded from .env)
# ---------------------------------------------------------------------------

env = load_env()

API_TOKEN = env.get("MONDAY_API_TOKEN", "")
API_URL = env.get("MONDAY_API_URL", "") or DEFAULT_API_URL
API_VERSION = env.get("MONDAY_API_VERSION", "") or DEFAULT_API_VERSION
HTTP_TIMEOUT_SECONDS = _env_int("MONDAY_HTTP_TIMEOUT_SECONDS", 30)
HTTP_MAX_RETRIES = _env_int("MONDAY_HTTP_MAX_RETRIES", 2)
HTTP_RETRY_BASE_SECONDS = _env_float("MONDAY_HTTP_RETRY_BASE_SECONDS", 1.0)
HTTP_MAX_RESPONSE_BYTES = _env_int("MONDAY_HTTP_MAX_RESPONSE_BYTES", 5_000_000)
HTTP_LOG_ENABLED = _env_bool("MONDAY_HTTP_LOG", False)
HTTP_LOG_SAMPLE_RATE = min(1.0, max(0.0, _env_float("MONDAY_HTTP_LOG_SAMPLE_RATE", 1.0)))
ITEMS_PAGE_LIMIT = min(500, max(1, _env_int("MONDAY_ITEMS_PAGE_LIMIT", 100)))

MCP_RESPONSE_MODE = env.get("MONDAY_MCP_RESPONSE_MODE", "legacy").strip().lower()
if MCP_RESPONSE_MODE not in ("legacy", "envelope"):
    MCP_RESPONSE_MODE = "legacy"

# ---------------------------------------------------------------------------
# Runtime flags (set by cli.main)
# ---------------------------------------------------------------------------

RUNTIME_QUIET = False
RUNTIME_VERBOSE = False
RUNTIME_DRY_RUN = False
