import os

from dotenv import find_dotenv, load_dotenv

from finance_tracker.logger import get_logger

logger = get_logger(__name__)


CONFIG_FILENAME = "config.yaml"
LEDGER_FILENAME = "ledger.json"

DEFAULT_MONTHLY_SAVINGS_GOAL = 500.0
DEFAULT_LOW_SAVINGS_THRESHOLD = 200.0
DEFAULT_LOW_DAILY_BUDGET_THRESHOLD = 20.0
DEFAULT_INCOME_GROSS_FACTOR = 1.21

_CONFIG_FILE_PATH: str | None = None
_CONFIG_FILE_VALUES: dict[str, str] = {}
_EXTERNAL_ENV_KEYS: set[str] = set()

_CONFIG_KEYS = (
    "LOG_LEVEL",
    "LOG_DIR",
    "DATA_DIR",
    "SAVINGS_MONTHLY_GOAL",
    "LOW_SAVINGS_THRESHOLD",
    "LOW_DAILY_BUDGET_THRESHOLD",
    "INCOME_GROSS_FACTOR",
    "HOST",
    "PORT",
)


def _resolve_dotenv_path() -> str | None:
    config_dir = os.getenv("CONFIG_DIR")
    if config_dir:
        candidate = os.path.join(config_dir, ".env")
        if os.path.exists(candidate):
            return candidate
    resolved = find_dotenv(usecwd=True)
    return resolved or None


def _resolve_config_path() -> str:
    config_dir = os.getenv("CONFIG_DIR")
    if config_dir:
        return os.path.join(config_dir, CONFIG_FILENAME)
    cwd = os.getcwd()
    candidate = os.path.join(cwd, "config", CONFIG_FILENAME)
    if os.path.exists(candidate):
        return candidate
    return os.path.join(cwd, CONFIG_FILENAME)


def _strip_inline_comment(raw_value: str) -> str:
    in_single = False
    in_double = False
    for index, char in enumerate(raw_value):
        if char == '"' and not in_single:
            in_double = not in_double
        elif char == "'" and not in_double:
            in_single = not in_single
        elif char == "#" and not in_single and not in_double:
            return raw_value[:index].rstrip()
    return raw_value


def _unquote_value(raw_value: str) -> str:
    if len(raw_value) >= 2 and raw_value[0] == raw_value[-1] and raw_value[0] in {'"', "'"}:
        return raw_value[1:-1]
    return raw_value


def read_config_file(path: str | None) -> dict[str, str]:
    """Read ``KEY: value`` lines, skipping comments and blank values."""
    if not path or not os.path.exists(path):
        return {}

    values: dict[str, str] = {}
    with open(path, encoding="utf-8") as handle:
        for line in handle:
            stripped = line.strip()
            if not stripped or stripped.startswith("#") or ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            key = key.strip()
            if not key:
                continue
            value = _unquote_value(_strip_inline_comment(raw_value).strip())
            if value:
                values[key] = value
    return values


def load_environment() -> None:
    global _CONFIG_FILE_PATH
    global _CONFIG_FILE_VALUES
    global _EXTERNAL_ENV_KEYS

    dotenv_path = _resolve_dotenv_path()
    if dotenv_path:
        load_dotenv(dotenv_path=dotenv_path, override=False)

    _EXTERNAL_ENV_KEYS = set(os.environ.keys())

    _CONFIG_FILE_PATH = _resolve_config_path()
    _CONFIG_FILE_VALUES = read_config_file(_CONFIG_FILE_PATH)

    for key in _CONFIG_KEYS:
        if key not in os.environ and key in _CONFIG_FILE_VALUES:
            os.environ[key] = _CONFIG_FILE_VALUES[key]


def get_config_path() -> str | None:
    return _CONFIG_FILE_PATH


def is_env_override(name: str) -> bool:
    return name in _EXTERNAL_ENV_KEYS


def ensure_dir(path: str | None) -> None:
    if path and path not in {".", "./"}:
        os.makedirs(path, exist_ok=True)


def ensure_dirs(*paths: str | None) -> None:
    for path in paths:
        ensure_dir(path)


def get_env_int(name: str, default: int, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("[ENV] Invalid %s='%s', using default %s.", name, raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning(
            "[ENV] %s='%s' below minimum %s, using default %s.",
            name,
            raw,
            min_value,
            default,
        )
        return default
    return value


def get_env_float(name: str, default: float, min_value: float | None = None) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("[ENV] Invalid %s='%s', using default %s.", name, raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning(
            "[ENV] %s='%s' below minimum %s, using default %s.",
            name,
            raw,
            min_value,
            default,
        )
        return default
    return value


def get_monthly_savings_goal() -> float:
    return get_env_float("SAVINGS_MONTHLY_GOAL", DEFAULT_MONTHLY_SAVINGS_GOAL, min_value=0.0)


def get_low_savings_threshold() -> float:
    return get_env_float("LOW_SAVINGS_THRESHOLD", DEFAULT_LOW_SAVINGS_THRESHOLD, min_value=0.0)


def get_low_daily_budget_threshold() -> float:
    return get_env_float(
        "LOW_DAILY_BUDGET_THRESHOLD",
        DEFAULT_LOW_DAILY_BUDGET_THRESHOLD,
        min_value=0.0,
    )


def get_income_gross_factor() -> float:
    return get_env_float("INCOME_GROSS_FACTOR", DEFAULT_INCOME_GROSS_FACTOR, min_value=1.0)


_SENSITIVE_ENV_KEYS = (
    "KEY",
    "TOKEN",
    "SECRET",
    "PASSWORD",
    "PASS",
    "AUTH",
    "PRIVATE",
)

_ENV_KEYS_TO_LOG = (
    "LOG_LEVEL",
    "LOG_DIR",
    "DATA_DIR",
    "CONFIG_DIR",
    "SAVINGS_MONTHLY_GOAL",
    "LOW_SAVINGS_THRESHOLD",
    "LOW_DAILY_BUDGET_THRESHOLD",
    "INCOME_GROSS_FACTOR",
    "HOST",
    "PORT",
)


def _should_mask_env_value(name: str) -> bool:
    upper_name = name.upper()
    return any(marker in upper_name for marker in _SENSITIVE_ENV_KEYS)


def _mask_env_value(name: str, value: str) -> str:
    sanitized = value.replace("\r", "\\r").replace("\n", "\\n")
    if not _should_mask_env_value(name):
        return sanitized
    if len(sanitized) <= 4:
        return "****"
    return f"{sanitized[:2]}...{sanitized[-2:]}"


def log_environment() -> None:
    logger.info("[ENV] Logging configured environment variables (masked where needed).")
    logger.info("[ENV] config file: %s", get_config_path() or "<none>")
    for key in _ENV_KEYS_TO_LOG:
        raw_value = os.getenv(key)
        value = "<unset>" if raw_value is None else _mask_env_value(key, raw_value)
        source = "env" if is_env_override(key) else "config"
        if raw_value is None:
            source = "default"
        logger.info("[ENV] %s=%s (%s)", key, value, source)


load_environment()

DATA_DIR = os.getenv("DATA_DIR", ".")
LOG_DIR = os.getenv("LOG_DIR")
CONFIG_DIR = os.getenv("CONFIG_DIR")

ensure_dirs(DATA_DIR, LOG_DIR, CONFIG_DIR)

LEDGER_PATH = os.path.join(DATA_DIR, LEDGER_FILENAME)
