import logging
import logging.config
import json
import os
from importlib import resources
from pathlib import Path


def _resolve_logs_dir() -> str:
    """Resolve a writable logs directory with precedence.

    Precedence:
    1) HSCAN_LOG_DIR env var
    2) ~/.hscan/logs
    """
    env_dir = os.getenv("HSCAN_LOG_DIR")
    if env_dir:
        return env_dir
    home_dir = Path.home() / ".hscan" / "logs"
    return str(home_dir)


DEFAULT_LOGS_PATH = _resolve_logs_dir()
DEFAULT_LOGGING_FILE = "default_logging.json"
CONSOLE_FORMAT = "[%(asctime)s]: %(message)s"
CONSOLE_DATEFMT = "%H:%M:%S"


class MaxLevelFilter(logging.Filter):
    """Pass only records below the given level.

    Used by the packaged config to keep warnings and errors off stdout.
    """

    def __init__(self, level="WARNING"):
        super().__init__()
        self.level = level if isinstance(level, int) else logging.getLevelName(level.upper())

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def _settings_dirs_precedence() -> list[str]:
    """Return list of settings directories in precedence order (not including packaged defaults)."""
    dirs: list[str] = []
    env_dir = os.getenv("HSCAN_SETTINGS_DIR")
    if env_dir:
        dirs.append(env_dir)
    dirs.append("/etc/hscan")
    dirs.append("./settings")
    return dirs


def find_settings_file(filename: str) -> str | None:
    """Find a settings file according to precedence directories.

    Returns an absolute path if found, else None.
    """
    for d in _settings_dirs_precedence():
        candidate = Path(d) / filename
        if candidate.exists():
            return str(candidate.resolve())
    return None


def load_settings_json(filename: str) -> dict | None:
    """Load a JSON settings file from precedence or packaged defaults.

    Attempt order:
    - HSCAN_SETTINGS_DIR
    - /etc/hscan/
    - ./settings/
    - packaged defaults (hscan.resources.settings)
    """
    path = find_settings_file(filename)
    if path:
        try:
            return json.loads(Path(path).read_text())
        except (OSError, json.JSONDecodeError):
            logging.getLogger(__name__).exception("Failed reading settings from %s", path)

    try:
        pkg = resources.files("hscan.resources.settings").joinpath(filename)
        if pkg.is_file():
            with pkg.open("r", encoding="utf-8") as f:
                return json.load(f)
    except (OSError, ModuleNotFoundError, json.JSONDecodeError):
        logging.getLogger(__name__).exception("Failed reading packaged default for %s", filename)
    return None


def _sanitize_logging_config(config: dict) -> dict:
    """Rewrite relative handler filenames into DEFAULT_LOGS_PATH."""
    handlers = config.get("handlers", {})
    for name, handler in handlers.items():
        filename = handler.get("filename")
        if filename and not os.path.isabs(filename):
            handler["filename"] = str(Path(DEFAULT_LOGS_PATH) / Path(filename).name)
    return config


def set_verbose(verbose: bool) -> None:
    """Switch the package logger between INFO and DEBUG."""
    logging.getLogger("hscan").setLevel(logging.DEBUG if verbose else logging.INFO)


def setup_logging(verbose: bool = False, preferred_filename: str | None = None) -> None:
    """Configure logging using dictConfig with robust defaults.

    If preferred_filename is provided, try to load it using load_settings_json.
    If not found, fall back to "default_logging.json". If neither is available,
    initialize basicConfig with the console format.
    """
    default_level = logging.DEBUG if verbose else logging.INFO

    # Ensure logs directory exists (best-effort)
    try:
        Path(DEFAULT_LOGS_PATH).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logging.basicConfig(level=default_level, format=CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT)
        logging.getLogger(__name__).warning(
            "Could not create log directory %s: %s. Using basicConfig.", DEFAULT_LOGS_PATH, e
        )
        set_verbose(verbose)
        return

    config_dict = None
    filenames = [preferred_filename] if preferred_filename else []
    filenames.append(DEFAULT_LOGGING_FILE)

    for fname in filenames:
        if not fname:
            continue
        cfg = load_settings_json(fname)
        if cfg:
            config_dict = _sanitize_logging_config(cfg)
            break

    if config_dict:
        try:
            logging.config.dictConfig(config_dict)
            set_verbose(verbose)
            logging.getLogger(__name__).debug("Logging configured from %s", preferred_filename or DEFAULT_LOGGING_FILE)
            return
        except (ValueError, TypeError, AttributeError, ImportError) as e:
            logging.basicConfig(level=default_level, format=CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT)
            logging.error("Error applying logging config: %s. Falling back to basicConfig.", e, exc_info=True)
            set_verbose(verbose)
            return

    # Fallback
    logging.basicConfig(level=default_level, format=CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT)
    logging.warning("No logging configuration found. Using basicConfig.")
    set_verbose(verbose)
