"""Configuration management."""

import calendar
import os
from dataclasses import asdict, dataclass
from pathlib import Path

import yaml

# Default data directory
DATA_DIR = Path(__file__).parent.parent.parent / "data"
DEFAULT_CONFIG_FILE = "gymbook.yaml"
ENV_PREFIX = "GYMBOOK_"


@dataclass
class Settings:
    """Application settings."""

    data_dir: str = str(DATA_DIR)
    db_filename: str = "gymbook.db"
    images_dirname: str = "images"

    # Logging
    log_level: str = "INFO"

    # Calendar
    first_weekday: int = calendar.SUNDAY
    double_tap_interval: float = 0.5

    # Units
    default_weight_unit: str = "kg"

    @property
    def db_path(self) -> Path:
        """Path of the SQLite key-value database."""
        return Path(self.data_dir).expanduser() / self.db_filename

    @property
    def images_dir(self) -> Path:
        """Private directory holding equipment photos."""
        return Path(self.data_dir).expanduser() / self.images_dirname

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


def _from_env() -> Settings:
    defaults = Settings()
    return Settings(
        data_dir=os.getenv(f"{ENV_PREFIX}DATA_DIR", defaults.data_dir),
        db_filename=os.getenv(f"{ENV_PREFIX}DB_FILENAME", defaults.db_filename),
        images_dirname=os.getenv(f"{ENV_PREFIX}IMAGES_DIRNAME", defaults.images_dirname),
        log_level=os.getenv(f"{ENV_PREFIX}LOG_LEVEL", defaults.log_level),
        first_weekday=int(os.getenv(f"{ENV_PREFIX}FIRST_WEEKDAY", defaults.first_weekday)),
        double_tap_interval=float(
            os.getenv(f"{ENV_PREFIX}DOUBLE_TAP_INTERVAL", defaults.double_tap_interval)
        ),
        default_weight_unit=os.getenv(
            f"{ENV_PREFIX}DEFAULT_WEIGHT_UNIT", defaults.default_weight_unit
        ),
    )


def load_settings(config_file: str | Path | None = None) -> Settings:
    """Load settings from a YAML file, or from environment variables.

    The file is looked up at ``config_file``, then ``$GYMBOOK_CONFIG``, then
    ``gymbook.yaml`` in the working directory.
    """
    if config_file is None:
        config_file = os.getenv(f"{ENV_PREFIX}CONFIG", DEFAULT_CONFIG_FILE)
    config_path = Path(config_file)

    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return Settings(**data)

    return _from_env()


def write_sample_config(config_file: str | Path = DEFAULT_CONFIG_FILE) -> bool:
    """Write the default settings to ``config_file`` unless it exists."""
    config_path = Path(config_file)
    if config_path.exists():
        return False

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(Settings().to_dict(), f, default_flow_style=False)
    return True
