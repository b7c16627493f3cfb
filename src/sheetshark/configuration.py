# SPDX-License-Identifier: MIT

import os
from pathlib import Path
from typing import NotRequired, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

from sheetshark.model.project import ProjectConfig

APP_NAME = "sheet-shark"

CONFIG_ENV_VAR = "SHEET_SHARK_CONFIG"
DATA_ENV_VAR = "SHEET_SHARK_DATA"

DEFAULT_EXPECTED_DAILY_MINUTES = 8 * 60
DEFAULT_LOG_LEVEL = "WARNING"

# These will be set dynamically by load_path_configuration()
CONFIG_PATH: Path = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH: Path = CONFIG_PATH / "config.yaml"

DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_TIMESHEETS_DIR: Path = DATA_PATH / "timesheets"
DATA_EXPORTS_DIR: Path = DATA_PATH / "exports"
DATA_LOG_PATH: Path = DATA_PATH / "sheet-shark.log"


class Configuration(TypedDict):
    use_git_versioning: bool
    show_header: bool
    data_path: Optional[str]
    default_project_key: Optional[str]
    expected_daily_minutes: Optional[int]
    log_level: str
    projects: dict[str, ProjectConfig]
    ticket_suggestion_days: NotRequired[int]


def get_default_configuration() -> Configuration:
    return {
        "use_git_versioning": False,
        "show_header": True,
        "data_path": None,
        "default_project_key": None,
        "expected_daily_minutes": DEFAULT_EXPECTED_DAILY_MINUTES,
        "log_level": DEFAULT_LOG_LEVEL,
        "projects": {},
        "ticket_suggestion_days": 6 * 30,
    }


def load_path_configuration() -> None:
    """
    Resolve the config and data locations and set the path variables.

    Environment variables win over the config file's data_path, which wins
    over the platform default. Must run before any repository is used.
    """
    global CONFIG_PATH, APP_CONFIG_PATH, DATA_PATH
    global DATA_TIMESHEETS_DIR, DATA_EXPORTS_DIR, DATA_LOG_PATH

    config_override = os.environ.get(CONFIG_ENV_VAR)
    CONFIG_PATH = (
        Path(config_override)
        if config_override
        else platformdirs.user_config_path(APP_NAME)
    )
    APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

    data_path_setting: Optional[str] = None
    if APP_CONFIG_PATH.is_file():
        config: Optional[Configuration] = load(
            APP_CONFIG_PATH.read_text(), Loader=Loader
        )
        if config is not None:
            data_path_setting = config.get("data_path")

    data_override = os.environ.get(DATA_ENV_VAR)
    if data_override:
        DATA_PATH = Path(data_override)
    elif data_path_setting is not None:
        DATA_PATH = Path(data_path_setting).expanduser()
    else:
        DATA_PATH = platformdirs.user_data_path(APP_NAME)

    DATA_TIMESHEETS_DIR = DATA_PATH / "timesheets"
    DATA_EXPORTS_DIR = DATA_PATH / "exports"
    DATA_LOG_PATH = DATA_PATH / "sheet-shark.log"
