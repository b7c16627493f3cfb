# SPDX-License-Identifier: MIT

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from sheetshark import configuration, state
from sheetshark.log import setup_logging
from sheetshark.repository.configuration import CONFIGURATION_REPO
from sheetshark.version.version import Version


def initialize() -> None:
    configuration.load_path_configuration()
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)

    __ensure_config_files()
    __ensure_data_files()

    CONFIGURATION_REPO.reload()
    config = CONFIGURATION_REPO.get_config()
    setup_logging(config["log_level"], configuration.DATA_LOG_PATH)
    state.set_show_header(config["show_header"])

    if config["use_git_versioning"]:
        Version().initialize_data_versioning()


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        config = configuration.get_default_configuration()
        configuration.APP_CONFIG_PATH.write_text(
            dump(config, Dumper=Dumper, sort_keys=False)
        )


def __ensure_data_files() -> None:
    configuration.DATA_TIMESHEETS_DIR.mkdir(parents=True, exist_ok=True)
    configuration.DATA_EXPORTS_DIR.mkdir(parents=True, exist_ok=True)
