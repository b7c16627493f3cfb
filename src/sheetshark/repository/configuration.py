# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from sheetshark import configuration
from sheetshark.errors import ConfigurationError
from sheetshark.model.project import ProjectConfig


def validate_configuration(config: dict[str, Any]) -> None:
    """
    Check the values the engine relies on, so a hand edited config file fails
    with a readable message instead of deep inside an export.

    Raises:
        ConfigurationError: on the first value that cannot be used
    """
    projects = config["projects"]
    if not isinstance(projects, dict):
        raise ConfigurationError("'projects' must be a mapping of key to project")
    for key, project in projects.items():
        if not isinstance(key, str) or key.strip() == "":
            raise ConfigurationError(f"Project key {key!r} must be a non-empty text")
        if not isinstance(project, dict):
            raise ConfigurationError(f"Project '{key}' must be a mapping")
        internal_name = project.get("internal_name")
        if not isinstance(internal_name, str) or internal_name.strip() == "":
            raise ConfigurationError(f"Project '{key}' has no internal_name")
        url = project.get("issue_tracker_url")
        if url is not None and not isinstance(url, str):
            raise ConfigurationError(
                f"Project '{key}' has an invalid issue_tracker_url"
            )

    default_key = config["default_project_key"]
    if default_key is not None and not isinstance(default_key, str):
        raise ConfigurationError("'default_project_key' must be a text")

    for name in ("expected_daily_minutes", "ticket_suggestion_days"):
        value = config[name]
        if value is None and name == "expected_daily_minutes":
            continue
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigurationError(
                f"'{name}' must be a whole number of zero or more, got {value!r}"
            )


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self._config = self.__load_data()
        return self._config

    def __load_data(self) -> configuration.Configuration:
        config: Optional[configuration.Configuration] = load(
            configuration.APP_CONFIG_PATH.read_text(), Loader=Loader
        )

        if config is None:
            raise ConfigurationError(
                f"Configuration file {configuration.APP_CONFIG_PATH} is empty"
            )
        if not isinstance(config, dict):
            raise ConfigurationError(
                f"Configuration file {configuration.APP_CONFIG_PATH} is not a mapping"
            )

        # Fill in keys added after the config file was first written
        for key, value in configuration.get_default_configuration().items():
            if key not in config:
                config[key] = value  # type: ignore[literal-required]
        if config["projects"] is None:
            config["projects"] = {}

        validate_configuration(config)  # type: ignore[arg-type]
        return config

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(
            dump(config, Dumper=Dumper, sort_keys=False)
        )

    def flush(self) -> None:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False

    def reload(self) -> None:
        self._config = None
        self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        use_git_versioning: Optional[bool] = None,
        show_header: Optional[bool] = None,
        default_project_key: Optional[str] = None,
        remove_default_project_key: bool = False,
        expected_daily_minutes: Optional[int] = None,
        log_level: Optional[str] = None,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
    ) -> None:
        self.is_dirty = True

        if use_git_versioning is not None:
            self.config["use_git_versioning"] = use_git_versioning
        if show_header is not None:
            self.config["show_header"] = show_header
        if default_project_key is not None:
            self.config["default_project_key"] = default_project_key
        if remove_default_project_key:
            self.config["default_project_key"] = None
        if expected_daily_minutes is not None:
            self.config["expected_daily_minutes"] = expected_daily_minutes
        if log_level is not None:
            self.config["log_level"] = log_level.upper()
        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None

    def set_project(self, key: str, project: ProjectConfig) -> None:
        self.is_dirty = True
        self.config["projects"][key] = project

    def remove_project(self, key: str) -> bool:
        if key not in self.config["projects"]:
            return False
        self.is_dirty = True
        del self.config["projects"][key]
        return True


CONFIGURATION_REPO = ConfigurationRepository()
