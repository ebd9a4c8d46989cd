"""Configuration management for worklog synchronizer."""

from pathlib import Path
from typing import Any

from worklog_sync.client.errors import ConfigurationError
from worklog_sync.client.options import (
    MultipleTaskMode,
    TaskExtractionOptions,
    UploadOptions,
    compile_pattern,
)
from worklog_sync.client.progress import NullProgressTracker, ProgressTracker
from worklog_sync.utils.storage import StorageManager


class Config:
    """Application configuration, with command-line overrides on top.

    Options live in config.yaml as flat keys named like the CLI flags
    (e.g. "tags-as-tasks-regex"); provider settings live in a section
    named after the provider (e.g. "tempo-cloud"); secrets live in the
    token store.
    """

    def __init__(
        self,
        config_dir: Path | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration.

        Args:
            config_dir: Directory for storing configuration.
            overrides: Values given on the command line; None values are ignored.
        """
        self.storage = StorageManager(config_dir)
        self._config = self.storage.load_config()
        self._overrides = {k: v for k, v in (overrides or {}).items() if v is not None}

    def get(self, key: str, default: Any = None) -> Any:
        """Get an option, preferring the command-line value.

        Args:
            key: Option name.
            default: Value returned if the option is set nowhere.

        Returns:
            Option value.
        """
        if key in self._overrides:
            return self._overrides[key]
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set an option in the config file.

        Args:
            key: Option name.
            value: Option value.
        """
        self._config[key] = value
        self.storage.save_config(self._config)

    def require(self, key: str) -> Any:
        """Get an option that must be set.

        Raises:
            ConfigurationError: If the option is not set.
        """
        value = self.get(key)
        if value in (None, ""):
            raise ConfigurationError(f"missing configuration value {key!r}")
        return value

    def provider(self, name: str) -> dict[str, Any]:
        """Get the settings section of a provider.

        Args:
            name: Provider identifier, e.g. "clockify".

        Returns:
            Provider settings, empty if the section is missing.
        """
        return dict(self._config.get(name) or {})

    def secret(self, name: str) -> str:
        """Get a secret from the token store.

        Args:
            name: Secret name, e.g. "clockify-api-key".

        Returns:
            Secret value.

        Raises:
            ConfigurationError: If the secret was never configured.
        """
        token = self.storage.get_token(name)
        if not token:
            raise ConfigurationError(
                f"secret {name!r} not found, run 'worklog-sync configure' first"
            )
        return token

    def task_extraction_options(self) -> TaskExtractionOptions:
        """Build the task extraction options.

        Raises:
            ConfigurationError: If a pattern or the mode is invalid.
        """
        return TaskExtractionOptions(
            summary_pattern=compile_pattern(
                self.get("task-in-summary-regex"), "task-in-summary-regex"
            ),
            tags_pattern=compile_pattern(self.get("tags-as-tasks-regex"), "tags-as-tasks-regex"),
            project_pattern=compile_pattern(
                self.get("task-in-project-regex"), "task-in-project-regex"
            ),
            multiple_task_mode=MultipleTaskMode.parse(
                self.get("multiple-task-mode", MultipleTaskMode.FIRST_ONLY.value)
            ),
        )

    def upload_options(self, tracker: ProgressTracker | None = None) -> UploadOptions:
        """Build the upload options.

        Args:
            tracker: Progress tracker receiving per-entry signals.

        Raises:
            ConfigurationError: If the target user is not set.
        """
        return UploadOptions(
            user=self.require("target-user"),
            treat_duration_as_billed=bool(self.get("treat-duration-as-billed", False)),
            round_to_closest_minute=bool(self.get("round-to-closest-minute", False)),
            tracker=tracker or NullProgressTracker(),
        )
