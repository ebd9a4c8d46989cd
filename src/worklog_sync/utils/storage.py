"""On-disk files of worklog-sync: config.yaml, state.json and tokens.json."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG_DIR = Path.home() / ".worklog-sync"

LAST_SYNC_KEY = "last_sync_date"


class StorageManager:
    """Reads and writes the files in the worklog-sync config directory.

    config.yaml holds provider settings and sync options, state.json the
    date of the last clean sync and tokens.json the provider secrets.
    """

    def __init__(self, config_dir: Path | None = None) -> None:
        self.config_dir = config_dir or DEFAULT_CONFIG_DIR
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.config_file = self.config_dir / "config.yaml"
        self.state_file = self.config_dir / "state.json"
        self.tokens_file = self.config_dir / "tokens.json"

    def load_config(self) -> dict[str, Any]:
        """Load config.yaml, empty if it was never written."""
        if self.config_file.exists():
            with open(self.config_file) as f:
                return yaml.safe_load(f) or {}
        return {}

    def save_config(self, config: dict[str, Any]) -> None:
        with open(self.config_file, "w") as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False)

    def _read_json(self, path: Path) -> dict[str, Any]:
        if path.exists():
            with open(path) as f:
                return json.load(f)
        return {}

    def get_last_sync_date(self) -> datetime | None:
        """Date of the last sync that uploaded every entry, None before the first."""
        value = self._read_json(self.state_file).get(LAST_SYNC_KEY)
        return datetime.fromisoformat(value) if value else None

    def set_last_sync_date(self, date: datetime) -> None:
        state = self._read_json(self.state_file)
        state[LAST_SYNC_KEY] = date.isoformat()
        with open(self.state_file, "w") as f:
            json.dump(state, f, indent=2)

    def load_tokens(self) -> dict[str, str]:
        """Load provider secrets keyed by name, e.g. "clockify-api-key"."""
        return self._read_json(self.tokens_file)

    def save_tokens(self, tokens: dict[str, str]) -> None:
        """Write provider secrets, readable by the owner only."""
        with open(self.tokens_file, "w") as f:
            json.dump(tokens, f)
        self.tokens_file.chmod(0o600)

    def get_token(self, name: str) -> str | None:
        return self.load_tokens().get(name)

    def set_token(self, name: str, token: str) -> None:
        tokens = self.load_tokens()
        tokens[name] = token
        self.save_tokens(tokens)
