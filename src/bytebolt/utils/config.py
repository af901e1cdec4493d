import json
import logging
from pathlib import Path
from typing import Any, Dict

log = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "python": "",        # interpreter used to disassemble; empty = auto-discover
    "auto_scroll": True,
    "watch": True,
    "sync": True,
}


class ConfigManager:
    """
    Loads and saves user preferences from ~/.bytebolt/config.json.
    """

    def __init__(self):
        self.config_dir = Path.home() / ".bytebolt"
        self.config_file = self.config_dir / "config.json"
        self.config = self.load_config()

    def load_config(self) -> Dict[str, Any]:
        self.config_dir.mkdir(parents=True, exist_ok=True)
        config = dict(DEFAULT_CONFIG)
        if not self.config_file.exists():
            return config

        try:
            with open(self.config_file, "r") as f:
                user_config = json.load(f)
            if isinstance(user_config, dict):
                config.update(user_config)
            else:
                log.warning("Ignoring non-object config in %s", self.config_file)
        except (OSError, json.JSONDecodeError) as e:
            log.warning("Could not read %s: %s", self.config_file, e)
        return config

    def save_config(self):
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w") as f:
            json.dump(self.config, f, indent=4)

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def set(self, key: str, value: Any):
        self.config[key] = value
        self.save_config()
