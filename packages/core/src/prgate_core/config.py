import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "changelog_dir": ".changelog",
    "post_comment": True,  # False = evaluate and set outputs, but never touch PR comments
}

# Environment variables GitHub Actions injects into every job.
_ENV_KEYS = {
    "github_token": "GITHUB_TOKEN",
    "github_repository": "GITHUB_REPOSITORY",
    "github_event_name": "GITHUB_EVENT_NAME",
    "github_event_path": "GITHUB_EVENT_PATH",
    "github_output": "GITHUB_OUTPUT",
    "github_step_summary": "GITHUB_STEP_SUMMARY",
    "github_api_url": "GITHUB_API_URL",
}


def load_config(config_path: str = ".prgate.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prgate.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    for key, env_name in _ENV_KEYS.items():
        config[key] = os.environ.get(env_name) or None

    return config


@dataclass(frozen=True)
class GateConfig:
    """Settings the run controller needs, resolved once at startup."""

    changelog_dir: str = DEFAULT_CONFIG["changelog_dir"]
    post_comment: bool = DEFAULT_CONFIG["post_comment"]

    @classmethod
    def from_dict(cls, config: dict) -> "GateConfig":
        changelog_dir = str(config.get("changelog_dir") or DEFAULT_CONFIG["changelog_dir"])
        return cls(changelog_dir=changelog_dir, post_comment=bool(config.get("post_comment", True)))
