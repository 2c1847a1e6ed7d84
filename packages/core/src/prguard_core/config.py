import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "bot_login": "github-actions[bot]",
    "rebuild_threshold": 1000,  # absolute maximum for a primary branch per the contribution guide
    "tests_label": "10.rebuild-nixos-tests",
    "staging_branch": "staging",
    "tests_staging_branch": "staging-nixos",
    "changed_paths": "comparison/changed-paths.json",
    "dismiss_message": "Review dismissed automatically",
    "target_branch_review_key": "check-target-branch",
    "branch_conventions_url": "https://github.com/NixOS/nixpkgs/blob/master/CONTRIBUTING.md#branch-conventions",
    "commit_conventions_url": "https://github.com/NixOS/nixpkgs/blob/master/CONTRIBUTING.md#commit-conventions",
    "dry": False,
}


def _read_config_file(path: Path) -> dict:
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Could not parse {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping, got {type(data).__name__}.")
    return data


def load_config(config_path: str = ".prguard.yml", cli_overrides: Optional[dict] = None) -> dict:
    """Return the effective settings: defaults, then the YAML file if present, then non-None overrides.

    Raises ValueError when the file is not valid YAML or is not a mapping.
    """
    path = Path(config_path)
    config = {**DEFAULT_CONFIG, **(_read_config_file(path) if path.exists() else {})}
    config.update({key: value for key, value in (cli_overrides or {}).items() if value is not None})
    config["github_token"] = os.environ.get("GITHUB_TOKEN")
    return config
