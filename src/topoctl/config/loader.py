import os
import re
import yaml
from pathlib import Path
from typing import Any, Dict

ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::([^}]+))?\}")
ALLOWED_SECTIONS = {"topoctl", "state_manager", "transport"}
CONFIG_FILE_NAME = "topoctl.yaml"


def interpolate_env_vars(content: str) -> str:
    """Replace ${VAR} or ${VAR:default} with environment variables."""
    def replace_match(match: re.Match) -> str:
        var_name = match.group(1)
        default_value = match.group(2) if match.group(2) is not None else ""
        return os.environ.get(var_name, default_value)

    return ENV_VAR_PATTERN.sub(replace_match, content)


def load_config(path: Path) -> Dict[str, Any]:
    """
    Load topoctl.yaml with environment variable interpolation.

    Keeps only the sections: topoctl, state_manager, transport.
    """
    if not path.exists():
        return {}

    try:
        content = path.read_text()
        interpolated_content = interpolate_env_vars(content)
        full_config = yaml.safe_load(interpolated_content) or {}
    except (OSError, yaml.YAMLError):
        return {}

    if not isinstance(full_config, dict):
        return {}

    return {k: v for k, v in full_config.items() if k in ALLOWED_SECTIONS}


def find_config_file(root_dir: Path) -> Path:
    """Prefer <root>/topoctl.yaml, falling back to the working directory."""
    config_path = root_dir / CONFIG_FILE_NAME
    if not config_path.exists():
        config_path = Path.cwd() / CONFIG_FILE_NAME
    return config_path
