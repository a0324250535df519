from typing import List, Sequence

from topoctl.core.commands import RUNTIME_CONFIG_KEY


def encode_runtime_config(configs: Sequence[str]) -> List[str]:
    """Turn 'key=value' entries into 'runtime-config=key=value' request arguments."""
    return [f"{RUNTIME_CONFIG_KEY}={config}" for config in configs]
