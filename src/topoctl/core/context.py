from pathlib import Path
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field
from topoctl.core.models import FrameworkSettings, StateManagerSettings, TransportSettings


class TopoctlContext(BaseModel):
    """
    Typed view over topoctl.yaml shared by the CLI and embedding hosts.
    """
    model_config = ConfigDict(extra="allow")

    # Framework Settings (Maps to 'topoctl' section)
    settings: FrameworkSettings = Field(default_factory=FrameworkSettings)

    # Coordination Store Settings (Maps to 'state_manager' section)
    state_manager: StateManagerSettings = Field(default_factory=StateManagerSettings)

    # Master Transport Settings (Maps to 'transport' section)
    transport: TransportSettings = Field(default_factory=TransportSettings)

    def __init__(self, config_dict: Optional[Dict[str, Any]] = None, **data: Any):
        """
        Initialize the context, optionally with a configuration dictionary.
        """
        if config_dict:
            if 'settings' not in data:
                data['settings'] = FrameworkSettings(**(config_dict.get('topoctl') or {}))
            if 'state_manager' not in data:
                data['state_manager'] = StateManagerSettings(**(config_dict.get('state_manager') or {}))
            if 'transport' not in data:
                data['transport'] = TransportSettings(**(config_dict.get('transport') or {}))

        super().__init__(**data)

    def state_root(self, base_dir: Path) -> Path:
        """Resolve the coordination store root relative to base_dir."""
        root = Path(self.state_manager.root_path).expanduser()
        if not root.is_absolute():
            root = base_dir / root
        return root
