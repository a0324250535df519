from enum import Enum
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TopologyState(str, Enum):
    """Run mode of a deployed topology as recorded in its physical plan."""

    RUNNING = "RUNNING"
    PAUSED = "PAUSED"
    KILLED = "KILLED"


class MasterLocation(BaseModel):
    """
    Where the elected master of a topology can be reached.
    Snapshot only: re-read from the coordination store before every dispatch.
    """
    model_config = ConfigDict(frozen=True)

    host: str
    controller_port: int
    topology_id: str
    topology_name: Optional[str] = None


class TopologySnapshot(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    id: Optional[str] = None
    state: Optional[TopologyState] = None


class PhysicalPlan(BaseModel):
    """
    Snapshot of a topology's deployed execution graph.
    Only the lifecycle state is consumed here; extra fields are tolerated.
    """
    model_config = ConfigDict(extra="ignore")

    topology: TopologySnapshot


class TunnelConfig(BaseModel):
    """
    Connection options handed to the transport untouched.
    When a tunnel is needed, requests go through the HTTP proxy at tunnel_host:tunnel_port.
    """
    model_config = ConfigDict(extra="ignore", frozen=True)

    is_tunnel_needed: bool = False
    tunnel_host: Optional[str] = None
    tunnel_port: int = Field(default=3128, ge=1, le=65535)
    timeout_seconds: float = Field(default=5.0, gt=0)


class FrameworkSettings(BaseSettings):
    """
    Framework-level settings (the 'topoctl' section in topoctl.yaml).
    """
    model_config = SettingsConfigDict(env_prefix='TOPOCTL_', extra='ignore')

    env: str = "development"
    app_name: str = "topoctl"
    log_level: str = "INFO"


class StateManagerSettings(BaseModel):
    """
    Coordination store settings (the 'state_manager' section in topoctl.yaml).
    """
    model_config = ConfigDict(extra='ignore')

    root_path: str = "./state"


class TransportSettings(BaseModel):
    """
    Master transport settings (the 'transport' section in topoctl.yaml).
    """
    model_config = ConfigDict(extra='ignore')

    scheme: Literal["http", "https"] = "http"
    tunnel: TunnelConfig = Field(default_factory=TunnelConfig)
