"""
Configuration loader for MyChain network presets.
Loads the packaged networks.yaml (or a user supplied file).
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

import yaml
from pydantic import BaseModel, ValidationError as PydanticValidationError

from ..constants import DEFAULT_GAS_PRICE, NATIVE_DENOM

logger = logging.getLogger(__name__)

DEFAULT_NETWORKS_FILE = Path(__file__).parent / "networks.yaml"


class ConfigError(Exception):
    """Configuration loading error"""

    pass


class NetworkConfig(BaseModel):
    """Endpoints and chain parameters for one network"""

    name: str
    chain_id: str
    rpc_endpoint: str
    rest_endpoint: str
    gas_price: str = DEFAULT_GAS_PRICE
    denom: str = NATIVE_DENOM


def load_networks(path: Optional[Union[str, Path]] = None) -> Dict[str, NetworkConfig]:
    """
    Load every network preset from a YAML file.

    Args:
        path: YAML file to read, defaults to the packaged networks.yaml

    Returns:
        Mapping of preset name to NetworkConfig
    """
    path = Path(path) if path else DEFAULT_NETWORKS_FILE
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read network config {path}: {e}") from e

    networks = {}
    for name, values in (data.get("networks") or {}).items():
        try:
            networks[name] = NetworkConfig(name=name, **(values or {}))
        except PydanticValidationError as e:
            raise ConfigError(f"Invalid network '{name}' in {path}: {e}") from e

    logger.debug(f"Loaded {len(networks)} network presets from {path}")
    return networks


def load_network(name: str, path: Optional[Union[str, Path]] = None) -> NetworkConfig:
    """Return a single named preset, raising ConfigError if it is unknown."""
    networks = load_networks(path)
    if name not in networks:
        raise ConfigError(
            f"Unknown network '{name}'. Available: {', '.join(sorted(networks))}"
        )
    return networks[name]
