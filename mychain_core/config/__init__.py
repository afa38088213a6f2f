from .settings import Settings, settings, logger
from .config_loader import ConfigError, NetworkConfig, load_network, load_networks

__all__ = [
    "Settings",
    "settings",
    "logger",
    "ConfigError",
    "NetworkConfig",
    "load_network",
    "load_networks",
]
