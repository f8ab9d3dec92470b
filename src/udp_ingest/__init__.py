from .config import UDPConfig, resolve
from .loader import ConfigError, load_file, load_resolved

__version__ = "0.1.0"
__all__ = ["UDPConfig", "resolve", "ConfigError", "load_file", "load_resolved"]
