from .config_registry import ConfigStreamRegistry
from .di import StreamInfraProvider

__all__ = ["ConfigStreamRegistry", "StreamInfraProvider"]
