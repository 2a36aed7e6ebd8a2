from prism.security.backend import Backend, ResourceBackend
from prism.security.plugin import Security

__all__ = ["Backend", "ResourceBackend", "Security"]
