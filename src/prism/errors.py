class PrismError(Exception):
    """Base class for errors raised by prism itself."""


class ConfigurationError(PrismError):
    """Raised when resources or the plugin are declared in a way that cannot be served."""
