class ConfigurationError(ValueError):
    """A machine could not be built from the given configuration."""


class UnknownRotorError(ConfigurationError):
    pass


class UnknownReflectorError(ConfigurationError):
    pass
