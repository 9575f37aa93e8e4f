"""Exception hierarchy for Veille."""


class VeilleError(Exception):
    """Base class for all Veille errors."""


class ConfigError(VeilleError):
    """Required configuration is missing or invalid."""


class SchemaError(VeilleError):
    """The articles table could not be ensured."""


class StorageError(VeilleError):
    """A read or write against the data store failed."""
