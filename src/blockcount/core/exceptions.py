"""BlockCount exception hierarchy."""


class BlockCountError(Exception):
    """Base exception for all BlockCount errors."""


class SerializationError(BlockCountError):
    """Raised when persisted block data cannot be decoded."""


class PersistenceWriteError(BlockCountError):
    """Raised when a storage backend fails to write a slot."""


class ConfigError(BlockCountError):
    """Raised when the configuration is invalid or cannot be read."""
