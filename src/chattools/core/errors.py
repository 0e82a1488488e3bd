"""Error taxonomy shared by the CLI and the chunking core."""


class ChatToolsError(Exception):
    """Base class for all chattools errors."""

    pass


class ConfigurationError(ChatToolsError):
    """Raised for unknown model keys, bad clean modes or an unusable budget."""

    pass


class InputError(ChatToolsError):
    """Raised when the input document is missing or cannot be read."""

    pass


class ChunkingError(ChatToolsError):
    """Raised when the chunk cursor fails to move forward."""

    pass


class ChunkingCancelled(ChatToolsError):
    """Raised when a cooperative stop flag interrupts chunk assembly."""

    pass
