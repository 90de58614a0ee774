class MiniDungeonError(Exception):
    """Base exception for MiniDungeon domain errors."""


class GenerationError(MiniDungeonError):
    """Raised when a level cannot be generated with the requested layout."""


class SaveError(MiniDungeonError):
    """Base exception for save/load errors."""


class SaveNotFoundError(SaveError):
    """Raised when the requested save file does not exist."""


class SaveValidationError(SaveError):
    """Raised when a save record is malformed or fails validation."""


class SaveWriteError(SaveError):
    """Raised when a save record cannot be written to disk."""
