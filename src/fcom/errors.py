# src/fcom/errors.py


class FcomError(Exception):
    """Base class for every fatal error raised by fcom."""


class ConfigurationError(FcomError):
    """Unknown output mode, or custom mode without both template paths."""


class InputError(FcomError):
    """The target folder does not exist or is not a directory."""


class TraversalError(FcomError):
    """A directory could not be listed during the walk."""


class TemplateReadError(FcomError):
    """A custom template file is missing or unreadable."""


class OutputWriteError(FcomError):
    """The output destination could not be written."""
