"""Exceptions raised by the canvas and the command driver."""


class CanvasError(ValueError):
    """Base class for any rejected canvas operation."""


class InvalidDimension(CanvasError):
    pass


class InvalidCoordinate(CanvasError):
    """A coordinate that is not a whole number."""


class OutOfBounds(CanvasError):
    pass


class DegenerateLine(CanvasError):
    pass


class UnsupportedOrientation(CanvasError):
    pass


class DegenerateRectangle(CanvasError):
    pass


class InvalidColor(CanvasError):
    pass


class CommandError(ValueError):
    """Base class for problems with the command stream itself."""

    def __init__(self, message, lineno=None):
        self.lineno = lineno
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message)


class ParseError(CommandError):
    pass


class SequenceError(CommandError):
    pass
