"""
Parsing and sequencing of the canvas command language.

Each input line is one command::

    C w h            create a canvas
    L x1 y1 x2 y2    draw a line
    R x1 y1 x2 y2    draw a rectangle
    B x y c          bucket fill from (x, y) with character c

Lines are parsed into typed records before anything touches the canvas, so
the canvas only ever sees integers and single strings.
"""
import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from canvas import Canvas
from config import ON_ERROR_CHOICES
from errors import CanvasError, ParseError, SequenceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateCanvas:
    width: int
    height: int
    lineno: Optional[int] = None

    def apply(self, canvas: Optional[Canvas]) -> Canvas:
        return Canvas(self.width, self.height)


@dataclass(frozen=True)
class DrawLine:
    x1: int
    y1: int
    x2: int
    y2: int
    lineno: Optional[int] = None

    def apply(self, canvas: Canvas) -> Canvas:
        canvas.draw_line(self.x1, self.y1, self.x2, self.y2)
        return canvas


@dataclass(frozen=True)
class DrawRectangle:
    x1: int
    y1: int
    x2: int
    y2: int
    lineno: Optional[int] = None

    def apply(self, canvas: Canvas) -> Canvas:
        canvas.draw_rectangle(self.x1, self.y1, self.x2, self.y2)
        return canvas


@dataclass(frozen=True)
class BucketFill:
    x: int
    y: int
    color: str
    lineno: Optional[int] = None

    def apply(self, canvas: Canvas) -> Canvas:
        canvas.fill(self.x, self.y, self.color)
        return canvas


Command = Union[CreateCanvas, DrawLine, DrawRectangle, BucketFill]

# letter -> (record type, number of integer fields, number of trailing string fields)
_GRAMMAR = {
    "C": (CreateCanvas, 2, 0),
    "L": (DrawLine, 4, 0),
    "R": (DrawRectangle, 4, 0),
    "B": (BucketFill, 2, 1),
}


_INT_RE = re.compile(r"-?[0-9]+")


def _parse_int(token: str, lineno: Optional[int]) -> int:
    if not _INT_RE.fullmatch(token):
        raise ParseError(f"expected a whole number, got {token!r}", lineno)
    return int(token)


def parse_line(line: str, lineno: Optional[int] = None) -> Command:
    tokens = line.split()
    if not tokens:
        raise ParseError("empty command", lineno)
    letter, args = tokens[0], tokens[1:]
    if letter not in _GRAMMAR:
        raise ParseError(
            f"invalid command {letter!r}, must begin with C, L, R, or B", lineno
        )
    record, n_ints, n_strs = _GRAMMAR[letter]
    if len(args) != n_ints + n_strs:
        raise ParseError(
            f"{letter} takes {n_ints + n_strs} arguments, got {len(args)}", lineno
        )
    values = [_parse_int(token, lineno) for token in args[:n_ints]] + args[n_ints:]
    return record(*values, lineno=lineno)


def parse_commands(text: str) -> List[Command]:
    """Parses every non-blank line of ``text``."""
    return [
        parse_line(line, lineno)
        for lineno, line in enumerate(text.splitlines(), start=1)
        if line.strip()
    ]


def run(commands: Iterable[Command], on_error: str = "abort") -> Tuple[str, Optional[Canvas]]:
    """
    Applies ``commands`` in order and collects the render after each one.

    The first command must create the canvas and no later command may create
    another. With ``on_error="skip"`` a command the canvas rejects is logged
    and contributes nothing to the output; sequencing problems always raise.
    Returns the accumulated output and the final canvas.
    """
    if on_error not in ON_ERROR_CHOICES:
        raise ValueError(f"on_error must be one of {ON_ERROR_CHOICES}, got {on_error!r}")

    canvas = None
    output = []
    for index, command in enumerate(commands):
        is_create = isinstance(command, CreateCanvas)
        if index == 0 and not is_create:
            raise SequenceError("Canvas must be initialized first.", command.lineno)
        if index != 0 and is_create:
            raise SequenceError("Canvas cannot be initialized more than once.", command.lineno)

        try:
            canvas = command.apply(canvas)
        except CanvasError as e:
            if on_error == "abort" or canvas is None:
                raise
            where = f"line {command.lineno}" if command.lineno is not None else f"command {index + 1}"
            logger.warning("Skipping %s: %s", where, e)
            continue
        logger.debug("Applied %s", command)
        output.append(canvas.render())
    return "".join(output), canvas
