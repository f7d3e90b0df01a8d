from dataclasses import dataclass, field
from typing import List, Optional, Tuple

RGBA = Tuple[int, int, int, int]

BLANK = " "
MARKER = "x"
BORDER_HORIZONTAL = "-"
BORDER_VERTICAL = "|"

ON_ERROR_CHOICES = ("abort", "skip")


@dataclass
class CanvasConfig:
    input_path: str = "input.txt"
    output_path: str = "output.txt"
    png_path: Optional[str] = None
    on_error: str = "abort"
    log_level: str = "WARNING"
    # Image export
    cell_size: int = 8
    background: RGBA = (12, 12, 12, 255)
    border_color: RGBA = (240, 240, 240, 255)
    marker_color: RGBA = (255, 102, 0, 255)
    palette: List[RGBA] = field(
        default_factory=lambda: [
            (0, 170, 255, 255),
            (120, 220, 50, 255),
            (200, 64, 220, 255),
            (255, 220, 0, 255),
            (0, 220, 200, 255),
            (220, 40, 40, 255),
        ]
    )

    def __post_init__(self) -> None:
        if self.on_error not in ON_ERROR_CHOICES:
            raise ValueError(f"on_error must be one of {ON_ERROR_CHOICES}, got {self.on_error!r}")
        if self.cell_size < 1:
            raise ValueError("cell_size must be at least 1")

    def fill_color(self, char: str) -> RGBA:
        """Palette colour for a fill character; stable for a given character."""
        return self.palette[ord(char) % len(self.palette)]


def config_from_args(args) -> CanvasConfig:
    return CanvasConfig(
        input_path=args.input,
        output_path=args.output,
        png_path=args.png,
        on_error=args.on_error,
        log_level=args.log_level,
        cell_size=args.cell_size,
    )
