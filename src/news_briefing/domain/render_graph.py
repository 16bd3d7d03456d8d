"""
Render graph for the briefing slides, expressed as an FFmpeg filter chain.

An FFmpeg filtergraph is parsed in layers, and every layer has its own
special characters:

  1. filtergraph level  - splits filters/links on ``[ ] , ;``
  2. filter option level - splits ``key=value`` pairs on ``:``
  3. drawtext expansion  - treats ``%`` as the start of an expansion

Each layer unescapes ``\\`` and ``'`` before handing the value down, so a value
is escaped for the innermost layer first and the outermost layer last.
Headlines come straight from a third-party feed; nothing they contain may
change the structure of the graph.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from news_briefing.domain.models import Segment
from news_briefing.domain.text import sanitize_text, wrap_text
from news_briefing.errors import AssetMissingError

_EXPANSION_SPECIALS = "\\%"
_OPTION_SPECIALS = "\\':"
_GRAPH_SPECIALS = "\\'[],;"

HEADLINE_WRAP = 30
HEADLINE_MAX_LINES = 3
SUMMARY_WRAP = 60
SUMMARY_MAX_LINES = 5


def _backslash_escape(value: str, specials: str) -> str:
    return "".join("\\" + ch if ch in specials else ch for ch in value)


def escape_text(text: str) -> str:
    """Escape literal text for a drawtext ``text=`` option inside a filtergraph."""
    flat = text.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")
    value = _backslash_escape(flat, _EXPANSION_SPECIALS)
    value = _backslash_escape(value, _OPTION_SPECIALS)
    return _backslash_escape(value, _GRAPH_SPECIALS)


def escape_path(path) -> str:
    """Escape a file path for a ``fontfile=`` option inside a filtergraph."""
    value = str(path).replace("\\", "/")
    value = _backslash_escape(value, _OPTION_SPECIALS)
    return _backslash_escape(value, _GRAPH_SPECIALS)


def escape_expression(expression: str) -> str:
    """Escape an evaluated expression (e.g. ``between(t,0,30)``) for the graph level."""
    return _backslash_escape(expression, _GRAPH_SPECIALS)


def format_seconds(value: float) -> str:
    """Two-decimal timestamp without trailing zeros: 30 -> '30', 12.5 -> '12.5'."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return text or "0"


@dataclass(frozen=True)
class FontSet:
    regular: Path
    bold: Path

    @classmethod
    def locate(cls, directory, regular: str, bold: str) -> "FontSet":
        """Resolve font files in ``directory``; missing fonts are a configuration error."""
        base = Path(directory)
        fonts = cls(regular=base / regular, bold=base / bold)
        for font in (fonts.regular, fonts.bold):
            if not font.is_file():
                raise AssetMissingError(f"Required font not found: {font}")
        return fonts


@dataclass(frozen=True)
class Theme:
    background: str = "0x020617"
    card: str = "0x040c1f"
    panel: str = "0x030a18aa"
    title: str = "0xE0F2FE"
    accent: str = "0x38BDF8"
    headline: str = "0xF8FAFC"
    summary: str = "0xCBD5F5"


@dataclass(frozen=True)
class TimeWindow:
    start: float
    end: float

    def to_option(self) -> str:
        expression = f"between(t,{format_seconds(self.start)},{format_seconds(self.end)})"
        return f"enable={escape_expression(expression)}"


@dataclass(frozen=True)
class DrawBox:
    """Filled rectangle; geometry values are FFmpeg expressions (``iw-80``)."""
    x: str
    y: str
    width: str
    height: str
    color: str

    def to_filter(self) -> str:
        return (
            f"drawbox=t=fill:x={self.x}:y={self.y}:w={self.width}:h={self.height}"
            f":color={self.color}"
        )


@dataclass(frozen=True)
class DrawText:
    text: str
    font: Path
    x: str
    y: str
    size: int
    color: str
    window: Optional[TimeWindow] = None

    def to_filter(self) -> str:
        options = []
        if self.window is not None:
            options.append(self.window.to_option())
        options += [
            f"fontfile={escape_path(self.font)}",
            f"text={escape_text(self.text)}",
            f"x={self.x}",
            f"y={self.y}",
            f"fontsize={self.size}",
            f"fontcolor={self.color}",
        ]
        return "drawtext=" + ":".join(options)


@dataclass
class RenderGraph:
    """Ordered drawing operations; later ones draw on top of earlier ones."""
    width: int = 1280
    height: int = 720
    instructions: List = field(default_factory=list)

    def add(self, instruction) -> None:
        self.instructions.append(instruction)

    def extend(self, instructions: Iterable) -> None:
        self.instructions.extend(instructions)

    def timed(self) -> List[DrawText]:
        return [i for i in self.instructions if getattr(i, "window", None) is not None]

    def to_filter_chain(self) -> str:
        return ",".join(instruction.to_filter() for instruction in self.instructions)

    def to_filter_complex(self, source: str = "0:v", output: str = "vout") -> str:
        """Full ``-filter_complex`` value reading ``[source]`` and writing ``[output]``."""
        return f"[{source}]{self.to_filter_chain()}[{output}]"

    def __len__(self) -> int:
        return len(self.instructions)


class RenderGraphBuilder:
    """Builds the slide deck: a static base layer plus time-gated overlays per segment."""

    def __init__(
        self,
        fonts: FontSet,
        canvas_size: Tuple[int, int] = (1280, 720),
        theme: Optional[Theme] = None,
    ):
        self.fonts = fonts
        self.width, self.height = canvas_size
        self.theme = theme or Theme()

    def build(self, segments: Sequence[Segment], title: str) -> RenderGraph:
        graph = RenderGraph(self.width, self.height)
        graph.extend(self._base_layer(title))
        for segment in sorted(segments, key=lambda s: s.index):
            graph.extend(self._segment_overlay(segment))
        return graph

    def _base_layer(self, title: str) -> List:
        theme = self.theme
        return [
            DrawBox("0", "0", "iw", "ih", theme.background),
            DrawBox("40", "40", "iw-80", "ih-80", theme.card),
            DrawBox("80", "140", "iw-160", "ih-260", theme.panel),
            DrawText(title, self.fonts.bold, "(w-text_w)/2", "70", 54, theme.title),
        ]

    def _segment_overlay(self, segment: Segment) -> List[DrawText]:
        theme = self.theme
        window = TimeWindow(round(segment.start, 2), round(segment.end, 2))
        overlay = [
            DrawText(
                f"Update {segment.index + 1}".upper(),
                self.fonts.bold, "120", "180", 34, theme.accent, window,
            )
        ]

        headline = wrap_text(segment.item.title, HEADLINE_WRAP)[:HEADLINE_MAX_LINES]
        for line_no, line in enumerate(headline):
            overlay.append(
                DrawText(line, self.fonts.bold, "120", str(240 + line_no * 52),
                         48, theme.headline, window)
            )

        summary = wrap_text(sanitize_text(segment.item.content), SUMMARY_WRAP)[:SUMMARY_MAX_LINES]
        for line_no, line in enumerate(summary):
            overlay.append(
                DrawText(line, self.fonts.regular, "120", str(400 + line_no * 34),
                         32, theme.summary, window)
            )
        return overlay
