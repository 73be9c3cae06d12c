"""Shared types for aura-tool: ChakraColor, RGBSample, AuraAnalysis, GradientLayer, Command, Report."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from PIL import Image


class AuraError(Exception):
    """Base class for aura_reader errors."""


class DecodeError(AuraError):
    """Image bytes could not be read or decoded into pixels."""


class ContractViolation(AuraError, ValueError):
    """Caller passed malformed input (empty selection, bad buffer, reused job)."""


@dataclass(frozen=True)
class ChakraColor:
    """One entry of the fixed chakra palette."""

    name: str
    chakra: str
    hsl: str
    hex: str
    traits: tuple[str, ...]
    element: str
    keywords: tuple[str, ...]

    @property
    def rgb(self) -> tuple[int, int, int]:
        h = self.hex.lstrip('#')
        return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))


@dataclass(frozen=True)
class RGBSample:
    """A quantized colour bucket and how many sampled pixels fell into it."""

    r: int
    g: int
    b: int
    count: int = 1

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    @property
    def hex(self) -> str:
        return f'#{self.r:02x}{self.g:02x}{self.b:02x}'


@dataclass(frozen=True)
class AuraAnalysis:
    """Result of analysing one photo. Immutable once built."""

    dominant_colors: tuple[ChakraColor, ...]
    reading: str
    timestamp: datetime
    source: str = 'pixels'  # 'pixels' or 'seed' (decode fallback)


@dataclass(frozen=True)
class ColorStop:
    """A gradient colour stop: position in [0, 1], colour, opacity in [0, 1]."""

    offset: float
    rgb: tuple[int, int, int]
    alpha: float


@dataclass(frozen=True)
class GradientLayer:
    """One radial gradient pass, filled over the whole canvas with a blend mode."""

    name: str
    center: tuple[float, float]
    inner_radius: float
    outer_radius: float
    stops: tuple[ColorStop, ...]
    blend: str = 'screen'  # 'screen', 'multiply' or 'source-over'
    chakra: ChakraColor | None = None


@dataclass
class SourceImage:
    """The photo a command operates on: raw bytes plus the decoded image, if any."""

    path: str
    data: bytes
    image: Image.Image | None = None
    decode_error: str | None = None


class Command:
    """A self-registering pipeline command.

    Usage in a command module:

        command = Command(name='colours', help='Extract dominant colours')

        @command.run
        def run(source, report, args):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def execute(self, source: SourceImage, report: Report, args: Any) -> None:
        """Execute the command's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        self._run_fn(source, report, args)


@dataclass
class Report:
    """Accumulates results from commands for text/JSON output."""

    image_path: str = ''
    image_width: int = 0
    image_height: int = 0
    results: dict[str, dict[str, Any]] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    def add(self, command_name: str, data: dict[str, Any]) -> None:
        """Add (or merge) results for a command."""
        self.results.setdefault(command_name, {}).update(data)

    def get(self, command_name: str, key: str, default: Any = None) -> Any:
        return self.results.get(command_name, {}).get(key, default)

    def record_error(self, message: str) -> None:
        self.errors.append(message)
