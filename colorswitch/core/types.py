"""Shared types for colorswitch: TransformMode, SourceImage, Variant, Report."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


class TransformMode(enum.Enum):
    """Colour transform applied by the engine."""

    IDENTITY = 'identity'
    ROTATE_SATURATE = 'rotate-saturate'
    HUE_STRETCH = 'hue-stretch'


@dataclass
class SourceImage:
    """A decoded input image as a raw RGBA8 buffer."""

    fname: str  # file name as shown in captions, no directory
    width: int
    height: int
    data: bytes  # width * height * 4 bytes, row-major RGBA


class Variant:
    """A self-registering output variant.

    Usage in a variant module:

        variant = Variant(name='rotated', help='...', mode=TransformMode.ROTATE_SATURATE,
                          suffix='rotated', caption='Color Rotated')

        @variant.run
        def run(source, report, settings, out_dir):
            ...

    Aggregate variants (like 'all') leave mode as None.
    """

    def __init__(
        self,
        name: str,
        help: str = '',
        mode: TransformMode | None = None,
        suffix: str | None = None,
        caption: str | None = None,
    ):
        self.name = name
        self.help = help
        self.mode = mode
        self.suffix = suffix or name
        self.caption = caption
        self._run_fn: Callable | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def execute(self, source: SourceImage, report: Report, settings: Any, out_dir: str) -> None:
        """Execute the variant's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Variant {self.name} has no run function')
        self._run_fn(source, report, settings, out_dir)


@dataclass
class Report:
    """Accumulates the files written for one input image."""

    image_path: str = ''
    image_width: int = 0
    image_height: int = 0
    outputs: dict[str, dict[str, Any]] = field(default_factory=dict)

    def add(self, variant_name: str, data: dict[str, Any]) -> None:
        """Record the output of a variant, replacing any earlier entry."""
        self.outputs[variant_name] = data
