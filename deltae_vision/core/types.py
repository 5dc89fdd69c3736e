"""Shared types for deltae-tool: colour tuples, Subject, Technique, Report."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from PIL import Image

RGB = tuple[int, int, int]
LAB = tuple[float, float, float]


class ConfigError(ValueError):
    """Invalid palette or analysis settings. Raised at construction, never per sample."""


@dataclass
class Subject:
    """A loaded image ready for analysis."""

    name: str
    path: str
    image: Image.Image
    canvas: Image.Image  # 80x80 resample the samples were taken from
    samples: tuple[RGB, ...] = ()  # read-only snapshot for one analysis pass
    analyses: dict = field(default_factory=dict, repr=False)  # (palette, config) -> AnalysisResult


class Technique:
    """A self-registering analysis technique.

    Usage in a technique module:

        technique = Technique(name='census', help='Match samples against the palette')

        @technique.run
        def run(subjects, report, args):
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

    def execute(self, subjects: list[Subject], report: Report, args: Any) -> None:
        """Execute the technique's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Technique {self.name} has no run function')
        self._run_fn(subjects, report, args)


@dataclass
class Report:
    """Accumulates results from techniques for text/JSON output."""

    formula: str = ''
    palette_size: int = 0
    images: dict[str, dict[str, Any]] = field(default_factory=dict)

    def add(self, image_name: str, technique_name: str, data: dict[str, Any]) -> None:
        """Add technique results for an image."""
        if image_name not in self.images:
            self.images[image_name] = {'path': None, 'size': None, 'samples': 0, 'techniques': {}}
        self.images[image_name]['techniques'][technique_name] = data

    def set_source(self, subject: Subject) -> None:
        """Record where an image came from and how many samples were taken."""
        if subject.name not in self.images:
            self.images[subject.name] = {'path': None, 'size': None, 'samples': 0, 'techniques': {}}
        entry = self.images[subject.name]
        entry['path'] = subject.path
        entry['size'] = [subject.image.width, subject.image.height]
        entry['samples'] = len(subject.samples)
