"""End-to-end analysis, plus job objects with an exactly-once completion signal.

analyze_aura() never fails on a bad image: a DecodeError from decoding or
extraction switches to the seed mapper over the raw input bytes. The
compositor has no fallback; OverlayJob ends in 'failed' instead.

Job states:

  pending ──run()──> compositing ──> done
     │
     └── decode fails ──> failed

run() is single-use. on_complete(result, error) is called exactly once,
after the job reaches done or failed.
"""

import random
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from typing import Any

from PIL import Image

from aura_reader.core.codec import decode_image, read_source_bytes
from aura_reader.core.extract import extract_from_image
from aura_reader.core.mapper import select_palette, select_palette_from_seed
from aura_reader.core.overlay import RING_COUNT, composite_overlay
from aura_reader.core.reading import synthesize_reading
from aura_reader.core.types import AuraAnalysis, ChakraColor, ContractViolation, DecodeError

PENDING = 'pending'
COMPOSITING = 'compositing'
DONE = 'done'
FAILED = 'failed'


def seed_input(source: Any) -> bytes | str:
    """Stable serialization of a source for the seed mapper."""
    if isinstance(source, str) and source.startswith('data:'):
        return source
    if isinstance(source, Image.Image):
        return source.tobytes()
    try:
        return read_source_bytes(source)
    except DecodeError:
        return str(source)


def select_for_source(source: Any) -> tuple[tuple[ChakraColor, ...], str]:
    """Selection for a photo and which path produced it ('pixels' or 'seed')."""
    try:
        image = decode_image(source)
        return select_palette(extract_from_image(image)), 'pixels'
    except DecodeError:
        return select_palette_from_seed(seed_input(source)), 'seed'


def analyze_aura(source: Any, rng: random.Random | None = None) -> AuraAnalysis:
    """Analyse a photo: dominant colours -> chakra selection -> reading."""
    selection, path = select_for_source(source)
    return AuraAnalysis(
        dominant_colors=selection,
        reading=synthesize_reading(selection, rng=rng),
        timestamp=datetime.now(timezone.utc),
        source=path,
    )


class Job:
    """Single-use unit of work over one photo."""

    def __init__(self, source: Any, on_complete: Callable[[Any, Exception | None], None] | None = None):
        self.source = source
        self.on_complete = on_complete
        self.state = PENDING
        self.result: Any = None
        self.error: Exception | None = None
        self._notified = False

    def _work(self) -> Any:
        raise NotImplementedError

    def run(self) -> Any:
        """Run to completion. Returns the result, or None when the job failed."""
        if self.state != PENDING:
            raise ContractViolation(f'job already {self.state}; create a new job per photo')
        try:
            self.result = self._work()
            self.state = DONE
        except DecodeError as e:
            self.error = e
            self.state = FAILED
        except Exception as e:
            # Contract violations still signal completion, then propagate
            self.error = e
            self.state = FAILED
            self._notify()
            raise
        self._notify()
        return self.result

    def _notify(self) -> None:
        if self._notified:
            return
        self._notified = True
        if self.on_complete is not None:
            self.on_complete(self.result, self.error)


class AnalysisJob(Job):
    """Runs analyze_aura(); decode failures are absorbed by the seed fallback."""

    def __init__(self, source: Any, on_complete=None, rng: random.Random | None = None):
        super().__init__(source, on_complete)
        self.rng = rng

    def _work(self) -> AuraAnalysis:
        self.state = COMPOSITING
        return analyze_aura(self.source, rng=self.rng)


class OverlayJob(Job):
    """Decodes the photo and composites the glow for a fixed selection."""

    def __init__(
        self,
        source: Any,
        selection: Sequence[ChakraColor],
        on_complete=None,
        accents: bool = True,
        ring_count: int = RING_COUNT,
    ):
        if not selection:
            raise ContractViolation('overlay needs at least one chakra colour')
        super().__init__(source, on_complete)
        self.selection = tuple(selection)
        self.accents = accents
        self.ring_count = ring_count

    def _work(self) -> Image.Image:
        image = decode_image(self.source)
        self.state = COMPOSITING
        return composite_overlay(image, self.selection, accents=self.accents, ring_count=self.ring_count)
