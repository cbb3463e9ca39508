"""Abstract base renderer.

WHY: Every caption container consumes the same timed Cue list but
produces different text. This base class enforces one interface so the
engine and CLI can drive any renderer generically.

HOW: BaseRenderer is an ABC with a ``name`` property, a file ``suffix``,
a ``media_type``, and a ``render()`` method returning one string.

RULES:
- Renderers are pure and stateless: same cues + style → same bytes.
- Renderers never mutate the cue list or the cues in it.
- ``style`` is only consumed by the styled renderer; others ignore it.

To add a new container format:
1. Create a new file in renderers/
2. Subclass BaseRenderer
3. Implement name, suffix, media_type and render()
4. Register it in RENDERERS in renderers/__init__.py
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from narration_captions.config import HighlightConfig, StyleConfig
from narration_captions.models import Cue


class BaseRenderer(ABC):
    """Abstract base for all caption container renderers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'SubRip'."""

    @property
    @abstractmethod
    def suffix(self) -> str:
        """File extension including the dot, e.g. '.srt'."""

    @property
    @abstractmethod
    def media_type(self) -> str:
        """MIME type of the rendered content."""

    @abstractmethod
    def render(
        self,
        cues: List[Cue],
        style: Optional[StyleConfig] = None,
        highlight: Optional[HighlightConfig] = None,
    ) -> str:
        """Render timed cues into one container-format string.

        Args:
            cues: Finished, timed cues in display order.
            style: Appearance settings (styled renderer only).
            highlight: Emphasis settings (styled renderer only).

        Returns:
            The complete file content.
        """
