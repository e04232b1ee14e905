# regionkit/domain/models/region_model.py
import uuid
from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Tuple


DEFAULT_FILL_COLOR = "#1f77b4"
DEFAULT_OPACITY = 0.6


class ScoreRange(NamedTuple):
    """Inclusive score interval used by the score filter."""
    min: float
    max: float


class ColorSnapshot(NamedTuple):
    """Presentation state recorded before the color-shift overlay is applied."""
    fill_color: str
    fill_opacity: float
    opacity: float


def _new_region_id() -> str:
    return uuid.uuid4().hex[:10]


@dataclass
class Region:
    """One labeled spatial object of an annotation."""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    score: float = 0.0
    label: Optional[str] = None  # Class value, used by the class filter
    id: str = field(default_factory=_new_region_id)
    rotation: float = 0.0

    fill_color: str = DEFAULT_FILL_COLOR
    fill_opacity: float = DEFAULT_OPACITY
    opacity: float = DEFAULT_OPACITY

    selected: bool = False
    hidden: bool = False
    highlighted: bool = False  # Open relation/interaction, distinct from selection
    states_active: bool = False  # Label states shown as active while selected

    @property
    def bbox(self) -> Tuple[float, float, float, float]:
        """(x, y, width, height)"""
        return self.x, self.y, self.width, self.height

    def select_region(self) -> None:
        self.selected = True
        self.states_active = True

    def unselect_region(self, try_to_keep_states: bool = False) -> None:
        """
        Drop the selection flag.

        Args:
            try_to_keep_states: keep the label states active so the next
                region drawn reuses them
        """
        self.selected = False
        if not try_to_keep_states:
            self.states_active = False

    def set_highlight(self, flag: bool) -> None:
        self.highlighted = flag

    def toggle_hidden(self) -> None:
        self.hidden = not self.hidden

    def set_position(self, x: float, y: float, width: float, height: float, rotation: float) -> None:
        # All geometry fields change together
        self.x, self.y, self.width, self.height, self.rotation = x, y, width, height, rotation

    def color_snapshot(self) -> ColorSnapshot:
        return ColorSnapshot(self.fill_color, self.fill_opacity, self.opacity)

    def apply_colors(self, fill_color: str, fill_opacity: float, opacity: float) -> None:
        self.fill_color = fill_color
        self.fill_opacity = fill_opacity
        self.opacity = opacity
