#regionkit/domain/services/i_region_store.py
"""
Region store interface.

Defines the operations the UI calls on the regions of one annotation.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from regionkit.domain.models.region_model import Region, ColorSnapshot


SORT_MODES = ("date", "score")
SORT_ORDERS = ("asc", "desc")
GROUP_MODES = ("type", "label")

class IRegionStore(ABC):
    """
    Owner of the ordered region collection of a single annotation.

    All operations are synchronous. Operations whose precondition is not met
    (no selection, region not a member) do nothing.
    """

    @property
    @abstractmethod
    def regions(self) -> List[Region]:
        """Regions in canonical (insertion) order."""
        pass

    @property
    @abstractmethod
    def sorted_regions(self) -> List[Region]:
        """Regions ordered by the current sort mode and sort order."""
        pass

    @property
    @abstractmethod
    def selected_region(self) -> Optional[Region]:
        """The single selected region, if any."""
        pass

    @property
    @abstractmethod
    def color_map(self) -> Dict[str, ColorSnapshot]:
        """Pre-overlay colors keyed by region id."""
        pass

    @property
    @abstractmethod
    def has_map(self) -> bool:
        """Whether the color-shift overlay is applied."""
        pass

    @abstractmethod
    def add_region(self, region: Region) -> Region:
        """
        Append a region.

        Args:
            region: The new region

        Returns:
            The region that was added
        """
        pass

    @abstractmethod
    def delete_region(self, region: Region) -> None:
        """Remove the first member equal to region."""
        pass

    @abstractmethod
    def find_region(self, region_id: str) -> Optional[Region]:
        """Region with the given id, or None."""
        pass

    @abstractmethod
    def set_sort(self, sort: str) -> None:
        """Select the "date" or "score" view ordering."""
        pass

    @abstractmethod
    def toggle_sort_order(self) -> None:
        """Flip between "asc" and "desc"."""
        pass

    @abstractmethod
    def set_group(self, group: str) -> None:
        """Select "type" or "label" grouping."""
        pass

    @abstractmethod
    def select_region(self, region: Region) -> None:
        """Make region the single selected region."""
        pass

    @abstractmethod
    def unselect_all(self, try_to_keep_states: bool = False) -> None:
        """
        Deselect every region and clear the highlighted node.

        Args:
            try_to_keep_states: forwarded to each region's deselect
        """
        pass

    @abstractmethod
    def unhighlight_all(self) -> None:
        """Clear the highlight flag of every region."""
        pass

    @abstractmethod
    def select_next(self) -> None:
        """Select the region after the current one, wrapping to the first."""
        pass

    @abstractmethod
    def select_right_adj(self) -> None:
        """Select the nearest visible region to the right, wrapping to the leftmost."""
        pass

    @abstractmethod
    def adjust_size(self, option: str) -> None:
        """Grow or shrink the selected region by one unit ("w", "s", "d", "a")."""
        pass

    @abstractmethod
    def adjust_pos(self, option: str) -> None:
        """Move the selected region by one unit ("up", "down", "left", "right")."""
        pass

    @abstractmethod
    def label_visible(self, score_range: Sequence[float]) -> None:
        """Hide regions whose score lies outside the inclusive range."""
        pass

    @abstractmethod
    def quartile_visible(self, selected_q: Sequence[int]) -> None:
        """Show only regions inside the selected score quartiles."""
        pass

    @abstractmethod
    def class_visible(self, checked: bool, class_value: str) -> None:
        """Show or hide regions labeled class_value."""
        pass

    @abstractmethod
    def reset_visible(self) -> None:
        """Show every region."""
        pass

    @abstractmethod
    def toggle_hidden(self, region: Region) -> None:
        """Flip the hidden flag of a member region."""
        pass

    @abstractmethod
    def set_hotkeys_active(self, active: bool) -> None:
        """Bind or release the "select region N" keys for this store."""
        pass

    @abstractmethod
    def shift_color(self, enable: bool) -> None:
        """Apply or remove the color-shift overlay."""
        pass
