# regionkit/infrastructure/regions/region_store.py

"""
In-memory region store for one annotation.

Owns the ordered region collection, the single selection, the visibility
filters, the color-shift overlay and the "select region N" key bank.
Notifications go out through Qt signals on direct connections, so every
listener has run by the time a mutator returns.
"""
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from PySide6.QtCore import QObject, Signal

from regionkit.domain.models.region_model import Region, ColorSnapshot
from regionkit.domain.models.score_quartiles import quartile_bounds
from regionkit.domain.services.i_annotation_context import IAnnotationContext
from regionkit.domain.services.i_config_repository_service import RegionStoreSettings
from regionkit.domain.services.i_keybinding_registry import IKeybindingRegistry
from regionkit.domain.services.i_logger_service import ILoggerService
from regionkit.domain.services.i_region_store import IRegionStore, SORT_MODES, SORT_ORDERS, GROUP_MODES


# (dx, dy, dwidth, dheight) per keyboard option
SIZE_DELTAS = {
    "w": (0, -1, 0, 1),
    "s": (0, 1, 0, -1),
    "d": (0, 0, 1, 0),
    "a": (0, 0, -1, 0),
}
POSITION_DELTAS = {
    "up": (0, -1, 0, 0),
    "down": (0, 1, 0, 0),
    "left": (-1, 0, 0, 0),
    "right": (1, 0, 0, 0),
}

OVERLAY_OPACITY = 1.0


class RegionStoreSignals(QObject):
    """
    Signals emitted by a RegionStore.

    Signals:
        region_added: a region joined the collection
        region_deleted: a region left the collection
        regions_changed: collection membership or view order changed
        selection_changed: id of the newly selected region, or None
        geometry_changed: region whose position or size was nudged
        visibility_changed: hidden flags were recomputed
        color_map_changed: overlay applied (True) or removed (False)
    """
    region_added = Signal(object)
    region_deleted = Signal(object)
    regions_changed = Signal()
    selection_changed = Signal(object)
    geometry_changed = Signal(object)
    visibility_changed = Signal()
    color_map_changed = Signal(bool)


class RegionStore(IRegionStore):
    """Region store backed by a Python list."""

    def __init__(self,
                 context: IAnnotationContext,
                 registry: IKeybindingRegistry,
                 logger: ILoggerService,
                 settings: Optional[RegionStoreSettings] = None):
        """
        Initialize the store.

        Args:
            context: Owning annotation, receives entity hooks and highlight resets
            registry: Keybinding registry for the "select region N" bank
            logger: Logger service
            settings: Hotkey prefix, overlay color and initial sort/group modes
        """
        settings = settings or RegionStoreSettings()

        self.context = context
        self.registry = registry
        self.logger = logger
        self.hotkey_prefix = settings.hotkey_prefix
        self.shift_fill_color = settings.shift_color

        self.sort = settings.default_sort
        self.sort_order = settings.default_sort_order
        self.group = settings.default_group

        self._regions: List[Region] = []
        self._selected_id: Optional[str] = None
        self._color_map: Dict[str, ColorSnapshot] = {}
        self._has_map = False

        # Names this store registered; the only keys init_hotkeys releases
        self._bank_keys: List[str] = []
        self.bindings_active = True

        self.signals = RegionStoreSignals()
        self.signals.regions_changed.connect(self.init_hotkeys)
        self.signals.visibility_changed.connect(self.init_hotkeys)

    # -- views ---------------------------------------------------------------

    @property
    def regions(self) -> List[Region]:
        return list(self._regions)

    @property
    def sorted_regions(self) -> List[Region]:
        """
        Regions in view order.

        "date" keeps insertion order, "score" orders by ascending score. The
        "desc" order (the default) shows the view as is and "asc" reverses it.
        Neither mode reorders the underlying collection.
        """
        if self.sort == "score":
            ordered = sorted(self._regions, key=lambda r: r.score)
        else:
            ordered = list(self._regions)

        if self.sort_order == "asc":
            ordered.reverse()
        return ordered

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected_region(self) -> Optional[Region]:
        if self._selected_id is None:
            return None
        return self.find_region(self._selected_id)

    @property
    def color_map(self) -> Dict[str, ColorSnapshot]:
        return dict(self._color_map)

    @property
    def has_map(self) -> bool:
        return self._has_map

    def __len__(self) -> int:
        return len(self._regions)

    # -- membership ------------------------------------------------------------

    def add_region(self, region: Region) -> Region:
        self._regions.append(region)
        self.logger.debug("Region added", region=region.id, total=len(self._regions))

        self.context.on_entity_create(region)
        self.signals.region_added.emit(region)
        self.signals.regions_changed.emit()
        return region

    def delete_region(self, region: Region) -> None:
        if region not in self._regions:
            self.logger.debug("Delete ignored, region is not a member", region=region.id)
            return

        self._regions.remove(region)
        self.logger.debug("Region deleted", region=region.id, total=len(self._regions))

        if self._selected_id == region.id:
            self._selected_id = None
            self.signals.selection_changed.emit(None)

        self.context.on_entity_delete(region)
        self.signals.region_deleted.emit(region)
        self.signals.regions_changed.emit()

    def find_region(self, region_id: str) -> Optional[Region]:
        for region in self._regions:
            if region.id == region_id:
                return region
        return None

    # -- sorting and grouping ----------------------------------------------------

    def set_sort(self, sort: str) -> None:
        if sort not in SORT_MODES:
            raise ValueError(f"Unknown sort mode: {sort}")
        self.sort_order = "desc"
        self.sort = sort
        self.signals.regions_changed.emit()

    def toggle_sort_order(self) -> None:
        self.sort_order = "desc" if self.sort_order == "asc" else "asc"
        self.signals.regions_changed.emit()

    def set_group(self, group: str) -> None:
        if group not in GROUP_MODES:
            raise ValueError(f"Unknown group mode: {group}")
        self.group = group

    # -- keybinding bank -------------------------------------------------------

    def init_hotkeys(self) -> None:
        """
        Rebuild the "select region N" bindings.

        The bindings this store registered last time are released first, then
        one binding per visible region is registered in view order. Keys owned
        by anyone else are never removed or replaced. Does nothing while the
        store's bindings are inactive.
        """
        if not self.bindings_active:
            return
        self.release_hotkeys()

        prefix = self.hotkey_prefix
        taken = set(self.registry.get_keys())
        visible = [r for r in self.sorted_regions if not r.hidden]
        for n, region in enumerate(visible):
            self._bind_bank_key(f"{prefix}{n + 1}", self._select_callback(region.id), None, taken)

        # Listed on the settings page only
        self._bind_bank_key(f"{prefix}$n", lambda: None, "Select a region", taken)
        self.logger.debug("Region hotkeys rebuilt", count=len(visible))

    def release_hotkeys(self) -> None:
        """Remove every binding this store registered."""
        for key in self._bank_keys:
            self.registry.remove_key(key)
        self._bank_keys = []

    def set_hotkeys_active(self, active: bool) -> None:
        """
        Bind (True) or release (False) the "select region N" bank.

        Stores sharing one registry take turns; only the active one rebuilds
        its bank on collection and visibility changes.
        """
        self.bindings_active = active
        if active:
            self.init_hotkeys()
        else:
            self.release_hotkeys()

    def _bind_bank_key(self, name: str, callback: Callable[[], None],
                       description: Optional[str], taken: Set[str]) -> None:
        if name in taken:
            self.logger.warning("Region hotkey already bound elsewhere, skipped", key=name)
            return
        self.registry.add_key(name, callback, description)
        self._bank_keys.append(name)

    def _select_callback(self, region_id: str) -> Callable[[], None]:
        def select() -> None:
            region = self.find_region(region_id)
            if region is None:
                return
            self.unselect_all()
            self.select_region(region)
        return select

    # -- selection ---------------------------------------------------------------

    def select_region(self, region: Region) -> None:
        if self.find_region(region.id) is not region:
            self.logger.debug("Select ignored, region is not a member", region=region.id)
            return

        current = self.selected_region
        if current is not None and current is not region:
            current.unselect_region()

        region.select_region()
        self._selected_id = region.id
        self.context.set_highlighted_node(region)
        self.signals.selection_changed.emit(region.id)

    def unselect_all(self, try_to_keep_states: bool = False) -> None:
        for region in self._regions:
            region.unselect_region(try_to_keep_states)
        self._selected_id = None
        self.context.set_highlighted_node(None)
        self.signals.selection_changed.emit(None)

    def unhighlight_all(self) -> None:
        for region in self._regions:
            region.set_highlight(False)

    def _selected_index(self) -> int:
        if self._selected_id is None:
            return -1
        for i, region in enumerate(self._regions):
            if region.id == self._selected_id:
                return i
        return -1

    def select_next(self) -> None:
        if not self._regions:
            return
        idx = self._selected_index()
        next_idx = 0 if idx == -1 else (idx + 1) % len(self._regions)
        self.select_region(self._regions[next_idx])

    def select_right_adj(self) -> None:
        """
        Select the visible region to the right of the selected one.

        Candidates are ordered by x, ties broken by the string form of the id.
        The first candidate after the selected region (x >= selected.x, other
        id) wins; when there is none the leftmost candidate is selected.
        """
        current = self.selected_region
        if current is None or len(self._regions) < 2:
            return

        candidates: List[Tuple[int, float, str]] = [
            (i, r.x, str(r.id)) for i, r in enumerate(self._regions) if not r.hidden
        ]
        if not candidates:
            return
        candidates.sort(key=lambda c: (c[1], c[2]))

        current.unselect_region()
        start = self._regions[candidates[0][0]]
        current_key = (current.x, str(current.id))

        right_adj = None
        for index, x, rid in candidates:
            if (x, rid) <= current_key:
                continue
            if x >= current.x and rid != str(current.id):
                right_adj = self._regions[index]
                break

        self.select_region(right_adj if right_adj is not None else start)

    # -- geometry ----------------------------------------------------------------

    def adjust_size(self, option: str) -> None:
        self._nudge(SIZE_DELTAS, option)

    def adjust_pos(self, option: str) -> None:
        self._nudge(POSITION_DELTAS, option)

    def _nudge(self, deltas: Dict[str, Tuple[int, int, int, int]], option: str) -> None:
        region = self.selected_region
        if region is None:
            return
        if option not in deltas:
            self.logger.warning("Unknown adjustment option", option=option)
            return

        dx, dy, dw, dh = deltas[option]
        region.set_position(region.x + dx, region.y + dy, region.width + dw, region.height + dh, 0)
        self.signals.geometry_changed.emit(region)

    # -- visibility --------------------------------------------------------------

    def label_visible(self, score_range: Sequence[float]) -> None:
        low, high = score_range[0], score_range[1]
        for region in self._regions:
            region.hidden = region.score < low or region.score > high
        self.signals.visibility_changed.emit()

    def quartile_visible(self, selected_q: Sequence[int]) -> None:
        if not self._regions:
            return
        lower, upper = quartile_bounds([r.score for r in self._regions], selected_q)
        self.logger.debug("Quartile bounds", selected=list(selected_q), lower=lower, upper=upper)

        for region in self._regions:
            region.hidden = region.score < lower or region.score > upper
        self.signals.visibility_changed.emit()

    def class_visible(self, checked: bool, class_value: str) -> None:
        for region in self._regions:
            if region.label == class_value:
                region.hidden = not checked
        self.signals.visibility_changed.emit()

    def reset_visible(self) -> None:
        for region in self._regions:
            region.hidden = False
        self.signals.visibility_changed.emit()

    def toggle_hidden(self, region: Region) -> None:
        if self.find_region(region.id) is not region:
            self.logger.debug("Hide ignored, region is not a member", region=region.id)
            return
        region.toggle_hidden()
        self.signals.visibility_changed.emit()

    # -- color-shift overlay -------------------------------------------------------

    def shift_color(self, enable: bool) -> None:
        """
        Apply or remove the color-shift overlay.

        Applying records each region's colors and paints every region with the
        overlay color at full opacity; an empty store stays unshifted. Removing
        restores the recorded colors of regions that still exist and empties
        the map.
        """
        if enable:
            if self._has_map or not self._regions:
                return
            for region in self._regions:
                self._color_map[region.id] = region.color_snapshot()
                region.apply_colors(self.shift_fill_color, OVERLAY_OPACITY, OVERLAY_OPACITY)
            self._has_map = True
        else:
            if not self._has_map:
                return
            for region in self._regions:
                snapshot = self._color_map.get(region.id)
                if snapshot is not None:
                    region.apply_colors(snapshot.fill_color, snapshot.fill_opacity, snapshot.opacity)
            self._color_map.clear()
            self._has_map = False

        self.logger.debug("Color overlay toggled", enabled=self._has_map)
        self.signals.color_map_changed.emit(self._has_map)
