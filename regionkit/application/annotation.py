# regionkit/application/annotation.py
import uuid
from typing import Callable, List, Optional

from regionkit.domain.models.region_model import Region
from regionkit.domain.services.i_annotation_context import IAnnotationContext
from regionkit.domain.services.i_config_repository_service import RegionStoreSettings
from regionkit.domain.services.i_keybinding_registry import IKeybindingRegistry
from regionkit.domain.services.i_logger_service import ILoggerService
from regionkit.infrastructure.regions.region_store import RegionStore


EntityHook = Callable[[Region], None]


class Annotation(IAnnotationContext):
    """
    One annotation of a task: its region store plus the filter and relation
    state the controls operate on.

    The highlighted node is kept as a region id and resolved through the
    store, so deleting a region never leaves a live reference behind.
    """

    def __init__(self,
                 registry: IKeybindingRegistry,
                 logger: ILoggerService,
                 settings: Optional[RegionStoreSettings] = None,
                 annotation_id: Optional[str] = None,
                 entity_created: Optional[EntityHook] = None,
                 entity_deleted: Optional[EntityHook] = None,
                 filter_type: str = "None"):
        self.id = annotation_id or uuid.uuid4().hex[:8]
        self.logger = logger
        self._entity_created = entity_created
        self._entity_deleted = entity_deleted

        self.highlighted_node_id: Optional[str] = None
        self.relation_mode = False
        self.relation_start_id: Optional[str] = None

        self.filter_type = filter_type
        self.interval = (0, 100)
        self.selected_q: List[int] = [1, 1, 1, 1]
        self.double_checked = False

        self.region_store = RegionStore(self, registry, logger, settings)

    # -- IAnnotationContext ----------------------------------------------------------

    def on_entity_create(self, region: Region) -> None:
        if self._entity_created is not None:
            self._entity_created(region)

    def on_entity_delete(self, region: Region) -> None:
        if self.highlighted_node_id == region.id:
            self.highlighted_node_id = None
        if self.relation_start_id == region.id:
            self.stop_relation_mode()
        if self._entity_deleted is not None:
            self._entity_deleted(region)

    def set_highlighted_node(self, region: Optional[Region]) -> None:
        self.highlighted_node_id = region.id if region is not None else None

    @property
    def highlighted_node(self) -> Optional[Region]:
        if self.highlighted_node_id is None:
            return None
        return self.region_store.find_region(self.highlighted_node_id)

    # -- regions ---------------------------------------------------------------------

    @property
    def regions(self) -> List[Region]:
        return self.region_store.regions

    def add_region(self, region: Region) -> Region:
        return self.region_store.add_region(region)

    def delete_region(self, region: Region) -> None:
        self.region_store.delete_region(region)

    def delete_all_regions(self) -> None:
        for region in self.region_store.regions:
            self.region_store.delete_region(region)
        self.logger.info("All regions deleted", annotation=self.id)

    # -- relations -----------------------------------------------------------------

    def start_relation_mode(self, node: Region) -> None:
        self.relation_mode = True
        self.relation_start_id = node.id
        node.set_highlight(True)

    def stop_relation_mode(self) -> None:
        self.relation_mode = False
        self.relation_start_id = None
        self.region_store.unhighlight_all()
