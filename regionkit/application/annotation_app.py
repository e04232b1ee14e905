# regionkit/application/annotation_app.py

"""
Application-level annotation controller.

Holds the annotations of the current task, tracks the selected one, wires
the global editing hotkeys and turns filter-control actions (score slider,
quartile buttons, class checkboxes, color-shift checkbox) into Region Store
calls on the selected annotation.
"""
from typing import Callable, Dict, List, Optional, Sequence

from regionkit.application.annotation import Annotation, EntityHook
from regionkit.domain.common.errors import KeybindingError, SelectionError, ValidationError
from regionkit.domain.common.result import Result
from regionkit.domain.models.score_quartiles import toggle_quartile, QUARTILE_COUNT
from regionkit.domain.services.i_annotation_context import FILTER_TYPES
from regionkit.domain.services.i_config_repository_service import IConfigRepository
from regionkit.domain.services.i_keybinding_registry import IKeybindingRegistry
from regionkit.domain.services.i_logger_service import ILoggerService


ALL_QUARTILES = [1, 1, 1, 1]
FULL_SCORE_RANGE = (0, 100)


class AnnotationApp:
    """
    Controller for the annotations of one task.

    Filter and overlay actions always target the selected annotation and
    report a SelectionError result when there is none.
    """

    def __init__(self,
                 registry: IKeybindingRegistry,
                 config_repository: IConfigRepository,
                 logger: ILoggerService,
                 entity_created: Optional[EntityHook] = None,
                 entity_deleted: Optional[EntityHook] = None):
        """
        Initialize the controller.

        Args:
            registry: Keybinding registry shared by the app and every region store
            config_repository: Settings source
            logger: Logger service
            entity_created: Optional hook called for every region added
            entity_deleted: Optional hook called for every region removed
        """
        self.registry = registry
        self.config_repository = config_repository
        self.logger = logger
        self._entity_created = entity_created
        self._entity_deleted = entity_deleted

        self._annotations: Dict[str, Annotation] = {}
        self._selected_id: Optional[str] = None

    # -- annotations -----------------------------------------------------------------

    @property
    def annotations(self) -> List[Annotation]:
        return list(self._annotations.values())

    @property
    def selected(self) -> Optional[Annotation]:
        if self._selected_id is None:
            return None
        return self._annotations.get(self._selected_id)

    def add_annotation(self, annotation_id: Optional[str] = None, select: bool = True) -> Annotation:
        annotation = Annotation(
            registry=self.registry,
            logger=self.logger,
            settings=self.config_repository.get_region_store_settings(),
            annotation_id=annotation_id,
            entity_created=self._entity_created,
            entity_deleted=self._entity_deleted,
            filter_type=self.config_repository.get_setting("default_filter_type", "None"),
        )
        # Region hotkeys are bound only for the selected annotation
        annotation.region_store.set_hotkeys_active(False)
        self._annotations[annotation.id] = annotation
        self.logger.info("Annotation added", annotation=annotation.id)

        if select:
            self.select_annotation(annotation.id)
        return annotation

    def select_annotation(self, annotation_id: str) -> Result[Annotation]:
        annotation = self._annotations.get(annotation_id)
        if annotation is None:
            return Result.fail(ValidationError(
                message=f"Unknown annotation: {annotation_id}",
                details={"annotation": annotation_id}
            ))

        previous = self.selected
        if previous is not None and previous is not annotation:
            previous.region_store.unselect_all()
            previous.region_store.set_hotkeys_active(False)

        self._selected_id = annotation_id
        annotation.region_store.set_hotkeys_active(True)
        return Result.ok(annotation)

    def _require_selected(self) -> Result[Annotation]:
        annotation = self.selected
        if annotation is None:
            return Result.fail(SelectionError(message="No annotation selected"))
        return Result.ok(annotation)

    # -- hotkeys ---------------------------------------------------------------------

    def register_hotkeys(self) -> Result[int]:
        """
        Register the global editing hotkeys.

        Returns:
            Result with the number of bindings registered (0 when hotkeys are
            disabled in the settings)
        """
        if not self.config_repository.hotkeys_enabled():
            self.logger.info("Hotkeys disabled in settings")
            return Result.ok(0)

        bindings = self._hotkey_table()

        def register() -> int:
            for name, (callback, description) in bindings.items():
                self.registry.add_key(name, callback, description)
            return len(bindings)

        return Result.from_operation(register, self.logger, KeybindingError, "Failed to register hotkeys")

    def _hotkey_table(self) -> Dict[str, tuple]:
        def with_store(action: Callable) -> Callable[[], None]:
            def run() -> None:
                annotation = self.selected
                if annotation is not None:
                    action(annotation.region_store)
            return run

        def with_node(action: Callable, allow_relation_mode: bool = False) -> Callable[[], None]:
            def run() -> None:
                annotation = self.selected
                if annotation is None or annotation.highlighted_node is None:
                    return
                if annotation.relation_mode and not allow_relation_mode:
                    return
                action(annotation, annotation.highlighted_node)
            return run

        def stop_relation() -> None:
            annotation = self.selected
            if annotation is not None and annotation.relation_mode:
                annotation.stop_relation_mode()

        def delete_all() -> None:
            annotation = self.selected
            if annotation is not None:
                annotation.delete_all_regions()

        table = {
            "ctrl+backspace": (delete_all, "Delete all regions"),
            "r": (with_node(lambda a, node: a.start_relation_mode(node)),
                  "Create relation when region is selected"),
            "u": (with_node(lambda a, node: a.region_store.unselect_all()), "Unselect region"),
            "h": (with_node(lambda a, node: a.region_store.toggle_hidden(node)), "Hide selected region"),
            "escape": (stop_relation, "Exit relation mode"),
            "backspace": (with_node(lambda a, node: a.delete_region(node), allow_relation_mode=True),
                          "Delete selected region"),
            "alt+tab": (with_store(lambda s: s.select_next()), "Circle through entities"),
            "a": (with_store(lambda s: s.adjust_size("a")), "Decrease selected object width"),
            "d": (with_store(lambda s: s.adjust_size("d")), "Increase selected object width"),
            "w": (with_store(lambda s: s.adjust_size("w")), "Increase selected object height"),
            "s": (with_store(lambda s: s.adjust_size("s")), "Decrease selected object height"),
            "ctrl+up": (with_store(lambda s: s.adjust_pos("up")), "Move selected object upward"),
            "ctrl+down": (with_store(lambda s: s.adjust_pos("down")), "Move selected object downward"),
            "ctrl+left": (with_store(lambda s: s.adjust_pos("left")), "Move selected object leftward"),
            "ctrl+right": (with_store(lambda s: s.adjust_pos("right")), "Move selected object rightward"),
            "enter": (with_store(lambda s: s.select_right_adj()), "Select next object in right"),
        }
        return table

    # -- filter controls -------------------------------------------------------------

    def update_visibility(self, interval: Sequence[float]) -> Result[bool]:
        """Score slider moved: filter by the new interval."""
        def apply(annotation: Annotation) -> Result[bool]:
            annotation.interval = (interval[0], interval[1])
            annotation.region_store.label_visible(annotation.interval)
            return Result.ok(True)

        return self._require_selected().and_then(apply)

    def update_filter_opt(self, filter_type: str) -> Result[bool]:
        """
        Switch the filter mode.

        Quantile starts with every quartile selected, Score with the full
        range; any other mode shows every region.
        """
        if filter_type not in FILTER_TYPES:
            return Result.fail(ValidationError(
                message=f"Unknown filter type: {filter_type}",
                details={"filter_type": filter_type}
            ))

        def apply(annotation: Annotation) -> Result[bool]:
            annotation.filter_type = filter_type
            store = annotation.region_store
            if filter_type == "Quantile":
                annotation.selected_q = list(ALL_QUARTILES)
                store.quartile_visible(annotation.selected_q)
            elif filter_type == "Score":
                annotation.interval = FULL_SCORE_RANGE
                store.label_visible(annotation.interval)
            else:
                store.reset_visible()
            self.logger.debug("Filter mode changed", annotation=annotation.id, filter_type=filter_type)
            return Result.ok(True)

        return self._require_selected().and_then(apply)

    def update_quartile(self, ind: int) -> Result[List[int]]:
        """Quartile button clicked: toggle it and refilter."""
        if not 0 <= ind < QUARTILE_COUNT:
            return Result.fail(ValidationError(
                message=f"Quartile index out of range: {ind}",
                details={"index": ind}
            ))

        def apply(annotation: Annotation) -> Result[List[int]]:
            annotation.selected_q = toggle_quartile(annotation.selected_q, ind)
            annotation.region_store.quartile_visible(annotation.selected_q)
            return Result.ok(list(annotation.selected_q))

        return self._require_selected().and_then(apply)

    def update_class(self, checked: bool, class_value: str) -> Result[bool]:
        def apply(annotation: Annotation) -> Result[bool]:
            annotation.region_store.class_visible(checked, class_value)
            return Result.ok(True)

        return self._require_selected().and_then(apply)

    def shift_boxes_color(self, checked: bool) -> Result[bool]:
        def apply(annotation: Annotation) -> Result[bool]:
            annotation.region_store.shift_color(checked)
            return Result.ok(annotation.region_store.has_map)

        return self._require_selected().and_then(apply)

    def toggle_double_check(self, checked: bool) -> Result[bool]:
        def apply(annotation: Annotation) -> Result[bool]:
            annotation.double_checked = checked
            return Result.ok(checked)

        return self._require_selected().and_then(apply)
