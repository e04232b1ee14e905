# regionkit/domain/services/i_annotation_context.py
from abc import ABC, abstractmethod
from typing import Optional

from regionkit.domain.models.region_model import Region


# Visibility filter modes offered by the filter controls
FILTER_TYPES = ("None", "Quantile", "Score", "Class")

class IAnnotationContext(ABC):
    """The annotation that owns a RegionStore."""

    @abstractmethod
    def on_entity_create(self, region: Region) -> None:
        """Called once after a region joins the store."""
        pass

    @abstractmethod
    def on_entity_delete(self, region: Region) -> None:
        """Called once after a region leaves the store."""
        pass

    @abstractmethod
    def set_highlighted_node(self, region: Optional[Region]) -> None:
        """Point the highlighted node at region, or clear it with None."""
        pass
