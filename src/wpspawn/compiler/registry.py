"""Registry of workload shapes."""

import logging
from typing import Dict, List, Optional, Type

from wpspawn.compiler.shapes import JobShape, WebShape, WorkloadShape


logger = logging.getLogger(__name__)


class ShapeRegistry:
    """Registry for managing workload shapes."""

    def __init__(self):
        """Initialize shape registry."""
        self._shape_classes: Dict[str, Type[WorkloadShape]] = {
            "web": WebShape,
            "job": JobShape,
        }
        self._shapes: Dict[str, WorkloadShape] = {}
        for name, shape_class in self._shape_classes.items():
            self._shapes[name] = shape_class()
            logger.debug(f"Registered workload shape: {name}")

    def register(self, shape: WorkloadShape) -> None:
        """Register an additional shape under its own name."""
        self._shapes[shape.name] = shape

    def get_shape(self, name: str) -> Optional[WorkloadShape]:
        """Get a shape by name."""
        return self._shapes.get(name)

    def list_shapes(self) -> List[str]:
        """List available shape names."""
        return list(self._shapes.keys())


_registry: Optional[ShapeRegistry] = None


def get_shape_registry() -> ShapeRegistry:
    """Process wide default registry."""
    global _registry
    if _registry is None:
        _registry = ShapeRegistry()
    return _registry
