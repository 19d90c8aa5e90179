"""Ordered, named stages for lists assembled from several contributors."""

from dataclasses import dataclass
from typing import Generic, Iterable, Iterator, List, Tuple, TypeVar


T = TypeVar("T")


@dataclass(frozen=True)
class Stage(Generic[T]):
    """A named contribution to a staged list."""
    name: str
    items: Tuple[T, ...]


class StagedList(Generic[T]):
    """List built from named stages, kept in insertion order.

    Each contributor appends one stage; the flat list is only produced by
    ``build()``. Stages may be empty, which keeps ``names()`` stable across
    inputs while ``active_names()`` reports what actually contributed.
    """

    def __init__(self):
        self._stages: List[Stage[T]] = []

    def add(self, name: str, items: Iterable[T]) -> "StagedList[T]":
        """Append a stage. Stage names are unique."""
        if any(stage.name == name for stage in self._stages):
            raise ValueError(f"Duplicate stage: {name}")
        self._stages.append(Stage(name=name, items=tuple(items)))
        return self

    @property
    def stages(self) -> List[Stage[T]]:
        return list(self._stages)

    def names(self) -> List[str]:
        return [stage.name for stage in self._stages]

    def active_names(self) -> List[str]:
        """Names of the stages that contributed at least one item."""
        return [stage.name for stage in self._stages if stage.items]

    def get(self, name: str) -> List[T]:
        """Items of a single stage."""
        for stage in self._stages:
            if stage.name == name:
                return list(stage.items)
        raise KeyError(name)

    def build(self) -> List[T]:
        """Concatenate all stages in order."""
        return [item for stage in self._stages for item in stage.items]

    def __iter__(self) -> Iterator[T]:
        return iter(self.build())

    def __len__(self) -> int:
        return sum(len(stage.items) for stage in self._stages)
