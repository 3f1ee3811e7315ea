"""Field registry for rule translation.

Accumulates, per entity type, every field referenced by a FieldBased
criterion. One registry is shared by all rules of a run and read once at the
end to build the evaluator's data-fetch context.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field


@dataclass
class FieldRegistry:
    """Accumulation context for referenced entity fields.

    Field paths are stored fully qualified ("Account.Industry"); snapshot()
    strips the entity type prefix back off.
    """

    fields: dict[str, set[str]] = field(default_factory=dict)

    def register(self, entity_type: str, field_path: str) -> None:
        """Add a qualified field path for entity_type. Idempotent."""
        self.fields.setdefault(entity_type, set()).add(field_path)

    def merge(self, other: FieldRegistry) -> None:
        """Fold another registry into this one."""
        for entity_type, paths in other.fields.items():
            self.fields.setdefault(entity_type, set()).update(paths)

    def snapshot(self) -> dict[str, list[str]]:
        """Local field names per entity type.

        The list order carries no meaning; it is sorted only so emitted
        output is reproducible.
        """
        snap: dict[str, list[str]] = {}
        for entity_type, paths in self.fields.items():
            prefix = entity_type + "."
            snap[entity_type] = sorted(
                path[len(prefix) :] if path.startswith(prefix) else path for path in paths
            )
        return snap

    @classmethod
    def from_snapshot(cls, snapshot: Mapping[str, Sequence[str]]) -> FieldRegistry:
        """Rebuild a registry from snapshot() output."""
        registry = cls()
        for entity_type, local_names in snapshot.items():
            registry.fields.setdefault(entity_type, set())
            for name in local_names:
                registry.register(entity_type, f"{entity_type}.{name}")
        return registry

    @property
    def entity_types(self) -> list[str]:
        """Entity types with at least one registered field."""
        return list(self.fields)

    def __contains__(self, entity_type: object) -> bool:
        return entity_type in self.fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)
