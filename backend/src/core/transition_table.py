"""Generic status transition table."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Generic, TypeVar

from src.core.errors import InvalidTransition, UnknownStatus
from src.models.enums import EntityType

S = TypeVar("S", bound=Enum)


class TransitionTable(Generic[S]):
    """Whitelist of allowed status changes for one entity.

    Every member of ``status_type`` must be a key of ``transitions``; an empty
    row marks a terminal status. The table is frozen once built.
    """

    def __init__(
        self,
        entity: EntityType,
        status_type: type[S],
        transitions: Mapping[S, Iterable[S]],
        initial: S,
        aliases: Mapping[str, S] | None = None,
    ):
        missing = [s.value for s in status_type if s not in transitions]
        if missing:
            raise ValueError(f"{entity.value} table has no row for: {', '.join(missing)}")

        rows: dict[S, frozenset[S]] = {}
        for source, targets in transitions.items():
            targets = frozenset(targets)
            foreign = [t for t in targets if not isinstance(t, status_type)]
            if not isinstance(source, status_type) or foreign:
                raise ValueError(
                    f"{entity.value} table references statuses outside {status_type.__name__}"
                )
            rows[source] = targets

        self.entity = entity
        self.status_type = status_type
        self.initial = initial
        self._rows: Mapping[S, frozenset[S]] = MappingProxyType(rows)
        self._aliases: Mapping[str, S] = MappingProxyType(dict(aliases or {}))

    @property
    def statuses(self) -> tuple[S, ...]:
        return tuple(self.status_type)

    @property
    def terminal_statuses(self) -> frozenset[S]:
        return frozenset(s for s, targets in self._rows.items() if not targets)

    @property
    def aliases(self) -> Mapping[str, S]:
        return self._aliases

    def rows(self) -> Mapping[S, frozenset[S]]:
        """Read-only view of the whole table."""
        return self._rows

    def parse(self, value: S | str) -> S:
        """Resolve a status tag (or legacy alias) to an enum member.

        Raises:
            UnknownStatus: If the tag is not part of this entity's enumeration
        """
        if isinstance(value, self.status_type):
            return value
        # Members of another entity's enum are never coerced by value.
        if isinstance(value, str) and not isinstance(value, Enum):
            if value in self._aliases:
                return self._aliases[value]
            try:
                return self.status_type(value)
            except ValueError:
                pass
        raise UnknownStatus(self.entity, value)

    def valid_transitions_from(self, status: S | str) -> frozenset[S]:
        return self._rows[self.parse(status)]

    def is_terminal(self, status: S | str) -> bool:
        return not self._rows[self.parse(status)]

    def is_valid_transition(self, from_status: S | str, to_status: S | str) -> bool:
        """Check if a status change is allowed.

        Moving to the same status is always allowed.

        Args:
            from_status: Current status (member or tag)
            to_status: Requested status (member or tag)

        Returns:
            True if the transition is allowed, False otherwise

        Raises:
            UnknownStatus: If either tag is not part of the enumeration
        """
        source = self.parse(from_status)
        target = self.parse(to_status)
        if source == target:
            return True
        return target in self._rows[source]

    def require_transition(self, from_status: S | str, to_status: S | str) -> S:
        """Return the parsed target status or raise InvalidTransition."""
        source = self.parse(from_status)
        target = self.parse(to_status)
        if not self.is_valid_transition(source, target):
            raise InvalidTransition(self.entity, source, target)
        return target
