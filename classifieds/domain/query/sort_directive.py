from dataclasses import dataclass
from enum import Enum

from classifieds.domain.enums.ordering_context import OrderingContext


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortDirective:
    """One ``field:direction`` entry of a wire-level sort."""

    field: str
    direction: SortDirection = SortDirection.ASC

    def __str__(self) -> str:
        return f"{self.field}:{self.direction.value}"

    @classmethod
    def parse(cls, raw: str) -> "SortDirective":
        field_name, _, direction = raw.partition(":")
        field_name = field_name.strip()
        if not field_name:
            raise ValueError(f"Sort entry {raw!r} has no field name.")
        return cls(field_name, SortDirection(direction.strip().lower() or "asc"))


NEWEST_FIRST: tuple[SortDirective, ...] = (SortDirective("createdAt", SortDirection.DESC),)


def position_then_newest(position_field: str) -> tuple[SortDirective, ...]:
    """Curation order: manual position ascending, then newest first."""
    return (
        SortDirective(position_field, SortDirection.ASC),
        SortDirective("createdAt", SortDirection.DESC),
    )


def position_then_oldest(position_field: str) -> tuple[SortDirective, ...]:
    return (
        SortDirective(position_field, SortDirection.ASC),
        SortDirective("createdAt", SortDirection.ASC),
    )


def display_sort(context: OrderingContext) -> tuple[SortDirective, ...]:
    """
    Store-side sort matching OrderingPolicy for ``context``, so that a page
    window is cut from the same order the policy displays.
    """
    if context.newest_first:
        return position_then_newest(context.wire_position_field)
    return position_then_oldest(context.wire_position_field)
