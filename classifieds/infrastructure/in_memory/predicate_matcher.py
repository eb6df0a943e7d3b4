"""
Local evaluation of content-store predicates.

Records are plain mappings in wire shape. A field holding a list of related
records (e.g. ``tags``) matches when any element matches, which is what
gives ``{"tags": {"slug": {"$in": [...]}}}`` its OR semantics.
"""
from collections.abc import Callable, Mapping
from typing import Any

from classifieds.domain.query.filter_composer import Predicate


def _compare(op: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def check(value: Any, operand: Any) -> bool:
        if value is None or operand is None:
            return False
        return op(value, operand)

    return check


OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "$eq": lambda value, operand: value == operand,
    "$ne": lambda value, operand: value != operand,
    "$in": lambda value, operand: value in operand,
    "$notIn": lambda value, operand: value not in operand,
    "$null": lambda value, operand: (value is None) == bool(operand),
    "$notNull": lambda value, operand: (value is not None) == bool(operand),
    "$startsWith": _compare(lambda value, operand: str(value).startswith(operand)),
    "$endsWith": _compare(lambda value, operand: str(value).endswith(operand)),
    "$contains": _compare(lambda value, operand: operand in str(value)),
    "$lt": _compare(lambda value, operand: value < operand),
    "$lte": _compare(lambda value, operand: value <= operand),
    "$gt": _compare(lambda value, operand: value > operand),
    "$gte": _compare(lambda value, operand: value >= operand),
}


class UnsupportedOperatorError(ValueError):
    pass


def _match(value: Any, condition: Mapping[str, Any]) -> bool:
    for key, operand in condition.items():
        if key == "$and":
            ok = all(_match(value, part) for part in operand)
        elif key == "$or":
            ok = any(_match(value, part) for part in operand)
        elif key == "$not":
            ok = not _match(value, operand)
        elif key.startswith("$"):
            if key not in OPERATORS:
                raise UnsupportedOperatorError(f"Unsupported filter operator: {key}")
            ok = OPERATORS[key](value, operand)
        else:
            field = value.get(key) if isinstance(value, Mapping) else None
            if isinstance(field, (list, tuple)):
                ok = any(_match(item, operand) for item in field)
            else:
                ok = _match(field, operand)
        if not ok:
            return False
    return True


def matches(predicate: Predicate, record: Mapping[str, Any]) -> bool:
    """True when ``record`` satisfies every clause of ``predicate``. ``{}`` matches all."""
    return _match(record, predicate)
