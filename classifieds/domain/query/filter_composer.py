"""
Filter composition for the content store.

Turns ListingSelectionCriteria into the nested predicate shape the store
understands: ``{field: {operator: value}}`` for direct fields and
``{relation: {field: {operator: value}}}`` for one-hop related entities.
Top-level keys are AND-ed by the store.
"""
from typing import Any

from classifieds.domain.query.criteria import ListingSelectionCriteria

EQ = "$eq"
IN = "$in"
STARTS_WITH = "$startsWith"

Predicate = dict[str, Any]


def compose_filters(criteria: ListingSelectionCriteria) -> Predicate:
    """Map criteria to a predicate. No criteria set yields ``{}``."""
    filters: Predicate = {}

    if criteria.city:
        filters["city"] = {"slug": {EQ: criteria.city}}

    if criteria.category:
        filters["category"] = {"slug": {EQ: criteria.category}}

    if criteria.tags:
        # Sorted so the same criteria always produce the same query string.
        filters["tags"] = {"slug": {IN: sorted(criteria.tags)}}

    # Explicit False still filters.
    if criteria.featured is not None:
        filters["featured"] = {EQ: criteria.featured}

    if criteria.status is not None:
        filters["status"] = {EQ: criteria.status.value}

    if criteria.slug_prefix:
        filters["slug"] = {STARTS_WITH: criteria.slug_prefix}

    if criteria.owner_id is not None:
        filters["owner"] = {"id": {EQ: criteria.owner_id}}

    return filters


def slug_filter(slug: str) -> Predicate:
    """Exact-match predicate on a record's own slug."""
    return {"slug": {EQ: slug}}
