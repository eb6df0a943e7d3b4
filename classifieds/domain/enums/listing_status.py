from enum import Enum


class ListingStatus(str, Enum):
    """Lifecycle status of a listing as reported by the content store."""

    DRAFT = "draft"
    PENDING = "pending"
    ACTIVE = "active"
    EXPIRED = "expired"
    SOLD = "sold"
