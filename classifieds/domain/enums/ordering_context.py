from enum import Enum


class OrderingContext(str, Enum):
    """Which manual position field drives display order."""

    HOMEPAGE = "homepage"
    CATEGORY = "category"

    @property
    def position_field(self) -> str:
        """Attribute name on Listing holding the manual position."""
        if self is OrderingContext.HOMEPAGE:
            return "homepage_position"
        return "category_position"

    @property
    def wire_position_field(self) -> str:
        """Field name of the manual position in the content store."""
        if self is OrderingContext.HOMEPAGE:
            return "homepagePosition"
        return "categoryPosition"

    @property
    def newest_first(self) -> bool:
        # Homepage surfaces recency; category pages keep publish order.
        return self is OrderingContext.HOMEPAGE
