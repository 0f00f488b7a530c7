"""Listing models."""

from enum import Enum
from typing import Any, Generic, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from src.utils.errors import InvalidFiltersError

T = TypeVar("T")

# Filter values at or above these bounds mean "no upper bound"
PRICE_MAX_SENTINEL = 10_000_000
SITES_MAX_SENTINEL = 1000


class ListingStatus(str, Enum):
    """Listing approval status."""
    APPROVED = "approved"
    PENDING = "pending"
    REJECTED = "rejected"


class ListingImageRow(BaseModel):
    """Row from the listing_images table, nested under a listing."""
    storage_path: str = Field(..., description="Object path inside the listing images bucket")
    is_primary: Optional[bool] = Field(default=False, description="Shown first when true")


class ListingLocation(BaseModel):
    """Where the park is."""
    address: str = ""
    city: str = ""
    state: str = ""
    lat: float = 0
    lng: float = 0


class ListingBroker(BaseModel):
    """Contact shown on a listing."""
    id: str = Field("", description="Owning user ID")
    name: str = "Contact Agent"
    email: str = "contact@example.com"
    phone: str = ""
    company: str = ""
    avatar: str = "/default-avatar.png"


class Listing(BaseModel):
    """RV park listing ready for display (camelCase on the wire)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Listing ID")
    title: str = Field("Untitled Listing", description="Listing title")
    description: str = ""
    price: float = Field(0, description="Asking price")
    location: ListingLocation = Field(default_factory=ListingLocation)
    num_sites: int = Field(0, description="Number of RV sites")
    occupancy_rate: float = Field(0, description="Occupancy, percent")
    annual_revenue: float = 0
    cap_rate: float = Field(0, description="Capitalization rate, percent")
    images: list[str] = Field(default_factory=list, description="Public image URLs, primary first")
    broker: ListingBroker = Field(default_factory=ListingBroker)
    property_type: Optional[str] = None
    created_at: str = Field(..., description="Creation timestamp (ISO 8601)")
    featured: bool = Field(default=False, description="Not persisted; set by the featured fetch")
    status: ListingStatus = ListingStatus.APPROVED

    def to_payload(self, **extra: Any) -> dict:
        """JSON-ready dict with camelCase keys."""
        payload = self.model_dump(mode="json", by_alias=True)
        payload.update(extra)
        return payload


class ListingFilters(BaseModel):
    """Search filters for approved listings. Unknown keys are rejected."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
    )

    price_min: Optional[float] = Field(None, description="Lower price bound, skipped unless > 0")
    price_max: Optional[float] = Field(
        None, description=f"Upper price bound, skipped at or above {PRICE_MAX_SENTINEL}"
    )
    state: Optional[str] = Field(None, description="Exact state match, skipped when empty")
    sites_min: Optional[int] = Field(None, description="Minimum site count, skipped unless > 0")
    sites_max: Optional[int] = Field(
        None, description=f"Maximum site count, skipped at or above {SITES_MAX_SENTINEL}"
    )
    cap_rate_min: Optional[float] = Field(None, description="Minimum cap rate, skipped unless > 0")
    occupancy_rate_min: Optional[float] = Field(None, description="Minimum occupancy, skipped unless > 0")
    search: Optional[str] = Field(None, description="Case-insensitive text search")

    @classmethod
    def from_mapping(cls, data: Optional[dict]) -> "ListingFilters":
        """Build filters from a dict (camelCase or snake_case keys), raising InvalidFiltersError."""
        try:
            return cls.model_validate(data or {})
        except ValidationError as e:
            raise InvalidFiltersError(f"Invalid listing filters: {e}") from e

    @classmethod
    def from_query_params(cls, params: dict[str, list[str]]) -> "ListingFilters":
        """Build filters from parsed query-string params; blank values are ignored."""
        flat = {key: values[-1] for key, values in params.items() if values and values[-1] != ""}
        return cls.from_mapping(flat)


class FetchResult(BaseModel, Generic[T]):
    """Outcome of a listings read: data plus what went wrong, if anything."""
    data: T
    error: Optional[str] = Field(None, description="Failure description; None on success")
    dropped: int = Field(0, description="Rows skipped because they failed to normalize")

    @property
    def ok(self) -> bool:
        return self.error is None
