"""
Typed data models for the storefront identity and valuation pipeline.
All data structures used throughout the codebase should be defined here.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Grade(str, Enum):
    """Extraction confidence grade."""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class ValuationConfidence(str, Enum):
    """Valuation confidence grade."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Strategy(str, Enum):
    """Name candidate generation strategy."""
    CONTEXT = "context"
    POSITIONAL = "positional"
    PATTERN = "pattern"


class Impact(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class QualityBand(str, Enum):
    """Location and web presence quality."""
    POOR = "poor"
    AVERAGE = "average"
    GOOD = "good"
    EXCELLENT = "excellent"


class EquipmentBand(str, Enum):
    BASIC = "basic"
    AVERAGE = "average"
    GOOD = "good"
    EXCELLENT = "excellent"


class SizeBand(str, Enum):
    MICRO = "micro"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class HoursBand(str, Enum):
    LIMITED = "limited"
    STANDARD = "standard"
    EXTENDED = "extended"


@dataclass(frozen=True)
class RawTextBlock:
    """Full OCR text of one image plus the number of text detections."""
    full_text: str
    detection_count: int


@dataclass
class NameCandidate:
    """Provisional business name produced by one generation strategy."""
    name: str
    strategy: Strategy
    score: float = 0


@dataclass(frozen=True)
class ExtractionConfidence:
    business_name: Grade
    address: Grade
    phone: Grade


@dataclass(frozen=True)
class ExtractionResult:
    """Business identity extracted from a single image."""
    business_names: List[str]
    addresses: List[str]
    phone_numbers: List[str]
    websites: List[str]
    emails: List[str]
    other_text: List[str]
    confidence: ExtractionConfidence


@dataclass
class DirectoryRecord:
    """Business listing returned by the directory lookup (Google Places)."""
    name: str
    formatted_address: Optional[str] = None
    place_id: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    business_status: Optional[str] = None
    weekday_text: List[str] = field(default_factory=list)
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    price_level: Optional[int] = None
    types: List[str] = field(default_factory=list)

    @classmethod
    def from_place(cls, place: Dict[str, Any]) -> "DirectoryRecord":
        """Build a record from a Places search result or details payload."""
        opening_hours = place.get("opening_hours") or {}
        return cls(
            name=place.get("name") or "",
            formatted_address=place.get("formatted_address"),
            place_id=place.get("place_id"),
            phone=place.get("international_phone_number"),
            website=place.get("website"),
            business_status=place.get("business_status"),
            weekday_text=list(opening_hours.get("weekday_text") or []),
            rating=place.get("rating"),
            user_ratings_total=place.get("user_ratings_total"),
            price_level=place.get("price_level"),
            types=list(place.get("types") or []),
        )


@dataclass
class WebSearchResult:
    """Single organic web search hit."""
    title: str
    url: str
    description: str
    relevance: float = 0.0


@dataclass
class WebRecord:
    """Business data mined from web search results."""
    name: str
    website: Optional[str] = None
    description: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    business_type: Optional[str] = None
    is_generic_fallback: bool = False  # Placeholder built without any real search data


def _coerce_band(band_cls, value):
    # Accepts enum members or their string values; anything else raises ValueError
    return value if isinstance(value, band_cls) else band_cls(value)


@dataclass(frozen=True)
class ValuationFactors:
    """Normalized snapshot consumed by the valuation scorer."""
    business_type: str = "Business"
    location: Optional[str] = None
    rating: Optional[float] = None
    review_count: Optional[int] = None
    years_in_business: Optional[int] = None
    has_website: bool = False
    web_presence_quality: QualityBand = QualityBand.POOR
    location_quality: QualityBand = QualityBand.POOR
    equipment_quality: EquipmentBand = EquipmentBand.AVERAGE
    business_size: SizeBand = SizeBand.MICRO
    operating_hours: HoursBand = HoursBand.STANDARD

    def __post_init__(self):
        object.__setattr__(self, "web_presence_quality", _coerce_band(QualityBand, self.web_presence_quality))
        object.__setattr__(self, "location_quality", _coerce_band(QualityBand, self.location_quality))
        object.__setattr__(self, "equipment_quality", _coerce_band(EquipmentBand, self.equipment_quality))
        object.__setattr__(self, "business_size", _coerce_band(SizeBand, self.business_size))
        object.__setattr__(self, "operating_hours", _coerce_band(HoursBand, self.operating_hours))


@dataclass(frozen=True)
class ValuationFactor:
    """Human-readable explanation attached to a valuation."""
    factor: str
    impact: Impact
    description: str


@dataclass(frozen=True)
class EstimatedValue:
    low: int
    mid: int
    high: int


@dataclass(frozen=True)
class ValuationResult:
    """Dollar-range estimate with its rationale."""
    estimated_value: EstimatedValue
    confidence: ValuationConfidence
    factors: List[ValuationFactor]
    methodology: str
    comparables: List[str]
    multipliers: Dict[str, float] = field(default_factory=dict)  # Adjustments in application order


@dataclass
class BusinessProfile:
    """Merged business identity built from OCR, directory and web data."""
    business_name: str
    business_type: str
    description: str
    address: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    email: Optional[str] = None
    location: Optional[str] = None
    hours: Optional[str] = None
    rating: Optional[float] = None
    reviews: Optional[int] = None
    valuation: Optional[ValuationResult] = None
