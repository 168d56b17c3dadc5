# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# Plain dataclasses for everything an adapter hands back and everything the
# dispatcher returns.  They carry no behaviour beyond trivial conversions,
# and nothing here outlives a single tool call.
#
# Field names are the stable keys of the JSON response format, so renaming
# one is a breaking change for machine-readable callers.
# =============================================================================

from dataclasses import dataclass, field
from typing import Optional


# -----------------------------------------------------------------------------
# Place search
# -----------------------------------------------------------------------------
@dataclass
class Coordinates:
    latitude: str                      # Kakao "y"
    longitude: str                     # Kakao "x"


@dataclass
class Place:
    """One search hit, trimmed to what the caller needs."""

    name: str
    address: str                       # Lot (jibun) address
    road_address: str                  # Road address, or lot address if none
    phone: str                         # "정보 없음" when the provider has none
    category: str                      # e.g. "음식점 > 카페 > 스터디카페"
    distance: str                      # "120m", or "정보 없음"
    map_url: str
    coordinates: Coordinates


@dataclass
class SearchSpotResult:
    """What the place-search tool returns."""

    query: str                         # Effective query sent to Kakao
    purpose: str
    location: str
    total: int
    places: list[Place] = field(default_factory=list)


# -----------------------------------------------------------------------------
# Calendar
# -----------------------------------------------------------------------------
@dataclass
class CalendarConfirmation:
    success: bool
    event_id: str
    title: str
    start_time: str                    # "YYYY-MM-DD HH:MM", service zone
    end_time: str
    location: Optional[str]
    reminder: int                      # Snapped minutes; 0 = no reminder
    message: str


# -----------------------------------------------------------------------------
# Message
# -----------------------------------------------------------------------------
@dataclass
class MessageConfirmation:
    success: bool
    goal: str
    location: Optional[str]
    encouragement: str
    message: str


# -----------------------------------------------------------------------------
# ToolEnvelope — the only thing that crosses the protocol boundary
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolEnvelope:
    """Rendered text plus an error flag.

    Success and failure share this shape, so transports never need to
    special-case exceptions.
    """

    content: str
    is_error: bool = False

    def to_mcp(self) -> dict:
        """MCP `tools/call` result payload."""
        return {
            "content": [{"type": "text", "text": self.content}],
            "isError": self.is_error,
        }
