"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - AccountId wraps the stable numeric account id — never mixed with other ints
    - All valid states encoded as Enums — no raw string matching
    - Service.TEX is both the entitlement and the storage namespace of this subsystem

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: stored as-is in the DB and compared against settings values
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

AccountId = NewType("AccountId", int)
CapabilityToken = NewType("CapabilityToken", str)


# ─── Enums ───────────────────────────────────────────────────────

class Service(str, Enum):
    """Service entitlements an account may have enabled."""
    TEX = "tex"
    BLUE = "blue"


class ItemVisibility(str, Enum):
    """Per-entry access flag — private entries are hidden from non-owners."""
    PUBLIC = "public"
    PRIVATE = "private"


class TargetKind(str, Enum):
    """What a resolved sandbox location points at."""
    DIRECTORY = "directory"
    FILE = "file"
