"""Account ORM — identities that own a sandbox and may browse other sandboxes.

Invariants:
    - id is the stable numeric account id used in /fs/{id} URLs
    - token is unique: it is both the session cookie value and the capability
      token embedded in owner-only storage URLs
    - services lists enabled entitlements as Service enum values

Design Decisions:
    - JSON column for services: small, read-only set, never queried by element
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.domain_types import AccountId, CapabilityToken, Service
from app.core.fs_types import AccountView
from app.db.base import Base

_KNOWN_SERVICES = frozenset(s.value for s in Service)


class Account(Base):
    """Account row — projected to AccountView before entering the pipeline."""
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True,
    )
    username: Mapped[str] = mapped_column(String(64), nullable=False)
    token: Mapped[str] = mapped_column(
        String(128), nullable=False, unique=True, index=True,
    )
    services: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def to_view(self) -> AccountView:
        return AccountView(
            id=AccountId(self.id),
            token=CapabilityToken(self.token),
            services=frozenset(
                Service(s) for s in self.services if s in _KNOWN_SERVICES
            ),
        )
