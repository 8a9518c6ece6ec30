"""VisibilityFlag ORM — explicit public/private flags on sandbox paths.

Invariants:
    - (account_id, path) is unique
    - path is relative to the account's user dir, posix separators, no leading
      slash (e.g. "tex/notes/draft.tex")
    - Paths without a row inherit the nearest flagged ancestor
"""

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint, BigInteger, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class VisibilityFlag(Base):
    """Visibility flag for one file or directory."""
    __tablename__ = "item_visibilities"
    __table_args__ = (
        UniqueConstraint("account_id", "path", name="uq_item_visibilities_path"),
    )

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True,
        autoincrement=True,
    )
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    path: Mapped[str] = mapped_column(Text, nullable=False)
    visibility: Mapped[str] = mapped_column(String(10), nullable=False)
