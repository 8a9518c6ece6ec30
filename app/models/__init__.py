"""ORM Models — SQLAlchemy declarative models for the account and visibility stores.

Invariants:
    - All models inherit from Base (db/base.py)
    - Account is the aggregate root; visibility flags are scoped by account_id

Design Decisions:
    - One file per entity
    - All models imported here so Base.metadata is complete before create_all
      or Alembic autogenerate runs
"""

from app.models.account import Account  # noqa: F401
from app.models.visibility_flag import VisibilityFlag  # noqa: F401
