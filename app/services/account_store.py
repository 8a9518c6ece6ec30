"""Account Store — token and id lookups over the accounts table.

Invariants:
    - Lookups never write
    - Rows are projected to AccountView before leaving this module
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import AccountId
from app.core.fs_types import AccountView
from app.models.account import Account


class SqlAccountStore:
    """AccountStore protocol implementation backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_token(self, token: str) -> AccountView | None:
        result = await self.db.execute(
            select(Account).where(Account.token == token),
        )
        account = result.scalar_one_or_none()
        return account.to_view() if account else None

    async def find_by_id(self, account_id: AccountId) -> AccountView | None:
        account = await self.db.get(Account, account_id)
        return account.to_view() if account else None
