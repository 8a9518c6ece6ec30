"""Identity Resolver — turns the optional session cookie into a NavigationView.

Invariants:
    - No token → Anonymous; the account store is not consulted
    - Token that resolves to nothing → ExpiredSession (never Anonymous)
    - Known account without the tex entitlement → Authenticated(account, None)
    - Known entitled account → Authenticated(account, logged-in top bar)
"""

import logging

from app.core.domain_types import Service
from app.core.fragments import TopbarLoggedinProps, topbar_loggedin
from app.core.navigation import (
    Anonymous, Authenticated, ExpiredSession, NavigationView,
)
from app.core.repository_protocols import AccountStore

logger = logging.getLogger(__name__)

TOKEN_COOKIE = "token"


async def resolve_navigation(
    token: str | None, accounts: AccountStore,
) -> NavigationView:
    """Resolve the requester's navigation chrome and identity."""
    if token is None:
        return Anonymous()

    account = await accounts.find_by_token(token)
    if account is None:
        logger.info("Session token did not resolve to an account")
        return ExpiredSession()

    if not account.has_service(Service.TEX):
        return Authenticated(account, None)

    return Authenticated(
        account, topbar_loggedin(TopbarLoggedinProps(id=account.id)),
    )
