"""Navigation View — tagged result of resolving a request's session token.

Invariants:
    - Exactly three variants: Anonymous, ExpiredSession, Authenticated
    - Authenticated.fragment is None iff the account lacks the tex entitlement
    - ExpiredSession is terminal: it has no chrome and must be turned into the
      logged-out page by the caller

Design Decisions:
    - One resolver returns the variant and callers pattern-match on it,
      instead of two resolvers (one defaulting the chrome, one keeping absence)
"""

from dataclasses import dataclass

from app.core.fs_types import AccountView
from app.core.fragments import TOPBAR_LOGGEDOUT


@dataclass(frozen=True)
class Anonymous:
    """No token was supplied."""

    @property
    def account(self) -> None:
        return None

    @property
    def chrome(self) -> str:
        return TOPBAR_LOGGEDOUT


@dataclass(frozen=True)
class ExpiredSession:
    """A token was supplied but the account store does not know it."""

    @property
    def account(self) -> None:
        return None


@dataclass(frozen=True)
class Authenticated:
    """A known account; fragment is the logged-in top bar when entitled."""
    account: AccountView
    fragment: str | None = None

    @property
    def chrome(self) -> str:
        if self.fragment is None:
            return TOPBAR_LOGGEDOUT
        return self.fragment


NavigationView = Anonymous | ExpiredSession | Authenticated
