"""In-memory collaborators for pipeline tests that do not need the database."""

from app.core.domain_types import AccountId, CapabilityToken, ItemVisibility, Service
from app.core.fs_types import AccountView
from app.services.visibility_store import ancestor_paths, normalize_rel_path


def make_account(
    account_id: int, token: str, services: tuple[Service, ...] = (Service.TEX,),
) -> AccountView:
    return AccountView(
        id=AccountId(account_id),
        token=CapabilityToken(token),
        services=frozenset(services),
    )


class FakeAccountStore:
    """AccountStore over a list of AccountViews; records every lookup."""

    def __init__(self, *accounts: AccountView):
        self.accounts = list(accounts)
        self.calls: list[tuple[str, object]] = []

    async def find_by_token(self, token: str) -> AccountView | None:
        self.calls.append(("token", token))
        return next((a for a in self.accounts if a.token == token), None)

    async def find_by_id(self, account_id: AccountId) -> AccountView | None:
        self.calls.append(("id", account_id))
        return next((a for a in self.accounts if a.id == account_id), None)


class FakeVisibilityStore:
    """VisibilityStore over {(account_id, rel_path): visibility}."""

    def __init__(
        self,
        flags: dict[tuple[int, str], ItemVisibility] | None = None,
        default: ItemVisibility = ItemVisibility.PUBLIC,
    ):
        self.flags = flags or {}
        self.default = default

    async def visibility(self, account_id, rel_path):
        for path in ancestor_paths(rel_path):
            if (account_id, path) in self.flags:
                return self.flags[(account_id, path)]
        return self.default

    async def child_flags(self, account_id, rel_dir):
        parent = normalize_rel_path(rel_dir)
        prefix = f"{parent}/" if parent else ""
        children = {}
        for (owner, path), visibility in self.flags.items():
            name = path[len(prefix):]
            if owner == account_id and path.startswith(prefix) and name and "/" not in name:
                children[name] = visibility
        return children
