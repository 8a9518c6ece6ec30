"""Path & Authorization Resolver — maps (account id, sub-path, requester) to a sandbox target.

Invariants:
    - is_owner iff the requester's account id equals the target account id
    - The requester's own AccountView is reused when it is the target
    - Unknown account, escaping sub-path, and missing path all raise NotFoundError;
      raw OSErrors never leave this module
    - target.sub_path is the resolved location relative to the sandbox root:
      no ".", ".." or empty segments, symlinks already followed
"""

import logging
import stat

from app.core.domain_types import AccountId, Service, TargetKind
from app.core.errors import ErrorContext, NotFoundError
from app.core.fs_types import FileSystemTarget
from app.core.navigation import NavigationView
from app.core.repository_protocols import AccountStore, Storage

logger = logging.getLogger(__name__)


async def resolve_target(
    account_id: AccountId,
    sub_path: str,
    navigation: NavigationView,
    accounts: AccountStore,
    storage: Storage,
) -> FileSystemTarget:
    """Locate sub_path inside the target account's tex sandbox."""
    requester = navigation.account
    is_owner = requester is not None and requester.id == account_id
    ctx = ErrorContext(account_id=account_id, path=sub_path)

    if is_owner:
        account = requester
    else:
        account = await accounts.find_by_id(account_id)
        if account is None:
            raise NotFoundError("Account", ctx)

    root = await storage.join(storage.user_dir(account.id, Service.TEX), "")
    location = await storage.join(root, sub_path)
    if not await storage.try_exists(location):
        raise NotFoundError("Path", ctx)
    canonical = location.relative_to(root).as_posix()
    if canonical == ".":
        canonical = ""

    st = await storage.stat(location)
    if stat.S_ISDIR(st.st_mode):
        kind, size = TargetKind.DIRECTORY, None
    else:
        kind, size = TargetKind.FILE, st.st_size

    logger.debug(
        f"Resolved {kind.value} target",
        extra={"account_id": account.id, "path": canonical, "is_owner": is_owner},
    )
    return FileSystemTarget(
        account=account,
        sub_path=canonical,
        location=location,
        kind=kind,
        size=size,
        is_owner=is_owner,
    )
