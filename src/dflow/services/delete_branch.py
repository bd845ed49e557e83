from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from pydantic import BaseModel, ConfigDict

from ..errors import BranchNotFoundError
from ..git import GitGateway, raise_for_failure
from ..validation import ensure_valid_branch_name
from .base import BaseService

ConfirmDelete = Callable[[str], bool]


class DeleteBranchRequest(BaseModel):
    branch: str
    yes: bool = False
    model_config = ConfigDict(frozen=True)


@dataclass(frozen=True)
class DeleteBranchOutcome:
    branch: str
    confirmed: bool
    deleted_local: bool
    deleted_remote: bool
    messages: tuple[str, ...]


class DeleteBranchService(BaseService[DeleteBranchRequest, DeleteBranchOutcome]):
    """Delete a branch locally and on ``origin``.

    A missing local branch is skipped with a notice. The remote deletion is
    only attempted when ``origin`` is known to have the branch; an
    unreachable ``origin`` is reported as unchecked, not as absent.
    """

    def __init__(self, gateway: GitGateway, confirm_delete: ConfirmDelete) -> None:
        self._gateway = gateway
        self._confirm_delete = confirm_delete

    def _run(self, request: DeleteBranchRequest) -> DeleteBranchOutcome:
        branch = ensure_valid_branch_name(request.branch)
        local = self._gateway.branch_exists_locally(branch)
        remote = self._gateway.probe_remote_branch(branch)
        if not local and remote is None:
            raise BranchNotFoundError(
                f"branch '{branch}' does not exist locally and origin could not be checked",
                recovery_hint="check the network and the 'origin' remote, then retry",
            )
        if not local and not remote:
            raise BranchNotFoundError(
                f"branch '{branch}' exists neither locally nor on origin",
                recovery_hint="list local branches with 'git branch'",
            )

        if not request.yes and not self._confirm_delete(branch):
            return DeleteBranchOutcome(
                branch=branch,
                confirmed=False,
                deleted_local=False,
                deleted_remote=False,
                messages=("Operation aborted by user.",),
            )

        messages: list[str] = []
        if local:
            raise_for_failure(
                self._gateway.delete_local(branch),
                f"failed to delete local branch '{branch}'",
            )
            messages.append(f"Local branch '{branch}' deleted.")
        else:
            messages.append(
                f"Local branch '{branch}' does not exist. Skipping local deletion."
            )

        if remote:
            raise_for_failure(
                self._gateway.delete_remote(branch),
                f"failed to delete remote branch '{branch}'",
            )
            messages.append(f"Remote branch '{branch}' deleted.")
        elif remote is None:
            messages.append(
                f"Remote branch '{branch}' could not be checked. Skipping remote deletion."
            )
        else:
            messages.append(
                f"Remote branch '{branch}' does not exist. Skipping remote deletion."
            )

        return DeleteBranchOutcome(
            branch=branch,
            confirmed=True,
            deleted_local=local,
            deleted_remote=bool(remote),
            messages=tuple(messages),
        )
