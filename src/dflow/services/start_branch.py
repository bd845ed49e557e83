from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from pydantic import BaseModel, ConfigDict

from ..branching import ResolvedBranchPlan, plan_branch
from ..git import GitGateway, raise_for_failure
from ..models import WorkflowConfig
from .base import BaseService

ConfirmPush = Callable[[str], bool]


class StartBranchRequest(BaseModel):
    config: WorkflowConfig
    branch_type: str
    name: str
    push: bool | None = None
    model_config = ConfigDict(frozen=True)


@dataclass(frozen=True)
class StartBranchOutcome:
    plan: ResolvedBranchPlan
    pushed: bool
    messages: tuple[str, ...]


class StartBranchService(BaseService[StartBranchRequest, StartBranchOutcome]):
    """Create and switch to a new flow branch from its configured base.

    The name is planned and validated before git is touched. Then the base is
    checked out and pulled, the new branch is created from it and, when
    requested or confirmed, published to ``origin``. The first failing git
    step raises ``ProcessError`` and later steps are skipped.
    """

    def __init__(self, gateway: GitGateway, confirm_push: ConfirmPush) -> None:
        self._gateway = gateway
        self._confirm_push = confirm_push

    def _run(self, request: StartBranchRequest) -> StartBranchOutcome:
        plan = plan_branch(request.config, request.branch_type, request.name)
        branch = plan.composed_name
        messages: list[str] = []

        raise_for_failure(
            self._gateway.checkout(plan.base),
            f"could not checkout base branch '{plan.base}'",
        )
        raise_for_failure(
            self._gateway.pull_current(),
            f"failed to pull latest changes from '{plan.base}'",
        )
        raise_for_failure(
            self._gateway.checkout_new(branch),
            f"failed to create branch '{branch}'",
        )
        messages.append(f"Created and switched to branch '{branch}' from '{plan.base}'")

        push = request.push
        if push is None:
            push = self._confirm_push(branch)
        if push:
            raise_for_failure(
                self._gateway.push_with_upstream(branch),
                f"branch '{branch}' was created but pushing it to origin failed",
            )
            messages.append(f"Branch '{branch}' pushed to origin")
        return StartBranchOutcome(plan=plan, pushed=bool(push), messages=tuple(messages))
