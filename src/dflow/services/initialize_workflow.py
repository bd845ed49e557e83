from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from pydantic import BaseModel, ConfigDict

from .. import config
from ..git import GitGateway, raise_for_failure
from ..models import MergeMode, WorkflowConfig
from ..validation import ensure_valid_branch_name
from .base import BaseService

ConfirmPush = Callable[[tuple[str, ...]], bool]
SaveConfig = Callable[[WorkflowConfig, Path], Path]


class InitializeWorkflowRequest(BaseModel):
    directory: Path
    main: str
    develop: str
    uat: str
    default_merge_mode: MergeMode = "manual"
    exceptions: tuple[str, ...] = ()
    push: bool | None = None
    model_config = ConfigDict(frozen=True)

    @property
    def base_branches(self) -> tuple[str, ...]:
        return (self.main, self.develop, self.uat)


@dataclass(frozen=True)
class InitializeWorkflowOutcome:
    config_path: Path
    payload: WorkflowConfig
    created_branches: tuple[str, ...]
    pushed: bool
    messages: tuple[str, ...]


class InitializeWorkflowService(
    BaseService[InitializeWorkflowRequest, InitializeWorkflowOutcome]
):
    """Write ``.dflow.yaml`` and make sure the base branches exist."""

    def __init__(
        self,
        gateway: GitGateway,
        confirm_push: ConfirmPush,
        save: SaveConfig = config.save_config,
    ) -> None:
        self._gateway = gateway
        self._confirm_push = confirm_push
        self._save = save

    def _run(self, request: InitializeWorkflowRequest) -> InitializeWorkflowOutcome:
        for branch in request.base_branches:
            ensure_valid_branch_name(branch)
        unique_bases = tuple(dict.fromkeys(request.base_branches))

        payload = config.build_workflow_config(
            request.main,
            request.develop,
            request.uat,
            request.default_merge_mode,
            request.exceptions,
        )
        config_path = self._save(payload, request.directory)
        messages = [f"Created {config_path.name}"]

        created: list[str] = []
        for branch in unique_bases:
            if self._gateway.branch_exists_locally(branch):
                messages.append(f"Branch '{branch}' exists")
                continue
            raise_for_failure(
                self._gateway.create_local_branch(branch),
                f"failed to create branch '{branch}'",
            )
            created.append(branch)
            messages.append(f"Created branch '{branch}'")

        push = request.push
        if push is None:
            push = self._confirm_push(unique_bases)
        if push:
            for branch in unique_bases:
                raise_for_failure(
                    self._gateway.push_with_upstream(branch),
                    f"failed to push '{branch}'",
                )
                messages.append(f"Pushed branch '{branch}' to remote")

        return InitializeWorkflowOutcome(
            config_path=config_path,
            payload=payload,
            created_branches=tuple(created),
            pushed=bool(push),
            messages=tuple(messages),
        )
