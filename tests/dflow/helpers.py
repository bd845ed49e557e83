# ruff: noqa: E402

from __future__ import annotations

import string
import sys
from pathlib import Path

import pytest
from hypothesis import strategies as st

ROOT = Path(__file__).resolve().parents[2]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import dflow.commands.resolve as resolve
import dflow.config as config
import dflow.paths as paths
from dflow.git import GitFailure, GitResult, GitSuccess
from dflow.models import WorkflowConfig


def sample_config() -> WorkflowConfig:
    return config.build_workflow_config("main", "develop", "uat", "manual", ["develop"])


NAME_CHARS = string.ascii_letters + string.digits + "-_/."

name_strategy = st.text(alphabet=NAME_CHARS, max_size=16)


@st.composite
def workflow_configs(draw: st.DrawFn) -> WorkflowConfig:
    branch_rules = draw(
        st.dictionaries(
            st.text(alphabet=NAME_CHARS, min_size=1, max_size=12),
            st.sampled_from(["auto", "manual"]),
            max_size=4,
        )
    )
    return WorkflowConfig.model_validate(
        {
            "branches": {
                field: draw(name_strategy)
                for field in (
                    "main",
                    "develop",
                    "uat",
                    "features",
                    "releases",
                    "hotfixes",
                    "bugfixes",
                )
            },
            "flow": {
                field: draw(name_strategy)
                for field in (
                    "feature_base",
                    "feature_merge",
                    "release_base",
                    "hotfix_base",
                    "bugfix_base",
                )
            },
            "workflow": {
                "default_merge_mode": draw(st.sampled_from(["auto", "manual"])),
                "branch_rules": branch_rules,
            },
        }
    )


class RecordingGitGateway:
    """In-memory ``GitGateway`` that records every mutating call in order."""

    def __init__(
        self,
        *,
        local: set[str] | None = None,
        remote: set[str] | None = None,
        fail: dict[str, str] | None = None,
        repository: bool = True,
        git_config: dict[str, str] | None = None,
        unreachable_remote: bool = False,
    ) -> None:
        self.local = set(local or ())
        self.remote = set(remote or ())
        self.fail = dict(fail or {})
        self.repository = repository
        self.git_config = dict(git_config or {})
        self.unreachable_remote = unreachable_remote
        self.calls: list[tuple[str, ...]] = []
        self.head: str | None = None

    def _result(self, operation: str, *args: str) -> GitResult:
        argv = (operation, *args)
        self.calls.append(argv)
        if operation in self.fail:
            return GitFailure(argv=argv, returncode=1, detail=self.fail[operation])
        return GitSuccess(argv=argv)

    def is_repository(self) -> bool:
        return self.repository

    def branch_exists_locally(self, name: str) -> bool:
        return name in self.local

    def create_local_branch(self, name: str) -> GitResult:
        result = self._result("branch", name)
        if result.ok:
            self.local.add(name)
        return result

    def checkout(self, name: str) -> GitResult:
        result = self._result("checkout", name)
        if result.ok:
            self.head = name
        return result

    def checkout_new(self, name: str) -> GitResult:
        result = self._result("checkout_new", name)
        if result.ok:
            self.local.add(name)
            self.head = name
        return result

    def pull_current(self) -> GitResult:
        return self._result("pull")

    def push_with_upstream(self, name: str) -> GitResult:
        result = self._result("push", name)
        if result.ok:
            self.remote.add(name)
        return result

    def probe_remote_branch(self, name: str) -> bool | None:
        if self.unreachable_remote:
            return None
        return name in self.remote

    def remote_branch_exists(self, name: str) -> bool:
        return self.probe_remote_branch(name) is True

    def delete_local(self, name: str) -> GitResult:
        result = self._result("delete_local", name)
        if result.ok:
            self.local.discard(name)
        return result

    def delete_remote(self, name: str) -> GitResult:
        result = self._result("delete_remote", name)
        if result.ok:
            self.remote.discard(name)
        return result

    def list_local_branch_names(self) -> list[str]:
        return sorted(self.local)

    def config_get(self, key: str) -> str | None:
        return self.git_config.get(key)

    def config_set(self, key: str, value: str) -> GitResult:
        result = self._result("config_set", key, value)
        if result.ok:
            self.git_config[key] = value
        return result

    def config_list(self, section: str) -> list[tuple[str, str]]:
        prefix = f"{section}."
        return [
            (key, value)
            for key, value in self.git_config.items()
            if key.startswith(prefix)
        ]


def use_project(
    monkeypatch: pytest.MonkeyPatch, project_dir: Path, gateway: RecordingGitGateway
) -> RecordingGitGateway:
    """Point commands at ``project_dir`` and route their git calls to ``gateway``."""
    monkeypatch.setenv(paths.PROJECT_DIR_ENV, str(project_dir))
    monkeypatch.setattr(resolve, "git_gateway", lambda _repo_dir: gateway)
    return gateway
