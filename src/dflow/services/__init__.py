from .base import BaseService
from .delete_branch import DeleteBranchOutcome, DeleteBranchRequest, DeleteBranchService
from .initialize_workflow import (
    InitializeWorkflowOutcome,
    InitializeWorkflowRequest,
    InitializeWorkflowService,
)
from .start_branch import StartBranchOutcome, StartBranchRequest, StartBranchService

__all__ = [
    "BaseService",
    "DeleteBranchOutcome",
    "DeleteBranchRequest",
    "DeleteBranchService",
    "InitializeWorkflowOutcome",
    "InitializeWorkflowRequest",
    "InitializeWorkflowService",
    "StartBranchOutcome",
    "StartBranchRequest",
    "StartBranchService",
]
