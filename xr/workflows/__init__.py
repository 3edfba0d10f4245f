"""Workflow modules for matching and renaming extras."""

from xr.workflows.extras import ExtrasRenameWorkflow, RenameAction

__all__ = ["ExtrasRenameWorkflow", "RenameAction"]
