"""Configuration-tree to filesystem mapping.

This package contains the apply direction of the engine:
- task datatypes and the aggregated creation result
- pre-order traversal of a configuration tree into tasks
- ignore filtering of task lists
- best-effort materialization of tasks on disk
"""

from __future__ import annotations

from .types import CreationResult, DirTask, FileTask, Task, summarize_tasks
from .traverse import filter_tasks, is_safe_name, iter_tasks, relative_label, traverse
from .materialize import materialize, write_text_replacing

__all__ = [
    "DirTask",
    "FileTask",
    "Task",
    "CreationResult",
    "summarize_tasks",
    "is_safe_name",
    "iter_tasks",
    "traverse",
    "relative_label",
    "filter_tasks",
    "materialize",
    "write_text_replacing",
]
