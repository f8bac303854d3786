"""
HistoryLib - Editing session and undo/redo history

This module provides the undoable edit actions, the per-session history
stack, background recomputation and the editor shell state.
"""

from FP_Libs.HistoryLib.actions import (
    Action,
    ModifierAdded,
    ModifierOptionsApplied,
    ModifierRemoved,
    ModifierSelected,
    Selection,
)
from FP_Libs.HistoryLib.history_stack import HistoryStack
from FP_Libs.HistoryLib.recompute_runner import RecomputeRunner
from FP_Libs.HistoryLib.edit_session import EditSession
from FP_Libs.HistoryLib.editor import Editor

__all__ = [
    "Action",
    "ModifierAdded",
    "ModifierOptionsApplied",
    "ModifierRemoved",
    "ModifierSelected",
    "Selection",
    "HistoryStack",
    "RecomputeRunner",
    "EditSession",
    "Editor",
]
