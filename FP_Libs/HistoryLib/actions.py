"""
Undoable edit actions.

Every structural edit of an editing session is an Action. An action runs in
three ways:

- forward(session) performs the edit the first time and returns the state
  it captured, which is everything needed to revert it.
- inverse(session, captured) reverts the edit exactly: the session's
  modifiers and selection equal what they were before forward().
- replay(session, captured) performs the edit again after an undo, using
  the captured state rather than re-reading the session.

forward() validates before it mutates anything; a rejected action raises
InvalidActionError and leaves the session untouched.

Classes:
    Action: Base class
    ModifierAdded: Append a modifier and select it
    ModifierRemoved: Remove the modifier at an index
    ModifierOptionsApplied: Write the selection's working copy into the list
    ModifierSelected: Toggle the selection of a modifier
"""

from dataclasses import dataclass
from typing import Any, ClassVar, List, Optional, Protocol, Tuple

from FP_Libs.errors import InvalidActionError
from FP_Libs.ModifiersLib.modifier_models import Modifier, is_modifier

Selection = Optional[Tuple[int, Modifier]]


class EditTarget(Protocol):
    """The part of an editing session that actions change."""
    modifiers: List[Modifier]
    selection: Selection


def _require_modifier(modifier: Any) -> None:
    if not is_modifier(modifier):
        raise InvalidActionError(f"Expected a modifier, got {type(modifier).__name__}")


def _require_index(target: EditTarget, index: int) -> None:
    if not (0 <= index < len(target.modifiers)):
        raise InvalidActionError(
            f"Modifier index {index} out of range (have {len(target.modifiers)})"
        )


# ============================================================================
# Captured state
# ============================================================================

@dataclass(frozen=True)
class AddedState:
    previous_selection: Selection


@dataclass(frozen=True)
class RemovedState:
    removed: Modifier
    previous_selection: Selection


@dataclass(frozen=True)
class OptionsAppliedState:
    index: int
    previous: Modifier
    applied: Modifier
    previous_selection: Selection


@dataclass(frozen=True)
class SelectedState:
    previous_selection: Selection
    new_selection: Selection


# ============================================================================
# Actions
# ============================================================================

class Action:
    """Base class for undoable edits."""

    # True when the action changes the modifier list (and so the output image)
    changes_modifiers: ClassVar[bool] = True

    def forward(self, target: EditTarget) -> Any:
        raise NotImplementedError

    def inverse(self, target: EditTarget, captured: Any) -> None:
        raise NotImplementedError

    def replay(self, target: EditTarget, captured: Any) -> None:
        raise NotImplementedError

    def describe(self) -> str:
        return type(self).__name__


class ModifierAdded(Action):
    """Append a modifier to the chain and select it."""

    def __init__(self, modifier: Modifier):
        self.modifier = modifier

    def forward(self, target: EditTarget) -> AddedState:
        _require_modifier(self.modifier)
        captured = AddedState(previous_selection=target.selection)
        self.replay(target, captured)
        return captured

    def inverse(self, target: EditTarget, captured: AddedState) -> None:
        if not target.modifiers or target.modifiers[-1] != self.modifier:
            raise InvalidActionError("Cannot undo add: last modifier does not match")
        target.modifiers.pop()
        target.selection = captured.previous_selection

    def replay(self, target: EditTarget, captured: AddedState) -> None:
        target.modifiers.append(self.modifier)
        target.selection = (len(target.modifiers) - 1, self.modifier)

    def describe(self) -> str:
        return f"Add {self.modifier.display_name}"


class ModifierRemoved(Action):
    """
    Remove the modifier at index.

    A selection of the removed modifier is cleared; a selection further down
    the list is shifted so it keeps pointing at the same modifier.
    """

    def __init__(self, index: int):
        self.index = index

    def forward(self, target: EditTarget) -> RemovedState:
        _require_index(target, self.index)
        captured = RemovedState(
            removed=target.modifiers[self.index],
            previous_selection=target.selection,
        )
        self.replay(target, captured)
        return captured

    def inverse(self, target: EditTarget, captured: RemovedState) -> None:
        if not (0 <= self.index <= len(target.modifiers)):
            raise InvalidActionError(f"Cannot undo remove at index {self.index}")
        target.modifiers.insert(self.index, captured.removed)
        target.selection = captured.previous_selection

    def replay(self, target: EditTarget, captured: RemovedState) -> None:
        _require_index(target, self.index)
        del target.modifiers[self.index]

        if target.selection is not None:
            selected_index, working_copy = target.selection
            if selected_index == self.index:
                target.selection = None
            elif selected_index > self.index:
                target.selection = (selected_index - 1, working_copy)

    def describe(self) -> str:
        return f"Remove modifier {self.index}"


class ModifierOptionsApplied(Action):
    """Write the selected modifier's working copy into the chain."""

    def forward(self, target: EditTarget) -> OptionsAppliedState:
        if target.selection is None:
            raise InvalidActionError("Cannot apply options: no modifier selected")

        index, working_copy = target.selection
        _require_index(target, index)

        captured = OptionsAppliedState(
            index=index,
            previous=target.modifiers[index],
            applied=working_copy,
            previous_selection=target.selection,
        )
        target.modifiers[index] = working_copy
        return captured

    def inverse(self, target: EditTarget, captured: OptionsAppliedState) -> None:
        _require_index(target, captured.index)
        target.modifiers[captured.index] = captured.previous
        target.selection = captured.previous_selection

    def replay(self, target: EditTarget, captured: OptionsAppliedState) -> None:
        _require_index(target, captured.index)
        target.modifiers[captured.index] = captured.applied
        target.selection = (captured.index, captured.applied)

    def describe(self) -> str:
        return "Apply modifier options"


class ModifierSelected(Action):
    """
    Toggle selection of the modifier at index.

    Selecting the already selected index clears the selection; otherwise the
    selection becomes (index, modifier) with modifier as the working copy.
    """

    changes_modifiers: ClassVar[bool] = False

    def __init__(self, index: int, modifier: Modifier):
        self.index = index
        self.modifier = modifier

    def forward(self, target: EditTarget) -> SelectedState:
        _require_index(target, self.index)
        _require_modifier(self.modifier)

        previous = target.selection
        if previous is not None and previous[0] == self.index:
            new_selection: Selection = None
        else:
            new_selection = (self.index, self.modifier)

        captured = SelectedState(previous_selection=previous, new_selection=new_selection)
        self.replay(target, captured)
        return captured

    def inverse(self, target: EditTarget, captured: SelectedState) -> None:
        target.selection = captured.previous_selection

    def replay(self, target: EditTarget, captured: SelectedState) -> None:
        target.selection = captured.new_selection

    def describe(self) -> str:
        return f"Select modifier {self.index}"
