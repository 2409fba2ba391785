"""Equipment slots and an inventory that items are dragged between."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import count
from typing import Optional, Union

SLOT_LABELS = (
    "Left Mouse Button",
    "Right Mouse Button",
    "Middle Mouse Button",
    "Space",
    '"1"',
    '"2"',
    '"3"',
)


@dataclass
class Slot:
    """An equipment slot that holds at most one item."""

    id: int
    label: str
    item: Optional[str] = None


@dataclass(frozen=True)
class Unfit:
    """Remove the item from a slot."""

    target_slot: int


@dataclass(frozen=True)
class Fit:
    """Put an inventory item into a slot."""

    target_slot: int
    item: str


@dataclass(frozen=True)
class Refit:
    """Move the item of one slot to another."""

    target_slot: int
    origin_slot: int


FittingCommand = Union[Unfit, Fit, Refit]


@dataclass
class Inventory:
    """Bought items plus the slots they can be fitted into."""

    items: list[str] = field(default_factory=list)
    slots: list[Slot] = field(default_factory=list)
    item_dragging: bool = False
    fit_command: Optional[FittingCommand] = None

    def __post_init__(self) -> None:
        if not self.slots:
            ids = count(1)
            self.slots = [Slot(next(ids), label) for label in SLOT_LABELS]

    def _slot(self, slot_id: int) -> Optional[Slot]:
        return next((slot for slot in self.slots if slot.id == slot_id), None)

    def buy(self, index: int) -> str:
        """Add the shop item with this index to the inventory and return its name."""
        item = f"Item {index}"
        self.items.append(item)
        return item

    def set_item(self, slot_id: int, item: Optional[str]) -> None:
        """Put an item into a slot (None empties it); unknown slots are ignored."""
        slot = self._slot(slot_id)
        if slot is not None:
            slot.item = item

    def item_in(self, slot_id: int) -> Optional[str]:
        """The item in a slot, or None if it is empty."""
        slot = self._slot(slot_id)
        if slot is None:
            raise KeyError(f"unknown slot {slot_id}")
        return slot.item

    def slot_dropped(self, slot_id: int, target: Optional[int]) -> FittingCommand:
        """Record that a slot's item was dropped on another slot, or outside any."""
        slot = self._slot(slot_id)
        if slot is None:
            raise KeyError(f"unknown slot {slot_id}")
        if slot.item is None:
            raise ValueError("an empty slot cannot be dragged")
        command: FittingCommand
        if target is not None:
            command = Refit(target_slot=target, origin_slot=slot_id)
        else:
            command = Unfit(target_slot=slot_id)
        self.fit_command = command
        return command

    def item_dropped(self, index: int, target: Optional[int]) -> Optional[FittingCommand]:
        """Record that an inventory item was dropped on a slot, or outside any."""
        item = self.items[index]
        self.item_dragging = False
        if target is None:
            return None
        command = Fit(target_slot=target, item=item)
        self.fit_command = command
        return command

    def apply(self, command: Optional[FittingCommand] = None) -> None:
        """Carry out a command; without one, carry out and clear the pending one."""
        if command is None:
            command, self.fit_command = self.fit_command, None
        if command is None:
            return
        if isinstance(command, Unfit):
            self.set_item(command.target_slot, None)
        elif isinstance(command, Fit):
            self.set_item(command.target_slot, command.item)
        elif isinstance(command, Refit):
            origin = self._slot(command.origin_slot)
            origin_item = origin.item if origin is not None else None
            self.set_item(command.target_slot, origin_item)
            self.set_item(command.origin_slot, None)
        else:
            raise TypeError(f"unknown fitting command {command!r}")