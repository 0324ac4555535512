from enum import StrEnum

MAX_SELECTED = 2


class SelectionState(StrEnum):
    EMPTY = "empty"
    ONE_SELECTED = "one_selected"
    TWO_SELECTED = "two_selected"


class CompareSelector:
    """Up to two version numbers picked for a diff, in the order they were added.

    Picking a third evicts the one added first.
    """

    def __init__(self):
        self._selected: list[int] = []

    def toggle(self, version_number: int) -> None:
        if version_number in self._selected:
            self._selected.remove(version_number)
        elif len(self._selected) < MAX_SELECTED:
            self._selected.append(version_number)
        else:
            self._selected = [*self._selected[1:], version_number]

    def clear(self) -> None:
        self._selected = []

    def resolve_ordered_pair(self) -> tuple[int, int] | None:
        if len(self._selected) != MAX_SELECTED:
            return None
        lower, higher = sorted(self._selected)
        return lower, higher

    @property
    def selected(self) -> tuple[int, ...]:
        return tuple(self._selected)

    @property
    def state(self) -> SelectionState:
        return (
            SelectionState.EMPTY,
            SelectionState.ONE_SELECTED,
            SelectionState.TWO_SELECTED,
        )[len(self._selected)]

    def __contains__(self, version_number: int) -> bool:
        return version_number in self._selected

    def __len__(self) -> int:
        return len(self._selected)
