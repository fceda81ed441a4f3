"""Element Store.

Owns the positioned elements of one project and their stacking order.
Operations on an unknown id are silent no-ops: the canvas can race a
deletion and must never see an error for it.
"""

from collections.abc import Callable, Iterator, Mapping
from typing import Any

from ..core import get_logger
from ..core.id import new_element_id
from ..models.elements import ElementType, UIElement, create_element, unknown_fields

logger = get_logger(__name__)

# Identity and variant tag never change after creation
IMMUTABLE_FIELDS = frozenset({"id", "type"})


def _deep_merge(base: dict[str, Any], changes: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in changes.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ElementStore:
    """
    Insertion-ordered collection of elements keyed by id.

    Stored order is insertion order and is what gets serialized. Rendering
    order is derived from `z_index` only (see `sorted_by_layer`). Every
    mutation reports through `on_change` so the owning project can mark
    itself dirty.
    """

    def __init__(self, elements: list[UIElement], on_change: Callable[[], None]) -> None:
        self._elements = elements
        self._on_change = on_change
        self._selected_id: str | None = None

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[UIElement]:
        return iter(list(self._elements))

    def __contains__(self, element_id: object) -> bool:
        return self._index(element_id) is not None

    def _index(self, element_id: object) -> int | None:
        for i, element in enumerate(self._elements):
            if element.id == element_id:
                return i
        return None

    def get(self, element_id: str) -> UIElement | None:
        """Element with the given id, or None."""
        index = self._index(element_id)
        return self._elements[index] if index is not None else None

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    @property
    def selected(self) -> UIElement | None:
        if self._selected_id is None:
            return None
        return self.get(self._selected_id)

    def select(self, element_id: str | None) -> None:
        self._selected_id = element_id

    # ------------------------------------------------------------------
    # Collection edits
    # ------------------------------------------------------------------

    def add(self, element_type: ElementType | str) -> UIElement:
        """
        Create an element from the variant's default template.

        The new element is appended, selected, and the project marked dirty.

        Args:
            element_type: Variant tag (unknown tags produce a label)

        Returns:
            The created element
        """
        element = create_element(element_type, new_element_id())
        self._elements.append(element)
        self._selected_id = element.id
        self._on_change()
        logger.debug("element_added", id=element.id, type=element.type)
        return element

    def remove(self, element_id: str) -> None:
        index = self._index(element_id)
        if index is None:
            return
        del self._elements[index]
        if self._selected_id == element_id:
            self._selected_id = None
        self._on_change()
        logger.debug("element_removed", id=element_id)

    def update(self, element_id: str, **changes: Any) -> None:
        """
        Merge attributes into an element in place.

        Only the given fields change; nested style objects are merged key by
        key. `id` and `type` are ignored. Values are validated against the
        element's variant model, and references previously handed out by
        `add` or `get` see the new values.

        Args:
            element_id: Target element
            **changes: Attributes by Python field name

        Raises:
            ValueError: If a name is not a field of the variant
            pydantic.ValidationError: If a value is invalid for the variant
        """
        index = self._index(element_id)
        if index is None:
            return

        element = self._elements[index]
        unknown = unknown_fields(element, changes)
        if unknown:
            raise ValueError(f"Unknown {element.type} field(s): {', '.join(unknown)}")

        dropped = IMMUTABLE_FIELDS.intersection(changes)
        if dropped:
            logger.warning("immutable_fields_ignored", id=element_id, fields=sorted(dropped))
        patch = {k: v for k, v in changes.items() if k not in IMMUTABLE_FIELDS}

        validated = type(element).model_validate(_deep_merge(element.model_dump(), patch))
        for name in patch:
            setattr(element, name, getattr(validated, name))
        self._on_change()

    def move(self, element_id: str, x: int, y: int) -> None:
        self.update(element_id, x=x, y=y)

    def resize(self, element_id: str, width: int, height: int) -> None:
        self.update(element_id, width=width, height=height)

    # ------------------------------------------------------------------
    # Layer ordering
    # ------------------------------------------------------------------

    def _max_z(self) -> int:
        return max([e.z_index for e in self._elements] + [0])

    def _min_z(self) -> int:
        return min([e.z_index for e in self._elements] + [0])

    def bring_to_front(self, element_id: str) -> None:
        """Place the element strictly above every other element."""
        element = self.get(element_id)
        if element is None:
            return
        element.z_index = self._max_z() + 1
        self._on_change()

    def send_to_back(self, element_id: str) -> None:
        """Place the element strictly below every other element."""
        element = self.get(element_id)
        if element is None:
            return
        element.z_index = self._min_z() - 1
        self._on_change()

    def move_layer_up(self, element_id: str) -> None:
        """
        Move one step up by swapping with the nearest element above.

        When nothing is above, the element's own z-index is incremented.
        Only the one or two elements involved change.
        """
        element = self.get(element_id)
        if element is None:
            return

        current = element.z_index
        above = [e for e in self._elements if e.z_index > current]
        if not above:
            element.z_index = current + 1
        else:
            closest = min(above, key=lambda e: e.z_index)
            element.z_index, closest.z_index = closest.z_index, current
        self._on_change()

    def move_layer_down(self, element_id: str) -> None:
        """Mirror of `move_layer_up`."""
        element = self.get(element_id)
        if element is None:
            return

        current = element.z_index
        below = [e for e in self._elements if e.z_index < current]
        if not below:
            element.z_index = current - 1
        else:
            closest = max(below, key=lambda e: e.z_index)
            element.z_index, closest.z_index = closest.z_index, current
        self._on_change()

    def sorted_by_layer(self) -> list[UIElement]:
        """Elements topmost first; ties keep insertion order."""
        return sorted(self._elements, key=lambda e: -e.z_index)
