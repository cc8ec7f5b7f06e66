from __future__ import annotations

from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar

from .formatting import phone_string
from .models import Address, Phone

T = TypeVar("T")

NoteItem = Tuple[str, str]


def _item_label(item: Any) -> str:
    return item.label


def extract(
    labels: Iterable[str],
    items: Sequence[T],
    case_insensitive: bool,
    label_of: Callable[[T], str] = _item_label,
    project: Optional[Callable[[T], Any]] = None,
) -> Tuple[Any, List[T]]:
    """
    Find the first item whose label is in ``labels`` and split it off.

    Returns ``(found, remainder)`` where ``remainder`` is a new list holding
    every other item in its original order. ``found`` is ``None`` when
    nothing matches, in which case the remainder equals ``items``. When
    ``project`` is given the match is passed through it before returning.
    """
    if case_insensitive:
        wanted = {label.lower() for label in labels}
    else:
        wanted = set(labels)

    for index, item in enumerate(items):
        label = label_of(item)
        if case_insensitive:
            label = label.lower()
        if label in wanted:
            remainder = list(items[:index]) + list(items[index + 1 :])
            return (project(item) if project else item), remainder
    return None, list(items)


def extract_phone(
    labels: Iterable[str], phones: Sequence[Phone]
) -> Tuple[Optional[str], List[Phone]]:
    return extract(labels, phones, case_insensitive=True, project=phone_string)


def extract_address(
    labels: Iterable[str], addresses: Sequence[Address]
) -> Tuple[Optional[Address], List[Address]]:
    return extract(labels, addresses, case_insensitive=True)


def _note_label(item: NoteItem) -> str:
    return item[0]


def _note_text(item: NoteItem) -> str:
    return item[1]


def extract_note(
    labels: Iterable[str], notes: Sequence[NoteItem]
) -> Tuple[Optional[str], List[NoteItem]]:
    # Note labels keep their historical capitalisations, so match exactly.
    return extract(labels, notes, case_insensitive=False, label_of=_note_label, project=_note_text)
