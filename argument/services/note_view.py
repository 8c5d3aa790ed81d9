"""
Note View.

Pure operations over an in-memory collection of notes: recency ordering,
search filtering, insertion and removal. None of them mutate their input;
each returns a fresh list.
"""

from collections.abc import Iterable, Sequence

from argument.models.note import Note


def order_by_recency(notes: Iterable[Note]) -> list[Note]:
    """
    Sort notes by modified_at, newest first.

    Equal timestamps fall back to ascending id.
    """
    by_id = sorted(notes, key=lambda note: note.id)
    return sorted(by_id, key=lambda note: note.modified_at, reverse=True)


def matches(note: Note, term: str) -> bool:
    """Case-insensitive containment of term in title or content."""
    needle = term.casefold()
    return needle in note.title.casefold() or needle in (note.content or "").casefold()


def filter_notes(notes: Sequence[Note], term: str) -> list[Note]:
    """
    Keep notes whose title or content contains ``term``.

    An empty term returns every note in the given order. Image bytes are
    never inspected, so an image note matches on its title only.
    """
    if not term:
        return list(notes)
    return [note for note in notes if matches(note, term)]


def remove_notes(notes: Sequence[Note], target_ids: Iterable[str]) -> list[Note]:
    """Drop notes whose id is in ``target_ids``; unknown ids are ignored."""
    targets = set(target_ids)
    return [note for note in notes if note.id not in targets]


def add_note(notes: Sequence[Note], note: Note) -> list[Note]:
    """Return a new collection with ``note`` appended."""
    return [*notes, note]
