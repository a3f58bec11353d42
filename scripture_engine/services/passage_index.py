"""Immutable (book, chapter) -> verses lookup built from ingested records."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Tuple

from scripture_engine.core.logging import get_logger
from scripture_engine.core.models import Verse
from scripture_engine.utils.books import canonical_sort_key

logger = get_logger(__name__)

ChapterKey = Tuple[str, int]


class PassageIndex:
    """Verses grouped by ``(book, chapter)`` in ascending verse order.

    Instances are never mutated after construction; providers publish a new
    index by swapping the reference.
    """

    __slots__ = ("_chapters", "_books")

    def __init__(self, chapters: Dict[ChapterKey, Tuple[Verse, ...]] | None = None) -> None:
        self._chapters: Dict[ChapterKey, Tuple[Verse, ...]] = dict(chapters or {})
        self._books: Tuple[str, ...] = tuple(
            sorted({book for book, _ in self._chapters}, key=canonical_sort_key)
        )

    @classmethod
    def build(cls, verses: Iterable[Verse]) -> "PassageIndex":
        """Group ``verses``; the first record for a (book, chapter, verse) wins."""
        buckets: Dict[ChapterKey, Dict[int, Verse]] = {}
        duplicates = 0
        for verse in verses:
            bucket = buckets.setdefault((verse.book, verse.chapter), {})
            if verse.verse in bucket:
                duplicates += 1
                logger.debug("Dropping duplicate verse %s", verse.reference)
                continue
            bucket[verse.verse] = verse
        if duplicates:
            logger.warning("Dropped %d duplicate verse records during indexing", duplicates)
        chapters = {
            key: tuple(bucket[number] for number in sorted(bucket))
            for key, bucket in buckets.items()
        }
        return cls(chapters)

    def chapter(self, book: str, chapter: int) -> Tuple[Verse, ...]:
        """Verses of one chapter, ascending; empty when absent."""
        return self._chapters.get((book, chapter), ())

    def chapters(self, book: str) -> List[int]:
        """Chapter numbers present for ``book``, ascending."""
        return sorted(ch for name, ch in self._chapters if name == book)

    def books(self) -> Tuple[str, ...]:
        """Book names present, in canonical order."""
        return self._books

    def chapter_keys(self) -> List[ChapterKey]:
        """All (book, chapter) keys in canonical order."""
        return sorted(self._chapters, key=lambda key: (canonical_sort_key(key[0]), key[1]))

    def iter_verses(self) -> Iterator[Verse]:
        """Every verse: canonical book rank, then chapter, then verse."""
        for key in self.chapter_keys():
            yield from self._chapters[key]

    def is_empty(self) -> bool:
        return not self._chapters

    def __len__(self) -> int:
        return sum(len(verses) for verses in self._chapters.values())

    def __contains__(self, key: object) -> bool:
        return key in self._chapters


EMPTY_INDEX = PassageIndex()


__all__ = ["EMPTY_INDEX", "ChapterKey", "PassageIndex"]
