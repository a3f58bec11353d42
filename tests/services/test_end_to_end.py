"""End-to-end scenario: ingest a small corpus and resolve through the tiers."""
# pylint: disable=missing-function-docstring

import asyncio

from scripture_engine.adapters.sources import StaticTextSource
from scripture_engine.services.ingestion import PayloadFormat
from scripture_engine.services.providers import IngestedProvider
from scripture_engine.services.resolver import TieredResolver

CORPUS = "\n".join(
    [
        "Psalms 23:1 Jehovah is my shepherd; I shall not want.",
        "Psalms 23:2 He maketh me to lie down in green pastures;",
        "Psalms 23:3 He restoreth my soul:",
        "John 3:14 And as Moses lifted up the serpent in the wilderness,",
        "John 3:16 For God so loved the world,",
    ]
)


def _resolver() -> TieredResolver:
    empty = IngestedProvider("csv", StaticTextSource(None), PayloadFormat.DELIMITED)
    corpus = IngestedProvider("flat_file", StaticTextSource(CORPUS), PayloadFormat.LINES)
    return TieredResolver([empty, corpus])


def test_psalm_and_john_scenario():
    resolver = _resolver()

    async def _exercise():
        await resolver.load_all()
        passage = await resolver.resolve_passage("Ps", 23, "1-3")
        john = await resolver.resolve_passage("Jn", 3, "14,16")
        results = await resolver.resolve_search("shepherd", 10)
        return passage, john, results

    passage, john, results = asyncio.run(_exercise())
    assert passage is not None
    assert passage.book == "Psalms"
    assert [v.verse for v in passage.verses] == [1, 2, 3]
    assert passage.source == "flat_file"
    assert john is not None
    assert [v.verse for v in john.verses] == [14, 16]
    assert [v.reference for v in results] == ["Psalms 23:1"]

    stats = resolver.stats()
    assert (stats.total_verses, stats.total_books, stats.total_chapters) == (5, 2, 2)


def test_missing_chapter_misses_everywhere():
    resolver = _resolver()
    assert asyncio.run(resolver.resolve_passage("John", 4, "1")) is None
    assert resolver.reference_link("John", 4, "1").endswith("search=John%204%3A1&version=NIV")
