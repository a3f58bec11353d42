"""Curated American Standard Version verses bundled with the engine."""

from __future__ import annotations

from typing import Tuple

from scripture_engine.core.models import Verse


def _v(book: str, chapter: int, verse: int, text: str) -> Verse:
    return Verse(book=book, chapter=chapter, verse=verse, text=text)


SAMPLE_VERSES: Tuple[Verse, ...] = (
    _v("Genesis", 1, 1, "In the beginning God created the heavens and the earth."),
    _v(
        "Genesis", 1, 2,
        "And the earth was waste and void; and darkness was upon the face of the deep: "
        "and the Spirit of God moved upon the face of the waters.",
    ),
    _v("Genesis", 1, 3, "And God said, Let there be light: and there was light."),
    _v(
        "Genesis", 1, 26,
        "And God said, Let us make man in our image, after our likeness: and let them "
        "have dominion over the fish of the sea, and over the birds of the heavens, and "
        "over the cattle, and over all the earth, and over every creeping thing that "
        "creepeth upon the earth.",
    ),
    _v(
        "Genesis", 1, 27,
        "And God created man in his own image, in the image of God created he him; male "
        "and female created he them.",
    ),
    _v("Psalms", 23, 1, "Jehovah is my shepherd; I shall not want."),
    _v(
        "Psalms", 23, 2,
        "He maketh me to lie down in green pastures; He leadeth me beside still waters.",
    ),
    _v(
        "Psalms", 23, 3,
        "He restoreth my soul: He guideth me in the paths of righteousness for his "
        "name's sake.",
    ),
    _v(
        "Psalms", 23, 4,
        "Yea, though I walk through the valley of the shadow of death, I will fear no "
        "evil; for thou art with me; Thy rod and thy staff, they comfort me.",
    ),
    _v("Matthew", 5, 3, "Blessed are the poor in spirit: for theirs is the kingdom of heaven."),
    _v("Matthew", 5, 4, "Blessed are they that mourn: for they shall be comforted."),
    _v(
        "Matthew", 5, 13,
        "Ye are the salt of the earth: but if the salt have lost its savor, wherewith "
        "shall it be salted? it is thenceforth good for nothing, but to be cast out and "
        "trodden under foot of men.",
    ),
    _v("Matthew", 5, 14, "Ye are the light of the world. A city set on a hill cannot be hid."),
    _v(
        "Matthew", 6, 9,
        "After this manner therefore pray ye. Our Father who art in heaven, Hallowed be "
        "thy name.",
    ),
    _v(
        "John", 1, 1,
        "In the beginning was the Word, and the Word was with God, and the Word was God.",
    ),
    _v(
        "John", 3, 16,
        "For God so loved the world, that he gave his only begotten Son, that whosoever "
        "believeth on him should not perish, but have eternal life.",
    ),
    _v(
        "John", 14, 6,
        "Jesus saith unto him, I am the way, and the truth, and the life: no one cometh "
        "unto the Father, but by me.",
    ),
    _v("Romans", 3, 23, "for all have sinned, and fall short of the glory of God;"),
    _v(
        "Romans", 6, 23,
        "For the wages of sin is death; but the free gift of God is eternal life in "
        "Christ Jesus our Lord.",
    ),
    _v(
        "Romans", 8, 28,
        "And we know that to them that love God all things work together for good, even "
        "to them that are called according to his purpose.",
    ),
    _v("Philippians", 4, 13, "I can do all things in him that strengtheneth me."),
    _v(
        "Philippians", 4, 19,
        "And my God shall supply every need of yours according to his riches in glory "
        "in Christ Jesus.",
    ),
)


__all__ = ["SAMPLE_VERSES"]
