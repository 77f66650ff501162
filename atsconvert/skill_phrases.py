"""
Skill-phrase reassembly for Skills sections.

Extracted resume text often breaks one skill across several comma or bullet
separated tokens ("Data * Management * Analysis"). The matcher walks the
tokens left to right and glues them back together while the running phrase
is still a prefix of a known skill.

Greedy, no lookahead: a token run that is itself a complete phrase is
emitted immediately, even if a longer phrase would also have matched.
Pure Python, no I/O.
"""
from __future__ import annotations

import re
from typing import Iterable, List

CANONICAL_SKILL_PHRASES = frozenset({
    "Strategic Planning",
    "Finance Acumen",
    "Market Research",
    "Data Management & Analysis",
    "Sales",
    "Negotiation",
    "Relationship Building",
    "Networking",
    "Project Management",
    "Communication",
})

# Bullet and comma delimiters are split in a single pass.
_SKILL_SPLIT = re.compile(r"\*\s*|\s*,\s*")
_DROP = {"", "&"}


def split_skill_fragments(line: str) -> List[str]:
    """Split a Skills line into candidate fragments, dropping blanks and bare '&'."""
    if not line:
        return []
    parts = [p.strip() for p in _SKILL_SPLIT.split(line)]
    return [p for p in parts if p not in _DROP]


def match_skill_phrases(fragments: Iterable[str], phrases: Iterable[str] = CANONICAL_SKILL_PHRASES) -> List[str]:
    """Reassemble fragments into phrases using greedy prefix accumulation.

    - exact (case-insensitive) match of the accumulator flushes it
    - an accumulator that no phrase continues (``phrase + " "``) flushes as-is
    - otherwise keep accumulating
    Whatever is left at the end is flushed as the last phrase.
    """
    known = [p.casefold() for p in phrases]
    out: List[str] = []
    acc = ""
    for frag in fragments:
        acc = f"{acc} {frag}" if acc else frag
        key = acc.casefold()
        if key in known:
            out.append(acc)
            acc = ""
        elif not any(p.startswith(key + " ") for p in known):
            out.append(acc)
            acc = ""
    if acc:
        out.append(acc)
    return out
