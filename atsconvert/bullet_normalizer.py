"""
Bullet & section normalizer for ATS plain-text output.

Line-oriented state machine over extracted resume text:
- every bullet-like glyph becomes a literal '*' (one global pass)
- section headings switch the mode (Skills / list sections / neutral)
- list sections get a canonical '* ' marker, Skills lines are re-split into
  one '* phrase' per skill, everything else loses its leading bullet

Rules are an ordered table of (predicate, action) pairs; the first rule whose
predicate holds and whose action returns lines wins. Headings always come
before mode-specific handling.

Deterministic, total over str input, no I/O. All state lives in one pass
object created per call.
"""
from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

from .skill_phrases import match_skill_phrases, split_skill_fragments

logger = logging.getLogger(__name__)

NORMALIZER_VERSION = "ats-bullets-1.0.0"

# Round/square bullets, triangular and hyphen bullets, bullet operator, '*'
BULLET_GLYPHS = "\u2022\u2023\u25e6\u2043\u2219\u25cf\u25cb\u25a0*"
_GLYPH_TABLE = str.maketrans({g: "*" for g in BULLET_GLYPHS})

_CATEGORY_HEADING = re.compile(r"^(?:Skills|Experience|Licenses & Certifications)$")
# Prefix match on the two headings; year / Present catch dated role and degree lines.
_TERMINATOR = re.compile(r"^(?:Education|Honors & Awards|.*Present|.*[0-9]{4}\Z)")
_BULLET_START = re.compile(r"^\s*\*")
_LEADING_BULLET = re.compile(r"^\s*\*\s*")


class SectionMode(str, Enum):
    NEUTRAL = "neutral"
    LIST = "list"
    SKILLS = "skills"


class _Pass:
    """Working state for one normalize() call."""

    def __init__(self) -> None:
        self.mode = SectionMode.NEUTRAL
        self.lineno = 0
        self.edits: Dict[str, int] = {
            "glyphs_replaced": 0,
            "section_headings": 0,
            "section_terminators": 0,
            "skills_lines_split": 0,
            "skill_phrases_emitted": 0,
            "bullets_canonicalized": 0,
            "bullets_stripped": 0,
            "unmatched_bullets": 0,
            "continuation_lines": 0,
        }
        self.sections: List[Dict[str, object]] = []

    def enter(self, mode: SectionMode) -> None:
        self.mode = mode
        self.sections.append({"line": self.lineno, "mode": mode.value})


Action = Callable[[_Pass, str], Optional[List[str]]]


class Rule(NamedTuple):
    name: str
    applies: Callable[[str, SectionMode], bool]
    action: Action


def _on_category_heading(p: _Pass, line: str) -> List[str]:
    p.enter(SectionMode.SKILLS if line == "Skills" else SectionMode.LIST)
    p.edits["section_headings"] += 1
    return [line, ""]


def _on_terminator(p: _Pass, line: str) -> List[str]:
    p.enter(SectionMode.NEUTRAL)
    p.edits["section_terminators"] += 1
    return [line]


def _on_skills_line(p: _Pass, line: str) -> Optional[List[str]]:
    fragments = split_skill_fragments(line)
    if len(fragments) < 2:
        return None
    phrases = match_skill_phrases(fragments)
    p.edits["skills_lines_split"] += 1
    p.edits["skill_phrases_emitted"] += len(phrases)
    return [f"* {ph}" for ph in phrases]


def _on_list_line(p: _Pass, line: str) -> List[str]:
    if not _BULLET_START.match(line):
        p.edits["continuation_lines"] += 1
        logger.debug("Continuation line %d: %s", p.lineno, line)
        return [line]
    normalized = _LEADING_BULLET.sub("* ", line, count=1)
    if normalized == line:
        p.edits["unmatched_bullets"] += 1
        logger.info("Unmatched bullet at line %d: %s", p.lineno, line)
    else:
        p.edits["bullets_canonicalized"] += 1
    return [normalized]


def _on_neutral_line(p: _Pass, line: str) -> List[str]:
    stripped = _LEADING_BULLET.sub("", line, count=1)
    if stripped != line:
        p.edits["bullets_stripped"] += 1
    return [stripped]


RULES: Tuple[Rule, ...] = (
    Rule("category_heading", lambda line, mode: bool(_CATEGORY_HEADING.match(line)), _on_category_heading),
    Rule("terminator_heading", lambda line, mode: bool(_TERMINATOR.match(line)), _on_terminator),
    Rule("skills_line", lambda line, mode: mode is SectionMode.SKILLS, _on_skills_line),
    Rule("list_line", lambda line, mode: mode is SectionMode.LIST, _on_list_line),
    Rule("neutral_line", lambda line, mode: True, _on_neutral_line),
)


def classify(line: str, mode: SectionMode = SectionMode.NEUTRAL) -> str:
    """Name of the first rule whose predicate holds for a trimmed line."""
    for rule in RULES:
        if rule.applies(line, mode):
            return rule.name
    return RULES[-1].name


def canonicalize_glyphs(text: str) -> str:
    return (text or "").translate(_GLYPH_TABLE)


def _run(raw_text: Optional[str]) -> Tuple[str, _Pass]:
    p = _Pass()
    text = raw_text or ""
    p.edits["glyphs_replaced"] = sum(1 for ch in text if ch in BULLET_GLYPHS and ch != "*")
    out: List[str] = []
    for idx, raw_line in enumerate(canonicalize_glyphs(text).split("\n"), start=1):
        p.lineno = idx
        line = raw_line.strip()
        for rule in RULES:
            if not rule.applies(line, p.mode):
                continue
            emitted = rule.action(p, line)
            if emitted is not None:
                out.extend(emitted)
                break
    return "\n".join(out), p


def normalize(raw_text: Optional[str]) -> str:
    """Normalize extracted resume text into ATS-friendly plain text. Never raises."""
    text, _ = _run(raw_text)
    return text


def normalize_with_audit(raw_text: Optional[str]) -> Tuple[str, Dict]:
    text, p = _run(raw_text)
    audit = {
        "normalizer": NORMALIZER_VERSION,
        "edits": dict(p.edits),
        "sections": list(p.sections),
    }
    return text, audit
