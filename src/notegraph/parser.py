"""WikiLink, markdown-link, tag, and YAML-frontmatter extraction.

Turns raw note content into the per-note figures the link graph works with:
tags, outgoing link references, word and character counts.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path, PurePosixPath
from typing import Any
from urllib.parse import unquote

import yaml

from notegraph.note import Note, normalize_name
from notegraph.tags import normalize_tag

logger = logging.getLogger(__name__)

# [[Target]], [[Target|Alias]] or [[Target#Heading]]
_WIKILINK_RE = re.compile(r"\[\[([^\]|#]+)(?:[|#][^\]]*)?\]\]")
# [text](target.md) -- only local targets are kept
_MDLINK_RE = re.compile(r"(?<!!)\[[^\]]*\]\(<?([^)\s>]+)>?(?:\s+\"[^\"]*\")?\)")
# Inline #tags (not inside code-spans or URLs)
_TAG_RE = re.compile(r"(?<![`\w/#])#([\w/-]+)")
# YAML front-matter block
_FRONTMATTER_RE = re.compile(r"^---[ \t]*\n(?:(.*?)\n)?---[ \t]*(?:\n|$)", re.DOTALL)
_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Split YAML front-matter from body text.

    Returns ``(metadata_dict, body)``; ``metadata_dict`` is empty when there
    is no front-matter block or when it does not hold a YAML mapping.
    """
    match = _FRONTMATTER_RE.match(content)
    if not match:
        return {}, content
    try:
        meta = yaml.safe_load(match.group(1) or "") or {}
    except yaml.YAMLError:
        logger.warning("Ignoring malformed front-matter block")
        meta = {}
    if not isinstance(meta, dict):
        meta = {}
    return meta, content[match.end() :]


def _link_target(raw: str) -> str:
    """Convert a link target to a note name (strip folders and extension)."""
    target = raw.strip()
    if target.endswith(".md"):
        target = PurePosixPath(target).stem
    elif "/" in target:
        target = PurePosixPath(target).name
    return normalize_name(target)


def _wikilink_matches(text: str) -> list[tuple[int, str]]:
    found = []
    for m in _WIKILINK_RE.finditer(text):
        target = _link_target(m.group(1))
        if target:
            found.append((m.start(), target))
    return found


def _mdlink_matches(text: str) -> list[tuple[int, str]]:
    found = []
    for m in _MDLINK_RE.finditer(text):
        raw = m.group(1)
        if raw.startswith("#") or _SCHEME_RE.match(raw):
            continue
        path = unquote(raw.split("#", 1)[0])
        suffix = PurePosixPath(path).suffix
        if suffix and suffix != ".md":
            continue
        target = normalize_name(PurePosixPath(path).stem)
        if target:
            found.append((m.start(), target))
    return found


def parse_wikilinks(text: str) -> list[str]:
    """Return all ``[[WikiLink]]`` targets found in *text*, in order.

    Duplicates are kept: every occurrence is its own link reference.
    """
    return [target for _, target in _wikilink_matches(text)]


def parse_markdown_links(text: str) -> list[str]:
    """Return the note names of local ``[text](note.md)`` links, in order."""
    return [target for _, target in _mdlink_matches(text)]


def parse_links(text: str) -> list[str]:
    """Return wiki- and markdown-link targets in document order."""
    found = _wikilink_matches(text) + _mdlink_matches(text)
    found.sort(key=lambda item: item[0])
    return [target for _, target in found]


def parse_tags(text: str) -> list[str]:
    """Return all ``#tag`` values found in *text* (de-duped, ordered)."""
    seen: set[str] = set()
    result: list[str] = []
    for m in _TAG_RE.finditer(text):
        tag = m.group(1)
        if tag not in seen:
            seen.add(tag)
            result.append(tag)
    return result


def count_words(text: str) -> int:
    """Count whitespace-separated words."""
    return len(text.split())


def _frontmatter_tags(frontmatter: dict[str, Any]) -> list[str]:
    fm_tags = frontmatter.get("tags") or []
    if isinstance(fm_tags, str):
        fm_tags = fm_tags.split(",")
    elif not isinstance(fm_tags, list):
        fm_tags = [fm_tags]
    tags = (normalize_tag(str(t)) for t in fm_tags if t is not None)
    return [t for t in tags if t]


def extract_note(name: str, path: Path | None, content: str) -> Note:
    """Build a :class:`Note` from raw markdown *content*."""
    frontmatter, body = parse_frontmatter(content)
    all_tags = _frontmatter_tags(frontmatter) + parse_tags(body)
    return Note(
        name=name,
        path=path,
        word_count=count_words(body),
        char_count=len(body),
        tags=frozenset(all_tags),
        links=tuple(parse_links(body)),
    )


def parse_note(path: Path) -> Note:
    """Read a ``.md`` file and return a fully-populated :class:`Note`."""
    content = path.read_text(encoding="utf-8")
    return extract_note(path.stem, path, content)
