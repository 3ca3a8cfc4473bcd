"""Render WordNet senses as editor-facing Markdown."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from pathlib import Path

from wordnet_ls.lexicon import LexicalResolver
from wordnet_ls.models import PartOfSpeech, Relation, RelationType, Sense

logger = logging.getLogger(__name__)

REFERENCE_PREFIX = "wordnet-ls-"


# ---------------------------------------------------------------------------
# Hover
# ---------------------------------------------------------------------------

def render_hover(
    word: str, senses: list[Sense], resolver: LexicalResolver
) -> str | None:
    """Definitions, synonyms and antonyms of ``word``, grouped by POS.

    Returns None when there is nothing to show.
    """
    blocks: list[str] = []

    for pos in PartOfSpeech:
        pos_senses = [ss for ss in senses if ss.pos == pos]
        if not pos_senses:
            continue

        definitions = "\n".join(
            f"{i}. {ss.definition}" for i, ss in enumerate(pos_senses, start=1)
        )
        blocks.append(f"**{word}** _{pos.label}_\n{definitions}")

        synonyms = _sorted_words(
            lemma for ss in pos_senses for lemma in ss.lemmas if lemma != word
        )
        if synonyms:
            blocks.append(f"**Synonyms**: {_join(synonyms)}")

        antonyms = _sorted_words(
            lemma
            for ss in pos_senses
            for rel in ss.with_relation(RelationType.ANTONYM)
            for lemma in _target_lemmas(resolver, rel)
            if lemma != word
        )
        if antonyms:
            blocks.append(f"**Antonyms**: {_join(antonyms)}")

    if not blocks:
        return None
    return "\n\n".join(blocks)


# ---------------------------------------------------------------------------
# Full reference
# ---------------------------------------------------------------------------

def render_reference(
    word: str, senses: list[Sense], resolver: LexicalResolver
) -> str:
    """Every sense of ``word`` with its synonyms and resolved relations."""
    parts = [f"# {word}\n"]

    for i, ss in enumerate(senses, start=1):
        synonyms = ", ".join(
            lemma for lemma in sorted(ss.lemmas) if lemma != word
        )

        related: dict[RelationType, set[str]] = defaultdict(set)
        for rel in ss.relations:
            related[rel.kind].update(_target_lemmas(resolver, rel))
        relation_lines = "".join(
            f"**{kind.value}**: {', '.join(sorted(words))}\n"
            for kind, words in sorted(related.items(), key=lambda kv: kv[0].value)
            if words
        )

        parts.append(
            f"\n{i}. _{ss.pos.label}_ {ss.definition}\n"
            f"**synonym**: {synonyms}\n"
            f"{relation_lines}"
        )

    return "".join(parts)


def reference_path(word: str, directory: str | Path) -> Path:
    """Deterministic location of the reference document for ``word``."""
    return Path(directory) / f"{REFERENCE_PREFIX}{word}.md"


def write_reference(
    word: str,
    senses: list[Sense],
    resolver: LexicalResolver,
    directory: str | Path,
) -> Path:
    """Write the reference document for ``word``, replacing any older one."""
    path = reference_path(word, directory)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_reference(word, senses, resolver), encoding="utf-8")
    logger.debug(f"Wrote reference for {word!r} to {path}")
    return path


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _target_lemmas(resolver: LexicalResolver, rel: Relation) -> tuple[str, ...]:
    target = resolver.resolve(rel.pos, rel.offset)
    if target is None:
        logger.debug(f"Unresolved {rel.kind.value} target {rel.offset}")
        return ()
    return target.lemmas


def _sorted_words(words: Iterable[str]) -> list[str]:
    return sorted(set(words))


def _join(words: list[str]) -> str:
    return ", ".join(w.replace("_", " ") for w in words)
