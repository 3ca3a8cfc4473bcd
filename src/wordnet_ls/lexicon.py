"""Lexical resolver backed by the wn library's WordNet database."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from wordnet_ls.exceptions import LexiconError
from wordnet_ls.models import PartOfSpeech, Relation, Sense
from wordnet_ls.relations import parse_relation_type

logger = logging.getLogger(__name__)


class LexicalResolver(Protocol):
    """What the session needs from a lexical database."""

    def senses_for(self, word: str) -> list[Sense]:
        """All senses of ``word``, in database order (possibly empty)."""
        ...

    def resolve(self, pos: PartOfSpeech, offset: str) -> Sense | None:
        """The sense keyed by (pos, offset), or None if there is none."""
        ...


class WnResolver:
    """Resolve words and synset keys through a ``wn.Wordnet``.

    The synset ID is used as the offset half of a sense key. Antonymy and
    other lexical relations live on the senses of a synset in WN-LMF; they
    are lifted to the synset so that every relation points at a synset key.
    """

    def __init__(self, wordnet) -> None:
        self._wordnet = wordnet

    @classmethod
    def open(
        cls, data_directory: str | Path, lexicon: str | None = None
    ) -> WnResolver:
        """Open the wn database stored under ``data_directory``."""
        import wn

        data_directory = Path(data_directory)
        if not data_directory.is_dir():
            raise LexiconError(f"WordNet directory not found: {data_directory}")

        wn.config.data_directory = data_directory
        try:
            wordnet = wn.Wordnet(lexicon=lexicon)
        except wn.Error as e:
            raise LexiconError(
                f"Cannot open WordNet in {data_directory}: {e}"
            ) from e
        logger.info(f"Opened WordNet in {data_directory} (lexicon={lexicon})")
        return cls(wordnet)

    def senses_for(self, word: str) -> list[Sense]:
        return [self._to_sense(ss) for ss in self._wordnet.synsets(word)]

    def resolve(self, pos: PartOfSpeech, offset: str) -> Sense | None:
        import wn

        try:
            synset = self._wordnet.synset(offset)
        except wn.Error as e:
            logger.debug(f"Cannot resolve {pos.value}:{offset}: {e}")
            return None
        sense = self._to_sense(synset)
        if sense.pos != pos:
            logger.debug(
                f"Synset {offset} has part of speech {sense.pos.value}, "
                f"expected {pos.value}"
            )
            return None
        return sense

    def _to_sense(self, synset) -> Sense:
        return Sense(
            pos=PartOfSpeech.from_code(synset.pos),
            offset=synset.id,
            definition=synset.definition() or "",
            lemmas=tuple(str(lemma) for lemma in synset.lemmas()),
            relations=tuple(self._relations(synset)),
        )

    def _relations(self, synset) -> list[Relation]:
        relations: list[Relation] = []
        for name, targets in synset.relations().items():
            kind = parse_relation_type(name)
            for target in targets:
                relations.append(_relation(kind, target))
        for sense in synset.senses():
            for name, targets in sense.relations().items():
                kind = parse_relation_type(name)
                for target in targets:
                    relations.append(_relation(kind, target.synset()))
        return relations


def _relation(kind, target_synset) -> Relation:
    return Relation(
        kind=kind,
        pos=PartOfSpeech.from_code(target_synset.pos),
        offset=target_synset.id,
    )
