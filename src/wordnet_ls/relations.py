"""Relation type lookup for wordnet-ls."""

from __future__ import annotations

import logging

from wordnet_ls.models import RelationType

logger = logging.getLogger(__name__)

RELATION_TYPES: dict[str, RelationType] = {m.value: m for m in RelationType}

# Spellings seen in older WN-LMF exports and the OMW lexicons.
_ALIASES: dict[str, RelationType] = {
    "also_see": RelationType.ALSO,
    "see_also": RelationType.ALSO,
    "derivationally_related": RelationType.DERIVATION,
    "instance_of": RelationType.INSTANCE_HYPERNYM,
    "has_instance": RelationType.INSTANCE_HYPONYM,
    "similar_to": RelationType.SIMILAR,
}


def parse_relation_type(name: str) -> RelationType:
    """Map a relation name reported by the database onto RelationType.

    Names outside the closed enumeration collapse to ``RelationType.OTHER``.
    """
    normalized = name.strip().lower().replace("-", "_")
    kind = RELATION_TYPES.get(normalized) or _ALIASES.get(normalized)
    if kind is None:
        logger.debug(f"Unknown relation type {name!r}, using 'other'")
        return RelationType.OTHER
    return kind
