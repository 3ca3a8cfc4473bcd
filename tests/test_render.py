"""Tests for hover and full reference rendering."""

from conftest import FakeResolver, adj, antonym, noun, verb

from wordnet_ls import PartOfSpeech, Relation, RelationType, Sense
from wordnet_ls.render import (
    reference_path,
    render_hover,
    render_reference,
    write_reference,
)

LIGHT_HOVER = (
    "**light** _noun_\n"
    "1. electromagnetic radiation\n"
    "2. a source of illumination"
    "\n\n"
    "**Synonyms**: light source, visible light"
    "\n\n"
    "**Antonyms**: dark, darkness"
    "\n\n"
    "**light** _verb_\n"
    "1. make lighter or brighter"
    "\n\n"
    "**Synonyms**: illume"
    "\n\n"
    "**Antonyms**: darken"
    "\n\n"
    "**light** _adjective_\n"
    "1. of comparatively little physical weight"
    "\n\n"
    "**Antonyms**: heavy"
)


class TestHover:
    """Hover Markdown grouped by part of speech."""

    def test_full_hover(self, resolver):
        senses = resolver.senses_for("light")
        assert render_hover("light", senses, resolver) == LIGHT_HOVER

    def test_no_senses(self, resolver):
        assert render_hover("nothing", [], resolver) is None

    def test_idempotent(self, resolver):
        senses = resolver.senses_for("light")
        first = render_hover("light", senses, resolver)
        second = render_hover("light", senses, resolver)
        assert first == second

    def test_definitions_keep_resolver_order(self):
        senses = [
            noun("z", "zebra crossing", "walk"),
            noun("a", "a stroll", "walk"),
        ]
        text = render_hover("walk", senses, FakeResolver(senses))
        assert text.startswith("**walk** _noun_\n1. zebra crossing\n2. a stroll")

    def test_parts_of_speech_in_canonical_order(self):
        senses = [
            adj("a1", "not dark", "fair"),
            verb("v1", "to be fair", "fair"),
            noun("n1", "a market", "fair"),
        ]
        text = render_hover("fair", senses, FakeResolver(senses))
        headers = [line for line in text.splitlines() if line.startswith("**fair**")]
        assert headers == [
            "**fair** _noun_",
            "**fair** _verb_",
            "**fair** _adjective_",
        ]

    def test_adjective_satellite_label(self):
        senses = [Sense(PartOfSpeech.ADJECTIVE_SATELLITE, "s1", "tall and thin", ("lanky",))]
        text = render_hover("lanky", senses, FakeResolver(senses))
        assert text == "**lanky** _adjective satellite_\n1. tall and thin"

    def test_synonyms_exclude_word_deduplicate_and_sort(self):
        senses = [
            noun("n1", "first", "run", "tally", "score"),
            noun("n2", "second", "run", "score", "bunk"),
        ]
        text = render_hover("run", senses, FakeResolver(senses))
        assert "**Synonyms**: bunk, score, tally" in text
        synonyms = text.split("**Synonyms**: ")[1].split("\n")[0].split(", ")
        assert "run" not in synonyms

    def test_no_synonym_block_when_only_the_word(self):
        senses = [noun("n1", "a feline", "cat")]
        text = render_hover("cat", senses, FakeResolver(senses))
        assert "Synonyms" not in text
        assert text == "**cat** _noun_\n1. a feline"

    def test_underscores_rendered_as_spaces(self):
        senses = [noun("n1", "a dog", "dog", "domestic_dog")]
        text = render_hover("dog", senses, FakeResolver(senses))
        assert "**Synonyms**: domestic dog" in text

    def test_antonyms_deduplicated_across_senses(self):
        target = adj("cold", "low temperature", "cold", "chilly")
        senses = [
            adj("hot1", "high temperature", "hot",
                relations=[antonym(PartOfSpeech.ADJECTIVE, "cold")]),
            adj("hot2", "spicy", "hot",
                relations=[antonym(PartOfSpeech.ADJECTIVE, "cold")]),
        ]
        text = render_hover("hot", senses, FakeResolver(senses + [target]))
        assert text.endswith("**Antonyms**: chilly, cold")

    def test_antonyms_exclude_word(self):
        """A contronym lists itself among its antonym's lemmas."""
        split = adj("split", "separate", "cleave", "split")
        senses = [
            adj("adhere", "adhere", "cleave", "cling",
                relations=[antonym(PartOfSpeech.ADJECTIVE, "split")]),
        ]
        text = render_hover("cleave", senses, FakeResolver(senses + [split]))
        assert text.endswith("**Antonyms**: split")

    def test_unresolved_antonym_contributes_nothing(self):
        senses = [
            adj("hot1", "high temperature", "hot",
                relations=[antonym(PartOfSpeech.ADJECTIVE, "nowhere")]),
        ]
        text = render_hover("hot", senses, FakeResolver(senses))
        assert "Antonyms" not in text

    def test_non_antonym_relations_ignored(self):
        senses = [
            noun("n1", "a canine", "dog",
                 relations=[Relation(RelationType.HYPERNYM, PartOfSpeech.NOUN, "n2")]),
            noun("n2", "an animal", "animal"),
        ]
        resolver = FakeResolver(senses)
        text = render_hover("dog", senses[:1], resolver)
        assert text == "**dog** _noun_\n1. a canine"

    def test_no_stray_separators(self):
        senses = [verb("v1", "to go", "go")]
        text = render_hover("go", senses, FakeResolver(senses))
        assert not text.startswith("\n")
        assert not text.endswith("\n")
        assert "\n\n\n" not in text


class TestReference:
    """The go-to-definition reference document."""

    def test_full_reference(self, resolver):
        senses = resolver.senses_for("light")
        assert render_reference("light", senses, resolver) == (
            "# light\n"
            "\n1. _noun_ electromagnetic radiation\n"
            "**synonym**: visible_light\n"
            "**antonym**: dark, darkness\n"
            "\n2. _noun_ a source of illumination\n"
            "**synonym**: light_source\n"
            "\n3. _verb_ make lighter or brighter\n"
            "**synonym**: illume\n"
            "**antonym**: darken\n"
            "**hypernym**: alter, change\n"
            "\n4. _adjective_ of comparatively little physical weight\n"
            "**synonym**: \n"
            "**antonym**: heavy\n"
        )

    def test_noun_and_verb_with_antonyms(self):
        senses = [
            noun("open-n", "a clearing", "open", "clearing",
                 relations=[antonym(PartOfSpeech.NOUN, "closed-n")]),
            verb("open-v", "cause to open", "open", "unfold",
                 relations=[antonym(PartOfSpeech.VERB, "shut-v"),
                            antonym(PartOfSpeech.VERB, "shut-v")]),
        ]
        targets = [
            noun("closed-n", "a shut state", "closure"),
            verb("shut-v", "move to a closed position", "shut", "close"),
        ]
        text = render_reference("open", senses, FakeResolver(senses + targets))
        assert text == (
            "# open\n"
            "\n1. _noun_ a clearing\n"
            "**synonym**: clearing\n"
            "**antonym**: closure\n"
            "\n2. _verb_ cause to open\n"
            "**synonym**: unfold\n"
            "**antonym**: close, shut\n"
        )

    def test_relation_kinds_sorted_alphabetically(self):
        senses = [
            noun("dog", "a canine", "dog", relations=[
                Relation(RelationType.MERO_PART, PartOfSpeech.NOUN, "tail"),
                Relation(RelationType.HYPERNYM, PartOfSpeech.NOUN, "canine"),
                Relation(RelationType.HOLO_MEMBER, PartOfSpeech.NOUN, "pack"),
            ]),
            noun("tail", "a tail", "tail"),
            noun("canine", "a canid", "canine", "canid"),
            noun("pack", "a group of dogs", "pack"),
        ]
        text = render_reference("dog", senses[:1], FakeResolver(senses))
        relation_lines = text.splitlines()[4:]
        assert relation_lines == [
            "**holo_member**: pack",
            "**hypernym**: canid, canine",
            "**mero_part**: tail",
        ]

    def test_unresolvable_relation_targets_skipped(self):
        senses = [
            noun("dog", "a canine", "dog", relations=[
                Relation(RelationType.HYPERNYM, PartOfSpeech.NOUN, "missing"),
            ]),
        ]
        text = render_reference("dog", senses, FakeResolver(senses))
        assert text == "# dog\n\n1. _noun_ a canine\n**synonym**: \n"

    def test_no_senses(self, resolver):
        assert render_reference("zzz", [], resolver) == "# zzz\n"


class TestWriteReference:
    """Persisting the reference document."""

    def test_path_is_deterministic(self, tmp_path):
        assert reference_path("light", tmp_path) == tmp_path / "wordnet-ls-light.md"
        assert reference_path("light", tmp_path) == reference_path("light", str(tmp_path))

    def test_writes_utf8_document(self, resolver, tmp_path):
        senses = resolver.senses_for("light")
        path = write_reference("light", senses, resolver, tmp_path)
        assert path == tmp_path / "wordnet-ls-light.md"
        assert path.read_text(encoding="utf-8") == render_reference(
            "light", senses, resolver
        )

    def test_overwrites_previous_document(self, resolver, tmp_path):
        path = reference_path("light", tmp_path)
        path.write_text("stale content that is much longer than needed\n" * 50)
        senses = resolver.senses_for("dark")
        write_reference("light", senses, resolver, tmp_path)
        assert "stale" not in path.read_text(encoding="utf-8")

    def test_repeated_writes_identical(self, resolver, tmp_path):
        senses = resolver.senses_for("light")
        path = write_reference("light", senses, resolver, tmp_path)
        first = path.read_bytes()
        write_reference("light", senses, resolver, tmp_path)
        assert path.read_bytes() == first

    def test_creates_missing_directory(self, resolver, tmp_path):
        target = tmp_path / "a" / "b"
        path = write_reference("dark", resolver.senses_for("dark"), resolver, target)
        assert path.exists()
