"""Tests for raw word record normalization."""
from __future__ import annotations

from vocab_stages.models import Derivative, NormalizedWord
from vocab_stages.parsers.word_normalizer import (
    normalize_word,
    normalize_words,
    parse_derivative_field,
    parse_list_field,
)


class TestParseListField:
    def test_delimited_string(self):
        assert parse_list_field("happy, glad; joyful / cheerful") == [
            "happy", "glad", "joyful", "cheerful",
        ]

    def test_list_of_strings(self):
        assert parse_list_field(["happy", " glad ", ""]) == ["happy", "glad"]

    def test_list_of_objects(self):
        assert parse_list_field([{"word": "happy"}, {"term": "glad"}, {"meaning": "x"}]) == [
            "happy", "glad",
        ]

    def test_empty_and_malformed(self):
        assert parse_list_field(None) == []
        assert parse_list_field("") == []
        assert parse_list_field(42) == []
        assert parse_list_field({"word": "happy"}) == []


class TestParseDerivativeField:
    def test_objects(self):
        result = parse_derivative_field([{"word": "happiness", "meaning": "행복"}])
        assert result == [Derivative("happiness", "행복")]

    def test_term_key(self):
        result = parse_derivative_field([{"term": "happily", "meaning": "행복하게"}])
        assert result == [Derivative("happily", "행복하게")]

    def test_parenthesized_string(self):
        result = parse_derivative_field("happiness (행복), happily (행복하게)")
        assert result == [Derivative("happiness", "행복"), Derivative("happily", "행복하게")]

    def test_colon_string(self):
        assert parse_derivative_field(["happiness: 행복"]) == [Derivative("happiness", "행복")]

    def test_comma_inside_gloss(self):
        result = parse_derivative_field("resilient (회복력 있는, 탄력 있는); resilience: 회복력")
        assert result == [
            Derivative("resilient", "회복력 있는, 탄력 있는"),
            Derivative("resilience", "회복력"),
        ]

    def test_bare_word_has_empty_meaning(self):
        assert parse_derivative_field("happiness") == [Derivative("happiness", "")]

    def test_entries_without_word_dropped(self):
        result = parse_derivative_field([{"meaning": "행복"}, None, 3, {"word": "joy"}])
        assert result == [Derivative("joy", "")]

    def test_order_preserved(self):
        result = parse_derivative_field([{"word": "b"}, {"word": "a"}, {"word": "c"}])
        assert [d.word for d in result] == ["b", "a", "c"]


class TestNormalizeWord:
    def test_canonical_record(self):
        word = normalize_word({
            "id": "w1",
            "word": "happy",
            "meaning": "행복한",
            "example": "I am happy.",
            "synonyms": ["glad"],
            "antonyms": "sad",
            "derivatives": [{"word": "happiness", "meaning": "행복"}],
        })
        assert word == NormalizedWord(
            id="w1",
            term="happy",
            meaning="행복한",
            translation="",
            example="I am happy.",
            derivatives=[Derivative("happiness", "행복")],
            synonyms=["glad"],
            antonyms=["sad"],
        )

    def test_alternate_keys(self):
        word = normalize_word({
            "term": "happy", "translation": "행복한", "example_sentence": "I am happy.",
        })
        assert word.term == "happy"
        assert word.meaning == "행복한"
        assert word.translation == "행복한"
        assert word.example == "I am happy."

    def test_id_defaults_to_term(self):
        assert normalize_word({"word": "happy"}).id == "happy"

    def test_numeric_id(self):
        assert normalize_word({"id": 7, "word": "happy"}).id == "7"

    def test_missing_headword_dropped(self):
        assert normalize_word({"meaning": "행복한"}) is None
        assert normalize_word({"word": "   "}) is None

    def test_non_dict_dropped(self):
        assert normalize_word("happy") is None
        assert normalize_word(None) is None

    def test_malformed_fields_degrade(self):
        word = normalize_word({"word": "happy", "meaning": ["x"], "synonyms": 5, "derivatives": 1})
        assert word.meaning == ""
        assert word.synonyms == []
        assert word.derivatives == []

    def test_idempotent(self, sample_words):
        for word in sample_words:
            assert normalize_word(word) == word


class TestNormalizeWords:
    def test_drops_unusable_records(self):
        words = normalize_words([{"word": "happy"}, {}, "junk", {"term": "sad"}])
        assert [w.term for w in words] == ["happy", "sad"]

    def test_empty_input(self):
        assert normalize_words(None) == []
        assert normalize_words([]) == []

    def test_sample_vocabulary(self, sample_words):
        assert len(sample_words) == 6
        diligent = next(w for w in sample_words if w.id == "w3")
        assert diligent.meaning == "성실한"
        assert diligent.synonyms == ["hardworking", "industrious"]
        assert diligent.derivatives == [Derivative("diligence", "근면")]
