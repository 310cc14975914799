"""Tests for the per-stage question generators."""
from __future__ import annotations

import random

import pytest

from vocab_stages.generators.common import (
    MASK,
    build_choice_options,
    mask_term,
    pick_distractors,
    remove_parenthetical_hints,
)
from vocab_stages.generators.derivative import flatten_derivatives, generate_derivative_questions
from vocab_stages.generators.fill_in import (
    generate_fill_in_meaning_questions,
    generate_fill_in_word_questions,
)
from vocab_stages.generators.meaning import generate_meaning_questions
from vocab_stages.generators.relation import MAX_CORRECT, MAX_OPTIONS, generate_relation_questions
from vocab_stages.generators.sentence import build_sentence_data, generate_sentence_questions
from vocab_stages.parsers.word_normalizer import normalize_words


def _by_id(words):
    return {w.id: w for w in words}


class TestCommon:
    def test_pick_distractors(self, rng):
        result = pick_distractors("a", ["a", "b", "c", "d", "b"], rng)
        assert sorted(result) == ["b", "c", "d"]

    def test_pick_distractors_too_few(self, rng):
        assert pick_distractors("a", ["a", "b", "c", "c"], rng) is None

    def test_build_choice_options(self, rng):
        options, index = build_choice_options("right", ["x", "y", "z"], rng)
        assert sorted(options) == ["right", "x", "y", "z"]
        assert options[index] == "right"

    def test_mask_whole_word_case_insensitive(self):
        masked, count = mask_term("Adapt now; we adapt.", "adapt")
        assert masked == f"{MASK} now; we {MASK}."
        assert count == 2

    def test_mask_inflected_form(self):
        masked, count = mask_term("They adapted fast.", "adapt")
        assert masked == f"They {MASK}ed fast."
        assert count == 1

    def test_mask_absent_term(self):
        assert mask_term("Nothing here.", "adapt") == ("Nothing here.", 0)

    def test_remove_parenthetical_hints(self):
        assert remove_parenthetical_hints("빠른 회복(resilience)을") == f"빠른 회복{MASK}을"


class TestMeaningQuestions:
    def test_one_question_per_word(self, sample_words, rng):
        questions = generate_meaning_questions(sample_words, rng=rng)
        assert len(questions) == 6
        words = _by_id(sample_words)
        for q in questions:
            assert q.question_type == "multiple-choice"
            assert len(q.options) == 4
            assert len(set(q.options)) == 4
            assert q.options[q.correct_answer] == words[q.word_id].meaning
            assert words[q.word_id].term in q.prompt

    def test_ids_unique_and_numbered(self, sample_words, rng):
        questions = generate_meaning_questions(sample_words, rng=rng)
        assert len({q.id for q in questions}) == len(questions)
        assert [q.number for q in questions] == list(range(1, len(questions) + 1))

    def test_limit(self, sample_words, rng):
        assert len(generate_meaning_questions(sample_words, limit=2, rng=rng)) == 2

    def test_too_few_distinct_meanings(self, rng):
        words = normalize_words([
            {"word": "a", "meaning": "같음"},
            {"word": "b", "meaning": "같음"},
            {"word": "c", "meaning": "다름"},
            {"word": "d", "meaning": "다름"},
        ])
        assert generate_meaning_questions(words, rng=rng) == []

    def test_empty(self, rng):
        assert generate_meaning_questions([], rng=rng) == []

    def test_seeded_rng_is_reproducible(self, sample_words):
        a = generate_meaning_questions(sample_words, rng=random.Random(5))
        b = generate_meaning_questions(sample_words, rng=random.Random(5))
        assert [(q.prompt, q.options, q.correct_answer) for q in a] == [
            (q.prompt, q.options, q.correct_answer) for q in b
        ]


class TestDerivativeQuestions:
    def test_flatten(self, sample_words):
        entries = flatten_derivatives(sample_words)
        assert [e.derivative for e in entries] == [
            "resilient", "abundance", "diligence", "fragility", "candor", "obscurity",
        ]
        assert entries[0].root == "resilience"

    def test_flatten_skips_missing_meaning(self):
        words = normalize_words([{"word": "happy", "derivatives": "happiness"}])
        assert flatten_derivatives(words) == []

    def test_questions(self, sample_words, rng):
        questions = generate_derivative_questions(sample_words, rng=rng)
        assert len(questions) == 6
        meanings = {e.derivative: e.meaning for e in flatten_derivatives(sample_words)}
        for q in questions:
            assert len(q.options) == 4
            assert q.options[q.correct_answer] == meanings[q.term]
            assert q.term in q.prompt

    def test_no_derivatives(self, plain_words, rng):
        assert generate_derivative_questions(plain_words, rng=rng) == []


class TestRelationQuestions:
    def test_answer_key_drawn_from_relation_set(self, sample_words, rng):
        questions = generate_relation_questions(sample_words, rng=rng)
        assert len(questions) == 6
        words = _by_id(sample_words)
        for q in questions:
            word = words[q.word_id]
            pool = word.synonyms if "synonyms" in q.prompt else word.antonyms
            assert q.question_type == "multi-select"
            assert q.correct_answer is None
            assert 1 <= len(q.correct_answers) <= MAX_CORRECT
            assert len(q.options) <= MAX_OPTIONS
            assert len(set(q.options)) == len(q.options)
            chosen = {q.options[i] for i in q.correct_answers}
            assert chosen <= set(pool)
            # every option from the relation set is marked correct
            for i, option in enumerate(q.options):
                assert (option in pool) == (i in q.correct_answers)
            assert word.term not in q.options

    def test_antonym_only_word(self, rng):
        words = normalize_words([
            {"word": "hot", "antonyms": ["cold", "chilly"]},
            {"word": "big"},
            {"word": "fast"},
        ])
        [q] = generate_relation_questions(words, rng=rng)
        assert "antonyms" in q.prompt
        assert {q.options[i] for i in q.correct_answers} == {"cold", "chilly"}
        assert set(q.options) == {"cold", "chilly", "big", "fast"}

    def test_no_relations(self, plain_words, rng):
        assert generate_relation_questions(plain_words, rng=rng) == []


class TestSentenceQuestions:
    def test_build_sentence_data(self, sample_words):
        word = _by_id(sample_words)["w1"]
        data = build_sentence_data(word)
        assert data.english == word.example
        assert data.masked_english == f"Her {MASK} helped her recover quickly."
        assert data.masked_translation == word.translation

    def test_term_not_in_example(self):
        [word] = normalize_words([{"word": "resilience", "example": "She bounced back."}])
        assert build_sentence_data(word) is None

    def test_questions(self, sample_words, rng):
        questions = generate_sentence_questions(sample_words, rng=rng)
        assert len(questions) == 6
        words = _by_id(sample_words)
        for q in questions:
            term = words[q.word_id].term
            assert q.question_type == "sentence"
            assert q.options[q.correct_answer] == term
            assert MASK in q.sentence_data.masked_english
            assert term.lower() not in q.sentence_data.masked_english.lower()

    def test_no_examples(self, plain_words, rng):
        assert generate_sentence_questions(plain_words, rng=rng) == []


class TestFillInQuestions:
    def test_word_direction(self, sample_words, rng):
        questions = generate_fill_in_word_questions(sample_words, rng=rng)
        words = _by_id(sample_words)
        assert len(questions) == 6
        for q in questions:
            assert q.question_type == "fill-in-word"
            assert q.options == []
            assert q.prompt == words[q.word_id].meaning
            assert q.correct_answer == words[q.word_id].term

    def test_meaning_direction(self, sample_words, rng):
        questions = generate_fill_in_meaning_questions(sample_words, limit=3, rng=rng)
        words = _by_id(sample_words)
        assert len(questions) == 3
        for q in questions:
            assert q.question_type == "fill-in-meaning"
            assert q.prompt == words[q.word_id].term
            assert q.correct_answer == words[q.word_id].meaning

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_limit(self, sample_words, rng, limit):
        assert generate_fill_in_word_questions(sample_words, limit=limit, rng=rng) == []
