"""
Tests for learnkit.normalize

Test Coverage:
- decode_entities() / strip_html(): entity and markup removal
- clean_line() / clean_block(): marker stripping and whitespace cleanup
- sanitize_pairs(): cleaning and renumbering externally produced pairs
- dedupe_transcript(): ASR repeat collapsing
- clean_math_output(): LaTeX cleanup
"""
import pytest

from learnkit.normalize import (
    as_text,
    clean_block,
    clean_line,
    clean_math_output,
    decode_entities,
    dedupe_transcript,
    sanitize_pairs,
    strip_html,
)


class TestEntitiesAndMarkup:
    def test_decode_entities_replaces_known_entities(self):
        raw = "Tom &amp; Jerry &LT;3 &quot;hi&quot; it&#39;s&nbsp;ok"
        assert decode_entities(raw) == "Tom & Jerry <3 \"hi\" it's ok"

    def test_decode_entities_is_single_pass(self):
        assert decode_entities("&amp;lt;") == "&lt;"

    def test_strip_html_removes_tags(self):
        assert strip_html("<b>bold</b> <br/>text") == "bold text"

    def test_strip_html_does_not_span_lines(self):
        assert strip_html("a < b\nc > d") == "a < b\nc > d"

    def test_strip_html_keeps_comparisons(self):
        assert strip_html("x < y and y > z") == "x < y and y > z"

    def test_escaped_comparisons_survive_cleaning(self):
        assert clean_line("Is x &lt; y and y &gt; z?") == "Is x < y and y > z?"

    def test_escaped_tags_are_removed(self):
        assert clean_line("&lt;b&gt;Bold&lt;/b&gt; text") == "Bold text"

    def test_non_string_input_is_coerced(self):
        assert as_text(None) == ""
        assert clean_line(None) == ""
        assert clean_line(42) == "42"
        assert clean_block(None) == ""


class TestCleanLine:
    def test_strips_quote_bullet_and_ordinal(self):
        assert clean_line("> > - 1. What is <i>photosynthesis</i>?  ") == "What is photosynthesis?"

    def test_strips_unicode_bullet(self):
        assert clean_line("• Item one") == "Item one"

    def test_strips_trailing_colon(self):
        assert clean_line("3) Name the planet:") == "Name the planet"

    def test_collapses_spaces_and_trailing_arrows(self):
        assert clean_line("Too   many  spaces -->") == "Too many spaces"

    def test_keeps_negative_number(self):
        assert clean_line("-5 degrees") == "-5 degrees"

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("1. - item", "item"),
            ("- > hello", "hello"),
            ("• 2) - x", "x"),
        ],
    )
    def test_strips_stacked_markers_in_any_order(self, raw, expected):
        assert clean_line(raw) == expected

    def test_keeps_question_mark(self):
        assert clean_line("What is 2+2?") == "What is 2+2?"


class TestCleanBlock:
    def test_cleans_every_line_and_squeezes_blank_runs(self):
        raw = "1. First\r\n\r\n\r\n\r\n2. Second  \n<p>Third</p>"
        assert clean_block(raw) == "First\n\nSecond\nThird"

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "plain text",
            "  1. What is <b>X</b>?  \n\n\n\nAns: &amp; y  ",
            "> quoted\n• bullet\n2) numbered:\n\n\n\ntail -->",
            "Q1. Explain evaporation?\r\nA: Water turns into vapour\r\nwhen heated.",
            "1. - item",
            "- > hello",
            "• 2) - x",
            "1. - Boil water\n- > Add tea",
        ],
    )
    def test_is_idempotent(self, raw):
        once = clean_block(raw)
        assert clean_block(once) == once


class TestSanitizePairs:
    def test_drops_empty_sides_and_renumbers(self):
        pairs = sanitize_pairs(
            [
                {"question": "1. What?", "answer": " yes "},
                {"question": "", "answer": "x"},
                {"question": "Why?", "answer": "<br>"},
                {"question": "- How:", "answer": "Like this"},
            ]
        )
        assert [(p.id, p.question, p.answer) for p in pairs] == [
            (1, "What?", "yes"),
            (2, "How", "Like this"),
        ]

    def test_answers_lose_stacked_markers(self):
        pairs = sanitize_pairs([{"question": "List the steps?", "answer": "1. - Boil water\n- > Add tea"}])
        assert pairs[0].answer == "Boil water\nAdd tea"
        assert clean_block(pairs[0].answer) == pairs[0].answer

    def test_accepts_objects_with_attributes(self):
        class Item:
            question = "Who?"
            answer = "Me"

        pairs = sanitize_pairs([Item()])
        assert pairs[0].question == "Who?"
        assert pairs[0].answer == "Me"

    def test_none_gives_empty_list(self):
        assert sanitize_pairs(None) == []


class TestDedupeTranscript:
    def test_collapses_repeated_words(self):
        assert dedupe_transcript("I I went to to the the park park") == "I went to the park"

    def test_collapses_repeated_phrases(self):
        assert dedupe_transcript("I like it I like it very much") == "I like it very much"

    def test_blank(self):
        assert dedupe_transcript("   ") == ""

    def test_keeps_first_occurrence_ignoring_case(self):
        assert dedupe_transcript("Went went home") == "Went home"


class TestCleanMathOutput:
    def test_fraction_inside_inline_math(self):
        assert clean_math_output("The answer is \\(\\frac{15}{4}\\)") == "The answer is 15/4 (3.75)"

    def test_integer_fraction(self):
        assert clean_math_output("\\frac{6}{2}") == "6/2 (3)"

    def test_zero_denominator(self):
        assert clean_math_output("\\frac{1}{0}") == "1/0"

    def test_single_dollar_wrapper(self):
        assert clean_math_output("Step 1: $x + 1$") == "Step 1: x + 1"

    def test_empty(self):
        assert clean_math_output("") == ""
        assert clean_math_output(None) == ""
