"""
测验选项生成测试
"""

import random
from unittest.mock import patch

import pytest

from assembler.quiz import (
    OPTION_IDS,
    apply_override,
    build_quiz,
    find_option_id,
    generate_quiz_options,
    rng_for,
)


class AlwaysFirst:
    """randrange 恒返回 0"""

    def randrange(self, stop):
        return 0


class AlwaysSelf:
    """randrange 恒返回 stop - 1,即不交换"""

    def randrange(self, stop):
        return stop - 1


@pytest.mark.parametrize("seed", range(20))
def test_always_four_options_with_one_correct(seed):
    options = generate_quiz_options("Right answer", "Routing", random.Random(seed))

    assert [opt.id for opt in options] == list(OPTION_IDS)
    assert sum(1 for opt in options if opt.text == "Right answer") == 1
    assert options[OPTION_IDS.index(find_option_id(options, "Right answer"))].text == "Right answer"


def test_distractors_mention_the_topic():
    options = generate_quiz_options("Right", "Routing", AlwaysSelf())

    assert [opt.text for opt in options] == [
        "Right",
        "An incorrect option related to Routing (B)",
        "Another incorrect option related to Routing (C)",
        "A misleading option about Routing (D)",
    ]


def test_ids_are_assigned_after_shuffle():
    options = generate_quiz_options("Right", "Routing", AlwaysFirst())

    assert options[3].text == "Right"
    assert find_option_id(options, "Right") == "d"
    assert options[0].id == "a"


def test_default_source_is_process_wide_random():
    with patch("random.randrange", side_effect=lambda stop: 0) as randrange:
        options = generate_quiz_options("Right", "Routing")

    assert randrange.call_count == 3
    assert find_option_id(options, "Right") == "d"


def test_seeded_source_is_reproducible():
    first = build_quiz("Q?", "Right", "Routing", "", rng_for("routing", True))
    second = build_quiz("Q?", "Right", "Routing", "", rng_for("routing", True))

    assert first == second
    assert rng_for("routing", False) is None


def test_build_quiz_points_to_correct_text():
    quiz = build_quiz("Q?", "Right", "Routing", "Because.", random.Random(3))
    correct = [opt for opt in quiz.options if opt.id == quiz.correct_answer_id]

    assert correct[0].text == "Right"
    assert quiz.explanation == "Because."


def test_override_with_fixed_options():
    quiz = build_quiz("Generated?", "Right", "Routing", "Generated.", AlwaysSelf())
    override = {
        "question": "Which file configures TypeScript?",
        "options": ["package.json", "tsconfig.json", "next.config.js", "globals.css"],
        "correct_answer_id": "b",
    }

    replaced = apply_override(quiz, override, "Routing")

    assert replaced.question == "Which file configures TypeScript?"
    assert [opt.text for opt in replaced.options][1] == "tsconfig.json"
    assert replaced.correct_answer_id == "b"
    assert replaced.explanation == "Generated."


def test_override_with_correct_answer_is_shuffled():
    quiz = build_quiz("Generated?", "Right", "Routing", "Generated.", AlwaysSelf())

    replaced = apply_override(quiz, {"correct_answer": "Only the needed code loads."}, "Routing", AlwaysFirst())

    assert replaced.question == "Generated?"
    assert replaced.correct_answer_id == "d"
    assert replaced.options[3].text == "Only the needed code loads."
