"""
测验生成

围绕正确答案文本生成 4 个选项(3 个模板化干扰项),
Fisher–Yates 原地洗牌后按位置分配 a..d。
"""

from __future__ import annotations

import random
from typing import Any, Protocol

from models import Quiz, QuizOption

OPTION_IDS = ("a", "b", "c", "d")


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


def distractors(topic_title: str) -> list[str]:
    return [
        f"An incorrect option related to {topic_title} (B)",
        f"Another incorrect option related to {topic_title} (C)",
        f"A misleading option about {topic_title} (D)",
    ]


def shuffle_in_place(items: list[Any], rng: RandomSource | None = None) -> None:
    """Fisher–Yates 原地洗牌; 未指定随机源时使用进程级 random"""
    source = rng or random
    for i in range(len(items) - 1, 0, -1):
        j = source.randrange(i + 1)
        items[i], items[j] = items[j], items[i]


def generate_quiz_options(
    correct_text: str,
    topic_title: str,
    rng: RandomSource | None = None,
) -> list[QuizOption]:
    """
    生成 4 个测验选项

    Args:
        correct_text: 正确答案文本
        topic_title: 课程标题(用于干扰项模板)
        rng: 随机源(可选); 传入以 lesson id 为种子的 random.Random 可得到可复现的顺序

    Returns:
        按位置分配 a..d 的选项列表
    """
    texts = [correct_text, *distractors(topic_title)]
    shuffle_in_place(texts, rng)
    return [QuizOption(id=option_id, text=text) for option_id, text in zip(OPTION_IDS, texts)]


def find_option_id(options: list[QuizOption], text: str) -> str:
    """按文本找回选项 id(精确匹配优先,其次包含匹配)"""
    for option in options:
        if option.text == text:
            return option.id
    for option in options:
        if text in option.text:
            return option.id
    return OPTION_IDS[0]


def build_quiz(
    question: str,
    correct_text: str,
    topic_title: str,
    explanation: str,
    rng: RandomSource | None = None,
) -> Quiz:
    options = generate_quiz_options(correct_text, topic_title, rng)
    return Quiz(
        question=question,
        options=tuple(options),
        correct_answer_id=find_option_id(options, correct_text),
        explanation=explanation,
    )


def rng_for(lesson_id: str, reproducible: bool) -> random.Random | None:
    """可复现模式下返回以 lesson id 为种子的随机源"""
    if not reproducible:
        return None
    return random.Random(lesson_id)


def apply_override(
    quiz: Quiz,
    override: dict[str, Any],
    topic_title: str,
    rng: RandomSource | None = None,
) -> Quiz:
    """
    用配置中的自定义测验替换生成的测验

    override 支持两种形式:
    - correct_answer: 正确答案文本,与模板干扰项一起洗牌
    - options + correct_answer_id: 固定顺序的 4 个选项
    """
    question = str(override.get("question") or quiz.question)
    explanation = str(override.get("explanation") or quiz.explanation)

    fixed_options = override.get("options")
    if fixed_options:
        options = tuple(
            QuizOption(id=option_id, text=str(text))
            for option_id, text in zip(OPTION_IDS, fixed_options)
        )
        return Quiz(
            question=question,
            options=options,
            correct_answer_id=str(override["correct_answer_id"]),
            explanation=explanation,
        )

    return build_quiz(question, str(override["correct_answer"]), topic_title, explanation, rng)
