"""
课程组装器

对单篇文档依次调用区段提取、代码块收集、问答解析和活动提取,
派生 id/标题/路径与关键词,并在提取结果为空时提供确定的兜底内容。
"""

from __future__ import annotations

import logging
import re
from typing import Any

from extractor.activity import extract_activity
from extractor.code_blocks import collect_all
from extractor.questions import NEXT_LINK_MARKER, QUESTIONS_MARKER, QuestionsAndTasksParser
from extractor.sections import extract_section, find_earliest
from models import CodeExample, Exercise, Lesson, MiniTask, Quiz
from renderer.markup_renderer import render

from .quiz import apply_override, build_quiz, rng_for

UNTITLED = "Untitled Topic"
SUMMARY_MARKER = "## Summary"
CODE_SEPARATOR = "\n\n/* --- Next Code Block --- */\n\n"
MAX_KEYWORDS = 5
EXPLANATION_KEYWORD_TOKENS = 5

TITLE_RE = re.compile(r"^# (.*)$", re.MULTILINE)
MARKDOWN_SUFFIX_RE = re.compile(r"\.(?:md|markdown)$", re.IGNORECASE)
ORDINAL_PREFIX_RE = re.compile(r"^\d+-")
TOKEN_SPLIT_RE = re.compile(r"[\s,.]+")
NON_ALNUM_RE = re.compile(r"[^0-9a-z]")


def derive_lesson_id(file_name: str) -> str:
    """文件名 → lesson id: 去扩展名、去前导序号、点号换成连字符"""
    lesson_id = MARKDOWN_SUFFIX_RE.sub("", file_name)
    lesson_id = ORDINAL_PREFIX_RE.sub("", lesson_id)
    return lesson_id.replace(".", "-")


def _normalize_token(token: str) -> str:
    return NON_ALNUM_RE.sub("", token.lower())


def extract_keywords(title: str, explanation: str) -> tuple[str, ...]:
    """
    派生检索关键词

    标题中的词在前,其后是讲解正文的前几个词;
    统一小写、去标点,只保留长度大于 2 的词并去重,最多 5 个。
    """
    title_words = [word for word in title.split() if len(word) > 2]
    body_words = [word for word in TOKEN_SPLIT_RE.split(explanation) if len(word) > 2]
    candidates = title_words + body_words[:EXPLANATION_KEYWORD_TOKENS]

    keywords: list[str] = []
    for word in candidates:
        token = _normalize_token(word)
        if len(token) > 2 and token not in keywords:
            keywords.append(token)
        if len(keywords) == MAX_KEYWORDS:
            break
    return tuple(keywords)


def build_code_example(blocks: list[str]) -> CodeExample:
    if not blocks:
        description = "Illustrative code example(s) from this topic:"
    elif len(blocks) == 1:
        description = "Illustrative code example:"
    else:
        description = "Multiple code examples from this topic:"
    return CodeExample(
        description=description,
        code=CODE_SEPARATOR.join(blocks),
        output_description="The code demonstrates key concepts or functionality.",
    )


def generic_exercise(title: str) -> Exercise:
    return Exercise(
        title=f'General Practice for "{title}"',
        description="Practice the main ideas from this topic to solidify your understanding.",
        solution_hint="Refer back to the explanation and code examples in this section.",
        mini_tasks=(
            MiniTask(
                task="Summarize the primary learning objective in your own words.",
                code="// Write your summary or a simple code snippet here",
                hint="Focus on the 'Summary' section of this topic.",
            ),
        ),
    )


class LessonAssembler:
    """单篇文档 → Lesson 记录"""

    def __init__(
        self,
        reproducible: bool = False,
        overrides: dict[str, dict[str, Any]] | None = None,
        logger: logging.Logger | None = None,
    ):
        """
        初始化组装器

        Args:
            reproducible: 是否以 lesson id 为种子洗牌测验选项
            overrides: 按 lesson id 配置的自定义测验
            logger: 日志记录器(可选)
        """
        self.reproducible = reproducible
        self.overrides = overrides or {}
        self.logger = logger or logging.getLogger("lesson_transformer")
        self.parser = QuestionsAndTasksParser()

    def assemble(self, file_name: str, content: str) -> Lesson:
        """
        组装单篇课程

        Args:
            file_name: 文档文件名
            content: 文档原文

        Returns:
            Lesson: 构建完成的只读记录
        """
        lesson_id = derive_lesson_id(file_name)
        content = content.replace("\r\n", "\n")

        title_match = TITLE_RE.search(content)
        title = title_match.group(1).strip() if title_match else ""
        title = title or UNTITLED

        explanation = self._explanation_region(content, title_match)
        blocks = collect_all(content)
        quiz, exercise = self._quiz_and_exercise(lesson_id, title, content)

        lesson = Lesson(
            id=lesson_id,
            title=title,
            path=f"/{lesson_id}",
            explanation_html=render(explanation),
            code_example=build_code_example(blocks),
            quiz=quiz,
            exercise=exercise,
            interactive_example=extract_activity(content),
            keywords=extract_keywords(title, explanation),
            explanation_source=explanation,
        )
        self.logger.debug(
            f"已组装课程 {lesson_id}: 代码块 {len(blocks)} 个, "
            f"练习任务 {len(exercise.mini_tasks)} 个"
        )
        return lesson

    @staticmethod
    def _explanation_region(content: str, title_match: re.Match[str] | None) -> str:
        """标题之后、Summary / Questions & Tasks / [Next: 中最早出现者之前的正文"""
        start = title_match.end() if title_match else 0
        end = find_earliest(content, [SUMMARY_MARKER, QUESTIONS_MARKER, NEXT_LINK_MARKER], start)
        return content[start:end].strip()

    def _quiz_and_exercise(self, lesson_id: str, title: str, content: str) -> tuple[Quiz, Exercise]:
        rng = rng_for(lesson_id, self.reproducible)
        quiz: Quiz | None = None
        exercise: Exercise | None = None

        if extract_section(content, QUESTIONS_MARKER):
            parsed = self.parser.parse(content)

            if parsed.question:
                parts = title.split(". ")
                topic = parts[1] if len(parts) > 1 and parts[1] else title
                correct_text = f"The primary concept of {topic}."
                quiz = build_quiz(
                    question=parsed.question,
                    correct_text=correct_text,
                    topic_title=title,
                    explanation=f"The core idea of this section is: {correct_text} Refer back to the topic for details.",
                    rng=rng,
                )
                override = self.overrides.get(lesson_id)
                if override:
                    self.logger.info(f"课程 {lesson_id} 使用自定义测验")
                    quiz = apply_override(quiz, override, title, rng)

            if parsed.tasks:
                exercise = Exercise(
                    title=f"Practice Exercise: {title}",
                    description="Complete the following tasks to apply the concepts learned in this section.",
                    solution_hint="Review the provided code examples and explanations for guidance.",
                    mini_tasks=tuple(parsed.tasks),
                )

        if quiz is None:
            quiz = build_quiz(
                question=f'What is a key concept covered in "{title}"?',
                correct_text=f"A fundamental idea from {title}",
                topic_title=title,
                explanation=f'This question covers a core concept from the topic "{title}".',
                rng=rng,
            )
        if exercise is None:
            exercise = generic_exercise(title)

        return quiz, exercise
