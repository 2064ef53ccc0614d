"""
课程组装模块

将提取结果组合为最终 Lesson 记录,并生成测验选项。
"""

from assembler.lesson_assembler import LessonAssembler, derive_lesson_id, extract_keywords
from assembler.quiz import generate_quiz_options

__all__ = [
    "LessonAssembler",
    "derive_lesson_id",
    "extract_keywords",
    "generate_quiz_options",
]
