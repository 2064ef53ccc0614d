"""
统一数据模型定义

定义课程构建流程中使用的核心数据结构。
Lesson 及其子记录在构建完成后只读(frozen)。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CodeExample:
    """课程代码示例"""

    description: str
    """示例说明"""

    code: str
    """文档内全部代码块的拼接结果(无代码块时为空字符串)"""

    output_description: str
    """输出说明"""

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "code": self.code,
            "outputDescription": self.output_description,
        }


@dataclass(frozen=True)
class QuizOption:
    """测验选项"""

    id: str
    text: str


@dataclass(frozen=True)
class Quiz:
    """单选测验(固定 4 个选项,恰好一个正确)"""

    question: str
    """题干"""

    options: tuple[QuizOption, ...]
    """选项列表,id 依次为 a..d"""

    correct_answer_id: str
    """正确选项 id"""

    explanation: str = ""
    """答案解析"""

    def to_dict(self) -> dict[str, Any]:
        return {
            "question": self.question,
            "options": [{"id": opt.id, "text": opt.text} for opt in self.options],
            "correctAnswerId": self.correct_answer_id,
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class MiniTask:
    """练习中的单个小任务"""

    task: str
    code: str = ""
    hint: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"task": self.task, "code": self.code, "hint": self.hint}


@dataclass(frozen=True)
class Exercise:
    """课后练习"""

    title: str
    description: str
    solution_hint: str
    mini_tasks: tuple[MiniTask, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "solutionHint": self.solution_hint,
            "miniTasks": [task.to_dict() for task in self.mini_tasks],
        }


@dataclass(frozen=True)
class InteractiveExample:
    """互动活动描述"""

    description: str
    tasks: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"description": self.description, "tasks": list(self.tasks)}


@dataclass(frozen=True)
class Lesson:
    """单篇文档构建出的课程记录"""

    id: str
    """由文件名派生的唯一标识"""

    title: str
    """第一个一级标题,缺失时为 "Untitled Topic" """

    path: str
    """路由路径,恒为 "/" + id"""

    explanation_html: str
    """讲解正文渲染后的 HTML"""

    code_example: CodeExample
    quiz: Quiz
    exercise: Exercise
    interactive_example: InteractiveExample

    keywords: tuple[str, ...] = ()
    """检索关键词(至多 5 个,小写字母数字)"""

    explanation_source: str = ""
    """讲解正文原始 Markdown,供纯文本检索使用"""

    def matches(self, term: str) -> bool:
        """大小写不敏感的子串匹配(标题、关键词、讲解原文)"""
        needle = term.strip().lower()
        if not needle:
            return True
        if needle in self.title.lower():
            return True
        if any(needle in keyword.lower() for keyword in self.keywords):
            return True
        return needle in self.explanation_source.lower()

    def to_dict(self) -> dict[str, Any]:
        """转换为展示层使用的字典"""
        return {
            "id": self.id,
            "title": self.title,
            "path": self.path,
            "explanation": self.explanation_html,
            "codeExample": self.code_example.to_dict(),
            "quiz": self.quiz.to_dict(),
            "exercise": self.exercise.to_dict(),
            "interactiveExample": self.interactive_example.to_dict(),
            "keywords": list(self.keywords),
        }


@dataclass
class BuildResult:
    """一次批量构建的结果"""

    lessons: list[Lesson] = field(default_factory=list)
    """按策划顺序排列的课程列表"""

    source_dir: str | None = None
    """文档来源目录"""

    total_time: float = 0.0
    """总耗时(秒)"""

    @property
    def total(self) -> int:
        return len(self.lessons)

    def add_lesson(self, lesson: Lesson) -> None:
        """追加课程(保持调用顺序)"""
        self.lessons.append(lesson)

    def to_dict(self) -> dict[str, Any]:
        """转换为字典"""
        return {
            "total": self.total,
            "source_dir": self.source_dir,
            "total_time": self.total_time,
            "lessons": [lesson.to_dict() for lesson in self.lessons],
        }

    def __str__(self) -> str:
        """字符串表示"""
        code_lessons = sum(1 for lesson in self.lessons if lesson.code_example.code)
        return (
            f"构建结果: {self.total} 篇课程 | "
            f"含代码示例: {code_lessons} | "
            f"总耗时: {self.total_time:.2f}s"
        )
