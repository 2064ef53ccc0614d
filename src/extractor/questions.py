"""
"Questions & Tasks" 区段解析

逐行状态机: 从松散结构的问答区段中恢复一道测验题干和若干练习任务,
任务可附带紧随其后的代码块作为起始代码。
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from models import MiniTask

from .sections import extract_section

QUESTIONS_MARKER = "## Questions & Tasks"
NEXT_LINK_MARKER = "[Next:"
TASK_PREFIX = "Task:"
FENCE = "```"
TASK_HINT = "Review the section's content for guidance."

QUESTION_LINE_RE = re.compile(r"^\d+\. ")
ORDINAL_PREFIX_RE = re.compile(r"^\d+\.\s+")


class ParserMode(Enum):
    """解析状态"""

    IDLE = "idle"
    """尚未遇到 Task: 行"""

    IN_TASK = "in_task"
    """处于任务区段,代码块之外"""

    IN_CODE_BLOCK = "in_code_block"
    """处于围栏代码块内部"""


@dataclass
class ParsedQuestions:
    """问答区段解析结果"""

    question: str = ""
    tasks: list[MiniTask] = field(default_factory=list)


class QuestionsAndTasksParser:
    """问答区段状态机解析器(每次 parse 调用独立)"""

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self.mode = ParserMode.IDLE
        self._mode_before_code = ParserMode.IDLE
        self._task_lines: list[str] = []
        self._task_opener = ""
        self._code_lines: list[str] = []
        self._result = ParsedQuestions()

    @staticmethod
    def region(content: str) -> str:
        """返回问答区段文本(以 "[Next:" 或文末为界)"""
        return extract_section(content, QUESTIONS_MARKER, NEXT_LINK_MARKER)

    def parse(self, content: str) -> ParsedQuestions:
        """
        解析文档中的问答区段

        Args:
            content: 完整文档

        Returns:
            ParsedQuestions: 题干(可能为空)和按出现顺序排列的任务列表
        """
        self._reset()
        block = self.region(content)
        if not block:
            return self._result

        lines = [line.strip() for line in block.split("\n")]
        lines = [line for line in lines if line]

        for index, line in enumerate(lines):
            next_line = lines[index + 1] if index + 1 < len(lines) else None
            self._feed(line, next_line)

        return self._result

    def _feed(self, line: str, next_line: str | None) -> None:
        if line.startswith(FENCE):
            self._toggle_fence()
            return

        if self.mode is ParserMode.IN_CODE_BLOCK:
            self._code_lines.append(line + "\n")
            return

        if line.startswith(TASK_PREFIX):
            self._start_task(line, next_line)
            return

        if self.mode is ParserMode.IN_TASK and line.startswith("//"):
            self._task_lines.append(line)
            return

        if QUESTION_LINE_RE.match(line):
            if not self._result.question:
                self._result.question = ORDINAL_PREFIX_RE.sub("", line).replace("**", "").strip()
            return

        if self.mode is ParserMode.IN_TASK and line.startswith("- "):
            self._task_lines.append(line)

    def _toggle_fence(self) -> None:
        if self.mode is not ParserMode.IN_CODE_BLOCK:
            self._mode_before_code = self.mode
            self.mode = ParserMode.IN_CODE_BLOCK
            return

        self.mode = self._mode_before_code
        code = "".join(self._code_lines)
        self._code_lines = []
        if self.mode is ParserMode.IN_TASK and self._has_pending_task() and code:
            self._emit_task(code)

    def _start_task(self, line: str, next_line: str | None) -> None:
        self.mode = ParserMode.IN_TASK
        self._task_opener = line
        remainder = line[len(TASK_PREFIX):].strip()
        self._task_lines = [remainder] if remainder else []

        # 同一行给出任务描述且下一行不是代码块: 纯文本任务
        if remainder and (next_line is None or not next_line.startswith(FENCE)):
            self._emit_task("")

    def _has_pending_task(self) -> bool:
        return bool(self._task_opener) or any(self._task_lines)

    def _emit_task(self, code: str) -> None:
        text = "\n".join(self._task_lines).strip()
        task = text.split("\n")[0].strip() if text else self._task_opener
        self._result.tasks.append(MiniTask(task=task, code=code, hint=TASK_HINT))
        self._task_lines = []
        self._task_opener = ""
