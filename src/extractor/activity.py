"""
互动活动提取

定位 "## <n>. [Project ]Activity: <title>" 标题并从正文派生简短任务列表;
找不到活动时返回通用学习任务,保证每篇课程都有互动内容。
"""

from __future__ import annotations

import re

from models import InteractiveExample

ACTIVITY_RE = re.compile(
    r"## \d+\. (?:Project )?Activity: ([^\n]+)\n([\s\S]+?)(?=## \d+\. |---|\Z)"
)
GOAL_MARKER = "> **Goal:**"
MIN_TASK_LENGTH = 5

GENERIC_DESCRIPTION = "Experiment with the concepts presented in this topic."
GENERIC_TASKS = (
    "Review the main explanations and code examples.",
    "Consider how these concepts could be applied in a real-world application.",
    "If code is provided, try to run it locally and modify it to see the effects.",
)


def generic_activity() -> InteractiveExample:
    return InteractiveExample(description=GENERIC_DESCRIPTION, tasks=GENERIC_TASKS)


def _strip_markers(line: str) -> str:
    stripped = line.strip()
    stripped = re.sub(r"^- ", "", stripped)
    stripped = re.sub(r"^\d+\. ", "", stripped)
    return stripped.strip()


def extract_activity(content: str) -> InteractiveExample:
    """
    提取互动活动

    Args:
        content: 完整文档

    Returns:
        InteractiveExample: 活动描述与任务列表(从不为空)
    """
    match = ACTIVITY_RE.search(content)
    if not match:
        return generic_activity()

    heading = match.group(1).strip()
    body = match.group(2).strip()

    tasks = [
        _strip_markers(line)
        for line in body.split("\n")
        if len(line.strip()) > MIN_TASK_LENGTH and GOAL_MARKER not in line
    ]
    tasks = [task for task in tasks if task]
    if not tasks:
        first_line = body.split("\n")[0].strip()
        if not first_line:
            return generic_activity()
        tasks = [first_line]

    return InteractiveExample(description=f"{heading}.", tasks=tuple(tasks))
