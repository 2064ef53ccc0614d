"""
文档提取模块

提供区段定位、代码块收集、问答区段解析和互动活动提取功能。
"""

from extractor.activity import extract_activity
from extractor.code_blocks import collect_all, parse_fenced_block
from extractor.questions import ParsedQuestions, QuestionsAndTasksParser
from extractor.sections import extract_section

__all__ = [
    "ParsedQuestions",
    "QuestionsAndTasksParser",
    "collect_all",
    "extract_activity",
    "extract_section",
    "parse_fenced_block",
]
