"""
代码块收集

按文档顺序收集全部围栏代码块的正文。
"""

from __future__ import annotations

import re

LANGUAGE_TAGS = (
    "typescript",
    "javascript",
    "dockerfile",
    "python",
    "bash",
    "toml",
    "json",
    "html",
    "css",
    "tsx",
    "jsx",
    "ts",
    "js",
    "sh",
)

# 完整的一对 ``` 围栏(非贪婪,可跨行); 未闭合的围栏不会匹配
FENCE_PAIR_RE = re.compile(r"```[\s\S]*?```")

BLOCK_SHAPE_RE = re.compile(
    r"```(?:(" + "|".join(LANGUAGE_TAGS) + r"))?\s*\n([\s\S]*?)\n```"
)


def parse_fenced_block(block: str) -> tuple[str, str] | None:
    """
    解析单个围栏代码块

    Args:
        block: 含首尾 ``` 的代码块原文

    Returns:
        (语言标记, 正文); 形状无法识别时返回 None
    """
    match = BLOCK_SHAPE_RE.match(block)
    if not match:
        return None
    return match.group(1) or "", match.group(2)


def collect_all(content: str) -> list[str]:
    """按顺序返回文档中每个可识别代码块的正文(已去除首尾空白)"""
    blocks: list[str] = []
    for pair in FENCE_PAIR_RE.finditer(content):
        parsed = parse_fenced_block(pair.group(0))
        if parsed is None:
            continue
        blocks.append(parsed[1].strip())
    return blocks
