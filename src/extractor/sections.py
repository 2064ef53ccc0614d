"""
文档区段提取

按起止标记字符串定位文档中的命名区段。
"""

from __future__ import annotations


def extract_section(content: str, start_marker: str, end_marker: str = "") -> str:
    """
    提取 start_marker 之后、end_marker 之前的文本

    Args:
        content: 原始文档
        start_marker: 起始标记(首次出现处生效)
        end_marker: 结束标记(可选),仅在起始位置之后查找

    Returns:
        去除首尾空白的区段文本; 起始标记不存在时返回空字符串
    """
    start_index = content.find(start_marker)
    if start_index == -1:
        return ""
    start_index += len(start_marker)

    end_index = len(content)
    if end_marker:
        found = content.find(end_marker, start_index)
        if found != -1:
            end_index = found

    return content[start_index:end_index].strip()


def find_earliest(content: str, markers: list[str], start: int = 0) -> int:
    """返回多个标记在 start 之后最早出现的位置,均未出现时返回文档长度"""
    end_index = len(content)
    for marker in markers:
        found = content.find(marker, start)
        if found != -1:
            end_index = min(end_index, found)
    return end_index
