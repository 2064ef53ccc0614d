"""
Markdown 渲染模块
"""

from renderer.markup_renderer import escape_code, render

__all__ = [
    "escape_code",
    "render",
]
