"""
Markdown → HTML 渲染器

只支持课程文档实际用到的子集:
一至三级标题、粗体、斜体、链接、单层嵌套的有序/无序列表、引用、
围栏/行内代码、分隔线和段落。

对任何畸形输入都不抛异常,尽力输出(未闭合的围栏、星号等按原文保留)。
代码内容只在还原占位符时转义一次。
"""

from __future__ import annotations

import html
import re

from extractor.code_blocks import FENCE_PAIR_RE, parse_fenced_block

CODE_BLOCK_TOKEN = "__CODE_BLOCK_{}__"
INLINE_CODE_TOKEN = "__INLINE_CODE_{}__"

H1_CLASS = "text-3xl font-bold mb-4 text-sky-900"
H2_CLASS = "text-2xl font-bold mb-3 text-sky-800"
H3_CLASS = "text-xl font-semibold mb-2 text-sky-700"
LINK_CLASS = "text-blue-600 hover:underline"
ITEM_CLASS = "ml-4"
DEEP_ITEM_CLASS = "ml-8"
LIST_CLASS = "list-disc list-inside mb-4 space-y-1"
DEEP_LIST_CLASS = "list-disc list-inside ml-4"
BLOCKQUOTE_CLASS = "border-l-4 border-gray-300 pl-4 italic my-4"
PARAGRAPH_OPEN = '<p class="mb-4">'
HR = '<hr class="my-4" />'
INLINE_CODE_CLASS = "bg-gray-100 text-red-600 px-1 py-0.5 rounded text-sm"

INLINE_CODE_RE = re.compile(r"(?<!`)`([^`\n]+)`(?!`)")
H3_RE = re.compile(r"^### (.*)$", re.MULTILINE)
H2_RE = re.compile(r"^## (.*)$", re.MULTILINE)
H1_RE = re.compile(r"^# (.*)$", re.MULTILINE)
BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
ITALIC_RE = re.compile(r"\*(.*?)\*")
LINK_RE = re.compile(r"\[(.*?)\]\((.*?)\)")
ITEM_RE = re.compile(r"^- (.*)$", re.MULTILINE)
DEEP_ITEM_RE = re.compile(r"^[ \t]{2,}- (.*)$", re.MULTILINE)
ORDERED_ITEM_RE = re.compile(r"^\d+\. (.*)$", re.MULTILINE)
BLOCKQUOTE_RE = re.compile(r"^> (.*)$", re.MULTILINE)
ADJACENT_LISTS_RE = re.compile(r"\s*</ul>\s*<ul[^>]*>\s*")
EMPTY_PARAGRAPH_RE = re.compile(r'<p class="mb-4">\s*</p>')
EMPTY_LIST_RE = re.compile(r"<ul[^>]*>\s*</ul>")
HR_BEFORE_HEADING_RE = re.compile(r'<hr class="my-4" />\s*<h')

BLOCK_PREFIXES = ("<h", "<ul", "<blockquote", "<pre", "<table", "__CODE_BLOCK_")

_ITEM_OPEN = f'<li class="{ITEM_CLASS}">'
_DEEP_ITEM_OPEN = f'<li class="{DEEP_ITEM_CLASS}">'


def escape_code(text: str) -> str:
    """转义 & < > " ' 五个字符"""
    return html.escape(text, quote=True)


def _protect_code_blocks(text: str, blocks: dict[str, str]) -> str:
    def replace(match: re.Match[str]) -> str:
        token = CODE_BLOCK_TOKEN.format(len(blocks))
        blocks[token] = match.group(0)
        return token

    return FENCE_PAIR_RE.sub(replace, text)


def _protect_inline_code(text: str, spans: dict[str, str]) -> str:
    def replace(match: re.Match[str]) -> str:
        token = INLINE_CODE_TOKEN.format(len(spans))
        spans[token] = match.group(1)
        return token

    return INLINE_CODE_RE.sub(replace, text)


def _render_headers(text: str) -> str:
    # 最长前缀优先; 一级标题只替换第一处
    text = H3_RE.sub(lambda m: f'<h3 class="{H3_CLASS}">{m.group(1)}</h3>', text)
    text = H2_RE.sub(lambda m: f'<h2 class="{H2_CLASS}">{m.group(1)}</h2>', text)
    return H1_RE.sub(lambda m: f'<h1 class="{H1_CLASS}">{m.group(1)}</h1>', text, count=1)


def _render_inline(text: str) -> str:
    text = BOLD_RE.sub(r"<strong>\1</strong>", text)
    text = ITALIC_RE.sub(r"<em>\1</em>", text)
    return LINK_RE.sub(lambda m: f'<a href="{m.group(2)}" class="{LINK_CLASS}">{m.group(1)}</a>', text)


def _render_list_items(text: str) -> str:
    text = ITEM_RE.sub(lambda m: f"{_ITEM_OPEN}{m.group(1)}</li>", text)
    text = DEEP_ITEM_RE.sub(lambda m: f"{_DEEP_ITEM_OPEN}{m.group(1)}</li>", text)
    return ORDERED_ITEM_RE.sub(lambda m: f"{_ITEM_OPEN}{m.group(1)}</li>", text)


def _wrap_run(items: list[str]) -> list[str]:
    """把一段连续列表项包进 <ul>; 深层项嵌套在独立的子列表中"""
    if all(item.startswith(_DEEP_ITEM_OPEN) for item in items):
        return [f'<ul class="{DEEP_LIST_CLASS}">', *items, "</ul>"]

    wrapped = [f'<ul class="{LIST_CLASS}">']
    in_deep = False
    for item in items:
        is_deep = item.startswith(_DEEP_ITEM_OPEN)
        if is_deep and not in_deep:
            wrapped.append(f'<ul class="{DEEP_LIST_CLASS}">')
        elif not is_deep and in_deep:
            wrapped.append("</ul>")
        in_deep = is_deep
        wrapped.append(item)
    if in_deep:
        wrapped.append("</ul>")
    wrapped.append("</ul>")
    return wrapped


def _wrap_lists(text: str) -> str:
    output: list[str] = []
    run: list[str] = []
    for line in text.split("\n"):
        if line.startswith("<li "):
            run.append(line)
            continue
        if run:
            output.extend(_wrap_run(run))
            run = []
        output.append(line)
    if run:
        output.extend(_wrap_run(run))

    # 仅以空白分隔的相邻列表合并为一个
    return ADJACENT_LISTS_RE.sub("\n", "\n".join(output))


def _render_blockquotes(text: str) -> str:
    return BLOCKQUOTE_RE.sub(lambda m: f'<blockquote class="{BLOCKQUOTE_CLASS}">{m.group(1)}</blockquote>', text)


def _wrap_paragraphs(text: str) -> str:
    chunks: list[str] = []
    for chunk in text.split("\n\n"):
        stripped = chunk.strip()
        if not stripped:
            continue
        if stripped == "---":
            chunks.append(HR)
        elif stripped.startswith(BLOCK_PREFIXES):
            chunks.append(stripped)
        else:
            chunks.append(f"{PARAGRAPH_OPEN}{stripped}</p>")
    return "".join(chunks)


def _restore_inline_code(text: str, spans: dict[str, str]) -> str:
    for token, code in spans.items():
        text = text.replace(token, f'<code class="{INLINE_CODE_CLASS}">{escape_code(code)}</code>', 1)
    return text


def _restore_code_blocks(text: str, blocks: dict[str, str]) -> str:
    for token, block in blocks.items():
        parsed = parse_fenced_block(block)
        if parsed is None:
            text = text.replace(token, block, 1)
            continue
        language, code = parsed
        text = text.replace(token, f'<pre><code class="language-{language}">{escape_code(code)}</code></pre>', 1)
    return text


def _cleanup(text: str) -> str:
    text = EMPTY_PARAGRAPH_RE.sub("", text)
    text = EMPTY_LIST_RE.sub("", text)
    return HR_BEFORE_HEADING_RE.sub(f"{HR}<h", text)


def render(markdown: str) -> str:
    """
    将课程 Markdown 渲染为 HTML

    Args:
        markdown: 原始 Markdown 文本

    Returns:
        HTML 字符串(输入为空时返回空字符串)
    """
    if not markdown:
        return ""

    blocks: dict[str, str] = {}
    spans: dict[str, str] = {}

    text = markdown.replace("\r\n", "\n")
    text = _protect_code_blocks(text, blocks)
    text = _protect_inline_code(text, spans)
    text = _render_headers(text)
    text = _render_inline(text)
    text = _render_list_items(text)
    text = _wrap_lists(text)
    text = _render_blockquotes(text)
    text = _wrap_paragraphs(text)
    text = _restore_inline_code(text, spans)
    text = _restore_code_blocks(text, blocks)
    return _cleanup(text).strip()
