"""
代码块收集测试
"""

from extractor.code_blocks import FENCE_PAIR_RE, collect_all, parse_fenced_block


def test_no_blocks_yields_empty_list():
    assert collect_all("plain text only") == []


def test_blocks_in_document_order():
    content = "```js\nconst a = 1;\n```\ntext\n```bash\nnpm run dev\n```"

    assert collect_all(content) == ["const a = 1;", "npm run dev"]


def test_untagged_block():
    assert collect_all("```\nplain\n```") == ["plain"]


def test_body_is_trimmed():
    assert collect_all("```js\n\n  x = 1\n\n```") == ["x = 1"]


def test_unrecognized_tag_does_not_shift_later_blocks():
    content = "```rust\nfn x() {}\n```\n\nProse here.\n\n```js\nlet y;\n```"

    assert collect_all(content) == ["let y;"]


def test_count_matches_complete_fence_pairs():
    content = "```ts\na\n```\n```tsx\n<b />\n```\n```python\nprint(1)\n```\n```"

    blocks = collect_all(content)

    assert len(blocks) == len(FENCE_PAIR_RE.findall(content)) == 3
    assert blocks == ["a", "<b />", "print(1)"]


def test_parse_fenced_block():
    assert parse_fenced_block("```ts\nlet a: number;\n```") == ("ts", "let a: number;")
    assert parse_fenced_block("```tsx\n<App />\n```") == ("tsx", "<App />")
    assert parse_fenced_block("```\nx\n```") == ("", "x")
    assert parse_fenced_block("```rust\nfn main() {}\n```") is None
