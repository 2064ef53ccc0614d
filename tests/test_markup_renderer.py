"""
Markdown 渲染器测试
"""

import pytest

from renderer.markup_renderer import render

H1 = '<h1 class="text-3xl font-bold mb-4 text-sky-900">'
H2 = '<h2 class="text-2xl font-bold mb-3 text-sky-800">'
H3 = '<h3 class="text-xl font-semibold mb-2 text-sky-700">'
UL = '<ul class="list-disc list-inside mb-4 space-y-1">'
DEEP_UL = '<ul class="list-disc list-inside ml-4">'
HR = '<hr class="my-4" />'


class TestHeadersAndInline:
    """标题与行内元素"""

    def test_heading_and_paragraph_with_emphasis(self):
        html = render("# Hello\n\nThis is **bold** and *italic*.")

        assert html == (
            f"{H1}Hello</h1>"
            '<p class="mb-4">This is <strong>bold</strong> and <em>italic</em>.</p>'
        )

    def test_header_levels_longest_prefix_first(self):
        html = render("### Three\n## Two\n# One\n# Again")

        assert f"{H3}Three</h3>" in html
        assert f"{H2}Two</h2>" in html
        assert f"{H1}One</h1>" in html
        assert html.count("<h1") == 1
        assert "# Again" in html

    def test_bold_is_not_mistaken_for_italic(self):
        html = render("**strong** text")

        assert "<strong>strong</strong>" in html
        assert "<em>" not in html

    def test_link(self):
        html = render("See [docs](https://nextjs.org/docs).")

        assert html == (
            '<p class="mb-4">See '
            '<a href="https://nextjs.org/docs" class="text-blue-600 hover:underline">docs</a>.</p>'
        )

    def test_blockquote_is_not_wrapped_in_paragraph(self):
        html = render("> quoted")

        assert html == '<blockquote class="border-l-4 border-gray-300 pl-4 italic my-4">quoted</blockquote>'


class TestLists:
    """列表"""

    def test_flat_list(self):
        html = render("- a\n- b")

        assert html == f'{UL}\n<li class="ml-4">a</li>\n<li class="ml-4">b</li>\n</ul>'

    def test_nested_list_gets_deep_wrapper(self):
        html = render("- a\n  - b\n- c")

        assert html.startswith(UL)
        assert f'{DEEP_UL}\n<li class="ml-8">b</li>\n</ul>' in html
        assert html.count("<ul") == 2
        assert html.count("</ul>") == 2

    def test_deep_only_run_uses_deep_wrapper(self):
        html = render("  - only deep")

        assert html == f'{DEEP_UL}\n<li class="ml-8">only deep</li>\n</ul>'

    def test_lists_separated_by_blank_line_are_merged(self):
        html = render("- a\n\n- b")

        assert html.count("<ul") == 1
        assert '<li class="ml-4">a</li>\n<li class="ml-4">b</li>' in html
        assert "<p" not in html

    def test_ordered_items_keep_document_order(self):
        html = render("3. third\n1. first")

        assert html.index("third") < html.index("first")
        assert "<ol" not in html
        assert html.count('<li class="ml-4">') == 2


class TestBlocks:
    """段落、分隔线与代码"""

    def test_horizontal_rule_between_blank_lines(self):
        html = render("Intro\n\n---\n\nOutro")

        assert html == f'<p class="mb-4">Intro</p>{HR}<p class="mb-4">Outro</p>'

    def test_document_that_is_only_a_rule(self):
        html = render("\n\n---\n\n")

        assert html == HR
        assert "<p" not in html

    def test_rule_joined_to_following_heading(self):
        html = render("---\n\n## Next")

        assert html == f"{HR}{H2}Next</h2>"

    def test_inline_code_is_escaped_once(self):
        html = render("Use `a < b && c` here")

        assert (
            '<code class="bg-gray-100 text-red-600 px-1 py-0.5 rounded text-sm">a &lt; b &amp;&amp; c</code>'
            in html
        )

    def test_inline_code_is_not_emphasized(self):
        html = render("Call `a*b*c` now")

        assert "a*b*c" in html
        assert "<em>" not in html

    def test_fenced_block_with_language(self):
        html = render("```js\nconst x = '<a>';\n```")

        assert html == '<pre><code class="language-js">const x = &#x27;&lt;a&gt;&#x27;;</code></pre>'

    def test_fenced_block_content_is_not_rendered(self):
        html = render("```\n# not a header\n**x**\n```")

        assert "# not a header" in html
        assert "**x**" in html
        assert "<h1" not in html
        assert "<strong>" not in html

    def test_unrecognized_block_is_emitted_verbatim(self):
        html = render("```rust\nfn main() {}\n```")

        assert html == "```rust\nfn main() {}\n```"

    def test_unterminated_fence_stays_literal(self):
        html = render("Start\n```js\nconst a = 1;")

        assert "```js" in html
        assert "<pre>" not in html

    def test_unterminated_fence_keeps_later_inline_code(self):
        html = render("```js\ncode\n\nsome `x` here")

        assert html.startswith('<p class="mb-4">```js\ncode</p>')
        assert '<p class="mb-4">some <code class="bg-gray-100 text-red-600 px-1 py-0.5 rounded text-sm">x</code> here</p>' in html
        assert "``<code" not in html


class TestRobustness:
    """畸形输入"""

    @pytest.mark.parametrize(
        "markdown",
        ["", "**", "*", "[broken](", "```", "`", "- ", "  - ", "> ", "#", "# ", "\n\n\n", "```js\n```", None],
    )
    def test_never_raises(self, markdown):
        assert isinstance(render(markdown), str)

    def test_rerendering_does_not_double_escape(self):
        first = render("Use `<div>` here\n\n```html\n<p>hi</p>\n```")
        second = render(first)

        assert "&lt;div&gt;" in second
        assert "&lt;p&gt;hi&lt;/p&gt;" in second
        assert "&amp;lt;" not in second
