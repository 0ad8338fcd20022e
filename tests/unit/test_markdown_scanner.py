"""
Unit tests for Markdown scanning.

Tests code block and link extraction in postlint.contexts.ingest.markdown_scanner.
"""

import pytest

from postlint.contexts.ingest.markdown_scanner import (
    extract_code_blocks,
    extract_links,
    scan_markdown,
    strip_inline_code,
)


class TestExtractCodeBlocks:
    """Tests for extract_code_blocks()."""

    @pytest.mark.unit
    def test_tagged_block(self):
        body = "Some text\n```ruby\nUser.where(active: true)\n```\n"
        blocks, unterminated = extract_code_blocks(body)

        assert len(blocks) == 1
        assert unterminated == []
        block = blocks[0]
        assert block.language == "ruby"
        assert block.start_line == 2
        assert block.end_line == 4
        assert block.content == "User.where(active: true)"
        assert block.terminated

    @pytest.mark.unit
    def test_untagged_block(self):
        blocks, _ = extract_code_blocks("```\nplain\n```\n")

        assert blocks[0].language is None
        assert blocks[0].info == ""

    @pytest.mark.unit
    def test_info_string_language_is_first_word(self):
        blocks, _ = extract_code_blocks("```php title=\"functions.php\"\necho 1;\n```\n")

        assert blocks[0].language == "php"
        assert blocks[0].info == 'php title="functions.php"'

    @pytest.mark.unit
    def test_unterminated_block_runs_to_end(self):
        body = "Intro\n```sql\nSELECT * FROM wp_posts;\n\nMore prose that is swallowed\n"
        blocks, unterminated = extract_code_blocks(body)

        assert len(unterminated) == 1
        assert unterminated[0].start_line == 2
        assert unterminated[0].end_line == 5
        assert not unterminated[0].terminated

    @pytest.mark.unit
    def test_line_offset(self):
        blocks, _ = extract_code_blocks("```php\nx\n```\n", line_offset=6)

        assert blocks[0].start_line == 7
        assert blocks[0].end_line == 9

    @pytest.mark.unit
    def test_tilde_fence_may_contain_backticks(self):
        blocks, unterminated = extract_code_blocks("~~~markdown\n```\n~~~\n")

        assert len(blocks) == 1
        assert blocks[0].content == "```"
        assert unterminated == []

    @pytest.mark.unit
    def test_closing_fence_must_be_at_least_as_long(self):
        blocks, unterminated = extract_code_blocks("````\n```\n````\n")

        assert len(blocks) == 1
        assert blocks[0].content == "```"
        assert unterminated == []

    @pytest.mark.unit
    def test_closing_fence_cannot_carry_info(self):
        blocks, unterminated = extract_code_blocks("```ruby\nx = 1\n```ruby\n")

        assert len(unterminated) == 1

    @pytest.mark.unit
    def test_inline_triple_backticks_are_not_a_fence(self):
        blocks, _ = extract_code_blocks("```echo 'hi'```\n")

        assert blocks == []

    @pytest.mark.unit
    def test_indented_fence_up_to_three_spaces(self):
        blocks, unterminated = extract_code_blocks("   ```php\n   echo 1;\n   ```\n")

        assert len(blocks) == 1
        assert unterminated == []

    @pytest.mark.unit
    def test_multiple_blocks(self):
        body = "```php\na\n```\n\ntext\n\n```ruby\nb\n```\n"
        blocks, _ = extract_code_blocks(body)

        assert [b.language for b in blocks] == ["php", "ruby"]
        assert [b.start_line for b in blocks] == [1, 7]


class TestExtractLinks:
    """Tests for extract_links()."""

    @pytest.mark.unit
    def test_inline_link_and_image(self):
        body = 'See [the codex](https://codex.wordpress.org/) and ![logo](img/logo.png "Logo").'
        links = extract_links(body)

        assert len(links) == 2
        assert links[0].kind == "inline"
        assert links[0].text == "the codex"
        assert links[0].url == "https://codex.wordpress.org/"
        assert not links[0].is_image
        assert links[1].is_image
        assert links[1].url == "img/logo.png"

    @pytest.mark.unit
    def test_empty_url(self):
        links = extract_links("A [broken]() link and [another]( ).")

        assert [link.url for link in links] == ["", ""]

    @pytest.mark.unit
    def test_angle_bracket_url(self):
        links = extract_links("[spaced](<docs/some page.md>)")

        assert links[0].url == "docs/some page.md"

    @pytest.mark.unit
    def test_url_with_parentheses(self):
        links = extract_links("[wiki](https://en.wikipedia.org/wiki/Scope_(computer_science))")

        assert links[0].url == "https://en.wikipedia.org/wiki/Scope_(computer_science)"

    @pytest.mark.unit
    def test_autolink(self):
        links = extract_links("Docs: <https://rubyonrails.org>")

        assert len(links) == 1
        assert links[0].kind == "autolink"
        assert links[0].url == "https://rubyonrails.org"

    @pytest.mark.unit
    def test_html_tags_are_not_autolinks(self):
        assert extract_links("Wrap it in <div> or <br/>.") == []

    @pytest.mark.unit
    def test_reference_links_and_definitions(self):
        body = (
            "Read the [querying guide][ar] and [ActiveRecord][].\n"
            "\n"
            "[ar]: https://guides.rubyonrails.org/active_record_querying.html\n"
            '[activerecord]: https://api.rubyonrails.org "API"\n'
        )
        scan = scan_markdown(body)
        references = [link for link in scan.links if link.kind == "reference"]

        assert [link.ref for link in references] == ["ar", "ActiveRecord"]
        assert scan.resolve(references[0]) == "https://guides.rubyonrails.org/active_record_querying.html"
        # Labels match case-insensitively
        assert scan.resolve(references[1]) == "https://api.rubyonrails.org"

    @pytest.mark.unit
    def test_undefined_reference_resolves_to_none(self):
        scan = scan_markdown("See [the docs][missing].")

        assert scan.resolve(scan.links[0]) is None

    @pytest.mark.unit
    def test_first_definition_wins(self):
        scan = scan_markdown("[a][x]\n\n[x]: https://first.example\n[x]: https://second.example\n")

        assert scan.definitions == {"x": "https://first.example"}

    @pytest.mark.unit
    def test_nested_image_inside_link(self):
        body = "[![build](https://ci.example.com/badge.svg)](https://ci.example.com)"
        links = extract_links(body)

        assert len(links) == 2
        assert links[0].url == "https://ci.example.com"
        assert not links[0].is_image
        assert links[1].url == "https://ci.example.com/badge.svg"
        assert links[1].is_image

    @pytest.mark.unit
    def test_links_in_code_blocks_are_ignored(self):
        body = "```php\n$rules['[a](b)'] = '<https://x.example>';\n```\n"

        assert extract_links(body) == []

    @pytest.mark.unit
    def test_links_in_inline_code_are_ignored(self):
        assert extract_links("Call `link_to [x](y)` in the view.") == []

    @pytest.mark.unit
    def test_line_numbers_with_offset(self):
        body = "first\n\nsecond [x](https://x.example)\n"
        links = extract_links(body, line_offset=5)

        assert links[0].line == 8


@pytest.mark.unit
def test_strip_inline_code_preserves_length():
    line = "use `[$a](b)` and ``a ` b`` here"
    stripped = strip_inline_code(line)

    assert len(stripped) == len(line)
    assert "[" not in stripped
    assert stripped.startswith("use ")
    assert stripped.endswith(" here")


class TestLooseLinks:
    """Links whose destination the strict inline form rejects."""

    @pytest.mark.unit
    def test_url_with_space(self):
        links = extract_links("Read [the guide](http://example.com/my guide.html) first.")

        assert len(links) == 1
        assert links[0].kind == "inline"
        assert links[0].text == "the guide"
        assert links[0].url == "http://example.com/my guide.html"

    @pytest.mark.unit
    def test_url_with_space_and_title(self):
        links = extract_links('![chart](img/q1 chart.png "Q1") and [ok](https://ok.example)')

        assert [link.url for link in links] == ["https://ok.example", "img/q1 chart.png"]
        assert links[1].is_image


@pytest.mark.unit
def test_form_feed_does_not_shift_line_numbers():
    body = "page one\x0cstill line 1\n[x]()\n"
    scan = scan_markdown(body, line_offset=4)

    assert scan.links[0].line == 6


@pytest.mark.unit
def test_crlf_body():
    blocks, unterminated = extract_code_blocks("```ruby\r\nputs 1\r\n```\r\n")

    assert unterminated == []
    assert blocks[0].language == "ruby"
    assert blocks[0].content == "puts 1"
