import pytest

from itools.highlighter import (
    LINE_BREAK,
    convert_rhs_text_to_html,
    convert_text_to_html,
    document_to_html,
)


@pytest.mark.parametrize("line", ["", " "])
def test_blank_lines_become_line_break(line):
    assert convert_text_to_html(line) == "<p> </p>"


def test_two_spaces_are_not_a_line_break():
    result = convert_text_to_html("  ")
    assert result == "<p style='text-decoration: green wavy underline;'>  </p>"


@pytest.mark.parametrize("line", ["# hello", "   #note", "#"])
def test_comment_lines(line):
    assert convert_text_to_html(line) == "<p style='color:gray'>" + line + "</p>"


def test_comment_wins_over_keyword():
    line = "# echo something"
    assert convert_text_to_html(line) == "<p style='color:gray'>" + line + "</p>"


def test_keyword_with_string_literal():
    rhs = ' "hi there"'
    expected = (
        "<p><span style='color:#FFB76B'>echo</span>"
        "<span style='color:#3eb489'>" + rhs + "</span></p>"
    )
    assert convert_text_to_html("echo" + rhs) == expected


def test_keyword_is_case_insensitive_and_keeps_case():
    expected = "<p><span style='color:#FFB76B'>ECHO</span> plain</p>"
    assert convert_text_to_html("ECHO plain") == expected


def test_keyword_drops_leading_whitespace():
    assert convert_text_to_html("   ls -la") == (
        "<p><span style='color:#FFB76B'>ls</span> -la</p>"
    )


def test_keyword_prefix_of_word_is_not_keyword():
    line = "lsblk"
    assert convert_text_to_html(line) == (
        "<p style='text-decoration: green wavy underline;'>" + line + "</p>"
    )


def test_variable_assignment():
    assert convert_text_to_html("$x = 5") == (
        "<p><span style='color:#87CEEB'>$x </span>= 5</p>"
    )


def test_variable_assignment_with_string():
    rhs = ' "value"'
    assert convert_text_to_html("$name =" + rhs) == (
        "<p><span style='color:#87CEEB'>$name </span>="
        "<span style='color:#3eb489'>" + rhs + "</span></p>"
    )


def test_rhs_without_quotes_is_unchanged():
    assert convert_rhs_text_to_html(" plain text") == " plain text"


def test_rhs_with_single_quote_char_is_unchanged():
    assert convert_rhs_text_to_html(' only "one') == ' only "one'


def test_rhs_with_quotes_is_wrapped():
    text = 'say "x"'
    assert convert_rhs_text_to_html(text) == "<span style='color:#3eb489'>" + text + "</span>"


def test_document_empty_gives_empty():
    assert document_to_html("") == ""


def test_document_wraps_lines_in_pre():
    result = document_to_html("echo\n")
    assert result == "<pre><p><span style='color:#FFB76B'>echo</span></p>" + LINE_BREAK + "</pre>"


def test_document_line_count_matches_paragraphs():
    text = "# a\n$b = 1\nfoo\n\nps"
    result = document_to_html(text)
    assert result.startswith("<pre>") and result.endswith("</pre>")
    assert result.count("</p>") == len(text.split("\n"))