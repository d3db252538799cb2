"""Line-by-line syntax highlighting of shell scripts into HTML."""

from __future__ import annotations

import re

LINE_BREAK = "<p> </p>"

_KEYWORDS = re.compile(
    r"^\s*\b(echo|ls|ps|Write-Output|Get-ChildItem|Connect-SPOService|"
    r"Get-SPOsite|Set-SPOUser|Install-Module)\b(.*)$",
    re.IGNORECASE,
)
_COMMENT = re.compile(r"^\s*(#\w*)")
_DOUBLE_QUOTED = re.compile(r'"(.*?)"')
_VARIABLE = re.compile(r"^\s*(\$\w+\s*)=(.*?)$", re.IGNORECASE)


def convert_rhs_text_to_html(text: str) -> str:
    """Colour the right-hand side of a statement when it holds a string literal."""
    if _DOUBLE_QUOTED.search(text):
        return "<span style='color:#3eb489'>" + text + "</span>"
    return text


def convert_text_to_html(line: str) -> str:
    """Render one line of script as an HTML paragraph."""
    if not line:
        return LINE_BREAK

    if _COMMENT.match(line):
        return "<p style='color:gray'>" + line + "</p>"

    keyword = _KEYWORDS.match(line)
    if keyword:
        return (
            "<p>"
            "<span style='color:#FFB76B'>" + keyword.group(1) + "</span>"
            + convert_rhs_text_to_html(keyword.group(2))
            + "</p>"
        )

    variable = _VARIABLE.match(line)
    if variable:
        return (
            "<p>"
            "<span style='color:#87CEEB'>" + variable.group(1) + "</span>"
            "=" + convert_rhs_text_to_html(variable.group(2))
            + "</p>"
        )

    if line == " ":
        return LINE_BREAK

    return "<p style='text-decoration: green wavy underline;'>" + line + "</p>"


def document_to_html(text: str) -> str:
    """Render a whole script as preformatted HTML; empty text gives an empty string."""
    if not text:
        return ""
    body = "".join(convert_text_to_html(line) for line in text.split("\n"))
    return "<pre>" + body + "</pre>"