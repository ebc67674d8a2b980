from __future__ import annotations

EMPTY_PARAGRAPH = '<p class="empty"><br/></p>'

_EMPTY_PARAGRAPH_FORMS = ("<p><br></p>", "<p><br/></p>")


def mark_empty_paragraphs(html: str) -> str:
    """
    Tag paragraphs holding a single line break with the ``empty`` class.

    Works on the literal markup, so it must run after the spoiler merge:
    the merge re-serializes fragments through BeautifulSoup, which writes
    void tags as ``<br/>``.
    """
    for form in _EMPTY_PARAGRAPH_FORMS:
        html = html.replace(form, EMPTY_PARAGRAPH)
    return html
