import copy
import os
import sys

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest
pytest.importorskip("bs4")

from bs4 import BeautifulSoup

from delta_ssr.converters.ssr import (
    SsrConverter,
    convert_delta_to_html,
    get_ssr_converter,
    promote_block_ops,
    ssr_css_classes,
)
from delta_ssr.models.delta import DeltaInputError
from delta_ssr.postprocess.spoilers import compact_spoilers

SPOILER_OPS = [
    {"insert": {"inline-spoilers-text": "A"}, "attributes": {"inline-spoilers": True}},
    {"insert": {"inline-spoilers-text": "B"}, "attributes": {"inline-spoilers": True}},
    {"insert": "\n"},
]


def test_adjacent_spoiler_embeds_end_up_in_one_wrapper():
    html = convert_delta_to_html(SPOILER_OPS)
    found = BeautifulSoup(html, "html.parser").find_all(class_="inline-spoilers")
    assert len(found) == 1
    assert found[0].get_text() == "AB"
    assert html == '<p><span class="inline-spoilers">AB</span></p>'


def test_ops_container_is_accepted():
    assert convert_delta_to_html({"ops": SPOILER_OPS}) == convert_delta_to_html(SPOILER_OPS)


def test_formatted_spoiler_text_is_merged():
    ops = [
        {"insert": "A", "attributes": {"bold": True, "inline-spoilers": True}},
        {"insert": "B", "attributes": {"inline-spoilers": True}},
        {"insert": " C\n"},
    ]
    assert convert_delta_to_html(ops) == '<p><span class="inline-spoilers"><strong>A</strong>B</span> C</p>'


def test_code_block_gets_syntax_class():
    ops = [{"insert": "x = 1"}, {"insert": "\n", "attributes": {"code-block": True}}]
    assert convert_delta_to_html(ops) == '<pre class="ql-syntax">x = 1</pre>'


def test_every_line_is_its_own_paragraph_and_empty_ones_are_marked():
    html = convert_delta_to_html([{"insert": "a\n\nb\n"}])
    assert html == '<p>a</p><p class="empty"><br/></p><p>b</p>'


def test_paragraph_grouping_cannot_be_turned_back_on():
    converter = SsrConverter(converter_options={"multi_line_paragraph": True})
    assert converter.convert([{"insert": "a\nb\n"}]) == "<p>a</p><p>b</p>"


def test_normalization_runs_after_spoiler_merge():
    # The merge re-serializes the whole inline group; the empty paragraph of
    # that group must still be marked afterwards.
    ops = [
        {"insert": "A", "attributes": {"inline-spoilers": True}},
        {"insert": "B", "attributes": {"inline-spoilers": True}},
        {"insert": "\n\n"},
    ]
    html = convert_delta_to_html(ops)
    assert html == '<p><span class="inline-spoilers">AB</span></p><p class="empty"><br/></p>'


def test_merge_serializes_breaks_in_a_form_the_normalizer_matches():
    merged = compact_spoilers(
        '<p><span class="inline-spoilers">A</span><span class="inline-spoilers">B</span></p><p><br></p>'
    )
    assert merged.endswith("<p><br/></p>")


def test_block_embeds_render_outside_paragraphs():
    ops = [{"insert": "intro\n"}, {"insert": {"block-image": {"src": "a.png"}}}, {"insert": "\n"}]
    assert convert_delta_to_html(ops) == '<p>intro</p><div class="ql-block-image"><img src="a.png" alt=""/></div>'


def test_sized_embed_becomes_a_block_placeholder():
    ops = [{"insert": {"custom-embed": {"embedWidth": "200", "embedHeight": "50"}}}, {"insert": "\n"}]
    assert convert_delta_to_html(ops) == '<div style="padding-top: 25%"></div>'


def test_promotion_preserves_attributes_and_input():
    ops = [
        {"insert": {"tweet": "1"}, "attributes": {"spoilers": True}},
        {"insert": "text"},
    ]
    before = copy.deepcopy(ops)
    promoted = promote_block_ops(ops)
    assert promoted[0]["attributes"] == {"spoilers": True, "renderAsBlock": True}
    assert promoted[1] is ops[1]
    assert ops == before


def test_css_class_hook_first_match_wins():
    both = {"insert": "x", "attributes": {"code-block": True, "inline-spoilers": True}}
    assert ssr_css_classes(both) == "ql-syntax"
    assert ssr_css_classes({"insert": "x", "attributes": {"inline-spoilers": True}}) == "inline-spoilers"
    assert ssr_css_classes({"insert": {"x": 1}, "attributes": {"inline-spoilers": True}}) is None
    assert ssr_css_classes({"insert": "x"}) is None


def test_embed_overrides_reach_the_renderer():
    converter = get_ssr_converter(embed_overrides={"oembed-embed": {"loading_message": "Loading..."}})
    html = converter.convert([{"insert": {"oembed-embed": {"url": "https://ex.com"}}}, {"insert": "\n"}])
    assert "Loading..." in html
    assert "Doing my best!" not in html


@pytest.mark.parametrize("bad", ["text", 42, None, {"foo": []}, [{"attributes": {}}], [{"insert": {}}]])
def test_invalid_input_is_rejected(bad):
    with pytest.raises(DeltaInputError):
        convert_delta_to_html(bad)


def test_conversion_is_deterministic():
    ops = SPOILER_OPS + [{"insert": "x", "attributes": {"italic": True, "inline-spoilers": True}}, {"insert": "\n"}]
    assert convert_delta_to_html(ops) == convert_delta_to_html(copy.deepcopy(ops))


def test_unknown_inline_embed_renders_silently(capsys):
    html = convert_delta_to_html([{"insert": "a"}, {"insert": {"poll": {"question": "?"}}}, {"insert": "\n"}])
    assert "<div></div>" in html
    assert capsys.readouterr().out == ""
