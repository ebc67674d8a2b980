import json
import os
import sys

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest
pytest.importorskip("bs4")

from delta_ssr.embeds import EmbedKind, aspect_ratio, build_embed_configs, render_custom_op


def embed(kind, value):
    return {"insert": {kind: value}, "attributes": {"renderAsBlock": True}}


def test_aspect_ratio_placeholder_for_sized_embed():
    html = render_custom_op(embed("custom-embed", {"embedWidth": "200", "embedHeight": "50"}))
    assert html == '<div style="padding-top: 25%"></div>'


def test_fractional_aspect_ratio():
    html = render_custom_op(embed("youtube", {"embedWidth": "16", "embedHeight": "9"}))
    assert html == '<div style="padding-top: 56.25%"></div>'


def test_non_numeric_size_falls_back_to_neutral_placeholder(capsys):
    html = render_custom_op(embed("custom-embed", {"embedWidth": "wide", "embedHeight": "50"}))
    assert html == "<div></div>"
    assert "[ERROR]" in capsys.readouterr().out


def test_zero_width_falls_back_to_neutral_placeholder():
    assert render_custom_op(embed("custom-embed", {"embedWidth": "0", "embedHeight": "50"})) == "<div></div>"


def test_unknown_kind_without_size_gets_neutral_placeholder():
    assert render_custom_op(embed("poll", {"question": "?"})) == "<div></div>"


def test_size_with_unit_suffix_falls_back_to_neutral_placeholder():
    assert aspect_ratio({"width": "100px", "height": "50px"}) is None
    html = render_custom_op(embed("custom-embed", {"embedWidth": "100px", "embedHeight": "50"}))
    assert html == "<div></div>"


def test_aspect_ratio_helper():
    assert aspect_ratio({"width": "200", "height": "50"}) == 25
    assert aspect_ratio({"width": 4, "height": 3}) == 75
    assert aspect_ratio({"width": "nan", "height": "3"}) is None
    assert aspect_ratio(None) is None


def test_block_image_uses_dedicated_builder():
    html = render_custom_op(embed("block-image", {"src": "https://ex.com/a.png", "alt": "A", "spoilers": True}))
    assert html.startswith('<div class="ql-block-image spoilers">')
    assert 'src="https://ex.com/a.png"' in html


def test_tweet_and_tumblr_builders():
    tweet = render_custom_op(embed("tweet", "1234"))
    assert 'data-tweet-id="1234"' in tweet
    tumblr = render_custom_op(embed("tumblr-embed", {"href": "https://embed.tumblr.com/x", "did": "d1", "url": "https://t.umblr.com/x"}))
    assert 'data-did="d1"' in tumblr and "ql-tumblr-embed" in tumblr


def test_oembed_kinds_get_their_own_presentation():
    pixiv = render_custom_op(embed("pixiv-embed", {"url": "https://pixiv.net/1"}))
    assert 'class="ql-oembed-embed ql-pixiv-embed"' in pixiv
    assert "#0096fa" in pixiv
    assert "行っ・・・行っちゃう!" in pixiv

    tiktok = render_custom_op(embed("tiktok-embed", {"url": "https://tiktok.com/1"}))
    assert 'class="ql-oembed-embed ql-tiktok-embed"' in tiktok
    assert "aquamarine" in tiktok
    assert "Hello fellow kids" in tiktok

    generic = render_custom_op(embed("oembed-embed", {"url": "https://ex.com/1"}))
    assert 'class="ql-oembed-embed"' in generic
    assert "#e6e6e6" in generic
    assert "Doing my best!" in generic


def test_sized_oembed_reserves_its_height():
    html = render_custom_op(embed("oembed-embed", {"url": "u", "embedWidth": "200", "embedHeight": "100"}))
    assert '<div style="padding-top: 50%"></div>' in html


def test_configuration_overrides():
    configs = build_embed_configs({"tiktok-embed": {"background_color": "black"}})
    html = render_custom_op(embed("tiktok-embed", {"url": "u"}), embed_configs=configs)
    assert "background-color: black" in html
    assert configs[EmbedKind.PIXIV_EMBED].background_color == "#0096fa"


def test_configuration_rejects_kinds_without_oembed_builder():
    with pytest.raises(ValueError):
        build_embed_configs({"tweet": {"background_color": "black"}})


def test_inline_spoiler_text_is_escaped():
    html = render_custom_op({"insert": {"inline-spoilers-text": "<b>A</b>"}})
    assert html == '<span class="inline-spoilers">&lt;b&gt;A&lt;/b&gt;</span>'


@pytest.mark.parametrize("kind", [k.value for k in EmbedKind] + ["unknown", "custom-embed"])
@pytest.mark.parametrize("value", [None, "", {}, "text", {"embedWidth": "x", "embedHeight": "y"}, 7])
def test_renderer_is_total(kind, value):
    html = render_custom_op({"insert": {kind: value}})
    assert isinstance(html, str) and html


def test_unknown_kind_is_recorded_only_in_report_dir(tmp_path, capsys):
    render_custom_op(embed("poll", {}), report_dir=str(tmp_path))
    lines = (tmp_path / "success.jsonl").read_text(encoding="utf-8").splitlines()
    entry = json.loads(lines[0])
    assert entry["code"] == "UNKNOWN_EMBED"
    assert entry["embed"] == "poll"
    assert not (tmp_path / "errors.jsonl").exists()
    assert "[ERROR]" not in capsys.readouterr().out


def test_unknown_kind_without_report_dir_prints_nothing(capsys):
    render_custom_op(embed("poll", {}))
    assert capsys.readouterr().out == ""
