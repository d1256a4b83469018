"""Tests for the web render target and HTML serialization."""

from typing import Any

from blog_richtext.core.render.projection import render
from blog_richtext.core.render.web import WebTarget, render_html, to_html
from blog_richtext.models.presentation import Capabilities, Element
from tests.unit.builders import TRUSTED_IMAGE, UNTRUSTED_IMAGE, doc, para, text


def image(src: str, **attrs: Any) -> dict[str, Any]:
    return {"type": "image", "attrs": {"src": src, **attrs}}


def test_sample_document_html(sample_doc: dict[str, Any]) -> None:
    out = render_html(sample_doc)
    assert out.startswith('<div class="prose-content"><h1>Chai and code</h1>')
    assert "<p>Hello <strong>world</strong></p>" in out
    assert "<ul><li><p>first point</p></li></ul>" in out
    assert "<p>Foo bar baz</p>" in out


def test_trusted_image_renders_figure_with_caption() -> None:
    root = render(doc(image(TRUSTED_IMAGE, alt="cover", title="A cover")), WebTarget())
    img = root.find_all("img")[0]
    assert img.props["src"] == TRUSTED_IMAGE
    assert img.props["alt"] == "cover"
    assert img.props["loading"] == "lazy"
    assert root.find_all("figcaption")[0].text_content() == "A cover"


def test_image_without_title_has_no_caption() -> None:
    root = render(doc(image(TRUSTED_IMAGE)), WebTarget())
    assert root.find_all("figcaption") == []


def test_untrusted_image_renders_external_card() -> None:
    root = render(doc(image(UNTRUSTED_IMAGE)), WebTarget())
    assert root.find_all("img") == []
    card = root.find_all("figure")[0]
    assert card.props["class"] == "external-image"
    link = card.find_all("a")[0]
    assert link.props["href"] == UNTRUSTED_IMAGE
    assert link.text_content() == "View image externally"


def test_trust_tier_can_be_switched_off() -> None:
    target = WebTarget(Capabilities(image_trust_tier=False))
    root = render(doc(image(UNTRUSTED_IMAGE)), target)
    assert root.find_all("img")[0].props["src"] == UNTRUSTED_IMAGE


def test_invalid_image_renders_unavailable_placeholder() -> None:
    out = render_html(doc(image("blob:https://example.com/123"), image("")))
    assert out.count('class="image-unavailable"') == 2
    assert "Image not available" in out
    assert "<img" not in out


def test_relative_image_renders_external_card() -> None:
    root = render(doc(image("/uploads/a.png")), WebTarget())
    assert root.find_all("img") == []
    card = root.find_all("figure")[0]
    assert card.props["class"] == "external-image"
    assert card.find_all("a")[0].props["href"] == "/uploads/a.png"


def test_text_is_escaped() -> None:
    out = render_html(doc(para(text("<script>alert('x')</script> & more"))))
    assert "<script>" not in out
    assert "&lt;script&gt;" in out
    assert "&amp; more" in out


def test_attribute_values_are_escaped() -> None:
    out = render_html(doc(para(text("q", href='https://example.com/?a="b"&c'))))
    assert 'href="https://example.com/?a=&quot;b&quot;&amp;c"' in out


def test_boolean_and_none_attributes() -> None:
    el = Element("iframe", {"allowfullscreen": True, "hidden": False, "title": None})
    assert to_html(el) == "<iframe allowfullscreen></iframe>"


def test_void_tags_have_no_closing_tag() -> None:
    assert to_html(Element("hr")) == "<hr>"
    assert to_html(Element("img", {"src": "/a.png"})) == '<img src="/a.png">'


def test_fragment_serializes_children_only() -> None:
    frag = Element("#fragment", {}, ("a", Element("b", {}, ("c",))))
    assert to_html(frag) == "a<b>c</b>"


def test_youtube_iframe_markup() -> None:
    out = render_html(doc({"type": "youtube", "attrs": {"src": "https://youtube.com/watch?v=dQw4w9WgXcQ"}}))
    assert '<div class="video-embed"><iframe src="https://www.youtube-nocookie.com/embed/dQw4w9WgXcQ"' in out
    assert "allowfullscreen" in out
