from markupsafe import Markup

from core.html import attribute_name, content_tag, normalize_attributes, safe_join, tag, tag_options


def test_attribute_name():
    assert attribute_name("class_") == "class"
    assert attribute_name("aria_describedby") == "aria-describedby"
    assert attribute_name("for") == "for"


def test_normalize_attributes_keeps_order():
    attrs = normalize_attributes({"maxlength": 3, "class_": "a", "id": "x"})

    assert list(attrs) == ["maxlength", "class", "id"]
    assert normalize_attributes(None) == {}


def test_tag_options_skips_none_and_false():
    assert tag_options({"a": None, "b": False, "c": "1"}) == ' c="1"'
    assert tag_options({}) == ""


def test_boolean_and_list_values():
    assert tag_options({"checked": True, "class": ["a", None, "b"]}) == ' checked="checked" class="a b"'


def test_tag_escapes_values():
    assert tag("input", {"value": '"<x>"'}) == '<input value="&#34;&lt;x&gt;&#34;" />'


def test_content_tag_escapes_plain_text_only():
    assert content_tag("span", "<b>") == "<span>&lt;b&gt;</span>"
    assert content_tag("span", Markup("<b>")) == "<span><b></span>"
    assert content_tag("div", None, {"class": "x"}) == '<div class="x"></div>'


def test_safe_join_flattens_and_escapes():
    output = safe_join([Markup("<i>"), ["<", None], "b"], "\n")

    assert isinstance(output, Markup)
    assert output == "<i>\n&lt;\nb"
