"""
HtmlTagBuilder: single-tag markup with escaping.
"""

from backend.web.components.base import Component
from backend.web.components.forms.tags import HtmlTagBuilder


def test_component_attributes_mapping_and_keywords():
    assert Component.attributes({"id": "field_email"}, class_="span4", disabled=True) == (
        'id="field_email" class="span4" disabled'
    )
    assert Component.attributes(data_value="1", hidden=False, title=None) == 'data-value="1"'


def test_component_classes():
    assert Component.classes("btn", "", "btn-primary", disabled=True, active=False) == "btn btn-primary disabled"


def test_input_escapes_value(tags):
    html = tags.input("text", "q", '"><script>')
    assert html == '<input type="text" name="q" value="&quot;&gt;&lt;script&gt;">'


def test_input_omits_missing_value(tags):
    assert tags.input("file", "upload") == '<input type="file" name="upload">'


def test_input_attributes_cannot_override_type_or_name(tags):
    html = tags.text("q", "x", {"type": "hidden", "name": "other", "class": "span2"})
    assert html == '<input type="text" name="q" value="x" class="span2">'


def test_textarea_defaults(tags):
    assert tags.textarea("bio") == '<textarea name="bio" rows="10" cols="50"></textarea>'


def test_select_with_option_groups(tags):
    html = tags.select("topic", {"general": "General", "Support": {"bug": "Bug", "feature": "Feature"}}, "bug")
    assert html == (
        '<select name="topic">'
        '<option value="general">General</option>'
        '<optgroup label="Support">'
        '<option value="bug" selected>Bug</option>'
        '<option value="feature">Feature</option>'
        "</optgroup>"
        "</select>"
    )


def test_select_multiple_selected_values(tags):
    html = tags.select("tags", {1: "One", 2: "Two", 3: "Three"}, ["1", 3], {"multiple": True})
    assert '<select name="tags" multiple>' in html
    assert '<option value="1" selected>One</option>' in html
    assert '<option value="2">Two</option>' in html
    assert '<option value="3" selected>Three</option>' in html


def test_select_matches_by_string_value(tags):
    assert '<option value="2" selected>' in tags.select("n", {1: "One", 2: "Two"}, "2")


def test_checkbox(tags):
    assert tags.checkbox("agree", "1", True) == '<input type="checkbox" name="agree" value="1" checked>'
    assert tags.checkbox("agree", "1", "") == '<input type="checkbox" name="agree" value="1">'


def test_button_without_attributes(tags):
    assert tags.button("Go") == "<button>Go</button>"


def test_label(tags):
    assert tags.label("email", "E-mail <b>", {"class": "control-label"}) == (
        '<label for="email" class="control-label">E-mail &lt;b&gt;</label>'
    )


def test_open_custom_charset_and_close():
    tags = HtmlTagBuilder()
    html = tags.open("/x", "post", {"accept-charset": "ISO-8859-1", "method": "GET"})
    assert html == '<form method="POST" action="/x" accept-charset="ISO-8859-1">'
    assert tags.close() == "</form>"


def test_open_https_false_downgrades_absolute_action(tags):
    assert 'action="http://example.com/a"' in tags.open("https://example.com/a", https=False)


def test_open_delete_is_spoofed(tags):
    html = tags.open("/items/1", "delete")
    assert html == (
        '<form method="POST" action="/items/1" accept-charset="UTF-8">'
        '<input type="hidden" name="_method" value="DELETE">'
    )
