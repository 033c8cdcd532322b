"""
Label, id and control-group composition.

Focus:
    - ids derived from field names without overwriting caller ids
    - required labels via the `.req` suffix, the `required=` flag, or a custom marker
    - error class and inline error text on the control group
"""

from backend.formly import Formly, MappingErrors, MappingOldInput, NoMarker, RendererConfig, SuffixMarker

from conftest import FakeCsrf


# --- Attributes ---------------------------------------------------------------

def test_id_is_derived_from_name(make_formly):
    form = make_formly()
    assert form.resolve_attributes("email", {"class": "span4"}) == {"class": "span4", "id": "field_email"}


def test_caller_id_is_never_overwritten(make_formly):
    form = make_formly()
    assert form.resolve_attributes("email", {"id": "mine"}) == {"id": "mine"}


def test_name_as_id_disabled_keeps_attributes(make_formly):
    form = make_formly(name_as_id=False)
    assert form.resolve_attributes("email", {"class": "x"}) == {"class": "x"}


def test_custom_id_prefix(make_formly):
    form = make_formly(id_prefix="contact-")
    assert form.resolve_attributes("email")["id"] == "contact-email"


def test_caller_attributes_are_not_mutated(make_formly):
    attrs = {"class": "span4"}
    form = make_formly()
    form.text("email", "Email", attributes=attrs)
    form.textarea("notes", "Notes", attributes=attrs)
    assert attrs == {"class": "span4"}


# --- Labels -------------------------------------------------------------------

def test_empty_label_renders_nothing(make_formly):
    assert make_formly().build_label("x", "") == ""


def test_plain_label(make_formly):
    assert make_formly().build_label("x", "Name") == '<label for="x" class="control-label">Name</label>'


def test_required_suffix_is_stripped_and_decorated(make_formly):
    form = make_formly(required_label=".req", required_prefix="", required_suffix=" *", required_class="label-required")
    assert form.build_label("x", "Name.req") == (
        '<label for="x" class="control-label label-required">Name *</label>'
    )


def test_only_trailing_marker_is_stripped(make_formly):
    html = make_formly().build_label("x", "a.req.b.req")
    assert ">a.req.b *<" in html


def test_required_prefix_and_custom_class(make_formly):
    form = make_formly(required_prefix="! ", required_suffix="", required_class="strong")
    assert form.build_label("x", "Name.req") == '<label for="x" class="control-label strong">! Name</label>'


def test_required_flag_decorates_without_marker(make_formly):
    html = make_formly().build_label("x", "Name", required=True)
    assert html == '<label for="x" class="control-label label-required">Name *</label>'


def test_empty_required_label_disables_suffix_detection(make_formly):
    html = make_formly(required_label="").build_label("x", "Name.req")
    assert html == '<label for="x" class="control-label">Name.req</label>'


def test_custom_marker_policy(tags):
    class StarPrefix:
        def matches(self, label):
            return label.startswith("*")

        def strip(self, label):
            return label[1:]

    form = Formly(tags, csrf=FakeCsrf(), required_marker=StarPrefix())
    assert form.build_label("x", "*Name") == '<label for="x" class="control-label label-required">Name *</label>'
    assert form.build_label("x", "Name.req") == '<label for="x" class="control-label">Name.req</label>'


def test_no_marker_policy_relies_on_flag(tags):
    form = Formly(tags, csrf=FakeCsrf(), required_marker=NoMarker())
    assert "label-required" not in form.build_label("x", "Name.req")
    assert "label-required" in form.build_label("x", "Name", required=True)


def test_default_marker_follows_option_changes(tags):
    form = Formly(tags, csrf=FakeCsrf())
    form.set_options(required_label="!")
    assert isinstance(form.required_marker, SuffixMarker)
    assert form.build_label("x", "Name!") == '<label for="x" class="control-label label-required">Name *</label>'


def test_label_text_is_escaped(make_formly):
    assert "Tom &amp; Jerry" in make_formly().build_label("x", "Tom & Jerry")


# --- Wrapper ------------------------------------------------------------------

def test_wrapper_layout_without_errors(make_formly):
    html = make_formly().build_wrapper("<input>", "title", "Title")
    assert html == (
        '<div class="control-group">'
        '<label for="title" class="control-label">Title</label>'
        '<div class="controls">\n'
        "<input>"
        "</div>"
        "</div>\n"
    )


def test_wrapper_without_label(make_formly):
    html = make_formly().build_wrapper("<input>", "title")
    assert html == '<div class="control-group"><div class="controls">\n<input></div></div>\n'


def test_error_class_added_when_error_exists(make_formly):
    html = make_formly(errors={"title": ["Required"]}).build_wrapper("<input>", "title", "Title")
    assert html.startswith('<div class="control-group error">')
    assert "help-inline" not in html


def test_error_class_skipped_when_option_empty(make_formly):
    html = make_formly(errors={"title": ["Required"]}, control_group_error="").build_wrapper("<input>", "title")
    assert html.startswith('<div class="control-group">')


def test_no_error_class_for_other_fields(make_formly):
    html = make_formly(errors={"other": ["Required"]}).build_wrapper("<input>", "title")
    assert html.startswith('<div class="control-group">')


def test_inline_error_shows_first_message(make_formly):
    form = make_formly(errors={"title": ["First", "Second"]}, display_inline_errors=True)
    html = form.build_wrapper("<input>", "title", "Title")
    assert '<input><span class="help-inline">First</span></div></div>\n' in html
    assert "Second" not in html


def test_inline_error_needs_an_error(make_formly):
    html = make_formly(display_inline_errors=True).build_wrapper("<input>", "title")
    assert "help-inline" not in html


def test_empty_error_list_counts_as_no_error(tags):
    form = Formly(tags, errors=MappingErrors({"title": []}), old_input=MappingOldInput(), csrf=FakeCsrf(),
                  config=RendererConfig(display_inline_errors=True))
    html = form.build_wrapper("<input>", "title")
    assert html.startswith('<div class="control-group">')
    assert "help-inline" not in html
