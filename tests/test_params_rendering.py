import pytest
from pydantic import ValidationError

from logparams.app.params.models import ExtractionOptions, FieldSet, ParameterSource
from logparams.app.params.parser import first_values, parse_json_document
from logparams.app.params.renderer import compose_line, render_payload, render_value
from logparams.utils.log_safety import FILTERED, redact_param_list, redact_params


def test_render_value_flat_object():
    assert render_value({"foo": "bar", "n": 3}) == '{"foo" => "bar", "n" => 3}'


def test_render_value_nested_structures():
    value = {"a": {"b": [1, {"c": False}]}, "empty": {}, "list": []}

    assert render_value(value) == (
        '{"a" => {"b" => [1, {"c" => false}]}, "empty" => {}, "list" => []}'
    )


def test_render_value_keeps_non_ascii_text():
    assert render_value({"name": "Zoë"}) == '{"name" => "Zoë"}'


def test_render_payload_per_source():
    assert render_payload(FieldSet(source=ParameterSource.QUERY, query={"q": "x"})) == (
        '{"q" => "x"}'
    )
    assert render_payload(
        FieldSet(source=ParameterSource.JSON_ARRAY, json_array=[{"a": 1}, {"b": 2}])
    ) == '[{"a" => 1}, {"b" => 2}]'
    assert render_payload(FieldSet()) == ""
    assert render_payload(None) == ""


def test_compose_line_options():
    assert compose_line('{"a" => "1"}', ExtractionOptions()) == 'Parameters: {"a" => "1"}'
    assert compose_line('{"a" => "1"}', ExtractionOptions(hide_prefix=True)) == '{"a" => "1"}'
    assert compose_line("", ExtractionOptions()) == ""
    assert compose_line("", ExtractionOptions(show_empty=True)) == "Parameters: "
    assert compose_line("", ExtractionOptions(show_empty=True, hide_prefix=True)) == ""


def test_first_values_keeps_first_string_per_key():
    items = [("b", "1"), ("a", "2"), ("b", "3"), ("file", object())]

    assert first_values(items) == {"b": "1", "a": "2"}


def test_parse_json_document_object_and_array():
    assert parse_json_document(b'{"b":1,"a":2}') == (
        ParameterSource.JSON_OBJECT,
        {"b": 1, "a": 2},
    )
    assert parse_json_document(b'[{"a":1}]') == (ParameterSource.JSON_ARRAY, [{"a": 1}])


def test_parse_json_document_rejects_unusable_documents():
    for body in (b"", b"{", b"null", b"42", b"[]", b"{}", b'[{"a":1}, 2]'):
        assert parse_json_document(body) == (ParameterSource.NONE, None)


def test_redact_params_does_not_touch_the_original():
    original = {"password": "x", "profile": {"password": "nested"}}

    redacted = redact_params(original)

    assert redacted == {"password": FILTERED, "profile": {"password": "nested"}}
    assert original["password"] == "x"
    assert redacted["profile"] is not original["profile"]


def test_redact_params_filters_null_password():
    assert redact_params({"password": None}) == {"password": FILTERED}


def test_redact_param_list_handles_each_element():
    items = [{"password": "a"}, {"password_confirmation": "b", "id": 1}, {}]

    assert redact_param_list(items) == [
        {"password": FILTERED},
        {"password_confirmation": FILTERED, "id": 1},
        {},
    ]
    assert items[0]["password"] == "a"


def test_extraction_options_are_immutable():
    options = ExtractionOptions()

    with pytest.raises(ValidationError):
        options.show_password = True
