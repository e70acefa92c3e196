# tests/test_helpers.py
"""Tests for the toJson, join and url helper blocks."""

import pytest


HUMAN_0 = {"name": "John Smith", "age": 42, "height": 1.84}
HUMAN_1 = {"name": "Dave Smith", "age": 27, "height": 1.71}
HUMAN_0_JSON = '{"name":"John Smith","age":42,"height":1.84}'
HUMAN_1_JSON = '{"name":"Dave Smith","age":27,"height":1.71}'


class TestToJson:
    """Tests for {{#toJson}}."""

    @pytest.mark.parametrize("value, expected", [
        ("value", "value"),
        ("", ""),
        (True, "true"),
        (42, "42"),
        (42.5, "42.5"),
        (None, ""),
    ])
    def test_primitive_identifier(self, render_script, value, expected):
        """Scalars render in text form, unquoted; null renders empty."""
        assert render_script("{{#toJson}}ctx{{/toJson}}", {"ctx": value}) == expected

    @pytest.mark.parametrize("value, expected", [
        ("value", '{"ctx":"value"}'),
        ("", '{"ctx":""}'),
        (True, '{"ctx":true}'),
        (42, '{"ctx":42}'),
        (42.5, '{"ctx":42.5}'),
        (None, '{"ctx":null}'),
    ])
    def test_primitive_whole_scope(self, render_script, value, expected):
        assert render_script("{{#toJson}}.{{/toJson}}", {"ctx": value}) == expected

    def test_simple_map(self, render_script):
        params = {"ctx": HUMAN_0}
        assert render_script("{{#toJson}}.{{/toJson}}", params) == '{"ctx":' + HUMAN_0_JSON + '}'
        assert render_script("{{#toJson}}ctx{{/toJson}}", params) == HUMAN_0_JSON
        assert render_script("{{#toJson}}ctx.name{{/toJson}}", params) == "John Smith"

    def test_multiple_maps(self, render_script):
        params = {"ctx": {"first": HUMAN_0, "second": HUMAN_1}}
        both = '{"first":' + HUMAN_0_JSON + ',"second":' + HUMAN_1_JSON + '}'
        assert render_script("{{#toJson}}.{{/toJson}}", params) == '{"ctx":' + both + '}'
        assert render_script("{{#toJson}}ctx{{/toJson}}", params) == both
        assert render_script("{{#toJson}}ctx.first{{/toJson}}", params) == HUMAN_0_JSON
        assert render_script("{{#toJson}}ctx.second{{/toJson}}", params) == HUMAN_1_JSON

    @pytest.mark.parametrize("values", [("one", "two", "three"), ["one", "two", "three"]])
    def test_simple_sequence(self, render_script, values):
        params = {"array": values}
        assert render_script("{{#toJson}}.{{/toJson}}", params) == '{"array":["one","two","three"]}'
        assert render_script("{{#toJson}}array{{/toJson}}", params) == '["one","two","three"]'
        assert render_script("{{#toJson}}array.0{{/toJson}}", params) == "one"
        assert render_script("{{#toJson}}array.2{{/toJson}}", params) == "three"
        assert render_script("{{#toJson}}array.size{{/toJson}}", params) == "3"

    def test_set_serializes_as_array(self, render_script):
        assert render_script("{{#toJson}}tags{{/toJson}}", {"tags": {"only"}}) == '["only"]'

    def test_non_ascii_is_kept(self, render_script):
        assert render_script("{{#toJson}}ctx{{/toJson}}", {"ctx": {"name": "Zoë"}}) == '{"name":"Zoë"}'

    def test_missing_identifier_renders_empty(self, render_script):
        assert render_script("<{{#toJson}}nope{{/toJson}}>", {}) == "<>"

    def test_embedded_in_section(self, render_script):
        params = {"ctx": {"bulks": [
            {"index": "index-1", "id": 1, "type": "type-1"},
            {"index": "index-2", "id": 2, "type": "type-2"},
        ]}}
        assert render_script("{{#ctx.bulks}}{{#toJson}}.{{/toJson}}{{/ctx.bulks}}", params) == (
            '{"index":"index-1","id":1,"type":"type-1"}{"index":"index-2","id":2,"type":"type-2"}')
        assert render_script("{{#ctx.bulks}}<{{#toJson}}id{{/toJson}}>{{/ctx.bulks}}", params) == "<1><2>"


class TestJoin:
    """Tests for {{#join}}."""

    @pytest.mark.parametrize("values, expected", [
        (["one", "two", "three"], "one,two,three"),
        ([1, 2, 3], "1,2,3"),
        ((1.5, 2.5, 3.5), "1.5,2.5,3.5"),
        ([True, False, True], "true,false,true"),
        ([], ""),
    ])
    def test_simple_join(self, render_script, values, expected):
        assert render_script("{{#join}}array{{/join}}", {"array": values}) == expected

    @pytest.mark.parametrize("delimiter, expected", [
        ("", "1234"),
        (",", "1,2,3,4"),
        ("/", "1/2/3/4"),
        (" and ", "1 and 2 and 3 and 4"),
    ])
    def test_custom_delimiter(self, render_script, delimiter, expected):
        template = f"{{{{#join delimiter='{delimiter}'}}}}params{{{{/join delimiter='{delimiter}'}}}}"
        assert render_script(template, {"params": [1, 2, 3, 4]}) == expected

    @pytest.mark.parametrize("value", ["a string", 42, {"a": 1}, None])
    def test_non_collection_renders_empty(self, render_script, value):
        assert render_script("[{{#join}}value{{/join}}]", {"value": value}) == "[]"

    def test_set_contains_every_element(self, render_script):
        output = render_script("{{#join delimiter='|'}}tags{{/join delimiter='|'}}", {"tags": {"foo", "bar", "baz"}})
        assert sorted(output.split("|")) == ["bar", "baz", "foo"]

    def test_embedded_join(self, render_script):
        params = {"ctx": {"people": [
            {"name": "John Smith", "emails": ["john@smith.com", "john.smith@email.com", "jsmith@email.com"]},
            {"name": "John Doe", "emails": ["john@doe.com", "john.doe@email.com", "jdoe@email.com"]},
        ]}}
        assert render_script("{{#join}}ctx.people.0.emails{{/join}}", params) == (
            "john@smith.com,john.smith@email.com,jsmith@email.com")
        assert render_script("{{#join}}ctx.people.1.emails{{/join}}", params) == (
            "john@doe.com,john.doe@email.com,jdoe@email.com")
        assert render_script("{{#ctx.people}}to: {{#join}}emails{{/join}};{{/ctx.people}}", params) == (
            "to: john@smith.com,john.smith@email.com,jsmith@email.com;"
            "to: john@doe.com,john.doe@email.com,jdoe@email.com;")

    def test_join_with_to_json(self, render_script):
        params = {"terms": [{"term": "foo"}, {"term": "bar"}]}
        assert render_script("{{#join}}{{#toJson}}terms{{/toJson}}{{/join}}", params) == (
            '[{"term":"foo"},{"term":"bar"}]')


class TestUrl:
    """Tests for {{#url}}."""

    @pytest.mark.parametrize("raw, encoded", [
        ("https://www.elastic.co", "https%3A%2F%2Fwww.elastic.co"),
        ("<logstash-{now/d}>", "%3Clogstash-%7Bnow%2Fd%7D%3E"),
        ("?query=(foo:A OR baz:B) AND title:/joh?n(ath[oa]n)/ AND date:{* TO 2012-01}",
         "%3Fquery%3D%28foo%3AA+OR+baz%3AB%29+AND+title%3A%2Fjoh%3Fn%28ath%5Boa%5Dn%29%2F+AND+date%3A%7B*+TO+2012-01%7D"),
        ("tilde~and_dash-dot.", "tilde%7Eand_dash-dot."),
        ("café", "caf%C3%A9"),
    ])
    def test_url_encoder(self, render_script, raw, encoded):
        assert render_script("{{#url}}{{params}}{{/url}}", {"params": raw}) == encoded

    def test_url_encoder_with_param(self, render_script):
        assert render_script("{{#url}}{{index}}{{/url}}", {"index": "<logstash-{now/d{YYYY.MM.dd|+12:00}}>"}) == (
            "%3Clogstash-%7Bnow%2Fd%7BYYYY.MM.dd%7C%2B12%3A00%7D%7D%3E")
        value = "Abc xyz 09"
        assert render_script("{{#url}}prefix_{{s}}{{/url}}", {"s": value}) == "prefix_Abc+xyz+09"

    def test_url_encoder_with_join(self, render_script):
        params = {"emails": ["john@smith.com", "john.smith@email.com", "jsmith@email.com"]}
        assert render_script("?query={{#url}}{{#join}}emails{{/join}}{{/url}}", params) == (
            "?query=john%40smith.com%2Cjohn.smith%40email.com%2Cjsmith%40email.com")

        params = {"indices": ("<logstash-{now/d-2d}>", "<logstash-{now/d-1d}>", "<logstash-{now/d}>")}
        assert render_script("{{#url}}https://localhost:9200/{{#join}}indices{{/join}}/_stats{{/url}}", params) == (
            "https%3A%2F%2Flocalhost%3A9200%2F%3Clogstash-%7Bnow%2Fd-2d%7D"
            "%3E%2C%3Clogstash-%7Bnow%2Fd-1d%7D%3E%2C%3Clogstash-%7Bnow%2Fd%7D%3E%2F_stats")

        params = {"fibonacci": [1, 1, 2, 3, 5, 8, 13, 21, 34, 55]}
        assert render_script("{{#url}}{{#join delimiter='+'}}fibonacci{{/join delimiter='+'}}{{/url}}", params) == (
            "1%2B1%2B2%2B3%2B5%2B8%2B13%2B21%2B34%2B55")

    def test_url_inside_section(self, render_script):
        params = {"hosts": [{"q": "a b"}, {"q": "c&d"}]}
        assert render_script("{{#hosts}}/search?q={{#url}}{{q}}{{/url}};{{/hosts}}", params) == (
            "/search?q=a+b;/search?q=c%26d;")
