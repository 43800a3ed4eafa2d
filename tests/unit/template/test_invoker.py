"""Unit tests for template function invocation."""

from sigv4_render.template import TemplateContext, render_call, try_parse_call
from sigv4_render.template.invoker import call_text, lookup_function


def _ctx(**funcs):
    return TemplateContext(funcs={f"${name}": func for name, func in funcs.items()})


class TestLookupFunction:
    """Tests for function lookup."""

    def test_registered(self):
        def now():
            return "2024"

        call = try_parse_call("{{ $now() }}")
        assert lookup_function(call, _ctx(now=now)) is now

    def test_unregistered(self):
        call = try_parse_call("{{ $now() }}")
        assert lookup_function(call, _ctx()) is None
        assert lookup_function(call, TemplateContext()) is None


class TestRenderCall:
    """Tests for splicing call results."""

    def test_splices_result(self):
        text = "ts={{ $now() }}!"
        call = try_parse_call(text)
        assert render_call(text, call, _ctx(now=lambda: "2024-01-01")) == "ts=2024-01-01!"

    def test_passes_literal_args(self):
        seen = []

        def pick(*args):
            seen.append(args)
            return args[0]

        text = "{{ $pick('a', 1, true, null) }}"
        call = try_parse_call(text)
        assert render_call(text, call, _ctx(pick=pick)) == "a"
        assert seen == [("a", 1, True, None)]

    def test_unknown_function_leaves_text(self):
        text = "{{ $missing(1) }}"
        call = try_parse_call(text)
        assert render_call(text, call, _ctx()) == text

    def test_none_result_is_empty(self):
        text = "[{{ $nothing() }}]"
        call = try_parse_call(text)
        assert render_call(text, call, _ctx(nothing=lambda: None)) == "[]"

    def test_container_result_is_json(self):
        text = "v={{ $obj() }}"
        call = try_parse_call(text)
        assert render_call(text, call, _ctx(obj=lambda: {"k": [1]})) == 'v={"k":[1]}'

    def test_number_result(self):
        text = "n={{ $num() }}"
        call = try_parse_call(text)
        assert render_call(text, call, _ctx(num=lambda: 3)) == "n=3"


class TestCallText:
    """Tests for the text a call result is spliced as."""

    def test_passes_arguments(self):
        def join(*args):
            return "-".join(str(arg) for arg in args)

        call = try_parse_call("{{ $join('a', 2, true) }}")
        assert call_text(call, _ctx(join=join)) == "a-2-True"

    def test_none_result(self):
        call = try_parse_call("{{ $nothing() }}")
        assert call_text(call, _ctx(nothing=lambda: None)) == ""

    def test_non_ascii_container(self):
        call = try_parse_call("{{ $city() }}")
        assert call_text(call, _ctx(city=lambda: ["Zürich"])) == '["Zürich"]'
