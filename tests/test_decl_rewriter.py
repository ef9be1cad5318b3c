"""Tests for the declaration rewriter."""

from ctxfix.fixer.decls import fix_decls, fix_func
from ctxfix.fixer.signatures import build_table
from ctxfix.go.printer import render

HEADER = 'package main\n\nimport (\n\t"net/http"\n\n\t"context"\n)\n\n'


def rewrite(parse, body: str, **kwargs):
    source = parse(HEADER + body)
    kwargs.setdefault("trace", lambda line: None)
    rewrites = fix_decls(source, **kwargs)
    return source, rewrites, render(source).decode()[len(HEADER):]


class TestScenarios:
    def test_handler_loses_context(self, parse, trace_lines):
        body = (
            "func homeHandler(ctx context.Context, w http.ResponseWriter, r *http.Request) (int, error) {\n"
            '\tfmt.Fprint(w, "Hello: ", ctx.Value("ua"))\n'
            "\treturn http.StatusOK, nil\n"
            "}\n"
        )

        source, rewrites, out = rewrite(parse, body, trace=trace_lines.append)

        assert out == (
            "func homeHandler(w http.ResponseWriter, r *http.Request) (int, error) {\n"
            '\tfmt.Fprint(w, "Hello: ", r.Context().Value("ua"))\n'
            "\treturn http.StatusOK, nil\n"
            "}\n"
        )
        assert len(rewrites) == 1
        assert rewrites[0].func_name == "homeHandler"
        assert rewrites[0].ctx_name == "ctx"
        assert rewrites[0].req_name == "r"
        assert rewrites[0].removed_index == 0
        assert rewrites[0].renamed == 1
        assert trace_lines == [
            'Checking function: homeHandler - accepts context.Context ident "ctx" '
            'and *http.Request as "r"'
        ]

    def test_context_without_request_is_left_alone(self, parse, trace_lines):
        body = "func worker(ctx context.Context, n int) {\n\tuse(ctx, n)\n}\n"

        source, rewrites, out = rewrite(parse, body, trace=trace_lines.append)

        assert out == body
        assert rewrites == []
        assert not source.changed
        assert trace_lines == [
            "Checking function: worker - does not accept *http.Request (leaving it alone)"
        ]


class TestEligibility:
    def test_no_params(self, parse, trace_lines):
        body = "func main() {\n\tctx := 1\n\t_ = ctx\n}\n"

        _, rewrites, out = rewrite(parse, body, trace=trace_lines.append)

        assert out == body
        assert rewrites == []
        assert trace_lines == ["Checking function: main - does not have parameters"]

    def test_request_without_context(self, parse, trace_lines):
        body = "func h(w http.ResponseWriter, r *http.Request) {\n\tctx := r.Context()\n\t_ = ctx\n}\n"

        _, rewrites, out = rewrite(parse, body, trace=trace_lines.append)

        assert out == body
        assert rewrites == []
        assert trace_lines == ["Checking function: h - does not accept context.Context"]

    def test_request_by_value_does_not_count(self, parse):
        body = "func h(ctx context.Context, r http.Request) {\n\t_ = ctx\n}\n"

        _, rewrites, out = rewrite(parse, body)

        assert out == body
        assert rewrites == []

    def test_blank_request_does_not_count(self, parse):
        body = "func h(ctx context.Context, _ *http.Request) {\n\t_ = ctx\n}\n"

        _, rewrites, out = rewrite(parse, body)

        assert out == body
        assert rewrites == []

    def test_methods_are_rewritten(self, parse):
        body = (
            "func (s *server) handle(ctx context.Context, req *http.Request) {\n"
            "\ts.log(ctx)\n"
            "}\n"
        )

        _, rewrites, out = rewrite(parse, body)

        assert out == "func (s *server) handle(req *http.Request) {\n\ts.log(req.Context())\n}\n"
        assert rewrites[0].func_name == "handle"

    def test_type_declarations_are_ignored(self, parse):
        body = "type handler func(context.Context, http.ResponseWriter, *http.Request)\n"

        _, rewrites, out = rewrite(parse, body)

        assert out == body
        assert rewrites == []

    def test_every_function_is_examined(self, parse, trace_lines):
        body = (
            "func a(ctx context.Context, r *http.Request) { _ = ctx }\n\n"
            "func b() {}\n\n"
            "func c(ctx context.Context, r *http.Request) { _ = ctx }\n"
        )

        _, rewrites, out = rewrite(parse, body, trace=trace_lines.append)

        assert [r.func_name for r in rewrites] == ["a", "c"]
        assert len(trace_lines) == 3
        assert out == (
            "func a(r *http.Request) { _ = r.Context() }\n\n"
            "func b() {}\n\n"
            "func c(r *http.Request) { _ = r.Context() }\n"
        )


class TestArityReduction:
    def test_context_in_the_middle(self, parse):
        body = "func h(w http.ResponseWriter, ctx context.Context, r *http.Request) {}\n"

        source, _, out = rewrite(parse, body)

        assert out == "func h(w http.ResponseWriter, r *http.Request) {}\n"
        assert [p.name for p in source.funcs[0].params] == ["w", "r"]

    def test_context_last(self, parse):
        body = "func h(w http.ResponseWriter, r *http.Request, ctx context.Context) {}\n"

        _, rewrites, out = rewrite(parse, body)

        assert out == "func h(w http.ResponseWriter, r *http.Request) {}\n"
        assert rewrites[0].removed_index == 2

    def test_multiline_parameter_list(self, parse):
        body = (
            "func h(\n"
            "\tctx context.Context,\n"
            "\tw http.ResponseWriter,\n"
            "\tr *http.Request,\n"
            ") {\n"
            "}\n"
        )

        _, _, out = rewrite(parse, body)

        assert out == (
            "func h(\n"
            "\tw http.ResponseWriter,\n"
            "\tr *http.Request,\n"
            ") {\n"
            "}\n"
        )

    def test_last_context_parameter_wins(self, parse):
        body = (
            "func h(a context.Context, r *http.Request, b context.Context) {\n"
            "\tuse(a, b)\n"
            "}\n"
        )

        source, rewrites, out = rewrite(parse, body)

        assert rewrites[0].ctx_name == "b"
        assert rewrites[0].removed_index == 2
        assert [p.name for p in source.funcs[0].params] == ["a", "r"]
        assert out == "func h(a context.Context, r *http.Request) {\n\tuse(a, r.Context())\n}\n"

    def test_unnamed_context_is_removed_without_renames(self, parse):
        body = "func h(_ context.Context, w http.ResponseWriter, r *http.Request) {\n\t_ = w\n}\n"

        _, rewrites, out = rewrite(parse, body)

        assert out == "func h(w http.ResponseWriter, r *http.Request) {\n\t_ = w\n}\n"
        assert rewrites[0].renamed == 0


class TestIdentifierSubstitution:
    def test_only_matching_names_change(self, parse):
        body = (
            "func h(ctx context.Context, r *http.Request) {\n"
            "\tctxValue := ctx.Value(key)\n"
            "\tother.ctx = ctxValue\n"
            "}\n"
        )

        _, rewrites, out = rewrite(parse, body)

        assert out == (
            "func h(r *http.Request) {\n"
            "\tctxValue := r.Context().Value(key)\n"
            "\tother.ctx = ctxValue\n"
            "}\n"
        )
        assert rewrites[0].renamed == 1

    def test_every_reference_is_renamed(self, parse):
        body = (
            "func h(c context.Context, req *http.Request) {\n"
            "\tgo work(c)\n"
            "\tdefer cleanup(c)\n"
            "\tfunc() { log(c) }()\n"
            "}\n"
        )

        _, rewrites, out = rewrite(parse, body)

        assert out.count("req.Context()") == 3
        assert "(c)" not in out
        assert rewrites[0].renamed == 3

    def test_shadowed_names_are_renamed_by_default(self, parse):
        body = (
            "func h(ctx context.Context, r *http.Request) {\n"
            "\tif true {\n"
            "\t\tctx := 1\n"
            "\t\t_ = ctx\n"
            "\t}\n"
            "}\n"
        )

        _, rewrites, out = rewrite(parse, body)

        assert "r.Context() := 1" in out
        assert rewrites[0].renamed == 2

    def test_respect_mode_skips_shadowed_names(self, parse):
        body = (
            "func h(ctx context.Context, r *http.Request) {\n"
            "\tuse(ctx)\n"
            "\tif true {\n"
            "\t\tctx := 1\n"
            "\t\t_ = ctx\n"
            "\t}\n"
            "}\n"
        )

        _, rewrites, out = rewrite(parse, body, shadowing="respect")

        assert out == (
            "func h(r *http.Request) {\n"
            "\tuse(r.Context())\n"
            "\tif true {\n"
            "\t\tctx := 1\n"
            "\t\t_ = ctx\n"
            "\t}\n"
            "}\n"
        )
        assert rewrites[0].renamed == 1


def test_custom_signature_table(parse):
    source = parse(
        "package main\n\nfunc h(ctx xcontext.Context, r *http.Request) {\n\t_ = ctx\n}\n"
    )
    table = build_table({"signatures": {"context": ["xcontext.Context"]}})

    result = fix_func(source.funcs[0], table=table, trace=lambda line: None)

    assert result is not None
    assert render(source) == b"package main\n\nfunc h(r *http.Request) {\n\t_ = r.Context()\n}\n"
