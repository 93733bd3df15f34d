
import io, sys
from typing import List

import pytest
import z3

from sexpfmt.parse import parse, ParseError, UnclosedInput, UnterminatedCompound, MalformedCompound
from sexpfmt.render import FormatArgs, render, format_sexpr
from sexpfmt.sexpr import Atom, Compound, dump
from sexpfmt.smt import format_z3
from sexpfmt.__main__ import main

def fmt(s: str, threshold: int = 1, short: bool = False) -> str:
    return format_sexpr(parse(s), FormatArgs(threshold, short))

def test_atoms() -> None:
    for s in ["a", "forall", "x1", "+", "=>", "a.b'c", "#t", "-12"]:
        assert fmt(s) == s
        assert fmt("  " + s + "\n") == s
        assert parse(s) == Atom(s)

def test_complexity() -> None:
    t = parse("(a b c)")
    assert isinstance(t, Compound)
    assert t.complexity == 1
    assert fmt("(a b c)") == "(a b c)"
    assert parse("(f)").complexity == 1

    t = parse("(a (b c) (d (e f)))")
    assert isinstance(t, Compound)
    assert t.complexity == 3
    b_c, d_e_f = t.args
    assert b_c.complexity == 1
    assert d_e_f.complexity == 2
    assert d_e_f.args[0].complexity == 1
    assert parse("((f g) x)").complexity == 2

def test_multiline_layout() -> None:
    s = "(a (b c) (d (e f)))"
    assert fmt(s, 1) == "(a\n    (b c)\n    (d\n        (e f)\n    )\n)"
    assert fmt(s, 2) == "(a\n    (b c)\n    (d (e f))\n)"
    assert fmt(s, 3) == "(a (b c) (d (e f)))"
    assert fmt(s, 10) == "(a (b c) (d (e f)))"
    assert fmt("(a b)", 0) == "(a\n    b\n)"
    assert fmt("((f g) x)", 1) == "((f g)\n    x\n)"

def test_base_indent() -> None:
    out = format_sexpr(parse("(a b)"), FormatArgs(0, False, 2))
    assert out == "(a\n      b\n  )"

def test_whitespace_insignificant() -> None:
    assert parse("(a\n\t(b   c)\n)") == parse("(a (b c))")
    assert fmt("  (a\n\t(b   c)\n)  \n", 0) == fmt("(a (b c))", 0)

def test_short_quantifiers() -> None:
    s = "(forall x (P x))"
    assert fmt(s, 2, True) == "(forall x (P x))"
    assert fmt(s, 1, True) == "(forall x\n    (P x)\n)"
    assert fmt(s, 1, False) == "(forall\n    x\n    (P x)\n)"
    assert fmt(s, 0, True) == "(forall x\n    (P\n        x\n    )\n)"
    assert fmt("(exists y N (r y y))", 1, True) == "(exists y\n    N\n    (r y y)\n)"
    # only the exact heads are compacted
    assert fmt("(Forall x (P x))", 1, True) == "(Forall\n    x\n    (P x)\n)"
    assert fmt("(forall)", 0, True) == "(forall\n)"
    # binder lists stay on the quantifier's line
    assert fmt("(forall ((x Int)) (> x 0))", 2, True) == "(forall ((x Int))\n    (> x 0)\n)"
    # compaction does not change the tree
    assert parse(fmt(s, 0, True)).complexity == parse(s).complexity

def test_idempotent() -> None:
    inputs = [
        "(a (b c) (d (e f)))",
        "(forall x N (exists y N (or (r x y) (= x y))))",
        "((f g) (h (i j)) k)",
        "(and (or (p a) (p b)) (not (= a b)))",
        "x",
    ]
    for s in inputs:
        for threshold in range(4):
            for short in [False, True]:
                once = fmt(s, threshold, short)
                assert parse(once) == parse(s)
                assert fmt(once, threshold, short) == once

def test_empty_input() -> None:
    assert parse("") is None
    assert parse("   \n\t ") is None
    assert format_sexpr(None) == ""
    assert fmt("") == ""

def test_unterminated() -> None:
    for s in ["(a", "(a b", "(", "  (a (b c)", "(a (b c) (d"]:
        with pytest.raises(UnterminatedCompound):
            parse(s)

def test_unclosed() -> None:
    for s in ["a b)", "(a))", ")", "(a) b", "a b"]:
        with pytest.raises(UnclosedInput):
            parse(s)

def test_empty_parens() -> None:
    for s in ["()", "(a ())", "( )"]:
        with pytest.raises(MalformedCompound):
            parse(s)

def test_error_messages() -> None:
    with pytest.raises(ParseError) as info:
        parse("(a))")
    assert info.value.loc == (1, 4)
    assert str(info.value).startswith("Parse Error: unclosed sexpr")

    with pytest.raises(ParseError) as info:
        parse("(a\n b))")
    assert info.value.loc == (2, 4)

    with pytest.raises(ParseError) as info:
        parse("(a b")
    assert "<end of input>" in str(info.value)

def test_equality_ignores_location() -> None:
    a = parse("(a b)")
    b = parse("\n\n   (a\n b)")
    assert a == b
    assert hash(a) == hash(b)
    assert a != parse("(a c)")
    assert parse("a") != parse("(a)")
    assert repr(parse("(a\n(b  c))")) == "(a (b c))"

class RecordingSink(object):
    def __init__(self, fail_after: int = -1):
        self.writes: List[str] = []
        self.fail_after = fail_after
    def write(self, s: str) -> int:
        if len(self.writes) == self.fail_after:
            raise OSError("sink closed")
        self.writes.append(s)
        return len(s)

def test_render_incremental() -> None:
    t = parse("(a (b c) (d (e f)))")
    sink = RecordingSink()
    render(t, FormatArgs(), sink) # type: ignore
    assert len(sink.writes) > 1
    assert "".join(sink.writes) == format_sexpr(t)

def test_render_write_error() -> None:
    sink = RecordingSink(fail_after=3)
    with pytest.raises(OSError):
        render(parse("(a (b c) (d (e f)))"), FormatArgs(), sink) # type: ignore
    assert len(sink.writes) == 3

def test_format_args() -> None:
    with pytest.raises(ValueError):
        FormatArgs(-1)
    with pytest.raises(ValueError):
        FormatArgs(1, False, -4)
    args = FormatArgs(3, True)
    assert args.with_depth(8) == FormatArgs(3, True, 8)
    assert args.depth == 0

def test_dump() -> None:
    d = dump(parse("(a (b c) (d (e f)))"))
    assert d.splitlines()[0] == "Compound complexity=3 at 1:1"
    assert "Atom 'e' complexity=0 at 1:14" in d
    assert dump(parse("x")) == "Atom 'x' complexity=0 at 1:1"

def test_format_z3() -> None:
    x = z3.Int('x')
    f = z3.ForAll([x], x + 1 > x)
    text = format_z3(f, FormatArgs(2, True))
    assert text.startswith("(forall ((x Int))")
    assert parse(text) == parse(f.sexpr())

    a, b, c = z3.Bools('a b c')
    g = z3.And(a, z3.Or(b, z3.Not(c)))
    assert format_z3(g, FormatArgs(10)) == "(and a (or b (not c)))"
    assert parse(format_z3(g, FormatArgs(0))) == parse(g.sexpr())

def test_cli_single_line(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("(a (b c) (d (e f)))\n(ignored)\n"))
    main(["-s", "-c", "2"])
    assert capsys.readouterr().out == "(a\n    (b c)\n    (d (e f))\n)\n"

def test_cli_prompt_and_quantifiers(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("(forall x (P x))\n"))
    main(["-q"])
    assert capsys.readouterr().out == "Input s-expression to format: \n(forall x\n    (P x)\n)\n"

def test_cli_multiline(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("(a\n  (b c))\n\n(more)\n"))
    main(["-s", "-m", "--complexity-threshold", "5"])
    assert capsys.readouterr().out == "(a (b c))\n"

def test_cli_file_and_debug(tmp_path, capsys: pytest.CaptureFixture) -> None:
    p = tmp_path / "in.sexp"
    p.write_text("(f x)\n")
    main([str(p), "-d"])
    out = capsys.readouterr().out
    assert out.startswith("final result:\nCompound complexity=1 at 1:1\n")
    assert out.endswith("(f x)\n")

def test_cli_empty(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("\n"))
    main(["-s"])
    assert capsys.readouterr().out == "\n"

def test_cli_parse_error(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("(a b\n"))
    with pytest.raises(SystemExit) as info:
        main(["-s"])
    assert info.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("Parse Error: malformed sexpr: expected `)`")

def test_cli_rejects_negative_threshold(capsys: pytest.CaptureFixture) -> None:
    with pytest.raises(SystemExit) as info:
        main(["-c", "-1"])
    assert info.value.code == 2

def test_cli_deep_nesting(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    depth = sys.getrecursionlimit() * 3
    monkeypatch.setattr(sys, "stdin", io.StringIO("(" * depth + "a" + ")" * depth + "\n"))
    with pytest.raises(SystemExit) as info:
        main(["-s"])
    assert info.value.code == 1
    assert capsys.readouterr().err.startswith("Error: s-expression nested too deeply")

def test_cli_moderate_nesting(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    text = "(f " * 100 + "x" + ")" * 100
    monkeypatch.setattr(sys, "stdin", io.StringIO(text + "\n"))
    main(["-s", "-c", "100"])
    assert capsys.readouterr().out == text + "\n"
