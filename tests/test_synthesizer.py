"""Tests for the remediation synthesizer."""

from factories import finding, make_file

from scanfix.domain.models import CorrectionDirective
from scanfix.repair.keyword_fallback import KeywordFallbackSource, comment_token, template_for
from scanfix.repair.narrative import extract_directives
from scanfix.repair.registry import DirectiveSourceRegistry
from scanfix.repair.synthesizer import synthesize


# ── Narrative extraction ──────────────────────────────────────────


def test_extracts_recommended_fix():
    directives = extract_directives("On line 12, the recommended fix is: `sanitize(input)`")
    assert directives == [CorrectionDirective(target_line=12, replacement_text="sanitize(input)")]


def test_extracts_multiple_in_narrative_order():
    text = "Line 2: recommended fix `x = 1`. Line 4 has a suggested fix: `y = 2`."
    assert [(d.target_line, d.replacement_text) for d in extract_directives(text)] == [(2, "x = 1"), (4, "y = 2")]


def test_extraction_is_case_insensitive_and_trims():
    directives = extract_directives("LINE 3 needs a FIX like `   z = safe()  `")
    assert directives == [CorrectionDirective(target_line=3, replacement_text="z = safe()")]


def test_extraction_spans_newlines():
    directives = extract_directives("Problem on line 7.\nSuggested fix:\n`run(args)`")
    assert directives[0].target_line == 7


def test_no_backticks_yields_nothing():
    assert extract_directives("Line 3 looks risky, consider a fix.") == []


def test_empty_narrative_yields_nothing():
    assert extract_directives(None) == []
    assert extract_directives("") == []


# ── Keyword fallback ──────────────────────────────────────────────


def test_template_order_first_match_wins():
    assert "eval" in template_for("eval used to read a file")
    assert "parameterized" in template_for("possible command injection via file name")


def test_template_for_unknown_description():
    assert template_for("weak random number generator") is None


def test_template_match_is_case_sensitive():
    assert template_for("Hardcoded secret") is None
    assert template_for("Use of EVAL") is None
    assert template_for("Possible Command Injection") is None


def test_capitalised_keyword_gives_no_fallback_fix():
    file = make_file(findings=[finding("Hardcoded password", lines=(1,))])
    correction = synthesize(file)
    assert correction.has_explicit_fix is False
    assert correction.patched_source == file.original_source


def test_comment_token_by_extension():
    assert comment_token("app.py") == "#"
    assert comment_token("app.js") == "//"


def test_fallback_emits_one_directive_per_line():
    file = make_file(findings=[finding("Use of eval", lines=(2, 5)), finding("weak crypto", lines=(3,))])
    directives = KeywordFallbackSource().directives(file)
    assert [d.target_line for d in directives] == [2, 5]


# ── synthesize() ──────────────────────────────────────────────────


def test_narrative_fix_replaces_target_line():
    file = make_file(
        lines=15,
        findings=[finding("something", lines=(12,))],
        narrative="On line 12, the recommended fix is: `sanitize(input)`",
    )
    result = synthesize(file)

    assert result.patched_source[11] == "sanitize(input)"
    for i, line in enumerate(result.patched_source):
        if i != 11:
            assert line == file.original_source[i]
    assert result.has_explicit_fix is True
    assert result.directive_source == "narrative"
    assert result.applied_lines == (12,)


def test_fallback_replaces_hardcoded_credential_line():
    file = make_file(lines=10, findings=[finding("hardcoded password", lines=(5,))], narrative="")
    result = synthesize(file)

    assert result.patched_source[4] == "# SECURITY: Use environment variables or secure storage for credentials"
    assert result.patched_source[:4] == file.original_source[:4]
    assert result.patched_source[5:] == file.original_source[5:]
    assert result.has_explicit_fix is True
    assert result.directive_source == "keyword-fallback"


def test_out_of_range_line_leaves_source_unchanged():
    file = make_file(lines=10, findings=[finding("Use of eval", lines=(999,))])
    result = synthesize(file)

    assert result.patched_source == file.original_source
    assert result.has_explicit_fix is False
    assert result.applied_lines == ()


def test_line_zero_is_out_of_range():
    file = make_file(lines=3, findings=[finding("x")], narrative="line 0 fix `boom`")
    assert synthesize(file).has_explicit_fix is False


def test_narrative_directives_suppress_fallback_even_if_unapplied():
    file = make_file(
        lines=5,
        findings=[finding("Use of eval", lines=(2,))],
        narrative="On line 50 the fix is `noop()`",
    )
    result = synthesize(file)
    assert result.directive_source == "narrative"
    assert result.patched_source == file.original_source
    assert result.has_explicit_fix is False


def test_narrative_without_directive_falls_back():
    file = make_file(
        lines=5,
        findings=[finding("Use of eval", lines=(3,))],
        narrative="Line 3 looks risky, consider a fix.",
    )
    result = synthesize(file)
    assert result.patched_source[2] == "# SECURITY: Use a safer alternative to eval()"


def test_javascript_fallback_uses_slash_comment():
    file = make_file(lines=4, findings=[finding("command injection", lines=(1,))], file_path="web\\server.js")
    result = synthesize(file)
    assert result.file_name == "server.js"
    assert result.patched_source[0] == "// SECURITY: Use parameterized commands or input validation"


def test_last_writer_wins_on_same_line():
    file = make_file(lines=3, findings=[finding("x")], narrative="line 2 fix `a` and line 2 fix `b`")
    assert synthesize(file).patched_source[1] == "b"


def test_unmatched_findings_produce_no_fix():
    file = make_file(lines=3, findings=[finding("insecure random", lines=(1,))])
    result = synthesize(file)
    assert result.has_explicit_fix is False
    assert result.directive_source is None


def test_no_findings_returns_none():
    assert synthesize(make_file(narrative="line 1 fix `x`")) is None


def test_no_source_returns_none():
    file = make_file(lines=0, findings=[finding("eval", lines=(1,))])
    assert synthesize(file) is None


def test_synthesize_is_pure():
    file = make_file(
        lines=8,
        findings=[finding("eval", lines=(2,)), finding("hardcoded key", lines=(6,))],
        narrative="nothing actionable",
    )
    assert synthesize(file) == synthesize(file)


def test_custom_registry_order():
    file = make_file(lines=3, findings=[finding("eval", lines=(1,))], narrative="line 2 fix `n()`")
    result = synthesize(file, registry=DirectiveSourceRegistry([KeywordFallbackSource()]))
    assert result.directive_source == "keyword-fallback"
    assert result.applied_lines == (1,)


def test_code_joins_lines():
    file = make_file(lines=2, findings=[finding("x")], narrative="line 1 fix `a = 1`")
    assert synthesize(file).code == "a = 1\nline 2"
