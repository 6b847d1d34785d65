from factories import finding, make_file

from scanfix.domain.models import ScanRequest, ScanSummary
from scanfix.normalizers.results_normalizer import ResultsNormalizer
from scanfix.repair.synthesizer import synthesize
from scanfix.ui.view_models import can_scan, dependency_rows, file_card, finding_label, summary_rows


def test_finding_label_lines():
    assert finding_label(finding("eval", lines=(3, 5))) == "HIGH - eval (Line(s): 3, 5)"
    assert finding_label(finding("eval", lines=(3,))) == "HIGH - eval (Line: 3)"
    assert finding_label(finding("eval")) == "HIGH - eval"


def test_file_card_hides_correction_without_explicit_fix():
    file = make_file(findings=[finding("weak random", lines=(1,))])
    card = file_card(file, synthesize(file))
    assert card.fixed_code is None
    assert card.findings == ["HIGH - weak random (Line: 1)"]


def test_file_card_shows_fixed_code():
    file = make_file(lines=2, findings=[finding("eval", lines=(1,))], narrative="See line 1, fix: `safe()`")
    card = file_card(file, synthesize(file))
    assert card.fixed_code == "safe()\nline 2"
    assert card.narrative.startswith("See line 1")


def test_summary_rows_verbatim():
    rows = summary_rows(ScanSummary(total_files_analyzed=3, total_vulnerabilities=7))
    assert rows[0] == ("Total Files Analyzed", 3)
    assert rows[1] == ("Total Vulnerabilities", 7)
    assert rows[2] == ("Critical Vulnerabilities", None)
    assert summary_rows(None) == []


def test_dependency_rows_only_for_repository_scans(sample_results):
    results = ResultsNormalizer().normalize(sample_results)
    assert dependency_rows(results, ScanRequest(inline_source="x")) == []

    rows = dependency_rows(results, ScanRequest(repository_reference="https://github.com/a/b"))
    assert rows[0] == "Package: requests (v2.19.0)"
    assert "CVE-2018-18074" in rows[1]


def test_can_scan():
    assert can_scan(True, "https://github.com/a/b", "", busy=False)
    assert not can_scan(True, "  ", "code", busy=False)
    assert can_scan(False, "", "print(1)", busy=False)
    assert not can_scan(False, "", "print(1)", busy=True)
