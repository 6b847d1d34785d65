from scanfix.domain.models import SynthesizedCorrection
from scanfix.services.export_service import export_correction, export_to_file, file_sink

CORRECTION = SynthesizedCorrection(
    file_name="app.py",
    patched_source=("import os", "# SECURITY: Use a safer alternative to eval()"),
    has_explicit_fix=True,
)


def test_export_passes_patched_text_to_sink():
    copied = []
    notice = export_correction(CORRECTION, copied.append)
    assert copied == ["import os\n# SECURITY: Use a safer alternative to eval()"]
    assert notice.ok
    assert notice.message == "app.py copied to clipboard"


def test_export_failure_is_reported_not_raised():
    def broken(text):
        raise OSError("no clipboard")

    notice = export_correction(CORRECTION, broken)
    assert not notice.ok
    assert notice.message == "Failed to copy to clipboard"


def test_file_sink_writes_into_export_dir(tmp_path):
    notice = export_correction(CORRECTION, file_sink("app.py", export_dir=str(tmp_path / "out")))
    assert notice.ok
    assert (tmp_path / "out" / "app.py").read_text(encoding="utf-8") == CORRECTION.code


def test_export_to_file_reports_the_save(tmp_path):
    out = str(tmp_path / "fixed")
    notice = export_to_file(CORRECTION, export_dir=out)
    assert notice.ok
    assert notice.message == f"app.py saved to {out}"
    assert (tmp_path / "fixed" / "app.py").read_text(encoding="utf-8") == CORRECTION.code


def test_export_to_file_failure_names_the_file(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    notice = export_to_file(CORRECTION, export_dir=str(blocker))
    assert not notice.ok
    assert notice.message == "Failed to save app.py"
