"""Tests for the printable picklist."""

from gymfix.io.picklist_pdf import export_picklist_pdf


def test_export_picklist(tmp_path, ledger):
    ledger.add_to_picklist("j1", "p2")
    ledger.add_to_picklist("j1", "p4")
    ledger.add_to_picklist("j1", "p4")
    out = tmp_path / "pdf" / "picklist.pdf"

    path = export_picklist_pdf(ledger.get_job("j1"),
                               ledger.picklist_lines("j1"), out)

    assert path == str(out)
    assert out.read_bytes().startswith(b"%PDF")


def test_empty_picklist(tmp_path, ledger):
    out = tmp_path / "empty.pdf"
    export_picklist_pdf(ledger.get_job("j1"), [], out)
    assert out.stat().st_size > 0


def test_unknown_part_row(tmp_path, repo, ledger):
    ledger.add_to_picklist("j1", "p1")
    repo.get_job("j1").picklist[0].part_id = "gone"
    out = tmp_path / "unknown.pdf"
    export_picklist_pdf(ledger.get_job("j1"), ledger.picklist_lines("j1"),
                        out)
    assert out.exists()


def test_default_path_in_tempdir(tmp_path, monkeypatch, ledger):
    monkeypatch.setattr("tempfile.tempdir", str(tmp_path))
    path = export_picklist_pdf(ledger.get_job("j2"), [])
    assert path.endswith("gymfix_picklist_j2.pdf")
    assert path.startswith(str(tmp_path))
