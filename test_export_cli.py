"""Tests for the export action, configuration and the command-line interface."""
import json
import time

import pytest

from show_advance import cli
from show_advance.config import DEFAULT_CONFIG, load_config, render_options_from_config
from show_advance.export import DocumentSurface, ExportAction, PdfFilePrinter
from show_advance.types import FormRecord, PlaceholderPolicy, RenderMode

RECORD = {"eventName": "Spring Gala", "eventDate": "2024-05-01", "settlementLocation": "Box office"}


class FakeTimer:
    created = []

    def __init__(self, delay, fn):
        self.delay = delay
        self.fn = fn
        self.started = False
        FakeTimer.created.append(self)

    def start(self):
        self.started = True


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("PORT", "SHOW_ADVANCE_STATIC_ROOT", "SHOW_ADVANCE_OUTPUT_DIR",
                 "SHOW_ADVANCE_MODE", "SHOW_ADVANCE_PLACEHOLDER"):
        monkeypatch.delenv(name, raising=False)
    FakeTimer.created = []


# ----------------------------
# ExportAction
# ----------------------------

def test_export_sets_title_prints_and_restores():
    printed = []
    surface = DocumentSurface(title="Original")

    def printer(title):
        printed.append((title, surface.title))

    action = ExportAction(printer, surface, timer_factory=FakeTimer)
    file_name = action.run(RECORD)

    assert file_name == "Show-Advance_Spring_Gala_2024-05-01"
    assert printed == [(file_name, file_name)]
    assert surface.title == file_name

    timer = FakeTimer.created[0]
    assert timer.started
    assert timer.delay == 0.15
    timer.fn()
    assert surface.title == "Original"


def test_export_runs_every_time():
    printed = []
    action = ExportAction(printed.append, timer_factory=FakeTimer)
    action.run(RECORD)
    action.run(FormRecord.from_mapping(RECORD))
    assert len(printed) == 2
    assert len(FakeTimer.created) == 2


def test_export_restores_title_with_real_timer():
    surface = DocumentSurface(title="Original")
    action = ExportAction(lambda title: None, surface, settle_delay=0.01)
    action.run(RECORD)

    deadline = time.time() + 2
    while surface.title != "Original" and time.time() < deadline:
        time.sleep(0.01)
    assert surface.title == "Original"


def test_pdf_file_printer_writes_pdf(tmp_path):
    pytest.importorskip("reportlab")
    printer = PdfFilePrinter(tmp_path, FormRecord.from_mapping(RECORD))
    action = ExportAction(printer, timer_factory=FakeTimer)
    file_name = action.run(RECORD)

    path = tmp_path / f"{file_name}.pdf"
    assert printer.written == [path]
    assert path.read_bytes().startswith(b"%PDF")


# ----------------------------
# Config
# ----------------------------

def test_config_defaults():
    cfg = load_config()
    assert cfg["port"] == 4173
    assert cfg["mode"] == "production"
    assert cfg["print_settle_delay"] == DEFAULT_CONFIG["print_settle_delay"]


def test_config_file_and_env_overrides(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"port": 9000, "mode": "internal", "bogus": 1}), encoding="utf-8")

    cfg = load_config(path)
    assert cfg["port"] == 9000
    assert cfg["mode"] == "internal"
    assert "bogus" not in cfg

    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("SHOW_ADVANCE_PLACEHOLDER", "blank")
    cfg = load_config(path)
    assert cfg["port"] == 8080
    options = render_options_from_config(cfg)
    assert options.mode == RenderMode.INTERNAL
    assert options.placeholder_policy == PlaceholderPolicy.BLANK


def test_config_bad_values_fall_back(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    monkeypatch.setenv("PORT", "not-a-port")
    cfg = load_config(path)
    assert cfg["port"] == 4173
    assert render_options_from_config({"mode": "weird"}).mode == RenderMode.PRODUCTION


# ----------------------------
# CLI
# ----------------------------

def _snapshot(tmp_path, **extra):
    data = dict(RECORD, contacts=[{"name": "Ann", "role": "Agent"}], **extra)
    path = tmp_path / "form.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_cli_render_html(tmp_path):
    out = tmp_path / "out"
    rc = cli.main(["render", "--in", str(_snapshot(tmp_path)), "--out-dir", str(out), "--format", "html"])
    assert rc == 0

    html = (out / "Show-Advance_Spring_Gala_2024-05-01.html").read_text(encoding="utf-8")
    assert "Spring Gala" in html
    assert "Ann" in html
    assert "Settlement (Internal)" not in html
    assert not (out / "Show-Advance_Spring_Gala_2024-05-01.pdf").exists()


def test_cli_render_mode_from_snapshot_and_flag(tmp_path):
    out = tmp_path / "out"
    snapshot = _snapshot(tmp_path, mode="internal")
    assert cli.main(["render", "--in", str(snapshot), "--out-dir", str(out), "--format", "html"]) == 0
    html_path = out / "Show-Advance_Spring_Gala_2024-05-01.html"
    assert "Settlement (Internal)" in html_path.read_text(encoding="utf-8")

    assert cli.main(["render", "--in", str(snapshot), "--out-dir", str(out), "--format", "html",
                     "--mode", "production"]) == 0
    assert "Settlement (Internal)" not in html_path.read_text(encoding="utf-8")


def test_cli_render_both(tmp_path):
    pytest.importorskip("reportlab")
    out = tmp_path / "out"
    assert cli.main(["render", "--in", str(_snapshot(tmp_path)), "--out-dir", str(out)]) == 0
    assert (out / "Show-Advance_Spring_Gala_2024-05-01.html").exists()
    assert (out / "Show-Advance_Spring_Gala_2024-05-01.pdf").read_bytes().startswith(b"%PDF")


def test_cli_export(tmp_path):
    pytest.importorskip("reportlab")
    out = tmp_path / "out"
    assert cli.main(["export", "--in", str(_snapshot(tmp_path)), "--out-dir", str(out)]) == 0
    assert (out / "Show-Advance_Spring_Gala_2024-05-01.pdf").exists()


def test_cli_reports_bad_input(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("[1, 2]", encoding="utf-8")
    assert cli.main(["render", "--in", str(bad), "--out-dir", str(tmp_path)]) == 1
    assert cli.main(["render", "--in", str(tmp_path / "missing.json"), "--out-dir", str(tmp_path)]) == 1


def test_cli_pdf_capability_error(tmp_path, monkeypatch):
    from show_advance import render_pdf

    monkeypatch.setattr(render_pdf, "REPORTLAB_AVAILABLE", False)
    rc = cli.main(["render", "--in", str(_snapshot(tmp_path)), "--out-dir", str(tmp_path), "--format", "pdf"])
    assert rc == 2


def test_cli_errors_are_tagged(tmp_path, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text("{broken", encoding="utf-8")
    assert cli.main(["render", "--in", str(bad), "--out-dir", str(tmp_path)]) == 1
    assert "[ERROR]" in capsys.readouterr().out


def test_slashed_date_writes_one_file(tmp_path):
    pytest.importorskip("reportlab")
    record = FormRecord.from_mapping({"eventName": "Gig", "eventDate": "05/01/2024"})
    printer = PdfFilePrinter(tmp_path, record)
    file_name = ExportAction(printer, timer_factory=FakeTimer).run(record)

    assert file_name == "Show-Advance_Gig_05/01/2024"
    assert printer.written == [tmp_path / "Show-Advance_Gig_05-01-2024.pdf"]
    assert printer.written[0].exists()
