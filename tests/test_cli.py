from __future__ import annotations

import io
import json
import logging

import pytest

from payref import cli


@pytest.fixture(autouse=True)
def _no_file_logging(monkeypatch, tmp_path):
    monkeypatch.setattr(cli, "setup_logging", lambda log_dir, name="payref": logging.getLogger(name))
    monkeypatch.setattr(cli, "resolve_log_dir", lambda log_dir: tmp_path)


def _cfg(tmp_path) -> str:
    return str(tmp_path / "missing.yaml")


def test_validate_all_valid_exits_zero(tmp_path, capsys):
    rc = cli.main(["--config", _cfg(tmp_path), "validate", "+++090/9337/55493+++", "6100000000000003"])
    out = capsys.readouterr().out.splitlines()
    assert rc == 0
    assert out == ["OK Belgium +++090/9337/55493+++", "OK Netherlands 6100000000000003"]


def test_validate_reports_failure(tmp_path, capsys):
    rc = cli.main(["--config", _cfg(tmp_path), "validate", "7100000000000003"])
    out = capsys.readouterr().out
    assert rc == 1
    assert out.startswith("FAIL Netherlands 7100000000000003: The payment reference is not a valid reference")


def test_json_output(tmp_path, capsys):
    rc = cli.main(["--config", _cfg(tmp_path), "--json", "validate", "+++090/9337/55494+++"])
    payload = json.loads(capsys.readouterr().out)
    assert rc == 1
    assert payload["reference"] == "+++090/9337/55494+++"
    assert payload["scheme"] == "Belgium"
    assert payload["error_kind"] == "checksum_mismatch"


def test_check_file_skips_blank_lines(tmp_path, capsys):
    src = tmp_path / "refs.txt"
    src.write_text("+++090/9337/55493+++\n\n  06100000000000003  \n", encoding="utf-8")
    rc = cli.main(["--config", _cfg(tmp_path), "check-file", str(src)])
    out = capsys.readouterr().out.splitlines()
    assert rc == 0
    assert len(out) == 2


def test_check_file_keeps_leading_space_for_scheme_detection(tmp_path, capsys):
    src = tmp_path / "refs.txt"
    src.write_text(" +++090/9337/55493+++\r\n", encoding="utf-8")
    rc = cli.main(["--config", _cfg(tmp_path), "--json", "check-file", str(src)])
    payload = json.loads(capsys.readouterr().out)
    assert rc == 1
    assert payload["reference"] == " +++090/9337/55493+++"
    assert payload["scheme"] == "Netherlands"
    assert payload["error_kind"] == "malformed_input"


def test_check_file_from_stdin(tmp_path, capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("9012345\n"))
    assert cli.main(["--config", _cfg(tmp_path), "check-file", "-"]) == 1
    assert "malformed" in capsys.readouterr().out


def test_lenient_flag_and_config(tmp_path, capsys):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("validation:\n  strict_length: false\n", encoding="utf-8")
    assert cli.main(["--config", str(cfg), "validate", "07012345"]) == 0
    assert cli.main(["--config", _cfg(tmp_path), "--lenient", "validate", "07012345"]) == 0
    assert cli.main(["--config", _cfg(tmp_path), "validate", "07012345"]) == 1


def test_missing_file_returns_2(tmp_path, capsys):
    assert cli.main(["--config", _cfg(tmp_path), "check-file", str(tmp_path / "none.txt")]) == 2
    assert "cannot read" in capsys.readouterr().err
