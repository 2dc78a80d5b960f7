"""Tests for the headless command line."""
import json

import pytest

from alchemist.cli import main


@pytest.fixture
def bad_file(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({
        "Clients 1": [{"ClientID": "C1", "ClientName": "A", "PriorityLevel": 9}],
        "Worker 1": [],
        "Tasks 1": [],
    }), encoding="utf-8")
    return path


class TestValidateCommand:

    def test_clean_file(self, sample_json_path, capsys):
        assert main(["validate", str(sample_json_path)]) == 0
        assert "Errors (0)" in capsys.readouterr().out

    def test_errors_exit_code(self, bad_file, capsys):
        assert main(["validate", str(bad_file), "--json"]) == 1
        out = json.loads(capsys.readouterr().out)
        assert out["errors"] == ["Client C1: Invalid PriorityLevel 9"]

    def test_unreadable_file(self, tmp_path, capsys):
        path = tmp_path / "x.json"
        path.write_text("{oops", encoding="utf-8")
        assert main(["validate", str(path)]) == 2
        assert "Failed to process uploaded file" in capsys.readouterr().err


class TestExportCommand:

    def test_export_with_rules_and_weights(self, sample_json_path, tmp_path, capsys):
        rules = tmp_path / "rules.json"
        rules.write_text(json.dumps({"rules": [{
            "id": "rule_1", "type": "precedence", "name": "Order",
            "config": {"beforeTask": "T1", "afterTask": "T2"}, "priority": 1, "enabled": True,
        }]}), encoding="utf-8")
        weights = tmp_path / "weights.json"
        weights.write_text(json.dumps({"fairness": 10}), encoding="utf-8")

        out_dir = tmp_path / "out"
        code = main([
            "export", str(sample_json_path), "--out", str(out_dir), "--name", "demo",
            "--rules", str(rules), "--weights", str(weights),
        ])
        assert code == 0
        assert len(list(out_dir.iterdir())) == 5

        doc = json.loads((out_dir / "demo-rules.json").read_text(encoding="utf-8"))
        assert doc["rules"][0]["config"] == {"beforeTask": "T1", "afterTask": "T2"}
        assert doc["prioritization"]["weights"]["fairness"] == 10

    def test_export_reports_errors_but_writes(self, bad_file, tmp_path, capsys):
        assert main(["export", str(bad_file), "--out", str(tmp_path), "--name", "b"]) == 0
        assert (tmp_path / "b-clients.csv").exists()
        assert "validation errors" in capsys.readouterr().err

    @pytest.mark.parametrize("option,content", [
        ("--rules", "{oops"),
        ("--rules", json.dumps({"rules": [{"type": "noSuchType", "name": "X"}]})),
        ("--weights", json.dumps({"fairness": 99})),
        ("--weights", "[1, 2]"),
    ])
    def test_bad_option_file_exit_code(self, sample_json_path, tmp_path, capsys, option, content):
        extra = tmp_path / "extra.json"
        extra.write_text(content, encoding="utf-8")
        out_dir = tmp_path / "out"

        code = main(["export", str(sample_json_path), "--out", str(out_dir), option, str(extra)])

        assert code == 2
        assert "Failed to process uploaded file 'extra.json'" in capsys.readouterr().err
        assert not out_dir.exists()

    def test_missing_option_file_exit_code(self, sample_json_path, tmp_path, capsys):
        code = main([
            "export", str(sample_json_path), "--out", str(tmp_path / "out"),
            "--weights", str(tmp_path / "nope.json"),
        ])
        assert code == 2
        assert "nope.json" in capsys.readouterr().err
