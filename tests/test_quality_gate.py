"""Tests for scripts/quality_gate.py — check selection and output parsing."""

import json
from unittest.mock import patch

from scripts import quality_gate


class TestMypyTargets:
    def test_covers_package_modules(self):
        targets = quality_gate.mypy_targets()
        assert "monday_cli/codec.py" in [t.replace("\\", "/") for t in targets]
        assert "monday_cli/formatters" in [t.replace("\\", "/") for t in targets]

    @patch("scripts.quality_gate.importlib.util.find_spec", return_value=None)
    def test_skips_optional_subpackage_without_extra(self, _spec):
        targets = [t.replace("\\", "/") for t in quality_gate.mypy_targets()]
        assert "monday_cli/mcp_server" not in targets


class TestSummaries:
    def test_pytest_summary(self):
        text = "....F\nFAILED tests/x.py::t\n1 failed, 4 passed, 2 skipped in 0.3s\n"
        assert quality_gate._pytest_summary(text) == {"passed": 4, "failed": 1, "skipped": 2}

    def test_count(self):
        count = quality_gate._count(r": error:")
        assert count("a.py:1: error: x\nb.py:2: note: y\nc.py:3: error: z") == {"findings": 2}


class TestMain:
    @patch("scripts.quality_gate.run_check", return_value={"status": "pass"})
    def test_only_runs_selected(self, mock_run, capsys):
        assert quality_gate.main(["--only", "mypy"]) == 0
        assert [c.args[0].name for c in mock_run.call_args_list] == ["mypy"]
        report = json.loads(capsys.readouterr().out)
        assert report["checks"]["pytest"] == {"status": "skip"}
        assert report["overall"] == "pass"

    @patch("scripts.quality_gate.run_check", return_value={"status": "fail"})
    def test_failure_sets_exit_status(self, _run, capsys):
        assert quality_gate.main(["--skip-tests"]) == 1
        assert json.loads(capsys.readouterr().out)["overall"] == "fail"
