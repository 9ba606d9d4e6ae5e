"""Tests for the file-based runner and the command line script."""

import json

import pytest
import yaml

from jsondelta import ConfigParseError, DeltaReport, DeltaRunner, EngineConfig, ErrorResponse
import run_delta


@pytest.fixture
def documents(tmp_path):
    left = {"id": 1, "status": "pending", "items": [{"sku": "A", "qty": 1}, {"sku": "B", "qty": 1}]}
    right = {"id": 1, "status": "paid", "items": [{"sku": "A", "qty": 1}, {"sku": "B", "qty": 2}]}

    left_path = tmp_path / "before.json"
    right_path = tmp_path / "after.json"
    config_path = tmp_path / "config.yaml"

    left_path.write_text(json.dumps(left))
    right_path.write_text(json.dumps(right))
    config_path.write_text(yaml.safe_dump({"items": {"unique_by": "sku"}}))

    return left_path, right_path, config_path


class TestDeltaRunner:
    """Test loading documents and configuration from files."""

    def test_run_with_config(self, documents):
        left_path, right_path, config_path = documents

        report = DeltaRunner.run_diff(str(left_path), str(right_path), str(config_path))

        assert isinstance(report, DeltaReport)
        assert report.delta == {"status": "paid", "items": [{"sku": "B", "qty": 2}]}

    def test_run_without_config(self, documents):
        left_path, right_path, _ = documents

        report = DeltaRunner(str(left_path), str(right_path)).run()

        assert report.delta["items"] == [{"sku": "A", "qty": 1}, {"sku": "B", "qty": 2}]

    def test_config_is_cached(self, documents):
        left_path, right_path, config_path = documents
        runner = DeltaRunner(str(left_path), str(right_path), str(config_path))

        assert runner.config is runner.config
        assert runner.config == {"items": {"unique_by": "sku"}}

    def test_yaml_documents(self, tmp_path):
        left_path = tmp_path / "before.yaml"
        right_path = tmp_path / "after.yaml"
        left_path.write_text("a: 1\nb: [1, 2]\n")
        right_path.write_text("a: 1\nb: [2, 1]\n")

        report = DeltaRunner.run_diff(str(left_path), str(right_path))

        assert report.delta == {"b": [2, 1]}

    def test_engine_config_is_used(self, documents):
        left_path, right_path, config_path = documents
        engine_config = EngineConfig(global_ignores=["$.status"])

        report = DeltaRunner.run_diff(str(left_path), str(right_path), str(config_path), engine_config)

        assert report.delta == {"items": [{"sku": "B", "qty": 2}]}

    def test_engine_errors_become_error_response(self, documents, tmp_path):
        left_path, right_path, _ = documents
        config_path = tmp_path / "bad.yaml"
        config_path.write_text("items:\n  unique_by: 1.5\n")

        report = DeltaRunner.run_diff(str(left_path), str(right_path), str(config_path))

        assert isinstance(report, ErrorResponse)
        assert report.error["code"] == "CONFIGURATION_ERROR"

    def test_missing_file(self, tmp_path):
        runner = DeltaRunner(str(tmp_path / "missing.json"), str(tmp_path / "other.json"))

        with pytest.raises(FileNotFoundError):
            runner.run()

    def test_invalid_yaml(self, documents, tmp_path):
        left_path, right_path, _ = documents
        config_path = tmp_path / "broken.yaml"
        config_path.write_text("items: [unclosed\n")

        with pytest.raises(ConfigParseError) as exc_info:
            DeltaRunner.run_diff(str(left_path), str(right_path), str(config_path))

        assert exc_info.value.line is not None


class TestCommandLine:
    """Test the run_delta.py script."""

    def test_prints_delta_and_reports_changes(self, documents, capsys):
        left_path, right_path, config_path = documents

        code = run_delta.main([str(left_path), str(right_path), "-c", str(config_path)])

        assert code == 1
        output = json.loads(capsys.readouterr().out)
        assert output == {"status": "paid", "items": [{"sku": "B", "qty": 2}]}

    def test_no_changes(self, documents, capsys):
        left_path, _, _ = documents

        code = run_delta.main([str(left_path), str(left_path)])

        assert code == 0
        assert json.loads(capsys.readouterr().out) == {}

    def test_emptied_document_reports_changes(self, tmp_path):
        left_path = tmp_path / "before.json"
        right_path = tmp_path / "after.json"
        left_path.write_text(json.dumps([1, 2]))
        right_path.write_text(json.dumps([]))

        code = run_delta.main([str(left_path), str(right_path), "-q"])

        assert code == 1

    def test_writes_output_file(self, documents, tmp_path):
        left_path, right_path, config_path = documents
        output_path = tmp_path / "delta.json"

        code = run_delta.main([
            str(left_path), str(right_path),
            "-c", str(config_path),
            "-o", str(output_path),
            "-q",
        ])

        assert code == 1
        assert json.loads(output_path.read_text()) == {
            "status": "paid",
            "items": [{"sku": "B", "qty": 2}],
        }

    def test_global_ignore_option(self, documents, capsys):
        left_path, right_path, config_path = documents

        run_delta.main([
            str(left_path), str(right_path),
            "-c", str(config_path),
            "-i", "$.status",
        ])

        output = json.loads(capsys.readouterr().out)
        assert "status" not in output

    def test_trace_option_prints_full_report(self, documents, capsys):
        left_path, right_path, config_path = documents

        run_delta.main([str(left_path), str(right_path), "-c", str(config_path), "--trace"])

        output = json.loads(capsys.readouterr().out)
        assert output["has_changes"] is True
        assert any(t["rule"] == "unique_by" for t in output["trace"])

    def test_missing_file(self, tmp_path, capsys):
        code = run_delta.main([str(tmp_path / "a.json"), str(tmp_path / "b.json")])

        assert code == 2
        assert "File not found" in capsys.readouterr().err

    def test_invalid_configuration(self, documents, tmp_path, capsys):
        left_path, right_path, _ = documents
        config_path = tmp_path / "bad.yaml"
        config_path.write_text("items:\n  unique_by: [sku]\n")

        code = run_delta.main([str(left_path), str(right_path), "-c", str(config_path)])

        assert code == 2
        assert "unique_by" in capsys.readouterr().err
