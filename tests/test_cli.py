"""Tests for the command line interface."""
import json

import pytest
from click.testing import CliRunner

from dxfcross.cli import main


@pytest.fixture
def json_input(tmp_path, parsed_document):
    path = tmp_path / "doc.json"
    path.write_text(json.dumps(parsed_document), encoding="utf-8")
    return path


def test_cli_lists_intersections(json_input):
    result = CliRunner().invoke(main, [str(json_input), "-c", "2"])
    assert result.exit_code == 0
    assert "Intersections: 1" in result.output
    assert "(1.000000, 1.000000)" in result.output


def test_cli_writes_output(json_input, tmp_path):
    output = tmp_path / "marked.dxf"
    result = CliRunner().invoke(main, [str(json_input), str(output), "-q"])
    assert result.exit_code == 0
    assert output.is_file()
    assert "Intersections" not in result.output


def test_cli_failure_exit_code(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text(json.dumps({"entities": [{"type": "CIRCLE"}]}), encoding="utf-8")
    result = CliRunner().invoke(main, [str(path), "-q"])
    assert result.exit_code == 1


def test_cli_rejects_zero_concurrency(json_input):
    result = CliRunner().invoke(main, [str(json_input), "-c", "0"])
    assert result.exit_code == 2
