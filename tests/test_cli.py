"""Tests for CLI commands.

These tests verify that all CLI commands are properly registered and that
each command reports success or failure through its exit code.
"""

import json

import openpyxl
import pytest

from customs_delegation.runner.main import (
    AGREEMENTS_FILE_NAME,
    LETTER_FILE_NAME,
    create_cli,
    main,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("DELEGATION_OUTPUT_DIR", "DELEGATION_VALIDITY_MONTHS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def batch_file(tmp_path, complete_workbook):
    wb = openpyxl.Workbook()
    wb.remove(wb.active)
    for sheet in complete_workbook:
        ws = wb.create_sheet(sheet.name)
        for row in sheet.rows:
            ws.append(list(row))
    path = tmp_path / "batch.xlsx"
    wb.save(path)
    return path


class TestCLICommandRegistry:
    """Tests for CLI command registration."""

    def test_all_commands_registered(self):
        """Verify all expected commands are registered."""
        parser = create_cli()

        subparsers_action = None
        for action in parser._actions:
            if action.dest == "command":
                subparsers_action = action
                break

        assert subparsers_action is not None

        commands = list(subparsers_action.choices.keys())
        assert "classify" in commands
        assert "extract" in commands
        assert "generate" in commands
        assert "init-config" in commands

    def test_generate_options(self):
        parser = create_cli()

        args = parser.parse_args(["generate", "a.xlsx", "b.xls", "--output-dir", "out", "--json"])

        assert [p.name for p in args.files] == ["a.xlsx", "b.xls"]
        assert args.output_dir.name == "out"
        assert args.json is True

    def test_global_options(self):
        parser = create_cli()

        args = parser.parse_args(["-v", "-c", "custom.yaml", "classify", "a.xlsx"])

        assert args.verbose is True
        assert args.config.name == "custom.yaml"

    def test_generate_requires_files(self):
        parser = create_cli()

        with pytest.raises(SystemExit):
            parser.parse_args(["generate"])


class TestCLICommands:
    """Tests for command execution."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1

    def test_init_config(self, tmp_path):
        config_path = tmp_path / "config.yaml"

        assert main(["-c", str(config_path), "init-config"]) == 0
        assert config_path.exists()
        # Refuses to overwrite
        assert main(["-c", str(config_path), "init-config"]) == 1

    def test_invalid_config(self, tmp_path, capsys):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("delegation:\n  validity_months: 7\n", encoding="utf-8")

        assert main(["-c", str(config_path), "classify", "a.xlsx"]) == 1
        assert "validity_months" in capsys.readouterr().out

    def test_classify(self, tmp_path, batch_file, capsys):
        code = main(["-c", str(tmp_path / "none.yaml"), "classify", str(batch_file)])

        out = capsys.readouterr().out
        assert code == 0
        assert "企业: enterprise" in out
        assert "装箱单: packing" in out

    def test_classify_missing_file(self, tmp_path):
        assert main(["-c", str(tmp_path / "none.yaml"), "classify", str(tmp_path / "x.xlsx")]) == 1

    def test_extract(self, tmp_path, batch_file, capsys):
        code = main(["-c", str(tmp_path / "none.yaml"), "extract", str(batch_file)])

        data = json.loads(capsys.readouterr().out)
        assert code == 0
        assert data["file_name"] == "batch.xlsx"
        assert data["data"]["enterprise"]["customs_code"] == "3205940123"

    def test_generate(self, tmp_path, batch_file):
        output_dir = tmp_path / "out"

        code = main(
            [
                "-c",
                str(tmp_path / "none.yaml"),
                "generate",
                str(batch_file),
                "--output-dir",
                str(output_dir),
            ]
        )

        assert code == 0
        assert (output_dir / LETTER_FILE_NAME).exists()
        wb = openpyxl.load_workbook(output_dir / AGREEMENTS_FILE_NAME)
        assert wb.sheetnames == ["委托协议"]

    def test_generate_json(self, tmp_path, batch_file, capsys):
        code = main(
            [
                "-c",
                str(tmp_path / "none.yaml"),
                "generate",
                str(batch_file),
                "--output-dir",
                str(tmp_path / "out"),
                "--json",
            ]
        )

        out = capsys.readouterr().out
        assert code == 0
        payload = out[out.index("{") : out.rindex("}") + 1]
        data = json.loads(payload)
        assert len(data["mapping"]["delegation_agreements"]) == 2

    def test_generate_unreadable_file(self, tmp_path):
        bad = tmp_path / "bad.txt"
        bad.write_text("x", encoding="utf-8")

        assert main(["-c", str(tmp_path / "none.yaml"), "generate", str(bad)]) == 1
