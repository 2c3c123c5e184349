"""Tests for the command-line interface."""

import json
import shutil
import tempfile
from pathlib import Path

from click.testing import CliRunner

from smart_file_manager import __version__
from smart_file_manager.cli.main import cli, _format_file_size
from smart_file_manager.core.config import ConfigManager


class TestCli:
    """Drive the CLI end to end against a temporary directory."""

    def setup_method(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        self.work_dir = self.temp_dir / "work"
        self.work_dir.mkdir()
        (self.work_dir / "Report.txt").write_text("quarterly")
        (self.work_dir / "summary.doc").write_text("summary")
        (self.work_dir / "picture.png").write_bytes(b"\x89PNG")
        self.config_path = self.temp_dir / "config.ini"
        self.log_path = self.temp_dir / "activity.log"
        self.runner = CliRunner()

    def teardown_method(self):
        if self.temp_dir.exists():
            shutil.rmtree(self.temp_dir)

    def invoke(self, *args, **kwargs):
        base = ["--config", str(self.config_path), "--log-file", str(self.log_path)]
        return self.runner.invoke(cli, base + list(args), **kwargs)

    def test_version(self):
        result = self.runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_scan_json(self):
        result = self.invoke("scan", str(self.work_dir), "--format", "json")

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert sorted(item["name"] for item in data) == ["Report.txt", "picture.png", "summary.doc"]
        by_name = {item["name"]: item for item in data}
        assert by_name["picture.png"]["category"] == "Images"
        assert by_name["Report.txt"]["size"] == len("quarterly")

    def test_scan_table(self):
        result = self.invoke("scan", str(self.work_dir))

        assert result.exit_code == 0, result.output
        assert "Found 3 files" in result.output
        assert "summary.doc" in result.output

    def test_scan_defaults_to_current_directory(self):
        with self.runner.isolated_filesystem(temp_dir=self.temp_dir):
            Path("only.txt").write_text("x")
            result = self.invoke("scan", "--format", "csv")

        assert result.exit_code == 0, result.output
        lines = result.stdout.strip().splitlines()
        assert lines[0] == "Name,Path,Extension,Size,Category"
        assert lines[1].startswith("only.txt,")

    def test_scan_missing_directory(self):
        result = self.invoke("scan", str(self.work_dir / "missing"))

        assert result.exit_code != 0
        assert "does not exist" in result.output

    def test_scan_file_instead_of_directory(self):
        result = self.invoke("scan", str(self.work_dir / "Report.txt"))

        assert result.exit_code != 0
        assert "not a directory" in result.output

    def test_scan_writes_activity_log(self):
        self.invoke("scan", str(self.work_dir), "--format", "json")

        log_text = self.log_path.read_text(encoding="utf-8")
        assert "=== File Management System Started ===" in log_text
        assert "Found file: Report.txt (9 bytes)" in log_text
        assert "Scan complete: 3 files found" in log_text
        assert "=== File Management System Stopped ===" in log_text

    def test_organize_with_yes(self):
        result = self.invoke("organize", str(self.work_dir), "--yes")

        assert result.exit_code == 0, result.output
        assert "3 files moved" in result.output
        assert (self.work_dir / "Documents" / "Report.txt").exists()
        assert (self.work_dir / "Documents" / "summary.doc").exists()
        assert (self.work_dir / "Images" / "picture.png").exists()

    def test_organize_twice_moves_nothing_new(self):
        self.invoke("organize", str(self.work_dir), "--yes")
        (self.work_dir / "Report.txt").write_text("second copy")

        result = self.invoke("organize", str(self.work_dir), "--yes")

        assert result.exit_code == 0, result.output
        assert "0 files moved" in result.output
        assert "Skipped 1 files" in result.output
        assert (self.work_dir / "Documents" / "Report.txt").read_text() == "quarterly"
        assert (self.work_dir / "Report.txt").read_text() == "second copy"

    def test_organize_asks_for_confirmation(self):
        result = self.invoke("organize", str(self.work_dir), input="n\n")

        assert result.exit_code == 0, result.output
        assert "Organization cancelled" in result.output
        assert (self.work_dir / "Report.txt").exists()
        assert not (self.work_dir / "Documents").exists()

    def test_organize_confirmed_interactively(self):
        result = self.invoke("organize", str(self.work_dir), input="y\n")

        assert result.exit_code == 0, result.output
        assert (self.work_dir / "Images" / "picture.png").exists()

    def test_organize_dry_run(self):
        result = self.invoke("organize", str(self.work_dir), "--dry-run")

        assert result.exit_code == 0, result.output
        assert "DRY RUN" in result.output
        assert "3 files would be moved" in result.output
        assert (self.work_dir / "Report.txt").exists()
        assert not (self.work_dir / "Documents").exists()

    def test_organize_empty_directory(self):
        empty = self.temp_dir / "empty"
        empty.mkdir()

        result = self.invoke("organize", str(empty), "--yes")

        assert result.exit_code == 0
        assert "No files to organize" in result.output

    def test_organize_leaves_default_log_in_place(self):
        with self.runner.isolated_filesystem(temp_dir=self.temp_dir):
            Path("a.txt").write_text("x")
            result = self.runner.invoke(
                cli, ["--config", str(self.config_path), "organize", "--yes"]
            )

            assert result.exit_code == 0, result.output
            assert "1 files moved" in result.output
            assert Path("Documents", "a.txt").exists()
            assert Path("file_manager.log").exists()
            assert not Path("Others").exists()
            assert "=== File Management System Stopped ===" in Path("file_manager.log").read_text()

    def test_search(self):
        result = self.invoke("search", "report", str(self.work_dir), "--format", "json")

        assert result.exit_code == 0, result.output
        assert [item["name"] for item in json.loads(result.stdout)] == ["Report.txt"]

    def test_search_no_match(self):
        result = self.invoke("search", "invoice", str(self.work_dir))

        assert result.exit_code == 0
        assert "No files found matching your search" in result.output

    def test_search_rejects_empty_term(self):
        result = self.invoke("search", "", str(self.work_dir))

        assert result.exit_code == 2
        assert "Search term cannot be empty" in result.output

    def test_duplicates_none(self):
        result = self.invoke("duplicates", str(self.work_dir))

        assert result.exit_code == 0, result.output
        assert "No duplicate files found" in result.output

    def test_duplicates_json(self):
        result = self.invoke("duplicates", str(self.work_dir), "--format", "json")

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {}

    def test_categories(self):
        result = self.invoke("categories")

        assert result.exit_code == 0, result.output
        for label in ("Documents", "Images", "Executables", "Others"):
            assert label in result.output

    def test_shell_session(self):
        user_input = "\n".join(["5", "1", "3", "report", "7", "9", "0"]) + "\n"

        result = self.invoke("shell", str(self.work_dir), input=user_input)

        assert result.exit_code == 0, result.output
        assert "No files scanned yet" in result.output
        assert "Found 3 files!" in result.output
        assert "Found 1 file(s)" in result.output
        assert "Invalid choice" in result.output
        assert "Thank you for using Smart File Manager" in result.output

    def test_shell_organize_and_change_directory(self):
        other = self.temp_dir / "other"
        other.mkdir()
        (other / "clip.mp4").write_bytes(b"\x00" * 10)
        user_input = "\n".join(["1", "2", "y", "6", str(other), "1", "2", "y", "0"]) + "\n"

        result = self.invoke("shell", str(self.work_dir), input=user_input)

        assert result.exit_code == 0, result.output
        assert (self.work_dir / "Documents" / "Report.txt").exists()
        assert (other / "Videos" / "clip.mp4").exists()

    def test_config_set_and_show(self):
        result = self.invoke("config", "set", "organize.confirm", "false")
        assert result.exit_code == 0, result.output
        assert ConfigManager(self.config_path).get_config().organize.confirm is False

        result = self.invoke("config", "show")
        assert result.exit_code == 0
        assert "Confirm: False" in result.output

    def test_config_set_default_directory(self):
        result = self.invoke("config", "set", "default_directory", str(self.work_dir))
        assert result.exit_code == 0, result.output

        result = self.invoke("scan", "--format", "json")
        assert result.exit_code == 0, result.output
        assert len(json.loads(result.stdout)) == 3

    def test_config_set_unknown_key(self):
        result = self.invoke("config", "set", "web.port", "80")
        assert result.exit_code != 0
        assert "Unknown configuration key" in result.output

    def test_config_export(self):
        out = self.temp_dir / "exported.json"
        result = self.invoke("config", "export", str(out))

        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text())["organize"]["confirm"] is True


def test_format_file_size():
    assert _format_file_size(512) == "512B"
    assert _format_file_size(2048) == "2.0KB"
    assert _format_file_size(5 * 1024 * 1024) == "5.0MB"
    assert _format_file_size(6 * 1024 ** 3) == "6.0GB"
