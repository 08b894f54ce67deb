"""Tests for the command-line interface."""

import json
import shutil
from pathlib import Path
from unittest.mock import patch

import pytest
from chatdown.cli import build_config, create_parser, main


@pytest.fixture
def html_file(tmp_path):
    path = tmp_path / "page.html"
    path.write_text('<h2>Usage</h2><p>Run <code>chatdown</code> <img src="shot.png" alt="Screenshot"></p>')
    return path


class TestBuildConfig:
    """Tests for merging the config file with CLI flags."""

    def test_defaults(self):
        """Test no flags yields the default config."""
        config = build_config(create_parser().parse_args([]))

        assert config.conversion.plaintext is False
        assert config.server.port == 3014
        assert config.manual.root == Path("/usr/share/man")
        assert config.log_level == "INFO"

    def test_flag_overrides(self):
        """Test command-line flags override defaults."""
        args = create_parser().parse_args(
            [
                "--plaintext",
                "--table-width", "60",
                "--man-root", "/opt/man",
                "--pandoc", "/usr/local/bin/pandoc",
                "--host", "0.0.0.0",
                "--port", "8080",
                "-v",
            ]
        )  # fmt: skip

        config = build_config(args)

        assert config.conversion.plaintext is True
        assert config.conversion.table_width == 60
        assert config.manual.root == Path("/opt/man")
        assert config.manual.pandoc_command == "/usr/local/bin/pandoc"
        assert config.server.host == "0.0.0.0"
        assert config.server.port == 8080
        assert config.log_level == "DEBUG"

    def test_quiet(self):
        """Test --quiet only logs errors."""
        config = build_config(create_parser().parse_args(["-q"]))

        assert config.log_level == "ERROR"

    def test_config_file_with_overrides(self, tmp_path):
        """Test flags win over values from the config file."""
        config_path = tmp_path / "chatdown.yaml"
        config_path.write_text("server:\n  port: 9000\n  host: 0.0.0.0\nconversion:\n  plaintext: true\n")

        config = build_config(create_parser().parse_args(["--config", str(config_path), "--port", "9100"]))

        assert config.server.port == 9100
        assert config.server.host == "0.0.0.0"
        assert config.conversion.plaintext is True


class TestMain:
    """Tests for main()."""

    def test_convert_file(self, html_file, capsys):
        """Test converting an HTML file prints markdown."""
        assert main([str(html_file)]) == 0

        out = capsys.readouterr().out
        assert out == "\u200b**Usage**\nRun `chatdown`\n"

    def test_convert_json(self, html_file, capsys):
        """Test --json prints markdown and images."""
        assert main([str(html_file), "--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["markdown"] == "\u200b**Usage**\nRun `chatdown`"
        assert data["images"] == [{"src": "shot.png", "alt": "Screenshot"}]

    def test_convert_stdin(self, capsys):
        """Test HTML is read from stdin without a file argument."""
        with patch("sys.stdin") as stdin:
            stdin.read.return_value = "loose <b>text</b>"
            assert main(["--plaintext"]) == 0

        assert capsys.readouterr().out == "loose **text**\n"

    def test_missing_file(self, tmp_path, capsys):
        """Test a missing input file reports an error."""
        assert main([str(tmp_path / "missing.html")]) == 1

        assert "Error:" in capsys.readouterr().err

    def test_image_without_source(self, tmp_path, capsys):
        """Test translation errors are reported, not raised."""
        path = tmp_path / "bad.html"
        path.write_text("<img>")

        assert main([str(path)]) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "source" in captured.err

    def test_invalid_config(self, capsys):
        """Test out-of-range values are reported as configuration errors."""
        assert main(["--port", "70000"]) == 1

        assert "Configuration error" in capsys.readouterr().err

    @pytest.mark.skipif(shutil.which("cat") is None, reason="cat not available")
    def test_render_man_page(self, man_root, capsys):
        """Test --man renders a page from the configured tree."""
        assert main(["--man", "1", "ls", "--man-root", str(man_root), "--pandoc", "cat"]) == 0

        assert capsys.readouterr().out == "\u200b**LS**\nlist directory contents\n"

    def test_missing_man_page(self, man_root, capsys):
        """Test a missing manual page reports an error."""
        assert main(["--man", "1", "missing", "--man-root", str(man_root)]) == 1

        assert "No manual entry" in capsys.readouterr().err

    def test_serve(self):
        """Test --serve starts the server with the merged config."""
        with patch("chatdown.server.run_server") as run_server:
            assert main(["--serve", "--port", "8081"]) == 0

        config = run_server.call_args[0][0]
        assert config.server.port == 8081

    def test_doctor(self):
        """Test --doctor runs the diagnostics with the manual settings."""
        with patch("chatdown.doctor.run_doctor", return_value=0) as run_doctor:
            assert main(["--doctor", "--pandoc", "cat"]) == 0

        assert run_doctor.call_args.kwargs["manual"].pandoc_command == "cat"

    def test_version(self, capsys):
        """Test --version prints the version and exits."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert "chatdown" in capsys.readouterr().out
