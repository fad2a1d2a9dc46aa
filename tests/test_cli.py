"""Tests for the linegetter command line."""

import argparse
import io
import logging
import tempfile
from pathlib import Path

import pytest
import structlog

from linegetter.cli import line_range, main, parse_args
from linegetter.utils.config import ENV_OVERRIDES


@pytest.fixture(autouse=True)
def isolate(monkeypatch):
    """Clear environment overrides and undo logging setup."""
    for name in ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()
    logging.getLogger().setLevel(logging.WARNING)


@pytest.fixture
def log_file():
    """Create a small log file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "app.log"
        path.write_bytes(b"first\nsecond\nthird\n" + b"z" * 40 + b"\nlast")
        yield path


def run(*argv):
    out = io.BytesIO()
    code = main(list(argv), out=out)
    return code, out.getvalue()


class TestLineRange:
    """Test parsing of line arguments."""
    
    def test_single_line(self):
        """Test a plain line number."""
        assert line_range("7") == (7, 7)
    
    def test_range(self):
        """Test an inclusive range."""
        assert line_range("3-9") == (3, 9)
    
    @pytest.mark.parametrize("value", ["x", "3-", "1-2-3", "9-3", ""])
    def test_invalid(self, value):
        """Test malformed arguments."""
        with pytest.raises(argparse.ArgumentTypeError):
            line_range(value)
    
    def test_parse_args(self):
        """Test parsing a full command line."""
        args = parse_args(["app.log", "1", "4-5", "--count", "--max-line-length", "10"])
        
        assert args.file == "app.log"
        assert args.lines == [(1, 1), (4, 5)]
        assert args.count
        assert args.max_line_length == 10


class TestMain:
    """Test the CLI entry point."""
    
    def test_count_by_default(self, log_file):
        """Test that the line count is printed without line arguments."""
        code, output = run(str(log_file))
        
        assert code == 0
        assert output == b"5\n"
    
    def test_print_lines(self, log_file):
        """Test printing single lines and ranges."""
        code, output = run(str(log_file), "2", "1-1", "5")
        
        assert code == 0
        assert output == b"second\nfirst\nlast\n"
    
    def test_count_with_lines(self, log_file):
        """Test --count together with lines."""
        code, output = run(str(log_file), "--count", "3")
        
        assert code == 0
        assert output == b"5\nthird\n"
    
    def test_out_of_range(self, log_file):
        """Test that an out-of-range line fails but other lines print."""
        code, output = run(str(log_file), "1", "6", "0")
        
        assert code == 1
        assert output == b"first\n"
    
    def test_truncation_is_not_failure(self, log_file):
        """Test that truncated lines print clipped with success status."""
        code, output = run(str(log_file), "4", "--max-line-length", "8")
        
        assert code == 0
        assert output == b"zzzzzzzz\n"
    
    def test_config_file(self, log_file):
        """Test settings from a configuration file."""
        config_path = log_file.parent / "linegetter.yaml"
        config_path.write_text("reader:\n  max_line_length: 3\n")
        
        code, output = run(str(log_file), "2", "--config", str(config_path))
        
        assert code == 0
        assert output == b"sec\n"
    
    def test_invalid_setting(self, log_file):
        """Test that a non-positive maximum is reported."""
        code, output = run(str(log_file), "1", "--max-line-length", "0")
        
        assert code == 1
        assert output == b""
    
    def test_missing_file(self, log_file):
        """Test that an unreadable file is reported."""
        code, output = run(str(log_file.parent / "absent.log"), "1")
        
        assert code == 1
        assert output == b""
    
    def test_usage_error(self):
        """Test that bad arguments exit with status 2."""
        with pytest.raises(SystemExit) as exc_info:
            main(["app.log", "one"], out=io.BytesIO())
        
        assert exc_info.value.code == 2
    
    def test_options_between_lines(self, log_file):
        """Test line arguments before and after options."""
        code, output = run(str(log_file), "1", "--count", "3", "--max-line-length", "4", "2")
        
        assert code == 0
        assert output == b"5\nfirs\nthir\nseco\n"


class TestConfigurationErrors:
    """Test that bad settings are reported instead of raising."""
    
    def test_missing_config_file(self, log_file, capsys):
        """Test a --config path that does not exist."""
        code, output = run(str(log_file), "1", "--config", str(log_file.parent / "absent.yaml"))
        
        assert code == 1
        assert output == b""
        assert "Cannot load configuration" in capsys.readouterr().err
    
    def test_malformed_yaml(self, log_file, capsys):
        """Test a configuration file that is not valid YAML."""
        config_path = log_file.parent / "broken.yaml"
        config_path.write_text("reader: [unclosed\n")
        
        code, output = run(str(log_file), "1", "--config", str(config_path))
        
        assert code == 1
        assert "Cannot load configuration" in capsys.readouterr().err
    
    def test_non_numeric_env_override(self, log_file, monkeypatch, capsys):
        """Test LINEGETTER_MAX_LINE_LENGTH that is not a number."""
        monkeypatch.setenv("LINEGETTER_MAX_LINE_LENGTH", "abc")
        
        code, output = run(str(log_file), "1")
        
        assert code == 1
        assert output == b""
        assert "LINEGETTER_MAX_LINE_LENGTH" in capsys.readouterr().err
    
    def test_invalid_log_level_in_config(self, log_file, capsys):
        """Test an unknown logging level in the configuration file."""
        config_path = log_file.parent / "loud.yaml"
        config_path.write_text("logging:\n  level: LOUD\n")
        
        code, output = run(str(log_file), "1", "--config", str(config_path))
        
        assert code == 1
        assert "Invalid logging configuration" in capsys.readouterr().err
    
    def test_non_numeric_setting_in_config(self, log_file, capsys):
        """Test a maximum line length that is not a number."""
        config_path = log_file.parent / "words.yaml"
        config_path.write_text("reader:\n  max_line_length: lots\n")
        
        code, output = run(str(log_file), "1", "--config", str(config_path))
        
        assert code == 1
        assert "Invalid configuration" in capsys.readouterr().err
