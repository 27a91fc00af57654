"""
Tests for CLI Commands
======================
Tests for the namesmith CLI interface in namesmith/cli.py.
"""

import argparse
import json
import os
import pytest
import subprocess
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from namesmith.cli import main, parse_syllable_range


def run_cli(*args, cwd=None):
    return subprocess.run(
        [sys.executable, "-m", "namesmith", *args],
        capture_output=True,
        text=True,
        cwd=str(cwd or ROOT),
    )


class TestCLIBasic:
    """Basic CLI tests."""

    def test_version_flag(self):
        """Test --version flag."""
        result = run_cli("--version")
        assert result.returncode == 0
        assert "namesmith" in result.stdout.lower()

    def test_help_flag(self):
        """Test --help flag."""
        result = run_cli("--help")
        assert result.returncode == 0
        for command in ("generate", "vary", "check", "presets", "export"):
            assert command in result.stdout

    def test_generate_help(self):
        """Test generate --help."""
        result = run_cli("generate", "--help")
        assert result.returncode == 0
        assert "--count" in result.stdout
        assert "--syllables" in result.stdout

    def test_no_command(self):
        """No command prints help and succeeds."""
        assert main([]) == 0


class TestCLIGenerate:
    """Tests for generate command."""

    def test_generate_json(self):
        """Generated names come back as JSON records."""
        result = run_cli("generate", "-n", "5", "--seed", "3", "--json")
        assert result.returncode == 0
        records = json.loads(result.stdout)
        assert len(records) == 5
        for record in records:
            assert record["name"] == "".join(record["syllables"])
            assert record["display"][0].isupper()

    def test_generate_plain(self):
        """Plain output prints one name per line."""
        result = run_cli("--plain", "generate", "-n", "4", "--seed", "3", "--capitalize")
        assert result.returncode == 0
        lines = result.stdout.strip().splitlines()
        assert len(lines) == 4
        assert all(line[0].isupper() for line in lines)

    def test_generate_seeded(self):
        """The same seed gives the same output."""
        a = run_cli("generate", "-n", "5", "--seed", "8", "--json", "--preset", "soft")
        b = run_cli("generate", "-n", "5", "--seed", "8", "--json", "--preset", "soft")
        assert a.stdout == b.stdout

    def test_generate_syllables(self):
        """--syllables fixes the syllable count."""
        result = run_cli("generate", "-n", "5", "--syllables", "3", "--json", "--seed", "1")
        assert all(len(r["syllables"]) >= 3 for r in json.loads(result.stdout))

    def test_generate_unknown_preset(self):
        """Unknown presets exit with status 1."""
        result = run_cli("generate", "--preset", "nonexistent")
        assert result.returncode == 1
        assert "nonexistent" in result.stderr

    def test_generate_invalid_count(self):
        """Counts below one are rejected."""
        assert main(["generate", "-n", "0"]) == 1

    def test_generate_verbose_logs(self):
        """--verbose enables debug logging on stderr."""
        result = run_cli("generate", "-n", "1", "--seed", "1", "--json", "--verbose")
        assert result.returncode == 0
        assert "DEBUG" in result.stderr


class TestCLIOtherCommands:
    """Tests for vary, check, presets and export."""

    def test_vary(self):
        """vary produces the requested number of variations."""
        result = run_cli("vary", "ta", "ri", "-n", "3", "--seed", "2", "--json")
        assert result.returncode == 0
        assert len(json.loads(result.stdout)) == 3

    def test_check_valid(self):
        """A name the filter accepts exits 0."""
        result = run_cli("check", "tarion", "--json")
        assert result.returncode == 0
        assert json.loads(result.stdout)["valid"] is True

    def test_check_rejected(self):
        """A name the filter rejects exits 1 and names the pattern."""
        result = run_cli("check", "ta-rooo", "--json")
        assert result.returncode == 1
        data = json.loads(result.stdout)
        assert data["valid"] is False
        assert data["matched"]

    def test_presets(self):
        """presets lists the bundled presets."""
        result = run_cli("presets", "--json")
        assert result.returncode == 0
        assert {"default", "soft", "harsh"} <= set(json.loads(result.stdout))

    def test_export_and_reload(self, tmp_path):
        """An exported preset can be used with --config."""
        out = tmp_path / "soft.yaml"
        assert run_cli("export", "--preset", "soft", "-o", str(out)).returncode == 0
        assert out.exists()
        result = run_cli("generate", "--config", str(out), "-n", "3", "--json")
        assert result.returncode == 0
        assert len(json.loads(result.stdout)) == 3

    def test_export_stdout(self):
        """Without -o the YAML goes to stdout."""
        result = run_cli("export", "--preset", "harsh")
        assert result.returncode == 0
        assert "syllables:" in result.stdout


class TestSyllableRange:
    """Tests for --syllables parsing."""

    def test_single(self):
        """A single number fixes the count."""
        assert parse_syllable_range("3") == (3, 3)

    def test_range(self):
        """MIN-MAX gives an inclusive range."""
        assert parse_syllable_range("2-4") == (2, 4)

    @pytest.mark.parametrize("value", ["0", "4-2", "x", "2-"])
    def test_invalid(self, value):
        """Malformed or empty ranges are rejected."""
        with pytest.raises(argparse.ArgumentTypeError):
            parse_syllable_range(value)


class TestCLISettings:
    """Tests for settings overrides seen by the CLI."""

    def test_default_count_override(self, tmp_path):
        """cli.default_count from NAMESMITH_CONFIG sets the default -n."""
        override = tmp_path / "app.yaml"
        override.write_text("cli:\n  default_count: 3\n", encoding="utf-8")
        env = dict(os.environ, NAMESMITH_CONFIG=str(override))
        result = subprocess.run(
            [sys.executable, "-m", "namesmith", "generate", "--json", "--seed", "1"],
            capture_output=True,
            text=True,
            cwd=str(ROOT),
            env=env,
        )
        assert result.returncode == 0
        assert len(json.loads(result.stdout)) == 3
