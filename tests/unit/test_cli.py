"""Tests for the command-line interface."""

import json
import pytest
from click.testing import CliRunner

from promptcomposer.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_file(tmp_path, hello_world_config):
    path = tmp_path / "prompts.json"
    path.write_text(json.dumps(hello_world_config), encoding="utf-8")
    return path


class TestComposeCommand:
    """Tests for `compose`."""

    def test_prints_prompt(self, runner, config_file):
        """Test the composed prompt goes to stdout."""
        result = runner.invoke(cli, ["compose", str(config_file)])
        assert result.exit_code == 0
        assert "Hello World" in result.output

    def test_context_options(self, runner, tmp_path):
        """Test user, metadata and memory options reach the providers."""
        memory = tmp_path / "memory.json"
        memory.write_text(json.dumps({"pet": "cat"}), encoding="utf-8")
        config = tmp_path / "prompts.json"
        config.write_text(json.dumps({
            "providers": [
                {"name": "who", "type": "dynamic", "priority": 3,
                 "config": {"generator": "session-context",
                            "generatorConfig": {"includeFields": ["userId"], "format": "sentence"}}},
                {"name": "env", "type": "dynamic", "priority": 2,
                 "config": {"generator": "environment"}},
                {"name": "mem", "type": "dynamic", "priority": 1,
                 "config": {"generator": "memory-context", "generatorConfig": {"header": ""}}},
            ],
            "settings": {"contentSeparator": "\n"},
        }), encoding="utf-8")

        result = runner.invoke(cli, [
            "compose", str(config), "-u", "alice", "-m", "environment=test",
            "--memory", str(memory),
        ])
        assert result.exit_code == 0
        assert "The current User ID is alice." in result.output
        assert "You are running in a test environment." in result.output
        assert "- pet: cat" in result.output

    def test_output_file(self, runner, config_file, tmp_path):
        """Test writing the prompt to a file."""
        target = tmp_path / "prompt.txt"
        result = runner.invoke(cli, ["compose", str(config_file), "-o", str(target)])
        assert result.exit_code == 0
        assert target.read_text(encoding="utf-8") == "Hello World"

    def test_verbose_table(self, runner, config_file):
        """Test provider results are listed."""
        result = runner.invoke(cli, ["compose", str(config_file), "-v"])
        assert result.exit_code == 0
        assert "Providers" in result.output

    def test_bad_meta(self, runner, config_file):
        """Test malformed metadata pairs are rejected."""
        result = runner.invoke(cli, ["compose", str(config_file), "-m", "novalue"])
        assert result.exit_code == 2

    @pytest.mark.parametrize("text", ["{\"pet\": ", "[\"pet\", \"cat\"]"])
    def test_bad_memory_file(self, runner, config_file, tmp_path, text):
        """Test memory files must hold a JSON object."""
        memory = tmp_path / "memory.json"
        memory.write_text(text, encoding="utf-8")
        result = runner.invoke(cli, ["compose", str(config_file), "--memory", str(memory)])
        assert result.exit_code == 2
        assert "--memory" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_invalid_config(self, runner, tmp_path):
        """Test invalid configs exit with 1."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"providers": [{"name": "a", "type": "static"}]}), encoding="utf-8")
        result = runner.invoke(cli, ["compose", str(path)])
        assert result.exit_code == 1

    def test_fail_fast_exit_code(self, runner, tmp_path):
        """Test an unsuccessful generation exits with 2."""
        path = tmp_path / "prompts.json"
        path.write_text(json.dumps({
            "providers": [{"name": "ghost", "type": "dynamic", "priority": 1,
                           "config": {"generator": "missing"}}],
            "settings": {"failOnProviderError": True},
        }), encoding="utf-8")
        result = runner.invoke(cli, ["compose", str(path)])
        assert result.exit_code == 2


class TestValidateCommand:
    """Tests for `validate`."""

    def test_valid(self, runner, config_file):
        """Test a valid config."""
        result = runner.invoke(cli, ["validate", str(config_file)])
        assert result.exit_code == 0
        assert "Valid" in result.output

    def test_invalid(self, runner, tmp_path):
        """Test every violation is listed."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"providers": [
            {"name": "a", "type": "static", "priority": "high", "config": {"content": "x"}},
        ]}), encoding="utf-8")
        result = runner.invoke(cli, ["validate", str(path)])
        assert result.exit_code == 1
        assert "Invalid" in result.output
        assert "providers[0].priority" in result.output

    def test_malformed_json(self, runner, tmp_path):
        """Test malformed JSON is reported as invalid."""
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")
        result = runner.invoke(cli, ["validate", str(path)])
        assert result.exit_code == 1

    def test_version(self, runner):
        """Test --version."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output
