import pytest
import subprocess
import sys
import yaml
from pathlib import Path
from python_subsets.config import to_yaml, update, temporary_config


PROJECT_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture(autouse=True)
def restore_config():
    with temporary_config():
        yield


class TestShowConfig:
    def test_to_yaml_defaults(self):
        """Test YAML generation with default configuration."""
        update(workers=None, min_chunk=1024, output_format="text", output=None)

        yaml_output = to_yaml()

        assert "# python-subsets configuration file" in yaml_output
        assert "min_chunk: 1024" in yaml_output
        assert "output_format: text" in yaml_output

        # Should not contain None values
        assert "workers:" not in yaml_output
        assert "output:" not in yaml_output

    def test_to_yaml_with_optional_values(self):
        """Test YAML generation with optional values set."""
        update(workers=8, output="counts.json")

        yaml_output = to_yaml()

        assert "workers: 8" in yaml_output
        assert "output: counts.json" in yaml_output

    def test_to_yaml_is_valid_yaml(self):
        """Test that generated YAML is parseable."""
        parsed = yaml.safe_load(to_yaml())
        assert isinstance(parsed, dict)
        assert "min_chunk" in parsed

    def test_show_config_cli_command(self):
        """Test show-config CLI command."""
        cmd = [sys.executable, "-m", "python_subsets.main", "show-config"]
        result = subprocess.run(cmd, capture_output=True, text=True, cwd=PROJECT_ROOT)

        assert result.returncode == 0
        assert "# python-subsets configuration file" in result.stdout
        assert "min_chunk:" in result.stdout
        assert "output_format:" in result.stdout

    def test_show_config_with_config_file(self, tmp_path):
        """Test show-config with existing config file."""
        path = tmp_path / "cfg.yaml"
        path.write_text('workers: 3\noutput_format: "json"\n')
        cmd = [sys.executable, "-m", "python_subsets.main",
               f"--config-file={path}", "show-config"]
        result = subprocess.run(cmd, capture_output=True, text=True, cwd=PROJECT_ROOT)

        assert result.returncode == 0
        assert "workers: 3" in result.stdout
        assert "output_format: json" in result.stdout

    def test_cli_overrides_config_file(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text('min_chunk: 10\n')
        cmd = [sys.executable, "-m", "python_subsets.main",
               f"--config-file={path}", "--min-chunk=20", "show-config"]
        result = subprocess.run(cmd, capture_output=True, text=True, cwd=PROJECT_ROOT)

        assert result.returncode == 0
        assert "min_chunk: 20" in result.stdout


if __name__ == '__main__':
    pytest.main([__file__])
