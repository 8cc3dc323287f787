"""
Tests for cudakit.config.parser module.
"""

from pathlib import Path

import pytest

from cudakit.config.parser import (
    DEFAULT_CONFIG_FILENAME,
    CudaKitConfig,
    load_config,
    parse_config,
)
from cudakit.core.exceptions import ConfigError


def write_config(tmp_path, content):
    path = tmp_path / DEFAULT_CONFIG_FILENAME
    path.write_text(content)
    return path


class TestParseConfig:
    """Tests for parse_config."""

    def test_full_config(self, tmp_path):
        path = write_config(
            tmp_path,
            """
version: 1
toolkit:
  env_vars: [CUDA_PATH]
  default_dirs: [/opt/cuda]
  extra_dirs: [/tools/cuda-12.4]
host_compiler:
  base_name: g++
compatibility_table: /etc/cudakit/table.yaml
command_timeout: 30
""",
        )

        config = parse_config(path)

        assert config.toolkit.env_vars == ["CUDA_PATH"]
        assert config.toolkit.default_dirs == ["/opt/cuda"]
        assert config.toolkit.extra_dirs == ["/tools/cuda-12.4"]
        assert config.host_compiler.base_name == "g++"
        assert config.compatibility_table == Path("/etc/cudakit/table.yaml")
        assert config.command_timeout == 30.0

    def test_partial_config_keeps_defaults(self, tmp_path):
        path = write_config(tmp_path, "toolkit:\n  extra_dirs: [/tools/cuda]\n")

        config = parse_config(path)

        assert config.toolkit.env_vars == ["CUDA_PATH", "CUDA_HOME", "CUDA_ROOT"]
        assert "/usr/local/cuda" in config.toolkit.default_dirs
        assert config.toolkit.extra_dirs == ["/tools/cuda"]
        assert config.host_compiler.base_name == "gcc"
        assert config.compatibility_table is None

    def test_empty_file_is_defaults(self, tmp_path):
        assert parse_config(write_config(tmp_path, "")) == CudaKitConfig()

    def test_relative_table_resolved_against_config_dir(self, tmp_path):
        path = write_config(tmp_path, "compatibility_table: tables/gcc.yaml\n")

        config = parse_config(path)

        assert config.compatibility_table == tmp_path / "tables" / "gcc.yaml"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            parse_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = write_config(tmp_path, "toolkit: [unclosed\n")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            parse_config(path)

    @pytest.mark.parametrize(
        "content,message",
        [
            ("- a\n- b\n", "must be a mapping"),
            ("version: 2\n", "Unsupported version"),
            ("command_timeout: 0\n", "command_timeout"),
            ("command_timeout: -5\n", "command_timeout"),
            ("command_timeout: true\n", "command_timeout"),
            ("command_timeout: soon\n", "command_timeout"),
            ("compatibility_table: 12\n", "compatibility_table"),
            ("toolkit: [a]\n", "toolkit must be a mapping"),
            ("toolkit:\n  env_vars: CUDA_PATH\n", "env_vars must be a list"),
            ("toolkit:\n  extra_dirs: [1, 2]\n", "extra_dirs must be a list"),
            ("host_compiler: gcc\n", "host_compiler must be a mapping"),
            ("host_compiler:\n  base_name: ''\n", "base_name"),
        ],
    )
    def test_invalid_values(self, tmp_path, content, message):
        path = write_config(tmp_path, content)

        with pytest.raises(ConfigError, match=message):
            parse_config(path)


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_optional_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "missing.yaml") == CudaKitConfig()

    def test_missing_required_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.yaml", required=True)

    def test_uses_working_directory_file(self, tmp_path, monkeypatch):
        write_config(tmp_path, "command_timeout: 2.5\n")
        monkeypatch.chdir(tmp_path)

        assert load_config().command_timeout == 2.5

    def test_no_working_directory_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert load_config() == CudaKitConfig()
