"""
Tests for cudakit.toolchain.resolver module.
"""

import pytest

from cudakit.core.exceptions import (
    CommandError,
    InstallationNotFoundError,
    NoCompatibleVersionError,
    NotFoundError,
    UnparsableVersionError,
)
from cudakit.core.version import Version
from cudakit.toolchain.compatibility import CompatibilityResolver, CompilerCandidate
from cudakit.toolchain.resolver import COMPILER_BINDIR_FLAG, Toolchain, ToolchainResolver
from tests.utils import NVCC_BANNER, gcc_banner, nvcc_banner


@pytest.fixture
def cuda_host(mock_fs, runner):
    """Linux host with CUDA 11.8 in /usr/local/cuda and GCC 11 and 8."""
    mock_fs.add_file("/usr/local/cuda/bin/nvcc")
    mock_fs.add_file("/usr/bin/gcc").add_file("/usr/bin/gcc-8")
    runner.outputs["/usr/local/cuda/bin/nvcc"] = NVCC_BANNER
    runner.outputs["/usr/bin/gcc"] = gcc_banner("gcc", "11.3.0")
    runner.outputs["/usr/bin/gcc-8"] = gcc_banner("gcc-8", "8.4.0")
    return mock_fs


@pytest.fixture
def make_resolver(make_prober, runner, small_table):
    def _make(environ=None, **kwargs):
        prober = make_prober(environ or {"PATH": "/usr/bin"})
        return ToolchainResolver(prober, runner, CompatibilityResolver(small_table), **kwargs)

    return _make


class TestToolchainResolver:
    """Tests for end-to-end toolchain resolution."""

    def test_resolve_located_toolkit(self, cuda_host, make_resolver):
        toolchain = make_resolver().resolve()

        assert toolchain.version == Version(11, 8)
        assert toolchain.compiler_path == "/usr/local/cuda/bin/nvcc"
        assert toolchain.host_compiler == "/usr/bin/gcc"
        assert toolchain.flags == (COMPILER_BINDIR_FLAG, "/usr/bin/gcc")
        assert toolchain.toolkit_dir == "/usr/local/cuda"

    def test_resolve_explicit_toolkit_dir(self, cuda_host, make_resolver, runner):
        cuda_host.add_file("/opt/cuda-10.2/bin/nvcc")
        runner.outputs["/opt/cuda-10.2/bin/nvcc"] = nvcc_banner("10.2")

        toolchain = make_resolver().resolve("/opt/cuda-10.2")

        assert toolchain.version == Version(10, 2)
        assert toolchain.compiler_path == "/opt/cuda-10.2/bin/nvcc"
        assert toolchain.flags == ("--compiler-bindir", "/usr/bin/gcc-8")

    def test_nvcc_falls_back_to_path(self, cuda_host, make_resolver):
        nvcc_path, version = make_resolver(
            {"PATH": "/usr/local/cuda/bin:/usr/bin"}
        ).toolkit_version("/somewhere/else")

        assert nvcc_path == "/usr/local/cuda/bin/nvcc"
        assert version == Version(11, 8)

    def test_nvcc_missing(self, mock_fs, make_resolver):
        mock_fs.add_dir("/opt/cuda")

        with pytest.raises(NotFoundError, match="Could not find nvcc binary in /opt/cuda"):
            make_resolver().resolve()

    def test_toolkit_missing(self, make_resolver):
        with pytest.raises(InstallationNotFoundError, match="CUDA_PATH"):
            make_resolver().resolve()

    def test_nvcc_output_unparsable(self, cuda_host, make_resolver, runner):
        runner.outputs["/usr/local/cuda/bin/nvcc"] = "Segmentation fault\n"

        with pytest.raises(UnparsableVersionError):
            make_resolver().resolve()

    def test_nvcc_cannot_run(self, cuda_host, make_resolver, runner):
        runner.outputs["/usr/local/cuda/bin/nvcc"] = CommandError(
            "/usr/local/cuda/bin/nvcc", "exit code 1"
        )

        with pytest.raises(CommandError):
            make_resolver().resolve()

    def test_no_compatible_host_compiler(self, cuda_host, make_resolver, runner):
        cuda_host.add_file("/opt/cuda-10.2/bin/nvcc")
        runner.outputs["/opt/cuda-10.2/bin/nvcc"] = nvcc_banner("10.2")
        cuda_host.files.discard("/usr/bin/gcc-8")

        with pytest.raises(NoCompatibleVersionError, match="GCC <= 8.99"):
            make_resolver().resolve("/opt/cuda-10.2")

    def test_injected_strategy(self, cuda_host, make_resolver):
        class FixedStrategy:
            def find_host_compiler(self, toolkit_version):
                return CompilerCandidate("/opt/clang/bin/clang")

        toolchain = make_resolver(strategy=FixedStrategy()).resolve()

        assert toolchain.host_compiler == "/opt/clang/bin/clang"
        assert toolchain.flags == ("--compiler-bindir", "/opt/clang/bin/clang")


class TestToolchain:
    """Tests for the Toolchain value."""

    def test_assemble(self):
        toolchain = ToolchainResolver.assemble(
            Version(12, 4),
            "/usr/local/cuda/bin/nvcc",
            CompilerCandidate("/usr/bin/gcc-13", Version(13, 2, 0)),
            "/usr/local/cuda",
        )

        assert toolchain == Toolchain(
            version=Version(12, 4),
            compiler_path="/usr/local/cuda/bin/nvcc",
            host_compiler="/usr/bin/gcc-13",
            flags=("--compiler-bindir", "/usr/bin/gcc-13"),
            toolkit_dir="/usr/local/cuda",
        )

    def test_is_immutable(self):
        toolchain = Toolchain(Version(11, 8), "/nvcc", "/gcc", ("--compiler-bindir", "/gcc"))

        with pytest.raises(AttributeError):
            toolchain.compiler_path = "/other"

    def test_to_dict(self):
        toolchain = Toolchain(Version(11, 8), "/nvcc", "/gcc", ("--compiler-bindir", "/gcc"))

        assert toolchain.to_dict() == {
            "version": "11.8",
            "compiler_path": "/nvcc",
            "host_compiler": "/gcc",
            "flags": ["--compiler-bindir", "/gcc"],
            "toolkit_dir": "",
        }

    def test_str(self):
        toolchain = Toolchain(Version(11, 8), "/nvcc", "/gcc", ("--compiler-bindir", "/gcc"))

        assert str(toolchain) == "CUDA 11.8 (/nvcc --compiler-bindir /gcc)"
