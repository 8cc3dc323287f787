"""
Pytest configuration and shared fixtures for cudakit tests.
"""

import pytest

from cudakit.core.platform import PlatformInfo, clear_platform_cache
from cudakit.core.version import Version, VersionRange
from cudakit.discovery.environment import EnvironmentSignalCollector
from cudakit.discovery.prober import PathProber
from cudakit.toolchain.compatibility import CompatibilityTable
from tests.mocks import MockFilesystem, ScriptedRunner


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that probe the real host",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def platform_linux():
    """64-bit Linux platform info."""
    return PlatformInfo("linux", "x64", 64)


@pytest.fixture
def platform_windows():
    """64-bit Windows platform info."""
    return PlatformInfo("windows", "x64", 64)


@pytest.fixture
def platform_macos():
    """macOS platform info."""
    return PlatformInfo("macos", "arm64", 64)


@pytest.fixture
def mock_fs():
    """Empty in-memory filesystem."""
    return MockFilesystem()


@pytest.fixture
def runner():
    """Command runner with no scripted output."""
    return ScriptedRunner()


@pytest.fixture
def small_table():
    """Compatibility table with a few entries."""
    return CompatibilityTable(
        {
            Version(10, 2): VersionRange(Version(0, 0), Version(8, 99)),
            Version(11, 8): VersionRange(Version(5, 0), Version(11, 99)),
        }
    )


@pytest.fixture
def make_prober(mock_fs, platform_linux):
    """Factory for a PathProber over ``mock_fs`` with a given environment."""

    def _make(environ=None, platform=None, filesystem=None, toolkit_versions=()):
        platform = platform or platform_linux
        environment = EnvironmentSignalCollector(
            environ or {}, list_separator=platform.list_separator
        )
        return PathProber(
            platform=platform,
            filesystem=filesystem or mock_fs,
            environment=environment,
            toolkit_versions=toolkit_versions,
        )

    return _make


@pytest.fixture(autouse=True)
def reset_caches():
    """Reset module-level caches between tests."""
    clear_platform_cache()
    yield
