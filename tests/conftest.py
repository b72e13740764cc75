"""Pytest configuration and fixtures for wsdeps tests."""
import json
import logging
import os
import pytest
from pathlib import Path
from typer.testing import CliRunner

from wsdeps.common import clear_settings_cache


TESTDATA_DIR = Path(__file__).parent / "testdata"


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


def write_manifest(directory: Path, data: dict) -> Path:
    """Write a package.json into directory (created if needed) and return its path."""
    directory.mkdir(parents=True, exist_ok=True)
    manifest = directory / "package.json"
    manifest.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return manifest


@pytest.fixture
def testdata_dir():
    return TESTDATA_DIR


@pytest.fixture
def manifest_writer():
    """Return the write_manifest helper for tests that build their own layout."""
    return write_manifest


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env():
    """Restore WSDEPS_* environment and drop cached settings around each test."""
    original_env = os.environ.copy()
    for key in list(os.environ):
        if key.startswith("WSDEPS_"):
            del os.environ[key]
    clear_settings_cache()
    yield
    os.environ.clear()
    os.environ.update(original_env)
    clear_settings_cache()


@pytest.fixture
def sample_workspace(tmp_path):
    """Create a workspace where one member dependency is not satisfied.

    Layout:
        ws/package.json                  root, workspaces packages/* and apps/*
        ws/packages/fooer                depends on every other member
        ws/packages/foo       1.4.0      satisfies ^1.2.3
        ws/packages/wsFoo     0.0.1      workspace:*
        ws/packages/devBaz    1.0.0      file:../devBaz
        ws/packages/devFoo    5.0.0      does NOT satisfy <=4.5.6
        ws/apps/web                      depends on fooer via link:
        ws/apps/web/fixtures/ignored     excluded by !**/fixtures/**
    """
    root = tmp_path / "ws"
    write_manifest(root, {
        "name": "monorepo",
        "private": True,
        "workspaces": ["packages/*", "apps/*", "!**/fixtures/**"],
    })
    write_manifest(root / "packages" / "fooer", {
        "name": "fooer",
        "version": "1.2.3",
        "dependencies": {"foo": "^1.2.3", "wsFoo": "workspace:*", "left-pad": "^1.3.0"},
        "devDependencies": {"devFoo": "<=4.5.6", "devBaz": "file:../devBaz"},
    })
    write_manifest(root / "packages" / "foo", {"name": "foo", "version": "1.4.0"})
    write_manifest(root / "packages" / "wsFoo", {"name": "wsFoo", "version": "0.0.1"})
    write_manifest(root / "packages" / "devBaz", {"name": "devBaz", "version": "1.0.0"})
    write_manifest(root / "packages" / "devFoo", {"name": "devFoo", "version": "5.0.0"})
    write_manifest(root / "apps" / "web", {
        "name": "web",
        "version": "0.1.0",
        "dependencies": {"fooer": "link:../../packages/fooer"},
    })
    write_manifest(root / "apps" / "web" / "fixtures" / "ignored", {
        "name": "ignored",
        "version": "0.0.0",
    })
    write_manifest(root / "node_modules" / "foo", {"name": "foo", "version": "9.9.9"})
    return root


@pytest.fixture
def healthy_workspace(tmp_path):
    """Create a workspace where every member dependency is satisfied."""
    root = tmp_path / "healthy"
    write_manifest(root, {"name": "healthy", "private": True, "workspaces": ["packages/*"]})
    write_manifest(root / "packages" / "app", {
        "name": "app",
        "version": "1.0.0",
        "dependencies": {"lib": "workspace:^", "utils": "~2.1.0"},
    })
    write_manifest(root / "packages" / "lib", {"name": "lib", "version": "3.0.0"})
    write_manifest(root / "packages" / "utils", {"name": "utils", "version": "2.1.4"})
    return root


@pytest.fixture(autouse=True)
def reset_logging():
    """Detach handlers installed by configure_logging during a test."""
    yield
    wsdeps_logger = logging.getLogger("wsdeps")
    for handler in list(wsdeps_logger.handlers):
        wsdeps_logger.removeHandler(handler)
    wsdeps_logger.setLevel(logging.NOTSET)
    wsdeps_logger.propagate = True
