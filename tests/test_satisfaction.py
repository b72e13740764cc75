"""
Tests for workspace satisfaction.

Paths are plain strings; satisfies() only does path arithmetic, so nothing
needs to exist on disk unless the test says otherwise.
"""

import os

import pytest

from wsdeps.common import SatisfactionError, SatisfactionReason
from wsdeps.dependencies import (
    CandidatePackage,
    DependencyCategory,
    DependencyDescriptor,
    SatisfactionResult,
    satisfies,
)
from wsdeps.manifest import read_package_json


def make_dep(name="foo", version_range="^1.2.3", protocol="", from_file="/ws/a/package.json"):
    return DependencyDescriptor(
        name=name,
        version_range=version_range,
        category=DependencyCategory.DEPENDENCIES,
        protocol=protocol,
        from_name="a",
        from_version="1.0.0",
        from_file=from_file,
    )


def make_pkg(name="foo", version="1.2.3", directory="/ws/foo"):
    return CandidatePackage(name=name, version=version, directory=directory)


def reason_of(result: SatisfactionResult):
    return result.error.reason if result.error else None


# ============================================================================
# Guards
# ============================================================================


class TestNameGuard:
    """The name check runs before anything else."""

    @pytest.mark.parametrize("protocol", ["", "npm", "workspace", "file", "git"])
    def test_name_mismatch_dominates(self, protocol):
        result = satisfies(make_pkg(name="bar"), make_dep(protocol=protocol), "/ws")
        assert result.satisfied is False
        assert reason_of(result) == SatisfactionReason.NAME_MISMATCH

    def test_name_mismatch_even_outside_workspace(self):
        result = satisfies(make_pkg(name="bar", directory="/elsewhere"), make_dep())
        assert reason_of(result) == SatisfactionReason.NAME_MISMATCH

    def test_error_mentions_both_names(self):
        _, err = satisfies(make_pkg(name="bar"), make_dep(), "/ws")
        assert "bar != foo" in err.message


class TestWorkspaceRoot:
    """Workspace root resolution and membership."""

    def test_workspace_protocol_needs_a_root(self):
        result = satisfies(make_pkg(), make_dep(protocol="workspace", version_range="*"))
        assert result == (False, result.error)
        assert reason_of(result) == SatisfactionReason.MISSING_WORKSPACE_INFO

    def test_empty_root_counts_as_missing(self):
        result = satisfies(make_pkg(), make_dep(protocol="workspace", version_range="*"), "")
        assert reason_of(result) == SatisfactionReason.MISSING_WORKSPACE_INFO

    def test_default_root_is_declaring_manifest_dir(self):
        """Without a root only packages below the declaring manifest are members."""
        inside = satisfies(make_pkg(directory="/ws/a/vendor/foo"), make_dep())
        assert inside == (True, None)

        outside = satisfies(make_pkg(directory="/ws/foo"), make_dep())
        assert outside.satisfied is False
        assert reason_of(outside) == SatisfactionReason.OUTSIDE_WORKSPACE

    def test_outside_workspace(self):
        result = satisfies(make_pkg(directory="/outside/pkg"), make_dep(), "/ws")
        assert result.satisfied is False
        assert reason_of(result) == SatisfactionReason.OUTSIDE_WORKSPACE

    def test_sibling_with_common_prefix_is_outside(self):
        result = satisfies(make_pkg(directory="/ws-2/foo"), make_dep(), "/ws")
        assert reason_of(result) == SatisfactionReason.OUTSIDE_WORKSPACE

    def test_root_trailing_slash_is_ignored(self):
        assert satisfies(make_pkg(), make_dep(), "/ws/") == (True, None)

    def test_relative_root_is_resolved_from_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        pkg = make_pkg(directory=str(tmp_path / "ws" / "foo"))
        assert satisfies(pkg, make_dep(), "ws") == (True, None)
        assert reason_of(satisfies(pkg, make_dep(), "other")) == SatisfactionReason.OUTSIDE_WORKSPACE

    def test_cwd_failure_propagates(self, monkeypatch):
        def broken_getcwd():
            raise FileNotFoundError("cwd removed")

        monkeypatch.setattr(os, "getcwd", broken_getcwd)
        with pytest.raises(OSError):
            satisfies(make_pkg(), make_dep(), "relative/root")


# ============================================================================
# Protocols
# ============================================================================


class TestWorkspaceProtocol:
    """workspace: dependencies are trusted once inside the workspace."""

    @pytest.mark.parametrize("version", ["1.2.3", "0.0.0", "not-a-version", ""])
    def test_version_never_consulted(self, version):
        dep = make_dep(protocol="workspace", version_range="^9.0.0")
        assert satisfies(make_pkg(version=version), dep, "/ws") == (True, None)

    def test_membership_still_required(self):
        dep = make_dep(protocol="workspace", version_range="*")
        result = satisfies(make_pkg(directory="/other/foo"), dep, "/ws")
        assert reason_of(result) == SatisfactionReason.OUTSIDE_WORKSPACE


class TestLocalPathProtocols:
    """file:, link: and portal: compare resolved paths."""

    @pytest.mark.parametrize("protocol", ["file", "link", "portal"])
    def test_matching_path(self, protocol):
        dep = make_dep(name="bar", version_range="../bar", protocol=protocol)
        assert satisfies(make_pkg(name="bar", directory="/ws/bar"), dep, "/ws") == (True, None)

    @pytest.mark.parametrize("protocol", ["file", "link", "portal"])
    def test_path_mismatch(self, protocol):
        dep = make_dep(name="bar", version_range="../bar", protocol=protocol)
        result = satisfies(make_pkg(name="bar", directory="/ws/other"), dep, "/ws")
        assert result.satisfied is False
        assert reason_of(result) == SatisfactionReason.PATH_MISMATCH

    def test_trailing_slashes_compare_equal(self):
        dep = make_dep(name="bar", version_range="../bar/", protocol="file")
        assert satisfies(make_pkg(name="bar", directory="/ws/bar/"), dep, "/ws") == (True, None)

    def test_dot_segments_are_normalised(self):
        dep = make_dep(name="bar", version_range="./../x/../bar", protocol="file")
        assert satisfies(make_pkg(name="bar", directory="/ws/./bar"), dep, "/ws") == (True, None)

    def test_version_is_ignored(self):
        dep = make_dep(name="bar", version_range="../bar", protocol="file")
        pkg = make_pkg(name="bar", version="garbage", directory="/ws/bar")
        assert satisfies(pkg, dep, "/ws") == (True, None)

    def test_path_is_not_required_to_exist(self, tmp_path):
        missing = tmp_path / "nope"
        dep = make_dep(
            name="bar", version_range="../nope", protocol="file",
            from_file=str(tmp_path / "a" / "package.json"),
        )
        pkg = make_pkg(name="bar", directory=str(missing))
        assert satisfies(pkg, dep, str(tmp_path)) == (True, None)


class TestRemoteProtocols:
    """Non-local protocols are never locally satisfiable."""

    @pytest.mark.parametrize(
        "protocol,version_range",
        [
            ("git", "//github.com/org/foo.git"),
            ("git+ssh", "//git@github.com:org/foo.git"),
            ("https", "//example.com/foo-1.2.3.tgz"),
            ("github", "org/foo#v1.2.3"),
            ("exec", "./generate.js"),
        ],
    )
    def test_remote(self, protocol, version_range):
        dep = make_dep(protocol=protocol, version_range=version_range)
        result = satisfies(make_pkg(), dep, "/ws")
        assert result.satisfied is False
        assert reason_of(result) == SatisfactionReason.REMOTE_PROTOCOL


# ============================================================================
# Version Ranges
# ============================================================================


class TestVersionRanges:
    """Bare and npm: dependencies check the candidate version."""

    @pytest.mark.parametrize("wildcard", ["*", "^", "~"])
    @pytest.mark.parametrize("version", ["1.2.3", "not-a-version", ""])
    def test_wildcards_accept_anything(self, wildcard, version):
        dep = make_dep(version_range=wildcard)
        assert satisfies(make_pkg(version=version), dep, "/ws") == (True, None)

    @pytest.mark.parametrize(
        "version_range,version",
        [
            ("^1.2.3", "1.2.3"),
            ("^1.2.3", "1.9.0"),
            ("~1.2.0", "1.2.9"),
            ("<=4.5.6", "4.5.6"),
            ("10.11.x", "10.11.4"),
            (">=1.0.0 <2.0.0", "1.5.0"),
            (">=1.0.0, <2.0.0", "1.5.0"),
            ("1.x || 3.x", "3.1.0"),
            ("1.0.0 - 2.0.0", "2.0.0"),
            ("1.2.3", "1.2.3"),
            ("^1.2.3", "v1.2.3"),
            (">= 1.2.3 < 2", "1.9.0"),
            ("~> 1.2", "1.2.7"),
            ("=v1.2.3", "1.2.3"),
        ],
    )
    def test_in_range(self, version_range, version):
        dep = make_dep(version_range=version_range)
        assert satisfies(make_pkg(version=version), dep, "/ws") == (True, None)

    @pytest.mark.parametrize(
        "version_range,version",
        [
            ("^1.2.3", "2.0.0"),
            ("^1.2.3", "1.2.2"),
            ("<=4.5.6", "5.0.0"),
            ("~7.8.9", "7.9.0"),
            ("1.2.3", "1.2.4"),
            (">= 1.2.3", "0.5.0"),
            ("^v1.2.3", "0.5.0"),
            ("=v1.2.3", "0.5.0"),
            ("~>1.2", "0.5.0"),
            ("< 1.0.0", "3.0.0"),
        ],
    )
    def test_out_of_range(self, version_range, version):
        dep = make_dep(version_range=version_range)
        result = satisfies(make_pkg(version=version), dep, "/ws")
        assert result.satisfied is False
        assert reason_of(result) == SatisfactionReason.VERSION_RANGE_NOT_SATISFIED
        assert result.error.is_soft is False

    def test_npm_protocol_checks_version(self):
        dep = make_dep(protocol="npm", version_range="0.0.1")
        assert satisfies(make_pkg(version="0.0.1"), dep, "/ws") == (True, None)
        mismatch = satisfies(make_pkg(version="0.0.2"), dep, "/ws")
        assert reason_of(mismatch) == SatisfactionReason.VERSION_RANGE_NOT_SATISFIED

    @pytest.mark.parametrize("version_range", ["latest", "next", "^not.a.range", ""])
    def test_unparseable_range_is_soft_fail(self, version_range):
        dep = make_dep(version_range=version_range)
        result = satisfies(make_pkg(), dep, "/ws")
        assert result.satisfied is True
        assert reason_of(result) == SatisfactionReason.VERSION_RANGE_UNPARSEABLE
        assert result.error.is_soft is True

    @pytest.mark.parametrize("version", ["not-a-version", "", "1.2.3.4.5"])
    def test_unparseable_version_is_soft_fail(self, version):
        result = satisfies(make_pkg(version=version), make_dep(), "/ws")
        assert result.satisfied is True
        assert reason_of(result) == SatisfactionReason.VERSION_RANGE_UNPARSEABLE


# ============================================================================
# Results
# ============================================================================


class TestSatisfactionResult:
    """Shape of the returned verdict."""

    def test_unpacks_as_pair(self):
        ok, err = satisfies(make_pkg(), make_dep(), "/ws")
        assert ok is True
        assert err is None

    def test_error_shape(self):
        _, err = satisfies(make_pkg(directory="/outside/pkg"), make_dep(), "/ws")
        assert isinstance(err, SatisfactionError)
        assert err.code == "SATISFACTION_FAILED"
        data = err.to_dict()
        assert data["error"] == "SatisfactionError"
        assert data["reason"] == "outside_workspace"

    def test_inputs_are_not_modified(self):
        dep, pkg = make_dep(), make_pkg()
        satisfies(pkg, dep, "/ws")
        assert dep == make_dep()
        assert pkg == make_pkg()


# ============================================================================
# Scenarios with manifests on disk
# ============================================================================


class TestManifestScenarios:
    """End-to-end checks built from package.json files."""

    @pytest.fixture
    def fooer_manifest(self, testdata_dir):
        return (testdata_dir / "pkgStrings.json").read_text(encoding="utf-8")

    @pytest.fixture
    def layout(self, tmp_path, fooer_manifest, manifest_writer):
        """Place fooer and one candidate package under tmp_path and load both."""

        def _layout(fooer_dir, candidate_dir, candidate):
            fooer_path = tmp_path / fooer_dir / "package.json"
            fooer_path.parent.mkdir(parents=True, exist_ok=True)
            fooer_path.write_text(fooer_manifest, encoding="utf-8")
            candidate_path = manifest_writer(tmp_path / candidate_dir, candidate)
            return read_package_json(fooer_path), read_package_json(candidate_path)

        return _layout

    def test_workspace_protocol(self, tmp_path, layout):
        fooer, ws_foo = layout(
            "packages/fooer", "packages/wsFoo", {"name": "wsFoo", "version": "0.0.1"}
        )
        dep = fooer.get_dependency_info("wsFoo")
        assert ws_foo.satisfies_dependency(dep, str(tmp_path)) == (True, None)

    def test_workspace_protocol_without_root(self, layout):
        fooer, ws_foo = layout(
            "packages/fooer", "packages/wsFoo", {"name": "wsFoo", "version": "0.0.1"}
        )
        result = ws_foo.satisfies_dependency(fooer.get_dependency_info("wsFoo"))
        assert reason_of(result) == SatisfactionReason.MISSING_WORKSPACE_INFO

    def test_file_protocol_path_mismatch(self, tmp_path, layout):
        """devBaz is declared as file:../devBaz but lives below fooer."""
        fooer, dev_baz = layout("fooer", "fooer/devBaz", {"name": "devBaz", "version": "1.0.0"})
        result = dev_baz.satisfies_dependency(fooer.get_dependency_info("devBaz"), str(tmp_path))
        assert reason_of(result) == SatisfactionReason.PATH_MISMATCH

    def test_file_protocol_outside_workspace(self, tmp_path, layout):
        fooer, dev_baz = layout("ws/fooer", "devBaz", {"name": "devBaz", "version": "1.0.0"})
        result = dev_baz.satisfies_dependency(
            fooer.get_dependency_info("devBaz"), str(tmp_path / "ws")
        )
        assert reason_of(result) == SatisfactionReason.OUTSIDE_WORKSPACE

    def test_file_protocol_inside_workspace(self, tmp_path, layout):
        fooer, dev_baz = layout(
            "packages/fooer", "packages/devBaz", {"name": "devBaz", "version": "1.0.0"}
        )
        result = dev_baz.satisfies_dependency(fooer.get_dependency_info("devBaz"), str(tmp_path))
        assert result == (True, None)

    def test_version_mismatch(self, tmp_path, layout):
        fooer, dev_foo = layout(
            "packages/fooer", "packages/devFoo", {"name": "devFoo", "version": "5.0.0"}
        )
        result = dev_foo.satisfies_dependency(fooer.get_dependency_info("devFoo"), str(tmp_path))
        assert result.satisfied is False
        assert reason_of(result) == SatisfactionReason.VERSION_RANGE_NOT_SATISFIED
