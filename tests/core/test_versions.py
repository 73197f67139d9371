"""
Tests for version parsing and version-gated classification.
"""

import pytest
from packaging.version import Version

from tacobuild.core.exceptions import InvalidVersionError
from tacobuild.core.versions import (
    IpaPackaging,
    ToolchainNaming,
    classify_ios_platform,
    classify_toolchain,
    parse_version,
)


class TestParseVersion:
    """Test semantic version parsing."""

    def test_plain_release(self):
        assert parse_version("5.1.1") == Version("5.1.1")

    def test_v_prefix(self):
        assert parse_version("v5.1.1") == Version("5.1.1")

    def test_build_metadata_ignored(self):
        assert parse_version("5.1.1+sha.abc") == Version("5.1.1")

    def test_prerelease_sorts_below_release(self):
        assert parse_version("3.7.0-rc.1") < parse_version("3.7.0")
        assert parse_version("3.7.0-rc.1") > parse_version("3.6.3")

    def test_legacy_cli_version_with_lib_suffix(self):
        """Old CLI versions looked like 3.6.3-0.2.13."""
        assert parse_version("3.6.3-0.2.13") < parse_version("3.7.0")

    def test_short_version(self):
        assert parse_version("5") == Version("5")

    def test_already_parsed(self):
        version = Version("4.0.0")
        assert parse_version(version) is version

    def test_surrounding_whitespace(self):
        assert parse_version(" 3.8.0\n") == Version("3.8.0")

    @pytest.mark.parametrize("text", ["", "latest", "five.one", "1.2.3.x-y"])
    def test_invalid(self, text):
        with pytest.raises(InvalidVersionError, match="Invalid version"):
            parse_version(text)


class TestClassifyToolchain:
    """Test package naming selection around 3.7.0."""

    @pytest.mark.parametrize(
        "version", ["3.5.0-0.2.7", "3.6.3-0.2.13", "3.6.9", "3.7.0-rc.1"]
    )
    def test_legacy_below_3_7_0(self, version):
        naming = classify_toolchain(version)

        assert naming is ToolchainNaming.LEGACY
        assert naming.package_name == "cordova"
        assert naming.nested_attribute is None

    @pytest.mark.parametrize("version", ["3.7.0", "3.7.1", "5.1.1", "10.0.0"])
    def test_modern_from_3_7_0(self, version):
        naming = classify_toolchain(version)

        assert naming is ToolchainNaming.MODERN
        assert naming.package_name == "cordova-lib"
        assert naming.nested_attribute == "cordova"

    def test_invalid_version_raises(self):
        with pytest.raises(InvalidVersionError):
            classify_toolchain("not-a-version")


class TestClassifyIosPlatform:
    """Test ipa packaging gate around cordova-ios 3.9.0."""

    @pytest.mark.parametrize("version", ["3.5.0", "3.8.0", "3.8.99", "3.9.0-dev"])
    def test_manual_packaging_below_3_9_0(self, version):
        assert classify_ios_platform(version) is IpaPackaging.NEEDS_MANUAL_PACKAGING

    @pytest.mark.parametrize("version", ["3.9.0", "3.9.2", "4.0.0-dev", "4.0.0"])
    def test_auto_packaged_from_3_9_0(self, version):
        assert classify_ios_platform(version) is IpaPackaging.AUTO_PACKAGED
