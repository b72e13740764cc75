"""package.json reading and the manifest model."""

from .package_json import PackageManifest, read_package_json

__all__ = [
    "PackageManifest",
    "read_package_json",
]
