"""
package.json Manifests
======================

Pydantic model for the parts of a ``package.json`` that wsdeps cares about,
plus a reader that turns file and JSON problems into wsdeps errors.

Design Principles:
- Lenient: unknown fields are kept, loosely typed fields (author, bin, man,
  funding) accept strings, objects or lists as npm does
- Read-only: the model is never written back to disk
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..common.errors import InvalidManifestError, ManifestNotFoundError
from ..common.logger import get_logger
from ..common.path_utils import to_absolute
from ..dependencies.descriptor import DependencyDescriptor, extract_dependency_info
from ..dependencies.satisfaction import CandidatePackage, SatisfactionResult, satisfies

logger = get_logger(__name__)


class PackageManifest(BaseModel):
    """
    A parsed package.json.

    The manifest's own location is kept in private attributes: ``file`` is
    the manifest path and ``directory`` the package directory.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = ""
    version: str = ""
    description: str = ""
    main: str = ""
    scripts: Dict[str, str] = Field(default_factory=dict)
    dependencies: Dict[str, str] = Field(default_factory=dict)
    dev_dependencies: Dict[str, str] = Field(default_factory=dict, alias="devDependencies")
    optional_dependencies: Dict[str, str] = Field(
        default_factory=dict, alias="optionalDependencies"
    )
    peer_dependencies: Dict[str, str] = Field(default_factory=dict, alias="peerDependencies")
    workspaces: List[str] = Field(default_factory=list)

    author: Optional[Union[str, Dict[str, Any]]] = None
    bin: Optional[Union[str, Dict[str, str]]] = None
    man: Optional[Union[str, List[str]]] = None
    funding: Optional[Union[str, Dict[str, Any], List[Any]]] = None

    _file: str = PrivateAttr(default="")
    _directory: str = PrivateAttr(default="")

    @field_validator("workspaces", mode="before")
    @classmethod
    def normalize_workspaces(cls, v: Any) -> Any:
        """Accept yarn's ``{"packages": [...]}`` form."""
        if isinstance(v, dict):
            return v.get("packages", [])
        return v

    @classmethod
    def from_dict(cls, data: Dict[str, Any], file: str = "") -> "PackageManifest":
        """
        Build a manifest from already parsed JSON.

        Args:
            data: Parsed package.json content
            file: Path of the manifest file, used to resolve relative paths
        """
        manifest = cls.model_validate(data)
        if file:
            manifest._file = file
            manifest._directory = os.path.dirname(file)
        return manifest

    @property
    def file(self) -> str:
        return self._file

    @property
    def directory(self) -> str:
        return self._directory

    def get_dependency_info(self, module_name: str) -> Optional[DependencyDescriptor]:
        """Describe how this manifest declares ``module_name``, if at all."""
        return extract_dependency_info(self, module_name)

    def merged_dependencies(self) -> Dict[str, str]:
        """
        Installable dependencies across sections (peer dependencies excluded).

        When a name appears in several sections the higher priority one wins:
        dependencies, then devDependencies, then optionalDependencies.
        """
        merged: Dict[str, str] = {}
        for section in (self.optional_dependencies, self.dev_dependencies, self.dependencies):
            merged.update(section)
        return merged

    def available_tasks(self) -> List[str]:
        """Names of the scripts runnable with ``npm run``."""
        return list(self.scripts)

    def has_task(self, task: str) -> bool:
        return task in self.scripts

    def as_candidate(self) -> CandidatePackage:
        return CandidatePackage(name=self.name, version=self.version, directory=self.directory)

    def satisfies_dependency(
        self, descriptor: DependencyDescriptor, workspace_root: Optional[str] = None
    ) -> SatisfactionResult:
        """Check whether this package satisfies ``descriptor``. See satisfies()."""
        return satisfies(self.as_candidate(), descriptor, workspace_root)


def read_package_json(path: Union[str, Path]) -> PackageManifest:
    """
    Read and validate a package.json file.

    Args:
        path: Path to the manifest; made absolute

    Returns:
        PackageManifest with ``file`` and ``directory`` set

    Raises:
        ManifestNotFoundError: If the file does not exist
        InvalidManifestError: If the content is not a valid manifest
    """
    file = to_absolute(str(path))
    manifest_path = Path(file)
    if not manifest_path.is_file():
        raise ManifestNotFoundError(file)

    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InvalidManifestError(file, f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise InvalidManifestError(file, "top-level value must be an object")

    try:
        manifest = PackageManifest.from_dict(data, file=file)
    except PydanticValidationError as e:
        raise InvalidManifestError(file, str(e)) from e

    logger.debug("Loaded manifest", file=file, package=manifest.name)
    return manifest
