"""Package documents.

Example:
    >>> from nixsearch.models.package import NixPackage
    >>> pkg = NixPackage.model_validate({
    ...     "package_attr_name": "ripgrep",
    ...     "package_attr_set": "No package set",
    ...     "package_pname": "ripgrep",
    ...     "package_pversion": "14.1.1",
    ...     "package_system": "x86_64-linux",
    ... })
    >>> pkg.attr_name, pkg.version
    ('ripgrep', '14.1.1')
"""

from __future__ import annotations

from pydantic import Field

from nixsearch.models.base import FlakeDocument, NixSearchModel
from nixsearch.models.fields import PackageField


class License(NixSearchModel):
    url: str | None = None
    full_name: str | None = Field(default=None, alias="fullName")


class Maintainer(NixSearchModel):
    name: str | None = None
    email: str | None = None
    github: str | None = None


class Team(NixSearchModel):
    members: list[Maintainer] = Field(default_factory=list)
    scope: str | None = None
    short_name: str | None = Field(default=None, alias="shortName")
    github_teams: list[str] = Field(default_factory=list, alias="githubTeams")


class HydraPath(NixSearchModel):
    output: str
    path: str


class Hydra(NixSearchModel):
    """Hydra build information for a package output."""

    build_id: int
    build_status: int
    platform: str
    project: str
    jobset: str
    job: str
    path: list[HydraPath] = Field(default_factory=list)
    drv_path: str


class NixPackage(FlakeDocument):
    """A package from the nixpkgs (or flake) index."""

    attr_name: str = Field(alias=PackageField.ATTR_NAME.value)
    attr_set: str = Field(alias=PackageField.ATTR_SET.value)
    name: str = Field(alias=PackageField.PNAME.value)
    version: str = Field(alias=PackageField.VERSION.value)
    system: str = Field(alias=PackageField.SYSTEM.value)
    platforms: list[str] = Field(default_factory=list, alias=PackageField.PLATFORMS.value)
    outputs: list[str] = Field(default_factory=list, alias=PackageField.OUTPUTS.value)
    default_output: str | None = Field(default=None, alias=PackageField.DEFAULT_OUTPUT.value)
    programs: list[str] = Field(default_factory=list, alias=PackageField.PROGRAMS.value)
    main_program: str | None = Field(default=None, alias=PackageField.MAIN_PROGRAM.value)
    license: list[License] = Field(default_factory=list, alias=PackageField.LICENSE.value)
    license_set: list[str] = Field(default_factory=list, alias=PackageField.LICENSE_SET.value)
    maintainers: list[Maintainer] = Field(default_factory=list, alias=PackageField.MAINTAINERS.value)
    maintainers_set: list[str] = Field(default_factory=list, alias=PackageField.MAINTAINERS_SET.value)
    teams: list[Team] = Field(default_factory=list, alias=PackageField.TEAMS.value)
    teams_set: list[str] = Field(default_factory=list, alias=PackageField.TEAMS_SET.value)
    description: str | None = Field(default=None, alias=PackageField.DESCRIPTION.value)
    long_description: str | None = Field(default=None, alias=PackageField.LONG_DESCRIPTION.value)
    hydra: list[Hydra] | None = Field(default=None, alias=PackageField.HYDRA.value)
    homepage: list[str] | None = Field(default=None, alias=PackageField.HOMEPAGE.value)
    position: str | None = Field(default=None, alias=PackageField.POSITION.value)
