"""Backend field names for each document kind.

Each enum member's value is the exact wire name used in the search.nixos.org
index mapping. Query builders and document models both read from these
tables, so a field name is spelled in exactly one place.

Example:
    >>> from nixsearch.models.fields import PackageField
    >>> PackageField.ATTR_NAME.value
    'package_attr_name'
"""

from __future__ import annotations

from enum import Enum

# Discriminator shared by every document in an index
TYPE_FIELD = "type"


class FlakeField(str, Enum):
    """Fields present on documents that come from flakes."""

    NAME = "flake_name"
    DESCRIPTION = "flake_description"
    RESOLVED = "flake_resolved"
    REVISION = "revision"


class PackageField(str, Enum):
    """Package document fields."""

    ATTR_NAME = "package_attr_name"
    ATTR_SET = "package_attr_set"
    PNAME = "package_pname"
    VERSION = "package_pversion"
    PLATFORMS = "package_platforms"
    OUTPUTS = "package_outputs"
    DEFAULT_OUTPUT = "package_default_output"
    PROGRAMS = "package_programs"
    MAIN_PROGRAM = "package_mainProgram"
    LICENSE = "package_license"
    LICENSE_SET = "package_license_set"
    MAINTAINERS = "package_maintainers"
    MAINTAINERS_SET = "package_maintainers_set"
    TEAMS = "package_teams"
    TEAMS_SET = "package_teams_set"
    DESCRIPTION = "package_description"
    LONG_DESCRIPTION = "package_longDescription"
    HYDRA = "package_hydra"
    SYSTEM = "package_system"
    HOMEPAGE = "package_homepage"
    POSITION = "package_position"


class OptionField(str, Enum):
    """Option document fields."""

    NAME = "option_name"
    DESCRIPTION = "option_description"
    TYPE = "option_type"
    DEFAULT = "option_default"
    EXAMPLE = "option_example"
    SOURCE = "option_source"
    FLAKE = "option_flake"
