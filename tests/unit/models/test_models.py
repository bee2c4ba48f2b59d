"""Tests for nixsearch.models document models."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError as PydanticValidationError

from nixsearch.models.base import FlakeRepo, RepoType
from nixsearch.models.option import NixOption
from nixsearch.models.package import NixPackage


class TestNixPackage:
    """Package documents."""

    def test_parses_wire_names(self, package_doc: Any) -> None:
        """Backend field names map onto model fields."""
        source = package_doc(
            "python3Packages.requests",
            "2.32.3",
            package_attr_set="python3Packages",
            package_platforms=["x86_64-linux", "aarch64-darwin"],
            package_mainProgram=None,
            package_license=[{"url": "https://spdx.org/licenses/Apache-2.0.html", "fullName": "Apache License 2.0"}],
            package_license_set=["Apache License 2.0"],
            package_maintainers=[{"name": "Alice", "email": "a@example.org", "github": "alice"}],
            package_teams=[{"shortName": "Python", "githubTeams": ["python"], "members": []}],
            package_homepage=["https://requests.readthedocs.io"],
            package_hydra=None,
        )
        package = NixPackage.model_validate(source)
        assert package.attr_name == "python3Packages.requests"
        assert package.attr_set == "python3Packages"
        assert package.version == "2.32.3"
        assert package.platforms == ["x86_64-linux", "aarch64-darwin"]
        assert package.license[0].full_name == "Apache License 2.0"
        assert package.maintainers[0].github == "alice"
        assert package.teams[0].short_name == "Python"
        assert package.teams[0].github_teams == ["python"]
        assert package.homepage == ["https://requests.readthedocs.io"]

    def test_lists_default_empty(self, package_doc: Any) -> None:
        """Missing list fields default to empty lists."""
        package = NixPackage.model_validate(package_doc())
        assert package.programs == []
        assert package.maintainers == []

    def test_ignores_unknown_fields(self, package_doc: Any) -> None:
        """New backend fields do not break parsing."""
        package = NixPackage.model_validate(package_doc(package_new_field="x"))
        assert package.attr_name == "ripgrep"

    def test_requires_attr_name(self, package_doc: Any) -> None:
        """A package without an attribute name is rejected."""
        source = package_doc()
        del source["package_attr_name"]
        with pytest.raises(PydanticValidationError):
            NixPackage.model_validate(source)

    def test_frozen(self, package_doc: Any) -> None:
        """Documents are immutable."""
        package = NixPackage.model_validate(package_doc())
        with pytest.raises(PydanticValidationError):
            package.version = "0"  # type: ignore[misc]

    def test_flake_fields(self, package_doc: Any) -> None:
        """Flake documents carry the resolved repository."""
        package = NixPackage.model_validate(
            package_doc(
                flake_name="nixvim",
                flake_resolved={"type": "github", "owner": "nix-community", "repo": "nixvim"},
                revision="abc123",
            )
        )
        assert package.flake_name == "nixvim"
        assert package.flake_revision == "abc123"
        assert package.flake_resolved is not None
        assert package.flake_resolved.display_url == "https://github.com/nix-community/nixvim"


class TestNixOption:
    """Option documents."""

    def test_parses_wire_names(self, option_doc: Any) -> None:
        """Option fields map from their wire names."""
        option = NixOption.model_validate(
            option_doc(option_example="true", option_source="nixos/modules/services/web-servers/nginx/default.nix")
        )
        assert option.name == "services.nginx.enable"
        assert option.default == "false"
        assert option.example == "true"
        assert option.source.endswith("default.nix")

    @pytest.mark.parametrize("flake", ["home-manager", ["nixvim", "plugins"], None])
    def test_flake_shapes(self, option_doc: Any, flake: Any) -> None:
        """option_flake may be a string or a list."""
        option = NixOption.model_validate(option_doc(option_flake=flake))
        assert option.flake == flake

    def test_flake_excluded_from_dump(self, option_doc: Any) -> None:
        """The flake path is not part of the output model."""
        option = NixOption.model_validate(option_doc(option_flake="home-manager"))
        assert "flake" not in option.model_dump()


class TestFlakeRepo:
    """Repository locations."""

    @pytest.mark.parametrize(
        ("data", "url"),
        [
            ({"type": "github", "owner": "NixOS", "repo": "nix"}, "https://github.com/NixOS/nix"),
            ({"type": "gitlab", "owner": "o", "repo": "r"}, "https://gitlab.com/o/r"),
            ({"type": "sourcehut", "owner": "sircmpwn", "repo": "hare"}, "https://git.sr.ht/~sircmpwn/hare"),
            ({"type": "git", "url": "https://example.org/x.git"}, "https://example.org/x.git"),
            ({"type": "github", "owner": "only-owner"}, None),
        ],
    )
    def test_display_url(self, data: dict[str, str], url: str | None) -> None:
        """Forge repositories derive their browsable URL."""
        assert FlakeRepo.model_validate(data).display_url == url

    def test_is_forge(self) -> None:
        """Plain git is not a forge."""
        assert not FlakeRepo(type=RepoType.GIT, url="x").is_forge
        assert FlakeRepo(type=RepoType.SOURCEHUT, owner="a", repo="b").is_forge
