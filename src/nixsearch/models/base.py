"""Base models and shared types.

Example:
    >>> from nixsearch.models.base import RepoType
    >>> RepoType.GITHUB.value
    'github'
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from nixsearch.models.fields import FlakeField


class NixSearchModel(BaseModel):
    """Base model for backend documents.

    Fields are declared with their wire names as aliases. Unknown backend
    fields are ignored so index schema additions do not break parsing.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class RepoType(str, Enum):
    """Kind of repository a flake was resolved from.

    Example:
        >>> list(RepoType)  # doctest: +NORMALIZE_WHITESPACE
        [<RepoType.GIT: 'git'>, <RepoType.GITHUB: 'github'>,
         <RepoType.GITLAB: 'gitlab'>, <RepoType.SOURCEHUT: 'sourcehut'>]
    """

    GIT = "git"
    GITHUB = "github"
    GITLAB = "gitlab"
    SOURCEHUT = "sourcehut"


class FlakeRepo(NixSearchModel):
    """Where a flake was resolved from.

    Git repositories carry a ``url``; forge repositories (GitHub, GitLab,
    SourceHut) carry ``owner`` and ``repo``.

    Example:
        >>> from nixsearch.models.base import FlakeRepo
        >>> repo = FlakeRepo.model_validate({"type": "github", "owner": "NixOS", "repo": "nix"})
        >>> repo.display_url
        'https://github.com/NixOS/nix'
    """

    type: RepoType
    url: str | None = None
    owner: str | None = None
    repo: str | None = None

    @property
    def is_forge(self) -> bool:
        return self.type in (RepoType.GITHUB, RepoType.GITLAB, RepoType.SOURCEHUT)

    @property
    def display_url(self) -> str | None:
        """Browsable URL for the repository, when one can be derived."""
        if not self.is_forge:
            return self.url
        if not (self.owner and self.repo):
            return None
        host = {
            RepoType.GITHUB: "https://github.com",
            RepoType.GITLAB: "https://gitlab.com",
            RepoType.SOURCEHUT: "https://git.sr.ht",
        }[self.type]
        owner = f"~{self.owner}" if self.type is RepoType.SOURCEHUT else self.owner
        return f"{host}/{owner}/{self.repo}"


class FlakeDocument(NixSearchModel):
    """Fields shared by documents that may come from a flake."""

    flake_name: str | None = Field(default=None, alias=FlakeField.NAME.value)
    flake_description: str | None = Field(default=None, alias=FlakeField.DESCRIPTION.value)
    flake_resolved: FlakeRepo | None = Field(default=None, alias=FlakeField.RESOLVED.value)
    flake_revision: str | None = Field(default=None, alias=FlakeField.REVISION.value)
