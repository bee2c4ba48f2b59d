"""Document models, field tables and result containers."""

from nixsearch.models.base import FlakeDocument, FlakeRepo, NixSearchModel, RepoType
from nixsearch.models.fields import TYPE_FIELD, FlakeField, OptionField, PackageField
from nixsearch.models.option import NixOption
from nixsearch.models.package import Hydra, HydraPath, License, Maintainer, NixPackage, Team
from nixsearch.models.results import AggregationBucket, SearchPage, SearchResults, SearchWarning

__all__ = [
    # Base
    "NixSearchModel",
    "FlakeDocument",
    "FlakeRepo",
    "RepoType",
    # Field tables
    "TYPE_FIELD",
    "FlakeField",
    "OptionField",
    "PackageField",
    # Documents
    "NixOption",
    "NixPackage",
    "License",
    "Maintainer",
    "Team",
    "Hydra",
    "HydraPath",
    # Results
    "AggregationBucket",
    "SearchResults",
    "SearchPage",
    "SearchWarning",
]
