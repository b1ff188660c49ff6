"""Custom-resource manifest codec shared by the persistent store adapters."""

from __future__ import annotations

from .schema import API_GROUP, API_VERSION, ProjectClaimManifest, ProjectReferenceManifest
from .translator import (
    Manifest,
    ManifestError,
    from_manifest,
    merge_manifest,
    parse_claim,
    parse_reference,
    to_manifest,
)

__all__ = [
    "API_GROUP",
    "API_VERSION",
    "Manifest",
    "ManifestError",
    "ProjectClaimManifest",
    "ProjectReferenceManifest",
    "from_manifest",
    "merge_manifest",
    "parse_claim",
    "parse_reference",
    "to_manifest",
]
