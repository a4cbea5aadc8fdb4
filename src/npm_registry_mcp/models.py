"""Data models for npm registry search results and package documents.

Pydantic models mirror the registry's JSON wire format field for field
(RESPONSE_SHAPER pattern). Every field has a default so a document with
missing keys still decodes, and models are frozen so each response is an
immutable snapshot.
"""

from __future__ import annotations

import re
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

# Legacy npm person string: "Name <email> (url)".
_PERSON_RE = re.compile(r"^\s*(?P<name>[^<(]*?)\s*(?:<(?P<email>[^>]*)>)?\s*(?:\((?P<url>[^)]*)\))?\s*$")


def _coerce_keywords(value: Any) -> Any:
    """Old packuments store keywords as one comma or space separated string."""
    if isinstance(value, str):
        return [kw for kw in re.split(r"[,\s]+", value) if kw]
    if isinstance(value, list):
        return [kw for kw in value if isinstance(kw, str)]
    return value


def _coerce_dependencies(value: Any) -> Any:
    # LEARN: Some early versions list bare dependency names; each maps to "*" (any version).
    if isinstance(value, dict):
        return {name: spec for name, spec in value.items() if isinstance(spec, str)}
    if isinstance(value, list):
        return {name: "*" for name in value if isinstance(name, str)}
    return {}


def _coerce_deprecated(value: Any) -> Any:
    return value if isinstance(value, str) else ""


def _coerce_license(value: Any) -> Any:
    # LEARN: Pre-SPDX packages used {"type": "MIT", "url": ...} or a list of those.
    if isinstance(value, dict):
        return value.get("type") or ""
    if isinstance(value, list):
        types = [item.get("type", "") if isinstance(item, dict) else str(item) for item in value]
        return " OR ".join(t for t in types if t)
    return value


Keywords = Annotated[list[str], BeforeValidator(_coerce_keywords)]
License = Annotated[str, BeforeValidator(_coerce_license)]
Dependencies = Annotated[dict[str, str], BeforeValidator(_coerce_dependencies)]
Deprecated = Annotated[str, BeforeValidator(_coerce_deprecated)]


class RegistryModel(BaseModel):
    """Base for every registry model: immutable, alias-aware, tolerant of nulls."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # LEARN: The registry sends `null` for unset fields in some documents.
        # Dropping them lets the field default apply instead of failing validation.
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


def _parse_person(data: Any) -> Any:
    if not isinstance(data, str):
        return data
    match = _PERSON_RE.match(data)
    if match is None:
        return {"name": data.strip()}
    return {key: value for key, value in match.groupdict().items() if value}


# --- Shared records ---


class Author(RegistryModel):
    """Package author. Accepts the legacy ``"Name <email> (url)"`` string form."""

    name: str = ""
    email: str = ""
    url: str = ""
    username: str = ""

    @model_validator(mode="before")
    @classmethod
    def from_string(cls, data: Any) -> Any:
        return _parse_person(data)


class Maintainer(RegistryModel):
    """An npm account with publish rights on a package."""

    name: str = ""
    email: str = ""
    username: str = ""

    @model_validator(mode="before")
    @classmethod
    def from_string(cls, data: Any) -> Any:
        return _parse_person(data)


class Publisher(Maintainer):
    """The npm account that published a given version."""


class Repository(RegistryModel):
    type: str = ""
    url: str = ""
    directory: str = ""

    @model_validator(mode="before")
    @classmethod
    def from_string(cls, data: Any) -> Any:
        return {"url": data} if isinstance(data, str) else data


class Bugs(RegistryModel):
    url: str = ""
    email: str = ""

    @model_validator(mode="before")
    @classmethod
    def from_string(cls, data: Any) -> Any:
        return {"url": data} if isinstance(data, str) else data


# --- Search ---


class SearchOptions(RegistryModel):
    """Optional tuning parameters for a registry search.

    Zero means "not set": the parameter is left out of the request and the
    registry's default applies. An explicit zero weight cannot be expressed.
    """

    size: int = Field(default=0, ge=0, description="Number of results to return")
    from_: int = Field(default=0, ge=0, alias="from", description="Offset of the first result")
    quality: float = Field(default=0.0, ge=0, description="Weight of the quality sub-score")
    popularity: float = Field(default=0.0, ge=0, description="Weight of the popularity sub-score")
    maintenance: float = Field(default=0.0, ge=0, description="Weight of the maintenance sub-score")


class Links(RegistryModel):
    npm: str = ""
    homepage: str = ""
    repository: str = ""
    bugs: str = ""


class Flags(RegistryModel):
    unstable: bool = False
    insecure: int = 0


class ScoreDetail(RegistryModel):
    quality: float = 0.0
    popularity: float = 0.0
    maintenance: float = 0.0


class Score(RegistryModel):
    final: float = 0.0
    detail: ScoreDetail = Field(default_factory=ScoreDetail)
    search_score: float = Field(default=0.0, alias="searchScore")


class Package(RegistryModel):
    """Package summary as it appears in a search hit."""

    name: str = ""
    scope: str = ""
    version: str = ""
    description: str = ""
    keywords: Keywords = Field(default_factory=list)
    date: str = Field(default="", description="Last publish date, as sent by the registry")
    links: Links = Field(default_factory=Links)
    author: Author = Field(default_factory=Author)
    publisher: Publisher = Field(default_factory=Publisher)
    maintainers: list[Maintainer] = Field(default_factory=list)


class PackageItem(RegistryModel):
    """One search hit."""

    package: Package = Field(default_factory=Package)
    flags: Flags = Field(default_factory=Flags)
    score: Score = Field(default_factory=Score)
    search_score: float = Field(default=0.0, alias="searchScore")


class SearchResults(RegistryModel):
    """Search envelope. ``objects`` keeps the registry's relevance order."""

    objects: list[PackageItem] = Field(default_factory=list)
    total: int = Field(default=0, description="Total matches; may exceed len(objects)")
    time: str = Field(default="", description="Server-reported generation time")


# --- Package document ---


class DistSignature(RegistryModel):
    keyid: str = ""
    sig: str = ""


class Dist(RegistryModel):
    """Tarball location and integrity data for one published version."""

    integrity: str = ""
    shasum: str = ""
    tarball: str = ""
    file_count: int = Field(default=0, alias="fileCount")
    unpacked_size: int = Field(default=0, alias="unpackedSize")
    npm_signature: str = Field(default="", alias="npm-signature")
    signatures: list[DistSignature] = Field(default_factory=list)


class Time(RegistryModel):
    """Creation/modification times plus the publish time of every version.

    On the wire the per-version timestamps are sibling keys of ``created`` and
    ``modified``; they are collected into ``versions`` on decode.
    """

    created: str = ""
    modified: str = ""
    versions: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def collect_versions(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if isinstance(data.get("versions"), dict):
            return data
        # LEARN: Non-string values (e.g. the "unpublished" object) are not publish times.
        versions = {
            key: value
            for key, value in data.items()
            if key not in {"created", "modified"} and isinstance(value, str)
        }
        fixed = {key: data[key] for key in ("created", "modified") if data.get(key) is not None}
        return {**fixed, "versions": versions}


class GetPackageVersion(RegistryModel):
    """Metadata for a single published version inside a package document."""

    name: str = ""
    version: str = ""
    description: str = ""
    main: str = ""
    repository: Repository = Field(default_factory=Repository)
    keywords: Keywords = Field(default_factory=list)
    author: Author = Field(default_factory=Author)
    license: License = ""
    bugs: Bugs = Field(default_factory=Bugs)
    homepage: str = ""
    git_head: str = Field(default="", alias="gitHead")
    id: str = Field(default="", alias="_id")
    npm_version: str = Field(default="", alias="_npmVersion")
    node_version: str = Field(default="", alias="_nodeVersion")
    npm_user: Publisher = Field(default_factory=Publisher, alias="_npmUser")
    dist: Dist = Field(default_factory=Dist)
    maintainers: list[Maintainer] = Field(default_factory=list)
    has_shrinkwrap: bool = Field(default=False, alias="_hasShrinkwrap")
    dependencies: Dependencies = Field(default_factory=dict)
    dev_dependencies: Dependencies = Field(default_factory=dict, alias="devDependencies")
    peer_dependencies: Dependencies = Field(default_factory=dict, alias="peerDependencies")
    deprecated: Deprecated = ""


class GetPackage(RegistryModel):
    """Full package document returned by ``GET /<name>``."""

    id: str = Field(default="", alias="_id")
    rev: str = Field(default="", alias="_rev")
    name: str = ""
    dist_tags: dict[str, str] = Field(default_factory=dict, alias="dist-tags")
    versions: dict[str, GetPackageVersion] = Field(default_factory=dict)
    time: Time = Field(default_factory=Time)
    maintainers: list[Maintainer] = Field(default_factory=list)
    description: str = ""
    homepage: str = ""
    keywords: Keywords = Field(default_factory=list)
    repository: Repository = Field(default_factory=Repository)
    author: Author = Field(default_factory=Author)
    bugs: Bugs = Field(default_factory=Bugs)
    license: License = ""
    readme: str = ""
    readme_filename: str = Field(default="", alias="readmeFilename")
    users: dict[str, bool] = Field(default_factory=dict)

    def version_for(self, tag_or_version: str = "latest") -> GetPackageVersion | None:
        """Resolve a dist-tag (e.g. ``latest``) or a literal version to its record."""
        version = self.dist_tags.get(tag_or_version, tag_or_version)
        return self.versions.get(version)
