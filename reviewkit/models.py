"""Core data models for the review kit report."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class RouteEntry:
    """A routable page and the source file that defines it."""

    route: str
    file: str

    def to_dict(self) -> Dict[str, Any]:
        return {"route": self.route, "file": self.file}


@dataclass(frozen=True)
class EnvKeySets:
    """Three-way comparison of real and example environment keys."""

    example_only: Tuple[str, ...] = ()
    missing_in_example: Tuple[str, ...] = ()
    present_in_both: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "exampleOnly": list(self.example_only),
            "missingInExample": list(self.missing_in_example),
            "presentInBoth": list(self.present_in_both),
        }


@dataclass(frozen=True)
class SchemaSnapshot:
    """Captured schema file; both fields are ``None`` when no schema exists."""

    schema_path: Optional[str] = None
    schema: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"schemaPath": self.schema_path, "schema": self.schema}


@dataclass(frozen=True)
class VcsInfo:
    """Best-effort revision and change-set information."""

    ref: Optional[str] = None
    changed_files: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.ref is not None:
            payload["ref"] = self.ref
        payload["changedFiles"] = list(self.changed_files)
        return payload


@dataclass(frozen=True)
class PackageSummary:
    """Subset of the project manifest surfaced to reviewers."""

    name: Optional[str] = None
    version: Optional[str] = None
    scripts: Optional[Dict[str, Any]] = None
    dependencies: Optional[Dict[str, Any]] = None
    dev_dependencies: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        fields = (
            ("name", self.name),
            ("version", self.version),
            ("scripts", self.scripts),
            ("dependencies", self.dependencies),
            ("devDependencies", self.dev_dependencies),
        )
        return {key: value for key, value in fields if value is not None}


@dataclass(frozen=True)
class ReportMeta:
    """Header describing when and where the report was generated."""

    generated_at: str
    ci: bool
    python: str

    def to_dict(self) -> Dict[str, Any]:
        return {"generatedAt": self.generated_at, "ci": self.ci, "python": self.python}


@dataclass(frozen=True)
class Report:
    """The consolidated review kit written at the end of a run."""

    meta: ReportMeta
    package: Optional[PackageSummary] = None
    routes: Tuple[RouteEntry, ...] = ()
    env_audit: EnvKeySets = field(default_factory=EnvKeySets)
    schema: Optional[SchemaSnapshot] = None
    vcs: Optional[VcsInfo] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON-ready mapping, omitting absent optional sections."""
        payload: Dict[str, Any] = {"meta": self.meta.to_dict()}
        if self.package is not None:
            payload["package"] = self.package.to_dict()
        payload["routes"] = [entry.to_dict() for entry in self.routes]
        payload["envAudit"] = self.env_audit.to_dict()
        if self.schema is not None:
            payload["schema"] = self.schema.to_dict()
        if self.vcs is not None:
            payload["vcs"] = self.vcs.to_dict()
        return payload
