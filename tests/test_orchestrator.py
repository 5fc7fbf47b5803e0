"""Tests for reviewkit.orchestrator."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from reviewkit.extractors import Extractor, default_extractors
from reviewkit.git import VcsInspector
from reviewkit.models import EnvKeySets, Report
from reviewkit.orchestrator import Orchestrator, format_timestamp
from tests._fixtures.fake_git import FakeGitClient

_FIXED_NOW = datetime(2024, 5, 17, 9, 30, 15, 123456, tzinfo=UTC)


def _orchestrator(client: FakeGitClient, environ: dict[str, str] | None = None) -> Orchestrator:
    environ = environ if environ is not None else {}
    return Orchestrator(
        [*default_extractors(), VcsInspector(client_factory=client, environ=environ)],
        environ=environ,
        clock=lambda: _FIXED_NOW,
    )


def _seed_web_app(repo_builder) -> None:
    repo_builder.write(
        {
            "package.json": json.dumps(
                {
                    "name": "storysmith",
                    "version": "1.0.0",
                    "scripts": {"build": "next build"},
                    "dependencies": {"next": "14.2.3"},
                    "devDependencies": {"typescript": "5.4.5"},
                }
            ),
            ".env": "API_KEY=1\nA=2\n",
            ".env.example": "# copy to .env\nAPI_KEY=\nB=\n",
            "src/app/page.tsx": "export default function Home() {}\n",
            "src/app/blog/[slug]/page.tsx": "export default function Post() {}\n",
            "prisma/schema.prisma": "model Story {\n  id String @id\n}\n",
        }
    )


def _read_report(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


def test_run_writes_consolidated_report(repo_builder) -> None:
    _seed_web_app(repo_builder)
    client = FakeGitClient(ref="abc1234", changed=["src/app/page.tsx"])

    output_path = _orchestrator(client, {"CI": "1"}).run(str(repo_builder.path()))

    assert output_path == repo_builder.path().resolve() / "review-kit" / "REVIEW_KIT.json"
    report = _read_report(output_path)
    assert list(report) == ["meta", "package", "routes", "envAudit", "schema", "vcs"]
    assert report["meta"]["generatedAt"] == "2024-05-17T09:30:15.123Z"
    assert report["meta"]["ci"] is True
    assert isinstance(report["meta"]["python"], str) and report["meta"]["python"]
    assert report["package"] == {
        "name": "storysmith",
        "version": "1.0.0",
        "scripts": {"build": "next build"},
        "dependencies": {"next": "14.2.3"},
        "devDependencies": {"typescript": "5.4.5"},
    }
    assert report["routes"] == [
        {"route": "/", "file": "src/app/page.tsx"},
        {"route": "/blog/[slug]", "file": "src/app/blog/[slug]/page.tsx"},
    ]
    assert report["envAudit"] == {
        "exampleOnly": ["B"],
        "missingInExample": ["A"],
        "presentInBoth": ["API_KEY"],
    }
    assert report["schema"] == {
        "schemaPath": "prisma/schema.prisma",
        "schema": "model Story {\n  id String @id\n}\n",
    }
    assert report["vcs"] == {"ref": "abc1234", "changedFiles": ["src/app/page.tsx"]}


def test_report_is_pretty_printed_and_overwritten(repo_builder) -> None:
    _seed_web_app(repo_builder)
    output_dir = repo_builder.path() / "review-kit"
    output_dir.mkdir()
    (output_dir / "REVIEW_KIT.json").write_text('{"stale": true}', encoding="utf-8")

    output_path = _orchestrator(FakeGitClient()).run(str(repo_builder.path()))

    text = output_path.read_text(encoding="utf-8")
    assert text.startswith('{\n  "meta": {\n')
    assert text.endswith("}\n")
    assert "stale" not in _read_report(output_path)


def test_run_without_repository_still_populates_other_sections(repo_builder, no_git) -> None:
    _seed_web_app(repo_builder)

    report = _read_report(_orchestrator(no_git).run(str(repo_builder.path())))

    assert report["vcs"] == {"changedFiles": []}
    assert "ref" not in report["vcs"]
    assert report["meta"]["ci"] is False
    assert report["package"]["name"] == "storysmith"
    assert len(report["routes"]) == 2
    assert report["envAudit"]["presentInBoth"] == ["API_KEY"]
    assert report["schema"]["schemaPath"] == "prisma/schema.prisma"


def test_missing_manifest_only_omits_package(repo_builder) -> None:
    _seed_web_app(repo_builder)
    root = str(repo_builder.path())
    with_manifest = _read_report(_orchestrator(FakeGitClient()).run(root))

    (repo_builder.path() / "package.json").unlink()
    without_manifest = _read_report(_orchestrator(FakeGitClient()).run(root))

    assert "package" not in without_manifest
    for section in ("meta", "routes", "envAudit", "schema", "vcs"):
        assert without_manifest[section] == with_manifest[section]


def test_repeated_runs_produce_identical_stable_sections(repo_builder) -> None:
    _seed_web_app(repo_builder)
    root = str(repo_builder.path())

    first = _read_report(_orchestrator(FakeGitClient(ref="aaa1111")).run(root))
    second = _read_report(_orchestrator(FakeGitClient(ref="bbb2222")).run(root))

    for section in ("routes", "envAudit", "package"):
        assert json.dumps(first[section]) == json.dumps(second[section])


def test_empty_repository_yields_minimal_report(repo_builder, no_git) -> None:
    report = _read_report(_orchestrator(no_git).run(str(repo_builder.path())))

    assert "package" not in report
    assert report["routes"] == []
    assert report["envAudit"] == {"exampleOnly": [], "missingInExample": [], "presentInBoth": []}
    assert report["schema"] == {"schemaPath": None, "schema": None}
    assert report["vcs"] == {"changedFiles": []}


class _ExplodingExtractor(Extractor):
    section = "env_audit"

    def extract(self, config):  # type: ignore[no-untyped-def]
        raise ValueError("boom")

    def fallback(self) -> EnvKeySets:
        return EnvKeySets()


def test_failing_extractor_does_not_stop_the_others(repo_builder, caplog) -> None:
    _seed_web_app(repo_builder)
    extractors = [
        extractor for extractor in default_extractors() if extractor.section != "env_audit"
    ]
    extractors.insert(0, _ExplodingExtractor())
    orchestrator = Orchestrator(extractors, environ={}, clock=lambda: _FIXED_NOW)

    with caplog.at_level("WARNING", logger="reviewkit"):
        report = orchestrator.build(repo_builder.config())

    assert isinstance(report, Report)
    assert report.env_audit == EnvKeySets()
    assert report.package is not None and report.package.name == "storysmith"
    assert len(report.routes) == 2
    assert report.vcs is None
    assert "_ExplodingExtractor failed" in caplog.text


def test_write_failure_propagates(repo_builder) -> None:
    _seed_web_app(repo_builder)
    (repo_builder.path() / "review-kit").write_text("not a directory", encoding="utf-8")

    with pytest.raises(OSError):
        _orchestrator(FakeGitClient()).run(str(repo_builder.path()))


def test_run_honours_configured_output_location(repo_builder) -> None:
    repo_builder.write({".reviewkit.yml": "output:\n  dir: artifacts/review\n  file: kit.json\n"})

    output_path = _orchestrator(FakeGitClient()).run(str(repo_builder.path()))

    assert output_path == repo_builder.path().resolve() / "artifacts" / "review" / "kit.json"
    assert output_path.exists()


def test_format_timestamp_normalises_to_utc_milliseconds() -> None:
    assert format_timestamp(_FIXED_NOW) == "2024-05-17T09:30:15.123Z"
