"""Tests for the file generation pipeline (oghliner.generator).

Covers:
- Name normalization of reserved dot-files
- Full generation of the bundled template into an empty directory
- Exclusion of the offline worker template
- Conflict resolution on pre-existing files (second run)
- Error wrapping for render, read and write failures
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from oghliner.config import DEFAULT_TEMPLATE_CONFIG, BootstrapSettings
from oghliner.conflict import ConflictDecision, ConflictResolver
from oghliner.errors import GenerationError
from oghliner.generator import FileGenerator, normalize_name
from oghliner.reporter import ProgressReporter

pytestmark = pytest.mark.unit

EXPECTED_FILES = {
    ".gitignore",
    "README.md",
    "gulpfile.js",
    "package.json",
    "app/.nojekyll",
    "app/favicon.svg",
    "app/index.html",
    "app/scripts/main.js",
    "app/scripts/offline-manager.js",
    "app/styles/stylesheet.css",
}


@pytest.fixture
def config():
    return DEFAULT_TEMPLATE_CONFIG.model_copy(update={"name": "myapp"}).finalize("1.0.0")


def _files(root: Path) -> set[str]:
    return {p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()}


class RecordingResolver(ConflictResolver):
    """ConflictResolver that remembers every decision it makes."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.calls: list[tuple[str, ConflictDecision]] = []

    async def resolve(self, relative_path, content):
        decision = await super().resolve(relative_path, content)
        self.calls.append((str(relative_path), decision))
        return decision


def _generator(root: Path, console, strategy="overwrite", template_dir=None, resolver=None):
    kwargs = {"root_dir": root, "conflict_strategy": strategy, "install": False}
    if template_dir is not None:
        kwargs["template_dir"] = template_dir
    settings = BootstrapSettings(**kwargs)
    return FileGenerator(
        settings,
        resolver=resolver,
        reporter=ProgressReporter(console),
    )


class TestNormalizeName:
    @pytest.mark.parametrize(
        "source,expected",
        [
            ("gitignore.j2", ".gitignore"),
            ("gitignore", ".gitignore"),
            ("app/nojekyll.j2", "app/.nojekyll"),
            ("README.md.j2", "README.md"),
            ("app/favicon.svg", "app/favicon.svg"),
            ("app/gitignore-notes.txt.j2", "app/gitignore-notes.txt"),
        ],
    )
    def test_normalize(self, source: str, expected: str):
        assert normalize_name(source) == expected


class TestGenerate:
    async def test_generates_bundled_template(self, tmp_path: Path, record_console, config):
        root = tmp_path / "myapp"
        result = await _generator(root, record_console).generate(config)

        assert _files(root) == EXPECTED_FILES
        assert set(result.written) == EXPECTED_FILES
        assert result.skipped == []
        assert result.identical == []

    async def test_worker_template_excluded(self, tmp_path: Path, record_console, config):
        await _generator(tmp_path, record_console).generate(config)
        assert not (tmp_path / "app" / "offline-worker.js").exists()

    async def test_content_is_rendered(self, tmp_path: Path, record_console, config):
        await _generator(tmp_path, record_console).generate(config)

        package = json.loads((tmp_path / "package.json").read_text(encoding="utf-8"))
        assert package["name"] == "myapp"
        assert package["repository"]["url"] == DEFAULT_TEMPLATE_CONFIG.repository
        assert package["devDependencies"]["oghliner"] == "^1.0.0"
        assert "{{" not in (tmp_path / "app" / "index.html").read_text(encoding="utf-8")

    async def test_reports_each_file(self, tmp_path: Path, record_console, config):
        await _generator(tmp_path, record_console).generate(config)
        output = record_console.file.getvalue()
        for path in EXPECTED_FILES:
            assert f"✓ {path}" in output

    async def test_second_run_resolves_every_file(self, tmp_path: Path, record_console, config):
        await _generator(tmp_path, record_console).generate(config)

        resolver = RecordingResolver(tmp_path, "ask", record_console, MagicMock())
        result = await _generator(tmp_path, record_console, resolver=resolver).generate(config)

        assert {path for path, _ in resolver.calls} == EXPECTED_FILES
        assert all(decision is ConflictDecision.IDENTICAL for _, decision in resolver.calls)
        assert set(result.identical) == EXPECTED_FILES
        assert result.written == []

    async def test_skip_keeps_modified_files(self, tmp_path: Path, record_console, config):
        await _generator(tmp_path, record_console).generate(config)
        readme = tmp_path / "README.md"
        readme.write_text("mine\n", encoding="utf-8")

        result = await _generator(tmp_path, record_console, "skip").generate(config)

        assert readme.read_text(encoding="utf-8") == "mine\n"
        assert result.skipped == ["README.md"]
        assert "README.md (skipped)" in record_console.file.getvalue()

    async def test_overwrite_replaces_modified_files(self, tmp_path: Path, record_console, config):
        await _generator(tmp_path, record_console).generate(config)
        readme = tmp_path / "README.md"
        readme.write_text("mine\n", encoding="utf-8")

        result = await _generator(tmp_path, record_console, "overwrite").generate(config)

        assert readme.read_text(encoding="utf-8") != "mine\n"
        assert result.written == ["README.md"]

    async def test_custom_template_dir(
        self, tmp_path: Path, small_template_dir: Path, record_console, config
    ):
        root = tmp_path / "out"
        await _generator(root, record_console, template_dir=small_template_dir).generate(config)

        assert _files(root) == {"README.md", ".gitignore", "app/logo.bin"}
        assert (root / "app" / "logo.bin").read_bytes() == b"\x89PNG\x00{{ name }}"
        assert (root / "README.md").read_text(encoding="utf-8").startswith("# myapp")


class TestErrors:
    async def test_render_error(self, tmp_path: Path, record_console, config):
        templates = tmp_path / "templates"
        templates.mkdir()
        (templates / "a.txt.j2").write_text("fine\n", encoding="utf-8")
        (templates / "b.txt.j2").write_text("{{ broken \n", encoding="utf-8")
        root = tmp_path / "out"

        with pytest.raises(GenerationError) as exc_info:
            await _generator(root, record_console, template_dir=templates).generate(config)

        assert exc_info.value.path == "b.txt.j2"
        # Files written before the failure are left on disk.
        assert (root / "a.txt").exists()

    async def test_write_error(self, tmp_path: Path, small_template_dir: Path, record_console, config):
        root = tmp_path / "not-a-dir"
        root.write_text("", encoding="utf-8")

        with pytest.raises(GenerationError):
            await _generator(root, record_console, template_dir=small_template_dir).generate(config)

    async def test_unreadable_existing_destination(
        self, tmp_path: Path, small_template_dir: Path, record_console, config
    ):
        root = tmp_path / "out"
        (root / "README.md").mkdir(parents=True)

        with pytest.raises(GenerationError) as exc_info:
            await _generator(root, record_console, template_dir=small_template_dir).generate(config)

        assert exc_info.value.path == "README.md"
        assert "cannot read existing file" in str(exc_info.value)
