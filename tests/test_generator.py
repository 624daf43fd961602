"""Tests for configuration, the regeneration controller and file watching."""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable
from pathlib import Path

import pytest
from watchdog.events import FileCreatedEvent, FileModifiedEvent, FileMovedEvent

from routepaths.config import GeneratorConfig, load_config
from routepaths.emitter import Target
from routepaths.errors import ConfigurationError, InputMissingError, ReadFailureError, WriteFailureError
from routepaths.generator import RoutePathsGenerator, write_if_changed
from routepaths.watcher import InputWatcher, _InputChangeHandler

ROUTE_TREE = """\
const UsersRoute = UsersImport.update({ path: '/users' } as any)
const UserRoute = UserImport.update({ path: '/users/$userId' } as any)
"""


def _project(tmp_path: Path, content: str | None = ROUTE_TREE) -> RoutePathsGenerator:
    if content is not None:
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "routeTree.gen.ts").write_text(content, encoding="utf-8")
    return RoutePathsGenerator(GeneratorConfig(production=False), tmp_path)


def _wait_for(predicate: Callable[[], bool], timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.05)
    return predicate()


# =====================================================================
# Configuration
# =====================================================================


class TestConfig:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ROUTEPATHS_ENV", raising=False)
        config = GeneratorConfig()
        assert config.input_path == Path("src/routeTree.gen.ts")
        assert config.output_path == Path("src/routePaths.gen.ts")
        assert config.class_name == "RoutePaths"
        assert config.target is Target.TYPESCRIPT
        assert config.production is False

    def test_production_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ROUTEPATHS_ENV", "production")
        assert GeneratorConfig().production is True

    def test_resolves_against_root(self, tmp_path: Path) -> None:
        config = GeneratorConfig(input_path=Path("a/in.ts"))
        assert config.resolve_input(tmp_path) == (tmp_path / "a" / "in.ts").resolve()

    def test_invalid_class_name(self) -> None:
        with pytest.raises(ValueError, match="valid identifier"):
            GeneratorConfig(class_name="Route-Paths")

    @pytest.mark.parametrize("name", ["paths", "_Paths"])
    def test_class_name_must_differ_from_alias(self, name: str) -> None:
        with pytest.raises(ValueError, match="alias differs"):
            GeneratorConfig(class_name=name)

    @pytest.mark.parametrize("name", ["class", "None", "function"])
    def test_class_name_reserved_word(self, name: str) -> None:
        with pytest.raises(ValueError, match="reserved word"):
            GeneratorConfig(class_name=name)

    def test_unknown_key_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Invalid routepaths configuration"):
            load_config(tmp_path, inputPath="x")

    def test_pyproject_table(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(
            '[tool.routepaths]\nclass_name = "Paths"\ntarget = "python"\n',
            encoding="utf-8",
        )
        config = load_config(tmp_path)
        assert config.class_name == "Paths"
        assert config.target is Target.PYTHON

    def test_overrides_win_and_none_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[tool.routepaths]\nclass_name = "Paths"\n', encoding="utf-8")
        config = load_config(tmp_path, class_name="Links", output_path=None)
        assert config.class_name == "Links"
        assert config.output_path == Path("src/routePaths.gen.ts")

    def test_broken_pyproject(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text("[tool.routepaths\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Could not read"):
            load_config(tmp_path)

    def test_no_pyproject(self, tmp_path: Path) -> None:
        assert load_config(tmp_path, production=True).production is True


# =====================================================================
# Generation passes
# =====================================================================


class TestGenerate:
    def test_writes_output(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="routepaths")
        generator = _project(tmp_path)

        result = generator.generate()

        assert result is not None
        assert result.written is True
        assert [r.identifier for r in result.routes] == ["users", "usersByUserId"]
        code = (tmp_path / "src" / "routePaths.gen.ts").read_text(encoding="utf-8")
        assert "static usersByUserId(userId: string | number): string {" in code
        assert "Generated 2 methods" in caplog.text

    def test_idempotent(self, tmp_path: Path) -> None:
        generator = _project(tmp_path)
        generator.generate()
        output = tmp_path / "src" / "routePaths.gen.ts"
        first = output.read_bytes()

        result = generator.generate()

        assert result is not None
        assert result.written is False
        assert output.read_bytes() == first

    def test_regenerates_after_change(self, tmp_path: Path) -> None:
        generator = _project(tmp_path)
        generator.generate()
        (tmp_path / "src" / "routeTree.gen.ts").write_text("path: '/about'", encoding="utf-8")

        result = generator.generate()

        assert result is not None
        assert result.written is True
        assert "static about()" in generator.output_path.read_text(encoding="utf-8")

    def test_missing_input_skips(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        generator = _project(tmp_path, content=None)

        assert generator.generate() is None

        assert not generator.output_path.exists()
        assert "not found, skipping generation" in caplog.text

    def test_missing_input_keeps_prior_output(self, tmp_path: Path) -> None:
        generator = _project(tmp_path)
        generator.generate()
        before = generator.output_path.read_text(encoding="utf-8")
        generator.input_path.unlink()

        assert generator.generate() is None
        assert generator.output_path.read_text(encoding="utf-8") == before

    def test_run_pass_raises_input_missing(self, tmp_path: Path) -> None:
        with pytest.raises(InputMissingError):
            _project(tmp_path, content=None).run_pass()

    def test_read_failure(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        generator = _project(tmp_path)
        generator.input_path.write_bytes(b"\xff\xfe path: '/x'")

        with pytest.raises(ReadFailureError):
            generator.run_pass()
        assert generator.generate() is None
        assert "Error during generation" in caplog.text

    def test_write_failure_is_logged(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        generator = _project(tmp_path)
        # A directory in the way of the output file makes the replace fail.
        generator.output_path.mkdir(parents=True)

        with pytest.raises(WriteFailureError):
            generator.run_pass()
        assert generator.generate() is None
        assert "Error during generation" in caplog.text
        assert [p.name for p in generator.output_path.parent.iterdir() if p.suffix == ".tmp"] == []

    def test_python_target(self, tmp_path: Path) -> None:
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "routeTree.gen.ts").write_text(ROUTE_TREE, encoding="utf-8")
        config = GeneratorConfig(output_path=Path("route_paths.py"), target=Target.PYTHON)
        RoutePathsGenerator(config, tmp_path).generate()

        code = (tmp_path / "route_paths.py").read_text(encoding="utf-8")
        assert "def usersByUserId(userId: str | int) -> str:" in code


def test_write_if_changed_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "deep" / "dir" / "out.ts"
    assert write_if_changed(target, "x") is True
    assert write_if_changed(target, "x") is False
    assert target.read_text(encoding="utf-8") == "x"


# =====================================================================
# Watching
# =====================================================================


class TestInputChangeHandler:
    def _handler(self, tmp_path: Path) -> tuple[_InputChangeHandler, list[int]]:
        calls: list[int] = []
        path = (tmp_path / "routeTree.gen.ts").resolve()
        return _InputChangeHandler(path, lambda: calls.append(1)), calls

    def test_modified_input_fires(self, tmp_path: Path) -> None:
        handler, calls = self._handler(tmp_path)
        handler.dispatch(FileModifiedEvent(str(tmp_path / "routeTree.gen.ts")))
        assert calls == [1]

    def test_created_input_fires(self, tmp_path: Path) -> None:
        handler, calls = self._handler(tmp_path)
        handler.dispatch(FileCreatedEvent(str(tmp_path / "routeTree.gen.ts")))
        assert calls == [1]

    def test_move_onto_input_fires(self, tmp_path: Path) -> None:
        handler, calls = self._handler(tmp_path)
        handler.dispatch(FileMovedEvent(str(tmp_path / "tmp123"), str(tmp_path / "routeTree.gen.ts")))
        assert calls == [1]

    def test_other_files_ignored(self, tmp_path: Path) -> None:
        handler, calls = self._handler(tmp_path)
        handler.dispatch(FileModifiedEvent(str(tmp_path / "routePaths.gen.ts")))
        handler.dispatch(FileMovedEvent(str(tmp_path / "routeTree.gen.ts"), str(tmp_path / "old.ts")))
        assert calls == []


class TestSession:
    def test_production_generates_without_watching(self, tmp_path: Path) -> None:
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "routeTree.gen.ts").write_text(ROUTE_TREE, encoding="utf-8")
        generator = RoutePathsGenerator(GeneratorConfig(production=True), tmp_path)

        with generator.session() as watcher:
            assert watcher is None
            assert generator.output_path.exists()

    def test_watcher_released_on_error(self, tmp_path: Path) -> None:
        generator = _project(tmp_path)

        with pytest.raises(RuntimeError), generator.session() as watcher:
            assert watcher is not None
            assert watcher.running
            raise RuntimeError("boom")

        assert not watcher.running

    def test_watch_starts_before_first_pass(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        generator = _project(tmp_path)
        events: list[str] = []
        monkeypatch.setattr(InputWatcher, "start", lambda self: events.append("start"))
        monkeypatch.setattr(generator, "generate", lambda: events.append("generate"))

        with generator.session():
            pass

        assert events == ["start", "generate"]

    def test_regenerates_on_change(self, tmp_path: Path) -> None:
        generator = _project(tmp_path)

        with generator.session():
            assert "static users()" in generator.output_path.read_text(encoding="utf-8")
            generator.input_path.write_text("path: '/settings'", encoding="utf-8")

            assert _wait_for(lambda: "static settings()" in generator.output_path.read_text(encoding="utf-8"))

    def test_missing_input_then_created(self, tmp_path: Path) -> None:
        (tmp_path / "src").mkdir()
        generator = RoutePathsGenerator(GeneratorConfig(production=False), tmp_path)

        with generator.session():
            assert not generator.output_path.exists()
            generator.input_path.write_text("path: '/late'", encoding="utf-8")

            assert _wait_for(generator.output_path.exists)


def test_watcher_stop_is_idempotent(tmp_path: Path) -> None:
    watcher = InputWatcher(tmp_path / "routeTree.gen.ts", lambda: None)
    watcher.start()
    watcher.stop()
    watcher.stop()
    assert not watcher.running


def test_watcher_missing_directory(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    with InputWatcher(tmp_path / "nope" / "routeTree.gen.ts", lambda: None) as watcher:
        assert not watcher.running
    assert "not found, not watching" in caplog.text
    assert not os.path.exists(tmp_path / "nope")
