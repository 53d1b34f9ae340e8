"""Tests for the command-line entry point (network calls are stubbed out)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import pytest

from iso639_tables import main as main_module
from iso639_tables.config import set_console_level

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def calls(monkeypatch) -> list[tuple[str, Path]]:
    """Record generate_dataset calls instead of running them."""
    recorded: list[tuple[str, Path]] = []

    def fake_generate(dataset_id: str, output_dir: Path, http_settings: dict[str, Any] | None = None) -> list[Path]:
        recorded.append((dataset_id, output_dir))
        return [output_dir / f"{dataset_id}.json"]

    monkeypatch.setattr(main_module, "generate_dataset", fake_generate)
    return recorded


def test_defaults_to_all_datasets(calls, tmp_path) -> None:
    assert main_module.main(["--output-dir", str(tmp_path)]) == 0
    assert calls == [("iso_639_1", tmp_path), ("iso_639_2", tmp_path)]


def test_single_dataset(calls, tmp_path) -> None:
    assert main_module.main(["-d", "iso_639_2", "-o", str(tmp_path)]) == 0
    assert calls == [("iso_639_2", tmp_path)]


def test_unknown_dataset_is_rejected(calls) -> None:
    with pytest.raises(SystemExit):
        main_module.main(["--dataset", "iso_639_3"])
    assert calls == []


def test_any_failure_gives_nonzero_exit(monkeypatch, tmp_path) -> None:
    def fake_generate(dataset_id: str, output_dir: Path, http_settings: dict[str, Any] | None = None) -> list[Path] | None:
        return None if dataset_id == "iso_639_1" else [output_dir / "ok.json"]

    monkeypatch.setattr(main_module, "generate_dataset", fake_generate)
    assert main_module.main(["-o", str(tmp_path)]) == 1


def test_quiet_raises_console_level(calls, tmp_path) -> None:
    pipeline_logger = logging.getLogger("iso639_tables.pipeline")
    try:
        assert main_module.main(["--quiet", "-o", str(tmp_path)]) == 0

        levels = {type(handler): handler.level for handler in pipeline_logger.handlers}
        assert levels[logging.StreamHandler] == logging.WARNING
        assert levels[logging.FileHandler] == logging.DEBUG
    finally:
        set_console_level(logging.INFO)


def test_bare_dataset_flag_is_rejected(calls) -> None:
    with pytest.raises(SystemExit):
        main_module.main(["-d"])
    assert calls == []
