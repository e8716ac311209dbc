"""Shared fixtures for wltools tests."""

from pathlib import Path

import pytest

from wltools.backend import Backend
from wltools.blocks import BlockRepository
from wltools.settings import AppSettings

import fake_backend


@pytest.fixture
def backend() -> Backend:
    return fake_backend.create_backend()


@pytest.fixture
def game_dir(tmp_path: Path) -> Path:
    """Directory holding GAME1 and GAME2 of the sample game."""
    return fake_backend.write_game(tmp_path / "wl")


@pytest.fixture
def repo(game_dir: Path, backend: Backend) -> BlockRepository:
    return BlockRepository.load(game_dir, backend.layout, backend.serializer)


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    return tmp_path / "wltools.ini"


@pytest.fixture
def settings(settings_file: Path) -> AppSettings:
    return AppSettings(settings_file=settings_file)
