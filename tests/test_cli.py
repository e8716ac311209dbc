"""End-to-end tests of the command line tools."""

from pathlib import Path
from typing import List

import orjson
import pytest

from wltools import __main__ as dispatcher
from wltools.backend import Backend
from wltools.backend.loader import BACKEND_ENV_VAR
from wltools.blocks import BlockRepository
from wltools.cli import cheat, dump, transloc, tset
from wltools.settings import AppSettings

import fake_backend
from fake_backend import BACKEND_PATH as FAKE_BACKEND_PATH


@pytest.fixture(autouse=True)
def no_backend_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(BACKEND_ENV_VAR, raising=False)


@pytest.fixture
def common(settings_file: Path) -> List[str]:
    """Options every invocation shares."""
    return ["--config", str(settings_file), "--backend", FAKE_BACKEND_PATH]


def encounter_freq(game_dir: Path, backend: Backend, partition: int, index: int) -> int:
    repo = BlockRepository.load(game_dir, backend.layout, backend.serializer)
    block = repo.block(partition, index)
    return backend.codec.decode_block(block, backend.layout.map_dim(partition, index)).map_info.encounter_freq


class TestDumpTool:
    """Test wltools-dump."""

    def test_end_to_end(self, game_dir: Path, tmp_path: Path, common: List[str]) -> None:
        out_dir = tmp_path / "out"
        assert dump.main([str(game_dir), str(out_dir), *common]) == 0

        block_dir = out_dir / "g0b00"
        assert (block_dir / "encsection.bin").is_file()
        assert (block_dir / "plainsection.bin").read_bytes() == b"P00"
        assert orjson.loads((block_dir / "mapinfo.json").read_bytes())["encounter_freq"] == 7
        assert (out_dir / "g1b01" / "encsection.bin").read_bytes() == b"\xff" * 16

    def test_game_dir_from_settings(
        self, game_dir: Path, tmp_path: Path, settings_file: Path, common: List[str]
    ) -> None:
        AppSettings(settings_file=settings_file).game_dir = game_dir
        out_dir = tmp_path / "out"
        assert dump.main([str(out_dir), *common]) == 0
        assert (out_dir / "g1b00" / "mapinfo.json").is_file()

    def test_missing_arguments(
        self, common: List[str], settings_file: Path, capsys: pytest.CaptureFixture
    ) -> None:
        assert dump.main(common) == 1
        assert "* error: missing game directory" in capsys.readouterr().err
        assert not settings_file.exists()

    def test_usage_errors_leave_settings_alone(
        self, game_dir: Path, tmp_path: Path, settings_file: Path, common: List[str]
    ) -> None:
        assert dump.main([str(tmp_path / "nope"), str(tmp_path / "out"), *common]) == 1
        assert transloc.main([str(tmp_path / "nope"), *common]) == 1
        assert cheat.main([*common]) == 1
        assert dump.main([str(game_dir), str(tmp_path / "out"), "-l", "loud", *common]) == 1
        assert not settings_file.exists()

    def test_stale_configured_game_dir(
        self, game_dir: Path, tmp_path: Path, settings_file: Path, common: List[str]
    ) -> None:
        """An explicit directory wins over a configured one that was moved away."""
        AppSettings(settings_file=settings_file).game_dir = tmp_path / "moved_away"
        assert dump.main([str(game_dir), str(tmp_path / "out"), *common]) == 0
        assert dump.main([str(tmp_path / "out2"), *common]) == 1

    def test_missing_directory(self, tmp_path: Path, common: List[str]) -> None:
        assert dump.main([str(tmp_path / "nope"), str(tmp_path / "out"), *common]) == 1

    def test_too_many_arguments(self, tmp_path: Path, common: List[str]) -> None:
        assert dump.main(["a", "b", "c", *common]) == 1

    def test_no_backend(
        self, game_dir: Path, tmp_path: Path, settings_file: Path, capsys: pytest.CaptureFixture
    ) -> None:
        code = dump.main([str(game_dir), str(tmp_path / "out"), "--config", str(settings_file)])
        assert code == 2
        assert "* error: no backend configured" in capsys.readouterr().err

    def test_bad_backend_factory(self, game_dir: Path, tmp_path: Path, settings_file: Path) -> None:
        args = [str(game_dir), str(tmp_path / "out"), "--config", str(settings_file)]
        assert dump.main([*args, "--backend", "fake_backend:not_a_backend"]) == 2
        assert dump.main([*args, "--backend", "no_such_module_xyz"]) == 2

    def test_backend_from_environment(
        self, game_dir: Path, tmp_path: Path, settings_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(BACKEND_ENV_VAR, FAKE_BACKEND_PATH)
        args = [str(game_dir), str(tmp_path / "out"), "--config", str(settings_file)]
        assert dump.main(args) == 0

    def test_corrupt_game_file(self, game_dir: Path, tmp_path: Path, common: List[str]) -> None:
        (game_dir / "GAME1").write_bytes(b"\x00" * 12)
        assert dump.main([str(game_dir), str(tmp_path / "out"), *common]) == 2

    def test_invalid_loglevel(self, game_dir: Path, tmp_path: Path, common: List[str]) -> None:
        assert dump.main([str(game_dir), str(tmp_path / "out"), "-l", "loud", *common]) == 1

    def test_invalid_settings(
        self, game_dir: Path, tmp_path: Path, settings_file: Path, common: List[str]
    ) -> None:
        AppSettings(settings_file=settings_file).mutation.roster_schema = "bogus"
        assert dump.main([str(game_dir), str(tmp_path / "out"), *common]) == 1

    def test_version(self, capsys: pytest.CaptureFixture) -> None:
        with pytest.raises(SystemExit) as excinfo:
            dump.main(["--version"])
        assert excinfo.value.code == 0
        assert "wltools-dump" in capsys.readouterr().out


class TestTranslocTool:
    """Test wltools-transloc."""

    def test_prints_report(
        self, game_dir: Path, common: List[str], capsys: pytest.CaptureFixture
    ) -> None:
        assert transloc.main([str(game_dir), *common]) == 0
        report = orjson.loads(capsys.readouterr().out)

        first = report["game1"]["blocks"][0]["transitions"][0]
        assert first["location_name"] == "MARS"
        assert first["selector"] == 0
        assert report["game2"]["blocks"][0]["transitions"][0]["location_name"] == "NEEDLES"

    def test_remembers_directory(
        self, game_dir: Path, common: List[str], settings_file: Path
    ) -> None:
        assert transloc.main([str(game_dir), *common]) == 0
        assert AppSettings(settings_file=settings_file).paths.recent_dirs == [str(game_dir.resolve())]

    def test_decode_failure(self, game_dir: Path, backend: Backend, common: List[str]) -> None:
        repo = BlockRepository.load(game_dir, backend.layout, backend.serializer)
        repo.block(0, 0).body.enc_section[24] = 0
        repo.write()
        assert transloc.main([str(game_dir), *common]) == 2


class TestTsetTool:
    """Test wltools-tset."""

    def test_applies_op(self, game_dir: Path, backend: Backend, common: List[str]) -> None:
        code = tset.main(["--path", str(game_dir), *common, "mars,shrine <- base,needles"])
        assert code == 0
        assert (game_dir / "GAME1.bak").is_file()

        repo = BlockRepository.load(game_dir, backend.layout, backend.serializer)
        decoded = backend.codec.decode_block(repo.block(0, 0), backend.layout.map_dim(0, 0))
        assert decoded.transitions[1].location == fake_backend.LOCATIONS["needles"]

    def test_no_backup(self, game_dir: Path, common: List[str]) -> None:
        code = tset.main(["-p", str(game_dir), "--no-backup", *common, "mars,shrine <- base,needles"])
        assert code == 0
        assert not (game_dir / "GAME1.bak").exists()

    def test_path_is_required(
        self, game_dir: Path, common: List[str], settings_file: Path, capsys: pytest.CaptureFixture
    ) -> None:
        AppSettings(settings_file=settings_file).game_dir = game_dir
        before = fake_backend.read_game(game_dir)
        assert tset.main([*common, "mars,shrine <- base,needles"]) == 1
        assert "--path" in capsys.readouterr().err
        assert fake_backend.read_game(game_dir) == before

    def test_empty_path(self, game_dir: Path, common: List[str], settings_file: Path) -> None:
        AppSettings(settings_file=settings_file).game_dir = game_dir
        before = fake_backend.read_game(game_dir)
        assert tset.main(["-p", "", *common, "mars,shrine <- base,needles"]) == 1
        assert fake_backend.read_game(game_dir) == before

    def test_missing_op(self, game_dir: Path, common: List[str], capsys: pytest.CaptureFixture) -> None:
        assert tset.main(["-p", str(game_dir), *common]) == 1
        assert "missing required `op0` argument" in capsys.readouterr().err

    def test_invalid_op(self, game_dir: Path, common: List[str], capsys: pytest.CaptureFixture) -> None:
        before = fake_backend.read_game(game_dir)
        assert tset.main(["-p", str(game_dir), *common, "mars,shrine,base <- base,needles"]) == 2
        assert "wrong comma count" in capsys.readouterr().err
        assert fake_backend.read_game(game_dir) == before

    def test_failing_op_strict(self, game_dir: Path, common: List[str]) -> None:
        before = fake_backend.read_game(game_dir)
        ops = ["mars,shrine <- base,needles", "mars,quartz <- base,mars"]
        assert tset.main(["-p", str(game_dir), *common, *ops]) == 2
        assert fake_backend.read_game(game_dir) == before

    def test_failing_op_allow_partial(self, game_dir: Path, common: List[str]) -> None:
        before = fake_backend.read_game(game_dir)
        ops = ["mars,shrine <- base,needles", "mars,quartz <- base,mars"]
        assert tset.main(["-p", str(game_dir), "--allow-partial", *common, *ops]) == 2
        assert fake_backend.read_game(game_dir)["GAME1"] != before["GAME1"]

    def test_allow_partial_from_settings(
        self, game_dir: Path, common: List[str], settings_file: Path
    ) -> None:
        AppSettings(settings_file=settings_file).mutation.allow_partial = True
        before = fake_backend.read_game(game_dir)
        ops = ["mars,shrine <- base,needles", "mars,quartz <- base,mars"]
        assert tset.main(["-p", str(game_dir), *common, *ops]) == 2
        assert fake_backend.read_game(game_dir)["GAME1"] != before["GAME1"]


class TestCheatTool:
    """Test wltools-cheat."""

    def test_applies_both_cheats(self, game_dir: Path, backend: Backend, common: List[str]) -> None:
        assert cheat.main([str(game_dir), *common]) == 0

        assert encounter_freq(game_dir, backend, 0, 0) == 0
        assert encounter_freq(game_dir, backend, 1, 0) == 0
        repo = BlockRepository.load(game_dir, backend.layout, backend.serializer)
        assert repo.block(0, 20).body.enc_section[0x10E] == 0x7F

    def test_dry_run(
        self, game_dir: Path, common: List[str], capsys: pytest.CaptureFixture
    ) -> None:
        before = fake_backend.read_game(game_dir)
        assert cheat.main([str(game_dir), "--dry-run", *common]) == 0
        assert fake_backend.read_game(game_dir) == before
        assert "encounter blocks changed: 3, roster bytes changed: 228" in capsys.readouterr().out

    def test_skip_roster(self, game_dir: Path, backend: Backend, common: List[str]) -> None:
        assert cheat.main([str(game_dir), "--skip-roster", *common]) == 0
        repo = BlockRepository.load(game_dir, backend.layout, backend.serializer)
        assert repo.block(0, 20).body.enc_section == bytearray(fake_backend.ROSTER_BLOCK_LENGTH)
        assert encounter_freq(game_dir, backend, 0, 1) == 0

    def test_skip_encounters(self, game_dir: Path, backend: Backend, common: List[str]) -> None:
        assert cheat.main([str(game_dir), "--skip-encounters", "--schema", "extended", *common]) == 0
        assert encounter_freq(game_dir, backend, 0, 1) == 12
        repo = BlockRepository.load(game_dir, backend.layout, backend.serializer)
        assert repo.block(0, 20).body.enc_section[0x120] == 0x7F

    def test_skip_everything(self, game_dir: Path, common: List[str]) -> None:
        assert cheat.main([str(game_dir), "--skip-roster", "--skip-encounters", *common]) == 1

    def test_unknown_schema(self, game_dir: Path, common: List[str]) -> None:
        assert cheat.main([str(game_dir), "--schema", "deluxe", *common]) == 1


class TestDispatcher:
    """Test python -m wltools."""

    def test_dispatch(self, game_dir: Path, common: List[str]) -> None:
        assert dispatcher.main(["transloc", str(game_dir), *common]) == 0

    def test_unknown_tool(self, capsys: pytest.CaptureFixture) -> None:
        assert dispatcher.main([]) == 1
        assert dispatcher.main(["frobnicate"]) == 1
        assert "usage: python -m wltools" in capsys.readouterr().err
