"""Tests for the degrading dump pipeline."""

from pathlib import Path
from typing import Callable, List

import orjson
import pytest

from wltools.backend import Backend
from wltools.blocks import BlockRepository, GamePartition
from wltools.dump import DumpPipeline, DumpWriter, StageStatus, block_dir_name
from wltools.errors import CodecError, StorageError

import fake_backend

# Offsets inside the enc section of GAME1 block 0 (4x3 grid)
CENTRAL_DIR_OFFSET = 4 * 3 * 2


def files_of(out_dir: Path, partition: int, index: int) -> List[str]:
    return sorted(p.name for p in (out_dir / block_dir_name(partition, index)).iterdir())


def load_json(path: Path):
    return orjson.loads(path.read_bytes())


def partition_with(mutate: Callable[[bytearray], None]) -> GamePartition:
    """GAME1 of the sample game with block 0's enc section mutated."""
    bodies = fake_backend.sample_bodies()[0]
    mutate(bodies[0].enc_section)
    return GamePartition.from_bodies(0, bodies, 2, file_name="GAME1")


@pytest.fixture
def pipeline(backend: Backend, tmp_path: Path) -> DumpPipeline:
    return DumpPipeline(backend.codec, backend.layout, DumpWriter(tmp_path / "out"))


class TestFullDump:
    """Test the export of decodable blocks."""

    def test_map_block_files(self, pipeline: DumpPipeline, repo: BlockRepository) -> None:
        reports = pipeline.dump_all(repo.partitions)
        out = pipeline.writer.out_dir

        assert all(r.complete for r in reports)
        assert files_of(out, 0, 0) == sorted([
            "centraldir.json",
            "encsection.bin",
            "loots.json",
            "mapdata.txt",
            "mapinfo.json",
            "meta.json",
            "monsterdata.json",
            "monsternames.json",
            "offsets.json",
            "plainsection.bin",
            "sizes.json",
            "stringsarea.json",
            "strings.json",
            "transitions.json",
        ])

    def test_exported_content(self, pipeline: DumpPipeline, repo: BlockRepository) -> None:
        pipeline.dump_all(repo.partitions)
        block_dir = pipeline.writer.out_dir / "g0b00"

        assert (block_dir / "encsection.bin").read_bytes() == bytes(repo.block(0, 0).body.enc_section)
        assert (block_dir / "plainsection.bin").read_bytes() == b"P00"
        assert load_json(block_dir / "mapinfo.json")["encounter_freq"] == 7
        assert load_json(block_dir / "strings.json") == ["HELLO", "WORLD"]
        assert load_json(block_dir / "offsets.json")["central_dir"] == CENTRAL_DIR_OFFSET
        assert load_json(block_dir / "sizes.json")["central_dir"] == 4
        assert load_json(block_dir / "meta.json")["kind"] == "map"

        transitions = load_json(block_dir / "transitions.json")
        assert transitions[0]["location"] == fake_backend.LOCATIONS["mars"]
        assert (block_dir / "mapdata.txt").read_text().splitlines()[0] == "00:00 0a:00 00:00 00:00"

    def test_empty_table_entries_exported_as_null(
        self, pipeline: DumpPipeline, repo: BlockRepository
    ) -> None:
        pipeline.dump_all(repo.partitions)
        transitions = load_json(pipeline.writer.out_dir / "g0b01" / "transitions.json")
        assert transitions[0] is None
        assert transitions[2] is None

    def test_opaque_block_raw_only(self, pipeline: DumpPipeline, repo: BlockRepository) -> None:
        reports = pipeline.dump_all(repo.partitions)
        out = pipeline.writer.out_dir

        assert files_of(out, 0, 20) == ["encsection.bin", "plainsection.bin"]
        assert files_of(out, 1, 1) == ["encsection.bin", "plainsection.bin"]
        opaque = [r for r in reports if (r.partition, r.index) == (0, 20)][0]
        assert opaque.stage is None
        assert opaque.status is StageStatus.SUCCESS


class TestDegradedDump:
    """Test the fallback stages on corrupt blocks."""

    def test_partial_dump_after_decode_failure(self, pipeline: DumpPipeline) -> None:
        """Decode fails on a truncated strings area, carving still works."""

        def claim_more_strings(section: bytearray) -> None:
            section[CENTRAL_DIR_OFFSET + 3] = 9

        reports = pipeline.dump_partition(partition_with(claim_more_strings))
        report = reports[0]

        assert report.stage == "partial"
        assert report.status is StageStatus.SUCCESS
        assert not report.complete
        assert [o.status for o in report.outcomes] == [StageStatus.SOFT_FAILURE, StageStatus.SUCCESS]
        assert files_of(pipeline.writer.out_dir, 0, 0) == [
            "centraldir.json",
            "encsection.bin",
            "meta.json",
            "offsets.json",
            "plainsection.bin",
            "sizes.json",
        ]
        central_dir = load_json(pipeline.writer.out_dir / "g0b00" / "centraldir.json")
        assert central_dir["string_count"] == 9

    def test_minimal_dump_after_carve_failure(self, pipeline: DumpPipeline) -> None:
        """The transition table runs past the section end; only the central dir is read."""

        def claim_more_transitions(section: bytearray) -> None:
            section[CENTRAL_DIR_OFFSET + 2] = 200

        report = pipeline.dump_partition(partition_with(claim_more_transitions))[0]

        assert report.stage == "minimal"
        assert report.status is StageStatus.SUCCESS
        assert len(report.errors) == 2
        central_dir = load_json(pipeline.writer.out_dir / "g0b00" / "centraldir.json")
        assert central_dir["transition_count"] == 200
        assert "offsets.json" not in files_of(pipeline.writer.out_dir, 0, 0)

    def test_fully_undecodable(self, pipeline: DumpPipeline) -> None:
        """A bad central directory fails every stage; raw sections remain."""

        def break_magic(section: bytearray) -> None:
            section[CENTRAL_DIR_OFFSET] = 0

        reports = pipeline.dump_partition(partition_with(break_magic))
        report = reports[0]

        assert report.stage == "minimal"
        assert report.status is StageStatus.HARD_FAILURE
        assert files_of(pipeline.writer.out_dir, 0, 0) == [
            "encsection.bin",
            "meta.json",
            "plainsection.bin",
        ]
        # Siblings are still dumped in full
        assert reports[1].complete
        assert "mapinfo.json" in files_of(pipeline.writer.out_dir, 0, 1)

    def test_minimal_window_out_of_range(self, pipeline: DumpPipeline) -> None:
        def truncate(section: bytearray) -> None:
            del section[CENTRAL_DIR_OFFSET + 2:]

        report = pipeline.dump_partition(partition_with(truncate))[0]
        assert report.status is StageStatus.HARD_FAILURE
        assert "outside enc section" in report.errors[-1]

    def test_failed_step_does_not_stop_full_export(
        self, backend: Backend, repo: BlockRepository, tmp_path: Path
    ) -> None:
        class BrokenRenderCodec(fake_backend.FakeCodec):
            def render_map_data(self, map_data):
                raise CodecError("corrupt stream")

        pipeline = DumpPipeline(BrokenRenderCodec(), backend.layout, DumpWriter(tmp_path / "out"))
        report = pipeline.dump_block(repo.block(0, 1))

        assert report.stage == "full"
        assert report.status is StageStatus.SUCCESS
        assert report.errors == ["mapdata.txt: corrupt stream"]
        files = files_of(tmp_path / "out", 0, 1)
        assert "mapdata.txt" not in files
        assert "strings.json" in files
        assert "mapinfo.json" in files

    def test_unserializable_step_does_not_stop_dump(
        self, backend: Backend, repo: BlockRepository, tmp_path: Path
    ) -> None:
        class Opaque:
            pass

        class OpaqueLootCodec(fake_backend.FakeCodec):
            def decode_block(self, block, dim):
                decoded = super().decode_block(block, dim)
                decoded.loots = [Opaque()]
                return decoded

        pipeline = DumpPipeline(OpaqueLootCodec(), backend.layout, DumpWriter(tmp_path / "out"))
        reports = pipeline.dump_all(repo.partitions)

        first = reports[0]
        assert first.stage == "full"
        assert first.status is StageStatus.SUCCESS
        assert len(first.errors) == 1
        assert first.errors[0].startswith("loots.json: ")
        files = files_of(tmp_path / "out", 0, 0)
        assert "loots.json" not in files
        assert "strings.json" in files
        # Sibling blocks are still dumped
        assert "mapinfo.json" in files_of(tmp_path / "out", 1, 0)

    def test_unserializable_central_dir_is_hard_failure(
        self, backend: Backend, tmp_path: Path
    ) -> None:
        class OpaqueCentralDir:
            """Has the counts carving needs but no JSON form."""

            def __init__(self, cd):
                self.transition_count = cd.transition_count
                self.string_count = cd.string_count

        class OpaqueCentralDirCodec(fake_backend.FakeCodec):
            def decode_central_directory(self, data):
                return OpaqueCentralDir(super().decode_central_directory(data))

            def decode_block(self, block, dim):
                raise CodecError("not decodable")

        pipeline = DumpPipeline(OpaqueCentralDirCodec(), backend.layout, DumpWriter(tmp_path / "out"))
        bodies = fake_backend.sample_bodies()[0]
        report = pipeline.dump_partition(GamePartition.from_bodies(0, bodies, 2, file_name="GAME1"))[0]

        assert report.stage == "partial"
        assert report.status is StageStatus.HARD_FAILURE
        assert "centraldir.json" not in files_of(tmp_path / "out", 0, 0)


class TestNpcExport:
    """Test the optional NPC export."""

    def test_npcs_written_when_present(
        self, backend: Backend, repo: BlockRepository, tmp_path: Path
    ) -> None:
        class NpcCodec(fake_backend.FakeCodec):
            def decode_block(self, block, dim):
                decoded = super().decode_block(block, dim)
                decoded.npcs = [{"name": "GUARD", "hp": 12}]
                return decoded

        pipeline = DumpPipeline(NpcCodec(), backend.layout, DumpWriter(tmp_path / "out"))
        report = pipeline.dump_block(repo.block(0, 0))

        assert report.complete
        assert "npcs.json" in report.outcomes[0].files
        npcs = load_json(tmp_path / "out" / "g0b00" / "npcs.json")
        assert npcs == [{"name": "GUARD", "hp": 12}]

    def test_npcs_absent_when_not_decoded(
        self, pipeline: DumpPipeline, repo: BlockRepository
    ) -> None:
        pipeline.dump_block(repo.block(0, 0))
        assert "npcs.json" not in files_of(pipeline.writer.out_dir, 0, 0)


class TestDumpStorage:
    """Test I/O failures abort the run."""

    def test_unwritable_output(self, backend: Backend, repo: BlockRepository, tmp_path: Path) -> None:
        blocker = tmp_path / "out"
        blocker.write_bytes(b"not a directory")
        pipeline = DumpPipeline(backend.codec, backend.layout, DumpWriter(blocker))
        with pytest.raises(StorageError):
            pipeline.dump_all(repo.partitions)
