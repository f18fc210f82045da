"""Tests for the command-line interface."""

import json
from pathlib import Path

import pytest

from chunkworld.cli import main, walk_viewer


class TestChunkCommand:
    """Tests for `chunkworld chunk`."""

    def test_prints_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code = main(["chunk", "--chunk-x", "1", "--size", "8", "--detail", "minimal"])

        assert exit_code == 0
        body = json.loads(capsys.readouterr().out)
        assert body["chunkX"] == 1
        assert body["chunkSize"] == 8
        assert "fields" not in body

    def test_writes_output_file(self, tmp_path: Path) -> None:
        output = tmp_path / "out" / "chunk.json"
        main(["chunk", "--size", "8", "--output", str(output)])

        body = json.loads(output.read_text())
        assert "fields" in body

    def test_rejects_unknown_detail(self) -> None:
        with pytest.raises(SystemExit):
            main(["chunk", "--detail", "everything"])


class TestWalkCommand:
    """Tests for `chunkworld walk`."""

    @pytest.mark.asyncio
    async def test_walk_evicts_behind_viewer(self) -> None:
        stats = await walk_viewer("small", steps=6, step_tiles=16, viewport=32, radius=0)

        assert stats["loads"] > 0
        assert stats["last_cache_size"] <= 9
        assert stats["evicted"] == stats["releases"]

    def test_unknown_config(self) -> None:
        with pytest.raises(SystemExit):
            main(["walk", "--config", "does-not-exist", "--steps", "1"])
