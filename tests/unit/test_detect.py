"""Tests for the detect phase."""

from __future__ import annotations

from pathlib import Path

from solcpack.detect import Detect


class TestDetect:
    def test_passes_with_solidity_source(self, tmp_dir: Path):
        (tmp_dir / "contracts").mkdir()
        (tmp_dir / "contracts" / "Token.sol").write_text("pragma solidity ^0.8.20;\n")

        result = Detect().detect(tmp_dir)

        assert result.passed is True
        assert result.provides == ["solc"]
        assert result.as_plan() == {"provides": [{"name": "solc"}], "requires": [{"name": "solc"}]}

    def test_fails_without_sources(self, tmp_dir: Path):
        (tmp_dir / "package.json").write_text("{}")
        result = Detect().detect(tmp_dir)
        assert result.passed is False
        assert result.as_plan() == {"provides": [], "requires": []}

    def test_ignores_node_modules(self, tmp_dir: Path):
        vendored = tmp_dir / "node_modules" / "@openzeppelin" / "contracts"
        vendored.mkdir(parents=True)
        (vendored / "ERC20.sol").write_text("")
        assert Detect().detect(tmp_dir).passed is False
