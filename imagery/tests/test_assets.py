"""Tests for responsive asset ladders."""

from __future__ import annotations

from pathlib import Path

import pytest

from imagery.derivatives.assets import AssetBuilder, ladder_steps
from imagery.derivatives.backends import PillowBackend
from imagery.derivatives.exceptions import DecodeError


@pytest.fixture
def builder(pillow_backend: PillowBackend) -> AssetBuilder:
    return AssetBuilder(pillow_backend)


class TestLadderSteps:
    def test_first_step_always_included(self) -> None:
        assert ladder_steps(100, (320, 480, 640)) == [320]

    def test_overshoot_required(self) -> None:
        assert ladder_steps(321, (320, 480, 640)) == [320]
        assert ladder_steps(384, (320, 480, 640)) == [320]
        assert ladder_steps(460, (320, 480, 640)) == [320, 480]

    def test_all_steps(self) -> None:
        assert ladder_steps(5000, (160, 320, 480, 800, 1280)) == [160, 320, 480, 800, 1280]


class TestCoverAssets:
    def test_large_source_full_ladder(self, builder: AssetBuilder, landscape_jpeg: Path) -> None:
        assets = builder.cover_assets(landscape_jpeg)

        assert [a.edge_size for a in assets.all()] == [160, 320, 480, 800, 1280]
        assert all(a.width == a.height for a in assets.all())
        assert assets.largest().edge_size == 1280
        assert assets.smallest().edge_size == 160
        assert assets.opengraph_asset().edge_size == 800
        assert assets.playlist_asset().edge_size == 480
        assert assets.largest().target_filename() == "cover_1280.jpg"
        assert assets.by_edge_size(480).edge_size == 480
        assert assets.by_edge_size(999) is None

    def test_small_source_single_asset(self, builder: AssetBuilder, small_png: Path) -> None:
        assets = builder.cover_assets(small_png)

        assert [a.edge_size for a in assets.all()] == [100]
        assert assets.opengraph_asset().edge_size == 100
        assert assets.playlist_asset().edge_size == 100

    def test_medium_source_not_upscaled(
        self, builder: AssetBuilder, source_dir: Path, make_image
    ) -> None:
        path = make_image(source_dir, "medium.png", (250, 400))
        assets = builder.cover_assets(path)
        assert [a.edge_size for a in assets.all()] == [160, 250]

    def test_wide_source_gated_by_height(
        self, builder: AssetBuilder, source_dir: Path, make_image
    ) -> None:
        # The square crop leaves 180px, short of the 192px needed for 320
        path = make_image(source_dir, "wide.png", (600, 180))
        assets = builder.cover_assets(path)
        assert [a.edge_size for a in assets.all()] == [160]

    def test_filesize_recorded(
        self, builder: AssetBuilder, landscape_jpeg: Path, cache_dir: Path
    ) -> None:
        for asset in builder.cover_assets(landscape_jpeg).all():
            assert asset.filesize_bytes == (cache_dir / asset.filename).stat().st_size
            assert asset.filesize_bytes > 0

    def test_decode_error_propagates(
        self, builder: AssetBuilder, broken_file: Path, cache_dir: Path
    ) -> None:
        with pytest.raises(DecodeError):
            builder.cover_assets(broken_file)
        assert list(cache_dir.iterdir()) == []


class TestArtistAssets:
    def test_large_source(self, builder: AssetBuilder, landscape_jpeg: Path) -> None:
        assets = builder.artist_assets(landscape_jpeg)

        assert [(a.width, a.height) for a in assets.fixed] == [(320, 142), (480, 213), (640, 284)]
        assert [(a.width, a.height) for a in assets.fluid] == [(640, 256), (960, 384), (1280, 512)]
        assert {a.variant for a in assets.fixed} == {"fixed"}
        assert {a.variant for a in assets.fluid} == {"fluid"}
        assert len(assets.all()) == 6
        assert assets.opengraph_asset().target_filename() == "image_fixed_640x284.jpg"

    def test_aspect_bands(self, builder: AssetBuilder, portrait_png: Path) -> None:
        assets = builder.artist_assets(portrait_png)

        for asset in assets.fixed:
            assert 2.25 - 0.05 <= asset.width / asset.height <= 2.5 + 0.05
        for asset in assets.fluid:
            assert 2.5 - 0.05 <= asset.width / asset.height <= 5.0 + 0.05

    def test_wide_source_uses_cropped_width(
        self, builder: AssetBuilder, source_dir: Path, make_image
    ) -> None:
        # 2000x100 crops to 250x100 for the fixed band: only the first step fits
        path = make_image(source_dir, "banner.png", (2000, 100))
        assets = builder.artist_assets(path)

        assert [(a.width, a.height) for a in assets.fixed] == [(250, 100)]
        assert [(a.width, a.height) for a in assets.fluid] == [(500, 100)]


class TestSingleAssets:
    def test_background(self, builder: AssetBuilder, landscape_jpeg: Path) -> None:
        asset = builder.background_asset(landscape_jpeg)
        assert (asset.width, asset.height) == (1280, 960)

    def test_feed(self, builder: AssetBuilder, landscape_jpeg: Path) -> None:
        asset = builder.feed_asset(landscape_jpeg)
        assert (asset.width, asset.height) == (920, 690)

    def test_feed_small_source_unchanged(self, builder: AssetBuilder, small_png: Path) -> None:
        asset = builder.feed_asset(small_png)
        assert (asset.width, asset.height) == (100, 100)
