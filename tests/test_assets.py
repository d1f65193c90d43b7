"""Tests for emoji asset resolution."""

import cv2
import numpy as np
import pytest

from emojify.assets import (
    ASSET_FILENAMES,
    AssetResolver,
    DirectoryAssetResolver,
    RenderedAssetResolver,
    render_emoji,
    write_assets,
)
from emojify.types import EmojiCategory


class TestAssetFilenames:
    def test_every_category_has_a_file(self):
        assert set(ASSET_FILENAMES) == set(EmojiCategory)

    def test_file_names_are_unique(self):
        assert len(set(ASSET_FILENAMES.values())) == len(ASSET_FILENAMES)

    def test_drawable_names(self):
        assert ASSET_FILENAMES[EmojiCategory.LEFT_WINK] == "leftwink.png"
        assert ASSET_FILENAMES[EmojiCategory.CLOSED_EYE_FROWN] == "closed_frown.png"


class TestRenderEmoji:
    def test_shape_and_dtype(self):
        image = render_emoji(EmojiCategory.SMILE, 64)
        assert image.shape == (64, 64, 4)
        assert image.dtype == np.uint8

    def test_transparent_corners_opaque_center(self):
        image = render_emoji(EmojiCategory.FROWN, 128)
        assert image[0, 0, 3] == 0
        assert image[127, 127, 3] == 0
        assert image[64, 64, 3] == 255

    def test_categories_render_differently(self):
        rendered = [render_emoji(c, 96).tobytes() for c in EmojiCategory]
        assert len(set(rendered)) == len(rendered)

    def test_left_wink_closes_right_hand_eye(self):
        """The subject's left eye is drawn on the right of the image."""
        smile = render_emoji(EmojiCategory.SMILE, 128)
        wink = render_emoji(EmojiCategory.LEFT_WINK, 128)
        diff = np.any(smile != wink, axis=2)
        cols = np.nonzero(diff)[1]
        assert cols.size > 0
        assert cols.min() >= 64


class TestRenderedAssetResolver:
    def test_resolves_every_category(self):
        resolver = RenderedAssetResolver(size=32)
        for category in EmojiCategory:
            image = resolver.resolve(category)
            assert image is not None
            assert image.shape == (32, 32, 4)

    def test_caches(self):
        resolver = RenderedAssetResolver(size=32)
        assert resolver.resolve(EmojiCategory.SMILE) is resolver.resolve(EmojiCategory.SMILE)

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            RenderedAssetResolver(size=0)

    def test_is_asset_resolver(self):
        assert isinstance(RenderedAssetResolver(), AssetResolver)


class TestDirectoryAssetResolver:
    def test_loads_png_with_alpha(self, tmp_path):
        emoji = np.zeros((20, 30, 4), dtype=np.uint8)
        emoji[..., 3] = 255
        cv2.imwrite(str(tmp_path / "smile.png"), emoji)

        resolver = DirectoryAssetResolver(tmp_path)
        image = resolver.resolve(EmojiCategory.SMILE)

        assert image is not None
        assert image.shape == (20, 30, 4)

    def test_missing_file_returns_none(self, tmp_path):
        resolver = DirectoryAssetResolver(tmp_path)
        assert resolver.resolve(EmojiCategory.FROWN) is None

    def test_undecodable_file_returns_none(self, tmp_path):
        (tmp_path / "frown.png").write_bytes(b"not a png")
        resolver = DirectoryAssetResolver(tmp_path)
        assert resolver.resolve(EmojiCategory.FROWN) is None

    def test_unconfigured_category_returns_none(self, tmp_path):
        resolver = DirectoryAssetResolver(tmp_path, filenames={EmojiCategory.SMILE: "smile.png"})
        assert resolver.resolve(EmojiCategory.FROWN) is None

    def test_caches_loaded_images(self, tmp_path):
        cv2.imwrite(str(tmp_path / "smile.png"), np.zeros((4, 4, 4), dtype=np.uint8))
        resolver = DirectoryAssetResolver(tmp_path)
        first = resolver.resolve(EmojiCategory.SMILE)
        (tmp_path / "smile.png").unlink()
        assert resolver.resolve(EmojiCategory.SMILE) is first

    def test_directory_property(self, tmp_path):
        assert DirectoryAssetResolver(str(tmp_path)).directory == tmp_path


class TestWriteAssets:
    def test_writes_all_pngs(self, tmp_path):
        out = tmp_path / "emoji"
        paths = write_assets(out, size=32)

        assert len(paths) == 8
        assert sorted(p.name for p in paths) == sorted(ASSET_FILENAMES.values())
        assert all(p.is_file() for p in paths)

    def test_round_trip_through_directory_resolver(self, tmp_path):
        write_assets(tmp_path, size=32)
        resolver = DirectoryAssetResolver(tmp_path)
        for category in EmojiCategory:
            image = resolver.resolve(category)
            assert image.shape == (32, 32, 4)
