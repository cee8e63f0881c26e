"""
Unit tests for the preprocessing module: behavioral tests only.

Covers: error handling, primitive correctness, purity (no mutation),
step metadata, pipeline behavior, config validation and variant ordering.
"""

from dataclasses import replace

import cv2
import numpy as np
import pytest

from preprocessing import (
    CascadeConfig,
    to_grayscale,
    resize_by_factor,
    needs_upscale,
    apply_clahe,
    adaptive_threshold,
    otsu_threshold,
    morph_close,
    sharpen,
    gamma_lut,
    adjust_gamma,
    equalize_histogram,
    GrayscaleStep,
    CLAHEStep,
    OtsuThresholdStep,
    ResizeStep,
    GammaStep,
    SharpenStep,
    Pipeline,
    build_variants,
)


class TestToGrayscale:
    """Tests for the to_grayscale function."""

    def test_pure_function_no_mutation(self):
        """Input should not be modified."""
        rgb = np.full((10, 10, 3), 128, dtype=np.uint8)
        original_data = rgb.copy()
        _ = to_grayscale(rgb)
        assert np.array_equal(rgb, original_data)

    def test_white_image_produces_white_gray(self):
        white = np.full((10, 10, 3), 255, dtype=np.uint8)
        gray = to_grayscale(white)
        assert gray.shape == (10, 10)
        assert np.all(gray == 255)

    def test_rgba_drops_alpha(self):
        rgba = np.zeros((10, 10, 4), dtype=np.uint8)
        rgba[..., 3] = 255
        gray = to_grayscale(rgba)
        assert gray.shape == (10, 10)
        assert np.all(gray == 0)

    def test_grayscale_input_is_copied(self):
        gray = np.full((5, 5), 7, dtype=np.uint8)
        result = to_grayscale(gray)
        assert np.array_equal(result, gray)
        assert result is not gray

    def test_invalid_type_raises(self):
        with pytest.raises(TypeError, match="Expected numpy.ndarray"):
            to_grayscale([[1, 2], [3, 4]])

    def test_empty_array_raises(self):
        with pytest.raises(ValueError):
            to_grayscale(np.zeros((0, 0), dtype=np.uint8))

    def test_1d_array_raises(self):
        with pytest.raises(ValueError, match="2D or 3D"):
            to_grayscale(np.array([1, 2, 3]))

    def test_unsupported_channels_raises(self):
        with pytest.raises(ValueError, match="Unsupported number of channels"):
            to_grayscale(np.zeros((10, 10, 5), dtype=np.uint8))


class TestResizeByFactor:
    """Tests for resize_by_factor and the upscale size gate."""

    def test_upscale_doubles_dimensions(self):
        img = np.zeros((100, 150), dtype=np.uint8)
        assert resize_by_factor(img, 2.0).shape == (200, 300)

    def test_fractional_factor_rounds(self):
        img = np.zeros((101, 100), dtype=np.uint8)
        assert resize_by_factor(img, 1.5).shape == (152, 150)

    def test_odd_size_uses_exact_factor(self):
        # Column x of the output samples source column (x + 0.5) / 1.5 - 0.5,
        # even though 101 * 1.5 is not a whole number of pixels.
        ramp = np.tile(np.arange(101, dtype=np.float32), (101, 1))
        out = resize_by_factor(ramp, 1.5, cv2.INTER_LINEAR)
        assert out.shape == (152, 152)
        assert out[50, 75] == pytest.approx(75.5 / 1.5 - 0.5, abs=1e-3)
        assert out[151, 75] == pytest.approx(out[0, 75])

    def test_factor_one_returns_copy(self):
        img = np.full((4, 4), 3, dtype=np.uint8)
        result = resize_by_factor(img, 1.0)
        assert np.array_equal(result, img)
        assert result is not img

    @pytest.mark.parametrize("factor", [0, -1.5])
    def test_non_positive_factor_raises(self, factor):
        with pytest.raises(ValueError, match="positive"):
            resize_by_factor(np.zeros((4, 4), dtype=np.uint8), factor)

    @pytest.mark.parametrize(
        "shape,expected",
        [
            ((799, 1000), True),
            ((1000, 799), True),
            ((800, 800), False),
            ((3000, 4000, 3), False),
        ],
    )
    def test_needs_upscale(self, shape, expected):
        assert needs_upscale(shape, 800) is expected


class TestEnhancementPrimitives:
    """Tests for the single-channel enhancement primitives."""

    def test_primitives_require_grayscale(self):
        rgb = np.zeros((10, 10, 3), dtype=np.uint8)
        with pytest.raises(ValueError, match="grayscale"):
            apply_clahe(rgb)
        with pytest.raises(ValueError, match="grayscale"):
            otsu_threshold(rgb)

    def test_adaptive_threshold_is_binary(self, noisy_gray):
        binary = adaptive_threshold(noisy_gray, 11, 2)
        assert set(np.unique(binary)) <= {0, 255}

    @pytest.mark.parametrize("block_size", [0, 1, 10])
    def test_adaptive_threshold_rejects_bad_block(self, noisy_gray, block_size):
        with pytest.raises(ValueError, match="odd"):
            adaptive_threshold(noisy_gray, block_size, 2)

    def test_otsu_inverted_is_complement(self, noisy_gray):
        normal = otsu_threshold(noisy_gray)
        inverted = otsu_threshold(noisy_gray, inverted=True)
        assert np.array_equal(inverted, 255 - normal)

    def test_morph_close_fills_single_pixel_hole(self):
        img = np.full((9, 9), 255, dtype=np.uint8)
        img[4, 4] = 0
        assert np.all(morph_close(img, 3) == 255)

    def test_sharpen_keeps_flat_image(self):
        flat = np.full((8, 8), 90, dtype=np.uint8)
        assert np.array_equal(sharpen(flat), flat)

    def test_gamma_lut_endpoints_and_direction(self):
        brighten = gamma_lut(0.5)
        darken = gamma_lut(2.0)
        assert brighten[0] == 0 and brighten[255] == 255
        assert brighten[64] > 64
        assert darken[64] < 64

    def test_gamma_must_be_positive(self):
        with pytest.raises(ValueError, match="positive"):
            gamma_lut(0)

    def test_adjust_gamma_no_mutation(self, noisy_gray):
        original = noisy_gray.copy()
        adjust_gamma(noisy_gray, 1.5)
        assert np.array_equal(noisy_gray, original)

    def test_equalize_stretches_range(self):
        img = np.tile(np.arange(100, 110, dtype=np.uint8), (10, 1))
        out = equalize_histogram(img)
        assert out.max() == 255
        assert out.min() < 100


class TestSteps:
    """Tests for step names and metadata."""

    def test_step_names(self):
        assert GrayscaleStep().name == "grayscale"
        assert CLAHEStep(clip_limit=2.0).name == "clahe(clip=2.0)"
        assert OtsuThresholdStep(inverted=True).name == "otsu_inverted"
        assert GammaStep(gamma=0.75).name == "gamma(0.75)"
        assert ResizeStep(factor=2.0).name == "resize(x2)"

    def test_resize_step_reports_scale_factor(self):
        assert ResizeStep(factor=1.5).get_metadata() == {"scale_factor": 1.5}
        assert SharpenStep().get_metadata() == {}


class TestPipeline:
    """Tests for the Pipeline class."""

    def test_runs_steps_in_order(self, noisy_gray):
        pipeline = Pipeline(steps=[ResizeStep(factor=2.0), OtsuThresholdStep()])
        result = pipeline.run(noisy_gray)
        assert [s.name for s in result.steps] == ["resize(x2)", "otsu"]
        assert result.final.shape == (200, 200)
        assert set(np.unique(result.final)) <= {0, 255}

    def test_scale_factor_known_before_running(self):
        pipeline = Pipeline(steps=[ResizeStep(factor=1.5), CLAHEStep()])
        assert pipeline.scale_factor == 1.5

    def test_chained_resizes_multiply(self, noisy_gray):
        pipeline = Pipeline(steps=[ResizeStep(factor=2.0), ResizeStep(factor=1.5)])
        assert pipeline.scale_factor == 3.0
        assert pipeline.run(noisy_gray).final.shape == (300, 300)

    def test_odd_size_points_map_back_with_scale_factor(self):
        ramp = np.tile(np.arange(101, dtype=np.float32), (101, 1))
        pipeline = Pipeline(steps=[ResizeStep(factor=1.5, interpolation=cv2.INTER_LINEAR)])
        out = pipeline.run(ramp).final
        for x in (10, 75, 140):
            assert out[0, x] == pytest.approx((x + 0.5) / pipeline.scale_factor - 0.5, abs=1e-3)

    def test_input_not_mutated(self, noisy_gray):
        original = noisy_gray.copy()
        Pipeline(steps=[CLAHEStep(), SharpenStep()]).run(noisy_gray)
        assert np.array_equal(noisy_gray, original)

    def test_empty_pipeline_is_identity(self, noisy_gray):
        pipeline = Pipeline(steps=[])
        assert pipeline.name == "identity"
        assert np.array_equal(pipeline.run(noisy_gray).final, noisy_gray)

    def test_saves_artifacts(self, noisy_gray, tmp_path):
        pipeline = Pipeline(steps=[CLAHEStep(), OtsuThresholdStep()])
        result = pipeline.run(noisy_gray, artifact_dir=str(tmp_path), artifact_prefix="03_")
        saved = sorted(p.name for p in tmp_path.iterdir())
        assert saved == ["03_0_clahe.png", "03_1_otsu.png"]
        assert set(result.artifact_paths) == {"clahe(clip=2.0)", "otsu"}


class TestCascadeConfig:
    """Tests for CascadeConfig validation."""

    def test_defaults_are_valid(self):
        CascadeConfig().validate()

    def test_default_tables_are_fixed(self):
        config = CascadeConfig()
        assert config.adaptive_block_sizes == (11, 21, 31, 51)
        assert config.gamma_values == (0.5, 0.75, 1.5, 2.0)

    @pytest.mark.parametrize(
        "changes,match",
        [
            ({"clahe_clip_limit": 0}, "clahe_clip_limit"),
            ({"clahe_tile_size": (8,)}, "clahe_tile_size"),
            ({"adaptive_block_sizes": ()}, "must not be empty"),
            ({"adaptive_block_sizes": (11, 20)}, "odd"),
            ({"adaptive_block_sizes": (21, 11)}, "ascending"),
            ({"bilateral_diameter": 0}, "bilateral_diameter"),
            ({"morph_kernel_size": -1}, "morph_kernel_size"),
            ({"upscale_min_dimension": 0}, "upscale_min_dimension"),
            ({"upscale_factor": 1.0}, "greater than 1"),
            ({"composite_upscale_factor": 0.5}, "greater than 1"),
            ({"gamma_values": ()}, "must not be empty"),
            ({"gamma_values": (0.5, -1.0)}, "positive"),
        ],
    )
    def test_invalid_values_raise(self, changes, match):
        config = replace(CascadeConfig(), **changes)
        with pytest.raises(ValueError, match=match):
            config.validate()


class TestBuildVariants:
    """Tests for the ordered variant list."""

    SMALL = (100, 100)
    LARGE = (1200, 1600)

    def test_order_for_small_image(self):
        names = [v.name for v in build_variants(CascadeConfig(), self.SMALL)]
        assert names == [
            "clahe",
            "adaptive_threshold(11)",
            "adaptive_threshold(21)",
            "adaptive_threshold(31)",
            "adaptive_threshold(51)",
            "otsu",
            "otsu_inverted",
            "bilateral_adaptive",
            "otsu_close",
            "sharpen",
            "upscale(x2)",
            "gamma(0.5)",
            "gamma(0.75)",
            "gamma(1.5)",
            "gamma(2)",
            "equalize",
            "clahe_bilateral_adaptive",
            "upscale_clahe(x1.5)",
        ]

    def test_upscale_skipped_for_large_image(self):
        variants = build_variants(CascadeConfig(), self.LARGE)
        assert "upscale" not in [v.group for v in variants]
        assert len(variants) == len(build_variants(CascadeConfig(), self.SMALL)) - 1

    def test_one_variant_per_table_entry(self):
        config = CascadeConfig(adaptive_block_sizes=(15,), gamma_values=(0.8, 1.2, 3.0))
        groups = [v.group for v in build_variants(config, self.LARGE)]
        assert groups.count("adaptive_threshold") == 1
        assert groups.count("gamma") == 3

    def test_scale_factors_match_resize_ratio(self):
        by_name = {v.name: v for v in build_variants(CascadeConfig(), self.SMALL)}
        assert by_name["upscale(x2)"].scale_factor == 2.0
        assert by_name["upscale_clahe(x1.5)"].scale_factor == 1.5
        resizing = {"upscale(x2)", "upscale_clahe(x1.5)"}
        assert all(
            v.scale_factor == 1.0 for name, v in by_name.items() if name not in resizing
        )

    def test_names_are_unique(self):
        names = [v.name for v in build_variants(CascadeConfig(), self.SMALL)]
        assert len(names) == len(set(names))

    def test_every_variant_produces_single_channel_uint8(self, noisy_gray):
        for variant in build_variants(CascadeConfig(), noisy_gray.shape):
            out = variant.pipeline.run(noisy_gray).final
            assert out.ndim == 2, variant.name
            assert out.dtype == np.uint8, variant.name
            expected = round(100 * variant.scale_factor)
            assert out.shape == (expected, expected), variant.name
