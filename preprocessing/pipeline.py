"""
Ordered list of preprocessing variants tried by the detection cascade.

Each variant is a VariantSpec: a named Pipeline of steps plus the resize
ratio it applies. The cascade walks the list in order and stops at the
first variant whose output the detector can decode.

Variant order (cheap and broadly effective first, narrow and expensive last):
    clahe                       contrast enhancement
    adaptive_threshold          one variant per block size, smallest first
    otsu                        global binarization
    otsu_inverted               global binarization, inverted polarity
    bilateral_adaptive          edge-preserving smoothing -> adaptive threshold
    otsu_close                  binarization -> morphological closing
    sharpen                     3x3 sharpening kernel
    upscale                     only for images below the size threshold
    gamma                       one variant per gamma value
    equalize                    global histogram equalization
    clahe_bilateral_adaptive    composite
    upscale_clahe               composite with moderate upscale
"""

from dataclasses import dataclass

from .config import CascadeConfig
from .normalization import needs_upscale
from .steps import (
    AdaptiveThresholdStep,
    BilateralFilterStep,
    CLAHEStep,
    EqualizeHistStep,
    GammaStep,
    MorphCloseStep,
    OtsuThresholdStep,
    Pipeline,
    PreprocessStep,
    ResizeStep,
    SharpenStep,
)


@dataclass(frozen=True)
class VariantSpec:
    """One cascade step.

    Attributes:
        name: Unique name, including parameters (e.g. "gamma(0.5)").
        group: Variant category shared by multi-parameter variants
               (e.g. "gamma").
        pipeline: Steps to apply to the grayscale image.
        scale_factor: Resize ratio (variant size / original size). Points
                      found on the variant are divided by this to map them
                      back to original coordinates.
    """

    name: str
    group: str
    pipeline: Pipeline
    scale_factor: float = 1.0


def _variant(name: str, group: str, steps: list[PreprocessStep]) -> VariantSpec:
    pipeline = Pipeline(steps=steps)
    return VariantSpec(
        name=name,
        group=group,
        pipeline=pipeline,
        scale_factor=pipeline.scale_factor,
    )


def build_variants(
    config: CascadeConfig,
    image_shape: tuple[int, ...],
) -> list[VariantSpec]:
    """Build the ordered variant list for an image of the given shape.

    Args:
        config: Cascade tuning parameters.
        image_shape: Shape of the grayscale image the variants will run on.
                     Used to decide whether the size-gated upscale runs.

    Returns:
        VariantSpecs in the order they should be tried.
    """
    clahe = CLAHEStep(
        clip_limit=config.clahe_clip_limit,
        tile_size=config.clahe_tile_size,
    )
    bilateral = BilateralFilterStep(
        diameter=config.bilateral_diameter,
        sigma_color=config.bilateral_sigma_color,
        sigma_space=config.bilateral_sigma_space,
    )
    smallest_block = AdaptiveThresholdStep(
        block_size=config.adaptive_block_sizes[0],
        c=config.adaptive_c,
    )

    variants = [_variant("clahe", "clahe", [clahe])]

    for block_size in config.adaptive_block_sizes:
        variants.append(_variant(
            f"adaptive_threshold({block_size})",
            "adaptive_threshold",
            [AdaptiveThresholdStep(block_size=block_size, c=config.adaptive_c)],
        ))

    variants.extend([
        _variant("otsu", "otsu", [OtsuThresholdStep()]),
        _variant("otsu_inverted", "otsu_inverted", [OtsuThresholdStep(inverted=True)]),
        _variant("bilateral_adaptive", "bilateral_adaptive", [bilateral, smallest_block]),
        _variant(
            "otsu_close",
            "otsu_close",
            [OtsuThresholdStep(), MorphCloseStep(kernel_size=config.morph_kernel_size)],
        ),
        _variant("sharpen", "sharpen", [SharpenStep()]),
    ])

    if needs_upscale(image_shape, config.upscale_min_dimension):
        variants.append(_variant(
            f"upscale(x{config.upscale_factor:g})",
            "upscale",
            [ResizeStep(factor=config.upscale_factor)],
        ))

    for gamma in config.gamma_values:
        variants.append(_variant(f"gamma({gamma:g})", "gamma", [GammaStep(gamma=gamma)]))

    variants.extend([
        _variant("equalize", "equalize", [EqualizeHistStep()]),
        _variant(
            "clahe_bilateral_adaptive",
            "clahe_bilateral_adaptive",
            [clahe, bilateral, smallest_block],
        ),
        _variant(
            f"upscale_clahe(x{config.composite_upscale_factor:g})",
            "upscale_clahe",
            [ResizeStep(factor=config.composite_upscale_factor), clahe],
        ),
    ])

    return variants
