"""
Image preprocessing module for QR code detection.

This module provides pure, deterministic functions for enhancing images
before they are handed to the QR detector. All functions follow the pattern:
input -> output with no mutation of the original arrays.

Key components:
- config: CascadeConfig dataclass parameterizing every variant
- normalization: grayscale conversion and resizing
- enhancement: contrast, threshold, filter, morphology and gamma primitives
- steps: Class-based preprocessing steps with a common PreprocessStep interface
- pipeline: VariantSpec and build_variants(), the ordered cascade variants
"""

from .config import CascadeConfig
from .normalization import to_grayscale, resize_by_factor, needs_upscale, validate_image
from .enhancement import (
    SHARPEN_KERNEL,
    apply_clahe,
    adaptive_threshold,
    otsu_threshold,
    bilateral_filter,
    morph_close,
    sharpen,
    gamma_lut,
    adjust_gamma,
    equalize_histogram,
)
from .steps import (
    PreprocessStep,
    GrayscaleStep,
    CLAHEStep,
    AdaptiveThresholdStep,
    OtsuThresholdStep,
    BilateralFilterStep,
    MorphCloseStep,
    SharpenStep,
    ResizeStep,
    GammaStep,
    EqualizeHistStep,
    Pipeline,
    PipelineStepResults,
    StepResult,
)
from .pipeline import VariantSpec, build_variants

__all__ = [
    # Config
    "CascadeConfig",
    # Primitives
    "to_grayscale",
    "resize_by_factor",
    "needs_upscale",
    "validate_image",
    "SHARPEN_KERNEL",
    "apply_clahe",
    "adaptive_threshold",
    "otsu_threshold",
    "bilateral_filter",
    "morph_close",
    "sharpen",
    "gamma_lut",
    "adjust_gamma",
    "equalize_histogram",
    # Steps
    "PreprocessStep",
    "GrayscaleStep",
    "CLAHEStep",
    "AdaptiveThresholdStep",
    "OtsuThresholdStep",
    "BilateralFilterStep",
    "MorphCloseStep",
    "SharpenStep",
    "ResizeStep",
    "GammaStep",
    "EqualizeHistStep",
    "Pipeline",
    "PipelineStepResults",
    "StepResult",
    # Variants
    "VariantSpec",
    "build_variants",
]
