"""
Preprocessing step classes with a common interface.

Each step is a frozen dataclass that implements the PreprocessStep interface.
Steps are pure: they take an input and return a new output without mutating
the original array.

Usage:
    from preprocessing.steps import GrayscaleStep, CLAHEStep, Pipeline

    pipeline = Pipeline(steps=[
        GrayscaleStep(),
        CLAHEStep(clip_limit=2.0),
    ])
    result = pipeline.run(image)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import cv2
import numpy as np

from .enhancement import (
    adaptive_threshold,
    adjust_gamma,
    apply_clahe,
    bilateral_filter,
    equalize_histogram,
    morph_close,
    otsu_threshold,
    sharpen,
)
from .normalization import resize_by_factor, to_grayscale


class PreprocessStep(ABC):
    """Base class for preprocessing steps.

    All preprocessing steps must implement this interface. Steps should be
    pure functions: they take an input image and return a new output without
    mutating the original.

    Steps that change the geometry of the image report it through
    get_metadata() so that coordinates can be mapped back later.
    """

    @abstractmethod
    def apply(self, img: np.ndarray) -> np.ndarray:
        """Apply this preprocessing step to an image.

        Must be pure: never mutates the input image.

        Args:
            img: Input image as numpy array.

        Returns:
            Processed image as a new numpy array.
        """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logging and debugging."""

    def get_metadata(self) -> dict[str, Any]:
        """Return any metadata produced by this step.

        Returns:
            Dictionary of metadata. Empty by default.
        """
        return {}


@dataclass(frozen=True)
class GrayscaleStep(PreprocessStep):
    """Convert image to grayscale (copy if already single-channel)."""

    def apply(self, img: np.ndarray) -> np.ndarray:
        return to_grayscale(img)

    @property
    def name(self) -> str:
        return "grayscale"


@dataclass(frozen=True)
class CLAHEStep(PreprocessStep):
    """Apply Contrast Limited Adaptive Histogram Equalization.

    CLAHE evens out local brightness, which helps with codes photographed
    under uneven lighting or with low overall contrast.

    Requires grayscale input.

    Attributes:
        clip_limit: Threshold for contrast limiting. Higher values give
                   more contrast but may amplify noise.
        tile_size: Size of grid for histogram equalization.
    """

    clip_limit: float = 2.0
    tile_size: tuple[int, int] = (8, 8)

    def apply(self, img: np.ndarray) -> np.ndarray:
        return apply_clahe(img, self.clip_limit, self.tile_size)

    @property
    def name(self) -> str:
        return f"clahe(clip={self.clip_limit})"


@dataclass(frozen=True)
class AdaptiveThresholdStep(PreprocessStep):
    """Gaussian adaptive thresholding at a single block size."""

    block_size: int = 11
    c: float = 2

    def apply(self, img: np.ndarray) -> np.ndarray:
        return adaptive_threshold(img, self.block_size, self.c)

    @property
    def name(self) -> str:
        return f"adaptive_threshold(block={self.block_size})"


@dataclass(frozen=True)
class OtsuThresholdStep(PreprocessStep):
    """Global Otsu binarization, optionally with inverted polarity."""

    inverted: bool = False

    def apply(self, img: np.ndarray) -> np.ndarray:
        return otsu_threshold(img, inverted=self.inverted)

    @property
    def name(self) -> str:
        return "otsu_inverted" if self.inverted else "otsu"


@dataclass(frozen=True)
class BilateralFilterStep(PreprocessStep):
    """Edge-preserving bilateral smoothing."""

    diameter: int = 9
    sigma_color: float = 75.0
    sigma_space: float = 75.0

    def apply(self, img: np.ndarray) -> np.ndarray:
        return bilateral_filter(img, self.diameter, self.sigma_color, self.sigma_space)

    @property
    def name(self) -> str:
        return f"bilateral(d={self.diameter})"


@dataclass(frozen=True)
class MorphCloseStep(PreprocessStep):
    """Morphological closing; fills small gaps between modules."""

    kernel_size: int = 3

    def apply(self, img: np.ndarray) -> np.ndarray:
        return morph_close(img, self.kernel_size)

    @property
    def name(self) -> str:
        return f"close(k={self.kernel_size})"


@dataclass(frozen=True)
class SharpenStep(PreprocessStep):
    """Sharpen with a fixed 3x3 kernel."""

    def apply(self, img: np.ndarray) -> np.ndarray:
        return sharpen(img)

    @property
    def name(self) -> str:
        return "sharpen"


@dataclass(frozen=True)
class ResizeStep(PreprocessStep):
    """Resize image by a uniform factor.

    The factor is reported as `scale_factor` metadata so that points found
    on the resized image can be divided back into original coordinates.

    Attributes:
        factor: Scale factor (processed size / input size).
        interpolation: OpenCV interpolation method.
    """

    factor: float
    interpolation: int = cv2.INTER_CUBIC

    def apply(self, img: np.ndarray) -> np.ndarray:
        return resize_by_factor(img, self.factor, self.interpolation)

    @property
    def name(self) -> str:
        return f"resize(x{self.factor:g})"

    def get_metadata(self) -> dict[str, Any]:
        return {"scale_factor": self.factor}


@dataclass(frozen=True)
class GammaStep(PreprocessStep):
    """Per-pixel gamma correction."""

    gamma: float

    def apply(self, img: np.ndarray) -> np.ndarray:
        return adjust_gamma(img, self.gamma)

    @property
    def name(self) -> str:
        return f"gamma({self.gamma:g})"


@dataclass(frozen=True)
class EqualizeHistStep(PreprocessStep):
    """Global histogram equalization."""

    def apply(self, img: np.ndarray) -> np.ndarray:
        return equalize_histogram(img)

    @property
    def name(self) -> str:
        return "equalize"


@dataclass
class StepResult:
    """Result of applying a single preprocessing step.

    Attributes:
        name: Name of the step that produced this result.
        image: Output image from the step.
        metadata: Any metadata produced by the step (e.g., scale_factor).
        artifact_path: Path where the image was saved (if artifact saving enabled).
    """

    name: str
    image: np.ndarray
    metadata: dict[str, Any] = field(default_factory=dict)
    artifact_path: str | None = None


@dataclass
class PipelineStepResults:
    """Results from running a preprocessing pipeline.

    Attributes:
        original: The original input image.
        steps: List of StepResult for each step in order.
    """

    original: np.ndarray
    steps: list[StepResult] = field(default_factory=list)

    @property
    def final(self) -> np.ndarray:
        """Get the final processed image."""
        if not self.steps:
            return self.original
        return self.steps[-1].image

    @property
    def artifact_paths(self) -> dict[str, str]:
        """Map of step name to saved artifact path, for steps that were saved."""
        return {
            step.name: step.artifact_path
            for step in self.steps
            if step.artifact_path
        }


def _save_image(img: np.ndarray, path: str) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    cv2.imwrite(path, img)


@dataclass
class Pipeline:
    """A sequence of preprocessing steps to apply to images.

    The pipeline runs each step in order, passing the output of one step
    as the input to the next. All intermediate results are preserved.

    Attributes:
        steps: List of PreprocessStep instances to apply in order.
    """

    steps: list[PreprocessStep]

    @property
    def name(self) -> str:
        """Step names joined with '+', e.g. 'clahe(clip=2.0)+sharpen'."""
        return "+".join(step.name for step in self.steps) or "identity"

    @property
    def scale_factor(self) -> float:
        """Resize ratio this pipeline will apply, known before running it."""
        factor = 1.0
        for step in self.steps:
            factor *= step.get_metadata().get("scale_factor", 1.0)
        return factor

    def run(
        self,
        img: np.ndarray,
        artifact_dir: str | None = None,
        artifact_prefix: str = "",
    ) -> PipelineStepResults:
        """Run the pipeline on an image.

        Args:
            img: Input image as numpy array. Never modified.
            artifact_dir: Optional directory to save each step's output as PNG.
            artifact_prefix: Filename prefix for saved artifacts.

        Returns:
            PipelineStepResults containing all intermediate images and metadata.
        """
        result = PipelineStepResults(original=img.copy())
        current = result.original

        for index, step in enumerate(self.steps):
            output = step.apply(current)

            artifact_path = None
            if artifact_dir:
                step_key = step.name.split("(")[0]
                artifact_path = f"{artifact_dir}/{artifact_prefix}{index}_{step_key}.png"
                _save_image(output, artifact_path)

            result.steps.append(
                StepResult(
                    name=step.name,
                    image=output,
                    metadata=step.get_metadata(),
                    artifact_path=artifact_path,
                )
            )
            current = output

        return result
