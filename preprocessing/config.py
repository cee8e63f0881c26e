"""
Configuration for the preprocessing cascade.

Every variant the cascade tries is parameterized through CascadeConfig so
that runs are reproducible and the tuning tables can be adjusted in one
place.
"""

from dataclasses import dataclass

from config import (
    ADAPTIVE_BLOCK_SIZES,
    ADAPTIVE_C,
    BILATERAL_DIAMETER,
    BILATERAL_SIGMA_COLOR,
    BILATERAL_SIGMA_SPACE,
    CLAHE_CLIP_LIMIT,
    CLAHE_TILE_SIZE,
    COMPOSITE_UPSCALE_FACTOR,
    GAMMA_VALUES,
    MORPH_KERNEL_SIZE,
    UPSCALE_FACTOR,
    UPSCALE_MIN_DIMENSION,
)


@dataclass(frozen=True)
class CascadeConfig:
    """Parameters for every step of the preprocessing cascade.

    Attributes:
        clahe_clip_limit: Contrast limit for CLAHE.
        clahe_tile_size: Tile grid size for CLAHE.
        adaptive_block_sizes: Adaptive threshold block sizes, tried in order.
        adaptive_c: Constant subtracted from the local mean.
        bilateral_diameter: Pixel neighbourhood diameter for the bilateral filter.
        bilateral_sigma_color: Bilateral filter sigma in intensity space.
        bilateral_sigma_space: Bilateral filter sigma in coordinate space.
        morph_kernel_size: Closing structuring element size.
        upscale_min_dimension: Upscale only when width or height is below this.
        upscale_factor: Resize ratio of the upscale variant.
        composite_upscale_factor: Resize ratio of the upscale -> CLAHE variant.
        gamma_values: Gamma values tried in order.
    """

    clahe_clip_limit: float = CLAHE_CLIP_LIMIT
    clahe_tile_size: tuple[int, int] = CLAHE_TILE_SIZE
    adaptive_block_sizes: tuple[int, ...] = ADAPTIVE_BLOCK_SIZES
    adaptive_c: float = ADAPTIVE_C
    bilateral_diameter: int = BILATERAL_DIAMETER
    bilateral_sigma_color: float = BILATERAL_SIGMA_COLOR
    bilateral_sigma_space: float = BILATERAL_SIGMA_SPACE
    morph_kernel_size: int = MORPH_KERNEL_SIZE
    upscale_min_dimension: int = UPSCALE_MIN_DIMENSION
    upscale_factor: float = UPSCALE_FACTOR
    composite_upscale_factor: float = COMPOSITE_UPSCALE_FACTOR
    gamma_values: tuple[float, ...] = GAMMA_VALUES

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ValueError: If any parameter is invalid.
        """
        if self.clahe_clip_limit <= 0:
            raise ValueError(
                f"clahe_clip_limit must be positive, got {self.clahe_clip_limit}"
            )

        if (
            not isinstance(self.clahe_tile_size, tuple)
            or len(self.clahe_tile_size) != 2
            or any(size <= 0 for size in self.clahe_tile_size)
        ):
            raise ValueError(
                "clahe_tile_size must be a tuple of two positive integers, "
                f"got {self.clahe_tile_size}"
            )

        if not self.adaptive_block_sizes:
            raise ValueError("adaptive_block_sizes must not be empty")
        for block_size in self.adaptive_block_sizes:
            if block_size <= 1 or block_size % 2 == 0:
                raise ValueError(
                    f"adaptive block sizes must be odd and > 1, got {block_size}"
                )
        if list(self.adaptive_block_sizes) != sorted(self.adaptive_block_sizes):
            raise ValueError(
                "adaptive_block_sizes must be in ascending order, "
                f"got {self.adaptive_block_sizes}"
            )

        if self.bilateral_diameter <= 0:
            raise ValueError(
                f"bilateral_diameter must be positive, got {self.bilateral_diameter}"
            )

        if self.morph_kernel_size <= 0:
            raise ValueError(
                f"morph_kernel_size must be positive, got {self.morph_kernel_size}"
            )

        if self.upscale_min_dimension <= 0:
            raise ValueError(
                "upscale_min_dimension must be positive, "
                f"got {self.upscale_min_dimension}"
            )

        for label, factor in (
            ("upscale_factor", self.upscale_factor),
            ("composite_upscale_factor", self.composite_upscale_factor),
        ):
            if factor <= 1.0:
                raise ValueError(f"{label} must be greater than 1, got {factor}")

        if not self.gamma_values:
            raise ValueError("gamma_values must not be empty")
        if any(gamma <= 0 for gamma in self.gamma_values):
            raise ValueError(f"gamma values must be positive, got {self.gamma_values}")
