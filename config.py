"""Central configuration for QR code detection.

All tunable parameters are defined here with descriptive names.
The cascade tries its preprocessing variants in the order defined by
`preprocessing.pipeline.build_variants`; the values below control each
variant's parameters.

Parameter lists are fixed literal sequences so that repeated runs on the
same input always try the same transforms in the same order.
"""

# =============================================================================
# CONTRAST ENHANCEMENT
# =============================================================================

# CLAHE (adaptive histogram equalization) defaults
CLAHE_CLIP_LIMIT = 2.0
CLAHE_TILE_SIZE = (8, 8)

# =============================================================================
# THRESHOLDING
# =============================================================================

# Block sizes for adaptive thresholding, tried smallest to largest.
# Must be odd and > 1 (OpenCV requirement).
ADAPTIVE_BLOCK_SIZES = (11, 21, 31, 51)

# Constant subtracted from the local weighted mean
ADAPTIVE_C = 2

# =============================================================================
# SMOOTHING AND MORPHOLOGY
# =============================================================================

# Bilateral (edge-preserving) filter parameters
BILATERAL_DIAMETER = 9
BILATERAL_SIGMA_COLOR = 75.0
BILATERAL_SIGMA_SPACE = 75.0

# Structuring element size for morphological closing (fills module gaps)
MORPH_KERNEL_SIZE = 3

# =============================================================================
# RESIZING
# =============================================================================

# Images with either dimension below this are upscaled by UPSCALE_FACTOR
UPSCALE_MIN_DIMENSION = 800
UPSCALE_FACTOR = 2.0

# Moderate upscale used by the upscale -> CLAHE composite variant
COMPOSITE_UPSCALE_FACTOR = 1.5

# =============================================================================
# GAMMA CORRECTION
# =============================================================================

# Gamma values tried in order: < 1 brightens shadows, > 1 darkens highlights
GAMMA_VALUES = (0.5, 0.75, 1.5, 2.0)

# =============================================================================
# REGION EXTRACTION AND ENCODING
# =============================================================================

# Padding in pixels around the located code (keeps the quiet zone)
REGION_PADDING = 10

# PNG compression level for the cropped region (0-9)
PNG_COMPRESSION_LEVEL = 9

# =============================================================================
# BATCH SCANNING
# =============================================================================

# Worker threads for batch scans; each worker runs one full cascade at a time
DEFAULT_WORKERS = 4

# =============================================================================
# WEB SERVICE
# =============================================================================

WEB_HOST = "localhost"
WEB_PORT = 30003

# Reject request bodies larger than this (bytes)
MAX_UPLOAD_BYTES = 25 * 1024 * 1024
