"""Endpoint paths and option values for Stability image generation."""

from __future__ import annotations

from typing import Literal

# Type aliases for generation options
AspectRatio = Literal["16:9", "1:1", "21:9", "2:3", "3:2", "4:5", "5:4", "9:16", "9:21"]
OutputFormat = Literal["jpeg", "png", "webp"]
SD3Mode = Literal["text-to-image", "image-to-image"]
SD3Model = Literal["sd3", "sd3-turbo"]
StylePreset = Literal[
    "3d-model",
    "analog-film",
    "anime",
    "cinematic",
    "comic-book",
    "digital-art",
    "enhance",
    "fantasy-art",
    "isometric",
    "line-art",
    "low-poly",
    "modeling-compound",
    "neon-punk",
    "origami",
    "photographic",
    "pixel-art",
    "tile-texture",
]

CORE_PATH = "/stable-image/generate/core"
SD3_PATH = "/stable-image/generate/sd3"

IMAGE_TO_IMAGE: SD3Mode = "image-to-image"

ASPECT_RATIOS: list[AspectRatio] = [
    "16:9",
    "1:1",
    "21:9",
    "2:3",
    "3:2",
    "4:5",
    "5:4",
    "9:16",
    "9:21",
]

STYLE_PRESETS: list[StylePreset] = [
    "3d-model",
    "analog-film",
    "anime",
    "cinematic",
    "comic-book",
    "digital-art",
    "enhance",
    "fantasy-art",
    "isometric",
    "line-art",
    "low-poly",
    "modeling-compound",
    "neon-punk",
    "origami",
    "photographic",
    "pixel-art",
    "tile-texture",
]

# Core accepts webp, SD3 does not
CORE_OUTPUT_FORMATS: list[OutputFormat] = ["jpeg", "png", "webp"]
SD3_OUTPUT_FORMATS: list[OutputFormat] = ["jpeg", "png"]

SD3_MODES: list[SD3Mode] = ["text-to-image", "image-to-image"]
SD3_MODELS: list[SD3Model] = ["sd3", "sd3-turbo"]

# Accept header values selecting the response representation
ACCEPT_JSON = "application/json"
ACCEPT_IMAGE = "image/*"
