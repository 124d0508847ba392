"""Command-line interface for Stability AI image generation."""

from __future__ import annotations

import argparse
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from stability_ai.client import StabilityClient
from stability_ai.exceptions import StabilityError
from stability_ai.models import (
    ASPECT_RATIOS,
    CORE_OUTPUT_FORMATS,
    SD3_MODELS,
    SD3_MODES,
    STYLE_PRESETS,
)
from stability_ai.params import FileRef
from stability_ai.utils import get_file_extension, save_image


def list_options() -> None:
    """Print accepted option values."""
    print("Aspect ratios:  " + ", ".join(ASPECT_RATIOS))
    print("Style presets:  " + ", ".join(STYLE_PRESETS))
    print("Output formats: " + ", ".join(CORE_OUTPUT_FORMATS) + " (sd3: jpeg, png)")
    print("SD3 modes:      " + ", ".join(SD3_MODES))
    print("SD3 models:     " + ", ".join(SD3_MODELS))


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        description="Generate images with the Stability AI API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Stable Image Core
  %(prog)s "A serene mountain landscape at dawn" -o mountains.png
  %(prog)s "A robot" --style-preset anime --aspect-ratio 16:9

  # Stable Diffusion 3
  %(prog)s "A futuristic cityscape at night" --model sd3 --sd3-model sd3-turbo

  # Image-to-image
  %(prog)s "Make it winter" --model sd3 --mode image-to-image \\
      --image summer.jpg --strength 0.75

The API key is read from STABILITY_API_KEY.
        """,
    )

    parser.add_argument("prompt", nargs="?", help="Text prompt describing the image")
    parser.add_argument(
        "-m",
        "--model",
        choices=["core", "sd3"],
        default="core",
        help="Generation endpoint (default: core)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file path (default: generated_TIMESTAMP.<format>)",
    )
    parser.add_argument("--aspect-ratio", choices=ASPECT_RATIOS, help="Aspect ratio")
    parser.add_argument("--negative-prompt", help="What the image should not contain")
    parser.add_argument("--seed", type=int, help="Seed (0 for random)")
    parser.add_argument(
        "--style-preset", choices=STYLE_PRESETS, help="Style preset (core only)"
    )
    parser.add_argument(
        "--output-format", choices=CORE_OUTPUT_FORMATS, help="Image format (default: png)"
    )
    parser.add_argument("--mode", choices=SD3_MODES, help="SD3 generation mode")
    parser.add_argument(
        "--image", type=Path, help="Input image for image-to-image mode (sd3 only)"
    )
    parser.add_argument(
        "--strength", type=float, help="Transformation strength for image-to-image"
    )
    parser.add_argument("--sd3-model", choices=SD3_MODELS, help="SD3 model variant")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Request a JSON response with a base64 image",
    )
    parser.add_argument(
        "--list-options",
        action="store_true",
        help="List accepted option values and exit",
    )
    return parser


def collect_options(args: argparse.Namespace) -> dict[str, Any]:
    """Map parsed arguments to API form fields."""
    options: dict[str, Any] = {}
    if args.aspect_ratio:
        options["aspect_ratio"] = args.aspect_ratio
    if args.negative_prompt:
        options["negative_prompt"] = args.negative_prompt
    if args.seed is not None:
        options["seed"] = args.seed
    if args.output_format:
        options["output_format"] = args.output_format
    if args.model == "core":
        if args.style_preset:
            options["style_preset"] = args.style_preset
        return options

    if args.mode:
        options["mode"] = args.mode
    if args.image:
        options["image"] = FileRef(args.image)
    if args.strength is not None:
        options["strength"] = args.strength
    if args.sd3_model:
        options["model"] = args.sd3_model
    return options


def default_output_path(output_format: str | None) -> Path:
    """Timestamped filename in the current directory."""
    timestamp = datetime.now(tz=UTC).strftime("%Y%m%d_%H%M%S")
    return Path.cwd() / f"generated_{timestamp}{get_file_extension(output_format or 'png')}"


def main(argv: list[str] | None = None) -> None:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_options:
        list_options()
        return

    if not args.prompt:
        parser.print_help()
        sys.exit(1)

    output_path = args.output or default_output_path(args.output_format)

    try:
        options = collect_options(args)
        client = StabilityClient()
        if args.model == "sd3":
            result = client.generate_sd3(args.prompt, options=options, json=args.json)
        else:
            result = client.generate_core(args.prompt, options=options, json=args.json)
        save_image(result, output_path)
    except (StabilityError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.json:
        print(f"Finish reason: {result.get('finish_reason')}")
    print(f"Image saved to: {output_path}")


if __name__ == "__main__":
    main()
