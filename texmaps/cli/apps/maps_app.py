#!/usr/bin/env python3
"""
Map generation app for texmaps CLI.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

import typer

from texmaps.batch import BatchQueue, save_map_set
from texmaps.config import ProcessorSettings
from texmaps.exceptions import TexMapsConfigError, TexMapsException
from texmaps.image import MAP_TYPES, load_image, save_image
from texmaps.image.core.base_types import CombineMode, Kernel
from texmaps.processor import MapProcessor, elapsed_time_message
from texmaps.cli.core.config import load_settings
from texmaps.cli.core.ui import (
    console,
    display_written_maps,
    print_error,
    print_info,
    print_success,
    print_warning,
)

logger = logging.getLogger(__name__)


def _override(section, **values):
    """Replace the settings given on the command line, keep the rest."""
    changes = {}
    for key, value in values.items():
        if value is None:
            continue
        changes[key] = value.value if isinstance(value, (Kernel, CombineMode)) else value
    return replace(section, **changes)


def _settings() -> ProcessorSettings:
    try:
        return load_settings()
    except TexMapsConfigError as e:
        print_error(str(e))
        raise typer.Exit(1)


def _generate(input_file: Path, output: Optional[Path], maps: List[str], settings: ProcessorSettings) -> None:
    """Load an image, generate the requested maps and write them."""
    try:
        image = load_image(input_file)
        map_set = MapProcessor(settings).process(image, maps)
        written = save_map_set(map_set, output or input_file)
    except (TexMapsException, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(1)

    for map_type, calc_time_ms in map_set.timings_ms.items():
        print_info(elapsed_time_message(calc_time_ms, map_type))
    display_written_maps(written, map_set.timings_ms)


def create_maps_app() -> typer.Typer:
    """Create the map generation app."""
    app = typer.Typer(help="Generate normal, specular, displacement and ambient occlusion maps")

    @app.command("normal")
    def normal(
        input_file: Path = typer.Argument(..., help="Input image", exists=True),
        output: Optional[Path] = typer.Option(None, "--output", "-o", help="Base output path (suffixes are appended)"),
        strength: Optional[float] = typer.Option(None, "--strength", "-s", help="Normal map strength"),
        kernel: Optional[Kernel] = typer.Option(None, "--kernel", "-k", help="Gradient kernel"),
        mode: Optional[CombineMode] = typer.Option(None, "--mode", help="Channel combine mode"),
        channels: Optional[str] = typer.Option(None, "--channels", "-c", help="Channels forming the height, e.g. 'rgb'"),
        invert: Optional[bool] = typer.Option(None, "--invert/--no-invert", help="Invert the height"),
        tileable: Optional[bool] = typer.Option(None, "--tileable/--no-tileable", help="Wrap around the borders"),
        large_detail: Optional[bool] = typer.Option(
            None, "--large-detail/--no-large-detail", help="Keep large detail (disables the automatic choice)"),
        large_detail_scale: Optional[int] = typer.Option(None, "--large-detail-scale", help="Downscaled copy size in percent"),
        large_detail_height: Optional[float] = typer.Option(None, "--large-detail-height", help="Large detail weight"),
        size_percent: Optional[int] = typer.Option(None, "--size", help="Normal map size in percent of the input"),
    ):
        """Export a normal map."""
        settings = _settings()
        try:
            section = _override(
                settings.normal,
                strength=strength, kernel=kernel, mode=mode, channels=channels, invert=invert,
                tileable=tileable, keep_large_detail=large_detail, large_detail_scale=large_detail_scale,
                large_detail_height=large_detail_height, size_percent=size_percent,
            )
            if large_detail is not None or large_detail_scale is not None:
                section = replace(section, auto_large_detail=False)
        except ValueError as e:
            print_error(str(e))
            raise typer.Exit(1)
        _generate(input_file, output, ["normal"], replace(settings, normal=section))

    @app.command("spec")
    def spec(
        input_file: Path = typer.Argument(..., help="Input image", exists=True),
        output: Optional[Path] = typer.Option(None, "--output", "-o", help="Base output path"),
        mode: Optional[CombineMode] = typer.Option(None, "--mode", help="Channel combine mode"),
        red: Optional[float] = typer.Option(None, "--red", help="Red multiplier"),
        green: Optional[float] = typer.Option(None, "--green", help="Green multiplier"),
        blue: Optional[float] = typer.Option(None, "--blue", help="Blue multiplier"),
        alpha: Optional[float] = typer.Option(None, "--alpha", help="Alpha multiplier"),
        scale: Optional[float] = typer.Option(None, "--scale", help="Linear gain"),
        contrast: Optional[float] = typer.Option(None, "--contrast", help="Contrast around mid-gray"),
    ):
        """Export a specular map."""
        settings = _settings()
        section = _override(settings.spec, mode=mode, red=red, green=green, blue=blue,
                            alpha=alpha, scale=scale, contrast=contrast)
        _generate(input_file, output, ["spec"], replace(settings, spec=section))

    @app.command("displace")
    def displace(
        input_file: Path = typer.Argument(..., help="Input image", exists=True),
        output: Optional[Path] = typer.Option(None, "--output", "-o", help="Base output path"),
        mode: Optional[CombineMode] = typer.Option(None, "--mode", help="Channel combine mode"),
        red: Optional[float] = typer.Option(None, "--red", help="Red multiplier"),
        green: Optional[float] = typer.Option(None, "--green", help="Green multiplier"),
        blue: Optional[float] = typer.Option(None, "--blue", help="Blue multiplier"),
        scale: Optional[float] = typer.Option(None, "--scale", help="Linear gain"),
        contrast: Optional[float] = typer.Option(None, "--contrast", help="Contrast around mid-gray"),
        blur: Optional[bool] = typer.Option(None, "--blur/--no-blur", help="Smooth with a box blur"),
        blur_radius: Optional[int] = typer.Option(None, "--blur-radius", min=0, help="Box blur radius"),
        blur_tileable: Optional[bool] = typer.Option(None, "--blur-tileable/--no-blur-tileable",
                                                     help="Wrap the blur around the borders"),
    ):
        """Export a displacement map."""
        settings = _settings()
        section = _override(settings.displace, mode=mode, red=red, green=green, blue=blue, scale=scale,
                            contrast=contrast, blur=blur, blur_radius=blur_radius, blur_tileable=blur_tileable)
        _generate(input_file, output, ["displace"], replace(settings, displace=section))

    @app.command("ssao")
    def ssao(
        input_file: Path = typer.Argument(..., help="Input image", exists=True),
        output: Optional[Path] = typer.Option(None, "--output", "-o", help="Base output path"),
        size: Optional[float] = typer.Option(None, "--size", help="Sample radius as a fraction of the image"),
        samples: Optional[int] = typer.Option(None, "--samples", min=0, help="Samples per pixel"),
        noise_tex_size: Optional[int] = typer.Option(None, "--noise-size", min=1, help="Noise texture size"),
        seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    ):
        """Export an ambient occlusion map (the normal map is calculated first)."""
        settings = _settings()
        section = _override(settings.ssao, size=size, samples=samples, noise_tex_size=noise_tex_size, seed=seed)
        _generate(input_file, output, ["ssao"], replace(settings, ssao=section))

    @app.command("all")
    def all_maps(
        input_file: Path = typer.Argument(..., help="Input image", exists=True),
        output: Optional[Path] = typer.Option(None, "--output", "-o", help="Base output path"),
        types: Optional[List[str]] = typer.Option(None, "--types", "-t", help="Map types (default: all)"),
    ):
        """Export every map with the configured settings."""
        _generate(input_file, output, types or list(MAP_TYPES), _settings())

    @app.command("channel")
    def channel(
        input_file: Path = typer.Argument(..., help="Input image", exists=True),
        channel: str = typer.Option("r", "--channel", help="Channel to show: r, g, b or a"),
        output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file"),
    ):
        """Export a single color channel as a grayscale image."""
        try:
            image = load_image(input_file)
            gray = MapProcessor().channel_intensity(image, channel.lower())
            target = output or input_file.with_name(f"{input_file.stem}_{channel.lower()}.png")
            save_image(gray, target)
        except (TexMapsException, ValueError) as e:
            print_error(str(e))
            raise typer.Exit(1)
        print_success(f"Channel '{channel}' saved to {target}")

    @app.command("batch")
    def batch(
        inputs: List[Path] = typer.Argument(..., help="Input images"),
        output_dir: Path = typer.Option(..., "--output", "-o", help="Export directory"),
        types: Optional[List[str]] = typer.Option(None, "--types", "-t", help="Map types (default: normal, spec, displace)"),
    ):
        """Process several images into an export directory."""
        queue = BatchQueue(MapProcessor(_settings()))
        for rejected in queue.add(inputs):
            print_warning(f"Unsupported image format, skipped: {rejected}")
        if not len(queue):
            print_error("No supported images to process")
            raise typer.Exit(1)

        maps = types or ["normal", "spec", "displace"]
        failures = 0
        with typer.progressbar(length=len(queue), label="Processing queue") as progress:
            for result in queue.run(output_dir, maps):
                progress.update(1)
                if result.ok:
                    console.print(f"\n[cyan]{result.source.name}[/] -> {len(result.written)} maps")
                else:
                    failures += 1
                    console.print(f"\n[red]{result.source.name}: {result.error}[/]")

        if failures:
            print_warning(f"{failures} image(s) failed")
            raise typer.Exit(1)
        print_success(f"Maps exported to {output_dir}")

    @app.command("list")
    def list_maps():
        """List all available map types with descriptions."""
        map_info = [
            ("normal", "Tangent-space normal map from the image's intensity"),
            ("spec", "Specular map from weighted color channels"),
            ("displace", "Displacement map, optionally box blurred"),
            ("ssao", "Ambient occlusion from the normal map and height"),
        ]
        console.print("\n[bold cyan]Available Map Types:[/]")
        for map_type, description in map_info:
            console.print(f"  [cyan]{map_type:<10}[/] {description}")

    return app
