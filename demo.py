"""
texmaps Demo - Generate every map from a synthetic texture.

This script demonstrates:
1. Building an intensity map and blurring it
2. Normal maps with and without the large detail pass
3. Specular and displacement maps
4. Ambient occlusion from the normal map
5. Batch processing into an export directory
"""

import os

import numpy as np

from texmaps.batch import BatchQueue
from texmaps.config import ProcessorSettings
from texmaps.image import (
    BoxBlur,
    IntensityMap,
    Kernel,
    NormalMapGenerator,
    SsaoGenerator,
    save_image,
)
from texmaps.processor import MapProcessor, elapsed_time_message


# ------------------ STEP FUNCTIONS ------------------

def create_texture(size=256):
    """Create a cobblestone-like texture: round stones separated by dark grooves."""
    yy, xx = np.mgrid[:size, :size].astype(np.float64)
    cell = size / 8.0
    u = (xx % cell) / cell - 0.5
    v = (yy % cell) / cell - 0.5
    stones = np.clip(1.0 - 2.2 * np.hypot(u, v), 0.0, 1.0) ** 0.5

    rng = np.random.default_rng(1)
    grain = rng.normal(0.0, 0.04, size=(size, size))
    gray = np.clip(stones * 0.85 + 0.1 + grain, 0.0, 1.0)

    rgba = np.empty((size, size, 4), dtype=np.uint8)
    rgba[..., 0] = np.rint(gray * 230)
    rgba[..., 1] = np.rint(gray * 210)
    rgba[..., 2] = np.rint(gray * 190)
    rgba[..., 3] = 255
    return rgba


def intensity_step(texture, output_dir):
    print("\nStep 1: Intensity map and box blur...")
    intensity = IntensityMap.build(texture)
    blurred = BoxBlur.blur(intensity, 4, tileable=True)
    save_image(intensity.to_image(), os.path.join(output_dir, "intensity.png"))
    save_image(blurred.to_image(), os.path.join(output_dir, "intensity_blurred.png"))
    print(f"  {intensity!r}, std before/after blur: "
          f"{intensity.values.std():.3f} / {blurred.values.std():.3f}")


def normal_step(texture, output_dir):
    print("\nStep 2: Normal maps...")
    generator = NormalMapGenerator()
    plain, raw = generator.calculate_normalmap(texture, kernel=Kernel.SOBEL, strength=2.0)
    detailed, _ = generator.calculate_normalmap(
        texture, kernel=Kernel.SOBEL, strength=2.0,
        keep_large_detail=True, large_detail_scale=25, large_detail_height=1.0
    )
    save_image(plain, os.path.join(output_dir, "normal_plain.png"))
    save_image(detailed, os.path.join(output_dir, "normal_large_detail.png"))
    return detailed, raw


def ssao_step(normal_map, raw, output_dir):
    print("\nStep 3: Ambient occlusion...")
    ao = SsaoGenerator().calculate_ssaomap(normal_map, raw, size=0.05, samples=32)
    save_image(ao, os.path.join(output_dir, "ssao.png"))
    print(f"  mean occlusion: {1.0 - ao[..., 0].mean() / 255.0:.3f}")


def processor_step(texture, output_dir):
    print("\nStep 4: Full map set with the processor...")
    settings = ProcessorSettings.from_dict({
        'spec': {'contrast': 0.5},
        'displace': {'blur': True, 'blur_radius': 2},
    })
    map_set = MapProcessor(settings).process(texture)
    for map_type, image in map_set.items():
        save_image(image, os.path.join(output_dir, f"processor_{map_type}.png"))
        print(f"  {elapsed_time_message(map_set.timings_ms[map_type], map_type)}")


def batch_step(output_dir):
    print("\nStep 5: Batch processing...")
    sources = []
    for index, size in enumerate((128, 192)):
        sources.append(save_image(create_texture(size), os.path.join(output_dir, "batch_in", f"stones_{index}.png")))

    queue = BatchQueue()
    queue.add(sources)
    for result in queue.run(os.path.join(output_dir, "batch_out"), ['normal', 'spec']):
        status = "ok" if result.ok else result.error
        print(f"  {result.source.name}: {status} ({len(result.written)} maps)")


def main():
    output_dir = "texmaps_demo_output"
    os.makedirs(output_dir, exist_ok=True)

    texture = create_texture()
    save_image(texture, os.path.join(output_dir, "texture.png"))

    intensity_step(texture, output_dir)
    normal_map, raw = normal_step(texture, output_dir)
    ssao_step(normal_map, raw, output_dir)
    processor_step(texture, output_dir)
    batch_step(output_dir)

    print(f"\nDemo complete. Output written to {os.path.abspath(output_dir)}")


if __name__ == "__main__":
    main()
