#!/usr/bin/env python3
"""图像变体生成演示脚本。

在 examples/ 下生成几张合成图片，然后按 conf.yaml 的预设批量生成变体。
"""

from pathlib import Path

from PIL import Image, ImageDraw

from py_image_variants import VariantGenerator
from py_image_variants.utils import setup_logging


EXAMPLES_DIR = Path(__file__).parent


def create_sample_images(input_dir: Path) -> None:
    """创建演示用的图片"""
    input_dir.mkdir(parents=True, exist_ok=True)

    for name, size in [("landscape.jpg", (1600, 900)), ("portrait.png", (800, 1200))]:
        path = input_dir / name
        if path.exists():
            continue

        img = Image.new("RGB", size, color="white")
        draw = ImageDraw.Draw(img)
        width, height = size
        for i in range(40):
            x, y = (i * 53) % width, (i * 37) % height
            color = (i * 5 % 256, i * 7 % 256, i * 11 % 256)
            draw.rectangle([x, y, x + width // 8, y + height // 8], fill=color)
        img.save(path)
        print(f"  - 创建 {path.name} {width}x{height}")


def main():
    """主函数"""
    print("🖼️  图像变体生成演示")
    print("=" * 50)

    setup_logging("WARNING")
    create_sample_images(EXAMPLES_DIR / "in")

    generator = VariantGenerator.from_file(EXAMPLES_DIR / "conf.yaml")
    for preset in generator.run_config.presets:
        print(f"  📐 {preset.describe()}")

    report = generator.generate()
    for result in sorted(report.results, key=lambda r: r.output_path.name):
        print(f"  {'✅' if result.success else '❌'} {result.get_summary()}")

    print(f"\n{report.get_summary()}")


if __name__ == "__main__":
    main()
