"""
Simple example of using imagehandle to thumbnail an image
"""

from pathlib import Path
from imagehandle import ImageHandle, ImageError


def main():
    # Replace with actual image path
    image_path = Path("example.jpg")

    if not image_path.exists():
        print(f"Error: {image_path} not found")
        print("Please provide a valid image path")
        return

    print(f"Thumbnailing {image_path}...")
    print("-" * 60)

    try:
        with ImageHandle.load(image_path) as original:
            print(f"Format:         {original.format_tag.value}")
            print(f"Dimensions:     {original.width}x{original.height}px")

            # Upright first, then shrink to fit 400x400
            with original.apply_exif_orientation() as upright, upright.thumbnail(400) as thumb:
                output_path = image_path.with_name(f"{image_path.stem}_thumb{image_path.suffix}")
                thumb.save(output_path)

                print("✓ Success!\n")
                print(f"Thumbnail:      {thumb.width}x{thumb.height}px")
                print(f"Saved to:       {output_path}")

                # Or serve it as a CGI response (writes to stdout and exits):
                # thumb.display()

    except ImageError as e:
        print(f"✗ Failed: {e}")


if __name__ == "__main__":
    main()
