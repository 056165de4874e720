"""
Example of thumbnailing multiple images
"""

from pathlib import Path
from imagehandle import batch_thumbnails


def main():
    # Find all images in a directory
    photo_dir = Path("./photos")
    thumb_dir = Path("./thumbs")

    if not photo_dir.exists():
        print(f"Error: Directory {photo_dir} not found")
        print("Please create a 'photos' directory with some images")
        return

    images = sorted(p for p in photo_dir.iterdir() if p.is_file())

    if not images:
        print(f"No files found in {photo_dir}")
        return

    thumb_dir.mkdir(exist_ok=True)

    print(f"Found {len(images)} files")
    print("=" * 60)

    # Progress callback
    def on_progress(current, total, result):
        if result.success:
            print(f"[{current}/{total}] ✓ {result.source.name} -> {result.width}x{result.height}")
        else:
            print(f"[{current}/{total}] ✗ {result.source.name}: {result.error}")

    # Thumbnail everything as JPEG, at most 256px on either side
    results = batch_thumbnails(images, thumb_dir, 256, image_format="jpeg", progress_callback=on_progress)

    # Summary
    print("=" * 60)
    successful = [r for r in results if r.success]
    failed = [r for r in results if not r.success]

    print(f"\nResults:")
    print(f"  Successful: {len(successful)}")
    print(f"  Failed:     {len(failed)}")
    print(f"  Output:     {thumb_dir.resolve()}")


if __name__ == "__main__":
    main()
