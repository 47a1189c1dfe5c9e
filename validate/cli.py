"""CLI for checking observation photos before upload."""

import json
import mimetypes
from pathlib import Path

import click

from config import ConfigError, Settings
from exif_utils import extract

from .image import validate_image_file


def guess_content_type(image_path: str | Path) -> str:
    content_type, _ = mimetypes.guess_type(str(image_path))
    return content_type or "application/octet-stream"


def check_image(image_path: str | Path, settings: Settings) -> dict:
    """Validate one image file and report whether it carries GPS data."""
    try:
        data = Path(image_path).read_bytes()
    except OSError as e:
        return {
            "image": str(image_path),
            "valid": False,
            "errors": [f"Could not read file: {e}"],
            "has_gps": False,
        }

    result = validate_image_file(
        data,
        guess_content_type(image_path),
        max_size_bytes=settings.max_upload_bytes,
        allowed_types=settings.allowed_image_types,
        min_width=settings.min_image_width,
        min_height=settings.min_image_height,
    )
    return {
        "image": str(image_path),
        "valid": result.is_valid,
        "errors": result.errors,
        "has_gps": extract(data).has_gps,
    }


def load_settings() -> Settings:
    try:
        return Settings.from_env()
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()


@click.group()
def cli():
    """Photo checks for Målerjakt submissions."""
    pass


@cli.command()
@click.argument('image_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--json-output', is_flag=True, help='Output results as JSON')
def image(image_path, json_output):
    """Validate a single image."""
    report = check_image(image_path, load_settings())

    if json_output:
        click.echo(json.dumps(report, indent=2))
    elif report['valid']:
        click.echo(f"✅ {image_path} is a valid observation photo")
        if not report['has_gps']:
            click.echo("   ⚠️  No GPS data in photo; device location will be used")
    else:
        click.echo(f"❌ {image_path} cannot be submitted:")
        for error in report['errors']:
            click.echo(f"   - {error}")

    if not report['valid']:
        raise click.Abort()


@cli.command()
@click.argument('directory', type=click.Path(exists=True, file_okay=False))
@click.option('--output', type=click.Path(), help='Output JSON file with results')
@click.option('--extensions', default='jpg,jpeg,png,webp', help='Image file extensions to process')
def batch(directory, output, extensions):
    """Validate every image in a directory."""
    settings = load_settings()

    ext_list = [ext.strip().lower() for ext in extensions.split(',') if ext.strip()]
    image_files = sorted(
        path
        for path in Path(directory).iterdir()
        if path.is_file() and path.suffix.lower().lstrip('.') in ext_list
    )

    click.echo(f"Checking {len(image_files)} images...")

    results = [check_image(image_path, settings) for image_path in image_files]

    valid_count = sum(1 for r in results if r['valid'])
    gps_count = sum(1 for r in results if r['has_gps'])
    click.echo(f"\n✅ {valid_count} of {len(results)} images are valid")
    click.echo(f"   {gps_count} carry GPS coordinates")

    if output:
        with open(output, 'w') as f:
            json.dump(results, f, indent=2)
        click.echo(f"\n💾 Results saved to {output}")
    else:
        click.echo("\nResults:")
        for result in results:
            status = "✅" if result['valid'] else "❌"
            detail = "; ".join(result['errors']) if result['errors'] else ("GPS" if result['has_gps'] else "no GPS")
            click.echo(f"{status} {result['image']}: {detail}")


if __name__ == '__main__':
    cli()
