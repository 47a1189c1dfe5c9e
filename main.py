import json
from pathlib import Path

import click
from dotenv import load_dotenv

from config import ConfigError, Settings
from exif_utils import extract_from_path
from geolocate import DeviceLocation
from observations import MalerjaktError, ObservationError, build_observation
from utils.logger import setup_logging
from validate.cli import cli as validate_cli
from validate.cli import guess_content_type

# Load environment variables from .env file
load_dotenv()


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Log parse details to stderr')
def cli(verbose: bool):
    """Målerjakt moth observation tools"""
    try:
        settings = Settings.from_env(load_env_file=False)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()
    setup_logging('DEBUG' if verbose else settings.log_level, settings.environment)


cli.add_command(validate_cli, name='validate')


@cli.command()
@click.argument('image_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--json-output', is_flag=True, help='Output results as JSON')
def exif(image_path: str, json_output: bool):
    """Show GPS coordinates and camera details embedded in a photo."""
    result = extract_from_path(image_path)

    if json_output:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if result.is_empty:
        click.echo(f"No EXIF data found in image: {image_path}")
        return

    click.echo(f"✓ Extracted EXIF data from {image_path}:")
    if result.has_gps:
        click.echo(f"  - Location: {result.latitude:.6f}, {result.longitude:.6f}")
    else:
        click.echo("  - Location: not embedded")
    if result.timestamp:
        click.echo(f"  - Timestamp: {result.timestamp}")
    if result.make or result.model:
        camera = " ".join(part for part in (result.make, result.model) if part)
        click.echo(f"  - Camera: {camera}")


@cli.command()
@click.argument('image_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--comment', default='', help='Comment stored with the observation')
@click.option('--lat', type=float, help='Device latitude, used when the photo has no GPS data')
@click.option('--lon', type=float, help='Device longitude, used when the photo has no GPS data')
@click.option('--accuracy', type=float, help='Device location accuracy in meters')
@click.option('--timestamp', help='Submission time (ISO 8601), defaults to now')
def prepare(image_path: str, comment: str, lat: float, lon: float, accuracy: float, timestamp: str):
    """
    Build the observation record for a photo and print it as JSON.

    The photo's own GPS position wins; --lat/--lon are the fallback.
    """
    if (lat is None) != (lon is None):
        raise click.UsageError("--lat and --lon must be given together")
    if accuracy is not None and lat is None:
        raise click.UsageError("--accuracy requires --lat and --lon")

    device = DeviceLocation(lat, lon, accuracy) if lat is not None else None

    try:
        payload = build_observation(
            Path(image_path).read_bytes(),
            comment=comment,
            timestamp=timestamp,
            device=device,
            device_info={"platform": "cli"},
            content_type=guess_content_type(image_path),
            settings=Settings.from_env(load_env_file=False),
        )
    except ObservationError as e:
        for error in e.errors:
            click.echo(f"Error: {error}", err=True)
        raise click.Abort()
    except MalerjaktError as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()

    record = payload.to_record()
    record["image_filename"] = payload.image_filename
    click.echo(json.dumps(record, indent=2))


if __name__ == '__main__':
    cli()
