"""
Command-Line Interface for the Camera Metadata Resolution Engine

Provides commands for classifying cameras, checking uploads, inspecting
photos and listing the archive.
"""

import os
import sys
import argparse
import logging

import yaml

from analyzers import PhotoListing, UploadGate
from catalogs import CatalogIndex, config_section, load_config
from models import PhotoRecord
from reporters import TextReporter
from resolvers import (
    ClassicCameraDetector,
    ReleaseYearResolver,
    SensorClassifier,
    get_canonical_models,
    tokenize_model,
)

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

EXIT_BLOCKED = 2


def cmd_classify(args, index):
    """Classify a camera's sensor, release year and classic status."""
    sensor = SensorClassifier(index).classify(make=args.make, model=args.model, lens=args.lens)
    release_year = ReleaseYearResolver(index).resolve_release_year(make=args.make, model=args.model)
    is_classic = ClassicCameraDetector(index).is_classic(make=args.make, model=args.model)

    logger.info(f"Sensor: {sensor.value}")
    logger.info(f"Release Year: {release_year if release_year is not None else 'Unknown'}")
    logger.info(f"Classic: {'Yes' if is_classic else 'No'}")
    return 0


def cmd_check_upload(args, index):
    """Run a camera through the upload gate."""
    gate = UploadGate.from_config(args.config, index=index)
    reporter = TextReporter.from_config(args.config)

    verdict = gate.evaluate(make=args.make, model=args.model, lens=args.lens)
    for line in reporter.format_verdict(verdict).splitlines():
        logger.info(line)

    return EXIT_BLOCKED if verdict.blocked else 0


def cmd_inspect(args, index):
    """Read EXIF from photos and show the sensor of each."""
    from extractors import ExifReader

    reader = ExifReader.from_config(args.config)
    classifier = SensorClassifier(index)
    reporter = TextReporter.from_config(args.config)

    paths = []
    for path in args.paths:
        if os.path.isdir(path):
            paths.extend(reader.find_photos(path))
        else:
            paths.append(path)

    if not paths:
        logger.warning("No photos to inspect")
        return 0

    logger.info(f"Inspecting {len(paths)} photos")
    for path, fields in reader.read_many(paths).items():
        logger.info(f"\n{path}")
        if fields is None:
            logger.warning("  ✗ Could not read EXIF")
            continue
        sensor = classifier.classify(make=fields.make, model=fields.model, lens=fields.lens)
        for line in reporter.format_summary(fields, sensor):
            logger.info(f"  {line}")
    return 0


def _read_photo_records(photos_path):
    with open(photos_path, 'r', encoding='utf-8') as f:
        document = yaml.safe_load(f)

    if isinstance(document, dict):
        document = document.get('photos')
    if not isinstance(document, list):
        raise ValueError(f"{photos_path} must contain a list of photos or a 'photos' list")

    return [PhotoRecord.from_dict(item) for item in document if isinstance(item, dict)]


def cmd_list(args, index):
    """Annotate archived photos with their sensor."""
    listing = PhotoListing(SensorClassifier(index))
    reporter = TextReporter.from_config(args.config)

    records = _read_photo_records(args.photos)
    entries = listing.list_photos(records, ccd_only=args.ccd_only)
    report_text = reporter.format_listing(entries)

    if args.output:
        report_path = reporter.save_report(report_text, args.output)
        logger.info(f"✓ Report saved to: {report_path}")
    else:
        for line in report_text.splitlines():
            logger.info(line)
    return 0


def cmd_catalog(args, index):
    """Show catalog statistics."""
    reporter = TextReporter.from_config(args.config)
    canonical = get_canonical_models(index) if args.canonical else None

    for line in reporter.format_catalog(index, canonical_models=canonical).splitlines():
        logger.info(line)
    return 0


def cmd_tokens(args, index):
    """Split a model name into tokens."""
    logger.info(" ".join(tokenize_model(args.value)))
    return 0


def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description='Camera Metadata Resolution Engine',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  # Classify a camera
  python cli.py classify --make Canon --model "Canon PowerShot G7"

  # Check whether a camera's photos may be uploaded
  python cli.py check-upload --make RICOH --model "RICOH GR III"

  # Inspect photos on disk
  python cli.py inspect /photos/2006/

  # List only CCD photos from an archive file
  python cli.py list photos.yaml --ccd-only

  # Show catalog statistics and canonical classic models
  python cli.py catalog --canonical
        '''
    )

    parser.add_argument('--config', default='config.yaml', help='Path to config file')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    def add_camera_arguments(command_parser):
        command_parser.add_argument('--make', help='EXIF Make')
        command_parser.add_argument('--model', help='EXIF Model')
        command_parser.add_argument('--lens', help='EXIF LensModel')

    # Classify command
    classify_parser = subparsers.add_parser('classify', help='Classify a camera')
    add_camera_arguments(classify_parser)
    classify_parser.set_defaults(func=cmd_classify)

    # Check-upload command
    upload_parser = subparsers.add_parser('check-upload', help='Check a camera against the upload gate')
    add_camera_arguments(upload_parser)
    upload_parser.set_defaults(func=cmd_check_upload)

    # Inspect command
    inspect_parser = subparsers.add_parser('inspect', help='Read EXIF from photos and classify them')
    inspect_parser.add_argument('paths', nargs='+', help='Photo files or folders')
    inspect_parser.set_defaults(func=cmd_inspect)

    # List command
    list_parser = subparsers.add_parser('list', help='Annotate archived photos with their sensor')
    list_parser.add_argument('photos', help='YAML or JSON file with archived photos')
    list_parser.add_argument('--ccd-only', action='store_true', help='Only list CCD photos')
    list_parser.add_argument('--output', help='Save the listing report to this filename')
    list_parser.set_defaults(func=cmd_list)

    # Catalog command
    catalog_parser = subparsers.add_parser('catalog', help='Show catalog statistics')
    catalog_parser.add_argument('--canonical', action='store_true',
                                help='Also list canonical classic model keys')
    catalog_parser.set_defaults(func=cmd_catalog)

    # Tokens command
    tokens_parser = subparsers.add_parser('tokens', help='Split a model name into tokens')
    tokens_parser.add_argument('value', help='Model name')
    tokens_parser.set_defaults(func=cmd_tokens)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        config = load_config(args.config)
        level = config_section(config, 'logging').get('level', 'INFO')
        logging.getLogger().setLevel(str(level).upper())

        # Catalogs are built once, before any command runs
        index = CatalogIndex.from_config(args.config)
        return args.func(args, index)
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        return 1


if __name__ == '__main__':
    sys.exit(main())
