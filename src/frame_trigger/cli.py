"""
Frame Trigger CLI
Main entry point for running the watcher.

Commands:
  (default)       Watch the camera and fire actions
  --validate      Check configuration and reference images, then exit
  --list-presets  Show built-in detector presets
"""

import argparse
import logging
import signal
import sys
from threading import Event

from . import __version__
from .config import Config, ConfigValidationError, load_config
from .detection import PRESET_REGISTRY, ReferenceImage
from .errors import FrameSourceError, ReferenceLoadError
from .runner import run_watch
from .utils.constants import DEFAULT_CONFIG_FILE, ENV_CAMERA_SOURCE

logger = logging.getLogger(__name__)

# Module-level shutdown signal for SIGTERM/SIGINT handling
_shutdown_signal = Event()


def _handle_shutdown_signal(signum, _frame):
    """Handle SIGTERM/SIGINT by letting the loop finish its current frame."""
    signal_name = "SIGTERM" if signum == signal.SIGTERM else "SIGINT"
    # Note: print is safer than logger in signal handlers
    print(f"\nReceived {signal_name}, shutting down...")
    _shutdown_signal.set()


def _setup_signal_handlers():
    """Register signal handlers for graceful shutdown."""
    signal.signal(signal.SIGTERM, _handle_shutdown_signal)
    signal.signal(signal.SIGINT, _handle_shutdown_signal)


def setup_logging(quiet: bool = False, verbose: bool = False) -> None:
    """
    Setup logging configuration.

    Args:
        quiet: If True, only show warnings and errors
        verbose: If True, show debug output (per-frame distances)
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    # Custom formatter with shorter module names
    class ShortNameFormatter(logging.Formatter):
        def format(self, record):
            record.name = record.name.replace("frame_trigger.", "ft.")
            return super().format(record)

    handler = logging.StreamHandler()
    handler.setFormatter(
        ShortNameFormatter(
            fmt="%(asctime)s %(name)s %(levelname)s %(message)s", datefmt="%H:%M:%S"
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(level)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="frame-trigger",
        description="Frame Trigger - fire actions when something shows up on screen",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  python -m frame_trigger                  # Watch using ./config.yaml
  python -m frame_trigger -c games.yaml    # Use a specific config
  python -m frame_trigger --debug-window   # Show the feed with frame rate
  python -m frame_trigger --validate       # Check config and reference images

Environment Variables:
  {ENV_CAMERA_SOURCE} - Override camera source from config
        """,
    )

    parser.add_argument(
        "-c",
        "--config",
        default=DEFAULT_CONFIG_FILE,
        help=f"Path to config file (default: {DEFAULT_CONFIG_FILE})",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Quiet mode - only show warnings and errors",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Debug output, including per-frame detector distances",
    )
    parser.add_argument(
        "--debug-window",
        action="store_true",
        help="Show the live feed with the frame rate (overrides config)",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate configuration and reference images, then exit",
    )
    parser.add_argument(
        "--list-presets",
        action="store_true",
        help="List built-in detector presets",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser.parse_args(argv)


def print_presets() -> None:
    """Print the registered detector presets."""
    print("Detector presets:")
    for name in sorted(PRESET_REGISTRY):
        preset = PRESET_REGISTRY[name]
        region = preset.spec.region
        print(f"  {name}")
        print(f"    {preset.description}")
        print(
            f"    region=({region.center_x}, {region.center_y}, "
            f"{region.width_frac}x{region.height_frac}) channel={preset.spec.channel} "
            f"cutoff={preset.spec.cutoff} threshold={preset.spec.distance_threshold:g} "
            f"sense={preset.spec.sense.value}"
        )
        print(f"    reference={preset.reference}")


def check_references(config: Config) -> list[str]:
    """
    Try loading every enabled event's reference image.

    Returns:
        Error messages, empty if all references loaded
    """
    errors = []
    for event in config.enabled_events:
        spec = event.detector_spec()
        try:
            ReferenceImage.from_file(
                config.resolve_path(event.reference_path()), spec.channel, spec.cutoff
            )
        except ReferenceLoadError as e:
            errors.append(f"{event.name}: {e}")
    return errors


def print_config_summary(config: Config) -> None:
    """Print a short summary of what will be watched."""
    print(f"Camera: {config.camera.source}")
    print(
        f"Dispatch: queue={config.dispatch.queue_size} "
        f"when_full={config.dispatch.when_full}"
    )
    print(f"Events: {len(config.enabled_events)} enabled of {len(config.events)}")
    for event in config.events:
        detector = event.detector if isinstance(event.detector, str) else "inline"
        action = event.action.describe() if event.action else "no action"
        state = "" if event.enabled else " (disabled)"
        print(
            f"  - {event.name}{state}: {detector}, "
            f"cooldown {event.cooldown_seconds:g}s -> {action}"
        )


def run_validate(config_path: str) -> int:
    """Run validation mode. Returns the exit status."""
    try:
        config = load_config(config_path)
    except ConfigValidationError as e:
        _report_config_error(e)
        return 1

    print_config_summary(config)
    errors = check_references(config)
    if errors:
        print("\nReference image errors:")
        for error in errors:
            print(f"  - {error}")
        return 1

    print("\nConfiguration valid")
    return 0


def _report_config_error(error: ConfigValidationError) -> None:
    logger.error(f"Configuration error: {error}")
    for message in error.errors:
        logger.error(f"  - {message}")


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(quiet=args.quiet, verbose=args.verbose)

    if args.list_presets:
        print_presets()
        return

    if args.validate:
        sys.exit(run_validate(args.config))

    try:
        config = load_config(args.config)
    except ConfigValidationError as e:
        _report_config_error(e)
        sys.exit(1)

    if args.debug_window:
        config.debug_window = True

    _setup_signal_handlers()

    try:
        stats = run_watch(config, _shutdown_signal)
    except ReferenceLoadError as e:
        logger.error(f"Startup failed, reference image: {e}")
        sys.exit(1)
    except FrameSourceError as e:
        logger.error(f"Stopped, frame source {config.camera.source}: {e}")
        sys.exit(1)

    logger.info(f"Stopped ({stats.reason})")


if __name__ == "__main__":
    main()
