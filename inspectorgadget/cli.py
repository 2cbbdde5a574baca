"""
Command line interface for InspectorGadget.
Watches the frontmost macOS application for text changes through the
Accessibility API.
"""

import argparse
import logging
import sys

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--log-level', type=str, default="INFO",
                        help="Logging level (default: INFO)")
    common.add_argument('--pid', type=int, default=None,
                        help="Watch this process instead of the frontmost application")
    common.add_argument('--no-prompt', action='store_true',
                        help="Do not show the accessibility permissions prompt")

    parser = argparse.ArgumentParser(
        prog="inspectorgadget",
        description="Report text changes in the frontmost application's UI",
    )
    subparsers = parser.add_subparsers(dest="command")
    parser.set_defaults(command="watch", log_level="INFO", pid=None, no_prompt=False,
                        interval_ms=500, output_file=None)

    watch = subparsers.add_parser("watch", parents=[common],
                                  help="Report text changes until interrupted")
    watch.add_argument('--interval-ms', type=int, default=500,
                       help="Milliseconds between accessibility walks (default: 500)")
    watch.add_argument('--output-file', type=str, default=None,
                       help="Append change records to this file as JSON lines")

    subparsers.add_parser("dump", parents=[common], help="Print the frontmost UI hierarchy once")
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point for InspectorGadget."""
    args = parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(message)s")

    # PyObjC is only needed here, keep it out of the package import.
    from inspectorgadget.core.engine import InspectorGadget
    from inspectorgadget.core.settings import EngineSettings
    from inspectorgadget.platform.appkit import AccessibilityPlatform
    from inspectorgadget.utils.accessibility import check_accessibility_permissions

    if not check_accessibility_permissions(show_prompt=not args.no_prompt):
        logger.error("Accessibility permissions are required to read other applications' UI")
        return 1

    platform = AccessibilityPlatform(pid=args.pid)

    if args.command == "dump":
        from inspectorgadget.core.hierarchy import dump_hierarchy
        print(dump_hierarchy(platform))
        return 0

    settings = EngineSettings(
        poll_interval_ms=args.interval_ms,
        output_file=args.output_file,
        log_level=level,
    )
    engine = InspectorGadget(platform, settings)
    platform.observe_activations()
    engine.start()
    print("Watching for text changes. Press Ctrl+C to stop.")
    try:
        platform.main_loop.run()
    except KeyboardInterrupt:
        pass
    finally:
        engine.stop()
        print("Watching stopped.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
