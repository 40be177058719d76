"""
Command-line entry point for the MSD347 printer driver.

Usage:
    msd347 status
    msd347 print ticket.png --mode double-width --justify center
    msd347 cut
    msd347 buttons off

Pass --mock to run against the in-memory transport.
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from PIL import Image

from msd347.config.settings import get_settings
from msd347.errors import DeviceError, PrinterError
from msd347.printer.commands import Justification, PrintMode
from msd347.printer.session import PrinterSession, connect

logger = logging.getLogger(__name__)

MODE_CHOICES = {
    "normal": PrintMode.NORMAL,
    "double-height": PrintMode.DOUBLE_HEIGHT,
    "double-width": PrintMode.DOUBLE_WIDTH,
    "quadruple": PrintMode.QUADRUPLE,
}

JUSTIFY_CHOICES = {
    "left": Justification.LEFT,
    "center": Justification.CENTER,
    "right": Justification.RIGHT,
}


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def cmd_status(session: PrinterSession, args: argparse.Namespace) -> int:
    """Report error and ticket status."""
    exit_code = 0
    try:
        session.query_error()
        print("OK")
    except DeviceError as e:
        print(f"Error: {e}")
        exit_code = 1

    ticket = session.get_ticket_info()
    print(f"ticket taken: {'yes' if ticket.ticket_taken else 'no'}")
    return exit_code


def cmd_print(session: PrinterSession, args: argparse.Namespace) -> int:
    """Print an image file."""
    with Image.open(args.path) as img:
        img.load()
        session.initialize()
        session.set_justification(JUSTIFY_CHOICES[args.justify])
        session.print_image(img, MODE_CHOICES[args.mode])
    if not args.no_cut:
        session.full_cut()
    return 0


def cmd_cut(session: PrinterSession, args: argparse.Namespace) -> int:
    session.initialize()
    session.full_cut()
    return 0


def cmd_buttons(session: PrinterSession, args: argparse.Namespace) -> int:
    session.set_buttons_enabled(args.state == "on")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="msd347",
        description="MSD347 ticket printer tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--mock', action='store_true', help='Use the in-memory transport')
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    p_status = subparsers.add_parser('status', help='Query error and ticket status')
    p_status.set_defaults(func=cmd_status)

    p_print = subparsers.add_parser('print', help='Print an image file')
    p_print.add_argument('path', help='Path to image file')
    p_print.add_argument('--mode', choices=list(MODE_CHOICES), default='normal',
                         help='Print mode (default: normal)')
    p_print.add_argument('--justify', choices=list(JUSTIFY_CHOICES), default='left',
                         help='Justification (default: left)')
    p_print.add_argument('--no-cut', action='store_true', help='Do not cut after printing')
    p_print.set_defaults(func=cmd_print)

    p_cut = subparsers.add_parser('cut', help='Full cut')
    p_cut.set_defaults(func=cmd_cut)

    p_buttons = subparsers.add_parser('buttons', help='Enable or disable panel buttons')
    p_buttons.add_argument('state', choices=['on', 'off'])
    p_buttons.set_defaults(func=cmd_buttons)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(args.debug)

    settings = get_settings()
    if args.mock:
        settings = settings.model_copy(update={"mock": True})

    try:
        with connect(settings) as session:
            return args.func(session, args)
    except PrinterError as e:
        logger.error(f"{args.command} failed: {e}")
        return 2
    except OSError as e:
        # Missing or unreadable image file
        logger.error(f"{args.command} failed: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
