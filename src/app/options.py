"""Command line options of the demo shell.

Flags use a single dash like the rest of the engine tools:

    py3d-demo -nogui -updatefps 500 -logs gui:debug,audio:info audio.position
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import List, Optional

from config import EXEC_NAME, PROG_NAME, UPDATE_FPS_MS, VMAJOR, VMINOR


@dataclass
class Options:
    nogui: bool = False
    hidefps: bool = False
    updatefps: int = UPDATE_FPS_MS
    logs: str = ""
    stats: bool = False
    renderstats: bool = False
    demo: Optional[str] = None


def _non_negative(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog=EXEC_NAME,
        usage=f"{EXEC_NAME} [options] [<demo>]",
        description=f"{PROG_NAME} v{VMAJOR}.{VMINOR}",
        add_help=False,
    )
    ap.add_argument("-h", "-help", action="help", help="Show this help and exit")
    ap.add_argument("-nogui", action="store_true", help="Do not show the GUI, only the specified demo")
    ap.add_argument("-hidefps", action="store_true", help="Do not show calculated FPS in the GUI")
    ap.add_argument(
        "-updatefps",
        type=_non_negative,
        default=UPDATE_FPS_MS,
        help="Time interval in milliseconds to update the FPS in the GUI",
    )
    ap.add_argument("-logs", default="", help="Set log levels for packages. Ex: gui:debug,audio:info")
    ap.add_argument("-stats", action="store_true", help="Shows statistics control panel in the GUI")
    ap.add_argument(
        "-renderstats", action="store_true", help="Shows gui renderer statistics in the console"
    )
    ap.add_argument("demo", nargs="?", default=None, help="Name of the demo to start with")
    return ap


def parse_options(argv: Optional[List[str]] = None) -> Options:
    ns = build_parser().parse_args(argv)
    return Options(
        nogui=ns.nogui,
        hidefps=ns.hidefps,
        updatefps=ns.updatefps,
        logs=ns.logs,
        stats=ns.stats,
        renderstats=ns.renderstats,
        demo=ns.demo,
    )


def usage() -> None:
    """Print the program usage to stderr and exit with status 2."""
    sys.stderr.write(f"{PROG_NAME} v{VMAJOR}.{VMINOR}\n")
    sys.stderr.write(f"usage: {EXEC_NAME} [options] [<demo>]\n")
    ap = build_parser()
    ap.description = None
    help_text = ap.format_help()
    # Skip argparse's own usage line, keep the option list
    _, _, options = help_text.partition("\n\n")
    sys.stderr.write(options)
    raise SystemExit(2)
