"""CLI UI related functions"""

import logging
import sys
from traceback import format_exception

import colorful as cf
from texttable import Texttable

TICK = "✔"

UI_COLORS = {
    # --
    "teal": "#027777",
    "grey": "#777777",
    "magenta": "#9510ED",
    "red": "#991010",
}

LOG_FORMAT = "[%(asctime)s.%(msecs)03d] %(name)-25s %(message)s"

# Flags that modify interface displays
QUIET = False
VERBOSE = False


def init(args):
    """Initialise the UI, including logging"""

    if args["--vverbose"]:
        level = "DEBUG"
    elif args["--verbose"]:
        level = "INFO"
    else:
        level = None

    global QUIET
    global VERBOSE
    QUIET = args["--quiet"]
    VERBOSE = args["--verbose"] or args["--vverbose"]

    root_logger = logging.getLogger("slsgraph")

    # The colour helpers need the palette even when colours are disabled
    cf.use_palette(UI_COLORS)
    cf.update_palette(UI_COLORS)

    if not args["--no-colours"]:
        import coloredlogs

        cf.use_true_colors()
        if level:
            coloredlogs.install(
                fmt=LOG_FORMAT, datefmt="%H:%M:%S", level=level, logger=root_logger,
            )
    else:
        cf.disable()
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        root_logger.addHandler(handler)
        # Errors (e.g. skipped resources) are always shown
        root_logger.setLevel(level or "WARNING")


## String colour modifiers


def dim(string):
    return cf.grey(string)


def good(string):
    return cf.bold_teal(string)


def bad(string):
    return cf.bold_red(string)


def neutral(string):
    return cf.bold(string)


## And printing messages


def info(msg):
    if not QUIET:
        print(msg)


def table(header: list, rows: list) -> str:
    t = Texttable(max_width=120)
    t.set_deco(Texttable.HEADER)
    t.add_rows([header] + rows)
    return t.draw()


## graceful exits


def exit_problem(problem: str, suggested_fix: str):
    """Exit because of a user-correctable problem"""
    print("\n" + str(bad(problem)))
    if suggested_fix:
        print(suggested_fix)
    if not suggested_fix.endswith("\n"):
        print("")
    sys.exit(1)


def exit_bug(msg):
    """Something broke unexpectedly while running"""
    print(bad("\nUnexpected error.\n" + str(msg)))

    exc_type, exc_value, exc_traceback = sys.exc_info()
    if exc_type:
        print("\n" + "".join(format_exception(exc_type, exc_value, exc_traceback)))

    sys.exit(1)
