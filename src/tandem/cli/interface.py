"""CLI UI related functions"""

import datetime
import logging
import sys
from traceback import format_exception

import colorful as cf
from texttable import Texttable

TICK = "✔"
CROSS = "✘"

UI_COLORS = {
    # --
    "teal": "#027777",
    "grey": "#777777",
    "red": "#991010",
}


# Flags that modify interface displays
QUIET = False


def init(args):
    """Initialise the UI, including logging"""

    if args["--vverbose"]:
        level = "DEBUG"
    elif args["--verbose"]:
        level = "INFO"
    else:
        level = None

    global QUIET
    QUIET = args["--quiet"]

    root_logger = logging.getLogger("tandem")

    if not args["--no-colours"]:
        import coloredlogs

        cf.use_true_colors()
        cf.use_palette(UI_COLORS)
        if level:
            coloredlogs.install(
                fmt="[%(asctime)s.%(msecs)03d] %(name)-25s %(message)s",
                datefmt="%H:%M:%S",
                level=level,
                logger=root_logger,
            )
    else:
        cf.disable()
        if level:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("%(name)-25s %(message)s"))
            root_logger.addHandler(handler)
            root_logger.setLevel(level)


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


## graceful exits


def exit_problem(problem: str, suggested_fix: str):
    """Exit because of a user-correctable problem"""
    print("\n" + str(bad(f"{CROSS} {problem}")))
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

    print(dim("If this persists, please report it along with the output above.\n"))
    sys.exit(1)


## Tables


def print_functions(functions):
    """Print installed built-ins and their docs"""
    for fn in functions:
        arity = "any" if fn.args is None else str(fn.args)
        kind = "async" if fn.is_async else "sync"
        print(str(neutral(fn.path)) + " " + str(dim(f"(args: {arity}, {kind})")))
        for line in fn.docs.splitlines():
            print("    " + line)
        print()


def print_completions(logs):
    """Print probe logs, relative to the first one"""
    if not logs:
        return

    table = Texttable(max_width=100)
    alignment = ["r", "r", "l"]
    table.set_cols_align(alignment)
    table.set_header_align(alignment)
    table.header(["#", "Time", ""])
    table.set_deco(Texttable.HEADER)
    start = datetime.datetime.fromisoformat(logs[0].time)
    for idx, item in enumerate(logs):
        offset = datetime.datetime.fromisoformat(item.time) - start
        table.add_row([idx, "+" + str(offset), item.text.strip()])

    print("\n" + table.draw() + "\n")
