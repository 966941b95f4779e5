"""Tandem.

Usage:
  tandem [options] info
  tandem [options] join [--list] [--fail=INDEX] [--json] DELAY...
  tandem --version
  tandem -h | --help

Commands:
  info     Show the installed built-in functions.
  join     Join one future per DELAY with std::future::join. Future N sleeps
           for DELAY seconds and then resolves to N.

Options:
  --version       Show version.
  -h, --help      Show this screen.
  -q, --quiet     Be quiet.
  -v, --verbose   Be verbose.
  -V, --vverbose  Be very verbose.
  --no-colours    Disable colours in CLI output.

  --config=CONFIG  Config file to use  [default: tandem.toml]

  -l, --list      Join a list of futures instead of a tuple.
  --fail=INDEX    Make future INDEX fail instead of resolving.
  -j, --json      Print the result as json.
"""

import asyncio
import json
import logging
import sys
import time
from functools import wraps
from pathlib import Path

from docopt import docopt

from .. import __version__, config
from ..exceptions import UnexpectedError, UserResolvableError
from ..machine import Context, Vm
from ..machine.future import TdFuture
from ..machine.probe import Probe
from ..machine.types import TdList, TdTuple, to_py_type
from . import interface as ui
from .interface import TICK, dim, exit_bug, exit_problem, good, init, neutral

LOG = logging.getLogger(__name__)

JOIN = "std::future::join"


class SimulatedFailure(UserResolvableError):
    """Future failed"""


def timed(fn):
    """Time execution of fn and print it"""

    @wraps(fn)
    def _wrapped(args, **kwargs):
        start = time.time()
        fn(args, **kwargs)
        end = time.time()
        if not args["--quiet"]:
            sys.stderr.write(str(dim(f"\n-- {end - start:.2f}s\n")))

    return _wrapped


def need_cfg(fn):
    """Exec fn with config, falling back to the defaults if there's no file"""

    @wraps(fn)
    def _wrapped(args):
        if Path(args["--config"]).exists():
            cfg = config.load(args)
        else:
            LOG.info("No %s, using the default configuration", args["--config"])
            cfg = config.default_config()
        return fn(args, cfg=cfg)

    return _wrapped


def make_vm(cfg: config.Config) -> Vm:
    ctx = Context.with_modules(cfg.runtime.modules)
    return Vm(ctx, stack_limit=cfg.runtime.stack_limit, probe=cfg.runtime.probe)


def parse_delays(values) -> list:
    delays = []
    for value in values:
        try:
            delay = float(value)
        except ValueError:
            raise UserResolvableError(f"Bad delay: {value}", "Delays are seconds, e.g. 0.5")
        if delay < 0:
            raise UserResolvableError(f"Bad delay: {value}", "Delays can't be negative")
        delays.append(delay)
    return delays


async def delayed(probe: Probe, index: int, delay: float, fail: bool) -> int:
    """Sleep, then resolve to index (or fail)"""
    await asyncio.sleep(delay)
    if fail:
        probe.log(f"future {index} failed after {delay}s")
        raise SimulatedFailure(f"future {index} failed", "Drop --fail to let it resolve.")
    probe.log(f"future {index} resolved after {delay}s")
    return index


@need_cfg
def _info(args, cfg):
    vm = make_vm(cfg)
    ui.info(neutral(f"\nTandem {__version__}"))
    ui.info(dim(f"Config: {cfg.config_file}, stack limit {cfg.runtime.stack_limit}\n"))
    ui.print_functions(vm.context.functions.values())


@need_cfg
def _join(args, cfg):
    delays = parse_delays(args["DELAY"])
    fail = None
    if args["--fail"] is not None:
        try:
            fail = int(args["--fail"])
        except ValueError:
            raise UserResolvableError(f"Bad --fail index: {args['--fail']}", "")
        if not 0 <= fail < len(delays):
            raise UserResolvableError(
                f"--fail index {fail} is out of range",
                f"There are {len(delays)} futures (0 to {len(delays) - 1}).",
            )

    vm = make_vm(cfg)
    futures = [
        TdFuture(delayed(vm.probe, idx, delay, idx == fail))
        for idx, delay in enumerate(delays)
    ]
    collection = TdList(futures) if args["--list"] else TdTuple(futures)
    LOG.info("Joining %d futures", len(futures))

    result = asyncio.run(vm.async_call(JOIN, collection))

    if args["--json"]:
        print(json.dumps(to_py_type(result)))
    else:
        ui.print_completions(vm.probe.logs)
        print(str(good(TICK)) + " " + str(to_py_type(result)))


@timed
def dispatch(args):
    if args["info"]:
        _info(args)
    elif args["join"]:
        _join(args)
    else:
        raise UnexpectedError(f"No command in {args}")


def main():
    args = docopt(__doc__, version=__version__)
    init(args)
    LOG.debug("CLI args: %s", args)

    try:
        dispatch(args)
    except UserResolvableError as exc:
        exit_problem(exc.msg, exc.suggested_fix)
    except UnexpectedError as exc:
        exit_bug(str(exc))


if __name__ == "__main__":
    main()
