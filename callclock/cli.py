#cli.py
import sys
import logging
import argparse
import importlib.util
from pathlib import Path
from types import ModuleType
from typing import List, Optional

from callclock import __version__
from callclock.hook_loader import create_profiler, load_config
from callclock.report import format_report, write_report

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="callclock",
        description=(
            "Load a Python SCRIPT, instrument its functions, call FUNCTION and "
            "print timing statistics for every function found"
        ),
    )
    parser.add_argument(
        "-v", "--version",
        action="version", version=__version__,
        help="Show the tool version"
    )
    parser.add_argument(
        "-c", "--config",
        default="callclock.json",
        help="Path to callclock.json (denylist, excluded modules, report path)"
    )
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Also write the report as JSON to this path"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    parser.add_argument("script", help="Path to the Python script to profile")
    parser.add_argument("function", help="Name of the function in SCRIPT to call")
    parser.add_argument(
        "args",
        nargs=argparse.REMAINDER,
        help="String arguments passed to FUNCTION"
    )
    return parser.parse_args(argv)


def load_script(path: str) -> ModuleType:
    name = Path(path).stem
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot load {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(name, None)
        raise
    return module


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    config = load_config(args.config)
    output = args.output or config.get("report")

    try:
        module = load_script(args.script)
    except Exception:
        logger.exception("unable to load script %s", args.script)
        return 1

    try:
        profiler = create_profiler(config)
        profiler.start(module)
        try:
            function = getattr(module, args.function, None)
            if not callable(function):
                logger.error("no function %r in %s", args.function, args.script)
                return 1
            try:
                function(*args.args)
            except Exception:
                logger.exception("%s raised", args.function)
                return 1
        finally:
            profiler.stop()
    finally:
        sys.modules.pop(module.__name__, None)

    report = profiler.generate_report()
    print(format_report(report))
    if output:
        write_report(report, output)
        print(f"Report written to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
