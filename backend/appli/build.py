"""Build descriptor and developer tasks for the `my:appli` module.

Declares the module identity and how the packaged application is
launched, and provides the developer tasks:

    appli-build open   launch the app, wait until it answers, open a browser
    appli-build run    launch the app in the foreground
    appli-build info   print module id and version

`python -m appli.build <task>` works the same way.
"""

from __future__ import annotations

import argparse
import json
import logging
import subprocess
import sys
import webbrowser
from typing import Sequence
from urllib.parse import urlsplit

from .utils.readiness import ReadinessTimeoutError, check_until_ok

MODULE_ID = "my:appli"
VERSION = "0.0.1"
URL = "http://localhost:8080"
READY_TIMEOUT_MS = 20000
READY_INTERVAL_MS = 5000

logger = logging.getLogger("appli.build")


class BrowserLaunchError(RuntimeError):
    """Raised when no browser could be opened on this host."""


def info() -> dict:
    return {"module_id": MODULE_ID, "version": VERSION}


def run_command(args: Sequence[str] = ()) -> list:
    """Command line that launches the packaged application."""
    return [sys.executable, "-m", "appli", *args]


def start_app(args: Sequence[str] = ()) -> subprocess.Popen:
    """Start the packaged application without waiting for it."""
    cmd = run_command(args)
    logger.info("starting %s", " ".join(cmd))
    return subprocess.Popen(cmd)


def open_browser(url: str) -> None:
    try:
        opened = webbrowser.open(url, new=2)
    except webbrowser.Error as exc:
        raise BrowserLaunchError(f"cannot open a browser on {url}: {exc}") from exc
    if not opened:
        raise BrowserLaunchError(f"no browser available to open {url}")


def _stop(proc: subprocess.Popen) -> None:
    if proc.poll() is not None:
        return
    proc.terminate()
    try:
        proc.wait(timeout=10)
    except subprocess.TimeoutExpired:
        proc.kill()
        proc.wait()


def port_args(url: str) -> list:
    """`--port` arguments that make the app listen where `url` points."""
    parts = urlsplit(url)
    port = parts.port or (443 if parts.scheme == "https" else 80)
    return ["--port", str(port)]


def open_app(
    url: str = URL,
    timeout_ms: int = READY_TIMEOUT_MS,
    interval_ms: int = READY_INTERVAL_MS,
    args: Sequence[str] = (),
) -> int:
    """Launch application and wait it is ready prior opening a browser tab pointing on it.

    The app is started on the port of `url`. Blocks until the application
    process exits and returns its exit code. If the app never becomes
    ready or the browser cannot be launched, the process is stopped and
    the error propagates.
    """
    proc = start_app([*port_args(url), *args])
    try:
        check_until_ok(url, timeout_ms, interval_ms)
        open_browser(url)
    except BaseException:
        _stop(proc)
        raise
    logger.info("%s opened in browser; waiting for application to exit", url)
    return proc.wait()


# task name
open = open_app


def run(args: Sequence[str] = ()) -> int:
    """Launch application in the foreground and wait for it to exit."""
    proc = start_app(args)
    try:
        return proc.wait()
    except KeyboardInterrupt:
        _stop(proc)
        return proc.returncode


TASKS = {
    "open": "Launch application and wait it is ready prior opening a browser tab pointing on it.",
    "run": "Launch application in the foreground.",
    "info": "Print module id and version.",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="appli-build", description=f"Tasks for {MODULE_ID} {VERSION}.")
    sub = parser.add_subparsers(dest="task", required=True, metavar="task")
    for name, doc in TASKS.items():
        sub.add_parser(name, help=doc, description=doc)
    return parser


def main(argv=None) -> int:
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)
    if args.task == "info":
        print(json.dumps(info()))
        return 0
    try:
        if args.task == "open":
            return open_app()
        return run()
    except (ReadinessTimeoutError, BrowserLaunchError) as exc:
        logger.error("%s failed: %s", args.task, exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
