from __future__ import annotations

import argparse
import importlib.metadata
import traceback

from webapp_desktop.core.errors import MonitorSetupError


def main() -> int:
    parser = argparse.ArgumentParser(
        prog="webapp-desktop",
        description="Register browser web apps as desktop applications",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=importlib.metadata.version("desktop-webapp-integration"),
    )

    sub = parser.add_subparsers(dest="command", required=True)

    from webapp_desktop.cli import register_subcommands, run_command

    register_subcommands(sub)

    args = parser.parse_args()

    from webapp_desktop.desktop.logging_setup import configure_logging

    configure_logging("DEBUG" if getattr(args, "debug", False) else None)

    try:
        return run_command(args)
    except MonitorSetupError as exc:
        print(f"error: {exc}")
        return 1
    except OSError as exc:
        if getattr(args, "debug", False):
            traceback.print_exc()
        print(f"error: {exc}")
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
