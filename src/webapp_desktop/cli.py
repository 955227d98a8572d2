from __future__ import annotations

import argparse
import base64
import json
from pathlib import Path

from webapp_desktop.desktop.icons import DATA_URL_PREFIX
from webapp_desktop.desktop.integration import WebappIntegration


def add_global_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--debug",
        dest="debug",
        action="store_true",
        help="Enable verbose debug logs",
    )


def register_subcommands(sub: argparse._SubParsersAction) -> None:
    watch = sub.add_parser("watch", help="Watch launcher directories and fix what the browser writes")
    add_global_args(watch)
    watch.add_argument(
        "--no-stdio",
        dest="use_stdio",
        action="store_false",
        help="Do not exchange icon requests over stdin/stdout",
    )

    install = sub.add_parser("install", help="Install a launcher for a web app")
    add_global_args(install)
    install.add_argument("app_id", help="Browser app id")
    install.add_argument("name", help="Display name")
    install.add_argument("url", help="URL the launcher opens")
    install.add_argument("--description", default="", help="Launcher comment")
    install.add_argument(
        "--icon", default=None, help="PNG file used as the install-time icon"
    )

    uninstall = sub.add_parser("uninstall", help="Remove a web app launcher")
    add_global_args(uninstall)
    uninstall.add_argument("app_id", help="Browser app id")

    set_icon = sub.add_parser("set-icon", help="Store a high-resolution icon for a web app URL")
    add_global_args(set_icon)
    set_icon.add_argument("url", help="URL passed as --app= in the launcher")
    set_icon.add_argument("icon", help="PNG file")

    repair_cmd = sub.add_parser("repair", help="Fix a launcher file with a glued shebang line")
    add_global_args(repair_cmd)
    repair_cmd.add_argument("path", help="Launcher file")

    favorites = sub.add_parser("favorites", help="Print the shell favorites list")
    add_global_args(favorites)

    export = sub.add_parser("export-logs", help="Export application logs for bug reports")
    export.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write logs to file (default: stdout)",
    )


def _png_data_url(path: str) -> str:
    data = Path(path).read_bytes()
    return DATA_URL_PREFIX + base64.b64encode(data).decode("ascii")


def _repair(path: str) -> int:
    from webapp_desktop.desktop.shebang import repair

    target = Path(path)
    result = repair(target.read_text(encoding="utf-8"))
    if result.needs_rewrite:
        target.write_text(result.fixed_text, encoding="utf-8")
    print(json.dumps({"path": str(target), "rewritten": result.needs_rewrite}))
    return 0


def _export_logs(output: str | None) -> int:
    from webapp_desktop.desktop.logging_setup import export_logs

    written = export_logs(output)
    if written is not None:
        print(f"Logs written to {written}")
    return 0


def run_command(args: argparse.Namespace) -> int:
    if args.command == "export-logs":
        return _export_logs(args.output)
    if args.command == "repair":
        return _repair(args.path)

    integration = WebappIntegration()

    if args.command == "watch":
        from webapp_desktop.app import run

        return run(integration, use_stdio=args.use_stdio)
    if args.command == "install":
        icon = _png_data_url(args.icon) if args.icon else ""
        integration.install(args.app_id, args.name, args.description, args.url, icon)
        return 0
    if args.command == "uninstall":
        integration.uninstall(args.app_id)
        return 0
    if args.command == "set-icon":
        saved = integration.set_icon_for_url(args.url, _png_data_url(args.icon))
        for path in saved:
            print(path)
        return 0 if saved else 1
    if args.command == "favorites":
        for name in integration.favorites.list():
            print(name)
        return 0
    raise RuntimeError(f"Unsupported command: {args.command}")
