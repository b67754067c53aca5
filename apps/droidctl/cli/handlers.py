import argparse
import json
import logging
import sys
from pathlib import Path

from shared.errors import AdbError, DeviceCommandError
from ..settings import load_settings
from ..tools import REGISTRY, ToolArgumentsError, ToolSessions, UnknownToolError


def parse_arg_pairs(pairs):
    arguments = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError("expected key=value, got {!r}".format(pair))
        try:
            arguments[key] = json.loads(value)
        except json.JSONDecodeError:
            arguments[key] = value
    return arguments


def build_parser():
    parser = argparse.ArgumentParser(description="Android device automation over adb")
    parser.add_argument("--config", default=None, help="Path to config.json")
    parser.add_argument("--adb", dest="adb_path", default=None, help="Path to adb")
    parser.add_argument("--device", default=None, help="ADB device id")
    parser.add_argument(
        "--log-level", default=None, help="Logging level (default: env or INFO)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("tools", help="List available tools")
    subparsers.add_parser("devices", help="List attached adb devices")

    call_parser = subparsers.add_parser("call", help="Run one tool and print its result")
    call_parser.add_argument("name", help="Tool name (see `tools`)")
    call_parser.add_argument(
        "--json",
        dest="json_args",
        default=None,
        help="Tool arguments as a JSON object",
    )
    call_parser.add_argument(
        "--arg",
        dest="arg_pairs",
        action="append",
        default=None,
        help="Tool argument as key=value (repeatable; values parsed as JSON when possible)",
    )
    call_parser.add_argument(
        "--output", default=None, help="Write the JSON result to a file"
    )
    return parser


def _print_json(data, output=None):
    output_text = json.dumps(data, indent=2, ensure_ascii=False)
    if output:
        Path(output).write_text(output_text, encoding="utf-8")
    print(output_text)


def main(argv=None, host_factory=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except FileNotFoundError as exc:
        raise AdbError(str(exc)) from exc
    if args.adb_path:
        settings.adb_path = args.adb_path
    if args.device:
        settings.device_id = args.device
    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "tools":
        for tool in REGISTRY.tools():
            print("{:<26} {}".format(tool.name, tool.description))
        return 0

    sessions = ToolSessions(settings, host_factory=host_factory)

    if args.command == "devices":
        _print_json(sessions.list_devices())
        return 0

    if args.command == "call":
        try:
            arguments = json.loads(args.json_args) if args.json_args else {}
            if not isinstance(arguments, dict):
                raise ValueError("--json must be a JSON object")
            arguments.update(parse_arg_pairs(args.arg_pairs))
        except ValueError as exc:
            print("error:", exc, file=sys.stderr)
            return 2
        try:
            REGISTRY.validate(args.name, arguments)
        except (UnknownToolError, ToolArgumentsError) as exc:
            print("error:", exc, file=sys.stderr)
            return 2
        context = sessions.get()
        try:
            result = REGISTRY.call(context, args.name, arguments)
        except ValueError as exc:
            print("error:", exc, file=sys.stderr)
            return 2
        _print_json(result, args.output)
        return 0

    raise DeviceCommandError("unknown command")
