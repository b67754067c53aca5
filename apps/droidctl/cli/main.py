import sys

from shared.errors import DeviceCommandError
from droidctl.cli.handlers import main as run_main


def main(argv=None):
    try:
        return run_main(argv)
    except DeviceCommandError as exc:
        print("error:", exc, file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
