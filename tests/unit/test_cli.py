import json

import pytest

from droidctl.cli import main
from droidctl.cli.handlers import main as run_main
from droidctl.cli.handlers import parse_arg_pairs


def test_parse_arg_pairs_decodes_json_values():
    assert parse_arg_pairs(["x=10", "text=Hello world", "exact=true"]) == {
        "x": 10,
        "text": "Hello world",
        "exact": True,
    }
    with pytest.raises(ValueError):
        parse_arg_pairs(["novalue"])


def test_tools_command_lists_catalog(capsys):
    assert run_main(["tools"]) == 0

    assert "wait_for_element" in capsys.readouterr().out


def test_call_command_prints_result(capsys, device, node, dump):
    device.queue(dump(node(text="Submit", bounds=(100, 200, 300, 250))))

    code = run_main(
        ["--device", "emulator-5554", "call", "tap_text", "--arg", "text=Submit"],
        host_factory=lambda _: device,
    )

    assert code == 0
    result = json.loads(capsys.readouterr().out)
    assert result["tapped"] is True
    assert device.gestures == [("tap", {"x": 200, "y": 225})]


def test_call_command_rejects_bad_arguments(capsys):
    code = run_main(["--device", "emulator-5554", "call", "tap", "--json", '{"x": 1}'])

    assert code == 2
    assert "invalid arguments" in capsys.readouterr().err


def test_missing_config_exits_with_error(capsys, tmp_path):
    code = main(["--config", str(tmp_path / "missing.json"), "tools"])

    assert code == 1
    assert "config not found" in capsys.readouterr().err


def test_call_command_reports_handler_value_error(capsys, device):
    device.responses["dumpsys battery"] = ValueError("unexpected battery report")

    code = run_main(
        ["--device", "emulator-5554", "call", "device_info"],
        host_factory=lambda _: device,
    )

    assert code == 2
    assert "error: unexpected battery report" in capsys.readouterr().err
