import pytest
from fastapi.testclient import TestClient

from droidctl.api.app import get_sessions
from droidctl.server import app
from droidctl.settings import Settings
from droidctl.tools import ToolSessions
from shared.errors import AdbError


@pytest.fixture
def client(device):
    sessions = ToolSessions(Settings(device_id="emulator-5554"), host_factory=lambda _: device)
    app.dependency_overrides[get_sessions] = lambda: sessions
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_list_tools(client):
    response = client.get("/api/tools")

    assert response.status_code == 200
    names = [tool["name"] for tool in response.json()]
    assert "wait_for_ui_stable" in names
    assert "tap_text" in names


def test_get_unknown_tool(client):
    assert client.get("/api/tools/teleport").status_code == 404


def test_call_tool(client, device, node, dump):
    device.queue(dump(node(text="Submit", bounds=(100, 200, 300, 250))))

    response = client.post("/api/tools/get_element_bounds", json={"text": "Submit"})

    assert response.status_code == 200
    body = response.json()
    assert body["device_id"] == "emulator-5554"
    assert body["result"]["center"] == {"x": 200, "y": 225}


def test_call_tool_invalid_arguments(client):
    response = client.post("/api/tools/tap", json={"x": 1})

    assert response.status_code == 422
    assert response.json()["detail"]["errors"]


def test_call_unknown_tool(client):
    assert client.post("/api/tools/teleport", json={}).status_code == 404


def test_device_error_maps_to_502(client, device):
    device.queue(AdbError("device offline"))

    response = client.post("/api/tools/get_ui_tree", json={})

    assert response.status_code == 502
    assert "device offline" in response.json()["detail"]["message"]


def test_call_without_body(client, device, node, dump):
    device.queue(dump(node(text="Name", focused=True)))

    response = client.post("/api/tools/get_focused_element")

    assert response.status_code == 200
    assert response.json()["result"]["element"]["text"] == "Name"
