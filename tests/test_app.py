import pytest

from main import create_app
from settings import DEFAULTS, Settings


@pytest.fixture
def app(settings, scheduler):
    return create_app(settings, scheduler=scheduler)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ready_client(client):
    for _ in range(5):
        client.post("/api/tick")
    return client


def test_index_renders_page(client):
    res = client.get("/")
    assert res.status_code == 200
    html = res.get_data(as_text=True)
    assert 'id="grid-svg"' in html
    assert "Start Search" in html
    assert 'id="finder-selector"' in html


def test_ticks_build_the_grid(client):
    events = []
    for _ in range(5):
        events += client.post("/api/tick").get_json()["events"]

    rows = [ev["y"] for ev in events if ev["type"] == "row"]
    assert rows == [0, 1, 2, 3, 4]
    assert client.post("/api/tick").get_json()["state"] == "ready"


def test_command_runs_a_search(ready_client, clock):
    body = ready_client.post("/api/command", json={"event": "start"}).get_json()
    assert body["accepted"] is True
    assert body["state"] == "searching"

    clock.advance(10_000)
    body = ready_client.post("/api/tick").get_json()
    assert body["state"] == "finished"
    assert body["statistics"]["path_found"] is True
    assert any(ev["type"] == "path" and ev["d"] for ev in body["events"])
    assert "stats_html" in body


def test_commands_wait_for_the_grid(client):
    client.post("/api/tick")
    body = client.post("/api/command", json={"event": "reset"}).get_json()
    assert body["accepted"] is False
    assert body["state"] == "uninitialized"
    assert not any(c["enabled"] for c in body["commands"])


def test_rejected_command_is_not_an_error(ready_client):
    body = ready_client.post("/api/command", json={"event": "pause"}).get_json()
    assert body["accepted"] is False
    assert body["state"] == "ready"


@pytest.mark.parametrize("payload", [{"event": "warp"}, {"event": "search"}, {}])
def test_bad_command_is_400(ready_client, payload):
    res = ready_client.post("/api/command", json=payload)
    assert res.status_code == 400
    assert "error" in res.get_json()


def test_pointer_draws_a_wall(ready_client, app):
    ready_client.post("/api/pointer/down", json={"x": 15, "y": 15})
    body = ready_client.post("/api/pointer/up").get_json()
    assert body["state"] == "ready"
    assert not app.extensions["pathvis"].grid.is_walkable_at(1, 1)


@pytest.mark.parametrize("url, payload", [
    ("/api/pointer/down", {"x": "left"}),
    ("/api/pointer/move", {}),
    ("/api/pointer/wiggle", {"x": 1, "y": 1}),
])
def test_bad_pointer_input_is_400(ready_client, url, payload):
    assert ready_client.post(url, json=payload).status_code == 400


def test_config_finder(ready_client, app):
    body = ready_client.post("/api/config/finder", json={
        "finder": "astar", "heuristic": "euclidean", "allow_diagonal": True, "weight": "2",
    }).get_json()
    assert body["finder"] == "astar"
    assert body["options"] == {"heuristic": "euclidean", "allow_diagonal": True, "weight": 2.0}
    assert 'id="heuristic-selector"' in body["finder_html"]


@pytest.mark.parametrize("payload", [
    {"finder": "nope"},
    {"finder": "astar", "heuristic": "nope"},
    {"finder": "astar", "weight": "heavy"},
    {"finder": "astar", "allow_diagonal": "false"},
    {"finder": "dijkstra", "dont_cross_corners": 1},
])
def test_bad_finder_config_is_400(ready_client, payload):
    assert ready_client.post("/api/config/finder", json=payload).status_code == 400


def test_config_speed(ready_client):
    assert ready_client.post("/api/config/speed", json={"speed": "slow"}).get_json()["speed"] == 30
    assert ready_client.post("/api/config/speed", json={"speed": 12}).get_json()["speed"] == 12


@pytest.mark.parametrize("speed", ["warp", 0, None])
def test_bad_speed_is_400(ready_client, speed):
    assert ready_client.post("/api/config/speed", json={"speed": speed}).status_code == 400


def test_export_after_search(ready_client, clock):
    ready_client.post("/api/command", json={"event": "start"})
    export = ready_client.get("/api/export").get_json()
    assert export["finder"] == "breadth_first"
    assert export["total"] == len(export["pending"]) > 0

    clock.advance(10_000)
    ready_client.post("/api/tick")
    export = ready_client.get("/api/export").get_json()
    assert export["pending"] == []
    assert export["path"][0] == [0, 2]


def test_create_app_reads_prefixed_env(monkeypatch):
    monkeypatch.setenv("PATHVIS_CELL_SIZE", "20")
    monkeypatch.setenv("PATHVIS_GRID_SIZE", "[8, 6]")
    app = create_app()
    assert app.config["CELL_SIZE"] == 20
    controller = app.extensions["pathvis"]
    assert (controller.grid.width, controller.grid.height) == (8, 6)
    assert controller.view.cell_size == 20
    assert controller.playback.operations_per_second == DEFAULTS["OPERATIONS_PER_SECOND"]


def test_settings_validation():
    with pytest.raises(ValueError):
        Settings(grid_size=(0, 5))
    with pytest.raises(ValueError):
        Settings(cell_size=0)
