"""
Tests for the viewer HTTP adapter (FastAPI TestClient + in-memory surface).
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from api.dependencies import set_service_container
from api.main import create_app
from controllers.frame_controller import FrameController
from controllers.viewer_event_controller import ViewerEventController
from managers.config_manager import ConfigManager, MapConfig
from models.base_style import BaseStyle
from services.base_layer_service import BaseLayerService
from services.event_bus import EventBus
from services.service_container import ServiceContainer

from conftest import HOST

STYLES = {
    "geographic": BaseStyle("geographic", "https://osm.test/{z}/{x}/{y}.png", "OSM"),
    "satellite": BaseStyle("satellite", "https://imagery.test/{z}/{y}/{x}", "Esri"),
}


@pytest.fixture
def services(surface, options):
    config_manager = ConfigManager()
    config_manager.map = MapConfig(center=(52.23, 21.01), zoom=7)

    event_bus = EventBus()
    base_layer_service = BaseLayerService(surface, STYLES)
    base_layer_service.show("geographic")
    frame_controller = FrameController(surface, options, interval=10.0)
    ViewerEventController(frame_controller, event_bus, base_layer_service)

    return ServiceContainer(
        config_manager=config_manager,
        event_bus=event_bus,
        surface=surface,
        catalog=MagicMock(),
        frame_controller=frame_controller,
        base_layer_service=base_layer_service
    )


@pytest.fixture
def loaded_services(services, radar_frames, satellite_frames):
    services.frame_controller.load_complete(radar_frames, satellite_frames, HOST)
    return services


@pytest.fixture
def client(services):
    set_service_container(services)
    with TestClient(create_app()) as test_client:
        yield test_client
    set_service_container(None)


class TestState:

    def test_idle_before_load(self, client):
        response = client.get("/api/v1/viewer/state")

        assert response.status_code == 200
        data = response.json()
        assert data["state"] == "IDLE"
        assert data["current_index"] is None
        assert data["base_style"] == "geographic"

    def test_initial_map_view(self, client):
        data = client.get("/api/v1/viewer/state").json()

        assert data["map"] == {"center": [52.23, 21.01], "zoom": 7}

    def test_ready_after_load(self, loaded_services, client):
        data = client.get("/api/v1/viewer/state").json()

        assert data["state"] == "READY"
        assert data["current_index"] == 0
        assert data["frame_count"] == 5
        assert data["options"]["color_scheme"] == "universal_blue"

    def test_layers(self, loaded_services, client):
        data = client.get("/api/v1/viewer/layers").json()

        assert data["count"] == 3
        assert data["layers"][0]["attribution"] == "OSM"
        assert data["layers"][1]["url_template"].startswith(HOST + "/v2/radar/")

    def test_no_container_is_503(self):
        set_service_container(None)
        with TestClient(create_app()) as test_client:
            assert test_client.get("/api/v1/viewer/state").status_code == 503


class TestPlayback:

    def test_step_next_and_previous(self, loaded_services, client):
        assert client.post("/api/v1/viewer/next").json()["current_index"] == 1
        assert client.post("/api/v1/viewer/previous").json()["current_index"] == 0
        assert client.post("/api/v1/viewer/previous").json()["current_index"] == 4

    def test_play_toggle(self, loaded_services, client):
        assert client.post("/api/v1/viewer/play-toggle").json()["state"] == "PLAYING"
        assert client.post("/api/v1/viewer/play-toggle").json()["state"] == "READY"

    def test_step_while_idle_is_noop(self, client):
        data = client.post("/api/v1/viewer/next").json()
        assert data["state"] == "IDLE"


class TestOptions:

    @pytest.mark.parametrize("layer, field", [
        ("radar", "radar_opacity"),
        ("satellite", "cloud_opacity"),
        ("cloud", "cloud_opacity"),
    ])
    def test_set_opacity(self, loaded_services, client, layer, field):
        response = client.put(f"/api/v1/viewer/opacity/{layer}", json={"value": 0.3})

        assert response.status_code == 200
        assert response.json()["options"][field] == 0.3

    def test_unknown_layer(self, client):
        response = client.put("/api/v1/viewer/opacity/lightning", json={"value": 0.3})

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "LAYER_NOT_FOUND"

    def test_opacity_out_of_range(self, client):
        response = client.put("/api/v1/viewer/opacity/radar", json={"value": 1.5})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_set_color_scheme(self, loaded_services, client):
        response = client.put("/api/v1/viewer/color-scheme", json={"scheme": "titan"})

        assert response.status_code == 200
        assert response.json()["options"]["color_scheme"] == "titan"
        layers = client.get("/api/v1/viewer/layers").json()["layers"]
        assert layers[1]["url_template"].endswith("/3/1_1.webp")

    def test_unknown_color_scheme(self, client):
        response = client.put("/api/v1/viewer/color-scheme", json={"scheme": "sepia"})

        assert response.status_code == 422
        body = response.json()
        assert body["error"]["code"] == "INVALID_COLOR_SCHEME"
        assert "titan" in body["error"]["details"]["valid_values"]

    def test_set_base_style(self, loaded_services, client):
        response = client.put("/api/v1/viewer/base-style", json={"style": "satellite"})

        assert response.status_code == 200
        assert response.json()["base_style"] == "satellite"
        layers = client.get("/api/v1/viewer/layers").json()["layers"]
        assert layers[0]["url_template"] == STYLES["satellite"].url

    def test_unknown_base_style(self, client):
        response = client.put("/api/v1/viewer/base-style", json={"style": "watercolor"})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_BASE_STYLE"

    def test_list_color_schemes(self, client):
        data = client.get("/api/v1/viewer/color-schemes").json()

        assert len(data["items"]) == 9
        assert data["items"][0]["key"] == "raw"
        assert data["current"] == "universal_blue"

    def test_list_base_styles(self, client):
        data = client.get("/api/v1/viewer/base-styles").json()

        assert [item["key"] for item in data["items"]] == ["geographic", "satellite"]
        assert data["current"] == "geographic"


def test_health(client):
    assert client.get("/api/health").json()["status"] == "healthy"


def test_task_summary(client):
    data = client.get("/api/v1/system/tasks/summary").json()
    assert data["total"] == 0
    assert data["failed"] == 0
