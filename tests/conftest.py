import pytest
from fastapi.testclient import TestClient

from quizhub.config import Settings
from quizhub.main import create_app
from quizhub.models import Team
from quizhub.state import EventServices


class FakeClock:
    """Manually advanced clock"""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def settings(tmp_path):
    return Settings(data_dir=str(tmp_path / "data"), static_dir=str(tmp_path / "public"))


@pytest.fixture()
def services(settings, clock):
    svc = EventServices(settings, clock=clock)
    svc.load()
    return svc


@pytest.fixture()
def registered(services):
    """Services with two teams registered"""
    services.teams.register(Team(team_id="T1", team_name="Alpha", leader_name="Ana", college="North"))
    services.teams.register(Team(team_id="T2", team_name="Bravo", leader_name="Ben", college="South"))
    return services


@pytest.fixture()
def client(settings, clock):
    app = create_app(settings, clock=clock)
    with TestClient(app) as test_client:
        yield test_client
