import pytest
from fastapi.testclient import TestClient

from video_roulette.data_models import Author, VideoDetails, VideoInfo
from video_roulette.main import create_app
from video_roulette.store import init_store


class StubClient:
    """Stands in for TikwmClient and records what it was asked for."""

    def __init__(self, info=None, error=None, url_list=None):
        self.info = info
        self.error = error
        self.url_list = url_list or []
        self.calls = []

    def fetch(self, video_url):
        self.calls.append(video_url)
        if self.error is not None:
            raise self.error
        return self.info

    def fetch_url_list(self, list_url):
        self.calls.append(list_url)
        if self.error is not None:
            raise self.error
        return list(self.url_list)


@pytest.fixture
def sample_info():
    return VideoInfo(
        code=0,
        msg="success",
        data=VideoDetails(
            id="abc",
            region="US",
            title="A clip",
            cover="https://example.com/cover.jpg",
            duration=30,
            author=Author(id="uid1", unique_id="u1", nickname="N"),
        ),
    )


@pytest.fixture
def store(tmp_path):
    s = init_store(f"sqlite:///{tmp_path / 'urls.db'}")
    yield s
    s.engine.dispose()


@pytest.fixture
def stub_client(sample_info):
    return StubClient(info=sample_info)


@pytest.fixture
def http(store, stub_client):
    app = create_app(store, stub_client, import_list_url="https://lists.example.com/urls.json")
    with TestClient(app) as c:
        yield c
