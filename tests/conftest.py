import pytest
from loguru import logger

from cyimages.schemas import VersionSpec
from cyimages.settings import settings


@pytest.fixture(autouse=True)
def workdir(tmp_path, monkeypatch):
    # browsers/, circle.yml and buildspec.yml are all relative to the working directory
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(settings, 'IMAGES_ROOT', '.')
    monkeypatch.setattr(settings, 'CONFIG_OUTPUT_DIR', '.')
    monkeypatch.setattr(settings, 'TRIGGER_DOWNSTREAM', True)
    logger.remove()
    yield str(tmp_path)
    logger.remove()


@pytest.fixture
def chrome_spec() -> VersionSpec:
    return VersionSpec(node='16.5.0', chrome='94.0.4606.71')


@pytest.fixture
def firefox_edge_spec() -> VersionSpec:
    return VersionSpec(node='16.5.0', firefox='93.0', edge=True)


@pytest.fixture
def all_browsers_spec() -> VersionSpec:
    return VersionSpec(node='16.5.0', chrome='94.0.4606.71', firefox='93.0', edge=True)


@pytest.fixture
def spawn_mock(mocker):
    return mocker.patch('cyimages.browser_image.spawn')
