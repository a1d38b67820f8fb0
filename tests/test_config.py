import json
import sys
from pathlib import Path

import pytest

from fieldmap import config, paths
from fieldmap.connect.constants import CLICK_SLOP, HINT_RADIUS
from fieldmap.connect.controller import Tolerances


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ('FIELDMAP_HINT_RADIUS', 'FIELDMAP_HOVER_RADIUS', 'FIELDMAP_DROP_HIT_MARGIN',
                 'FIELDMAP_CLICK_SLOP', 'FIELDMAP_CATALOG', 'FIELDMAP_HOME'):
        monkeypatch.delenv(name, raising=False)


def test_load_config(tmp_path):
    path = tmp_path / 'config.json'
    assert config.load_config(path) == {}

    path.write_text(json.dumps({'tolerances': {'hint_radius': 10}}), encoding='utf-8')
    assert config.load_config(path)['tolerances']['hint_radius'] == 10


def test_app_dir_defaults_to_project_root():
    assert paths.get_app_dir() == Path(paths.__file__).resolve().parents[1]
    assert paths.get_config_path().name == 'config.json'


def test_app_dir_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv('FIELDMAP_HOME', str(tmp_path))
    (tmp_path / 'config.json').write_text(json.dumps({'tolerances': {'click_slop': 1}}), encoding='utf-8')

    assert paths.get_config_path() == tmp_path / 'config.json'
    assert paths.get_default_catalog_path() == tmp_path / 'catalog.json'
    assert config.get_tolerances().click_slop == 1.0


def test_frozen_app_dir(monkeypatch, tmp_path):
    monkeypatch.setattr(sys, 'frozen', True, raising=False)
    monkeypatch.setattr(sys, 'executable', str(tmp_path / 'fieldmap.exe'))

    assert paths.get_app_dir() == tmp_path.resolve()


def test_unreadable_config_is_ignored(tmp_path):
    path = tmp_path / 'config.json'
    path.write_text('{oops', encoding='utf-8')

    assert config.load_config(path) == {}


def test_default_tolerances():
    assert config.get_tolerances({}) == Tolerances()
    assert Tolerances().hint_radius == HINT_RADIUS


def test_tolerances_from_config_and_env(monkeypatch):
    cfg = {'tolerances': {'hint_radius': 50, 'click_slop': 2}}
    monkeypatch.setenv('FIELDMAP_HINT_RADIUS', '60')

    tolerances = config.get_tolerances(cfg)

    assert tolerances.hint_radius == 60.0
    assert tolerances.click_slop == 2.0


def test_invalid_tolerances_fall_back(monkeypatch):
    monkeypatch.setenv('FIELDMAP_CLICK_SLOP', 'wide')
    tolerances = config.get_tolerances({'tolerances': {'hover_radius': -3}})

    assert tolerances.click_slop == CLICK_SLOP
    assert tolerances.hover_radius == Tolerances().hover_radius


def test_catalog_path_priority(monkeypatch, tmp_path):
    monkeypatch.setattr(config, 'get_default_catalog_path', lambda: tmp_path / 'catalog.json')
    assert config.get_catalog_path({}) is None

    (tmp_path / 'catalog.json').write_text('{}', encoding='utf-8')
    assert config.get_catalog_path({}) == tmp_path / 'catalog.json'

    assert config.get_catalog_path({'catalog': 'other.json'}).name == 'other.json'

    monkeypatch.setenv('FIELDMAP_CATALOG', str(tmp_path / 'env.json'))
    assert config.get_catalog_path({'catalog': 'other.json'}) == tmp_path / 'env.json'
