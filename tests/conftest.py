"""
Pytest configuration and fixtures for stepchain tests.
"""

import logging

import pytest

from stepchain import Pipeline, PipelineConfig


@pytest.fixture
def config():
    """Fresh default configuration (use_latest, no order, no filter)"""
    return PipelineConfig()


@pytest.fixture
def pipeline(config):
    """Pipeline bound to the config fixture with a named test logger"""
    return Pipeline(config, logger=logging.getLogger("stepchain.tests"))


@pytest.fixture
def write_yaml(tmp_path):
    """Write YAML text to a file under tmp_path and return its path"""

    def _write(text: str, name: str = "pipeline.yaml"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write

