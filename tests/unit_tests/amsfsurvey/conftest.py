from __future__ import annotations

import logging
import os
import shutil

import pytest

from amsfsurvey.ModelSurvey import Questionnaire
from amsfsurvey.SurveyLog import logger
from amsfsurvey.logging.handlers.LogToBufferHandler import LogToBufferHandler
from amsfsurvey.taxonomy.Loader import Loader

RESOURCES_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", "resources"))
INDUSTRY_PATH = os.path.join(RESOURCES_PATH, "taxonomies", "test_industry")
TAXONOMY_PATH = os.path.join(INDUSTRY_PATH, "2025")


@pytest.fixture
def taxonomyPath() -> str:
    return TAXONOMY_PATH


@pytest.fixture
def industryPath() -> str:
    return INDUSTRY_PATH


@pytest.fixture(scope="module")
def questionnaire() -> Questionnaire:
    return Loader(TAXONOMY_PATH).load("test_industry", 2025)


@pytest.fixture
def taxonomyCopy(tmp_path) -> str:
    """A writable copy of the test taxonomy, for tests that alter or remove artifacts."""
    path = tmp_path / "2025"
    shutil.copytree(TAXONOMY_PATH, path)
    return str(path)


@pytest.fixture
def logBuffer():
    handler = LogToBufferHandler()
    previousLevel = logger.level
    logger.setLevel(logging.DEBUG)
    logger.addHandler(handler)
    yield handler
    logger.removeHandler(handler)
    logger.setLevel(previousLevel)
