import os
import pytest
from pathlib import Path

from dotenv import load_dotenv

# load test env first
env_path = Path(__file__).resolve().parents[1] / '.env.test'
if env_path.exists():
    load_dotenv(env_path)

os.environ.setdefault('TESTING', '1')
# keep test output readable; loggers are configured on first import
os.environ.setdefault('LOG_LEVEL', 'WARNING')

from tests.fixtures.sample_data import (  # noqa: E402
    photosynthesis_notes,
    three_concept_paragraph,
    short_fragments,
    no_cue_sentence,
)


@pytest.fixture
def sample_text():
    return photosynthesis_notes()


@pytest.fixture
def three_concept_text():
    return three_concept_paragraph()


@pytest.fixture
def fragment_text():
    return short_fragments()


@pytest.fixture
def plain_sentence_text():
    return no_cue_sentence()


@pytest.fixture
def test_settings():
    from studygen.config import Settings
    return Settings(flashcard_max_count=20, mcq_max_count=15, default_seed=None)
