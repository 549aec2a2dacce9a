import pytest
from fastapi.testclient import TestClient

from studygen import main as studygen_main
from studygen.knowledge_base import InMemoryKnowledgeBase


@pytest.fixture
def knowledge_base():
    return InMemoryKnowledgeBase()


@pytest.fixture
def client(knowledge_base):
    studygen_main.app.dependency_overrides[studygen_main.get_knowledge_base] = lambda: knowledge_base
    with TestClient(studygen_main.app) as c:
        yield c
    studygen_main.app.dependency_overrides.clear()
