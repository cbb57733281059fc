from __future__ import annotations

import pytest
import yaml

from asyncapi_to_code.pipeline import AsyncApiDocument, ClassHierarchyEvaluator

from .helpers import DOCUMENTS_DIR, MODELS_NAMESPACE


@pytest.fixture
def animals_raw() -> dict:
    with open(DOCUMENTS_DIR / "animals.yaml") as f:
        return yaml.safe_load(f)


@pytest.fixture
def animals_document(animals_raw) -> AsyncApiDocument:
    return AsyncApiDocument(animals_raw)


@pytest.fixture
def animals_model(animals_document):
    return ClassHierarchyEvaluator(animals_document, MODELS_NAMESPACE).evaluate()
