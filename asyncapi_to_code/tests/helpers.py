"""Shared helpers for building documents and models in tests."""

from __future__ import annotations

from pathlib import Path

from asyncapi_to_code.pipeline import AsyncApiDocument, ClassHierarchyEvaluator, CodeGeneratorConfig

TEST_DATA_DIR = Path(__file__).with_name("test_data")
DOCUMENTS_DIR = TEST_DATA_DIR / "documents"
EXPECTED_DIR = TEST_DATA_DIR / "expected"

MODELS_NAMESPACE = "App\\Models"


def make_document(schemas: dict, **extra) -> AsyncApiDocument:
    """Build a minimal document around a components.schemas mapping."""
    raw = {"asyncapi": "2.6.0", "info": {"title": "Test", "version": "1.0.0"}, "components": {"schemas": schemas}}
    raw.update(extra)
    return AsyncApiDocument(raw)


def evaluate(schemas: dict, namespace: str = MODELS_NAMESPACE, config: CodeGeneratorConfig | None = None):
    return ClassHierarchyEvaluator(make_document(schemas), namespace, config=config).evaluate()


ANIMAL_AND_DOG = {
    "Animal": {
        "type": "object",
        "discriminator": "type",
        "properties": {
            "type": {"type": "string"},
            "age": {"type": "integer"},
        },
    },
    "Dog": {
        "allOf": [
            {"$ref": "#/components/schemas/Animal"},
            {"type": "object", "properties": {"breed": {"type": "string", "x-accessibility": "private"}}},
        ]
    },
}

# Dog redeclares the inherited discriminator and is itself a superclass
ANIMAL_DOG_PUPPY = {
    "Animal": ANIMAL_AND_DOG["Animal"],
    "Dog": {
        "allOf": [
            {"$ref": "#/components/schemas/Animal"},
            {"properties": {"type": {"type": "string", "const": "dog"}, "breed": {"type": "string"}}},
        ]
    },
    "Puppy": {
        "allOf": [
            {"$ref": "#/components/schemas/Dog"},
            {"properties": {"type": {"type": "string", "const": "puppy"}, "toy": {"type": "string"}}},
        ]
    },
}
