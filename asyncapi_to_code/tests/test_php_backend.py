"""
Tests for the PHP class renderer.
"""

from __future__ import annotations

import pytest

from asyncapi_to_code.pipeline import ClassHierarchyEvaluator, CodeGeneratorConfig, TypeRegistry
from asyncapi_to_code.pipeline.analyzer import ClassDef, SubclassRef, TypeRef
from asyncapi_to_code.pipeline.backends import PhpModelClassRenderer
from asyncapi_to_code.pipeline.errors import RenderError, UnmappedTypeError

from .helpers import ANIMAL_AND_DOG, ANIMAL_DOG_PUPPY, EXPECTED_DIR, MODELS_NAMESPACE, evaluate, make_document


@pytest.fixture
def renderer() -> PhpModelClassRenderer:
    return PhpModelClassRenderer(CodeGeneratorConfig(models_namespace=MODELS_NAMESPACE))


@pytest.mark.parametrize("class_name", ["Animal", "Dog"])
def test_matches_expected_files(renderer, animals_model, class_name):
    class_def = animals_model.get(MODELS_NAMESPACE, class_name)
    expected = (EXPECTED_DIR / "php" / f"{class_name}.class.php").read_text()
    assert renderer.render_class(class_def) == expected


def test_subclass_file(renderer):
    model = evaluate(ANIMAL_AND_DOG)
    dog = model.get(MODELS_NAMESPACE, "Dog")

    assert renderer.render_class_file_name(dog) == "Dog.class.php"
    content = renderer.render_class(dog)
    assert content.startswith("<?php\n")
    assert "namespace App\\Models;" in content
    assert "use App\\Models\\Animal;" in content
    assert "class Dog extends Animal\n{" in content
    assert "  private string $breed;" in content
    assert "public function getBreed(): string" in content
    assert "public function setBreed(string $breed): void" in content
    assert "$type" not in content


def test_superclass_carries_discriminator_map(renderer):
    animal = evaluate(ANIMAL_AND_DOG).get(MODELS_NAMESPACE, "Animal")
    content = renderer.render_class(animal)
    assert "use JMS\\Serializer\\Annotation\\Discriminator;" in content
    assert '@Discriminator(field = "type", map = {"Dog": "App\\Models\\Dog"})' in content
    assert "$type" not in content
    assert "private int $age;" in content


def test_class_without_subclasses_has_no_annotation(renderer, animals_model):
    dog = animals_model.get(MODELS_NAMESPACE, "Dog")
    assert renderer.render_class_comment_block(dog) == ""
    assert "Discriminator" not in renderer.render_uses_block(dog)


def test_uses_are_deduplicated(renderer, animals_model):
    owner = animals_model.get(MODELS_NAMESPACE, "Owner")
    assert renderer.render_uses_block(owner) == "use App\\Models\\Dog;"


def test_uses_follow_field_order(renderer, animals_model):
    adoption = animals_model.get(MODELS_NAMESPACE, "Adoption")
    assert renderer.render_uses_block(adoption) == "use App\\Models\\Owner;\nuse App\\Models\\Animal;"


def test_self_reference_is_not_imported(renderer):
    node = evaluate({"Node": {"properties": {"next": {"$ref": "#/components/schemas/Node"}}}}).get(MODELS_NAMESPACE, "Node")
    assert renderer.render_uses_block(node) == ""
    assert "private Node $next;" in renderer.render_class(node)


def test_accessors_only_for_private_fields(renderer, animals_model):
    cat = animals_model.get(MODELS_NAMESPACE, "Cat")
    content = renderer.render_class(cat)
    assert "  public int $lives;" in content
    assert "getLives" not in content
    assert "setLives" not in content

    animal = animals_model.get(MODELS_NAMESPACE, "Animal")
    assert renderer.render_accessors_block(animal) == ""


def test_type_mapping(renderer, animals_model):
    adoption = animals_model.get(MODELS_NAMESPACE, "Adoption")
    variables = {v.name: renderer.render_variable_type(v) for v in adoption.instance_variables}
    assert variables == {"owner": "Owner", "animal": "Animal", "fee": "int"}

    owner = animals_model.get(MODELS_NAMESPACE, "Owner")
    assert renderer.render_variable_type(owner.instance_variables[3]) == "array"


def test_constructor_takes_fields_in_order(renderer, animals_model):
    owner = animals_model.get(MODELS_NAMESPACE, "Owner")
    constructor = renderer.render_constructor_block(owner)
    assert constructor.splitlines()[0] == "  public function __construct(string $name, Dog $firstDog, Dog $secondDog, array $pets)"
    assert "    $this->pets = $pets;" in constructor


def test_other_package_is_imported_with_its_namespace(renderer):
    schemas = {
        "Animal": {"x-package": "Shared.Models", "properties": {"age": {"type": "integer"}}},
        "Owner": {"properties": {"pet": {"$ref": "#/components/schemas/Animal"}}},
    }
    model = evaluate(schemas)
    assert renderer.render_uses_block(model.get(MODELS_NAMESPACE, "Owner")) == "use Shared\\Models\\Animal;"
    assert renderer.render_namespace_block(model.get("Shared.Models", "Animal")) == "namespace Shared\\Models;"


def test_generation_comment_can_be_disabled(animals_model):
    renderer = PhpModelClassRenderer(CodeGeneratorConfig(add_generation_comment=False))
    content = renderer.render_class(animals_model.get(MODELS_NAMESPACE, "Dog"))
    assert content.startswith("<?php\n\nnamespace App\\Models;")
    assert "Generated by" not in content


def test_rendering_is_deterministic(renderer, animals_model):
    first = [renderer.render_class(c) for c in animals_model]
    second = [renderer.render_class(c) for c in animals_model]
    assert first == second


def test_unmapped_built_in_type(renderer):
    document = make_document({"Flag": {"properties": {"on": {"type": "boolean"}}}})
    registry = TypeRegistry(["array", "string", "integer", "number", "boolean"])
    model = ClassHierarchyEvaluator(document, MODELS_NAMESPACE, registry).evaluate()
    with pytest.raises(UnmappedTypeError, match="'boolean'"):
        renderer.render_class(model.get(MODELS_NAMESPACE, "Flag"))


def test_intermediate_superclass_carries_discriminator_map(renderer):
    model = evaluate(ANIMAL_DOG_PUPPY)
    content = renderer.render_class(model.get(MODELS_NAMESPACE, "Dog"))
    assert "use App\\Models\\Animal;\nuse JMS\\Serializer\\Annotation\\Discriminator;" in content
    assert '@Discriminator(field = "type", map = {"puppy": "App\\Models\\Puppy"})' in content
    assert "public function __construct(string $breed)" in content
    assert "$type" not in content

    animal = renderer.render_class(model.get(MODELS_NAMESPACE, "Animal"))
    assert '@Discriminator(field = "type", map = {"dog": "App\\Models\\Dog"})' in animal


def test_subclasses_without_discriminator_cannot_render(renderer):
    animal = ClassDef(
        name="Animal",
        package_name=MODELS_NAMESPACE,
        subclasses=(SubclassRef(discriminator_value="dog", type=TypeRef(name="Dog", package_name=MODELS_NAMESPACE)),),
    )
    with pytest.raises(RenderError, match="Animal has subclasses but no discriminator"):
        renderer.render_class(animal)
