"""
Tests for the README and dependency manifest artifacts.
"""

from __future__ import annotations

import json

import pytest

from asyncapi_to_code.pipeline import CodeGeneratorConfig
from asyncapi_to_code.pipeline.backends import CSharpModelClassRenderer, PhpModelClassRenderer
from asyncapi_to_code.pipeline.errors import DocumentError
from asyncapi_to_code.pipeline.project import build_channel_class_name_prefix, class_instance_variable_name, render_project_artifacts


@pytest.fixture
def config() -> CodeGeneratorConfig:
    return CodeGeneratorConfig()


@pytest.fixture
def php_artifacts(animals_document, animals_model, config) -> dict[str, str]:
    return render_project_artifacts(animals_document, animals_model, PhpModelClassRenderer(config), config)


def test_channel_class_name_prefix():
    assert build_channel_class_name_prefix("owner/{ownerId}/registered") == "OwnerOwnerIdRegistered"
    assert build_channel_class_name_prefix("user/signed-up") == "UserSignedUp"
    assert class_instance_variable_name("PetAdopted") == "$petAdopted"


def test_php_readme(php_artifacts):
    readme = php_artifacts["README.md"]
    assert readme.startswith("# Pet Events\n\nEvents emitted by the pet store.\n")
    assert "Version: `1.0.0`" in readme
    assert "composer install" in readme
    assert "`production`: `rabbitmq.example.com:5672` (amqp 0.9.1)" in readme
    assert "- `userPassword` (userPassword): pass the user and password to the connection" in readme
    assert "### `pet/adopted`" in readme
    assert "Service: `App\\Services\\PetAdoptedService`" in readme
    assert "- Subscribe (`onPetAdopted`): PetAdopted, payload `Adoption`" in readme
    assert "- Publish (`registerOwner`): OwnerRegistered, payload `Owner`" in readme
    assert "| `Dog` | `Animal` | breed |" in readme
    assert "| `Animal` | - | age |" in readme
    assert "`Animal` is polymorphic on `type`: Dog, Cat." in readme
    assert "$animal = new Animal(/* ... */);" in readme
    assert "Only AMQP" not in readme


def test_composer_manifest(php_artifacts):
    manifest = json.loads(php_artifacts["composer.json"])
    assert "jms/serializer" in manifest["require"]
    assert manifest["autoload"]["classmap"] == ["src/"]


def test_csharp_artifacts(animals_document, animals_model, config):
    artifacts = render_project_artifacts(animals_document, animals_model, CSharpModelClassRenderer(config), config)
    assert list(artifacts) == ["README.md", "Models.csproj"]
    assert "dotnet restore" in artifacts["README.md"]
    assert "Service: `App.Services.OwnerOwnerIdRegisteredService`" in artifacts["README.md"]
    assert "<RootNamespace>App.Models</RootNamespace>" in artifacts["Models.csproj"]
    assert '<PackageReference Include="JsonSubTypes"' in artifacts["Models.csproj"]


def test_selected_server(animals_document, animals_model):
    config = CodeGeneratorConfig(server="staging")
    readme = render_project_artifacts(animals_document, animals_model, PhpModelClassRenderer(config), config)["README.md"]
    assert "`staging`: `staging.example.com:5672`" in readme
    assert "### Security" not in readme


def test_unknown_server(animals_document, animals_model):
    config = CodeGeneratorConfig(server="dev")
    with pytest.raises(DocumentError, match="Unknown server 'dev'"):
        render_project_artifacts(animals_document, animals_model, PhpModelClassRenderer(config), config)
