"""
Tests for the command line interface.
"""

from __future__ import annotations

import json

from click.testing import CliRunner

from asyncapi_to_code.asyncapi_to_code import asyncapi_to_code
from asyncapi_to_code.cli_utils import reconstruct_command_line

from .helpers import DOCUMENTS_DIR

ANIMALS = str(DOCUMENTS_DIR / "animals.yaml")


def test_generates_php_project(tmp_path):
    out = tmp_path / "out"
    result = CliRunner().invoke(asyncapi_to_code, [ANIMALS, str(out)])

    assert result.exit_code == 0, result.output
    assert (out / "composer.json").exists()
    assert (out / "README.md").exists()
    dog = (out / "src" / "Dog.class.php").read_text()
    assert "// Generated by asyncapi_to_code animals.yaml out. Do not edit by hand." in dog
    assert "Wrote " in result.output


def test_generates_csharp_project(tmp_path):
    out = tmp_path / "out"
    result = CliRunner().invoke(asyncapi_to_code, [ANIMALS, str(out), "--language", "cs", "--models-namespace", "Zoo.Models"])

    assert result.exit_code == 0, result.output
    animal = (out / "Models" / "Animal.cs").read_text()
    assert animal.startswith("// Generated by asyncapi_to_code animals.yaml out --language cs --models-namespace Zoo.Models.")
    assert "namespace Zoo.Models;" in animal
    assert (out / "Models.csproj").exists()


def test_existing_output_requires_force(tmp_path):
    out = tmp_path / "out"
    runner = CliRunner()
    assert runner.invoke(asyncapi_to_code, [ANIMALS, str(out)]).exit_code == 0

    result = runner.invoke(asyncapi_to_code, [ANIMALS, str(out)])
    assert result.exit_code == 1
    assert "already exist" in result.output

    assert runner.invoke(asyncapi_to_code, [ANIMALS, str(out), "--force"]).exit_code == 0


def test_config_file(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"models_namespace": "Zoo\\Models", "add_generation_comment": False}))
    out = tmp_path / "out"

    result = CliRunner().invoke(asyncapi_to_code, [ANIMALS, str(out), "--config", str(config_path)])

    assert result.exit_code == 0, result.output
    dog = (out / "src" / "Dog.class.php").read_text()
    assert dog.startswith("<?php\n\nnamespace Zoo\\Models;")


def test_model_error_exits_with_message(tmp_path):
    document = tmp_path / "broken.yaml"
    document.write_text(
        "components:\n"
        "  schemas:\n"
        "    Animal:\n"
        "      properties:\n"
        "        age: {type: integer}\n"
        "    Dog:\n"
        "      allOf:\n"
        "        - $ref: '#/components/schemas/Animal'\n"
    )
    out = tmp_path / "out"

    result = CliRunner().invoke(asyncapi_to_code, [str(document), str(out)])

    assert result.exit_code == 1
    assert "declares no discriminator" in result.output
    assert not out.exists()


def test_invalid_config_value(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"default_accessibility": "internal"}))
    result = CliRunner().invoke(asyncapi_to_code, [ANIMALS, str(tmp_path / "out"), "-c", str(config_path)])
    assert result.exit_code == 1
    assert "default_accessibility" in result.output


def test_reconstruct_command_line_without_context():
    assert reconstruct_command_line(asyncapi_to_code) == "asyncapi_to_code"
