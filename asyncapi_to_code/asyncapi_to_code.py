import json
import logging
from pathlib import Path

import click

from .cli_utils import reconstruct_command_line
from .pipeline import AsyncApiDocument, CodeGeneratorConfig, OutputMode, PipelineGenerator, list_supported_languages, write_artifacts
from .pipeline.errors import AsyncApiToCodeError

logger = logging.getLogger(__name__)


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True), help="JSON configuration file")
@click.option("--language", "-l", default="php", type=click.Choice(list_supported_languages()))
@click.option("--server", "-s", default=None, type=str, help="Server described in the README (default: first server)")
@click.option("--models-namespace", default=None, type=str, help="Namespace of the generated model classes")
@click.option("--services-namespace", default=None, type=str, help="Namespace of the services, for the README")
@click.option("--force", is_flag=True, default=False, help="Overwrite existing files")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log every generation step")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("output", type=click.Path(file_okay=False, resolve_path=True))
def asyncapi_to_code(config, language, server, models_namespace, services_namespace, force, verbose, path, output):
    """Generate model classes from the AsyncAPI document PATH into the OUTPUT directory."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    try:
        if config is not None:
            with open(config) as f:
                config = CodeGeneratorConfig.from_dict(json.load(f))
        else:
            config = CodeGeneratorConfig()

        # CLI options override the config file
        if server:
            config.server = server
        if models_namespace:
            config.models_namespace = models_namespace
        if services_namespace:
            config.services_namespace = services_namespace
        if force:
            config.output.mode = OutputMode.FORCE
        config.generation_command = reconstruct_command_line(asyncapi_to_code)

        document = AsyncApiDocument.load(path)
        result = PipelineGenerator(document, config, language).generate()
        written = write_artifacts(Path(output), result.artifacts, config.output)
    except (AsyncApiToCodeError, FileExistsError) as e:
        raise click.ClickException(str(e)) from e

    for written_path in written:
        click.echo(f"Wrote {written_path}")

    if not result.success:
        for failure in result.failures:
            click.echo(f"Failed to render {failure.class_name}: {failure.error}", err=True)
        raise click.ClickException(f"{len(result.failures)} class(es) failed to render")
