"""CLI entry point for api-bindgen."""

import logging
import sys
from pathlib import Path

import click

from api_bindgen.config import CONFIG_ENV_VAR, GeneratorConfig, resolve_config
from api_bindgen.errors import BindgenError
from api_bindgen.generator.assembler import MethodsGenerator
from api_bindgen.schema.loader import load_description


def _fail(err: BindgenError):
    click.echo(f"Error: {err}", err=True)
    sys.exit(err.exit_code)


config_option = click.option(
    "--config",
    "config_path",
    default=None,
    envvar=CONFIG_ENV_VAR,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML generator config file.",
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log each generated method.")
def main(verbose: bool):
    """API Bindgen: generate typed client functions from an API description."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("schema_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(dir_okay=False, path_type=Path), help="Output path of the generated module.")
@config_option
@click.option("--types-module", default=None, help="Module with the API object classes.")
@click.option("--runtime-module", default=None, help="Module the generated code imports its runtime from.")
@click.option("--naming", default=None, type=click.Choice(["snake", "camel"]), help="Identifier style of the generated code.")
def generate(
    schema_path: Path,
    output: Path | None,
    config_path: Path | None,
    types_module: str | None,
    runtime_module: str | None,
    naming: str | None,
):
    """Generate the methods module from an API description."""
    try:
        config = resolve_config(
            config_path,
            output=output,
            types_module=types_module,
            runtime_module=runtime_module,
            naming=naming,
        )
        if config.output is None:
            raise click.UsageError("no output path: pass -o/--output or set 'output' in the config file")

        click.echo(f"Loading {schema_path}...")
        description = load_description(schema_path)
        click.echo(f"Found {len(description.methods)} methods, {len(description.types)} types.")

        click.echo("Generating methods...")
        MethodsGenerator(config).write(description, config.output)
    except BindgenError as e:
        _fail(e)

    click.echo(f"Methods saved to {config.output}")


@main.command("list-methods")
@click.argument("schema_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@config_option
def list_methods(schema_path: Path, config_path: Path | None):
    """Show how each method will be generated."""
    try:
        config: GeneratorConfig = resolve_config(config_path)
        description = load_description(schema_path)
        methods = MethodsGenerator(config).summary(description)
    except BindgenError as e:
        _fail(e)

    for m in methods:
        transport = "multipart" if m.multipart else "form"
        click.echo(f"{m.name}\t{m.function_name}\t{transport}\t{m.returns.annotation}")
