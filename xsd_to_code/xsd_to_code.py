import json
import logging

import click

from .cli_utils import reconstruct_command_line
from .logger import get_loglevel, set_logging_level
from .pipeline import CodeGeneratorConfig, PipelineGenerator


@click.command()
@click.option("--namespace", "-n", default=None, type=str, help="Namespace of the generated code (default: Generated)")
@click.option("--recurse", "-r", is_flag=True, default=False, help="Recurse into sub-directories of PATH")
@click.option("--clean", is_flag=True, default=False, help="Delete the files of OUTPUT before writing")
@click.option("--pascal-case", is_flag=True, default=False, help="Accepted for compatibility, no effect")
@click.option("--nullable", is_flag=True, default=False, help="Accepted for compatibility, no effect")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--verbose", "-v", count=True, help="Increase verbosity (-v info, -vv debug)")
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
@click.argument("output", type=click.Path(file_okay=False, resolve_path=True))
def xsd_to_code(namespace, recurse, clean, pascal_case, nullable, config, verbose, path, output):
    logging.basicConfig(format="%(levelname)s: %(message)s")
    set_logging_level(get_loglevel(verbose))

    if config is not None:
        with open(config) as f:
            config = CodeGeneratorConfig.from_dict(json.load(f))
    else:
        config = CodeGeneratorConfig()

    # Command line flags override the config file
    if namespace is not None:
        config.target_namespace = namespace
    if recurse:
        config.recurse = True
    if clean:
        config.clean_output = True
    if pascal_case:
        config.pascal_case = True
    if nullable:
        config.nullable = True

    codegen = PipelineGenerator(path, config, reconstruct_command_line(xsd_to_code))
    written = codegen.generate(output)
    click.echo(f"Generated {len(written)} file(s) in {output}")


if __name__ == "__main__":
    xsd_to_code()
