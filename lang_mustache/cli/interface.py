# lang_mustache/cli/interface.py
import sys
from pathlib import Path
from typing import Any, Optional, Tuple

import click
from click_option_group import optgroup
from rich.console import Console as RichConsole

from lang_mustache import __version__ as app_version
from lang_mustache.config.settings import Escaping, RenderConfig, DEFAULT_ESCAPING
from lang_mustache.config.loader import load_and_merge_configs, build_render_config
from lang_mustache.logging_setup import configure_logging, get_logger
from lang_mustache.core.context_builder import build_render_context, parse_user_vars
from lang_mustache.core.engine import MustacheScriptEngine
from lang_mustache.core.output import write_to_stdout, write_to_file
from lang_mustache.exceptions import LangMustacheError, TemplateError
from lang_mustache.util import read_template_file

from .console_output import build_node_tree

log = get_logger(__name__)

ESCAPING_CHOICES = [e.value for e in Escaping]


def _load_template_source(config: RenderConfig) -> Tuple[str, str]:
    # inline text wins over a template file; returns (name, text).
    if config.template_text is not None:
        return "inline", config.template_text
    if config.template_path is not None:
        return str(config.template_path), read_template_file(config.template_path)
    raise TemplateError("no template given, use --template FILE or --string TEXT")


def _run_cli_action(action, *args: Any):
    try:
        action(*args)
    except LangMustacheError as e:
        log.error("handled_application_error_in_cli", error_type=type(e).__name__, message=str(e))
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)


def _render_flow(config: RenderConfig):
    name, template_text = _load_template_source(config)
    engine = MustacheScriptEngine(config.engine_options())
    compiled = engine.compile(template_text, name=name)
    params = build_render_context(config.params_paths, config.user_vars)
    result = engine.bind(compiled, params).run()

    if config.output_file:
        write_to_file(config.output_file, result.content)
        click.echo(f"Info: Output written to: {config.output_file}", err=True)
    else:
        log.info("writing_final_output_to_stdout", size=len(result))
        write_to_stdout(result.content)


def _inspect_flow(config: RenderConfig):
    name, template_text = _load_template_source(config)
    compiled = MustacheScriptEngine(config.engine_options()).compile(template_text, name=name)
    RichConsole().print(build_node_tree(compiled))


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("--verbose", "-v", "verbosity_level", count=True, help="Verbosity: -v info, -vv debug.")
@click.version_option(version=app_version, package_name="lang-mustache", prog_name="lang-mustache", help="Show version and exit.")
@click.pass_context
def main_cli_group(ctx: click.Context, verbosity_level: int):
    """lang-mustache: render Mustache templates with toJson, join and url
    helpers against JSON parameters."""
    log_level = "warning"
    if verbosity_level == 1: log_level = "info"
    elif verbosity_level >= 2: log_level = "debug"
    configure_logging(log_level_str=log_level)


@main_cli_group.command("render")
@optgroup.group("Template Source", help="Where the template text comes from.")
@optgroup.option("-t", "--template", "template_path", type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path), default=None, help="Path to a template file.")
@optgroup.option("-s", "--string", "template_text", default=None, help="Template text given inline (overrides --template).")
@optgroup.group("Parameters", help="Values the template is rendered against.")
@optgroup.option("-p", "--params", "params_paths", multiple=True, type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path), help="JSON file holding an object of params. Repeatable; later files win.")
@optgroup.option("--var", "user_vars", multiple=True, metavar="KEY=VALUE", help="String param set on top of params files.")
@optgroup.group("Output", help="Escaping and destination of the rendered text.")
@optgroup.option("--escaping", "escaping_str", type=click.Choice(ESCAPING_CHOICES), default=None, help=f"Escaping for {{{{variables}}}}. Default: {DEFAULT_ESCAPING.value}.")
@optgroup.option("-o", "--output", "output_file", type=click.Path(dir_okay=False, writable=True, path_type=Path), default=None, help="Write output to this file instead of stdout.")
@optgroup.group("Configuration", help="Settings loaded from TOML config files.")
@optgroup.option("--config-profile", "profile_name", default=None, help="Load a profile from config file(s).")
def render_command(template_path: Optional[Path], template_text: Optional[str], params_paths: Tuple[Path, ...],
                   user_vars: Tuple[str, ...], escaping_str: Optional[str], output_file: Optional[Path],
                   profile_name: Optional[str]):
    """Render a template and write the output bytes."""
    def action():
        config = build_render_config(
            load_and_merge_configs(), profile_name,
            template_path=template_path,
            template_text=template_text,
            params_paths=list(params_paths) or None,
            user_vars=parse_user_vars(user_vars) or None,
            escaping=Escaping.from_string(escaping_str),
            output_file=output_file,
        )
        _render_flow(config)
    _run_cli_action(action)


@main_cli_group.command("inspect")
@optgroup.group("Template Source", help="Where the template text comes from.")
@optgroup.option("-t", "--template", "template_path", type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path), default=None, help="Path to a template file.")
@optgroup.option("-s", "--string", "template_text", default=None, help="Template text given inline (overrides --template).")
@optgroup.option("--escaping", "escaping_str", type=click.Choice(ESCAPING_CHOICES), default=None, help="Escaping to compile {{variables}} with.")
def inspect_command(template_path: Optional[Path], template_text: Optional[str], escaping_str: Optional[str]):
    """Compile a template and print its node tree."""
    config = RenderConfig(template_path=template_path, template_text=template_text,
                          escaping=Escaping.from_string(escaping_str) or DEFAULT_ESCAPING)
    _run_cli_action(_inspect_flow, config)
