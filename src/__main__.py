#!/usr/bin/env python3
"""
highlight_param - Code highlighting block tag with variable parameters

Renders Jinja2 templates that use the highlight block tag, whose language
and options may be literal or supplied by template variables:

    {% highlight_param {{ page.lang }} {{ page.highlight_options }} %}
    def foo
      1
    end
    {% endhighlight_param %}

Philosophy:
    - Markup first: tag parameters are validated when the template compiles
    - Variables late: {{ }} parameters are resolved and re-checked per render
    - Backend agnostic: the site config picks rouge, pygments (deprecated)
      or plain escaped output

Usage:
    highlight-param inputdir/ outputdir/ --inputFile page.html

    The rendered page is written to outputdir/ under the same name, with
    site-wide settings read from inputdir/_config.yml when present.

Examples:
    # Basic rendering
    highlight-param . output/ --inputFile post.html

    # Override the site's highlighter and write a stylesheet
    highlight-param . output/ --inputFile post.html --highlighter rouge --style monokai

    # Verbose output
    highlight-param . output/ --inputFile post.html -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter
from typing import Optional, Sequence

from jinja2 import Environment, FileSystemLoader, TemplateError
from pygments.formatters import HtmlFormatter
from pygments.util import ClassNotFound

from .config import appsettings
from .lib import (
    HighlightParamExtension,
    LanguageError,
    SiteConfig,
    SiteConfigError,
    TagSyntaxError,
    __version__,
    LOG,
    state_connectToLogger,
)
from .lib.renderers import CSS_CLASS
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
  _     _       _     _ _       _     _
 | |__ (_) __ _| |__ | (_) __ _| |__ | |_     _ __   __ _ _ __ __ _ _ __ ___
 | '_ \| |/ _` | '_ \| | |/ _` | '_ \| __|   | '_ \ / _` | '__/ _` | '_ ` _ \
 | | | | | (_| | | | | | | (_| | | | | |_    | |_) | (_| | | | (_| | | | | | |
 |_| |_|_|\__, |_| |_|_|_|\__, |_| |_|\__|___| .__/ \__,_|_|  \__,_|_| |_| |_|
          |___/           |___/         |_____|_|

  Code highlighting with variable parameters
"""

# Define CLI arguments
parser = ArgumentParser(
    description="highlight_param - render templates with parameterized code highlighting",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument("inputdir", type=str, help="Directory containing the template and site config")

parser.add_argument("outputdir", type=str, help="Directory for the rendered output")

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input template (relative to inputdir)"
)

parser.add_argument(
    "--configFile",
    default=appsettings.config_file,
    type=str,
    help="Site configuration YAML (relative to inputdir); optional",
)

parser.add_argument(
    "--highlighter",
    default=None,
    type=str,
    help="Highlighter backend (rouge, pygments, or anything else for plain). Overrides the site config",
)

parser.add_argument(
    "--outputFile",
    default=None,
    type=str,
    help="Output filename within outputdir. Defaults to the input filename",
)

parser.add_argument(
    "--style",
    nargs="?",
    const=appsettings.pygments_style,
    default=None,
    type=str,
    help=f"Write {appsettings.css_file} for the highlighted blocks in this Pygments style "
    f"(bare --style uses {appsettings.pygments_style})",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Verifies that the input template exists, then creates the output
    directory.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputTemplateFile: Resolved path to the input template
            - siteConfigFile: Resolved path to the site config
            - htmlOutputdir: Created output directory path
            - envOK: True if environment is valid

    Exits:
        1 if the input template is not found
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile

    if not input_file.is_file():
        print(f"Error: Input template not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputTemplateFile = input_file
    LOG(f"Input template: {input_file}", level=2)

    state.siteConfigFile = state.inputdir / (state.configFile or appsettings.config_file)
    LOG(f"Site config: {state.siteConfigFile}", level=2)

    state.htmlOutputdir = state.outputdir
    state.htmlOutputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.htmlOutputdir}", level=2)

    state.envOK = True
    return state


def config_load(inputstate: ProgramState) -> ProgramState:
    """
    Load the site configuration.

    A missing config file leaves the site on application defaults.

    Args:
        inputstate: Program state with siteConfigFile set

    Returns:
        ProgramState with added field:
            - siteConfig: Loaded SiteConfig

    Exits:
        1 if the config file cannot be parsed
    """

    state = inputstate.copy()

    LOG("Loading site configuration...", level=1)

    try:
        state.siteConfig = SiteConfig(state.siteConfigFile)
    except SiteConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Site config has {len(state.siteConfig.config)} keys", level=2)
    return state


def template_render(inputstate: ProgramState) -> ProgramState:
    """
    Render the input template with the highlight tag available.

    Args:
        inputstate: Program state with inputTemplateFile and siteConfig

    Returns:
        ProgramState with added field:
            - renderResult: Dict containing:
                - status: bool (rendering success)
                - output_file: str (path to the rendered file)
                - css_file: Optional[str] (path to the stylesheet, if written)
                - highlighter: str (backend used)

    Exits:
        1 if the template or a highlight tag in it fails to render
    """

    state = inputstate.copy()

    LOG("Rendering template...", level=1)

    if state.siteConfig is None:
        print("Error: No site configuration available", file=sys.stderr)
        sys.exit(1)

    environment = Environment(
        loader=FileSystemLoader(str(state.inputdir)),
        extensions=[HighlightParamExtension],
    )
    environment.highlighter = state.highlighter or state.siteConfig.highlighter
    LOG(f"Highlighter: {environment.highlighter}", level=2)

    try:
        template = environment.get_template(state.inputFile)
        html = template.render(**state.siteConfig.variables())
    except (TemplateError, TagSyntaxError, LanguageError) as e:
        print(f"Render error: {e}", file=sys.stderr)
        if state.verbosity >= 3 or appsettings.debug_mode:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    output_file = state.htmlOutputdir / (state.outputFile or Path(state.inputFile).name)
    output_file.write_text(html, encoding="utf-8")
    LOG(f"Wrote {output_file}", level=2)

    css_file = None
    if state.style:
        try:
            css = HtmlFormatter(style=state.style).get_style_defs(f".{CSS_CLASS}")
        except ClassNotFound as e:
            print(f"Style error: {e}", file=sys.stderr)
            sys.exit(1)
        css_file = state.htmlOutputdir / appsettings.css_file
        css_file.write_text(css, encoding="utf-8")
        LOG(f"Wrote {css_file}", level=2)

    state.renderResult = {
        "status": True,
        "output_file": str(output_file),
        "css_file": str(css_file) if css_file else None,
        "highlighter": environment.highlighter,
    }
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display rendering results to user.

    Args:
        inputstate: Program state with renderResult populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if renderResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.renderResult:
        print("Error: Rendering failed", file=sys.stderr)
        sys.exit(1)

    if state.verbosity >= 1:
        LOG("\n✓ Rendering successful!", level=1)
        LOG(f"  Output: {state.renderResult['output_file']}", level=1)
        LOG(f"  Highlighter: {state.renderResult['highlighter']}", level=1)
        if state.renderResult["css_file"]:
            LOG(f"  Stylesheet: {state.renderResult['css_file']}", level=1)
    return state


def run(options: Namespace, inputdir: Path, outputdir: Path) -> ProgramState:
    """
    Render a template containing highlight blocks.

    Orchestrates the full rendering pipeline:
        1. env_check: Validate paths and environment
        2. config_load: Read the site configuration
        3. template_render: Render the template and optional stylesheet
        4. results_report: Display results to user

    Args:
        options: CLI arguments from argparse
            - inputFile: str - Input template filename
            - configFile: str - Site config filename
            - highlighter: Optional[str] - Backend override
            - outputFile: Optional[str] - Output filename
            - style: Optional[str] - Pygments style for the stylesheet
            - verbosity: int - Logging verbosity level (1-3)
        inputdir: Directory containing the template and site config
        outputdir: Directory where rendered output will be written

    Returns:
        Final ProgramState
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    # Execute rendering pipeline
    return pipeline(state, env_check, config_load, template_render, results_report)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """
    Main entry point - parse the command line and run the pipeline.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])
    """
    options: Namespace = parser.parse_args(argv)
    run(options, Path(options.inputdir), Path(options.outputdir))


if __name__ == "__main__":
    main()
