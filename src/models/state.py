"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing rendering stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, Dict, Callable, TYPE_CHECKING
from dataclasses import dataclass, field

# Forward reference for type hint - avoid circular import
if TYPE_CHECKING:
    from ..lib.site import SiteConfig


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the rendering pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as rendering progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, configFile,
                   highlighter, outputFile, style
        - env_check: inputTemplateFile, siteConfigFile, htmlOutputdir, envOK
        - config_load: siteConfig
        - template_render: renderResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the input template and site config
        outputdir: Output directory for rendered files
        verbosity: Logging verbosity level (1-3)
        inputFile: Input template filename (relative to inputdir)
        configFile: Site config filename (relative to inputdir)
        highlighter: Optional highlighter override (beats the site config)
        outputFile: Output filename (defaults to inputFile)
        style: Optional Pygments style; writes a stylesheet when set
        envOK: Environment validation passed
        inputTemplateFile: Resolved path to the input template
        siteConfigFile: Resolved path to the site config (may not exist)
        htmlOutputdir: Output directory, created if missing
        siteConfig: Loaded site configuration
        renderResult: Rendering results (output_file, css_file, highlighter, status)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    configFile: str = field(default="")
    highlighter: Optional[str] = field(default=None)
    outputFile: Optional[str] = field(default=None)
    style: Optional[str] = field(default=None)

    # Pipeline state
    envOK: bool = field(default=False)
    inputTemplateFile: Path = field(default=Path("/"))
    siteConfigFile: Path = field(default=Path("/"))
    htmlOutputdir: Path = field(default=Path("/"))
    siteConfig: Optional["SiteConfig"] = field(default=None)
    renderResult: Optional[Dict[str, Any]] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Merges CLI options with explicitly provided directories to create
        the initial program state for the rendering pipeline.

        Args:
            options: Parsed CLI arguments (inputFile, configFile, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for rendered output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        # Get the dictionary of all attributes from the Namespace
        options_dict = vars(options)

        # Get the set of valid field names for ProgramState
        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Filter options_dict to only include fields that exist in ProgramState
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        # Merge the filtered CLI options with the explicitly defined arguments.
        # This will override any defaults set in the dataclass.
        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}

        # Instantiate the dataclass by unpacking the merged dictionary.
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            config_load,
            template_render,
            results_report
        )

    This is equivalent to:
        results_report(template_render(config_load(env_check(initial_state))))

    But reads left-to-right instead of inside-out.
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
