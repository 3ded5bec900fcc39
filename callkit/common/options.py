"""
The main class for parsing the input config file. The config is a yaml file read with pyyaml. Each key is
checked against a table of definitions giving its type, default and allowed range, and any value that
fails a check stops the run with an error in the log.

The same options object feeds the indel error model (model name and optional parameter file) and
the gVCF block compressor (tolerances and block label).
"""
import logging
import sys

from pathlib import Path
from types import SimpleNamespace
from typing import Any

import yaml

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader

from .constants_and_defaults import DEFAULT_BLOCK_PERCENT_TOL, DEFAULT_BLOCK_ABS_TOL, DEFAULT_BLOCK_LABEL, \
    DEFAULT_INDEL_ERROR_MODEL_NAME
from .io import validate_input_path, validate_output_path

__all__ = [
    "Options",
    "OPTION_DEFINITIONS"
]

_LOG = logging.getLogger(__name__)

# (type, default, criteria1 (low/'exists'), criteria2 (high/None))
OPTION_DEFINITIONS = {
    'indel_error_model_name': (str, DEFAULT_INDEL_ERROR_MODEL_NAME, None, None),
    'indel_error_model_file': (Path, None, 'exists', None),
    'block_percent_tol': (int, DEFAULT_BLOCK_PERCENT_TOL, 0, 100),
    'block_abs_tol': (int, DEFAULT_BLOCK_ABS_TOL, 0, 1000000),
    'block_label': (str, DEFAULT_BLOCK_LABEL, None, None),
    'overwrite_output': (bool, False, None, None),
}


class Options(SimpleNamespace):
    """
    class representing the options

    Every field has a usable default, so Options() alone is a valid configuration for tests and
    for runs without a config file.

    :param output_dir: Directory to write the output files
    :param output_prefix: The prefix to use for output files
    :param indel_error_model_name: Name of the indel error model: one of the built-in models
        ("logLinear", "adaptiveDefault") or a model name inside indel_error_model_file
    :param indel_error_model_file: Optional JSON parameter file holding named indel error models
    :param block_percent_tol: Relative tolerance, in percent, for joining a site to a gVCF block
    :param block_abs_tol: Absolute tolerance for joining a site to a gVCF block
    :param block_label: The label given to the compressed blocks
    :param overwrite_output: If true, existing output files will be replaced
    """

    def __init__(self,
                 output_dir: Path | None = None,
                 output_prefix: str = "callkit",
                 indel_error_model_name: str = DEFAULT_INDEL_ERROR_MODEL_NAME,
                 indel_error_model_file: Path | None = None,
                 block_percent_tol: int = DEFAULT_BLOCK_PERCENT_TOL,
                 block_abs_tol: int = DEFAULT_BLOCK_ABS_TOL,
                 block_label: str = DEFAULT_BLOCK_LABEL,
                 overwrite_output: bool = False,
                 **kwargs: Any):
        super().__init__(**kwargs)
        self.output_dir: Path = Path(output_dir) if output_dir else Path.cwd()
        self.output_prefix: str = output_prefix
        self.indel_error_model_name: str = indel_error_model_name
        self.indel_error_model_file: Path | None = indel_error_model_file
        self.block_percent_tol: int = block_percent_tol
        self.block_abs_tol: int = block_abs_tol
        self.block_label: str = block_label
        self.overwrite_output: bool = overwrite_output

    @staticmethod
    def from_cli(output_dir: Path | str,
                 output_prefix: str,
                 config_file: Path | str | None):
        """
        Build the options for a command line run. Defaults come from OPTION_DEFINITIONS and are
        overridden by whatever the config file sets.

        :param output_dir: Directory for the output files
        :param output_prefix: Prefix for the output files
        :param config_file: Path to the yaml config, or None to use the defaults
        :return: The validated options
        """
        values = {key: default for key, (_, default, _, _) in OPTION_DEFINITIONS.items()}

        base_options = Options(output_dir=output_dir, output_prefix=output_prefix)
        if config_file:
            validate_input_path(config_file)
            values.update(base_options.read_yaml(config_file, OPTION_DEFINITIONS))

        base_options.__dict__.update(values)
        validate_output_path(base_options.output_dir, is_file=False)
        base_options.log_configuration()
        return base_options

    @staticmethod
    def check_and_log_error(keyname, value_to_check, crit1, crit2):
        if value_to_check is None:
            pass
        elif crit1 == "exists" and value_to_check:
            validate_input_path(value_to_check)
        elif crit1 == "choice" and crit2:
            if value_to_check not in crit2:
                _LOG.error(f"`{keyname}` must be one of {crit2} (input: {value_to_check})")
                sys.exit(1)
        elif isinstance(crit1, int) and isinstance(crit2, int):
            if not (crit1 <= value_to_check <= crit2):
                _LOG.error(f'`{keyname}` must be between {crit1} and {crit2} (input: {value_to_check}).')
                sys.exit(1)

    def read_yaml(self, config_yaml: Path | str, definitions: dict) -> dict:
        """
        Reads the config yaml and checks each entry against its definition.

        :param config_yaml: The config file to read
        :param definitions: The option definitions table
        :return: A dictionary of the values set in the config that passed the checks
        """
        with open(config_yaml, 'r') as config_handle:
            config = yaml.load(config_handle, Loader=Loader) or {}

        if not isinstance(config, dict):
            _LOG.error(f"Config file {config_yaml} must contain a mapping of option names to values")
            sys.exit(1)

        values = {}
        for key, value in config.items():
            if key not in definitions:
                _LOG.warning(f"Unrecognized option in config: `{key}`, ignoring.")
                continue
            type_of_var, default, criteria1, criteria2 = definitions[key]
            if value is None or value == ".":
                _LOG.debug(f"No value entered for `{key}`, using default ({default}).")
                continue

            # Paths are entered as strings. bool is a subclass of int, so it has to be ruled out for ints.
            expected_type = str if type_of_var == Path else type_of_var
            if not isinstance(value, expected_type) or (expected_type == int and isinstance(value, bool)):
                _LOG.error(f"Incorrect type for value entered for {key}: {type_of_var} (found: {value})")
                sys.exit(1)
            if type_of_var == Path:
                value = Path(value)

            self.check_and_log_error(key, value, criteria1, criteria2)
            values[key] = value

        return values

    def output_path(self, suffix: str) -> Path:
        """
        The path of an output file for this run, checked against the overwrite setting.

        :param suffix: The file suffix, e.g. "gvcf_blocks.tsv"
        :return: <output_dir>/<output_prefix>.<suffix>
        """
        path = Path(self.output_dir) / f'{self.output_prefix}.{suffix}'
        validate_output_path(path, True, self.overwrite_output)
        return path

    def log_configuration(self):
        """
        Logs the configuration parameters of the run. Useful for reproducibility.
        """
        _LOG.info(f'Run Configuration...')
        _LOG.info(f'Outputting files to {self.output_dir} with prefix {self.output_prefix}')
        if self.indel_error_model_file:
            _LOG.info(f'Indel error model: {self.indel_error_model_name} from file {self.indel_error_model_file}')
        else:
            _LOG.info(f'Indel error model: built-in {self.indel_error_model_name}')
        _LOG.info(f'gVCF block tolerances: {self.block_percent_tol}% / {self.block_abs_tol} '
                  f'(label {self.block_label})')
