"""
Reader for indel error model parameter files.

A parameter file is JSON (optionally gzip/bgzip compressed) holding one or more named models:

    {"IndelModels": [
        {"ModelName": "myModel", "MaxMotifLength": 2, "MaxTractLength": 3,
         "Model": [[[del_hpol1, ins_hpol1], [del_hpol2, ins_hpol2], [del_hpol3, ins_hpol3]],
                   [[del_dinuc_tract1, ins_dinuc_tract1], [del_dinuc1, ins_dinuc1], ...]]}
    ]}

The outer list of "Model" is indexed by motif (repeat unit) length - 1 and the inner lists by tract length - 1.
Each cell is a [deletion error, insertion error] pair. Only tract lengths that are whole multiples of the
motif length describe complete repeats, so the other cells are skipped.
"""

__all__ = [
    "IndelErrorModelMetadata",
    "deserialize_rate_set",
    "load_indel_error_model_file"
]

import json
import logging
from pathlib import Path

from ..common import open_input, IndelErrorModelError
from .indel_error_rate_set import IndelErrorRateSet

_LOG = logging.getLogger(__name__)


class IndelErrorModelMetadata:
    """
    Descriptive fields of a model entry, used to pick the entry matching a requested model name.

    :param name: The model name
    :param date: When the model was estimated, if recorded
    :param notes: Free text notes, if recorded
    """

    def __init__(self, name: str | None = None, date: str | None = None, notes: str | None = None):
        self.name = name
        self.date = date
        self.notes = notes

    @classmethod
    def deserialize(cls, model_value: dict) -> "IndelErrorModelMetadata":
        return cls(name=model_value.get("ModelName"),
                   date=model_value.get("Date"),
                   notes=model_value.get("Notes"))

    def __repr__(self):
        return f'{self.__class__.__name__}({self.name!r})'


def _get_size_field(key: str, model_value: dict, root: dict, model_name: str, model_file) -> int:
    value = model_value.get(key, root.get(key))
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise IndelErrorModelError(f"Indel error model '{model_name}' has a missing or invalid '{key}': {value}",
                                   model_name, model_file)
    return value


def deserialize_rate_set(model_value: dict,
                         root: dict | None = None,
                         model_file: Path | str | None = None) -> IndelErrorRateSet:
    """
    Build an (unfinalized) rate set from one model entry of a parameter file.

    :param model_value: The model entry
    :param root: The whole document, used for MaxMotifLength/MaxTractLength when the entry lacks them
    :param model_file: The file the entry came from, for error messages
    :return: The rate set holding the entry's rates
    """
    root = root or {}
    model_name = model_value.get("ModelName")
    max_repeating_pattern_size = _get_size_field("MaxMotifLength", model_value, root, model_name, model_file)
    max_tract_length = _get_size_field("MaxTractLength", model_value, root, model_name, model_file)
    models = model_value.get("Model")

    if not isinstance(models, list) or len(models) != max_repeating_pattern_size:
        found = len(models) if isinstance(models, list) else models
        raise IndelErrorModelError(f"Unexpected repeating pattern size in indel model '{model_name}': "
                                   f"MaxMotifLength is {max_repeating_pattern_size}, found {found}",
                                   model_name, model_file)

    rates = IndelErrorRateSet()
    for repeating_pattern_size in range(1, max_repeating_pattern_size + 1):
        pattern = models[repeating_pattern_size - 1]
        if not isinstance(pattern, list) or len(pattern) > max_tract_length:
            found = len(pattern) if isinstance(pattern, list) else pattern
            raise IndelErrorModelError(f"Unexpected tract length in indel model '{model_name}' for motif length "
                                       f"{repeating_pattern_size}: MaxTractLength is {max_tract_length}, "
                                       f"found {found}", model_name, model_file)

        for tract_length in range(1, len(pattern) + 1):
            if tract_length % repeating_pattern_size != 0:
                continue
            pattern_repeat_count = tract_length // repeating_pattern_size
            cell = pattern[tract_length - 1]
            if not isinstance(cell, list) or len(cell) != 2 or \
                    not all(isinstance(x, (int, float)) and not isinstance(x, bool) for x in cell):
                raise IndelErrorModelError(f"Indel model '{model_name}' cell for motif length {repeating_pattern_size}"
                                           f", tract length {tract_length} is not a [deletion, insertion] pair: "
                                           f"{cell}", model_name, model_file)
            deletion_error_prob, insertion_error_prob = cell
            rates.add_rate(repeating_pattern_size, pattern_repeat_count, insertion_error_prob, deletion_error_prob)

    return rates


def load_indel_error_model_file(model_file: Path | str,
                                model_name: str) -> tuple[IndelErrorModelMetadata, IndelErrorRateSet]:
    """
    Read a parameter file and return the rates of the model with the given name.

    :param model_file: Path to the JSON parameter file
    :param model_name: The model to select from the file
    :return: The selected model's metadata and its (unfinalized) rates
    """
    _LOG.debug(f"Reading indel error models from {model_file}")
    try:
        with open_input(model_file) as model_handle:
            root = json.load(model_handle)
    except (OSError, ValueError) as err:
        raise IndelErrorModelError(f"Cannot read indel error model file '{model_file}': {err}",
                                   model_name, model_file) from err

    models = root.get("IndelModels") if isinstance(root, dict) else None
    if isinstance(models, list):
        for model_value in models:
            if not isinstance(model_value, dict):
                continue
            metadata = IndelErrorModelMetadata.deserialize(model_value)
            if metadata.name != model_name:
                continue
            return metadata, deserialize_rate_set(model_value, root, model_file)

    raise IndelErrorModelError(f"Unrecognized indel error model name: '{model_name}' in model file '{model_file}'",
                               model_name, model_file)
