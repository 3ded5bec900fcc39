import json
import math
from pathlib import Path

import pytest

from callkit.common import IndelErrorModelError
from callkit.models import IndelErrorModel, IndelErrorModelType, IndelErrorRateType, get_rate_type, \
    get_log_linear_indel_error_model, get_simplified_adaptive_parameters, build_indel_error_rates
from callkit.variants import IndelKey, AlleleReportInfo


def _log_linear(count: int) -> float:
    frac = min(count - 1, 15) / 15
    return math.exp((1 - frac) * math.log(5e-5) + frac * math.log(3e-4))


@pytest.fixture
def model_file(tmp_path: Path) -> Path:
    path = tmp_path / "models.json"
    path.write_text(json.dumps({"IndelModels": [{
        "ModelName": "asymmetric",
        "MaxMotifLength": 1,
        "MaxTractLength": 3,
        "Model": [[[0.01, 0.02], [0.03, 0.04], [0.05, 0.06]]],
    }]}), encoding="utf-8")
    return path


def test_resolve_model_type(model_file: Path):
    assert IndelErrorModelType.resolve("logLinear", None) == IndelErrorModelType.LOG_LINEAR
    assert IndelErrorModelType.resolve("adaptiveDefault", "") == IndelErrorModelType.ADAPTIVE_DEFAULT
    assert IndelErrorModelType.resolve("anything", model_file) == IndelErrorModelType.FILE
    with pytest.raises(IndelErrorModelError):
        IndelErrorModelType.resolve("noSuchModel", None)


def test_log_linear_model():
    rates = get_log_linear_indel_error_model()
    rates.finalize_rates()
    assert rates.max_repeating_pattern_size == 1
    assert rates.max_repeat_count(1) == 16
    assert rates.get_rate(1, 1, IndelErrorRateType.INSERT) == pytest.approx(5e-5)
    assert rates.get_rate(1, 16, IndelErrorRateType.DELETE) == pytest.approx(3e-4)
    assert rates.get_rate(1, 100, IndelErrorRateType.INSERT) == pytest.approx(3e-4)
    for count in range(1, 17):
        assert rates.get_rate(1, count, IndelErrorRateType.INSERT) == pytest.approx(_log_linear(count))
        assert rates.get_rate(1, count, IndelErrorRateType.INSERT) == \
            rates.get_rate(1, count, IndelErrorRateType.DELETE)


def test_simplified_adaptive_model():
    rates = get_simplified_adaptive_parameters()
    rates.finalize_rates()
    assert rates.max_repeating_pattern_size == 2
    assert rates.max_repeat_count(1) == 16
    assert rates.max_repeat_count(2) == 9
    assert rates.get_rate(1, 1, IndelErrorRateType.INSERT) == pytest.approx(8e-3)
    assert rates.get_rate(2, 1, IndelErrorRateType.DELETE) == pytest.approx(8e-3)
    assert rates.get_rate(1, 2, IndelErrorRateType.INSERT) == pytest.approx(4.9e-3)
    assert rates.get_rate(1, 16, IndelErrorRateType.INSERT) == pytest.approx(4.5e-2)
    assert rates.get_rate(1, 30, IndelErrorRateType.DELETE) == pytest.approx(4.5e-2)
    assert rates.get_rate(2, 2, IndelErrorRateType.INSERT) == pytest.approx(1.0e-2)
    assert rates.get_rate(2, 9, IndelErrorRateType.INSERT) == pytest.approx(1.8e-2)
    # unsupported repeat unit sizes are treated as non-STR
    assert rates.get_rate(3, 5, IndelErrorRateType.INSERT) == pytest.approx(8e-3)


def test_build_rates_from_file(model_file: Path):
    rates, metadata = build_indel_error_rates("asymmetric", model_file)
    assert rates.is_finalized
    assert metadata.name == "asymmetric"

    rates, metadata = build_indel_error_rates("logLinear")
    assert metadata is None


def test_file_model_without_non_str_rate(tmp_path: Path):
    path = tmp_path / "models.json"
    path.write_text(json.dumps({"IndelModels": [{
        "ModelName": "noBaseline",
        "MaxMotifLength": 2,
        "MaxTractLength": 2,
        "Model": [[], [[0.1, 0.1], [0.2, 0.2]]],
    }]}), encoding="utf-8")
    with pytest.raises(IndelErrorModelError) as ei:
        IndelErrorModel("noBaseline", path)
    assert ei.value.model_name == "noBaseline"


def test_unknown_model_name():
    with pytest.raises(IndelErrorModelError):
        IndelErrorModel("noSuchModel")


def test_get_rate_type():
    assert get_rate_type(IndelKey(5, 0, "A")) == IndelErrorRateType.INSERT
    assert get_rate_type(IndelKey(5, 2)) == IndelErrorRateType.DELETE
    assert get_rate_type(IndelKey(5, 2, "A")) is None


def test_insertion_rates_cross_lookup():
    model = IndelErrorModel("logLinear")
    info = AlleleReportInfo("A", 1, 5, 6)
    ref_to_indel, indel_to_ref = model.get_indel_error_rate(IndelKey(3, 0, "A"), info)
    assert ref_to_indel == pytest.approx(_log_linear(5))
    assert indel_to_ref == pytest.approx(_log_linear(6))


def test_deletion_uses_reverse_type(model_file: Path):
    model = IndelErrorModel("asymmetric", model_file)
    info = AlleleReportInfo("A", 1, 3, 2)
    ref_to_indel, indel_to_ref = model.get_indel_error_rate(IndelKey(3, 1), info)
    # deletion from 3 copies, then insertion from 2 copies; cells are [deletion, insertion]
    assert ref_to_indel == 0.05
    assert indel_to_ref == 0.04


def test_non_str_indel_uses_repeat_count_one(model_file: Path):
    model = IndelErrorModel("asymmetric", model_file)
    ref_to_indel, indel_to_ref = model.get_indel_error_rate(IndelKey(3, 0, "T"), AlleleReportInfo("T", 1, 0, 1))
    assert ref_to_indel == 0.02
    assert indel_to_ref == 0.01


def test_complex_indel_uses_baseline_maximum(model_file: Path):
    model = IndelErrorModel("asymmetric", model_file)
    ref_to_indel, indel_to_ref = model.get_indel_error_rate(IndelKey(3, 2, "T"), AlleleReportInfo())
    assert ref_to_indel == indel_to_ref == 0.02

    model = IndelErrorModel("logLinear")
    ref_to_indel, indel_to_ref = model.get_indel_error_rate(IndelKey(3, 2, "T"), AlleleReportInfo())
    assert ref_to_indel == indel_to_ref == pytest.approx(5e-5)


def test_candidate_rates_are_always_log_linear():
    model = IndelErrorModel("adaptiveDefault")
    info = AlleleReportInfo("A", 1, 1, 2)
    key = IndelKey(3, 0, "A")
    assert model.get_indel_error_rate(key, info)[0] == pytest.approx(8e-3)
    candidate = model.get_indel_error_rate(key, info, is_candidate_rates=True)
    assert candidate[0] == pytest.approx(5e-5)
    assert candidate[1] == pytest.approx(_log_linear(2))
    assert model.candidate_error_rates.is_finalized
    assert model.candidate_error_rates.max_repeating_pattern_size == 1


def test_long_repeat_unit_falls_back_to_non_str():
    model = IndelErrorModel("adaptiveDefault")
    info = AlleleReportInfo("CAG", 3, 4, 5)
    ref_to_indel, indel_to_ref = model.get_indel_error_rate(IndelKey(3, 0, "CAG"), info)
    assert ref_to_indel == pytest.approx(8e-3)
    assert indel_to_ref == pytest.approx(8e-3)
