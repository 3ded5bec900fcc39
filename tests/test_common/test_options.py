import textwrap
from pathlib import Path

import pytest

from callkit.common import DEFAULT_BLOCK_LABEL, DEFAULT_BLOCK_PERCENT_TOL, DEFAULT_BLOCK_ABS_TOL
from callkit.common.options import Options


def _write_config(tmp_path: Path, text: str) -> Path:
    cfg = tmp_path / "callkit.yml"
    cfg.write_text(textwrap.dedent(text), encoding="utf-8")
    return cfg


def test_default_options(tmp_path: Path):
    opts = Options(output_dir=tmp_path)
    assert opts.output_dir == tmp_path
    assert opts.output_prefix == "callkit"
    assert opts.indel_error_model_name == "logLinear"
    assert opts.indel_error_model_file is None
    assert opts.block_percent_tol == DEFAULT_BLOCK_PERCENT_TOL
    assert opts.block_abs_tol == DEFAULT_BLOCK_ABS_TOL
    assert opts.block_label == DEFAULT_BLOCK_LABEL
    assert opts.overwrite_output is False


def test_from_cli_without_config_uses_defaults(tmp_path: Path):
    opts = Options.from_cli(tmp_path / "out", "pref", None)
    assert opts.output_dir == tmp_path / "out"
    assert (tmp_path / "out").is_dir()
    assert opts.block_percent_tol == DEFAULT_BLOCK_PERCENT_TOL
    assert opts.indel_error_model_name == "logLinear"


def test_from_cli_reads_yaml(tmp_path: Path):
    model_file = tmp_path / "models.json"
    model_file.write_text("{}", encoding="utf-8")
    cfg = _write_config(tmp_path, f"""
        indel_error_model_name: myModel
        indel_error_model_file: {model_file}
        block_percent_tol: 10
        block_abs_tol: 2
        block_label: BLOCKAVG_min10p2a
        overwrite_output: true
        not_an_option: 5
    """)
    opts = Options.from_cli(tmp_path, "pref", cfg)
    assert opts.indel_error_model_name == "myModel"
    assert opts.indel_error_model_file == model_file
    assert opts.block_percent_tol == 10
    assert opts.block_abs_tol == 2
    assert opts.block_label == "BLOCKAVG_min10p2a"
    assert opts.overwrite_output is True
    assert not hasattr(opts, "not_an_option")


def test_dot_value_keeps_default(tmp_path: Path):
    cfg = _write_config(tmp_path, """
        block_percent_tol: .
        block_abs_tol: 5
    """)
    opts = Options.from_cli(tmp_path, "pref", cfg)
    assert opts.block_percent_tol == DEFAULT_BLOCK_PERCENT_TOL
    assert opts.block_abs_tol == 5


@pytest.mark.parametrize("line", [
    "block_percent_tol: ten",
    "block_abs_tol: true",
    "block_percent_tol: 150",
    "block_abs_tol: -1",
    "overwrite_output: 3",
])
def test_bad_config_values_exit(tmp_path: Path, line: str):
    cfg = _write_config(tmp_path, line + "\n")
    with pytest.raises(SystemExit) as ei:
        Options.from_cli(tmp_path, "pref", cfg)
    assert ei.value.code == 1


def test_missing_model_file_exits(tmp_path: Path):
    cfg = _write_config(tmp_path, f"indel_error_model_file: {tmp_path / 'missing.json'}\n")
    with pytest.raises(SystemExit) as ei:
        Options.from_cli(tmp_path, "pref", cfg)
    assert ei.value.code == 5


def test_output_path_respects_overwrite(tmp_path: Path):
    opts = Options(output_dir=tmp_path, output_prefix="run")
    path = opts.output_path("gvcf_blocks.tsv")
    assert path == tmp_path / "run.gvcf_blocks.tsv"

    path.write_text("x", encoding="utf-8")
    with pytest.raises(SystemExit) as ei:
        opts.output_path("gvcf_blocks.tsv")
    assert ei.value.code == 3

    opts.overwrite_output = True
    assert opts.output_path("gvcf_blocks.tsv") == path
