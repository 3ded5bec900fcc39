from frozendict import frozendict

"""
Constants shared across callkit
"""
# Default gVCF block settings. The label encodes the two tolerances: min(30%, 3) -> "min30p3a"
DEFAULT_BLOCK_PERCENT_TOL = 30
DEFAULT_BLOCK_ABS_TOL = 3
DEFAULT_BLOCK_LABEL = "BLOCKAVG_min30p3a"

DEFAULT_INDEL_ERROR_MODEL_NAME = "logLinear"

# Missing values in tab-delimited inputs and outputs
MISSING_VALUE = "."

# Column order for the tables written by the command line tools
INDEL_RATE_COLUMNS = ("pattern_size", "repeat_count", "insertion_rate", "deletion_rate")
INDEL_SCORE_COLUMNS = ("chrom", "pos", "ref", "alt", "type", "repeat_unit", "ref_repeat_count",
                       "indel_repeat_count", "ref_to_indel", "indel_to_ref",
                       "candidate_ref_to_indel", "candidate_indel_to_ref")
SITE_COLUMNS = ("chrom", "pos", "ref", "kind", "gqx", "dpu", "dpf", "nonref", "ploidy", "filters", "eligible")
BLOCK_COLUMNS = ("chrom", "pos", "end", "count", "nonref", "filters", "label",
                 "gqx_mean", "gqx_sd", "gqx_min", "gqx_max",
                 "dpu_mean", "dpu_sd", "dpu_min", "dpu_max",
                 "dpf_mean", "dpf_sd", "dpf_min", "dpf_max")

# Values accepted as true in site table boolean columns
TRUE_STRINGS = frozenset({"1", "true", "True", "TRUE", "yes", "y"})

# Output file suffixes, keyed by command
OUTPUT_SUFFIXES = frozendict({
    "indel-rates": "indel_rates.tsv",
    "score-indels": "indel_scores.tsv",
    "gvcf-blocks": "gvcf_blocks.tsv",
})
