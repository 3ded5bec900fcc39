"""
Parameters of the built-in indel error models.
"""

import numpy as np

# Log-linear homopolymer ramp, the legacy default. This model also always drives indel candidate generation.
log_linear_low_error_rate = np.log(5e-5)
log_linear_high_error_rate = np.log(3e-4)
# zero-indexed end of the ramp, so the high rate is reached at an hpol length of switch point + 1
log_linear_repeat_count_switch_point = 15
log_linear_repeating_pattern_size = 1

# Simplified adaptive model: one value for the non-STR state and a log-linear ramp per repeat unit size.
# The values are averages between typical Nano and PCR-free estimates.
adaptive_non_str_rate = 8e-3
adaptive_repeating_pattern_sizes = (1, 2)
adaptive_log_low_error_rates = (np.log(4.9e-3), np.log(1.0e-2))
adaptive_log_high_error_rates = (np.log(4.5e-2), np.log(1.8e-2))
adaptive_repeat_count_switch_points = (16, 9)
