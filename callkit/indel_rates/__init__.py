from .runner import indel_rates_runner
