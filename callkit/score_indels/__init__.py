from .runner import score_indels_runner
