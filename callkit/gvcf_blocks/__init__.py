from .runner import gvcf_blocks_runner
