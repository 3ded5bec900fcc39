"""
Indel error rate models and gVCF reference block compression for germline small variant calling.
"""

__version__ = "1.0.0"
