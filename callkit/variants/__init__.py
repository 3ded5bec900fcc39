from .indel_key import *
from .allele_report_info import *
from .site_locus import *
