from .block_site_record import *
from .block_compressor import *
