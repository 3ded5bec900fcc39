from .indel_error_rate_set import *
from .adaptive_indel_error_model import *
from .indel_model_file import *
from .indel_error_model import *
