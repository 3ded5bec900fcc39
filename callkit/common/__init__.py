from .constants_and_defaults import *
from .exceptions import *
from .io import *
from .logging import *
from .stream_stat import *
