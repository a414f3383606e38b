from .user import *
from .network import *
