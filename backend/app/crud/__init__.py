from .user import *
from .connection import *
