"""All user-facing timing interfaces."""
from .decorators import measure, measure_block, measure_call
