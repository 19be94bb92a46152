# Import the case modules so every scenario gets registered on import
from . import lines, direction, value, edge  # noqa: F401
