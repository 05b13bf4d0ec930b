"""
Shared field types for request schemas.

Numeric inputs must be JSON numbers: strings such as ``"170"`` and
booleans are rejected, while ints and floats are both accepted. Whether a
number must be whole, and its range, is checked by the services so all
invalid values share one error shape.
"""
from typing import Union

from pydantic import StrictFloat, StrictInt

JSONNumber = Union[StrictInt, StrictFloat]
