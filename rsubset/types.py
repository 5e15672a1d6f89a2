"""Type aliases for rsubset.

This module defines type aliases used throughout the package for clarity
and consistency. The actual container classes are in core.py.
"""

from collections.abc import Hashable, Sequence
from typing import Any, Union

Position = int
"""Alias for a 1-based position along an axis, as written by the caller.

Internally positions are converted to 0-based numpy integer arrays.
"""

Name = Hashable
"""Alias for an element, column or dimension name.

Names are compared by equality; in practice they are strings.
"""

RawIndex = Union[Any, Sequence[Any], None]
"""Alias for anything a caller may pass as an index before normalization.

A scalar, a sequence of positions, booleans or names, a
:class:`~rsubset.core.Vector`, a numpy array, ``EMPTY`` or ``None``.
"""
