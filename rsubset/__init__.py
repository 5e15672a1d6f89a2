"""rsubset: R's subsetting semantics for Python containers.

The rsubset package reproduces how R selects from and assigns into its
data structures:
- Atomic vectors, generic lists, matrices/arrays and data frames
- Positive, negative, logical, character, empty and zero-length indices
- ``[`` (possibly many), ``[[`` (exactly one) and ``$`` (partial names)
- Simplifying versus preserving results
- In-place assignment with recycling
"""

import logging
from importlib import metadata

# Applications built on the operators
from .applications import (
    drop_columns,
    expand_counts,
    filter_rows,
    lookup,
    match_rows,
    order,
    order_by,
    sample_rows,
    which,
)

# Assignment
from .assign import assign, assign_dollar, assign_element

# Containers and markers
from .core import (
    EMPTY,
    NA,
    Array,
    RList,
    Vector,
    array,
    dim,
    is_na,
    length,
    matrix,
    names,
)

# Errors and warnings
from .errors import (
    DimensionMismatchError,
    InvalidIndexError,
    LengthMismatchError,
    MixedSignError,
    NoNameMappingError,
    NoSuchNameError,
    OutOfBoundsError,
    PartialMatchWarning,
    RecyclingWarning,
    SubsetError,
)

# Index normalization
from .index import IndexKind, NormalizedIndex, normalize_index

# Options
from .options import SubsetOptions, get_options, option_context, set_options

# Selection
from .select import Hit, Selection, dollar, extract, locate, simplify, subset

try:
    __version__ = metadata.version("rsubset")
except metadata.PackageNotFoundError:
    # Fallback for development installs
    __version__ = "0.1.0"

__all__ = [
    # Containers
    "Vector",
    "RList",
    "Array",
    "matrix",
    "array",
    "NA",
    "EMPTY",
    "is_na",
    "names",
    "dim",
    "length",
    # Index normalization
    "IndexKind",
    "NormalizedIndex",
    "normalize_index",
    # Selection
    "subset",
    "extract",
    "dollar",
    "locate",
    "simplify",
    "Selection",
    "Hit",
    # Assignment
    "assign",
    "assign_element",
    "assign_dollar",
    # Applications
    "which",
    "lookup",
    "order",
    "order_by",
    "match_rows",
    "sample_rows",
    "expand_counts",
    "drop_columns",
    "filter_rows",
    # Options
    "SubsetOptions",
    "get_options",
    "set_options",
    "option_context",
    # Errors
    "SubsetError",
    "MixedSignError",
    "NoNameMappingError",
    "OutOfBoundsError",
    "NoSuchNameError",
    "InvalidIndexError",
    "DimensionMismatchError",
    "LengthMismatchError",
    "RecyclingWarning",
    "PartialMatchWarning",
    # Logging
    "get_logger",
]


# Configure package-wide logging
def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger for the rsubset package.

    Parameters
    ----------
    name : str | None, optional
        Logger name. If None, uses the package name.

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    if name is None:
        name = __name__.split(".")[0]
    return logging.getLogger(name)


# Set up default logging configuration
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
