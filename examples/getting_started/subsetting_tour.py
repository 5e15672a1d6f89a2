"""A tour of rsubset.

This example walks through the three selection operators and their
assignment forms:
1. Atomic vectors: positive, negative, logical and character indices
2. Lists: [ versus [[ and $
3. Matrices and arrays, including coordinate matrices
4. Data frames in list mode and matrix mode
5. Everyday applications built on subsetting
"""

import numpy as np
import pandas as pd

from rsubset import (
    EMPTY,
    NA,
    # Containers
    RList,
    Vector,
    array,
    # Assignment
    assign,
    assign_dollar,
    assign_element,
    # Selection
    dollar,
    # Applications
    expand_counts,
    extract,
    get_logger,
    lookup,
    match_rows,
    matrix,
    order_by,
    sample_rows,
    subset,
)

# Set up logging
logger = get_logger(__name__)


def demo_vectors():
    """Demonstrate the six kinds of index on an atomic vector."""
    logger.info("\n" + "=" * 60)
    logger.info("1. ATOMIC VECTORS")
    logger.info("=" * 60)

    x = Vector([2.1, 4.2, 3.3, 5.4], names=["a", "b", "c", "d"])
    examples = {
        "positive [3, 1]": [3, 1],
        "negative [-3, -1]": [-3, -1],
        "logical [True, False]": [True, False],
        "names ['d', 'c']": ["d", "c"],
        "empty": EMPTY,
        "zero-length": [],
        "past the end [7]": 7,
    }
    for label, index in examples.items():
        logger.info(f"  x[{label}] -> {subset(x, index)}")

    assign(x, [1, 2], value=0)
    logger.info(f"\nAfter assigning 0 to x[1:2]: {x}")


def demo_lists():
    """Demonstrate [ versus [[ on lists."""
    logger.info("\n" + "=" * 60)
    logger.info("2. LISTS")
    logger.info("=" * 60)

    lst = RList({"a": 1, "b": RList({"c": 2}), "abc": 3})
    logger.info(f"\nlst['a']     -> {subset(lst, 'a')}")
    logger.info(f"lst[['a']]   -> {extract(lst, 'a')}")
    logger.info(f"lst[[c('b', 'c')]] -> {extract(lst, ['b', 'c'])}")
    logger.info(f"lst$ab       -> {dollar(lst, 'ab')} (ambiguous prefix)")
    logger.info(f"lst[[9]]     -> {extract(lst, 9)}")

    assign_element(lst, "a", value=None)
    logger.info(f"\nAfter lst[['a']] <- NULL: {lst}")
    assign(lst, "b", value=RList([None]))
    logger.info(f"After lst['b'] <- list(NULL): {lst}")


def demo_arrays():
    """Demonstrate per-axis, flat and coordinate-matrix selection."""
    logger.info("\n" + "=" * 60)
    logger.info("3. MATRICES AND ARRAYS")
    logger.info("=" * 60)

    cells = [f"{i},{j}" for j in range(1, 6) for i in range(1, 6)]
    vals = matrix(cells, nrow=5)
    logger.info(f"\nvals[2, EMPTY]           -> {subset(vals, 2, EMPTY)}")
    logger.info(f"vals[2, EMPTY, drop=F]   -> {subset(vals, 2, EMPTY, drop=False)}")
    logger.info(f"vals[c(1, 25)]           -> {subset(vals, [1, 25])}")

    coords = np.array([[1, 1], [3, 1], [2, 4]])
    logger.info(f"vals[coordinate matrix]  -> {subset(vals, coords)}")

    cube = array(range(1, 25), (2, 3, 4))
    logger.info(f"\ncube[1, 1, EMPTY]        -> {subset(cube, 1, 1, EMPTY)}")


def demo_data_frames():
    """Demonstrate list mode and matrix mode on a data frame."""
    logger.info("\n" + "=" * 60)
    logger.info("4. DATA FRAMES")
    logger.info("=" * 60)

    df = pd.DataFrame({"x": [1, 2, 3], "y": [3, 2, 1], "z": ["a", "b", "c"]})
    logger.info(f"\ndf['x'] (list mode):\n{subset(df, 'x')}")
    logger.info(f"df[, 'x'] (matrix mode): {subset(df, EMPTY, 'x')}")
    logger.info(f"df[c(1, 5), ]:\n{subset(df, [1, 5], EMPTY)}")

    assign_dollar(df, "w", [NA, 0, 1])
    logger.info(f"\nAfter df$w <- c(NA, 0, 1):\n{df}")


def demo_applications():
    """Demonstrate applications of subsetting."""
    logger.info("\n" + "=" * 60)
    logger.info("5. APPLICATIONS")
    logger.info("=" * 60)

    table = Vector({"m": "Male", "f": "Female", "u": None})
    logger.info(f"\nLookup table: {lookup(table, ['m', 'f', 'u', 'f', 'f', 'm', 'm'])}")

    grades = pd.DataFrame(
        {
            "grade": [3, 2, 1],
            "desc": ["Excellent", "Good", "Poor"],
            "fail": [False, False, True],
        }
    )
    logger.info(f"\nMatching by hand:\n{match_rows(grades, [1, 2, 2, 3, 1], 'grade')}")

    df = pd.DataFrame({"x": [1, 2, 3], "y": [3, 2, 1], "n": [2, 0, 1]})
    logger.info(f"\nRandom rows:\n{sample_rows(df, seed=42)}")
    logger.info(f"\nOrdered by y:\n{order_by(df, 'y')}")
    logger.info(f"\nExpanded counts:\n{expand_counts(df, 'n')}")


def main():
    """Run all demonstrations."""
    logger.info("\n" + "#" * 60)
    logger.info("# RSUBSET TOUR")
    logger.info("#" * 60)

    demo_vectors()
    demo_lists()
    demo_arrays()
    demo_data_frames()
    demo_applications()

    logger.info("\n" + "#" * 60)
    logger.info("# TOUR COMPLETE")
    logger.info("#" * 60)


if __name__ == "__main__":
    main()
