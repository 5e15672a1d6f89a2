"""Sphinx configuration file for rsubset documentation."""

import os
import sys

# Add the package to the Python path
sys.path.insert(0, os.path.abspath(".."))

# Project information
project = "rsubset"
copyright = "2025, Gaurav Sood"
author = "Gaurav Sood"

# The full version, including alpha/beta/rc tags
release = "0.1.0"
version = "0.1.0"

# General configuration
extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.doctest",
    "sphinx.ext.napoleon",
    "sphinx.ext.intersphinx",
    "sphinx_autodoc_typehints",
    "sphinx_copybutton",
]

exclude_patterns = ["_build"]
language = "en"

# HTML output
html_theme = "furo"
html_title = f"{project} {version}"

# Autodoc configuration: public operators in the order they are defined
autodoc_member_order = "bysource"
autodoc_default_options = {
    "members": True,
    "undoc-members": False,
    "exclude-members": "__weakref__, __hash__",
}

# The package is documented in NumPy style only
napoleon_google_docstring = False
napoleon_numpy_docstring = True
napoleon_use_param = True
napoleon_use_rtype = True
napoleon_type_aliases = {
    "RawIndex": "rsubset.types.RawIndex",
    "Name": "rsubset.types.Name",
}

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable/", None),
    "pandas": ("https://pandas.pydata.org/docs/", None),
}

autodoc_typehints = "description"
typehints_fully_qualified = False

copybutton_prompt_text = r">>> |\.\.\. |\$ "
copybutton_prompt_is_regexp = True
