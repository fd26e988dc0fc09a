import os

import synthlc

html_baseurl = os.environ.get("READTHEDOCS_CANONICAL_URL", "")
if os.environ.get("READTHEDOCS", "") == "True":
    html_context = {"READTHEDOCS": True}

language = "en"
master_doc = "index"

extensions = [
    "sphinx.ext.mathjax",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "sphinx_design",
    "myst_nb",
    "IPython.sphinxext.ipython_console_highlighting",
    "autoapi.extension",
]

autoapi_dirs = ["../src"]
autoapi_ignore = ["*_version*", "*/types*", "*/test_utils*"]
autoapi_options = [
    "members",
    "undoc-members",
    "show-inheritance",
    "show-module-summary",
    "special-members",
]

suppress_warnings = ["autoapi.python_import_resolution"]

myst_enable_extensions = ["dollarmath", "colon_fence"]
source_suffix = {
    ".rst": "restructuredtext",
    ".md": "myst-nb",
}

# General information about the project.
project = "synthlc"
version = synthlc.__version__
release = synthlc.__version__

exclude_patterns = ["_build"]
html_theme = "sphinx_book_theme"
html_title = "synthlc documentation"
html_show_sourcelink = False
html_theme_options = {
    "path_to_docs": "docs",
    "use_sidenotes": True,
}
nb_execution_mode = "off"
