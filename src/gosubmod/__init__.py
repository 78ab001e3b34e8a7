"""gosubmod: manage local replace directives for Go submodules."""

__version__ = "0.3.0"
