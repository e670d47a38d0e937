"""reltag — next release tag resolver for year/update release lines."""

__version__ = "0.1.0"
