"""Application package for the `my:appli` web skeleton.

The package exposes the FastAPI application (`appli.main`), its settings
and database helpers, and the build descriptor (`appli.build`) used by
developers to launch the packaged app. Individual modules contain the
concrete implementations and documentation.
"""

MODULE_ID = "my:appli"
__version__ = "0.0.1"
