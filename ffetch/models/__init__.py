"""Wire models for the index endpoint.

Architecture:
    Pydantic v2 models validate the JSON envelope of each index page before
    its entries enter the pipeline. Models are frozen; entries inside `data`
    are handed downstream as plain dicts.
"""

from .page import PageResponse

__all__ = ["PageResponse"]
