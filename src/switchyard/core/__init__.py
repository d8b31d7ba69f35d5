"""Response model, converter protocol and transport.

``HttpFetcher`` lives in :mod:`switchyard.core.fetcher` and is not imported
here, since it builds on the dispatch layer which itself uses these types.
"""

from .protocols import Converter, Response

__all__ = ["Converter", "Response"]
