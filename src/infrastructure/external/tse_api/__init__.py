"""TSE開票速報クライアントパッケージ."""

from .client import TseResultsClient
from .service import TseTallyFeedService
from .urls import CARGO_CODES, TseUrlBuilder


__all__ = [
    "CARGO_CODES",
    "TseResultsClient",
    "TseTallyFeedService",
    "TseUrlBuilder",
]
