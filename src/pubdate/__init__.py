"""pubdate - Resolve book publication dates by ISBN into a spreadsheet."""

from pubdate.cache.index import ResolutionIndex
from pubdate.client import PubdateClient, process_spreadsheet
from pubdate.core.models import PendingItem, ResolutionRecord, RunStatistics, SourceLookup
from pubdate.core.types import ResolutionStatus, SourceName
from pubdate.services.batch import BatchResolver

__version__ = "0.1.0"
__all__ = [
    # Client
    "PubdateClient",
    "process_spreadsheet",
    # Engine
    "BatchResolver",
    "ResolutionIndex",
    # Types
    "ResolutionStatus",
    "SourceName",
    # Models
    "PendingItem",
    "ResolutionRecord",
    "RunStatistics",
    "SourceLookup",
    # Version
    "__version__",
]
