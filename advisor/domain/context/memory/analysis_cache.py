from typing import Dict, Any, Callable, List, Optional
from datetime import datetime, timedelta
import structlog

from advisor.domain.models.conversation import AnalysisKind, AnalysisCacheEntry, utcnow

logger = structlog.get_logger(__name__)

# Fixed for every analysis kind
ANALYSIS_CACHE_TTL = timedelta(hours=1)


class AnalysisCache:
    """TTL cache of analysis results backed by a working-memory dict.

    Expired entries read as absent but stay in place; they are replaced the
    next time the same kind is cached.
    """

    def __init__(
        self,
        entries: Dict[AnalysisKind, AnalysisCacheEntry],
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.entries = entries
        self.clock = clock or utcnow

    def set(self, kind: AnalysisKind, data: Any) -> None:
        """Store a result, overwriting any previous entry for the kind"""

        self.entries[AnalysisKind(kind)] = AnalysisCacheEntry(data=data, timestamp=self.clock())

    def get(self, kind: AnalysisKind) -> Optional[Any]:
        """Get a result if cached and not expired"""

        try:
            kind = AnalysisKind(kind)
        except ValueError:
            return None

        entry = self.entries.get(kind)
        if entry is None:
            return None

        age = self.clock() - entry.timestamp
        if age > ANALYSIS_CACHE_TTL:
            logger.debug("Cache expired", kind=kind.value, age_seconds=age.total_seconds())
            return None

        return entry.data

    def has(self, kind: AnalysisKind) -> bool:
        return self.get(kind) is not None

    def completed_kinds(self) -> List[AnalysisKind]:
        """Kinds with a live entry, in the order they were first cached"""

        return [kind for kind in self.entries if self.has(kind)]
