"""Sharded metric catalog.

Data-driven description of every engine statistic exported per shard. The
same catalog is applied to each shard of every table; labels are keyed on by
downstream dashboards and alerts, so entries are only ever appended.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..engine.types import HistogramType, TickerType

__all__ = [
    "MetricKind",
    "CatalogEntry",
    "SHARDED_CATALOG",
    "HISTOGRAM_ENTRIES",
    "COUNTER_ENTRIES",
    "catalog_labels",
]


class MetricKind(Enum):
    HISTOGRAM = "histogram"
    COUNTER = "counter"
    GAUGE = "gauge"


@dataclass(frozen=True)
class CatalogEntry:
    label: str
    kind: MetricKind
    source: HistogramType | TickerType

    def __post_init__(self) -> None:
        expected = HistogramType if self.kind is MetricKind.HISTOGRAM else TickerType
        if not isinstance(self.source, expected):
            raise TypeError(f"{self.label}: {self.kind.value} entry needs a {expected.__name__} source")


def _h(label: str, source: HistogramType) -> CatalogEntry:
    return CatalogEntry(label, MetricKind.HISTOGRAM, source)


def _c(label: str, source: TickerType) -> CatalogEntry:
    return CatalogEntry(label, MetricKind.COUNTER, source)


HISTOGRAM_ENTRIES: tuple[CatalogEntry, ...] = (
    _h("GetMicros", HistogramType.DB_GET),
    _h("WriteMicros", HistogramType.DB_WRITE),
    _h("CompactionTimeMicros", HistogramType.COMPACTION_TIME),
    _h("SubcompactionSetupTimeMicros", HistogramType.SUBCOMPACTION_SETUP_TIME),
    _h("TableSyncMicros", HistogramType.TABLE_SYNC_MICROS),
    _h("CompactionOutfileSyncMicros", HistogramType.COMPACTION_OUTFILE_SYNC_MICROS),
    _h("WALFileSyncMicros", HistogramType.WAL_FILE_SYNC_MICROS),
    _h("ManifestSyncMicros", HistogramType.MANIFEST_FILE_SYNC_MICROS),
    _h("TableOpenIOMicros", HistogramType.TABLE_OPEN_IO_MICROS),
    _h("MultiGet", HistogramType.DB_MULTIGET),
    _h("ReadBlockCompactionMicros", HistogramType.READ_BLOCK_COMPACTION_MICROS),
    _h("ReadBlockGetMicros", HistogramType.READ_BLOCK_GET_MICROS),
    _h("WriteRawBlockMicros", HistogramType.WRITE_RAW_BLOCK_MICROS),
    _h("StallL0SlowdownCount", HistogramType.STALL_L0_SLOWDOWN_COUNT),
    _h("MemtableCompactionCount", HistogramType.STALL_MEMTABLE_COMPACTION_COUNT),
    _h("StallL0NumFilesCount", HistogramType.STALL_L0_NUM_FILES_COUNT),
    _h("HardRateLimitDelayCount", HistogramType.HARD_RATE_LIMIT_DELAY_COUNT),
    _h("SoftRateLimitDelayCount", HistogramType.SOFT_RATE_LIMIT_DELAY_COUNT),
    _h("NumFilesInSingleCompaction", HistogramType.NUM_FILES_IN_SINGLE_COMPACTION),
    _h("DbSeek", HistogramType.DB_SEEK),
    _h("WriteStall", HistogramType.WRITE_STALL),
    _h("SstReadMs", HistogramType.SST_READ_MICROS),
    _h("NumSubCompactionsScheduled", HistogramType.NUM_SUBCOMPACTIONS_SCHEDULED),
    _h("BytesPerRead", HistogramType.BYTES_PER_READ),
    _h("BytesPerWrite", HistogramType.BYTES_PER_WRITE),
    _h("BytesPerMultiget", HistogramType.BYTES_PER_MULTIGET),
    _h("BytesCompressed", HistogramType.BYTES_COMPRESSED),
    _h("BytesDecompressed", HistogramType.BYTES_DECOMPRESSED),
    _h("CompressionTimeUs", HistogramType.COMPRESSION_TIMES_NANOS),
    _h("DecompressionTimeUs", HistogramType.DECOMPRESSION_TIMES_NANOS),
    _h("ReadNumMergeOperands", HistogramType.READ_NUM_MERGE_OPERANDS),
    # Sentinel type kept as exported; drop only once the engine confirms it is never populated.
    _h("HistogramEnumMaxHistogram", HistogramType.HISTOGRAM_ENUM_MAX),
)

COUNTER_ENTRIES: tuple[CatalogEntry, ...] = (
    _c("CompactReadBytes", TickerType.COMPACT_READ_BYTES),
    _c("CompactWriteBytes", TickerType.COMPACT_WRITE_BYTES),
    _c("CompactionKeyDropUser", TickerType.COMPACTION_KEY_DROP_USER),
    _c("NumberKeysWritten", TickerType.NUMBER_KEYS_WRITTEN),
    _c("MemtableHit", TickerType.MEMTABLE_HIT),
    _c("MemtableMiss", TickerType.MEMTABLE_MISS),
    _c("BlockCacheHit", TickerType.BLOCK_CACHE_HIT),
    _c("BlockCacheMiss", TickerType.BLOCK_CACHE_MISS),
    _c("StallMicros", TickerType.STALL_MICROS),
    _c("DBMutexWaitMicros", TickerType.DB_MUTEX_WAIT_MICROS),
    _c("MergeOperationTotalTime", TickerType.MERGE_OPERATION_TOTAL_TIME),
)

SHARDED_CATALOG: tuple[CatalogEntry, ...] = HISTOGRAM_ENTRIES + COUNTER_ENTRIES


def catalog_labels() -> list[str]:
    return [e.label for e in SHARDED_CATALOG]
