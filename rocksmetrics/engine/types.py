"""Engine statistic enumerations and value records.

Enum values are the engine's own statistic names, so a binding can pass
`member.value` straight to the engine's name-based statistics lookup.
HistogramType lists the engine histograms surfaced by the table metrics
catalog, including the HISTOGRAM_ENUM_MAX sentinel. TickerType lists the
tickers surfaced by the same catalog. Neither is the engine's full set.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class HistogramType(Enum):
    DB_GET = "rocksdb.db.get.micros"
    DB_WRITE = "rocksdb.db.write.micros"
    COMPACTION_TIME = "rocksdb.compaction.times.micros"
    SUBCOMPACTION_SETUP_TIME = "rocksdb.subcompaction.setup.times.micros"
    TABLE_SYNC_MICROS = "rocksdb.table.sync.micros"
    COMPACTION_OUTFILE_SYNC_MICROS = "rocksdb.compaction.outfile.sync.micros"
    WAL_FILE_SYNC_MICROS = "rocksdb.wal.file.sync.micros"
    MANIFEST_FILE_SYNC_MICROS = "rocksdb.manifest.file.sync.micros"
    TABLE_OPEN_IO_MICROS = "rocksdb.table.open.io.micros"
    DB_MULTIGET = "rocksdb.db.multiget.micros"
    READ_BLOCK_COMPACTION_MICROS = "rocksdb.read.block.compaction.micros"
    READ_BLOCK_GET_MICROS = "rocksdb.read.block.get.micros"
    WRITE_RAW_BLOCK_MICROS = "rocksdb.write.raw.block.micros"
    STALL_L0_SLOWDOWN_COUNT = "rocksdb.l0.slowdown.count"
    STALL_MEMTABLE_COMPACTION_COUNT = "rocksdb.memtable.compaction.count"
    STALL_L0_NUM_FILES_COUNT = "rocksdb.num.files.stall.count"
    HARD_RATE_LIMIT_DELAY_COUNT = "rocksdb.hard.rate.limit.delay.count"
    SOFT_RATE_LIMIT_DELAY_COUNT = "rocksdb.soft.rate.limit.delay.count"
    NUM_FILES_IN_SINGLE_COMPACTION = "rocksdb.numfiles.in.singlecompaction"
    DB_SEEK = "rocksdb.db.seek.micros"
    WRITE_STALL = "rocksdb.db.write.stall"
    SST_READ_MICROS = "rocksdb.sst.read.micros"
    NUM_SUBCOMPACTIONS_SCHEDULED = "rocksdb.num.subcompactions.scheduled"
    BYTES_PER_READ = "rocksdb.bytes.per.read"
    BYTES_PER_WRITE = "rocksdb.bytes.per.write"
    BYTES_PER_MULTIGET = "rocksdb.bytes.per.multiget"
    BYTES_COMPRESSED = "rocksdb.bytes.compressed"
    BYTES_DECOMPRESSED = "rocksdb.bytes.decompressed"
    COMPRESSION_TIMES_NANOS = "rocksdb.compression.times.nanos"
    DECOMPRESSION_TIMES_NANOS = "rocksdb.decompression.times.nanos"
    READ_NUM_MERGE_OPERANDS = "rocksdb.read.num.merge_operands"
    HISTOGRAM_ENUM_MAX = "rocksdb.histogram.enum.max"


class TickerType(Enum):
    COMPACT_READ_BYTES = "rocksdb.compact.read.bytes"
    COMPACT_WRITE_BYTES = "rocksdb.compact.write.bytes"
    COMPACTION_KEY_DROP_USER = "rocksdb.compaction.key.drop.user"
    NUMBER_KEYS_WRITTEN = "rocksdb.number.keys.written"
    MEMTABLE_HIT = "rocksdb.memtable.hit"
    MEMTABLE_MISS = "rocksdb.memtable.miss"
    BLOCK_CACHE_HIT = "rocksdb.block.cache.hit"
    BLOCK_CACHE_MISS = "rocksdb.block.cache.miss"
    STALL_MICROS = "rocksdb.stall.micros"
    DB_MUTEX_WAIT_MICROS = "rocksdb.db.mutex.wait.micros"
    MERGE_OPERATION_TOTAL_TIME = "rocksdb.merge.operation.time.nanos"


@dataclass(frozen=True)
class HistogramData:
    """Point-in-time snapshot of one engine histogram."""
    median: float = 0.0
    percentile95: float = 0.0
    percentile99: float = 0.0
    average: float = 0.0
    standard_deviation: float = 0.0
    max: float = 0.0
    count: int = 0
    sum: float = 0.0


@dataclass(frozen=True)
class TableIdentity:
    """Logical table as seen by the metrics layer.

    table_id is the opaque handle the engine accessor is keyed by.
    """
    keyspace: str
    name: str
    table_id: object = None


__all__ = ["HistogramType", "TickerType", "HistogramData", "TableIdentity"]
