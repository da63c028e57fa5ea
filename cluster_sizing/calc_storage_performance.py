"""
Estimativa de desempenho de storage (IOPS, throughput, latência).

Modelo de fatores por nível RAID, mídia (SSD/HDD) e perfil de I/O:

    IOPS total   = IOPS_base(mídia) × discos × fator_RAID × fator_workload
    IOPS leitura = total × %leitura   (× 1.2 em RAID 1)
    IOPS escrita = total × %escrita   (× 0.8 em RAID 5)
    Throughput   = IOPS × bloco_KB / 1024   (MB/s)
    Latência     = latência_base(mídia) × fator_latência_RAID (escrita × 1.5)

É uma estimativa de ordem de grandeza para comparar layouts, não um benchmark.
"""

import math
from dataclasses import dataclass
from enum import Enum

from .errors import ConfigurationError, ValidationError
from .redundancy import RedundancyConfig, RedundancyScheme


class RaidLevel(Enum):
    """Nível RAID usado no modelo de desempenho."""
    RAID1 = "RAID 1"
    RAID5 = "RAID 5"
    RAID6 = "RAID 6"
    RAID10 = "RAID 10"


class StorageMedia(Enum):
    SSD = "SSD"
    HDD = "HDD"


class IOWorkload(Enum):
    """Perfil de I/O dominante."""
    RANDOM_READ = "random_read"
    SEQUENTIAL_WRITE = "sequential_write"
    MIXED = "mixed"


# Tamanhos de bloco oferecidos (KB)
BLOCK_SIZES_KB = (4, 8, 16, 32, 64, 128, 256, 512, 1024)

# (IOPS por disco, latência base em ms)
MEDIA_BASELINE = {
    StorageMedia.SSD: (10000, 0.1),
    StorageMedia.HDD: (100, 10.0),
}

RAID_IOPS_FACTORS = {
    RaidLevel.RAID1: 1.0,
    RaidLevel.RAID5: 0.8,
    RaidLevel.RAID6: 0.7,
    RaidLevel.RAID10: 1.2,
}

RAID_LATENCY_FACTORS = {
    RaidLevel.RAID1: 1.0,
    RaidLevel.RAID5: 1.2,
    RaidLevel.RAID6: 1.4,
    RaidLevel.RAID10: 1.1,
}

WORKLOAD_FACTORS = {
    IOWorkload.RANDOM_READ: 1.0,
    IOWorkload.SEQUENTIAL_WRITE: 1.5,
    IOWorkload.MIXED: 1.2,
}

RAID1_READ_BONUS = 1.2      # Leitura servida por qualquer cópia
RAID5_WRITE_PENALTY = 0.8   # Read-modify-write da paridade
WRITE_LATENCY_FACTOR = 1.5


@dataclass(frozen=True)
class StoragePerformanceInput:
    """Entrada da estimativa de desempenho."""
    raid_level: RaidLevel
    media: StorageMedia
    disk_count: int
    disk_size_gb: float
    block_size_kb: int = 4
    workload: IOWorkload = IOWorkload.RANDOM_READ
    read_percent: float = 50.0

    def validate(self) -> None:
        """Valida a entrada."""
        for field in ("disk_count", "disk_size_gb", "block_size_kb", "read_percent"):
            if not math.isfinite(getattr(self, field)):
                raise ValidationError(f"{field} deve ser finito: {getattr(self, field)}")
        if self.disk_count < 0:
            raise ValidationError(f"disk_count deve ser >= 0: {self.disk_count}")
        if self.disk_size_gb < 0:
            raise ValidationError(f"disk_size_gb deve ser >= 0: {self.disk_size_gb}")
        if self.block_size_kb <= 0:
            raise ValidationError(f"block_size_kb deve ser > 0: {self.block_size_kb}")
        if not 0 <= self.read_percent <= 100:
            raise ValidationError(f"read_percent deve estar em [0, 100]: {self.read_percent}")


@dataclass(frozen=True)
class StoragePerformance:
    """Resultado da estimativa de desempenho do conjunto de discos."""
    raid_level: RaidLevel
    media: StorageMedia
    disk_count: int

    # IOPS
    iops_total: float
    iops_read: float
    iops_write: float
    iops_per_gb: float

    # Throughput (MB/s)
    throughput_read_mbs: float
    throughput_write_mbs: float
    throughput_total_mbs: float

    # Latência (ms)
    latency_read_ms: float
    latency_write_ms: float
    latency_average_ms: float
    latency_max_ms: float


def raid_level_for(config: RedundancyConfig) -> RaidLevel:
    """
    Nível RAID equivalente a uma configuração de redundância.

    Espelhamento → RAID 1; erasure coding FTT=1 → RAID 5; FTT=2 → RAID 6.

    Raises:
        ConfigurationError: Combinação sem nível RAID equivalente
    """
    if config.scheme is RedundancyScheme.MIRROR:
        return RaidLevel.RAID1
    if config.scheme is RedundancyScheme.ERASURE_CODING:
        if config.faults_to_tolerate == 1:
            return RaidLevel.RAID5
        if config.faults_to_tolerate == 2:
            return RaidLevel.RAID6
    raise ConfigurationError(
        f"Sem nível RAID equivalente para FTT={config.faults_to_tolerate} "
        f"com {config.scheme}"
    )


def calc_storage_performance(perf: StoragePerformanceInput) -> StoragePerformance:
    """
    Estima IOPS, throughput e latência para o conjunto de discos.

    Args:
        perf: Nível RAID, mídia, discos e perfil de I/O

    Returns:
        StoragePerformance

    Raises:
        ValidationError: Entrada fora da faixa
    """
    perf.validate()

    base_iops, base_latency_ms = MEDIA_BASELINE[perf.media]

    total = (
        base_iops * perf.disk_count
        * RAID_IOPS_FACTORS[perf.raid_level]
        * WORKLOAD_FACTORS[perf.workload]
    )

    read_share = perf.read_percent / 100
    iops_read = total * read_share
    iops_write = total * (1 - read_share)
    if perf.raid_level is RaidLevel.RAID1:
        iops_read *= RAID1_READ_BONUS
    if perf.raid_level is RaidLevel.RAID5:
        iops_write *= RAID5_WRITE_PENALTY
    iops_total = iops_read + iops_write

    throughput_read = iops_read * perf.block_size_kb / 1024
    throughput_write = iops_write * perf.block_size_kb / 1024

    latency_read = base_latency_ms * RAID_LATENCY_FACTORS[perf.raid_level]
    latency_write = latency_read * WRITE_LATENCY_FACTOR

    raw_capacity_gb = perf.disk_size_gb * perf.disk_count
    iops_per_gb = iops_total / raw_capacity_gb if raw_capacity_gb > 0 else 0.0

    return StoragePerformance(
        raid_level=perf.raid_level,
        media=perf.media,
        disk_count=perf.disk_count,
        iops_total=iops_total,
        iops_read=iops_read,
        iops_write=iops_write,
        iops_per_gb=iops_per_gb,
        throughput_read_mbs=throughput_read,
        throughput_write_mbs=throughput_write,
        throughput_total_mbs=throughput_read + throughput_write,
        latency_read_ms=latency_read,
        latency_write_ms=latency_write,
        latency_average_ms=(latency_read + latency_write) / 2,
        latency_max_ms=max(latency_read, latency_write)
    )
