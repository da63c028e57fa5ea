"""
Testes da estimativa de desempenho de storage (IOPS, throughput, latência).

Executar com: pytest test_storage_performance.py -v
"""

import pytest

from cluster_sizing.calc_storage_performance import (
    BLOCK_SIZES_KB, IOWorkload, RaidLevel, StorageMedia, StoragePerformanceInput,
    calc_storage_performance, raid_level_for
)
from cluster_sizing.errors import ConfigurationError, ValidationError
from cluster_sizing.redundancy import RedundancyConfig, RedundancyScheme


def _perf(**kwargs):
    params = dict(
        raid_level=RaidLevel.RAID5, media=StorageMedia.SSD, disk_count=4,
        disk_size_gb=960, block_size_kb=4, workload=IOWorkload.MIXED, read_percent=50.0
    )
    params.update(kwargs)
    return calc_storage_performance(StoragePerformanceInput(**params))


class TestIOPS:

    def test_raid5_mixed(self):
        """10000 × 4 × 0.8 × 1.2 = 38400; escrita com penalidade de paridade."""
        perf = _perf()
        assert perf.iops_read == pytest.approx(19200)
        assert perf.iops_write == pytest.approx(15360)
        assert perf.iops_total == pytest.approx(34560)

    def test_raid1_read_bonus(self):
        perf = _perf(raid_level=RaidLevel.RAID1, disk_count=2,
                     workload=IOWorkload.RANDOM_READ, read_percent=70)
        assert perf.iops_read == pytest.approx(16800)
        assert perf.iops_write == pytest.approx(6000)
        assert perf.iops_total == pytest.approx(22800)

    def test_raid6_hdd_sequential_write(self):
        perf = _perf(raid_level=RaidLevel.RAID6, media=StorageMedia.HDD, disk_count=6,
                     workload=IOWorkload.SEQUENTIAL_WRITE, read_percent=0)
        assert perf.iops_read == 0
        assert perf.iops_write == pytest.approx(630)
        assert perf.iops_total == pytest.approx(630)

    def test_raid10_all_reads(self):
        perf = _perf(raid_level=RaidLevel.RAID10, disk_count=8,
                     workload=IOWorkload.RANDOM_READ, read_percent=100)
        assert perf.iops_read == pytest.approx(96000)
        assert perf.iops_write == 0

    def test_iops_per_gb(self):
        assert _perf().iops_per_gb == pytest.approx(34560 / 3840)

    def test_zero_disks(self):
        perf = _perf(disk_count=0)
        assert perf.iops_total == 0
        assert perf.iops_per_gb == 0
        assert perf.throughput_total_mbs == 0

    def test_scales_with_disk_count(self):
        assert _perf(disk_count=8).iops_total == pytest.approx(2 * _perf(disk_count=4).iops_total)


class TestThroughput:

    def test_iops_times_block(self):
        perf = _perf()
        assert perf.throughput_read_mbs == pytest.approx(75)
        assert perf.throughput_write_mbs == pytest.approx(60)
        assert perf.throughput_total_mbs == pytest.approx(135)

    @pytest.mark.parametrize("block", BLOCK_SIZES_KB)
    def test_linear_in_block_size(self, block):
        perf = _perf(block_size_kb=block)
        assert perf.throughput_total_mbs == pytest.approx(perf.iops_total * block / 1024)


class TestLatency:

    def test_raid5_ssd(self):
        perf = _perf()
        assert perf.latency_read_ms == pytest.approx(0.12)
        assert perf.latency_write_ms == pytest.approx(0.18)
        assert perf.latency_average_ms == pytest.approx(0.15)
        assert perf.latency_max_ms == pytest.approx(0.18)

    def test_raid6_hdd(self):
        perf = _perf(raid_level=RaidLevel.RAID6, media=StorageMedia.HDD)
        assert perf.latency_read_ms == pytest.approx(14.0)
        assert perf.latency_write_ms == pytest.approx(21.0)

    def test_independent_of_disk_count(self):
        assert _perf(disk_count=2).latency_read_ms == _perf(disk_count=24).latency_read_ms


class TestValidation:

    @pytest.mark.parametrize("kwargs", [
        {"disk_count": -1},
        {"disk_size_gb": -960},
        {"block_size_kb": 0},
        {"read_percent": -1},
        {"read_percent": 101},
        {"read_percent": float("nan")},
        {"disk_size_gb": float("inf")},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValidationError):
            _perf(**kwargs)


class TestRaidLevelFor:

    def test_mirror_is_raid1(self):
        for ftt in (1, 2, 3):
            config = RedundancyConfig(ftt, RedundancyScheme.MIRROR)
            assert raid_level_for(config) is RaidLevel.RAID1

    def test_erasure_coding(self):
        ec = RedundancyScheme.ERASURE_CODING
        assert raid_level_for(RedundancyConfig(1, ec)) is RaidLevel.RAID5
        assert raid_level_for(RedundancyConfig(2, ec)) is RaidLevel.RAID6

    def test_unsupported(self):
        with pytest.raises(ConfigurationError):
            raid_level_for(RedundancyConfig(3, RedundancyScheme.ERASURE_CODING))
