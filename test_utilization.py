"""
Testes de utilização por dimensão.

Executar com: pytest test_utilization.py -v
"""

import pytest

from cluster_sizing.calc_utilization import (
    NodeCapacities, calc_dimension_utilization, calc_utilization
)
from cluster_sizing.calc_workloads import WorkloadDemand


class TestDimensionUtilization:
    
    def test_percent(self):
        dim = calc_dimension_utilization("compute", 20, 1, 256, 90)
        assert dim.raw_percent == pytest.approx(7.8125)
        assert dim.display_percent == pytest.approx(7.8125)
        assert dim.capacity_total == 256
        assert not dim.over_threshold
    
    def test_display_is_clamped_raw_is_kept(self):
        dim = calc_dimension_utilization("memory", 1000, 1, 768, 90)
        assert dim.raw_percent > 100
        assert dim.display_percent == 100.0
        assert dim.over_threshold
    
    def test_zero_nodes_is_zero_percent(self):
        dim = calc_dimension_utilization("storage", 500, 0, 8640, 90)
        assert dim.raw_percent == 0.0
        assert dim.display_percent == 0.0
        assert not dim.over_threshold
    
    def test_threshold_is_strict(self):
        dim = calc_dimension_utilization("memory", 90, 1, 100, 90)
        assert dim.raw_percent == pytest.approx(90.0)
        assert not dim.over_threshold
    
    def test_above_threshold(self):
        assert calc_dimension_utilization("memory", 91, 1, 100, 90).over_threshold


class TestUtilizationReport:
    
    def test_three_dimensions(self):
        report = calc_utilization(
            2,
            WorkloadDemand(total_vcpus=100, total_memory_gib=1400, total_storage_gb=1000),
            NodeCapacities(vcpus_per_node=256, memory_per_node_gib=768, storage_per_node_gb=8640),
            alert_threshold_percent=90
        )
        assert [d.dimension for d in report.dimensions] == ["compute", "memory", "storage"]
        assert report.compute.raw_percent == pytest.approx(100 * 100 / 512)
        assert report.memory.raw_percent == pytest.approx(100 * 1400 / 1536)
        assert report.storage.raw_percent == pytest.approx(100 * 1000 / 17280)
        assert [d.dimension for d in report.alerts()] == ["memory"]
    
    def test_no_alerts(self):
        report = calc_utilization(
            1, WorkloadDemand(1, 1, 1), NodeCapacities(256, 768, 8640), 90
        )
        assert report.alerts() == ()
