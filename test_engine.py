"""
Testes do motor de sizing (size_cluster) e do consumo físico.

Executar com: pytest test_engine.py -v
"""

import pytest

from cluster_sizing.calc_nodes import SizingOptions
from cluster_sizing.calc_physical import WATTS_TO_BTU_HR, calc_physical_footprint
from cluster_sizing.engine import SizingResult, size_cluster
from cluster_sizing.errors import ConfigurationError, DivisionError, SizingError, ValidationError
from cluster_sizing.nodes import FormFactor, NodeProfile, Processor, memory_from_dimms
from cluster_sizing.redundancy import RedundancyConfig, RedundancyScheme
from cluster_sizing.workloads import Workload


XEON_8592 = Processor(
    id="13", name="Intel Xeon Platinum 8592+", cores=64,
    frequency="1.9 GHz", generation="5th Gen", spec_int_base=68.2, tdp_watts=350
)

NODE = NodeProfile(
    cores_per_processor=32, processors_per_node=2, memory_per_node_gib=768,
    disks_per_node=12, disk_size_gb=960
)
RAID5_FTT1 = RedundancyConfig(1, RedundancyScheme.ERASURE_CODING)
OPTS = SizingOptions(utilization_ceiling=0.95, consider_spare_node=False, core_ratio=4)
OPTS_N1 = SizingOptions(utilization_ceiling=0.95, consider_spare_node=True, core_ratio=4)


def _scenario_a_workloads():
    return [Workload(f"vm-{i}", vcpus=2, memory_gib=4, storage_gb=100) for i in range(10)]


class TestScenarios:
    
    def test_scenario_a(self):
        result = size_cluster(_scenario_a_workloads(), NODE, RAID5_FTT1, OPTS)
        assert isinstance(result, SizingResult)
        assert result.nodes_for_compute == 1
        assert result.nodes_for_memory == 1
        assert result.nodes_for_storage == 1
        assert result.total_nodes == 1
        assert result.usable_capacity_per_disk_gb == pytest.approx(720)
        assert result.usable_capacity_per_node_gb == pytest.approx(8640)
        assert result.raw_capacity_total_gb == pytest.approx(11520)
        assert result.usable_capacity_total_gb == pytest.approx(8640)
    
    def test_scenario_b_spare_node(self):
        a = size_cluster(_scenario_a_workloads(), NODE, RAID5_FTT1, OPTS)
        b = size_cluster(_scenario_a_workloads(), NODE, RAID5_FTT1, OPTS_N1)
        assert b.total_nodes == a.total_nodes + 1
        assert b.base_nodes == a.base_nodes
        assert b.spare_node_added
    
    def test_scenario_c_no_workloads(self):
        result = size_cluster([], NODE, RAID5_FTT1, OPTS_N1)
        assert (result.nodes_for_compute, result.nodes_for_memory, result.nodes_for_storage) == (0, 0, 0)
        assert result.total_nodes == 0
        assert not result.spare_node_added
        assert all(d.raw_percent == 0 for d in result.utilization.dimensions)
        assert result.warnings == ()
    
    def test_scenario_d_zero_cores(self):
        node = NodeProfile(
            cores_per_processor=0, processors_per_node=2, memory_per_node_gib=768,
            disks_per_node=12, disk_size_gb=960
        )
        with pytest.raises(DivisionError):
            size_cluster(_scenario_a_workloads(), node, RAID5_FTT1, OPTS)
    
    def test_zero_disks_raises(self):
        node = NodeProfile(32, 2, 768, disks_per_node=0, disk_size_gb=960)
        with pytest.raises(DivisionError):
            size_cluster(_scenario_a_workloads(), node, RAID5_FTT1, OPTS)


class TestEngine:
    
    def test_default_options(self):
        result = size_cluster(_scenario_a_workloads(), NODE, RAID5_FTT1)
        assert result.total_nodes == 1
    
    def test_idempotent(self):
        workloads = _scenario_a_workloads()
        first = size_cluster(workloads, NODE, RAID5_FTT1, OPTS_N1)
        second = size_cluster(workloads, NODE, RAID5_FTT1, OPTS_N1)
        assert first == second
    
    def test_result_is_immutable(self):
        result = size_cluster(_scenario_a_workloads(), NODE, RAID5_FTT1, OPTS)
        with pytest.raises(AttributeError):
            result.total_nodes = 10
    
    def test_utilization_uses_total_nodes(self):
        result = size_cluster(_scenario_a_workloads(), NODE, RAID5_FTT1, OPTS_N1)
        # 20 vCPU / (2 nós × 64 cores × 4)
        assert result.vcpus_per_node == 256
        assert result.utilization.compute.raw_percent == pytest.approx(100 * 20 / 512)
        assert result.utilization.storage.raw_percent == pytest.approx(100 * 1000 / 17280)
    
    def test_data_reduction_increases_usable_capacity(self):
        workloads = [Workload("files", 2, 4, 40000)]
        plain = size_cluster(workloads, NODE, RAID5_FTT1, OPTS)
        reduced = size_cluster(
            workloads, NODE, RedundancyConfig(1, RedundancyScheme.ERASURE_CODING, 2.0), OPTS
        )
        assert reduced.usable_capacity_per_node_gb == pytest.approx(2 * plain.usable_capacity_per_node_gb)
        assert reduced.nodes_for_storage < plain.nodes_for_storage
        assert reduced.physical_capacity_total_gb <= reduced.raw_capacity_total_gb
    
    def test_mirror_needs_more_storage_nodes(self):
        workloads = [Workload("files", 2, 4, 60000)]
        ec = size_cluster(workloads, NODE, RAID5_FTT1, OPTS)
        mirror = size_cluster(workloads, NODE, RedundancyConfig(1, RedundancyScheme.MIRROR), OPTS)
        assert mirror.nodes_for_storage > ec.nodes_for_storage
    
    def test_unsupported_redundancy(self):
        with pytest.raises(ConfigurationError):
            size_cluster(
                _scenario_a_workloads(), NODE,
                RedundancyConfig(3, RedundancyScheme.ERASURE_CODING), OPTS
            )
    
    def test_disks_over_form_factor_limit(self):
        node = NodeProfile(32, 2, 768, disks_per_node=12, disk_size_gb=960, form_factor=FormFactor.ONE_U)
        with pytest.raises(ConfigurationError):
            size_cluster(_scenario_a_workloads(), node, RAID5_FTT1, OPTS)
    
    def test_invalid_workload(self):
        with pytest.raises(ValidationError):
            size_cluster([Workload("bad", -2, 4, 100)], NODE, RAID5_FTT1, OPTS)
    
    def test_invalid_options(self):
        with pytest.raises(ValidationError):
            size_cluster(_scenario_a_workloads(), NODE, RAID5_FTT1, SizingOptions(utilization_ceiling=0))


NAN = float("nan")
INF = float("inf")


class TestNonFiniteInputs:
    """NaN/inf devem falhar na validação, não dentro de math.ceil."""
    
    @pytest.mark.parametrize("workload", [
        Workload("w", 2, NAN, 100),
        Workload("w", 2, 4, INF),
        Workload("w", 2, INF, 100),
        Workload("w", 2, 4, NAN),
    ])
    def test_workload(self, workload):
        with pytest.raises(ValidationError):
            size_cluster([workload], NODE, RAID5_FTT1, OPTS)
    
    @pytest.mark.parametrize("node", [
        NodeProfile(32, 2, NAN, 12, 960),
        NodeProfile(32, 2, INF, 12, 960),
        NodeProfile(32, 2, 768, 12, INF),
        NodeProfile(32, 2, 768, 12, NAN),
    ])
    def test_node_profile(self, node):
        with pytest.raises(ValidationError):
            size_cluster(_scenario_a_workloads(), node, RAID5_FTT1, OPTS)
    
    @pytest.mark.parametrize("ratio", [NAN, INF])
    def test_data_reduction_ratio(self, ratio):
        redundancy = RedundancyConfig(1, RedundancyScheme.ERASURE_CODING, ratio)
        with pytest.raises(ValidationError):
            size_cluster(_scenario_a_workloads(), NODE, redundancy, OPTS)
    
    @pytest.mark.parametrize("options", [
        SizingOptions(utilization_ceiling=NAN),
        SizingOptions(core_ratio=NAN),
        SizingOptions(core_ratio=INF),
        SizingOptions(alert_threshold_percent=NAN),
    ])
    def test_options(self, options):
        with pytest.raises(ValidationError):
            size_cluster(_scenario_a_workloads(), NODE, RAID5_FTT1, options)
    
    def test_is_sizing_error(self):
        with pytest.raises(SizingError):
            size_cluster([Workload("w", 2, NAN, 100)], NODE, RAID5_FTT1, OPTS)


class TestWarnings:
    
    def test_below_minimum_hosts(self):
        result = size_cluster(_scenario_a_workloads(), NODE, RAID5_FTT1, OPTS)
        critical = [w for w in result.warnings if w.startswith("[CRITICO]")]
        assert len(critical) == 1
        assert "RAID-5 (3+1)" in critical[0]
    
    def test_minimum_hosts_met(self):
        big = [Workload("big", 2, 700, 100, replicas=3)]
        result = size_cluster(big, NODE, RedundancyConfig(1, RedundancyScheme.MIRROR), OPTS)
        assert result.total_nodes == 3
        assert not any(w.startswith("[CRITICO]") for w in result.warnings)
    
    def test_over_threshold(self):
        # 700 GiB em 1 nó de 768 GiB → 91.1%
        result = size_cluster([Workload("mem", 2, 700, 100)], NODE, RAID5_FTT1, OPTS)
        assert result.total_nodes == 1
        assert result.utilization.memory.over_threshold
        assert any(w.startswith("[AVISO]") and "Memória" in w for w in result.warnings)
    
    def test_threshold_independent_from_ceiling(self):
        options = SizingOptions(utilization_ceiling=0.95, alert_threshold_percent=95)
        result = size_cluster([Workload("mem", 2, 700, 100)], NODE, RAID5_FTT1, options)
        assert not result.utilization.memory.over_threshold


class TestNodeProfile:
    
    def test_from_processor(self):
        node = NodeProfile.from_processor(XEON_8592, 2, 768, 12, 960)
        assert node.cores_per_node == 128
        assert node.raw_capacity_per_node_gb == 11520
        assert node.processor is XEON_8592
    
    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            NodeProfile(32, 2, -1, 12, 960).validate()
    
    def test_form_factor_parse(self):
        assert FormFactor.parse("1u") is FormFactor.ONE_U
        assert FormFactor.TWO_U.max_disks == 24
        with pytest.raises(ConfigurationError):
            FormFactor.parse("4U")
    
    def test_memory_from_dimms(self):
        assert memory_from_dimms(64, 12) == 768.0
    
    @pytest.mark.parametrize("size,count", [(48, 12), (64, 0), (64, 33)])
    def test_memory_from_dimms_invalid(self, size, count):
        with pytest.raises(ValidationError):
            memory_from_dimms(size, count)


class TestPhysicalFootprint:
    
    def test_with_processor(self):
        node = NodeProfile.from_processor(XEON_8592, 2, 768, 12, 960)
        footprint = calc_physical_footprint(3, node)
        assert footprint.total_rack_u == 6
        assert footprint.racks_required == 1
        assert footprint.total_power_watts == 2100
        assert footprint.total_heat_btu_hr == pytest.approx(2100 * WATTS_TO_BTU_HR)
        assert footprint.total_spec_int == pytest.approx(3 * 2 * 68.2)
    
    def test_racks_rounded_up(self):
        node = NodeProfile(32, 2, 768, 8, 960, form_factor=FormFactor.ONE_U)
        footprint = calc_physical_footprint(45, node)
        assert footprint.total_rack_u == 45
        assert footprint.racks_required == 2
    
    def test_without_processor(self):
        footprint = calc_physical_footprint(4, NODE)
        assert footprint.total_power_watts == 0
        assert footprint.total_spec_int == 0
    
    def test_zero_nodes(self):
        footprint = calc_physical_footprint(0, NODE)
        assert footprint.total_rack_u == 0
        assert footprint.racks_required == 0
