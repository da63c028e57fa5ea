"""
Motor de sizing: orquestra agregação, redundância, contagem de nós e utilização.

    size_cluster(workloads, node_profile, redundancy_config, options) -> SizingResult

Função pura: sem estado global, sem I/O. Mesmas entradas produzem
exatamente o mesmo resultado.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .calc_nodes import NodeCounts, SizingOptions, calc_node_counts
from .calc_physical import PhysicalFootprint, calc_physical_footprint
from .calc_utilization import NodeCapacities, UtilizationReport, calc_utilization
from .calc_workloads import WorkloadDemand, aggregate_workloads
from .nodes import NodeProfile
from .redundancy import RedundancyConfig, UsableCapacity, calc_usable_capacity
from .workloads import Workload


DIMENSION_LABELS = {
    "compute": "CPU",
    "memory": "Memória",
    "storage": "Storage",
}


@dataclass(frozen=True)
class SizingResult:
    """Resultado imutável de uma execução de sizing."""
    
    demand: WorkloadDemand
    
    # Nós
    nodes_for_compute: int
    nodes_for_memory: int
    nodes_for_storage: int
    base_nodes: int
    total_nodes: int
    spare_node_added: bool
    required_cores: int
    binding_dimensions: Tuple[str, ...]
    
    # Capacidade por nó
    cores_per_node: int
    vcpus_per_node: float
    memory_per_node_gib: float
    capacity: UsableCapacity
    
    # Capacidade do cluster (GB)
    raw_capacity_total_gb: float
    physical_capacity_total_gb: float
    usable_capacity_total_gb: float
    
    utilization: UtilizationReport
    physical: PhysicalFootprint
    warnings: Tuple[str, ...] = ()
    
    @property
    def usable_capacity_per_node_gb(self) -> float:
        return self.capacity.usable_per_node_gb
    
    @property
    def usable_capacity_per_disk_gb(self) -> float:
        return self.capacity.usable_per_disk_gb


def _build_warnings(
    counts: NodeCounts,
    capacity: UsableCapacity,
    utilization: UtilizationReport
) -> Tuple[str, ...]:
    warnings = []
    
    for dim in utilization.alerts():
        label = DIMENSION_LABELS.get(dim.dimension, dim.dimension)
        warnings.append(
            f"[AVISO] Utilização de {label} ({dim.raw_percent:.1f}%) excede o limite "
            f"de alerta de {utilization.alert_threshold_percent:.0f}%."
        )
    
    if 0 < counts.total_nodes < capacity.min_nodes:
        warnings.append(
            f"[CRITICO] Layout {capacity.layout} exige no mínimo {capacity.min_nodes} hosts; "
            f"o sizing resultou em {counts.total_nodes}. "
            f"ACAO: Provisione {capacity.min_nodes} nós ou escolha outro esquema/FTT."
        )
    
    return tuple(warnings)


def size_cluster(
    workloads: Sequence[Workload],
    node_profile: NodeProfile,
    redundancy_config: RedundancyConfig,
    options: Optional[SizingOptions] = None
) -> SizingResult:
    """
    Calcula o número de servidores para um conjunto de workloads.
    
    Args:
        workloads: Workloads a hospedar (lista vazia é válida)
        node_profile: Perfil homogêneo de servidor
        redundancy_config: FTT, esquema e redução de dados
        options: Teto de utilização, N+1, core ratio, limite de alerta
    
    Returns:
        SizingResult
    
    Raises:
        ValidationError: Workload/perfil fora da faixa
        ConfigurationError: (FTT, esquema) não suportado ou discos acima do form factor
        DivisionError: Capacidade por nó <= 0
    """
    if options is None:
        options = SizingOptions()
    
    options.validate()
    node_profile.validate()
    redundancy_config.validate()
    
    demand = aggregate_workloads(workloads)
    
    capacity = calc_usable_capacity(
        redundancy_config,
        disk_size_gb=node_profile.disk_size_gb,
        disks_per_node=node_profile.disks_per_node
    )
    
    counts = calc_node_counts(
        demand,
        cores_per_node=node_profile.cores_per_node,
        memory_per_node_gib=node_profile.memory_per_node_gib,
        usable_capacity_per_node_gb=capacity.usable_per_node_gb,
        core_ratio=options.core_ratio,
        options=options
    )
    
    vcpus_per_node = node_profile.cores_per_node * options.core_ratio
    utilization = calc_utilization(
        counts.total_nodes,
        demand,
        NodeCapacities(
            vcpus_per_node=vcpus_per_node,
            memory_per_node_gib=node_profile.memory_per_node_gib,
            storage_per_node_gb=capacity.usable_per_node_gb
        ),
        options.alert_threshold_percent
    )
    
    physical = calc_physical_footprint(counts.total_nodes, node_profile)
    
    return SizingResult(
        demand=demand,
        nodes_for_compute=counts.nodes_for_compute,
        nodes_for_memory=counts.nodes_for_memory,
        nodes_for_storage=counts.nodes_for_storage,
        base_nodes=counts.base_nodes,
        total_nodes=counts.total_nodes,
        spare_node_added=counts.spare_node_added,
        required_cores=counts.required_cores,
        binding_dimensions=counts.binding_dimensions,
        cores_per_node=node_profile.cores_per_node,
        vcpus_per_node=vcpus_per_node,
        memory_per_node_gib=node_profile.memory_per_node_gib,
        capacity=capacity,
        raw_capacity_total_gb=counts.total_nodes * node_profile.raw_capacity_per_node_gb,
        physical_capacity_total_gb=counts.total_nodes * capacity.physical_per_node_gb,
        usable_capacity_total_gb=counts.total_nodes * capacity.usable_per_node_gb,
        utilization=utilization,
        physical=physical,
        warnings=_build_warnings(counts, capacity, utilization)
    )
