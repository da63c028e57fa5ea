"""
Utilização por dimensão após a escolha do número total de nós.

O limite de alerta é apenas de exibição; o teto de planejamento já foi
embutido na contagem de nós.
"""

from dataclasses import dataclass
from typing import Tuple

from .calc_nodes import DIMENSION_COMPUTE, DIMENSION_MEMORY, DIMENSION_STORAGE
from .calc_workloads import WorkloadDemand


@dataclass(frozen=True)
class NodeCapacities:
    """Capacidade de um nó em cada dimensão, nas unidades da demanda."""
    vcpus_per_node: float          # cores × core_ratio
    memory_per_node_gib: float
    storage_per_node_gb: float     # utilizável (lógica)


@dataclass(frozen=True)
class DimensionUtilization:
    """Utilização de uma dimensão."""
    dimension: str
    demand: float
    capacity_total: float
    raw_percent: float      # Sem clamp
    display_percent: float  # min(100, raw)
    over_threshold: bool


@dataclass(frozen=True)
class UtilizationReport:
    """Utilização das três dimensões."""
    total_nodes: int
    alert_threshold_percent: float
    compute: DimensionUtilization
    memory: DimensionUtilization
    storage: DimensionUtilization
    
    @property
    def dimensions(self) -> Tuple[DimensionUtilization, ...]:
        return (self.compute, self.memory, self.storage)
    
    def alerts(self) -> Tuple[DimensionUtilization, ...]:
        """Dimensões acima do limite de alerta."""
        return tuple(d for d in self.dimensions if d.over_threshold)


def calc_dimension_utilization(
    dimension: str,
    demand: float,
    total_nodes: int,
    capacity_per_node: float,
    alert_threshold_percent: float
) -> DimensionUtilization:
    """
    utilização% = min(100, 100 × demanda / (nós × capacidade_por_nó))
    
    Sem nós (ou sem capacidade) a utilização é 0%.
    """
    capacity_total = total_nodes * capacity_per_node
    if capacity_total > 0:
        raw_percent = 100.0 * demand / capacity_total
    else:
        raw_percent = 0.0
    
    return DimensionUtilization(
        dimension=dimension,
        demand=demand,
        capacity_total=capacity_total,
        raw_percent=raw_percent,
        display_percent=min(100.0, raw_percent),
        over_threshold=raw_percent > alert_threshold_percent
    )


def calc_utilization(
    total_nodes: int,
    demand: WorkloadDemand,
    capacities: NodeCapacities,
    alert_threshold_percent: float
) -> UtilizationReport:
    """Recalcula a utilização das três dimensões contra o total de nós escolhido."""
    return UtilizationReport(
        total_nodes=total_nodes,
        alert_threshold_percent=alert_threshold_percent,
        compute=calc_dimension_utilization(
            DIMENSION_COMPUTE, demand.total_vcpus, total_nodes,
            capacities.vcpus_per_node, alert_threshold_percent
        ),
        memory=calc_dimension_utilization(
            DIMENSION_MEMORY, demand.total_memory_gib, total_nodes,
            capacities.memory_per_node_gib, alert_threshold_percent
        ),
        storage=calc_dimension_utilization(
            DIMENSION_STORAGE, demand.total_storage_gb, total_nodes,
            capacities.storage_per_node_gb, alert_threshold_percent
        ),
    )
