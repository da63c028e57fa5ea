"""
Cálculo do número de nós (compute, memória, storage) sob teto de utilização.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from .calc_workloads import WorkloadDemand
from .errors import DivisionError, ValidationError


DIMENSION_COMPUTE = "compute"
DIMENSION_MEMORY = "memory"
DIMENSION_STORAGE = "storage"
DIMENSIONS = (DIMENSION_COMPUTE, DIMENSION_MEMORY, DIMENSION_STORAGE)


@dataclass(frozen=True)
class SizingOptions:
    """
    Opções de sizing.
    
    Attributes:
        utilization_ceiling: Teto de planejamento (0 < teto <= 1). Ex: 0.95
        consider_spare_node: Adiciona um nó reserva (N+1)
        core_ratio: Sobrecomissionamento vCPU:pCPU
        alert_threshold_percent: Limite de alerta para exibição (independente do teto)
    """
    utilization_ceiling: float = 0.95
    consider_spare_node: bool = False
    core_ratio: float = 4.0
    alert_threshold_percent: float = 90.0
    
    def validate(self) -> None:
        """Valida faixas das opções."""
        for field in ("utilization_ceiling", "core_ratio", "alert_threshold_percent"):
            if not math.isfinite(getattr(self, field)):
                raise ValidationError(f"{field} deve ser finito: {getattr(self, field)}")
        if not 0 < self.utilization_ceiling <= 1:
            raise ValidationError(
                f"utilization_ceiling deve estar em (0, 1]: {self.utilization_ceiling}"
            )
        if self.core_ratio <= 0:
            raise ValidationError(f"core_ratio deve ser > 0: {self.core_ratio}")
        if not 0 < self.alert_threshold_percent <= 100:
            raise ValidationError(
                f"alert_threshold_percent deve estar em (0, 100]: {self.alert_threshold_percent}"
            )


@dataclass(frozen=True)
class NodeCounts:
    """Nós necessários por dimensão e total escolhido."""
    nodes_for_compute: int
    nodes_for_memory: int
    nodes_for_storage: int
    base_nodes: int       # max das dimensões, sem reserva
    total_nodes: int      # base + reserva (N+1)
    spare_node_added: bool
    required_cores: int   # ceil(vCPUs / core_ratio)
    binding_dimensions: Tuple[str, ...]


def _ensure_positive_capacity(name: str, value: float) -> None:
    if not math.isfinite(value):
        raise ValidationError(f"{name} deve ser finito: {value}")
    if value <= 0:
        raise DivisionError(
            f"{name} resolve para {value}: um nó sem capacidade não hospeda workload"
        )


def calc_required_cores(total_vcpus: int, core_ratio: float) -> int:
    """Cores físicos necessários: ceil(vCPUs / core_ratio)."""
    if not math.isfinite(core_ratio) or core_ratio <= 0:
        raise ValidationError(f"core_ratio deve ser > 0: {core_ratio}")
    return math.ceil(total_vcpus / core_ratio)


def calc_node_counts(
    demand: WorkloadDemand,
    cores_per_node: int,
    memory_per_node_gib: float,
    usable_capacity_per_node_gb: float,
    core_ratio: float,
    options: SizingOptions
) -> NodeCounts:
    """
    Calcula o número mínimo de nós homogêneos por dimensão.
    
    Fórmulas:
    - compute = ceil(ceil(vCPUs / core_ratio) / (cores_por_nó × teto))
    - memória = ceil(memória / (memória_por_nó × teto))
    - storage = ceil(storage / (utilizável_por_nó × teto))
    
    O total é o máximo entre as dimensões (empates não são desfeitos;
    todas as dimensões empatadas aparecem em binding_dimensions). Com N+1,
    soma exatamente 1 nó quando o máximo é >= 1.
    
    Raises:
        ValidationError: Opções, demanda ou capacidade não finitas
        DivisionError: Alguma capacidade por nó <= 0
    """
    options.validate()
    for field in ("total_vcpus", "total_memory_gib", "total_storage_gb"):
        if not math.isfinite(getattr(demand, field)):
            raise ValidationError(f"Demanda {field} deve ser finita: {getattr(demand, field)}")
    _ensure_positive_capacity("cores_per_node", cores_per_node)
    _ensure_positive_capacity("memory_per_node_gib", memory_per_node_gib)
    _ensure_positive_capacity("usable_capacity_per_node_gb", usable_capacity_per_node_gb)
    
    ceiling = options.utilization_ceiling
    
    required_cores = calc_required_cores(demand.total_vcpus, core_ratio)
    nodes_for_compute = math.ceil(required_cores / (cores_per_node * ceiling))
    nodes_for_memory = math.ceil(demand.total_memory_gib / (memory_per_node_gib * ceiling))
    nodes_for_storage = math.ceil(demand.total_storage_gb / (usable_capacity_per_node_gb * ceiling))
    
    per_dimension = {
        DIMENSION_COMPUTE: nodes_for_compute,
        DIMENSION_MEMORY: nodes_for_memory,
        DIMENSION_STORAGE: nodes_for_storage,
    }
    base_nodes = max(per_dimension.values())
    
    # Demanda zero não define dimensão limitante
    binding = tuple(
        name for name in DIMENSIONS
        if base_nodes > 0 and per_dimension[name] == base_nodes
    )
    
    spare_node_added = options.consider_spare_node and base_nodes >= 1
    total_nodes = base_nodes + 1 if spare_node_added else base_nodes
    
    return NodeCounts(
        nodes_for_compute=nodes_for_compute,
        nodes_for_memory=nodes_for_memory,
        nodes_for_storage=nodes_for_storage,
        base_nodes=base_nodes,
        total_nodes=total_nodes,
        spare_node_added=spare_node_added,
        required_cores=required_cores,
        binding_dimensions=binding
    )
