"""
Agregação da demanda de workloads (Σ valor × réplicas).
"""

from dataclasses import dataclass
from typing import Iterable

from .workloads import Workload


@dataclass(frozen=True)
class WorkloadDemand:
    """Demanda agregada do conjunto de workloads."""
    total_vcpus: int
    total_memory_gib: float
    total_storage_gb: float
    workload_count: int = 0
    instance_count: int = 0
    
    @property
    def is_empty(self) -> bool:
        return (
            self.total_vcpus == 0 and
            self.total_memory_gib == 0 and
            self.total_storage_gb == 0
        )


def aggregate_workloads(workloads: Iterable[Workload]) -> WorkloadDemand:
    """
    Soma a demanda de todos os workloads considerando réplicas.
    
    Lista vazia é válida e resulta em totais zerados.
    
    Raises:
        ValidationError: Quantidade negativa ou réplicas <= 0
    """
    total_vcpus = 0
    total_memory_gib = 0.0
    total_storage_gb = 0.0
    workload_count = 0
    instance_count = 0
    
    for workload in workloads:
        workload.validate()
        total_vcpus += workload.total_vcpus
        total_memory_gib += workload.total_memory_gib
        total_storage_gb += workload.total_storage_gb
        workload_count += 1
        instance_count += workload.replicas
    
    return WorkloadDemand(
        total_vcpus=total_vcpus,
        total_memory_gib=total_memory_gib,
        total_storage_gb=total_storage_gb,
        workload_count=workload_count,
        instance_count=instance_count
    )
