"""
Definições de workloads (VMs) e sua demanda de recursos.
"""

import math
from dataclasses import dataclass

from .errors import ValidationError


@dataclass(frozen=True)
class Workload:
    """Workload (grupo de VMs idênticas) a ser hospedado no cluster."""
    
    name: str
    vcpus: int
    memory_gib: float
    storage_gb: float  # Mesma unidade decimal dos discos do catálogo
    replicas: int = 1
    
    def validate(self) -> None:
        """Valida especificação do workload."""
        if not self.name or not self.name.strip():
            raise ValidationError("Workload: name must be non-empty")
        if isinstance(self.vcpus, bool) or not isinstance(self.vcpus, int):
            raise ValidationError(f"Workload {self.name}: vcpus must be an integer")
        if self.vcpus < 0:
            raise ValidationError(f"Workload {self.name}: vcpus must be >= 0")
        for field in ("memory_gib", "storage_gb"):
            if not math.isfinite(getattr(self, field)):
                raise ValidationError(f"Workload {self.name}: {field} must be finite")
        if self.memory_gib < 0:
            raise ValidationError(f"Workload {self.name}: memory_gib must be >= 0")
        if self.storage_gb < 0:
            raise ValidationError(f"Workload {self.name}: storage_gb must be >= 0")
        if isinstance(self.replicas, bool) or not isinstance(self.replicas, int):
            raise ValidationError(f"Workload {self.name}: replicas must be an integer")
        if self.replicas <= 0:
            raise ValidationError(f"Workload {self.name}: replicas must be > 0")
    
    @property
    def total_vcpus(self) -> int:
        return self.vcpus * self.replicas
    
    @property
    def total_memory_gib(self) -> float:
        return self.memory_gib * self.replicas
    
    @property
    def total_storage_gb(self) -> float:
        return self.storage_gb * self.replicas
