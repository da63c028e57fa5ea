"""
Definições de servidores (nós) e do catálogo de processadores.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import ConfigurationError, ValidationError


# Memória por nó montada a partir de DIMMs
MEMORY_DIMM_SIZES_GIB = (32, 64, 128, 256)
MAX_DIMMS_PER_NODE = 32


class FormFactor(Enum):
    """Form factor do chassi: limita discos por nó e ocupa U no rack."""
    
    ONE_U = "1U"
    TWO_U = "2U"
    
    @property
    def max_disks(self) -> int:
        return 10 if self is FormFactor.ONE_U else 24
    
    @property
    def rack_units_u(self) -> int:
        return 1 if self is FormFactor.ONE_U else 2
    
    @classmethod
    def parse(cls, value: str) -> "FormFactor":
        """Converte string ("1U", "2u") para FormFactor."""
        normalized = str(value).strip().upper()
        for member in cls:
            if member.value == normalized:
                return member
        valid = ", ".join(m.value for m in cls)
        raise ConfigurationError(
            f"Form factor inválido: '{value}'. Valores aceitos: {valid}"
        )


@dataclass(frozen=True)
class Processor:
    """Linha do catálogo de processadores (fonte externa)."""
    
    id: str
    name: str
    cores: int
    frequency: str = ""
    generation: str = ""
    spec_int_base: float = 0.0
    tdp_watts: float = 0.0
    
    def validate(self) -> None:
        """Valida especificação do processador."""
        for field in ("cores", "spec_int_base", "tdp_watts"):
            if not math.isfinite(getattr(self, field)):
                raise ValidationError(f"Processor {self.name}: {field} must be finite")
        if self.cores <= 0:
            raise ValidationError(f"Processor {self.name}: cores must be > 0")
        if self.spec_int_base < 0:
            raise ValidationError(f"Processor {self.name}: spec_int_base must be >= 0")
        if self.tdp_watts < 0:
            raise ValidationError(f"Processor {self.name}: tdp_watts must be >= 0")


@dataclass(frozen=True)
class NodeProfile:
    """Perfil homogêneo de servidor candidato (imutável por execução de sizing)."""
    
    cores_per_processor: int
    processors_per_node: int
    memory_per_node_gib: float
    disks_per_node: int
    disk_size_gb: float
    form_factor: FormFactor = FormFactor.TWO_U
    processor: Optional[Processor] = None
    
    def validate(self) -> None:
        """
        Valida o perfil do nó.
        
        Capacidades zeradas NÃO são rejeitadas aqui: o sizing reporta
        DivisionError ao tentar dividir a demanda por elas.
        """
        for field in ("cores_per_processor", "processors_per_node", "memory_per_node_gib",
                      "disks_per_node", "disk_size_gb"):
            if not math.isfinite(getattr(self, field)):
                raise ValidationError(f"NodeProfile: {field} must be finite")
        if self.cores_per_processor < 0:
            raise ValidationError("NodeProfile: cores_per_processor must be >= 0")
        if self.processors_per_node < 0:
            raise ValidationError("NodeProfile: processors_per_node must be >= 0")
        if self.memory_per_node_gib < 0:
            raise ValidationError("NodeProfile: memory_per_node_gib must be >= 0")
        if self.disks_per_node < 0:
            raise ValidationError("NodeProfile: disks_per_node must be >= 0")
        if self.disk_size_gb < 0:
            raise ValidationError("NodeProfile: disk_size_gb must be >= 0")
        
        if self.disks_per_node > self.form_factor.max_disks:
            raise ConfigurationError(
                f"NodeProfile: {self.disks_per_node} discos excede o máximo de "
                f"{self.form_factor.max_disks} para servidor {self.form_factor.value}"
            )
        
        if self.processor is not None:
            self.processor.validate()
    
    @property
    def cores_per_node(self) -> int:
        """Cores físicos por nó."""
        return self.cores_per_processor * self.processors_per_node
    
    @property
    def raw_capacity_per_node_gb(self) -> float:
        """Capacidade bruta de disco por nó em GB."""
        return self.disks_per_node * self.disk_size_gb
    
    @property
    def rack_units_u(self) -> int:
        return self.form_factor.rack_units_u
    
    @classmethod
    def from_processor(
        cls,
        processor: Processor,
        processors_per_node: int,
        memory_per_node_gib: float,
        disks_per_node: int,
        disk_size_gb: float,
        form_factor: FormFactor = FormFactor.TWO_U
    ) -> "NodeProfile":
        """Monta perfil a partir de uma linha do catálogo (usa apenas `cores`)."""
        return cls(
            cores_per_processor=processor.cores,
            processors_per_node=processors_per_node,
            memory_per_node_gib=memory_per_node_gib,
            disks_per_node=disks_per_node,
            disk_size_gb=disk_size_gb,
            form_factor=form_factor,
            processor=processor
        )


def memory_from_dimms(dimm_size_gib: int, dimm_count: int) -> float:
    """
    Calcula memória por nó a partir de DIMMs.
    
    Raises:
        ValidationError: Tamanho de DIMM fora do catálogo ou quantidade inválida
    """
    if dimm_size_gib not in MEMORY_DIMM_SIZES_GIB:
        valid = ", ".join(str(s) for s in MEMORY_DIMM_SIZES_GIB)
        raise ValidationError(
            f"Tamanho de DIMM inválido: {dimm_size_gib} GiB. Valores aceitos: {valid}"
        )
    if dimm_count < 1 or dimm_count > MAX_DIMMS_PER_NODE:
        raise ValidationError(
            f"Quantidade de DIMMs deve estar entre 1 e {MAX_DIMMS_PER_NODE}: {dimm_count}"
        )
    return float(dimm_size_gib * dimm_count)
