"""
Modelo de redundância de storage (FTT × esquema) e capacidade utilizável.

Tabela canônica única de fatores. Espelhamento usa 1/(FTT+1); erasure coding
usa os layouts RAID-5 (3+1) para FTT=1 e RAID-6 (4+2) para FTT=2. FTT=3 só
existe para espelhamento.
"""

import math
from dataclasses import dataclass
from enum import Enum, IntEnum
from fractions import Fraction
from typing import Dict, Optional, Tuple

from .errors import ConfigurationError, ValidationError


MAX_DATA_REDUCTION_RATIO = 10.0


class FaultTolerance(IntEnum):
    """Falhas simultâneas a tolerar (FTT)."""
    FTT1 = 1
    FTT2 = 2
    FTT3 = 3


# Layouts de paridade nomeados: o nome já fixa o FTT
RAID_LEVEL_FTT = {
    "raid5": FaultTolerance.FTT1,
    "raid6": FaultTolerance.FTT2,
}


def _normalize_scheme_name(value: str) -> str:
    return str(value).strip().lower().replace(" ", "")


class RedundancyScheme(Enum):
    """Esquema de redundância."""
    MIRROR = "mirror"                  # RAID-1: cópias completas
    ERASURE_CODING = "erasure_coding"  # RAID-5/6: paridade
    
    @classmethod
    def parse(cls, value: str) -> "RedundancyScheme":
        """
        Aceita nomes do esquema e aliases ("mirror", "raid1", "ec").
    
        "raid5"/"raid6" também definem o FTT e só são aceitos por
        parse_redundancy.
        """
        aliases = {
            "mirror": cls.MIRROR,
            "mirroring": cls.MIRROR,
            "raid1": cls.MIRROR,
            "erasure_coding": cls.ERASURE_CODING,
            "erasure-coding": cls.ERASURE_CODING,
            "ec": cls.ERASURE_CODING,
        }
        normalized = _normalize_scheme_name(value)
        if normalized.replace("-", "") in RAID_LEVEL_FTT:
            raise ConfigurationError(
                f"'{value}' define esquema e FTT ao mesmo tempo; use parse_redundancy()"
            )
        if normalized not in aliases:
            valid = sorted(list(aliases) + list(RAID_LEVEL_FTT))
            raise ConfigurationError(
                f"Esquema de redundância inválido: '{value}'. "
                f"Valores aceitos: {', '.join(valid)}"
            )
        return aliases[normalized]


@dataclass(frozen=True)
class RedundancyRule:
    """Entrada da tabela de redundância."""
    usable_fraction: Fraction
    min_nodes: int
    layout: str


# (FTT, esquema) → regra. Combinações ausentes não são suportadas.
REDUNDANCY_TABLE: Dict[Tuple[FaultTolerance, RedundancyScheme], RedundancyRule] = {
    (FaultTolerance.FTT1, RedundancyScheme.MIRROR): RedundancyRule(Fraction(1, 2), 3, "RAID-1 (2 cópias)"),
    (FaultTolerance.FTT2, RedundancyScheme.MIRROR): RedundancyRule(Fraction(1, 3), 5, "RAID-1 (3 cópias)"),
    (FaultTolerance.FTT3, RedundancyScheme.MIRROR): RedundancyRule(Fraction(1, 4), 7, "RAID-1 (4 cópias)"),
    (FaultTolerance.FTT1, RedundancyScheme.ERASURE_CODING): RedundancyRule(Fraction(3, 4), 4, "RAID-5 (3+1)"),
    (FaultTolerance.FTT2, RedundancyScheme.ERASURE_CODING): RedundancyRule(Fraction(2, 3), 6, "RAID-6 (4+2)"),
}


@dataclass(frozen=True)
class RedundancyConfig:
    """Configuração de redundância de uma execução de sizing."""
    
    faults_to_tolerate: int
    scheme: RedundancyScheme
    data_reduction_ratio: float = 1.0
    
    def validate(self) -> None:
        """Valida FTT, esquema e razão de redução de dados."""
        get_redundancy_rule(self.faults_to_tolerate, self.scheme)
        if not math.isfinite(self.data_reduction_ratio):
            raise ValidationError(
                f"data_reduction_ratio deve ser finito: {self.data_reduction_ratio}"
            )
        if self.data_reduction_ratio < 1.0:
            raise ValidationError(
                f"data_reduction_ratio deve ser >= 1.0: {self.data_reduction_ratio}"
            )
        if self.data_reduction_ratio > MAX_DATA_REDUCTION_RATIO:
            raise ValidationError(
                f"data_reduction_ratio deve ser <= {MAX_DATA_REDUCTION_RATIO}: "
                f"{self.data_reduction_ratio}"
            )


def parse_redundancy(
    scheme_name: str,
    faults_to_tolerate: Optional[int] = None,
    data_reduction_ratio: float = 1.0
) -> RedundancyConfig:
    """
    Monta RedundancyConfig a partir do nome do esquema e do FTT.
    
    "raid5" é erasure coding com FTT=1 e "raid6" com FTT=2; sem FTT
    informado vale o do layout. Nos demais esquemas o FTT padrão é 1.
    
    Raises:
        ConfigurationError: Esquema desconhecido ou FTT diferente do layout
    """
    raid_level = _normalize_scheme_name(scheme_name).replace("-", "")
    
    if raid_level in RAID_LEVEL_FTT:
        layout_ftt = RAID_LEVEL_FTT[raid_level]
        if faults_to_tolerate is not None and faults_to_tolerate != layout_ftt:
            raise ConfigurationError(
                f"{raid_level.upper()} tolera exatamente FTT={layout_ftt.value}; "
                f"FTT={faults_to_tolerate} informado. Use --scheme erasure_coding "
                f"para escolher o layout pelo FTT."
            )
        return RedundancyConfig(
            faults_to_tolerate=layout_ftt.value,
            scheme=RedundancyScheme.ERASURE_CODING,
            data_reduction_ratio=data_reduction_ratio
        )
    
    return RedundancyConfig(
        faults_to_tolerate=1 if faults_to_tolerate is None else faults_to_tolerate,
        scheme=RedundancyScheme.parse(scheme_name),
        data_reduction_ratio=data_reduction_ratio
    )


@dataclass(frozen=True)
class UsableCapacity:
    """Capacidade utilizável por disco e por nó."""
    
    layout: str
    physical_fraction: float   # Fração física (<= 1.0), sem redução de dados
    effective_fraction: float  # Fração lógica = física × redução de dados
    raw_per_disk_gb: float
    physical_per_disk_gb: float
    usable_per_disk_gb: float  # Lógica, usada no sizing
    usable_per_node_gb: float
    physical_per_node_gb: float
    min_nodes: int


def get_redundancy_rule(faults_to_tolerate: int, scheme: RedundancyScheme) -> RedundancyRule:
    """
    Busca a regra da tabela para (FTT, esquema).
    
    Raises:
        ConfigurationError: Combinação fora da tabela
    """
    try:
        ftt = FaultTolerance(faults_to_tolerate)
    except ValueError:
        raise ConfigurationError(
            f"faults_to_tolerate inválido: {faults_to_tolerate}. Valores aceitos: 1, 2, 3"
        )
    
    if not isinstance(scheme, RedundancyScheme):
        raise ConfigurationError(f"Esquema de redundância inválido: {scheme!r}")
    
    rule = REDUNDANCY_TABLE.get((ftt, scheme))
    if rule is None:
        supported = ", ".join(
            f"FTT={k[0].value}/{k[1].value}" for k in REDUNDANCY_TABLE
        )
        raise ConfigurationError(
            f"Combinação não suportada: FTT={ftt.value} com {scheme.value}. "
            f"Suportadas: {supported}"
        )
    return rule


def redundancy_factor(faults_to_tolerate: int, scheme: RedundancyScheme) -> float:
    """Fração da capacidade bruta utilizável para (FTT, esquema)."""
    return float(get_redundancy_rule(faults_to_tolerate, scheme).usable_fraction)


def min_nodes_for(faults_to_tolerate: int, scheme: RedundancyScheme) -> int:
    """Número mínimo de hosts exigido pelo layout."""
    return get_redundancy_rule(faults_to_tolerate, scheme).min_nodes


def calc_usable_capacity(
    config: RedundancyConfig,
    disk_size_gb: float,
    disks_per_node: int
) -> UsableCapacity:
    """
    Calcula capacidade utilizável por disco e por nó.
    
    A redução de dados age sobre o dado lógico antes do overhead de
    redundância: a capacidade física nunca excede a bruta, e a capacidade
    lógica (física × redução) é a usada para o sizing.
    
    Args:
        config: Configuração de redundância
        disk_size_gb: Capacidade bruta por disco (GB)
        disks_per_node: Discos por nó
    
    Returns:
        UsableCapacity
    """
    config.validate()
    rule = get_redundancy_rule(config.faults_to_tolerate, config.scheme)
    
    physical_fraction = float(rule.usable_fraction)
    effective_fraction = physical_fraction * config.data_reduction_ratio
    
    physical_per_disk_gb = disk_size_gb * physical_fraction
    usable_per_disk_gb = disk_size_gb * effective_fraction
    
    return UsableCapacity(
        layout=rule.layout,
        physical_fraction=physical_fraction,
        effective_fraction=effective_fraction,
        raw_per_disk_gb=disk_size_gb,
        physical_per_disk_gb=physical_per_disk_gb,
        usable_per_disk_gb=usable_per_disk_gb,
        usable_per_node_gb=usable_per_disk_gb * disks_per_node,
        physical_per_node_gb=physical_per_disk_gb * disks_per_node,
        min_nodes=rule.min_nodes
    )
