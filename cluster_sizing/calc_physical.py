"""
Cálculos de consumo físico de datacenter (energia, rack, dissipação térmica, SPECint).
"""

import math
from dataclasses import dataclass

from .nodes import NodeProfile


# Constantes de conversão
WATTS_TO_BTU_HR = 3.412142  # 1 Watt = 3.412142 BTU/hr
RACK_UNITS_PER_RACK = 42


@dataclass(frozen=True)
class PhysicalFootprint:
    """Consumo físico do cluster."""
    total_rack_u: int
    racks_required: int
    total_power_watts: float
    total_heat_btu_hr: float
    total_spec_int: float


def calc_physical_footprint(total_nodes: int, node: NodeProfile) -> PhysicalFootprint:
    """
    Calcula consumo físico para o total de nós.
    
    Energia e SPECint vêm do processador do catálogo (TDP e benchmark);
    sem processador associado ficam zerados.
    
    Args:
        total_nodes: Nós escolhidos (incluindo reserva)
        node: Perfil do nó
    """
    total_rack_u = total_nodes * node.rack_units_u
    racks_required = math.ceil(total_rack_u / RACK_UNITS_PER_RACK)
    
    # Energia total (W): TDP por processador
    if node.processor is not None:
        total_power_watts = total_nodes * node.processors_per_node * node.processor.tdp_watts
        total_spec_int = total_nodes * node.processors_per_node * node.processor.spec_int_base
    else:
        total_power_watts = 0.0
        total_spec_int = 0.0
    
    return PhysicalFootprint(
        total_rack_u=total_rack_u,
        racks_required=racks_required,
        total_power_watts=total_power_watts,
        total_heat_btu_hr=total_power_watts * WATTS_TO_BTU_HR,
        total_spec_int=total_spec_int
    )
