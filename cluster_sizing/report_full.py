"""
Geração de relatório completo (técnico detalhado).
"""

from typing import Dict, Any, List, Optional, Sequence

from .calc_nodes import SizingOptions
from .calc_storage_performance import StoragePerformance
from .engine import DIMENSION_LABELS, SizingResult
from .nodes import NodeProfile
from .redundancy import RedundancyConfig
from .units import format_raw_storage, format_storage
from .workloads import Workload


def _section(lines: List[str], title: str) -> None:
    lines.append("┌" + "─" * 98 + "┐")
    lines.append("│" + f" {title}".ljust(98) + "│")
    lines.append("└" + "─" * 98 + "┘")
    lines.append("")


def format_full_report(
    workloads: Sequence[Workload],
    node: NodeProfile,
    redundancy: RedundancyConfig,
    options: SizingOptions,
    result: SizingResult,
    performance: Optional[StoragePerformance] = None
) -> str:
    """
    Gera relatório completo em texto.

    Args:
        performance: Estimativa de desempenho de storage (opcional)

    Returns:
        String com relatório formatado
    """
    lines = []
    
    lines.append("=" * 100)
    lines.append("RELATÓRIO COMPLETO DE SIZING - SERVIDORES")
    lines.append("=" * 100)
    lines.append("")
    
    # Seção 1: Workloads
    _section(lines, "SEÇÃO 1: WORKLOADS")
    lines.append(f"{'Workload':<30} {'vCPU':>8} {'Memória (GiB)':>15} {'Storage':>15} {'Réplicas':>10}")
    lines.append("-" * 82)
    for w in workloads:
        lines.append(
            f"{w.name:<30} {w.vcpus:>8} {w.memory_gib:>15.1f} "
            f"{format_storage(w.storage_gb):>15} {w.replicas:>10}"
        )
    lines.append("-" * 82)
    d = result.demand
    lines.append(
        f"{'TOTAL':<30} {d.total_vcpus:>8} {d.total_memory_gib:>15.1f} "
        f"{format_storage(d.total_storage_gb):>15} {d.instance_count:>10}"
    )
    lines.append("")
    
    # Seção 2: Perfil do nó
    _section(lines, "SEÇÃO 2: PERFIL DO SERVIDOR")
    if node.processor is not None:
        p = node.processor
        lines.append(f"Processador: {p.name} ({p.cores} cores, {p.frequency}, {p.generation})")
        lines.append(f"  • SPECint base: {p.spec_int_base}")
        lines.append(f"  • TDP: {p.tdp_watts:.0f} W")
    else:
        lines.append(f"Processador: manual ({node.cores_per_processor} cores)")
    lines.append(f"  • Processadores por nó: {node.processors_per_node}")
    lines.append(f"  • Cores por nó: {node.cores_per_node}")
    lines.append(f"  • Memória por nó: {node.memory_per_node_gib:.0f} GiB")
    lines.append(f"  • Form factor: {node.form_factor.value} (máx. {node.form_factor.max_disks} discos)")
    lines.append(f"  • Discos por nó: {node.disks_per_node} × {format_storage(node.disk_size_gb)}")
    lines.append("")
    
    # Seção 3: Redundância
    c = result.capacity
    _section(lines, "SEÇÃO 3: REDUNDÂNCIA E CAPACIDADE UTILIZÁVEL")
    lines.append(f"Layout: {c.layout} (FTT={redundancy.faults_to_tolerate}, {redundancy.scheme.value})")
    lines.append(f"  • Fração física utilizável: {c.physical_fraction*100:.1f}%")
    lines.append(f"  • Redução de dados: {redundancy.data_reduction_ratio:.1f}:1")
    lines.append(f"  • Fração lógica efetiva: {c.effective_fraction*100:.1f}%")
    lines.append(f"  • Utilizável por disco: {format_storage(c.usable_per_disk_gb)} (física: {format_storage(c.physical_per_disk_gb)})")
    lines.append(f"  • Utilizável por nó: {format_storage(c.usable_per_node_gb)} (física: {format_storage(c.physical_per_node_gb)})")
    lines.append(f"  • Mínimo de hosts do layout: {c.min_nodes}")
    lines.append("")
    lines.append("Observação: a redução de dados age sobre o dado lógico antes do overhead de")
    lines.append("redundância. A capacidade física nunca excede a bruta.")
    lines.append("")
    
    # Seção 4: Nós
    _section(lines, "SEÇÃO 4: CÁLCULO DE NÓS")
    ceiling = options.utilization_ceiling
    lines.append(f"Teto de utilização: {ceiling*100:.0f}% | Core ratio: {options.core_ratio:g}:1")
    lines.append("")
    lines.append(f"{'Dimensão':<12} {'Demanda':<22} {'Capacidade/nó':<22} {'Nós':<6} {'Limitante':<10}")
    lines.append("-" * 76)
    rows = [
        ("compute", f"{result.required_cores} cores", f"{result.cores_per_node} cores", result.nodes_for_compute),
        ("memory", f"{d.total_memory_gib:.1f} GiB", f"{result.memory_per_node_gib:.0f} GiB", result.nodes_for_memory),
        ("storage", format_storage(d.total_storage_gb), format_storage(c.usable_per_node_gb), result.nodes_for_storage),
    ]
    for dim, demand, cap, nodes in rows:
        binding = "◀" if dim in result.binding_dimensions else ""
        lines.append(f"{DIMENSION_LABELS[dim]:<12} {demand:<22} {cap:<22} {nodes:<6} {binding:<10}")
    lines.append("-" * 76)
    lines.append(f"Nós (máximo entre dimensões): {result.base_nodes}")
    lines.append(f"Nó reserva (N+1): {'sim' if result.spare_node_added else 'não'}")
    lines.append(f"TOTAL DE NÓS: {result.total_nodes}")
    lines.append("")
    
    # Seção 5: Utilização
    u = result.utilization
    _section(lines, "SEÇÃO 5: UTILIZAÇÃO")
    lines.append(f"Limite de alerta: {u.alert_threshold_percent:.0f}%")
    for dim in u.dimensions:
        flag = "  ⚠ acima do limite" if dim.over_threshold else ""
        lines.append(f"  • {DIMENSION_LABELS[dim.dimension]:<10} {dim.display_percent:6.1f}%{flag}")
    lines.append("")
    
    # Seção 6: Capacidade e físico
    ph = result.physical
    _section(lines, "SEÇÃO 6: CAPACIDADE TOTAL E CONSUMO FÍSICO")
    lines.append(f"Storage bruto: {format_raw_storage(result.raw_capacity_total_gb)} ({format_storage(result.raw_capacity_total_gb)})")
    lines.append(f"Storage físico utilizável: {format_storage(result.physical_capacity_total_gb)}")
    lines.append(f"Storage lógico efetivo: {format_storage(result.usable_capacity_total_gb)}")
    lines.append(f"Rack: {ph.total_rack_u}U ({ph.racks_required} rack(s) de 42U)")
    lines.append(f"Energia (TDP): {ph.total_power_watts/1000:.2f} kW")
    lines.append(f"Dissipação térmica: {ph.total_heat_btu_hr:,.0f} BTU/hr")
    lines.append(f"SPECint total: {ph.total_spec_int:,.1f}")
    lines.append("")
    
    # Seção 7: Desempenho de storage
    _section(lines, "SEÇÃO 7: DESEMPENHO DE STORAGE (ESTIMATIVA)")
    if performance is not None:
        pf = performance
        lines.append(f"{pf.raid_level.value} | {pf.media.value} | {pf.disk_count} discos no cluster")
        lines.append(f"  • IOPS: {pf.iops_total:,.0f} (leitura {pf.iops_read:,.0f} / escrita {pf.iops_write:,.0f})")
        lines.append(f"  • IOPS por GB bruto: {pf.iops_per_gb:.2f}")
        lines.append(f"  • Throughput: {pf.throughput_total_mbs:,.1f} MB/s "
                     f"(leitura {pf.throughput_read_mbs:,.1f} / escrita {pf.throughput_write_mbs:,.1f})")
        lines.append(f"  • Latência: leitura {pf.latency_read_ms:.2f} ms, escrita {pf.latency_write_ms:.2f} ms, "
                     f"média {pf.latency_average_ms:.2f} ms")
    else:
        lines.append("  Não estimado.")
    lines.append("")

    # Seção 8: Avisos
    _section(lines, "SEÇÃO 8: AVISOS")
    if result.warnings:
        for i, warning in enumerate(result.warnings, 1):
            lines.append(f"  {i}. {warning}")
    else:
        lines.append("  Nenhum aviso.")
    lines.append("")
    lines.append("=" * 100)
    
    return "\n".join(lines)


def format_json_report(
    workloads: Sequence[Workload],
    node: NodeProfile,
    redundancy: RedundancyConfig,
    options: SizingOptions,
    result: SizingResult,
    performance: Optional[StoragePerformance] = None
) -> Dict[str, Any]:
    """
    Gera relatório completo em JSON.
    
    Returns:
        Dict serializável
    """
    processor = None
    if node.processor is not None:
        processor = {
            "id": node.processor.id,
            "name": node.processor.name,
            "cores": node.processor.cores,
            "spec_int_base": node.processor.spec_int_base,
            "tdp_watts": node.processor.tdp_watts,
        }

    storage_performance = None
    if performance is not None:
        storage_performance = {
            "raid_level": performance.raid_level.value,
            "media": performance.media.value,
            "disk_count": performance.disk_count,
            "iops_total": round(performance.iops_total, 1),
            "iops_read": round(performance.iops_read, 1),
            "iops_write": round(performance.iops_write, 1),
            "iops_per_gb": round(performance.iops_per_gb, 3),
            "throughput_read_mbs": round(performance.throughput_read_mbs, 2),
            "throughput_write_mbs": round(performance.throughput_write_mbs, 2),
            "throughput_total_mbs": round(performance.throughput_total_mbs, 2),
            "latency_read_ms": round(performance.latency_read_ms, 3),
            "latency_write_ms": round(performance.latency_write_ms, 3),
            "latency_average_ms": round(performance.latency_average_ms, 3),
            "latency_max_ms": round(performance.latency_max_ms, 3),
        }

    return {
        "workloads": [
            {
                "name": w.name,
                "vcpus": w.vcpus,
                "memory_gib": w.memory_gib,
                "storage_gb": w.storage_gb,
                "replicas": w.replicas,
            }
            for w in workloads
        ],
        "node_profile": {
            "processor": processor,
            "cores_per_processor": node.cores_per_processor,
            "processors_per_node": node.processors_per_node,
            "cores_per_node": node.cores_per_node,
            "memory_per_node_gib": node.memory_per_node_gib,
            "disks_per_node": node.disks_per_node,
            "disk_size_gb": node.disk_size_gb,
            "form_factor": node.form_factor.value,
        },
        "redundancy": {
            "faults_to_tolerate": redundancy.faults_to_tolerate,
            "scheme": redundancy.scheme.value,
            "layout": result.capacity.layout,
            "data_reduction_ratio": redundancy.data_reduction_ratio,
            "physical_fraction": round(result.capacity.physical_fraction, 4),
            "effective_fraction": round(result.capacity.effective_fraction, 4),
            "min_nodes": result.capacity.min_nodes,
        },
        "parameters": {
            "utilization_ceiling": options.utilization_ceiling,
            "core_ratio": options.core_ratio,
            "alert_threshold_percent": options.alert_threshold_percent,
            "consider_spare_node": options.consider_spare_node,
        },
        "demand": {
            "total_vcpus": result.demand.total_vcpus,
            "total_memory_gib": result.demand.total_memory_gib,
            "total_storage_gb": result.demand.total_storage_gb,
            "required_cores": result.required_cores,
            "workload_count": result.demand.workload_count,
            "instance_count": result.demand.instance_count,
        },
        "results": {
            "nodes_for_compute": result.nodes_for_compute,
            "nodes_for_memory": result.nodes_for_memory,
            "nodes_for_storage": result.nodes_for_storage,
            "base_nodes": result.base_nodes,
            "total_nodes": result.total_nodes,
            "spare_node_added": result.spare_node_added,
            "binding_dimensions": list(result.binding_dimensions),
            "usable_capacity_per_disk_gb": round(result.usable_capacity_per_disk_gb, 2),
            "usable_capacity_per_node_gb": round(result.usable_capacity_per_node_gb, 2),
            "raw_capacity_total_gb": round(result.raw_capacity_total_gb, 2),
            "physical_capacity_total_gb": round(result.physical_capacity_total_gb, 2),
            "usable_capacity_total_gb": round(result.usable_capacity_total_gb, 2),
            "usable_capacity_total_display": format_storage(result.usable_capacity_total_gb),
        },
        "utilization": {
            dim.dimension: {
                "percent": round(dim.display_percent, 2),
                "raw_percent": round(dim.raw_percent, 2),
                "over_threshold": dim.over_threshold,
            }
            for dim in result.utilization.dimensions
        },
        "physical": {
            "total_rack_u": result.physical.total_rack_u,
            "racks_required": result.physical.racks_required,
            "total_power_kw": round(result.physical.total_power_watts / 1000, 3),
            "total_heat_btu_hr": round(result.physical.total_heat_btu_hr, 1),
            "total_spec_int": round(result.physical.total_spec_int, 1),
        },
        "storage_performance": storage_performance,
        "warnings": list(result.warnings),
    }
