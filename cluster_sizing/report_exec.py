"""
Geração de relatório executivo (resumo para terminal e relatório Markdown executivo).
"""

from typing import Optional

from .calc_storage_performance import StoragePerformance
from .engine import DIMENSION_LABELS, SizingResult
from .nodes import NodeProfile
from .redundancy import RedundancyConfig
from .units import format_storage


def _node_label(node: NodeProfile) -> str:
    if node.processor is not None:
        cpu = f"{node.processors_per_node}x {node.processor.name}"
    else:
        cpu = f"{node.processors_per_node}x {node.cores_per_processor} cores"
    return f"{cpu}, {node.memory_per_node_gib:.0f} GiB, {node.disks_per_node}x {format_storage(node.disk_size_gb)} ({node.form_factor.value})"


def format_exec_summary(
    node: NodeProfile,
    redundancy: RedundancyConfig,
    result: SizingResult,
    text_report_path: Optional[str] = None,
    json_report_path: Optional[str] = None,
    performance: Optional[StoragePerformance] = None
) -> str:
    """
    Gera resumo executivo para exibição no terminal.

    Returns:
        String com resumo formatado
    """
    lines = []

    lines.append("=" * 80)
    lines.append("RESUMO EXECUTIVO - SIZING DE SERVIDORES")
    lines.append("=" * 80)
    lines.append("")

    d = result.demand
    lines.append(f"Workloads:           {d.workload_count} ({d.instance_count} instâncias)")
    lines.append(f"Demanda:             {d.total_vcpus} vCPU | {d.total_memory_gib:.1f} GiB | {format_storage(d.total_storage_gb)}")
    lines.append(f"Servidor:            {_node_label(node)}")
    lines.append(f"Redundância:         {result.capacity.layout} (FTT={redundancy.faults_to_tolerate})")
    lines.append("")

    lines.append("-" * 80)
    lines.append(f"{'Dimensão':<12} {'Nós':<6} {'Utilização':<12} {'Status':<10}")
    lines.append("-" * 80)
    counts = {
        "compute": result.nodes_for_compute,
        "memory": result.nodes_for_memory,
        "storage": result.nodes_for_storage,
    }
    for dim in result.utilization.dimensions:
        status = "[ALERTA]" if dim.over_threshold else "[OK]"
        lines.append(
            f"{DIMENSION_LABELS[dim.dimension]:<12} {counts[dim.dimension]:<6} "
            f"{dim.display_percent:>6.1f}%      {status:<10}"
        )
    lines.append("-" * 80)
    spare = " (inclui N+1)" if result.spare_node_added else ""
    lines.append(f"TOTAL DE NÓS:        {result.total_nodes}{spare}")
    lines.append(f"Storage utilizável:  {format_storage(result.usable_capacity_total_gb)}")
    lines.append(f"Rack:                {result.physical.total_rack_u}U ({result.physical.racks_required} rack(s))")
    lines.append(f"Energia:             {result.physical.total_power_watts/1000:.2f} kW")
    if performance is not None:
        lines.append(
            f"Desempenho storage:  {performance.iops_total:,.0f} IOPS | "
            f"{performance.throughput_total_mbs:,.1f} MB/s | "
            f"{performance.latency_average_ms:.2f} ms ({performance.media.value}, estimativa)"
        )
    lines.append("")

    if text_report_path or json_report_path:
        lines.append("Relatórios gerados:")
        if text_report_path:
            lines.append(f"  • {text_report_path}")
        if json_report_path:
            lines.append(f"  • {json_report_path}")
        lines.append("")

    lines.append("=" * 80)

    return "\n".join(lines)


def format_executive_markdown(
    node: NodeProfile,
    redundancy: RedundancyConfig,
    result: SizingResult
) -> str:
    """
    Gera relatório executivo em Markdown para diretoria.
    """
    d = result.demand
    u = result.utilization
    ph = result.physical
    lines = []

    lines.append("# Relatório Executivo: Sizing de Servidores")
    lines.append("")
    lines.append("## Sumário Executivo")
    lines.append("")
    lines.append(
        f"Para atender **{d.workload_count} workloads** ({d.instance_count} instâncias) "
        f"são necessários **{result.total_nodes} servidores**"
        + (" incluindo um nó reserva (N+1)." if result.spare_node_added else ".")
    )
    if result.binding_dimensions:
        labels = ", ".join(DIMENSION_LABELS[b] for b in result.binding_dimensions)
        lines.append(f"A dimensão limitante é: **{labels}**.")
    lines.append("")

    lines.append("## Demanda")
    lines.append("")
    lines.append("| Recurso | Demanda |")
    lines.append("|---|---|")
    lines.append(f"| vCPU | {d.total_vcpus} |")
    lines.append(f"| Memória | {d.total_memory_gib:.1f} GiB |")
    lines.append(f"| Storage | {format_storage(d.total_storage_gb)} |")
    lines.append("")

    lines.append("## Configuração do Servidor")
    lines.append("")
    lines.append(f"- {_node_label(node)}")
    lines.append(f"- Redundância: {result.capacity.layout} (FTT={redundancy.faults_to_tolerate})")
    lines.append(f"- Redução de dados: {redundancy.data_reduction_ratio:.1f}:1")
    lines.append("")

    lines.append("## Resultado")
    lines.append("")
    lines.append("| Dimensão | Nós | Utilização |")
    lines.append("|---|---|---|")
    counts = {
        "compute": result.nodes_for_compute,
        "memory": result.nodes_for_memory,
        "storage": result.nodes_for_storage,
    }
    for dim in u.dimensions:
        flag = " ⚠" if dim.over_threshold else ""
        lines.append(f"| {DIMENSION_LABELS[dim.dimension]} | {counts[dim.dimension]} | {dim.display_percent:.1f}%{flag} |")
    lines.append("")
    lines.append(f"- **Total de nós:** {result.total_nodes}")
    lines.append(f"- **Storage utilizável:** {format_storage(result.usable_capacity_total_gb)}")
    lines.append(f"- **Rack:** {ph.total_rack_u}U ({ph.racks_required} rack(s) de 42U)")
    lines.append(f"- **Energia:** {ph.total_power_watts/1000:.2f} kW ({ph.total_heat_btu_hr:,.0f} BTU/hr)")
    lines.append("")

    if result.warnings:
        lines.append("## Avisos")
        lines.append("")
        for warning in result.warnings:
            lines.append(f"- {warning}")
        lines.append("")

    return "\n".join(lines)
