#!/usr/bin/env python3
"""
Sizing de Servidores (compute, memória e storage).

Entrypoint principal do sistema modular.
"""

import json
import sys

from cluster_sizing.cli import CLIConfig, parse_cli_args
from cluster_sizing.config_loader import ConfigLoader
from cluster_sizing.parameters import load_sizing_parameters
from cluster_sizing.nodes import FormFactor, NodeProfile, memory_from_dimms
from cluster_sizing.redundancy import parse_redundancy
from cluster_sizing.calc_nodes import SizingOptions
from cluster_sizing.calc_storage_performance import (
    IOWorkload, StorageMedia, StoragePerformanceInput,
    calc_storage_performance, raid_level_for
)
from cluster_sizing.engine import size_cluster
from cluster_sizing.validator import validate_all_configs, print_validation_report
from cluster_sizing.report_full import format_full_report, format_json_report
from cluster_sizing.report_exec import format_exec_summary, format_executive_markdown
from cluster_sizing.writer import ReportWriter


def _build_node_profile(config: CLIConfig, loader: ConfigLoader) -> NodeProfile:
    if config.dimm_size_gib is not None:
        memory_per_node_gib = memory_from_dimms(config.dimm_size_gib, config.dimm_count)
    else:
        memory_per_node_gib = config.memory_per_node_gib
    
    form_factor = FormFactor.parse(config.form_factor)
    
    if config.processor is not None:
        processor = loader.get_processor(config.processor)
        node = NodeProfile.from_processor(
            processor,
            processors_per_node=config.processors_per_node,
            memory_per_node_gib=memory_per_node_gib,
            disks_per_node=config.disks_per_node,
            disk_size_gb=config.disk_size_gb,
            form_factor=form_factor
        )
        if config.cores_per_processor is not None:
            # Override manual de cores mantém SPECint/TDP do catálogo
            node = NodeProfile(
                cores_per_processor=config.cores_per_processor,
                processors_per_node=node.processors_per_node,
                memory_per_node_gib=node.memory_per_node_gib,
                disks_per_node=node.disks_per_node,
                disk_size_gb=node.disk_size_gb,
                form_factor=node.form_factor,
                processor=processor
            )
        return node
    
    return NodeProfile(
        cores_per_processor=config.cores_per_processor,
        processors_per_node=config.processors_per_node,
        memory_per_node_gib=memory_per_node_gib,
        disks_per_node=config.disks_per_node,
        disk_size_gb=config.disk_size_gb,
        form_factor=form_factor
    )


def _override(value, default):
    return default if value is None else value


def main():
    """Função principal: orquestra todo o fluxo de sizing."""
    
    try:
        # 1. Parse CLI
        config = parse_cli_args()
        
        # 2. Se --validate-only, executar apenas validação
        if config.validate_only:
            print("\n" + "="*100)
            print("MODO DE VALIDACAO: Validando schemas e constraints")
            print("="*100 + "\n")
            
            loader = ConfigLoader(base_path=".", validate=False)
            loader.load_processors(config.processors_file)
            loader.load_workloads(config.workloads_file)
            
            processors_data, workloads_data = loader.get_raw_data()
            errors, warnings = validate_all_configs(processors_data, workloads_data)
            success = print_validation_report(errors, warnings)
            
            sys.exit(0 if success else 1)
        
        loader = ConfigLoader(base_path=".", validate=True)
        
        # 3. Listar catálogo
        if config.list_processors:
            loader.load_processors(config.processors_file)
            print(f"{'Id':<6} {'Processador':<40} {'Cores':>6} {'Freq.':>10} {'Geração':<18} {'SPECint':>8} {'TDP':>6}")
            print("-" * 100)
            for p in loader.list_processors():
                print(
                    f"{p.id:<6} {p.name:<40} {p.cores:>6} {p.frequency:>10} "
                    f"{p.generation:<18} {p.spec_int_base:>8.1f} {p.tdp_watts:>6.0f}"
                )
            return
        
        # 4. Carregar parâmetros e catálogos
        if config.verbose:
            print(f"Carregando parâmetros de {config.parameters_file}...")
        params = load_sizing_parameters(config.parameters_file)
        
        if config.processor is not None:
            loader.load_processors(config.processors_file)
        
        if config.verbose:
            print(f"Carregando workloads de {config.workloads_file}...")
        workloads = loader.load_workloads(config.workloads_file)
        
        # 5. Montar entradas do motor (CLI sobrepõe parameters.json)
        node = _build_node_profile(config, loader)
        
        redundancy = parse_redundancy(
            config.scheme,
            faults_to_tolerate=config.faults_to_tolerate,
            data_reduction_ratio=_override(config.data_reduction_ratio, params.data_reduction_ratio)
        )
        
        options = SizingOptions(
            utilization_ceiling=_override(config.utilization_ceiling, params.utilization_ceiling),
            consider_spare_node=_override(config.consider_spare_node, params.consider_spare_node),
            core_ratio=_override(config.core_ratio, params.core_ratio),
            alert_threshold_percent=_override(config.alert_threshold_percent, params.alert_threshold_percent)
        )
        
        if config.verbose:
            print(f"Parâmetros: {params.source}")
            print(f"Perfil do nó: {node.cores_per_node} cores, {node.memory_per_node_gib:.0f} GiB, "
                  f"{node.disks_per_node} discos de {node.disk_size_gb:.0f} GB ({node.form_factor.value})")
            print(f"Redundância: FTT={redundancy.faults_to_tolerate}, {redundancy.scheme.value}, "
                  f"redução {redundancy.data_reduction_ratio:.1f}:1")
        
        # 6. Sizing
        result = size_cluster(workloads, node, redundancy, options)
        
        # 7. Desempenho de storage do conjunto de discos do cluster
        performance = calc_storage_performance(StoragePerformanceInput(
            raid_level=raid_level_for(redundancy),
            media=StorageMedia(config.storage_media),
            disk_count=result.total_nodes * node.disks_per_node,
            disk_size_gb=node.disk_size_gb,
            block_size_kb=config.block_size_kb,
            workload=IOWorkload(config.io_workload),
            read_percent=config.read_percent
        ))
        
        json_report = format_json_report(workloads, node, redundancy, options, result, performance)
        
        if config.json_only:
            print(json.dumps(json_report, indent=2, ensure_ascii=False))
            return
        
        # 8. Relatórios
        text_path = None
        json_path = None
        exec_path = None
        if not config.no_write:
            label = node.processor.id if node.processor is not None else f"{node.cores_per_node}c"
            writer = ReportWriter()
            full_report = format_full_report(workloads, node, redundancy, options, result, performance)
            text_path = writer.write_text_report(full_report, label)
            json_path = writer.write_json_report(json_report, label)
            if config.executive_report:
                exec_path = writer.write_executive_report(
                    format_executive_markdown(node, redundancy, result), label
                )
        
        exec_summary = format_exec_summary(
            node,
            redundancy,
            result,
            text_report_path=str(text_path) if text_path else None,
            json_report_path=str(json_path) if json_path else None,
            performance=performance
        )
        
        print(exec_summary)
        
        if exec_path:
            print(f"   Executive: {exec_path}")
            print()
        
        if result.warnings:
            print("\nAVISOS:")
            for warning in result.warnings:
                print(f"   {warning}")
            print()
        
    except KeyboardInterrupt:
        print("\n\nOperacao cancelada pelo usuario.")
        sys.exit(1)
    except Exception as e:
        print(f"\nERRO: {e}", file=sys.stderr)
        if 'config' in locals() and config.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
