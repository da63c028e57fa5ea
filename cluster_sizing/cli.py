"""
CLI: Define argumentos de linha de comando.

Perfil do nó vem do catálogo de processadores (--processor) ou de override
manual (--cores-per-processor). Memória por nó: --memory-per-node-gib OU
--dimm-size/--dimms (mutuamente exclusivos).
"""

import argparse
from dataclasses import dataclass
from typing import List, Optional

from .calc_storage_performance import BLOCK_SIZES_KB, IOWorkload, StorageMedia
from .nodes import MEMORY_DIMM_SIZES_GIB, FormFactor


@dataclass
class CLIConfig:
    """Configuração derivada dos argumentos CLI."""
    # Arquivos
    workloads_file: str
    processors_file: str
    parameters_file: str
    
    # Perfil do nó
    processor: Optional[str]
    cores_per_processor: Optional[int]
    processors_per_node: int
    memory_per_node_gib: Optional[float]
    dimm_size_gib: Optional[int]
    dimm_count: Optional[int]
    disks_per_node: int
    disk_size_gb: float
    form_factor: str
    
    # Redundância (FTT None = padrão do esquema)
    faults_to_tolerate: Optional[int]
    scheme: str
    data_reduction_ratio: Optional[float]
    
    # Opções (None = usar parameters.json)
    core_ratio: Optional[float]
    utilization_ceiling: Optional[float]
    alert_threshold_percent: Optional[float]
    consider_spare_node: Optional[bool]
    
    # Desempenho de storage
    storage_media: str
    block_size_kb: int
    io_workload: str
    read_percent: float
    
    # Saídas
    executive_report: bool
    json_only: bool
    no_write: bool
    verbose: bool
    validate_only: bool
    list_processors: bool


def create_arg_parser() -> argparse.ArgumentParser:
    """Cria parser de argumentos CLI."""
    parser = argparse.ArgumentParser(
        description=(
            "Sizing de Servidores (compute, memória e storage)\n\n"
            "Calcula o número mínimo de nós homogêneos para hospedar os workloads\n"
            "sob teto de utilização, esquema de redundância (FTT) e N+1."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    
    # Arquivos
    parser.add_argument("--workloads", default="workloads.json",
                        help="Arquivo JSON com a lista de workloads (default: workloads.json)")
    parser.add_argument("--processors-file", default="processors.json",
                        help="Catálogo de processadores (default: processors.json)")
    parser.add_argument("--parameters", default="parameters.json",
                        help="Parâmetros padrão de sizing (default: parameters.json)")
    
    # Perfil do nó
    parser.add_argument("--processor",
                        help="Id ou nome do processador no catálogo (ex: 13)")
    parser.add_argument("--cores-per-processor", type=int,
                        help="Override manual de cores por processador (dispensa --processor)")
    parser.add_argument("--processors-per-node", type=int, choices=[1, 2], default=2,
                        help="Processadores por nó (default: 2)")
    
    memory_group = parser.add_mutually_exclusive_group()
    memory_group.add_argument("--memory-per-node-gib", type=float,
                              help="Memória por nó em GiB")
    memory_group.add_argument("--dimm-size", type=int, choices=list(MEMORY_DIMM_SIZES_GIB),
                              help="Tamanho do DIMM em GiB (usar com --dimms)")
    parser.add_argument("--dimms", type=int,
                        help="DIMMs por nó (1 a 32, usar com --dimm-size)")
    
    parser.add_argument("--disks", type=int, default=12,
                        help="Discos por nó (default: 12)")
    parser.add_argument("--disk-size-gb", type=float, default=960.0,
                        help="Capacidade por disco em GB (default: 960)")
    parser.add_argument("--form-factor", choices=[f.value for f in FormFactor], default=FormFactor.TWO_U.value,
                        help="Form factor do chassi: 1U (máx. 10 discos) ou 2U (máx. 24) (default: 2U)")
    
    # Redundância
    parser.add_argument("--ftt", type=int, choices=[1, 2, 3],
                        help="Falhas a tolerar (default: 1; raid5 implica 1 e raid6 implica 2)")
    parser.add_argument("--scheme", default="erasure_coding",
                        help="Esquema: mirror|erasure_coding (aliases: raid1, ec; raid5 = EC FTT=1, raid6 = EC FTT=2) "
                             "(default: erasure_coding)")
    parser.add_argument("--data-reduction", type=float,
                        help="Razão de redução de dados >= 1.0 (default: parameters.json)")
    
    # Opções
    parser.add_argument("--core-ratio", type=float,
                        help="vCPU:pCPU (default: parameters.json)")
    parser.add_argument("--utilization-ceiling", type=float,
                        help="Teto de utilização 0-1 (default: parameters.json)")
    parser.add_argument("--alert-threshold", type=float,
                        help="Limite de alerta de utilização em %% (default: parameters.json)")
    
    spare_group = parser.add_mutually_exclusive_group()
    spare_group.add_argument("--n-plus-one", dest="consider_spare_node",
                             action="store_const", const=True,
                             help="Adicionar nó reserva (N+1)")
    spare_group.add_argument("--no-n-plus-one", dest="consider_spare_node",
                             action="store_const", const=False,
                             help="Não adicionar nó reserva")
    
    # Desempenho de storage
    parser.add_argument("--storage-media", choices=[m.value for m in StorageMedia], default=StorageMedia.SSD.value,
                        help="Mídia dos discos para estimativa de IOPS/latência (default: SSD)")
    parser.add_argument("--block-size-kb", type=int, choices=list(BLOCK_SIZES_KB), default=4,
                        help="Tamanho de bloco de I/O em KB (default: 4)")
    parser.add_argument("--io-workload", choices=[w.value for w in IOWorkload], default=IOWorkload.RANDOM_READ.value,
                        help="Perfil de I/O (default: random_read)")
    parser.add_argument("--read-percent", type=float, default=50.0,
                        help="Percentual de leituras 0-100 (default: 50)")
    
    # Saídas
    parser.add_argument("--executive-report", action="store_true",
                        help="Gerar relatório executivo adicional em Markdown")
    parser.add_argument("--json-only", action="store_true",
                        help="Imprimir apenas o relatório JSON no stdout")
    parser.add_argument("--no-write", action="store_true",
                        help="Não gravar relatórios em ./relatorios")
    parser.add_argument("--verbose", action="store_true",
                        help="Modo verboso")
    
    # Validação / catálogo
    parser.add_argument("--validate-only", action="store_true",
                        help="Apenas validar arquivos JSON (schema e constraints) sem executar sizing")
    parser.add_argument("--list-processors", action="store_true",
                        help="Listar o catálogo de processadores e sair")
    
    return parser


def parse_cli_args(argv: Optional[List[str]] = None) -> CLIConfig:
    """Parse argumentos CLI e retorna configuração."""
    parser = create_arg_parser()
    args = parser.parse_args(argv)
    
    needs_profile = not (args.validate_only or args.list_processors)
    
    if needs_profile and args.processor is None and args.cores_per_processor is None:
        parser.error(
            "ERRO: Informe o processador do catálogo (--processor <id|nome>) "
            "ou cores manualmente (--cores-per-processor <N>)."
        )
    
    if (args.dimm_size is None) != (args.dimms is None):
        parser.error("ERRO: --dimm-size e --dimms devem ser usados juntos.")
    
    memory_per_node_gib = args.memory_per_node_gib
    if memory_per_node_gib is None and args.dimm_size is None:
        # Default: 12 × 64 GiB
        memory_per_node_gib = 768.0
    
    return CLIConfig(
        workloads_file=args.workloads,
        processors_file=args.processors_file,
        parameters_file=args.parameters,
        processor=args.processor,
        cores_per_processor=args.cores_per_processor,
        processors_per_node=args.processors_per_node,
        memory_per_node_gib=memory_per_node_gib,
        dimm_size_gib=args.dimm_size,
        dimm_count=args.dimms,
        disks_per_node=args.disks,
        disk_size_gb=args.disk_size_gb,
        form_factor=args.form_factor,
        faults_to_tolerate=args.ftt,
        scheme=args.scheme,
        data_reduction_ratio=args.data_reduction,
        core_ratio=args.core_ratio,
        utilization_ceiling=args.utilization_ceiling,
        alert_threshold_percent=args.alert_threshold,
        consider_spare_node=args.consider_spare_node,
        storage_media=args.storage_media,
        block_size_kb=args.block_size_kb,
        io_workload=args.io_workload,
        read_percent=args.read_percent,
        executive_report=args.executive_report,
        json_only=args.json_only,
        no_write=args.no_write,
        verbose=args.verbose,
        validate_only=args.validate_only,
        list_processors=args.list_processors
    )
