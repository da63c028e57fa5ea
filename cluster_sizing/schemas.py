"""
Schemas de validação para processors.json e workloads.json.

Define estrutura, tipos, campos obrigatórios e constraints de validação.
"""

from typing import Dict, Any, List

# ============================================================================
# PROCESSOR SCHEMA
# ============================================================================

PROCESSOR_SCHEMA = {
    "required": {
        "id": str,
        "name": str,
        "cores": int,
    },
    "optional": {
        "frequency": str,
        "generation": str,
        "spec_int_base": (int, float),
        "tdp": (int, float),
        "notes": str,
    },
    "enums": {},
    "constraints": [
        {
            "name": "positive_cores",
            "check": lambda p: p.get("cores", 1) > 0,
            "error": "cores must be > 0"
        },
        {
            "name": "non_negative_metrics",
            "check": lambda p: all([
                p.get("spec_int_base", 0) >= 0,
                p.get("tdp", 0) >= 0,
            ]),
            "error": "spec_int_base and tdp must be >= 0"
        },
    ]
}

# ============================================================================
# WORKLOAD SCHEMA
# ============================================================================

WORKLOAD_SCHEMA = {
    "required": {
        "name": str,
        "vcpus": int,
        "memory_gib": (int, float),
        "storage_gb": (int, float),
    },
    "optional": {
        "replicas": int,
        "notes": str,
    },
    "enums": {},
    "constraints": [
        {
            "name": "non_empty_name",
            "check": lambda w: bool(str(w.get("name", "x")).strip()),
            "error": "name must be non-empty"
        },
        {
            "name": "non_negative_values",
            "check": lambda w: all([
                w.get("vcpus", 0) >= 0,
                w.get("memory_gib", 0) >= 0,
                w.get("storage_gb", 0) >= 0,
            ]),
            "error": "Workload quantities (vcpus, memory_gib, storage_gb) must be >= 0"
        },
        {
            "name": "positive_replicas",
            "check": lambda w: w.get("replicas", 1) > 0,
            "error": "replicas must be > 0"
        },
    ]
}


def get_schema_documentation() -> Dict[str, List[Dict[str, Any]]]:
    """
    Retorna documentação estruturada dos schemas para inclusão no README.
    
    Returns:
        Dict com keys 'processors' e 'workloads', cada um contendo
        lista de dicts com: campo, tipo, obrigatório, descrição, unidade, exemplo
    """
    
    processors_doc = [
        {"campo": "id", "tipo": "str", "obrigatorio": "Sim", "descricao": "Identificador único", "unidade": "-", "exemplo": "13"},
        {"campo": "name", "tipo": "str", "obrigatorio": "Sim", "descricao": "Nome comercial do processador", "unidade": "-", "exemplo": "Intel Xeon Platinum 8592+"},
        {"campo": "cores", "tipo": "int", "obrigatorio": "Sim", "descricao": "Cores físicos por processador", "unidade": "cores", "exemplo": "64"},
        {"campo": "frequency", "tipo": "str", "obrigatorio": "Não", "descricao": "Frequência base", "unidade": "GHz", "exemplo": "1.9 GHz"},
        {"campo": "generation", "tipo": "str", "obrigatorio": "Não", "descricao": "Geração", "unidade": "-", "exemplo": "5th Gen"},
        {"campo": "spec_int_base", "tipo": "float", "obrigatorio": "Não", "descricao": "SPECint Rate base", "unidade": "score", "exemplo": "68.2"},
        {"campo": "tdp", "tipo": "float", "obrigatorio": "Não", "descricao": "Thermal Design Power", "unidade": "W", "exemplo": "350"},
    ]
    
    workloads_doc = [
        {"campo": "name", "tipo": "str", "obrigatorio": "Sim", "descricao": "Nome do workload", "unidade": "-", "exemplo": "web-frontend"},
        {"campo": "vcpus", "tipo": "int", "obrigatorio": "Sim", "descricao": "vCPUs por instância", "unidade": "vCPU", "exemplo": "4"},
        {"campo": "memory_gib", "tipo": "float", "obrigatorio": "Sim", "descricao": "Memória por instância", "unidade": "GiB", "exemplo": "16"},
        {"campo": "storage_gb", "tipo": "float", "obrigatorio": "Sim", "descricao": "Storage por instância", "unidade": "GB (decimal)", "exemplo": "200"},
        {"campo": "replicas", "tipo": "int", "obrigatorio": "Não", "descricao": "Quantidade de instâncias", "unidade": "count", "exemplo": "3"},
    ]
    
    return {
        "processors": processors_doc,
        "workloads": workloads_doc
    }
