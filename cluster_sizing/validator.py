"""
Validação de schemas e constraints para processors.json e workloads.json.
"""

from typing import Dict, Any, List, Tuple
from .schemas import PROCESSOR_SCHEMA, WORKLOAD_SCHEMA


def validate_object(
    obj: Dict[str, Any],
    schema: Dict[str, Any],
    obj_type: str,
    obj_name: str = "unknown"
) -> List[str]:
    """
    Valida um objeto contra um schema.
    
    Args:
        obj: Objeto a validar (dict do JSON)
        schema: Schema de referência
        obj_type: Tipo do objeto ("processor", "workload")
        obj_name: Nome do objeto (para mensagens de erro)
    
    Returns:
        Lista de erros (vazia se válido)
    """
    errors = []
    
    # 1. Campos obrigatórios
    for field, expected_type in schema["required"].items():
        if field not in obj:
            errors.append(
                f"[{obj_type}:{obj_name}] Campo obrigatório ausente: '{field}'."
            )
        elif not _check_type(obj[field], expected_type):
            errors.append(
                f"[{obj_type}:{obj_name}] Campo '{field}' tem tipo inválido. "
                f"Esperado: {_type_to_str(expected_type)}, Recebido: {type(obj[field]).__name__}"
            )
    
    # 2. Campos opcionais (se presentes)
    for field, expected_type in schema.get("optional", {}).items():
        if field in obj and not _check_type(obj[field], expected_type):
            errors.append(
                f"[{obj_type}:{obj_name}] Campo opcional '{field}' tem tipo inválido. "
                f"Esperado: {_type_to_str(expected_type)}, Recebido: {type(obj[field]).__name__}"
            )
    
    # 3. Enums
    for field, valid_values in schema.get("enums", {}).items():
        if field in obj and isinstance(obj[field], str):
            if obj[field].lower() not in [v.lower() for v in valid_values]:
                errors.append(
                    f"[{obj_type}:{obj_name}] Campo '{field}' tem valor inválido: '{obj[field]}'. "
                    f"Valores aceitos: {', '.join(valid_values)}"
                )
    
    # Constraints só fazem sentido com tipos corretos
    if errors:
        return errors
    
    # 4. Constraints
    for constraint in schema.get("constraints", []):
        if not constraint["check"](obj):
            errors.append(
                f"[{obj_type}:{obj_name}] Constraint '{constraint['name']}' falhou: "
                f"{constraint['error']}"
            )
    
    return errors


def _check_type(value: Any, expected_type: Any) -> bool:
    """
    Verifica se value tem o tipo esperado.
    
    Suporta:
    - Tipos simples: str, int, float, bool
    - Tuplas de tipos: (int, float) significa "int OU float"
    - type(None) para aceitar None
    """
    if isinstance(expected_type, tuple):
        return any(_check_type(value, t) for t in expected_type)
    # bool é subclasse de int, mas true/false não é quantidade
    if isinstance(value, bool) and expected_type is not bool:
        return False
    return isinstance(value, expected_type)


def _type_to_str(expected_type: Any) -> str:
    """Converte tipo esperado para string legível."""
    if isinstance(expected_type, tuple):
        return " | ".join(_type_to_str(t) for t in expected_type)
    if expected_type is type(None):
        return "null"
    return expected_type.__name__


def _find_duplicates(items: List[Dict[str, Any]], key: str) -> List[str]:
    names = [str(i.get(key, "")).lower() for i in items]
    return sorted({name for name in names if names.count(name) > 1})


def validate_processors(processors: List[Dict[str, Any]]) -> Tuple[List[str], List[str]]:
    """
    Valida lista de processadores.
    
    Returns:
        (erros, warnings)
    """
    errors = []
    warnings = []
    
    duplicates = _find_duplicates(processors, "id")
    if duplicates:
        errors.append(
            f"[processors.json] IDs duplicados encontrados: {', '.join(duplicates)}. "
            "Cada processador deve ter um id único."
        )
    
    for processor in processors:
        name = processor.get("name", "unknown")
        errors.extend(validate_object(processor, PROCESSOR_SCHEMA, "processor", name))
        if "spec_int_base" not in processor or "tdp" not in processor:
            warnings.append(
                f"[processor:{name}] Sem spec_int_base/tdp: relatório físico ficará zerado."
            )
    
    return errors, warnings


def validate_workloads(workloads: List[Dict[str, Any]]) -> Tuple[List[str], List[str]]:
    """
    Valida lista de workloads.
    
    Returns:
        (erros, warnings)
    """
    errors = []
    warnings = []
    
    duplicates = _find_duplicates(workloads, "name")
    if duplicates:
        warnings.append(
            f"[workloads.json] Nomes duplicados: {', '.join(duplicates)}. "
            "A demanda será somada normalmente."
        )
    
    for workload in workloads:
        name = workload.get("name", "unknown")
        errors.extend(validate_object(workload, WORKLOAD_SCHEMA, "workload", name))
    
    return errors, warnings


def validate_all_configs(
    processors: List[Dict[str, Any]],
    workloads: List[Dict[str, Any]]
) -> Tuple[List[str], List[str]]:
    """
    Valida todos os arquivos de configuração.
    
    Returns:
        (erros, warnings)
    """
    all_errors = []
    all_warnings = []
    
    processor_errors, processor_warnings = validate_processors(processors)
    all_errors.extend(processor_errors)
    all_warnings.extend(processor_warnings)
    
    workload_errors, workload_warnings = validate_workloads(workloads)
    all_errors.extend(workload_errors)
    all_warnings.extend(workload_warnings)
    
    return all_errors, all_warnings


def print_validation_report(errors: List[str], warnings: List[str]) -> bool:
    """
    Imprime relatório de validação.
    
    Returns:
        True se validação passou (sem erros), False caso contrário
    """
    print("\n" + "=" * 100)
    print("VALIDAÇÃO DE SCHEMAS E CONSTRAINTS")
    print("=" * 100)
    
    if warnings:
        print(f"\n⚠️  {len(warnings)} WARNING(S):")
        for i, warning in enumerate(warnings, 1):
            print(f"  {i}. {warning}")
    
    if errors:
        print(f"\n❌ {len(errors)} ERRO(S) ENCONTRADO(S):")
        for i, error in enumerate(errors, 1):
            print(f"  {i}. {error}")
        print("\n" + "=" * 100)
        print("❌ VALIDAÇÃO FALHOU")
        print("=" * 100 + "\n")
        return False
    
    if not warnings:
        print("\n✅ Todos os arquivos de configuração são válidos.")
    else:
        print("\n✅ Validação passou (com warnings).")
    print("=" * 100 + "\n")
    return True
