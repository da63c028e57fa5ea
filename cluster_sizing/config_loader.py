"""
Carregador de configurações JSON (processors, workloads) com validação de schema.
"""

import json
from pathlib import Path
from typing import Dict, List, Any, Tuple

from .errors import ValidationError
from .nodes import Processor
from .validator import validate_processors, validate_workloads
from .workloads import Workload


class ConfigLoader:
    """Carrega e gerencia o catálogo de processadores e a lista de workloads."""
    
    def __init__(self, base_path: str = ".", validate: bool = True):
        """
        Args:
            base_path: Caminho base para os arquivos JSON
            validate: Se True, valida schemas ao carregar
        """
        self.base_path = Path(base_path)
        self.validate = validate
        
        # Cache
        self._processors: Dict[str, Processor] = {}
        self._workloads: List[Workload] = []
        
        # Dados brutos para validação
        self._processors_data: List[Dict[str, Any]] = []
        self._workloads_data: List[Dict[str, Any]] = []
    
    def _read_json(self, path: Path, label: str) -> Dict[str, Any]:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except FileNotFoundError:
            raise FileNotFoundError(
                f"❌ Arquivo de {label} não encontrado: {path}\n"
                f"Certifique-se de que {path.name} existe no diretório."
            )
        except json.JSONDecodeError as e:
            raise ValidationError(f"❌ Erro ao parsear {path}: {e}")
    
    def load_processors(self, filepath: str = "processors.json") -> Dict[str, Processor]:
        """Carrega catálogo de processadores do JSON."""
        path = self.base_path / filepath
        data = self._read_json(path, "processadores")
        
        self._processors_data = data.get("processors", [])
        
        if self.validate:
            errors, _ = validate_processors(self._processors_data)
            if errors:
                error_msg = "\n".join(errors)
                raise ValidationError(f"❌ Erros de validação em {path.name}:\n{error_msg}")
        
        processors = {}
        for p in self._processors_data:
            processor = Processor(
                id=str(p["id"]),
                name=p["name"],
                cores=p["cores"],
                frequency=p.get("frequency", ""),
                generation=p.get("generation", ""),
                spec_int_base=p.get("spec_int_base", 0.0),
                tdp_watts=p.get("tdp", 0.0)
            )
            processor.validate()
            processors[processor.id.lower()] = processor
        
        self._processors = processors
        return processors
    
    def load_workloads(self, filepath: str = "workloads.json") -> List[Workload]:
        """Carrega lista de workloads do JSON (ordem preservada)."""
        path = self.base_path / filepath
        data = self._read_json(path, "workloads")
        
        self._workloads_data = data.get("workloads", [])
        
        if self.validate:
            errors, _ = validate_workloads(self._workloads_data)
            if errors:
                error_msg = "\n".join(errors)
                raise ValidationError(f"❌ Erros de validação em {path.name}:\n{error_msg}")
        
        workloads = []
        for w in self._workloads_data:
            workload = Workload(
                name=w["name"],
                vcpus=w["vcpus"],
                memory_gib=w["memory_gib"],
                storage_gb=w["storage_gb"],
                replicas=w.get("replicas", 1)
            )
            workload.validate()
            workloads.append(workload)
        
        self._workloads = workloads
        return workloads
    
    def get_processor(self, key: str) -> Processor:
        """Busca processador por id ou nome (case-insensitive)."""
        if not self._processors:
            self.load_processors()
        
        key_normalized = key.lower()
        if key_normalized in self._processors:
            return self._processors[key_normalized]
        
        for processor in self._processors.values():
            if processor.name.lower() == key_normalized:
                return processor
        
        available = ", ".join(f"{p.id} ({p.name})" for p in self._processors.values())
        raise ValidationError(
            f"❌ Processador '{key}' não encontrado no catálogo.\n"
            f"Processadores disponíveis: {available}"
        )
    
    def list_processors(self) -> List[Processor]:
        """Catálogo ordenado por geração e SPECint (decrescentes)."""
        if not self._processors:
            self.load_processors()
        return sorted(
            self._processors.values(),
            key=lambda p: (p.generation, p.spec_int_base),
            reverse=True
        )
    
    def get_raw_data(self) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
        """
        Retorna dados brutos (não parseados) para validação.
        
        Returns:
            (processors_data, workloads_data)
        """
        return self._processors_data, self._workloads_data
