"""
Parâmetros padrão de sizing (parameters.json).

Define os defaults de planejamento usados quando a CLI não os sobrescreve:
- Sobrecomissionamento vCPU:pCPU
- Teto de utilização (margem de segurança embutida na contagem de nós)
- Limite de alerta (apenas exibição)
- Nó reserva (N+1)
- Razão de redução de dados
"""

from dataclasses import dataclass
import json
import math

from .calc_nodes import SizingOptions
from .errors import ValidationError
from .redundancy import MAX_DATA_REDUCTION_RATIO


@dataclass
class SizingParameters:
    """
    Defaults de sizing carregados de parameters.json.
    
    Attributes:
        core_ratio: vCPUs por core físico
        utilization_ceiling: Teto de planejamento (0 < teto <= 1)
        alert_threshold_percent: Limite de alerta de utilização (%)
        consider_spare_node: Considerar N+1 por padrão
        data_reduction_ratio: Compressão/dedup padrão (>= 1.0)
        notes: Justificativa dos parâmetros
        source: Origem (arquivo ou defaults embutidos)
    """
    
    core_ratio: float = 4.0
    utilization_ceiling: float = 0.95
    alert_threshold_percent: float = 90.0
    consider_spare_node: bool = True
    data_reduction_ratio: float = 1.0
    notes: str = ""
    source: str = "parameters.json"
    
    def validate(self) -> None:
        """Valida os parâmetros."""
        self.to_options().validate()
        
        if not math.isfinite(self.data_reduction_ratio):
            raise ValidationError(
                f"data_reduction_ratio deve ser finito: {self.data_reduction_ratio}"
            )
        if self.data_reduction_ratio < 1.0:
            raise ValidationError(
                f"data_reduction_ratio não pode ser menor que 1.0: {self.data_reduction_ratio}"
            )
        if self.data_reduction_ratio > MAX_DATA_REDUCTION_RATIO:
            raise ValidationError(
                f"data_reduction_ratio não pode ser maior que {MAX_DATA_REDUCTION_RATIO}: "
                f"{self.data_reduction_ratio}"
            )
    
    def to_options(self) -> SizingOptions:
        """Converte para SizingOptions do motor."""
        return SizingOptions(
            utilization_ceiling=self.utilization_ceiling,
            consider_spare_node=self.consider_spare_node,
            core_ratio=self.core_ratio,
            alert_threshold_percent=self.alert_threshold_percent
        )


def load_sizing_parameters(filepath: str = "parameters.json") -> SizingParameters:
    """
    Carrega parâmetros de sizing do arquivo JSON.
    
    Campos ausentes assumem os defaults de SizingParameters. Arquivo
    inexistente resulta nos defaults embutidos.
    
    Raises:
        ValidationError: JSON inválido ou parâmetros fora da faixa
    """
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        params = SizingParameters(source="defaults embutidos")
        params.validate()
        return params
    except json.JSONDecodeError as e:
        raise ValidationError(f"❌ ERRO: Arquivo {filepath} não é um JSON válido: {e}")
    
    defaults = SizingParameters()
    params = SizingParameters(
        core_ratio=data.get("core_ratio", defaults.core_ratio),
        utilization_ceiling=data.get("utilization_ceiling", defaults.utilization_ceiling),
        alert_threshold_percent=data.get("alert_threshold_percent", defaults.alert_threshold_percent),
        consider_spare_node=data.get("consider_spare_node", defaults.consider_spare_node),
        data_reduction_ratio=data.get("data_reduction_ratio", defaults.data_reduction_ratio),
        notes=data.get("notes", ""),
        source=filepath
    )
    
    params.validate()
    
    return params
