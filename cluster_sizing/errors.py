"""
Taxonomia de erros do motor de sizing.

Todos os erros são levantados imediatamente e propagados ao chamador;
o motor é puro e determinístico, então não existe retry local.
"""


class SizingError(ValueError):
    """Erro base do motor de sizing."""
    pass


class ValidationError(SizingError):
    """Campo de workload/perfil malformado ou fora da faixa (ex: réplicas <= 0)."""
    pass


class ConfigurationError(SizingError):
    """Combinação (FTT, esquema) não suportada ou discos acima do form factor."""
    pass


class DivisionError(SizingError):
    """Capacidade por nó zero ou negativa: sizing impossível."""
    pass
