"""
Formatação de capacidades de storage (GB decimal → GiB/TiB binário).
"""

# Conversão usada pelo catálogo de discos (1 GB exibido = 1000/1024 GiB)
GB_TO_GIB = 1000 / 1024
GIB_PER_TIB = 1024

# Tamanhos de disco padrão de mercado que não arredondam "limpo" em TiB
FIXED_POINT_TIB = (1.92, 3.84, 7.68, 15.36)
FIXED_POINT_TOLERANCE = 0.01


def gb_to_gib(gb: float) -> float:
    """Converte GB (catálogo) para GiB."""
    return gb * GB_TO_GIB


def format_storage(gb: float) -> str:
    """
    Formata quantidade em GB como string GiB/TiB.
    
    Regras:
    - < 1024 GiB: GiB com 2 casas decimais
    - >= 1024 GiB: TiB; 1.92/3.84/7.68/15.36 sempre com 2 casas,
      valores inteiros sem casas decimais, demais com 2 casas
    
    Args:
        gb: Quantidade em GB (base decimal)
    
    Returns:
        String formatada (ex: "937.50 GiB", "2 TiB", "3.84 TiB")
    """
    gib = gb_to_gib(gb)
    if gib < GIB_PER_TIB:
        return f"{gib:.2f} GiB"
    
    tib = gib / GIB_PER_TIB
    for point in FIXED_POINT_TIB:
        if abs(tib - point) < FIXED_POINT_TOLERANCE:
            return f"{point:.2f} TiB"
    
    if tib == int(tib):
        return f"{int(tib)} TiB"
    return f"{tib:.2f} TiB"


def format_raw_storage(gb: float) -> str:
    """Formata capacidade bruta em GB/TB (base 1024, sem conversão de unidade)."""
    if gb >= 1024:
        return f"{gb / 1024:.2f} TB"
    return f"{gb:.2f} GB"
