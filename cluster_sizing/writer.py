"""
Writer: escreve relatórios em arquivos (txt, json, md).
"""

import json
import re
from datetime import datetime
from pathlib import Path
from typing import Dict, Any


def _slug(label: str) -> str:
    return re.sub(r"[^A-Za-z0-9_.-]+", "_", label).strip("_") or "cluster"


class ReportWriter:
    """Gerencia escrita de relatórios em ./relatorios."""
    
    def __init__(self, base_dir: str = "relatorios"):
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)
    
    def _generate_filename(self, prefix: str, label: str, extension: str) -> Path:
        """Gera nome de arquivo com timestamp."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"{prefix}_{_slug(label)}_{timestamp}.{extension}"
        return self.base_dir / filename
    
    def write_text_report(self, content: str, label: str) -> Path:
        """Escreve relatório completo em texto."""
        filepath = self._generate_filename("sizing", label, "txt")
        filepath.write_text(content, encoding='utf-8')
        return filepath
    
    def write_json_report(self, data: Dict[str, Any], label: str) -> Path:
        """Escreve relatório completo em JSON."""
        filepath = self._generate_filename("sizing", label, "json")
        filepath.write_text(
            json.dumps(data, indent=2, ensure_ascii=False),
            encoding='utf-8'
        )
        return filepath
    
    def write_executive_report(self, content: str, label: str) -> Path:
        """Escreve relatório executivo em Markdown."""
        filepath = self._generate_filename("executive", label, "md")
        filepath.write_text(content, encoding='utf-8')
        return filepath
