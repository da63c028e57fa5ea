#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
test_sizing.py - Testes de ponta a ponta da CLI (main.py --json-only)

Executar com: pytest test_sizing.py -v
"""

import json
import subprocess
import sys
from pathlib import Path

import pytest


REPO_ROOT = Path(__file__).parent


def run_sizing(args):
    """Executa main.py e retorna o processo concluído."""
    cmd = [sys.executable, "main.py"] + args
    return subprocess.run(cmd, capture_output=True, text=True, cwd=REPO_ROOT)


def run_sizing_json(args):
    result = run_sizing(args + ["--json-only", "--no-write"])
    assert result.returncode == 0, result.stderr
    return json.loads(result.stdout)


class TestCLI:
    
    def test_processor_from_catalog(self):
        data = run_sizing_json(["--processor", "13"])
        assert data["node_profile"]["cores_per_node"] == 128
        assert data["results"]["total_nodes"] >= 1
        # parameters.json liga N+1
        assert data["results"]["spare_node_added"] is True
    
    def test_manual_cores_and_no_spare(self):
        data = run_sizing_json([
            "--cores-per-processor", "32", "--memory-per-node-gib", "768",
            "--disks", "12", "--disk-size-gb", "960", "--no-n-plus-one"
        ])
        assert data["node_profile"]["processor"] is None
        assert data["results"]["total_nodes"] == data["results"]["base_nodes"]
    
    def test_spare_adds_one_node(self):
        base = ["--cores-per-processor", "32"]
        without = run_sizing_json(base + ["--no-n-plus-one"])
        with_spare = run_sizing_json(base + ["--n-plus-one"])
        assert with_spare["results"]["total_nodes"] == without["results"]["total_nodes"] + 1
    
    def test_dimms(self):
        data = run_sizing_json(["--processor", "13", "--dimm-size", "64", "--dimms", "16"])
        assert data["node_profile"]["memory_per_node_gib"] == 1024
    
    def test_dimm_size_outside_catalog_is_usage_error(self):
        result = run_sizing(["--processor", "13", "--dimm-size", "48", "--dimms", "16", "--no-write"])
        assert result.returncode == 2
    
    def test_overrides(self):
        data = run_sizing_json([
            "--processor", "13", "--scheme", "raid1", "--ftt", "2",
            "--utilization-ceiling", "0.8", "--data-reduction", "1.5"
        ])
        assert data["redundancy"]["scheme"] == "mirror"
        assert data["redundancy"]["data_reduction_ratio"] == 1.5
        assert data["parameters"]["utilization_ceiling"] == 0.8
    
    def test_unsupported_combination_fails(self):
        result = run_sizing(["--processor", "13", "--ftt", "3", "--scheme", "ec", "--no-write"])
        assert result.returncode == 1
        assert "ERRO:" in result.stderr
    
    def test_raid6_implies_ftt2(self):
        data = run_sizing_json(["--processor", "13", "--scheme", "raid6"])
        assert data["redundancy"]["faults_to_tolerate"] == 2
        assert data["redundancy"]["layout"] == "RAID-6 (4+2)"
        assert data["storage_performance"]["raid_level"] == "RAID 6"
    
    def test_raid6_with_ftt1_fails(self):
        """raid6 com FTT=1 não pode cair silenciosamente em RAID-5."""
        result = run_sizing(["--processor", "13", "--scheme", "raid6", "--ftt", "1", "--no-write"])
        assert result.returncode == 1
        assert "ERRO:" in result.stderr
    
    def test_storage_performance_options(self):
        data = run_sizing_json([
            "--processor", "13", "--storage-media", "HDD", "--block-size-kb", "64",
            "--io-workload", "mixed", "--read-percent", "70"
        ])
        perf = data["storage_performance"]
        assert perf["media"] == "HDD"
        assert perf["disk_count"] == data["results"]["total_nodes"] * data["node_profile"]["disks_per_node"]
        assert perf["latency_read_ms"] == pytest.approx(12.0)
    
    def test_non_finite_data_reduction_fails(self):
        result = run_sizing(["--processor", "13", "--data-reduction", "nan", "--no-write"])
        assert result.returncode == 1
        assert "ERRO:" in result.stderr
    
    def test_too_many_disks_for_1u(self):
        result = run_sizing(["--processor", "13", "--form-factor", "1U", "--disks", "12", "--no-write"])
        assert result.returncode == 1
    
    def test_missing_profile_is_usage_error(self):
        result = run_sizing(["--json-only"])
        assert result.returncode == 2
    
    def test_validate_only(self):
        result = run_sizing(["--validate-only"])
        assert result.returncode == 0
    
    def test_list_processors(self):
        result = run_sizing(["--list-processors"])
        assert result.returncode == 0
        assert "Intel Xeon Platinum 8592+" in result.stdout
    
    def test_summary_output(self):
        result = run_sizing(["--processor", "13", "--no-write"])
        assert result.returncode == 0
        assert "RESUMO EXECUTIVO" in result.stdout
    
    def test_writes_reports(self, tmp_path):
        for name in ("workloads.json", "processors.json", "parameters.json"):
            (tmp_path / name).write_text((REPO_ROOT / name).read_text(encoding="utf-8"), encoding="utf-8")
        cmd = [sys.executable, str(REPO_ROOT / "main.py"), "--processor", "13", "--executive-report"]
        result = subprocess.run(cmd, capture_output=True, text=True, cwd=tmp_path)
        assert result.returncode == 0, result.stderr
        written = sorted(p.suffix for p in (tmp_path / "relatorios").iterdir())
        assert written == [".json", ".md", ".txt"]
