#!/usr/bin/env python3
"""
命令行工具测试
"""

import json
import sys
from pathlib import Path

import pytest

# 添加项目根目录到Python路径
sys.path.insert(0, str(Path(__file__).parent.parent))

from slicer.cli import main

SCRIPT = '''import csv
mat = read(csv, "data.csv")
tab = summarize(mat)
out = write(tab)
'''


@pytest.fixture
def script_path(tmp_path):
    path = tmp_path / "analysis.py"
    path.write_text(SCRIPT, encoding="utf-8")
    return str(path)


def test_slice_single_target(script_path, capsys):
    assert main([script_path, "tab"]) == 0
    out = capsys.readouterr().out
    assert out == 'import csv\nmat = read(csv, "data.csv")\ntab = summarize(mat)\n'


def test_slice_multiple_targets_numbered(script_path, capsys):
    assert main([script_path, "mat", "out", "--numbered"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "  1: import csv"
    assert lines[-1] == "  4: out = write(tab)"
    assert len(lines) == 4


def test_descendants(script_path, capsys):
    assert main([script_path, "tab", "--direction", "descendants"]) == 0
    assert capsys.readouterr().out == "out = write(tab)\n"


def test_listing_without_targets(script_path, capsys):
    assert main([script_path]) == 0
    captured = capsys.readouterr()
    assert captured.out == "csv\nmat\nout\ntab\n"
    assert "可选变量" in captured.err


def test_unknown_target_fails(script_path, capsys):
    assert main([script_path, "nope"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "nope" in captured.err


def test_missing_script_fails(tmp_path, capsys):
    assert main([str(tmp_path / "missing.py"), "x"]) == 1
    assert "missing.py" in capsys.readouterr().err


def test_imports(script_path, capsys):
    assert main([script_path, "--imports"]) == 0
    assert capsys.readouterr().out == "csv\n"


def test_dot_output(script_path, tmp_path, capsys):
    dot_path = tmp_path / "graph.dot"
    assert main([script_path, "tab", "--dot", str(dot_path)]) == 0
    source = dot_path.read_text(encoding="utf-8")
    assert "v_tab" in source
    assert "s_4" in source
    assert "fillcolor=lightblue" in source


def test_config_file_direction(script_path, tmp_path, capsys):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"direction": "descendants"}), encoding="utf-8")
    assert main([script_path, "tab", "--config", str(config_path)]) == 0
    assert capsys.readouterr().out == "out = write(tab)\n"


def test_bad_config_fails(script_path, tmp_path, capsys):
    config_path = tmp_path / "config.json"
    config_path.write_text("{not json", encoding="utf-8")
    assert main([script_path, "tab", "--config", str(config_path)]) == 1
    assert "配置" in capsys.readouterr().err


def test_unknown_visualization_key_fails(script_path, tmp_path, capsys):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"visualization": {"shape": "box"}}), encoding="utf-8")
    dot_path = tmp_path / "graph.dot"
    assert main([script_path, "tab", "--config", str(config_path), "--dot", str(dot_path)]) == 1
    assert "shape" in capsys.readouterr().err
    assert not dot_path.exists()


def test_undecodable_script_fails(tmp_path, capsys):
    path = tmp_path / "latin.py"
    path.write_bytes(b"x = '\xff'\n")
    assert main([str(path), "x"]) == 1
    assert "latin.py" in capsys.readouterr().err


def test_directory_as_script_fails(tmp_path, capsys):
    assert main([str(tmp_path), "x"]) == 1
    assert str(tmp_path) in capsys.readouterr().err
