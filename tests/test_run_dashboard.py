"""Tests for the dashboard launcher."""

import os
import subprocess
from pathlib import Path

import run_dashboard


class Completed:
    returncode = 3


def test_launcher_passes_data_dir_and_exit_code(monkeypatch, tmp_path):
    calls = []

    def fake_run(cmd, cwd=None, env=None):
        calls.append((cmd, cwd, env))
        return Completed()

    monkeypatch.setattr(subprocess, 'run', fake_run)

    code = run_dashboard.main(['--data-dir', str(tmp_path), '--server.port', '8600'])

    assert code == 3
    cmd, cwd, env = calls[0]
    assert cmd[-3:] == ['Home.py', '--server.port', '8600']
    assert Path(cwd).name == 'finance_tracker'
    assert env['FINTRACK_DATA_DIR'] == str(tmp_path.resolve())


def test_launcher_keeps_inherited_data_dir(monkeypatch):
    monkeypatch.setenv('FINTRACK_DATA_DIR', '/srv/fintrack')
    env = run_dashboard.build_env()
    assert env['FINTRACK_DATA_DIR'] == '/srv/fintrack'
    assert str(run_dashboard.project_root) in env['PYTHONPATH'].split(os.pathsep)
