import json
import subprocess
from pathlib import Path

import typer
from typer.testing import CliRunner

from clustercli.cli.app import app

runner = CliRunner()

INVENTORY = "/tmp/hosts.ini"


class DummyCP:
    def __init__(self, rc=0, out="", err=""):
        self.returncode = rc
        self.stdout = out
        self.stderr = err


def _record(monkeypatch, rc=0, out=""):
    calls = []

    def fake_run(argv, check=False, text=False, capture_output=False, env=None):
        calls.append(argv)
        return DummyCP(rc, out=out)

    monkeypatch.setattr(subprocess, "run", fake_run)
    return calls


def _invoke(*args):
    return runner.invoke(app, ["--no-log-file", "-i", INVENTORY, *args])


def test_ping_runs_ansible(monkeypatch):
    calls = _record(monkeypatch)
    result = _invoke("ping")
    assert result.exit_code == 0, result.output
    assert calls == [["ansible", "--inventory", INVENTORY, "-m", "ping", "all"]]


def test_verbose_count_and_host_pattern(monkeypatch):
    calls = _record(monkeypatch)
    result = _invoke("-vvv", "-p", "workers", "reboot")
    assert result.exit_code == 0, result.output
    assert calls[0][:2] == ["ansible", "-vvv"]
    assert calls[0][-1] == "workers"


def test_exit_code_mirrors_ansible(monkeypatch):
    _record(monkeypatch, rc=4)
    result = _invoke("uptime")
    assert result.exit_code == 4


def test_run_command_options(monkeypatch):
    calls = _record(monkeypatch)
    result = _invoke("run", "df -h", "--become", "--chdir", "/tmp")
    assert result.exit_code == 0, result.output
    argv = calls[0]
    assert "-K" in argv and "-b" in argv
    assert argv[argv.index("-a") + 1] == 'df -h chdir="/tmp"'


def test_copy_and_fetch(monkeypatch):
    calls = _record(monkeypatch)
    assert _invoke("copy", "/tmp/a", "/tmp/b").exit_code == 0
    assert _invoke("fetch", "/tmp/a", "/tmp/b").exit_code == 0
    assert [c[c.index("-m") + 1] for c in calls] == ["copy", "fetch"]


def test_unknown_service_exits_1_without_launching(monkeypatch):
    calls = _record(monkeypatch)
    result = _invoke("service", "deploy", "unknown-svc")
    assert result.exit_code == 1
    assert "Unknown service 'unknown-svc'" in result.output
    assert calls == []


def test_service_delete_docker_runs_one_playbook(monkeypatch):
    calls = _record(monkeypatch)
    result = _invoke("service", "delete", "docker")
    assert result.exit_code == 0, result.output
    assert len(calls) == 1
    assert calls[0][0] == "ansible-playbook"


def test_inventory_list(monkeypatch):
    calls = _record(monkeypatch)
    result = _invoke("inventory", "list")
    assert result.exit_code == 0, result.output
    assert calls[0][0] == "ansible-inventory"


def test_capture_prints_output(monkeypatch):
    _record(monkeypatch, out="node1 | SUCCESS => pong\n")
    result = _invoke("--capture", "ping")
    assert result.exit_code == 0, result.output
    assert "node1 | SUCCESS => pong" in result.output


def test_dry_run_launches_nothing(monkeypatch):
    calls = _record(monkeypatch)
    result = _invoke("--dry-run", "service", "deploy", "kubernetes")
    assert result.exit_code == 0, result.output
    assert calls == []


def test_missing_inventory_is_a_usage_error(monkeypatch):
    monkeypatch.delenv("CLUSTERCLI_INVENTORY", raising=False)
    monkeypatch.delenv("CLUSTERCLI_CONFIG", raising=False)
    calls = _record(monkeypatch)
    result = runner.invoke(app, ["--no-log-file", "ping"])
    assert result.exit_code == 2
    assert calls == []


def test_config_file_supplies_inventory(monkeypatch, tmp_path: Path):
    calls = _record(monkeypatch)
    cfg = tmp_path / "cluster.yaml"
    cfg.write_text("inventory: /srv/hosts.ini\nhost_pattern: pis\n")
    result = runner.invoke(app, ["--no-log-file", "--config", str(cfg), "ping"])
    assert result.exit_code == 0, result.output
    assert calls[0] == ["ansible", "--inventory", "/srv/hosts.ini", "-m", "ping", "pis"]


def test_events_file_records_commands(monkeypatch, tmp_path: Path):
    _record(monkeypatch)
    events = tmp_path / "events.jsonl"
    result = _invoke("--events-file", str(events), "ping")
    assert result.exit_code == 0, result.output
    types = [json.loads(l)["type"] for l in events.read_text().splitlines()]
    assert types == ["CommandStarted", "CommandFinished"]


def test_check_playbooks_reports_each(monkeypatch):
    calls = _record(monkeypatch)
    result = _invoke("check-playbooks")
    assert result.exit_code == 0, result.output
    assert len(calls) == 5
    assert all(c[:2] == ["ansible-playbook", "--syntax-check"] for c in calls)
    assert "install-docker: ok" in result.output


def test_ansible_config_is_exported(monkeypatch):
    seen = []

    def fake_run(argv, check=False, text=False, capture_output=False, env=None):
        seen.append(env)
        return DummyCP(0)

    monkeypatch.setattr(subprocess, "run", fake_run)
    result = _invoke("--ansible-config", "/etc/cluster/ansible.cfg", "ping")
    assert result.exit_code == 0, result.output
    assert seen[0]["ANSIBLE_CONFIG"] == "/etc/cluster/ansible.cfg"


def test_capture_prints_ansible_errors(monkeypatch):
    def fake_run(argv, check=False, text=False, capture_output=False, env=None):
        return DummyCP(2, out="", err="ERROR! the playbook could not be found\n")

    monkeypatch.setattr(subprocess, "run", fake_run)
    result = _invoke("--capture", "ping")
    assert result.exit_code == 2
    assert "the playbook could not be found" in result.output


def test_no_capture_overrides_config_file(monkeypatch, tmp_path: Path):
    seen = []

    def fake_run(argv, check=False, text=False, capture_output=False, env=None):
        seen.append(capture_output)
        return DummyCP(0)

    monkeypatch.setattr(subprocess, "run", fake_run)
    cfg = tmp_path / "cluster.yaml"
    cfg.write_text("inventory: /srv/hosts.ini\ncapture_output: true\n")

    assert runner.invoke(app, ["--no-log-file", "--config", str(cfg), "ping"]).exit_code == 0
    assert runner.invoke(app, ["--no-log-file", "--config", str(cfg), "--no-capture", "ping"]).exit_code == 0
    assert seen == [True, False]


def test_unknown_service_is_reported_once(monkeypatch):
    _record(monkeypatch)
    result = _invoke("service", "deploy", "unknown-svc")
    assert result.output.count("Unknown service 'unknown-svc'") == 1


def test_every_command_has_help_text():
    group = typer.main.get_command(app)
    for name, command in group.commands.items():
        assert command.help, name
