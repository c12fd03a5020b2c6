# tests/test_cli.py
"""
Testes de integração da CLI `hydralite`.

Usa `click.testing.CliRunner` e executa cada teste em um diretório de
trabalho isolado (`tmp_path`), já que a CLI procura `./config.yaml` e
cria o diretório de execução relativo ao diretório corrente.
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

from hydralite.cli import main
from hydralite.core.config.reader import read_file, read_string


@pytest.fixture
def runner(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return CliRunner()


def test_compose_override_and_write_artifacts(runner, composed_project: Path, tmp_path: Path):
    run_dir = tmp_path / "runs" / "one"

    result = runner.invoke(
        main,
        ["-c", str(composed_project), "db.port=7000", f"hydra.run.dir={run_dir}"],
    )

    assert result.exit_code == 0, result.output
    printed = read_string(result.stdout)
    assert printed.to_python()["app"]["url"] == "postgres://localhost:7000"
    assert printed.to_python()["hydra"]["run"]["dir"] == str(run_dir)

    metadata_dir = run_dir / ".hydra"
    assert read_file(metadata_dir / "config.yaml") == printed
    assert read_file(metadata_dir / "overrides.yaml").to_python() == [
        "db.port=7000",
        f"hydra.run.dir={run_dir}",
    ]


def test_relative_run_dir_is_made_absolute(runner, write_yaml, tmp_path: Path):
    config = write_yaml("conf.yaml", "hydra:\n  run:\n    dir: out/./run\n")

    result = runner.invoke(main, ["-c", str(config)])

    assert result.exit_code == 0, result.output
    expected = tmp_path.resolve() / "out" / "run"
    printed_dir = Path(read_string(result.stdout).to_python()["hydra"]["run"]["dir"])
    assert printed_dir.resolve() == expected
    assert printed_dir.is_absolute()
    assert (expected / ".hydra" / "config.yaml").exists()


def test_falls_back_to_config_yaml_in_cwd(runner, write_yaml):
    write_yaml("config.yaml", "source: cwd\n")

    result = runner.invoke(main, ["hydra.run.dir=null"])

    assert result.exit_code == 0, result.output
    printed = read_string(result.stdout).to_python()
    assert printed["source"] == "cwd"
    assert printed["hydra"]["run"]["dir"] is None


def test_runs_without_any_config_file(runner, tmp_path: Path):
    result = runner.invoke(main, ["hydra.run.dir=null", "+trainer.epochs=3"])

    assert result.exit_code == 0, result.output
    assert read_string(result.stdout).to_python()["trainer"] == {"epochs": 3}
    assert not (tmp_path / "outputs").exists()


def test_configuration_error_exits_with_message(runner, composed_project: Path):
    result = runner.invoke(main, ["-c", str(composed_project), "db.user=app"])

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "+user=" in result.output


def test_missing_config_file_is_reported(runner, tmp_path: Path):
    result = runner.invoke(main, ["-c", str(tmp_path / "missing.yaml")])

    assert result.exit_code == 1
    assert "missing.yaml" in result.output
