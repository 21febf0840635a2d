"""Tests for the command line entry point."""

import importlib.util
from pathlib import Path

import pytest
from click.testing import CliRunner

SCRIPT = Path(__file__).parent.parent / "scripts" / "run_solver.py"


@pytest.fixture(scope="module")
def cli():
    spec = importlib.util.spec_from_file_location("run_solver", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module.main


@pytest.fixture
def square_file(tmp_path):
    path = tmp_path / "square.has"
    path.write_text("3 3 4\n2 0 2\n0 0 0\n2 0 2\n")
    return path


class TestRunSolver:

    def test_solves_puzzle(self, cli, square_file):
        result = CliRunner().invoke(cli, [str(square_file), '--seed', '1', '--gens-per-wisdom', '1'])

        assert result.exit_code == 0
        assert "Status: SUCCESS" in result.output
        assert "2─2" in result.output

    def test_config_file(self, cli, square_file, tmp_path):
        params = tmp_path / "params.yaml"
        params.write_text("parameters:\n  population_size: 30\n  gens_per_wisdom: 1\n  random_seed: 4\n")

        result = CliRunner().invoke(cli, [str(square_file), '--config', str(params)])

        assert result.exit_code == 0
        assert "SUCCESS" in result.output

    def test_unsolved_exit_code(self, cli, tmp_path):
        path = tmp_path / "bad.has"
        path.write_text("2 1\n2 1\n")

        result = CliRunner().invoke(cli, [str(path), '-g', '2', '-p', '10', '--no-wisdom'])

        assert result.exit_code == 2
        assert "Status: FAILED" in result.output

    def test_missing_file(self, cli, tmp_path):
        result = CliRunner().invoke(cli, [str(tmp_path / "missing.has")])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_invalid_parameters(self, cli, square_file):
        result = CliRunner().invoke(cli, [str(square_file), '--mutation', '3'])

        assert result.exit_code == 1
        assert "Invalid parameters" in result.output

    def test_visualize(self, cli, square_file, tmp_path):
        output = tmp_path / "images"
        result = CliRunner().invoke(cli, [str(square_file), '--seed', '1', '--gens-per-wisdom', '1',
                                          '--visualize', '-o', str(output)])

        assert result.exit_code == 0
        assert (output / "square_solution.png").exists()
        assert (output / "square_fitness.png").exists()

    def test_malformed_config_file(self, cli, square_file, tmp_path):
        params = tmp_path / "params.yaml"
        params.write_text("parameters: [1, 2\n")

        result = CliRunner().invoke(cli, [str(square_file), '--config', str(params)])

        assert result.exit_code == 1
        assert "Invalid parameters" in result.output

    def test_default_output_dir_in_working_directory(self, cli, square_file, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = CliRunner().invoke(cli, [str(square_file), '--seed', '1', '--gens-per-wisdom', '1',
                                          '--visualize'])

        assert result.exit_code == 0
        assert (tmp_path / "results" / "solutions" / "square_solution.png").exists()
