"""Tests for the generation-stepping genetic solver."""

import random

import numpy as np
import pytest

from hashi_ga.core.validator import PuzzleValidator
from hashi_ga.genetic.operators import elite_count
from hashi_ga.solvers import GeneticSolver, Parameters, SolverState, get_solver

from conftest import MEDIUM, SQUARE, TWO_ISLANDS


def make_solver(**overrides):
    params = Parameters(**{'population_size': 20, 'random_seed': 42, **overrides})
    return GeneticSolver(params)


class TestLifecycle:
    """Tests for state transitions and failure reporting."""

    def test_initialize_and_reset(self):
        solver = make_solver()

        assert solver.state == SolverState.UNINITIALIZED
        assert solver.initialize(MEDIUM)
        assert solver.state == SolverState.READY
        assert len(solver.population) == 20
        assert solver.curr_gen == 0

        assert solver.reset()
        assert solver.state == SolverState.READY

    def test_initialize_rejects_bad_grid(self):
        solver = make_solver()

        assert not solver.initialize([[1, 0], [0, 1]])
        assert solver.state == SolverState.UNINITIALIZED
        assert solver.last_error.startswith("Failed to initialize board")
        assert solver.snapshot() is None

    def test_failed_initialize_drops_previous_board(self):
        solver = make_solver()
        assert solver.initialize(MEDIUM)

        assert not solver.initialize([[0, 0]])
        assert solver.graph is None
        assert not solver.update()

    def test_initialize_rejects_bad_parameters(self):
        solver = GeneticSolver(Parameters(population_size=0))

        assert not solver.initialize(MEDIUM)
        assert "population_size" in solver.last_error

    @pytest.mark.parametrize("field,value", [
        ('population_size', 20.5),
        ('max_generations', "10"),
        ('gens_per_wisdom', True),
        ('mutation_prob', "0.1"),
        ('crossover_prob', None),
    ])
    def test_initialize_rejects_mistyped_parameters(self, field, value):
        solver = GeneticSolver(Parameters(**{field: value}))

        assert not solver.initialize(TWO_ISLANDS)
        assert solver.state == SolverState.UNINITIALIZED
        assert field in solver.last_error

    def test_update_without_board(self):
        solver = make_solver()

        assert not solver.update()
        assert solver.last_error == "Cannot update: no board loaded"
        assert not solver.reset()
        assert solver.last_error == "Cannot reset: no board loaded"

    def test_update_rejects_bad_parameters(self):
        solver = make_solver()
        solver.initialize(MEDIUM)

        assert not solver.update(Parameters(mutation_prob=1.5))
        assert "Invalid parameters" in solver.last_error
        assert solver.curr_gen == 0
        assert solver.params.mutation_prob != 1.5

    def test_update_rejects_mistyped_parameters(self):
        solver = make_solver()
        solver.initialize(MEDIUM)

        assert not solver.update(Parameters(population_size=20.5))
        assert "population_size must be an integer" in solver.last_error
        assert len(solver.population) == 20

    def test_update_runs_a_generation(self):
        solver = make_solver(with_wisdom=False)
        solver.initialize(MEDIUM)
        solver.update()

        assert solver.curr_gen == 1
        assert solver.state in (SolverState.RUNNING, SolverState.SOLVED)

    def test_exhausted(self):
        solver = make_solver(max_generations=3)
        assert solver.initialize([[2, 1]])

        while solver.update():
            pass

        assert solver.state == SolverState.EXHAUSTED
        assert solver.curr_gen == 3
        assert not solver.update()
        assert solver.curr_gen == 3

    def test_reset_after_terminal_state(self):
        solver = make_solver(max_generations=2)
        solver.initialize([[2, 1]])
        while solver.update():
            pass

        assert solver.reset()
        assert solver.state == SolverState.READY
        assert solver.curr_gen == 0
        assert solver.update()


class TestEvolution:
    """Tests for generation invariants."""

    def test_two_islands_solved(self):
        solver = make_solver(max_generations=10)
        solver.initialize(TWO_ISLANDS)

        while solver.update():
            pass

        assert solver.is_solved
        assert solver.curr_gen <= 10
        assert solver.best.fitness == 1.0

    def test_square_solved_by_wisdom(self):
        solver = make_solver(with_wisdom=True, gens_per_wisdom=1, mutation_prob=0.0)
        solver.initialize(SQUARE)

        assert not solver.update()
        assert solver.is_solved
        assert solver.curr_gen == 1
        assert PuzzleValidator.validate_solution(solver.graph, solver.best.chromosome)

    def test_elites_survive(self):
        solver = make_solver(with_wisdom=False, elitism_perc=0.2)
        solver.initialize(MEDIUM)

        for _ in range(5):
            elites = solver.population[:elite_count(20, 0.2)]
            if not solver.update():
                break
            for elite in elites:
                assert any(member is elite for member in solver.population)

    def test_population_size_constant(self):
        solver = make_solver(max_generations=50)
        solver.initialize(MEDIUM)

        for _ in range(5):
            if not solver.update():
                break
            assert len(solver.population) == 20

    def test_population_size_change_applies_next_generation(self):
        solver = make_solver(with_wisdom=False)
        solver.initialize(MEDIUM)

        params = Parameters(population_size=30, random_seed=42, with_wisdom=False)
        solver.update(params)

        assert len(solver.population) == 30

    def test_pairing_kept_across_generations(self):
        solver = make_solver(mutation_prob=0.2, gens_per_wisdom=2)
        solver.initialize(MEDIUM)

        for _ in range(6):
            running = solver.update()
            for scored in solver.population:
                assert PuzzleValidator.validate_pairing(solver.graph, scored.chromosome)
            if not running:
                break

    def test_best_never_decreases(self):
        solver = make_solver(with_wisdom=False, max_generations=20)
        solver.initialize(MEDIUM)

        best = [solver.best.fitness]
        while solver.update():
            best.append(solver.best.fitness)

        assert best == sorted(best)

    def test_seeded_runs_repeat(self):
        first = make_solver(with_wisdom=False, max_generations=5)
        second = make_solver(with_wisdom=False, max_generations=5)
        first.initialize(MEDIUM)
        second.initialize(MEDIUM)

        while first.update():
            pass
        while second.update():
            pass

        assert first.history == second.history
        assert first.best.chromosome == second.best.chromosome

    def test_reset_is_repeatable(self):
        solver = make_solver()
        solver.initialize(MEDIUM)
        keys = [scored.chromosome.key() for scored in solver.population]

        solver.update()
        solver.reset()

        assert [scored.chromosome.key() for scored in solver.population] == keys

    def test_progress_callbacks(self):
        solver = make_solver(max_generations=3)
        seen = []
        solver.add_progress_callback(lambda generation, best, stats: seen.append(generation))
        solver.initialize([[2, 1]])

        while solver.update():
            pass

        assert seen == [1, 2, 3]


class TestSnapshot:

    def test_snapshot_draws_best_layout(self):
        solver = make_solver()
        solver.initialize([[1, 0, 1]])
        while solver.update():
            pass

        snapshot = solver.snapshot()
        assert snapshot.is_complete
        assert snapshot.bridge_list() == [(0, 1, 1)]
        np.testing.assert_array_equal(snapshot.to_grid(), [[1, -3, 1]])

    def test_snapshot_is_detached(self):
        solver = make_solver()
        solver.initialize(MEDIUM)
        snapshot = solver.snapshot()

        with pytest.raises(AttributeError):
            snapshot.fitness = 1.0


class TestSolve:

    def test_solve_square(self):
        solver = get_solver('genetic', Parameters(population_size=30, random_seed=1, gens_per_wisdom=1))
        result = solver.solve(SQUARE)

        assert result.success
        assert result.message == "Puzzle solved successfully"
        assert result.best_fitness == 1.0
        assert result.stats['state'] == 'solved'
        assert result.stats['fitness']['penalty'] == 0
        assert result.solution.is_complete
        assert result.solve_time >= 0

    def test_solve_bad_grid(self):
        result = make_solver().solve([[0, 0]])

        assert not result.success
        assert result.message.startswith("Failed to initialize board")

    def test_solve_exhausted(self):
        result = make_solver(max_generations=3).solve([[2, 1]])

        assert not result.success
        assert result.generations == 3
        assert result.message == "No solution within 3 generations"
        assert len(result.history) == 4

    def test_unknown_solver(self):
        with pytest.raises(ValueError):
            get_solver('annealing')


class MinimalRandom:
    """Random source exposing only random, randint and choices"""

    def __init__(self, seed):
        self._rng = random.Random(seed)

    def random(self):
        return self._rng.random()

    def randint(self, a, b):
        return self._rng.randint(a, b)

    def choices(self, population, weights=None, *, cum_weights=None, k=1):
        return self._rng.choices(population, weights=weights, cum_weights=cum_weights, k=k)


class TestRandomSource:

    def test_solver_runs_on_minimal_source(self):
        params = Parameters(population_size=20, gens_per_wisdom=1, mutation_prob=0.0)
        solver = GeneticSolver(params, rng=MinimalRandom(5))

        assert solver.initialize(SQUARE)
        assert not solver.update()
        assert solver.is_solved
