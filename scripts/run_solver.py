#!/usr/bin/env python3
"""
Script to solve a single Hashiwokakero puzzle with the genetic solver.

Usage:
    python scripts/run_solver.py puzzle.has --population 200 --seed 42
    python scripts/run_solver.py puzzle.json --config params.yaml --visualize
"""

import click
import sys
from pathlib import Path
import json

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

from hashi_ga import config
from hashi_ga.core.exceptions import ConfigurationError, GraphError
from hashi_ga.core.utils import PuzzleConverter, load_grid, setup_logger
from hashi_ga.solvers import get_solver, Parameters, SolverConfig


@click.command()
@click.argument('puzzle_file', type=click.Path())
@click.option('--config', '-c', 'config_file', type=click.Path(),
              help='YAML file with algorithm parameters')
@click.option('--population', '-p', type=int, help='Population size')
@click.option('--generations', '-g', type=int, help='Maximum number of generations')
@click.option('--crossover', type=float, help='Crossover probability per gene')
@click.option('--mutation', type=float, help='Mutation probability per bit')
@click.option('--elitism', type=float, help='Fraction of the population kept each generation')
@click.option('--wisdom/--no-wisdom', default=None, help='Enable forced-move injection')
@click.option('--gens-per-wisdom', type=int, help='Generations between injections')
@click.option('--seed', type=int, help='Random seed')
@click.option('--time-limit', '-t', type=float, help='Time limit in seconds')
@click.option('--visualize', '-v', is_flag=True, help='Save PNG images of the result')
@click.option('--verbose', is_flag=True, help='Enable verbose output')
@click.option('--output-dir', '-o', type=click.Path(), default=str(config.RESULTS_SOLUTIONS_DIR),
              help='Output directory for visualizations')
def main(puzzle_file, config_file, population, generations, crossover, mutation,
         elitism, wisdom, gens_per_wisdom, seed, time_limit, visualize, verbose, output_dir):
    """Solve a Hashiwokakero puzzle using the genetic algorithm."""

    logger = setup_logger("PuzzleSolver", level="DEBUG" if verbose else "INFO")

    puzzle_path = Path(puzzle_file)
    if not puzzle_path.exists():
        click.echo(f"Error: Puzzle file '{puzzle_file}' not found")
        sys.exit(1)

    try:
        grid = load_grid(puzzle_path)
        logger.info(f"Loaded puzzle from {puzzle_path}")
    except GraphError as e:
        click.echo(f"Error loading puzzle: {e}")
        sys.exit(1)

    try:
        params = Parameters.from_yaml(config_file) if config_file else Parameters()
        overrides = {
            'population_size': population,
            'max_generations': generations,
            'crossover_prob': crossover,
            'mutation_prob': mutation,
            'elitism_perc': elitism,
            'with_wisdom': wisdom,
            'gens_per_wisdom': gens_per_wisdom,
            'random_seed': seed,
        }
        data = params.to_dict()
        data.update({key: value for key, value in overrides.items() if value is not None})
        params = Parameters.from_dict(data)
    except ConfigurationError as e:
        click.echo(f"Error: Invalid parameters - {e}")
        sys.exit(1)

    solver = get_solver('genetic', params, SolverConfig(time_limit=time_limit, verbose=verbose))

    if verbose:
        def progress_callback(generation, best, stats):
            if generation % 100 == 0:
                logger.debug(f"Generation {generation}: {stats}")

        solver.add_progress_callback(progress_callback)

    result = solver.solve(grid)

    click.echo("\n" + "=" * 50)
    click.echo(f"Status: {'SUCCESS' if result.success else 'FAILED'}")
    click.echo(f"Time: {result.solve_time:.3f} seconds")
    click.echo(f"Generations: {result.generations}")
    click.echo(f"Best fitness: {result.best_fitness * 100:.2f}%")
    click.echo(f"Memory: {result.memory_used:.1f} MB")

    if result.message:
        click.echo(f"Message: {result.message}")

    if result.stats and verbose:
        click.echo(f"Additional stats: {json.dumps(result.stats, indent=2)}")

    click.echo("=" * 50 + "\n")

    if result.solution:
        click.echo(PuzzleConverter.to_string(result.solution, show_bridges=True))

    if visualize and result.solution:
        from hashi_ga.visualization import PuzzleVisualizer, plot_fitness_history

        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        viz = PuzzleVisualizer()
        viz.visualize(
            result.solution,
            title=f"{puzzle_path.stem}: {result.best_fitness * 100:.1f}% after {result.generations} generations",
            save_path=output_path / f"{puzzle_path.stem}_solution.png",
        )
        plot_fitness_history(result.history, output_path / f"{puzzle_path.stem}_fitness.png")

        click.echo(f"\nVisualizations saved to {output_path}")

    sys.exit(0 if result.success else 2)


if __name__ == '__main__':
    main()
