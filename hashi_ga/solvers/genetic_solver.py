"""
Genetic algorithm solver for Hashiwokakero.

The solver is driven one generation at a time:

    solver = GeneticSolver(Parameters(population_size=50, random_seed=7))
    if solver.initialize(grid):
        while solver.update():
            draw(solver.snapshot())

``update`` returns False once a solution is found or the generation cap is
reached; the best chromosome seen so far stays available either way.
"""

from enum import Enum
from typing import Optional, List
import random

from ..core.exceptions import ConfigurationError, GraphError
from ..core.graph import IslandGraph
from ..core.snapshot import BoardSnapshot
from ..core.utils import timer
from ..core.validator import PuzzleValidator
from ..genetic.genome import Population, RandomSource, ScoredChromosome
from ..genetic.fitness import FitnessEvaluator, FitnessReport, OPTIMAL_FITNESS
from ..genetic.population import PopulationInitializer
from ..genetic.operators import (
    Crossover, Mutation, sort_population, elite_count, rank_weights, select_parents
)
from ..genetic.wisdom import WisdomInjector
from .base_solver import BaseSolver, Parameters, SolverConfig, SolverResult


class SolverState(Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    RUNNING = "running"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"


TERMINAL_STATES = (SolverState.SOLVED, SolverState.EXHAUSTED)


class GeneticSolver(BaseSolver):
    """
    Evolves bridge layouts until one satisfies every island, connects the
    whole board and has no crossing bridges.
    """

    def __init__(self, params: Optional[Parameters] = None,
                 config: Optional[SolverConfig] = None,
                 rng: Optional[RandomSource] = None):
        """
        Args:
            params: Algorithm parameters, validated on initialize and update
            config: Logging and time limit configuration
            rng: Random source; when omitted a ``random.Random`` seeded with
                ``params.random_seed`` is used and reseeded on every reset
        """
        super().__init__(config)
        self.params = params or Parameters()
        self._owns_rng = rng is None
        self.rng: RandomSource = rng or random.Random(self.params.random_seed)

        self.graph: Optional[IslandGraph] = None
        self.evaluator: Optional[FitnessEvaluator] = None
        self.wisdom: Optional[WisdomInjector] = None
        self.population: Population = []

        self.state = SolverState.UNINITIALIZED
        self.curr_gen = 0
        self.best_perc = 0.0
        self.best: Optional[ScoredChromosome] = None
        self.history: List[float] = []
        self.last_error: Optional[str] = None

    def initialize(self, grid) -> bool:
        """
        Build the island graph from a grid and create the first population.

        Returns:
            Whether the board was initialized; on failure ``last_error``
            holds the reason
        """
        try:
            self.params.validate()
            graph = IslandGraph(grid)
        except (GraphError, ConfigurationError) as e:
            return self._fail(f"Failed to initialize board: {e}", uninitialize=True)

        self.graph = graph
        self.evaluator = FitnessEvaluator(graph)
        self.wisdom = WisdomInjector(graph)
        self.logger.info(f"Board loaded: {graph}")

        structure = PuzzleValidator.validate_structure(graph)
        for error in structure.errors:
            self.logger.warning(f"Board may be unsolvable: {error}")

        return self.reset()

    @timer
    def reset(self) -> bool:
        """
        Discard the population and generation counter, keeping the graph.

        Returns:
            Whether the solver is ready again
        """
        if self.graph is None:
            return self._fail("Cannot reset: no board loaded")

        if self._owns_rng:
            self.rng.seed(self.params.random_seed)

        self.graph.clear_bridges()
        initializer = PopulationInitializer(self.graph, self.rng)
        self.population = initializer.create_population(self.params.population_size, self.evaluator)
        sort_population(self.population)

        self.curr_gen = 0
        self.best = None
        self.best_perc = 0.0
        self.history = []
        self._track_best()

        self.state = SolverState.READY
        self.last_error = None
        self.logger.debug(f"Population of {len(self.population)} ready, best {self.best_perc:.2f}%")
        return True

    def update(self, params: Optional[Parameters] = None) -> bool:
        """
        Run one generation.

        Args:
            params: New parameters to use from this generation on

        Returns:
            Whether to keep calling update
        """
        if self.state == SolverState.UNINITIALIZED:
            return self._fail("Cannot update: no board loaded")
        if self.state in TERMINAL_STATES:
            return False

        if params is not None:
            try:
                params.validate()
            except ConfigurationError as e:
                return self._fail(f"Invalid parameters: {e}")
            self.params = params

        self.state = SolverState.RUNNING
        return self.process(self.params)

    def process(self, params: Parameters) -> bool:
        """Produce the next generation and check termination"""
        size = params.population_size
        crossover = Crossover(self.graph, params.crossover_prob)
        mutation = Mutation(self.graph, params.mutation_prob)

        sort_population(self.population)
        elites = self.population[:elite_count(size, params.elitism_perc)]
        weights = rank_weights(len(self.population))

        offspring: Population = []
        needed = size - len(elites)
        while len(offspring) < needed:
            parent1, parent2 = select_parents(self.population, self.rng, weights)
            children = crossover.apply(parent1.chromosome, parent2.chromosome, self.rng)
            for child in children:
                if len(offspring) >= needed:
                    break
                mutation.apply(child, self.rng)
                offspring.append(self.evaluator.score(child))

        self.curr_gen += 1

        if params.with_wisdom and self.curr_gen % params.gens_per_wisdom == 0 and offspring:
            sort_population(offspring)
            count = max(1, int(params.wisdom_perc * size))
            injected = self.wisdom.inject(offspring, count, self.evaluator)
            self.logger.debug(f"Generation {self.curr_gen}: injected {injected} repaired chromosomes")

        self.population = elites + offspring
        sort_population(self.population)
        self._track_best()

        self.logger.debug(f"Generation {self.curr_gen}: best {self.best_perc:.2f}%, "
                          f"generation best {self.population[0].fitness * 100:.2f}%")
        self._call_progress_callbacks(self.curr_gen, self.best, {
            'best_perc': self.best_perc,
            'generation_best': self.population[0].fitness,
            'evaluations': self.evaluator.evaluations,
        })

        if self.best.fitness >= OPTIMAL_FITNESS:
            self.state = SolverState.SOLVED
            self.logger.info(f"Solution found at generation {self.curr_gen}")
            return False

        if self.curr_gen >= params.max_generations:
            self.state = SolverState.EXHAUSTED
            self.logger.info(f"No solution after {self.curr_gen} generations, best {self.best_perc:.2f}%")
            return False

        return True

    def _track_best(self):
        """Keep the best chromosome seen and mirror it onto the graph"""
        top = self.population[0]
        if self.best is None or top.fitness > self.best.fitness:
            self.best = top
            self.graph.apply_chromosome(top.chromosome)
        self.best_perc = self.best.fitness * 100
        self.history.append(top.fitness)

    def _fail(self, message: str, uninitialize: bool = False) -> bool:
        self.last_error = message
        self.logger.error(message)
        if uninitialize:
            self.graph = None
            self.evaluator = None
            self.wisdom = None
            self.population = []
            self.best = None
            self.state = SolverState.UNINITIALIZED
        return False

    @property
    def is_solved(self) -> bool:
        return self.state == SolverState.SOLVED

    def best_report(self) -> Optional[FitnessReport]:
        if self.best is None:
            return None
        return self.evaluator.evaluate(self.best.chromosome)

    def snapshot(self) -> Optional[BoardSnapshot]:
        """Read-only view of the islands and the best layout so far"""
        if self.graph is None or self.best is None:
            return None
        return BoardSnapshot.from_graph(self.graph, self.best.chromosome,
                                        self.best.fitness, self.curr_gen)

    def _solve(self, grid) -> SolverResult:
        """Run generations until solved, exhausted or out of time"""
        if not self.initialize(grid):
            return SolverResult(success=False, message=self.last_error)

        message = ""
        valid = False
        while self.update():
            if self._check_time_limit():
                message = f"Time limit reached after {self.curr_gen} generations"
                break

        if self.state == SolverState.SOLVED:
            validation = PuzzleValidator.validate_solution(self.graph, self.best.chromosome)
            valid = validation.is_valid
            if valid:
                message = "Puzzle solved successfully"
            else:
                message = f"Invalid solution: {'; '.join(validation.errors)}"
        elif self.last_error:
            message = self.last_error
        elif not message:
            message = f"No solution within {self.params.max_generations} generations"

        report = self.best_report()
        return SolverResult(
            success=valid,
            solution=self.snapshot(),
            generations=self.curr_gen,
            message=message,
            best_fitness=self.best.fitness,
            history=list(self.history),
            stats={
                'state': self.state.value,
                'evaluations': self.evaluator.evaluations,
                'fitness': report.to_dict(),
                'parameters': self.params.to_dict(),
            }
        )
