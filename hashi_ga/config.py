from pathlib import Path

# Results directories, relative to the working directory
RESULTS_DIR = Path("results")
RESULTS_SOLUTIONS_DIR = RESULTS_DIR / "solutions"

# Algorithm parameters
GA_POPULATION_SIZE = 100
GA_CROSSOVER_PROB = 0.5
GA_MUTATION_PROB = 0.02  # per bit, two bits per link
GA_MAX_GENERATIONS = 2000
GA_WITH_WISDOM = True
GA_GENS_PER_WISDOM = 10
GA_ELITISM_PERC = 0.1
GA_WISDOM_PERC = 0.1

# Visualization settings
VIZ_DPI = 300
VIZ_FIGSIZE = (10, 10)

# Logging configuration
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
