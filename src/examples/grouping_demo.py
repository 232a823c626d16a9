"""
Demo of balanced group formation with Fuzzy C-Means.

This example shows how to:
1. Load a population from a CSV of trait scores, or generate one
2. Build the FCM model, seeded or with random initial memberships
3. Form balanced groups and print / plot them

    python grouping_demo.py --csv dataset.csv --groups 7
    python grouping_demo.py --csv dataset.csv --groups 2 --initial-vectors seeds.csv
    python grouping_demo.py --random 200 --groups 5 --seed 0 --plot
"""

import argparse

import matplotlib.pyplot as plt

# Add parent directory to path for imports
import sys
sys.path.append('..')

from fuzzygroups import (
    FuzzyCMeans, FuzzyCMeansConfig, load_initial_vectors, load_population, make_random_population
)
from fuzzygroups.visualization import plot_groups, plot_objective


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.split('\n\n')[0].strip())
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--csv', help='CSV with Num, Name and trait score columns')
    source.add_argument('--random', type=int, metavar='N', help='generate N random people')
    parser.add_argument('--groups', type=int, default=7, help='number of groups')
    parser.add_argument('--max-iter', type=int, default=100, help='maximum FCM iterations')
    parser.add_argument('--min-improvement', default='0.001',
                        help='stop once the objective improves by less than this')
    parser.add_argument('--mass', default='2', help='fuzziness exponent m (> 1)')
    parser.add_argument('--seed', type=int, default=None, help='random seed')
    parser.add_argument('--initial-vectors', metavar='PATH',
                        help='headerless CSV of seeded membership rows, one line per person')
    parser.add_argument('--verbose', type=int, default=1)
    parser.add_argument('--plot', action='store_true', help='show group and objective plots')
    return parser.parse_args(argv)


def print_trace(iteration, objective, improvement):
    print(f"  iteration {iteration:4d}: J = {objective:.10f} (improvement {improvement:.10f})")


def main(argv=None):
    args = parse_args(argv)

    if args.csv:
        population = load_population(args.csv)
    else:
        population = make_random_population(args.random, random_state=args.seed)
    print(f"Loaded {len(population)} people")

    initial_vectors = None
    if args.initial_vectors:
        initial_vectors = load_initial_vectors(args.initial_vectors)
        print(f"Seeded {sum(v is not None for v in initial_vectors)} membership row(s)")

    config = FuzzyCMeansConfig(
        group_count=args.groups,
        max_iteration=args.max_iter,
        min_improvement=args.min_improvement,
        mass=args.mass,
        initial_vectors=initial_vectors,
        random_state=args.seed,
        verbose=args.verbose
    )
    model = FuzzyCMeans.from_config(config, callback=print_trace if args.verbose >= 2 else None)
    model.build_model(population)
    print(f"Stopped after {model.n_iter_} iteration(s), state: {model.state_.value}")

    groups = model.form_groups()
    print("Generated groups:")
    for group in groups:
        center = ', '.join(f"{float(v):.3f}" for v in group.center)
        print(f"  Group {group.id} [{center}] ({len(group)} members)")
        print(f"    {', '.join(group.member_names)}")

    if model.orphans_:
        print(f"Orphans: {', '.join(row.entity.name for row in model.orphans_)}")

    if args.plot:
        fig, axes = plt.subplots(1, 2, figsize=(14, 6))
        plot_groups(groups, ax=axes[0])
        plot_objective(model.history_, ax=axes[1])
        plt.tight_layout()
        plt.show()


if __name__ == '__main__':
    main()
