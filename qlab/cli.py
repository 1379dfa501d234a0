#!/usr/bin/env python3
"""CLI entry point: train a goal against the simulated lab and query it."""

import argparse

from environments.lab_env import LabEnvironment
from evaluation.metrics import Evaluator
from qlab.config import config
from qlab.learner import QLearner
from qlab.monitoring import TrainingMonitor, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Goal-conditioned Q-learning for the lighting lab')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to configuration file (default: config/default.yaml)')
    parser.add_argument('--goal', type=int, nargs='+', required=True,
                        help='Target light levels, e.g. --goal 2 3')
    parser.add_argument('--episodes', type=int, default=None,
                        help='Number of training episodes')
    parser.add_argument('--alpha', type=float, default=None, help='Learning rate in [0, 1]')
    parser.add_argument('--gamma', type=float, default=None, help='Discount factor in [0, 1]')
    parser.add_argument('--epsilon', type=float, default=None, help='Exploration probability in [0, 1]')
    parser.add_argument('--reward', type=float, default=None, help='Reward for reaching the goal')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for exploration')
    parser.add_argument('--export-dir', type=str, default=None,
                        help='Directory for the exported Q-table')
    parser.add_argument('--no-export', action='store_true', help='Do not export the Q-table')
    parser.add_argument('--evaluate', type=int, default=0, metavar='K',
                        help='Evaluate the greedy policy over K episodes after training')
    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.config:
        config.load_config(args.config)
    setup_logging(config.get('logging.level', 'INFO'), config.get('logging.log_dir'))

    env = LabEnvironment(**config.section('environment'))
    monitor = TrainingMonitor(config.get('logging.log_dir'))
    learner = QLearner(env,
                       export_dir=args.export_dir,
                       export=False if args.no_export else None,
                       seed=args.seed,
                       monitor=monitor)

    q_table = learner.calculate_q(args.goal, args.episodes, args.alpha,
                                  args.gamma, args.epsilon, args.reward)
    if q_table is None:
        print(f"Goal {args.goal} matches no lab state; nothing was learnt")
        return 1

    stats = monitor.get_aggregated_stats()
    if stats:
        print(f"Episodes: {stats['total_episodes']}, goal rate: {stats['goal_rate']:.2%}, "
              f"mean steps: {stats['avg_steps']:.1f}")

    if args.evaluate > 0:
        goal_reward = args.reward if args.reward is not None else config.get('training.goal_reward', 100)
        results = Evaluator(env, seed=args.seed).evaluate(
            learner, args.goal, num_episodes=args.evaluate, goal_reward=goal_reward)
        print(f"Evaluation: success rate {results['success_rate']:.2%}, "
              f"mean length {results['mean_length']:.1f}, mean reward {results['mean_reward']:.2f}")

    reading = env.reading()
    action = learner.get_action_from_state(args.goal, reading)
    if action is None:
        print("No recommendation for the current reading")
    else:
        print(f"Next best action: {action.action_id} {action.payload_tags} = {action.payload}")
    print(f"Target reached: {learner.target_reached(args.goal, reading)}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
