"""
Test suite for the goal-conditioned Q-learner.

This package contains tests for:
- Discretization thresholds and reading validation
- Reward structure (goal bonus, energy costs, glare)
- Q-learning updates, termination and table publication
- Policy queries and goal checks against the lab simulator
- Store, export, config, monitoring and CLI plumbing
"""
