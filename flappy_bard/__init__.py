"""
Flappy Bard
===========

A single-screen arcade game: a bird falls under gravity and must fly past
an endless stream of obstacles without hitting them or the ground.

- bard_core: world state, physics, rules, input, rendering, frame driver
  and the Gymnasium wrapper
- evaluation: seed bank and harness for scoring agents headlessly

All gameplay constants live in game_config.yaml.
"""
