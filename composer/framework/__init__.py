"""Project-specific framework utilities.

Structural helpers that sit on top of the kernel: validated configuration and
the per-run bundle an orchestrator hands to its operations.

- `composer.framework.config`: `ComposerConfig.from_dict` and strict value parsers
- `composer.framework.runtime`: `ChainRun` and `start_chain_run`

For the app-agnostic context itself, use `composer.core`.
"""
