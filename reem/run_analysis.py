#!/usr/bin/env python3
"""
REEM Analysis Pipeline

Runs the effective mass model once:
1. Sweeps the effective mass from z = 0 to decoupling
2. Evaluates the decoupling, present-day and local-frame benchmarks
3. Saves the sweep, benchmarks and constants as JSON
4. Saves the evolution figures

Usage:
    python -m reem.run_analysis [--output results/] [--params params.json]
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from . import __version__
from .utils.config import ModelConfig
from .mass_model import EffectiveMassModel, MassEvolutionTable
from .analysis.summary import MassSummary, summarize_model, print_summary

logger = logging.getLogger(__name__)

RESULTS_FILENAME = 'reem_analysis_results.json'


def load_config(params_file: Optional[str] = None) -> ModelConfig:
    """Load a configuration from a JSON parameter file, or the defaults."""
    if params_file is None:
        return ModelConfig()

    with open(params_file) as f:
        return ModelConfig.from_dict(json.load(f))


def _to_builtin(obj):
    """Convert numpy types to native Python types for JSON."""
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, (np.bool_, bool)):
        return bool(obj)
    if isinstance(obj, dict):
        return {k: _to_builtin(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_to_builtin(v) for v in obj]
    return obj


def save_results(
    config: ModelConfig,
    table: MassEvolutionTable,
    summary: MassSummary,
    output_dir: str,
) -> Path:
    """Write the run to ``<output_dir>/reem_analysis_results.json``."""
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    results = {
        'config': config.as_dict(),
        'summary': summary.as_dict(),
        'evolution': table.to_records(),
        'metadata': {
            'timestamp': datetime.now().isoformat(),
            'version': __version__,
            'n_samples': len(table),
        },
    }

    output_file = output_path / RESULTS_FILENAME
    with open(output_file, 'w') as f:
        json.dump(_to_builtin(results), f, indent=2)

    logger.info(f"Results saved to: {output_file}")
    return output_file


def save_figures(
    config: ModelConfig,
    table: MassEvolutionTable,
    summary: MassSummary,
    output_dir: str,
) -> list:
    """Save the evolution figures as PDF and PNG."""
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    from .plots import (
        setup_style,
        plot_mass_evolution,
        plot_fractional_difference,
        create_summary_figure,
    )

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    setup_style()

    saved = []
    for name, plot_func in (
        ('mass_evolution', plot_mass_evolution),
        ('fractional_difference', plot_fractional_difference),
    ):
        fig, ax = plt.subplots(figsize=(10, 6))
        plot_func(table, config.constants, ax=ax)
        for ext in ('pdf', 'png'):
            path = output_path / f'{name}.{ext}'
            fig.savefig(path)
            saved.append(path)
        plt.close(fig)

    fig = create_summary_figure(table, summary, config.constants)
    for ext in ('pdf', 'png'):
        path = output_path / f'summary.{ext}'
        fig.savefig(path)
        saved.append(path)
    plt.close(fig)

    logger.info(f"Figures saved to: {output_path}/")
    return saved


def run(config: ModelConfig, make_plots: bool = True, verbose: bool = True) -> dict:
    """Run the full analysis for one configuration.

    Args:
        config: Model configuration
        make_plots: Save figures alongside the JSON results
        verbose: Print the text summary

    Returns:
        Dictionary with the model, sweep table, summary and output paths

    Raises:
        ValueError: If the configuration is invalid
    """
    valid, errors = config.validate()
    if not valid:
        raise ValueError(f"Invalid configuration: {errors}")

    model = EffectiveMassModel(config.constants, config.cosmology)

    logger.info(f"Sweeping effective mass with {config.steps} steps up to z = {config.z_max}")
    table = model.sweep_evolution(config.steps, z_max=config.z_max, z_min=config.z_min)
    summary = summarize_model(model)

    if verbose:
        print_summary(summary)

    results_file = save_results(config, table, summary, config.output_dir)
    figures = save_figures(config, table, summary, config.output_dir) if make_plots else []

    return {
        'model': model,
        'table': table,
        'summary': summary,
        'results_file': results_file,
        'figures': figures,
    }


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Run the REEM effective mass analysis'
    )
    parser.add_argument(
        '--output', '-o',
        default=None,
        help='Output directory for results (default: results)'
    )
    parser.add_argument(
        '--params', '-p',
        default=None,
        help='JSON file with custom parameters'
    )
    parser.add_argument(
        '--steps', '-n',
        type=int,
        default=None,
        help='Number of redshift intervals in the sweep'
    )
    parser.add_argument(
        '--no-plots',
        action='store_true',
        help='Skip figure generation'
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress output'
    )
    verbosity.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Debug logging'
    )

    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARNING if args.quiet else logging.INFO
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')

    try:
        config = load_config(args.params)
    except ValueError as e:
        parser.error(str(e))
    if args.output is not None:
        config.output_dir = args.output
    if args.steps is not None:
        config.steps = args.steps

    valid, errors = config.validate()
    if not valid:
        parser.error(f"invalid configuration: {'; '.join(errors)}")

    run(config, make_plots=not args.no_plots, verbose=not args.quiet)
    return 0


if __name__ == '__main__':
    sys.exit(main())
