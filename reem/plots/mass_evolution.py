"""Plotting functions for the effective mass evolution."""

from typing import Optional, Tuple
import numpy as np

from ..utils.constants import PhysicalConstants, Z_DECOUPLING
from ..mass_model import MassEvolutionTable
from ..analysis.summary import MassSummary, build_chart_data


def setup_style():
    """Set up publication-quality matplotlib style."""
    import matplotlib.pyplot as plt

    plt.rcParams.update({
        'font.family': 'serif',
        'font.size': 11,
        'axes.labelsize': 12,
        'axes.titlesize': 13,
        'legend.fontsize': 10,
        'figure.dpi': 150,
        'savefig.dpi': 300,
        'savefig.bbox': 'tight',
        'axes.grid': True,
        'grid.alpha': 0.3,
        'lines.linewidth': 1.5,
    })


def plot_mass_evolution(
    table: MassEvolutionTable,
    constants: PhysicalConstants,
    ax=None,
    figsize: Tuple[float, float] = (10, 6),
):
    """Plot log10 m_eff against log10 z with the Standard Model baseline.

    Args:
        table: Sweep of effective mass samples
        constants: Constants used to compute the sweep
        ax: Matplotlib axes (creates new figure if None)
        figsize: Figure size

    Returns:
        Matplotlib axes object
    """
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)

    data = build_chart_data(table, constants)

    ax.plot(data["log_z"], data["log_m_eff"], 'b-', lw=2, label=r'$m_{\rm eff}$ (REEM)')
    ax.plot(data["log_z"], data["log_m_base"], 'k--', lw=1.5, label=r'$m_{\rm base}$ (Standard Model)')

    ax.set_xlabel(r'$\log_{10}$(Redshift $z$)', fontsize=12)
    ax.set_ylabel(r'$\log_{10}$(Mass) [kg]', fontsize=12)
    ax.set_title('Effective Mass Evolution', fontsize=12)

    ax.legend(loc='best', fontsize=10)
    ax.grid(True, alpha=0.3)

    return ax


def plot_fractional_difference(
    table: MassEvolutionTable,
    constants: PhysicalConstants,
    ax=None,
    ylim: Optional[Tuple[float, float]] = (-0.1, 0.1),
    figsize: Tuple[float, float] = (10, 6),
):
    """Plot (m_eff - m_base)/m_base against log10 z.

    Args:
        table: Sweep of effective mass samples
        constants: Constants used to compute the sweep
        ax: Matplotlib axes (creates new figure if None)
        ylim: Vertical range; None lets matplotlib choose
        figsize: Figure size

    Returns:
        Matplotlib axes object
    """
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)

    data = build_chart_data(table, constants)

    ax.plot(data["log_z"], data["fractional_difference"], 'g-', lw=2,
            label=r'$(m_{\rm eff} - m_{\rm base})/m_{\rm base}$')
    ax.axhline(y=0.0, color='k', ls='--', lw=1, alpha=0.5)
    ax.axhline(y=constants.max_m_eff_factor - 1.0, color='red', ls=':', lw=1, alpha=0.7,
               label='Enhancement cap')
    ax.axvline(x=np.log10(Z_DECOUPLING), color='orange', ls=':', lw=1, alpha=0.7,
               label='Decoupling')

    ax.set_xlabel(r'$\log_{10}$(Redshift $z$)', fontsize=12)
    ax.set_ylabel('Fractional Difference', fontsize=12)
    ax.set_title('Deviation from Standard Model Mass', fontsize=12)
    if ylim is not None:
        ax.set_ylim(*ylim)

    ax.legend(loc='best', fontsize=10)
    ax.grid(True, alpha=0.3)

    return ax


def create_summary_figure(
    table: MassEvolutionTable,
    summary: MassSummary,
    constants: PhysicalConstants,
    figsize: Tuple[float, float] = (14, 6),
):
    """Two-panel figure: mass evolution and fractional difference.

    Returns:
        Matplotlib figure object
    """
    import matplotlib.pyplot as plt

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=figsize)

    plot_mass_evolution(table, constants, ax=ax1)
    plot_fractional_difference(table, constants, ax=ax2)

    fig.suptitle(
        f'REEM: decoupling enhancement {summary.decoupling_enhancement_percent:.2f}%, '
        f'present deviation {summary.present_enhancement:.1e}',
        fontsize=13,
    )
    fig.tight_layout()

    return fig
