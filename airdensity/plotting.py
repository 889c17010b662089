"""
plotting.py – Atmospheric profile visualisation.
"""

from __future__ import annotations
import matplotlib.pyplot as plt

from airdensity.atmosphere import LAYERS


def plot_profile(profile: dict, *, show: bool = True,
                 save_path: str | None = None) -> plt.Figure:
    """
    Four-panel plot of temperature, pressure, density and humidity vs altitude.

    Parameters
    ----------
    profile   : dict returned by ``atmosphere_profile``
    show      : call plt.show()
    save_path : if given, save to file

    Returns
    -------
    matplotlib Figure
    """
    h_km = profile['h'] / 1000.0

    fig, axes = plt.subplots(1, 4, figsize=(14, 6), sharey=True)
    panels = [
        ('temperature_c', 'Temperature [°C]', '#d93025', False),
        ('pressure_hpa', 'Pressure [hPa]', '#1a73e8', True),
        ('density', 'Density [kg/m³]', '#0d652d', True),
        ('specific_humidity', 'Specific humidity [g/kg]', '#e8710a', False),
    ]
    for ax, (key, label, color, logx) in zip(axes, panels):
        values = profile[key]
        if logx and (values > 0).any():
            ax.semilogx(values[values > 0], h_km[values > 0], color=color, lw=2)
        else:
            ax.plot(values, h_km, color=color, lw=2)
        # layer boundaries
        for layer in LAYERS[1:]:
            if h_km[0] <= layer.base_height / 1000.0 <= h_km[-1]:
                ax.axhline(layer.base_height / 1000.0, color='grey',
                           lw=0.5, ls='--', alpha=0.6)
        ax.set_xlabel(label)
        ax.grid(True, which='both', ls=':', alpha=0.4)
    axes[0].set_ylabel('Altitude [km]')

    fig.suptitle(
        f"Extended ISA profile, sea level "
        f"{profile['sea_level_temp_c']:.2f} °C, "
        f"{profile['sea_level_pressure_pa'] / 100.0:.2f} hPa",
        fontsize=12, fontweight='bold',
    )
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=200, bbox_inches='tight')
    if show:
        plt.show()
    return fig
