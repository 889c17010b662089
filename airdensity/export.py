"""
export.py – Text and CSV export of results.
"""

from __future__ import annotations
from pathlib import Path

import numpy as np

from airdensity.logger import logger

PROFILE_COLUMNS = (
    ('h', 'altitude_m'),
    ('temperature_c', 'temperature_c'),
    ('pressure_hpa', 'pressure_hpa'),
    ('density', 'density_kg_m3'),
    ('percent_pressure', 'percent_pressure'),
    ('percent_density', 'percent_density'),
    ('specific_humidity', 'specific_humidity_g_kg'),
    ('vapor_pressure_hpa', 'vapor_pressure_hpa'),
)


def export_text(text: str | None, path: str | Path) -> Path:
    """
    Write a rendered result block verbatim (UTF-8).

    The extension does not matter: ``.txt`` and ``.csv`` get the same text.

    Returns
    -------
    Resolved Path of the written file.
    """
    if text is None or not text.strip():
        raise ValueError("No results to export.")
    path = Path(path).expanduser().resolve()
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
    except OSError as err:
        logger.error("Export failed: %s", err)
        raise
    logger.info("Results exported to %s", path)
    return path


def export_profile_csv(profile: dict, path: str | Path,
                       n_points: int | None = None) -> Path:
    """
    Write an altitude profile (from ``atmosphere_profile``) to CSV.

    Parameters
    ----------
    profile  : dict of equal-length arrays
    path     : output file path
    n_points : if given, subsample to this many equally-spaced rows

    Returns
    -------
    Resolved Path of the written file.
    """
    path = Path(path).expanduser().resolve()

    cols = [np.asarray(profile[key]) for key, _ in PROFILE_COLUMNS]
    n = len(cols[0])
    if n_points is not None and n_points < n:
        idx = np.linspace(0, n - 1, n_points).astype(int)
        cols = [c[idx] for c in cols]

    with open(path, "w", encoding="utf-8") as f:
        f.write(",".join(name for _, name in PROFILE_COLUMNS) + "\n")
        for row in zip(*cols):
            f.write(",".join(f"{v:.8e}" for v in row) + "\n")

    logger.info("Profile exported to %s", path)
    return path
