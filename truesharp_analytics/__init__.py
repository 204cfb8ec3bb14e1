"""TrueSharp bet performance analytics.

Filters settled-bet records and rolls them up into performance summaries
(win rate, ROI, CLV, dispersion) for the TrueSharp API and dashboards.
"""

__version__ = "0.1.0"
