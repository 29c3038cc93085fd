"""
Visualization of long-format trajectory tables (plotly).
"""

from trajsim.viz.plot import plot

__all__ = ['plot']
