"""
Parasite Drag Build-Up - Main Package
=====================================

Component build-up estimation of aircraft zero-lift drag.

This package provides modules for:
- Parasite Drag (parasite_drag): skin friction and form factor
  correlations, row model, excrescences, reports and plots

Author: Parasite Drag Build-Up Team
License: See LICENSE file in project root
"""

__version__ = "0.1.0"
__author__ = "Parasite Drag Build-Up Team"
