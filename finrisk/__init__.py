"""
FinRisk - financial ratio and risk workstation.

Derives solvency, liquidity, profitability and debt-capacity ratios from two
fiscal years of balance-sheet and income-statement figures, tracks their
year-over-year trends, and classifies a catalogue of risk scenarios into
severity tiers.
"""

__version__ = "0.1.0"
