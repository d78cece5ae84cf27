"""Version information for spendpivot."""

VERSION = '0.3.0'
