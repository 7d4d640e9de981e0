"""
Period tracking core: period log, cycle statistics, predictions and phase advice.
"""
