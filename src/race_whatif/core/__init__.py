"""
Pure scenario engine: validation, factor model, prediction, comparison
and heat-risk classification.
"""
