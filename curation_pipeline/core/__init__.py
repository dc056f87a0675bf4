"""
Core services of the Creator Curation Pipeline
"""
