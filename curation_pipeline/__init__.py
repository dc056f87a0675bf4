"""
Creator Curation Pipeline
Link a YouTube channel, curate a month of uploads and submit them downstream.
"""

__version__ = "1.0.0"
