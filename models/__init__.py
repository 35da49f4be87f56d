"""
Data models for research papers and quality scores
"""
