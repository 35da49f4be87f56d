"""
Shared lookup tables and category mappings
"""
