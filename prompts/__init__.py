"""
Prompt templates for LLM-assisted extraction
"""
