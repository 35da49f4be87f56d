"""
LLM-assisted extraction of bioelectrochemical parameters
"""

from extraction.ollama_client import OllamaClient, OllamaError
from extraction.parameter_extractor import ParameterExtractor

__all__ = [
    'OllamaClient',
    'OllamaError',
    'ParameterExtractor'
]
