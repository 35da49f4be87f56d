"""
LLM-based extraction of system parameters from paper abstracts
"""
import logging
from typing import Any, Dict, List, Optional

from config import Config
from extraction.ollama_client import OllamaClient, OllamaError
from models.paper import PaperRecord
from prompts.extraction_prompts import EXTRACTION_SYSTEM_PROMPT, parameter_extraction_prompt
from scoring.features import has_value
from utils.categories import SYSTEM_TYPES

logger = logging.getLogger(__name__)

# Extraction result key -> paper record field
FIELD_MAP = {
    "system_type": "system_type",
    "power_density_mw_m2": "power_output",
    "coulombic_efficiency_percent": "efficiency",
    "anode_materials": "anode_materials",
    "cathode_materials": "cathode_materials",
    "organisms": "organism_types",
}


def _to_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).replace(",", "").strip())
    except ValueError:
        return None
    return number if number >= 0 else None


def _to_string_list(value: Any) -> List[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []

    items = []
    for item in value:
        if isinstance(item, dict):
            item = item.get("name")
        if isinstance(item, str) and item.strip() and item.strip().lower() != "null":
            items.append(item.strip())
    return items


class ParameterExtractor:
    """Fills missing technical fields on paper records from their abstracts"""

    def __init__(self, client: OllamaClient, model: str = Config.OLLAMA_MODEL):
        self.client = client
        self.model = model

    async def extract(self, paper: PaperRecord) -> Dict[str, Any]:
        """Ask the model for parameters; returns an empty dict if nothing usable came back"""
        if not paper.abstract:
            logger.debug(f"Skipping {paper.id}: no abstract to extract from")
            return {}

        prompt = parameter_extraction_prompt(paper.title, paper.abstract)
        try:
            raw = await self.client.generate_json(self.model, prompt, system=EXTRACTION_SYSTEM_PROMPT)
        except OllamaError as e:
            logger.error(f"Parameter extraction failed for {paper.id}: {e}")
            return {}

        return self.normalize(raw)

    @staticmethod
    def normalize(raw: Dict[str, Any]) -> Dict[str, Any]:
        """Coerce model output into clean field values, dropping anything unusable"""
        result = {}

        system_type = raw.get("system_type")
        if isinstance(system_type, str) and system_type.strip().upper() in SYSTEM_TYPES:
            result["system_type"] = system_type.strip().upper()

        for key in ("power_density_mw_m2", "coulombic_efficiency_percent"):
            number = _to_number(raw.get(key))
            if number is not None:
                result[key] = number

        if "coulombic_efficiency_percent" in result and result["coulombic_efficiency_percent"] > 100:
            del result["coulombic_efficiency_percent"]

        for key in ("anode_materials", "cathode_materials", "organisms"):
            items = _to_string_list(raw.get(key))
            if items:
                result[key] = items

        return result

    @staticmethod
    def apply(paper: PaperRecord, result: Dict[str, Any]) -> List[str]:
        """Copy extracted values onto empty fields only; returns the fields that changed"""
        updated = []
        for key, field_name in FIELD_MAP.items():
            if key not in result or has_value(getattr(paper, field_name)):
                continue
            setattr(paper, field_name, result[key])
            updated.append(field_name)

        if updated:
            logger.info(f"Extracted {', '.join(updated)} for {paper.id}")
        return updated
