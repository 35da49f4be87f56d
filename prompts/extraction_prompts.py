"""
Prompts for LLM-based parameter extraction from paper abstracts
"""
import json

EXTRACTION_SYSTEM_PROMPT = (
    "You are a data extraction specialist. Extract information from the provided text "
    "and return it in the exact JSON structure provided. Only extract information that is "
    "explicitly stated in the text. For any fields where information is not found, use null."
)

PARAMETER_TEMPLATE = {
    "system_type": None,
    "power_density_mw_m2": None,
    "coulombic_efficiency_percent": None,
    "anode_materials": [],
    "cathode_materials": [],
    "organisms": [],
}


def parameter_extraction_prompt(title, abstract, template=PARAMETER_TEMPLATE):
    """
    Generate prompt for extracting bioelectrochemical system parameters
    """
    return f"""
    Extract bioelectrochemical system parameters from this research paper.

    Title: {title}
    Abstract: {abstract}

    Look for:
    - System type: one of MFC, MEC, MDC, MES or BES
    - Maximum power density, converted to mW/m² (1 W/m² = 1000 mW/m²)
    - Coulombic efficiency in percent
    - Anode and cathode materials (e.g. carbon cloth, graphite brush, Pt/C)
    - Microorganisms or inocula (e.g. Geobacter sulfurreducens, anaerobic sludge)

    Template:
    {json.dumps(template, indent=2)}

    Respond with JSON matching the template only.
    """
