"""
Category mappings for bioelectrochemical systems and paper sources
"""

# Bioelectrochemical system types
SYSTEM_TYPES = {
    "MFC": "Microbial Fuel Cell",
    "MEC": "Microbial Electrolysis Cell",
    "MDC": "Microbial Desalination Cell",
    "MES": "Microbial Electrosynthesis System",
    "BES": "Bioelectrochemical System",
}

# Catch-all tag that says nothing about the specific system studied
GENERIC_SYSTEM_TYPE = "BES"

# Provenance tags written by the ingestion scripts
PAPER_SOURCES = {
    "crossref_api": "CrossRef API",
    "pubmed_api": "PubMed API",
    "arxiv_api": "arXiv API",
    "local_pdf": "Local PDF",
    "manual": "Manual entry",
    "ai_generated": "AI generated",
}

# arXiv categories where bioelectrochemistry papers turn up
ARXIV_CATEGORIES = {
    "q-bio.BM": "Biomolecules",
    "q-bio.CB": "Cell Behavior",
    "q-bio.PE": "Populations and Evolution",
    "q-bio.QM": "Quantitative Methods",
    "physics.chem-ph": "Chemical Physics",
    "physics.bio-ph": "Biological Physics",
    "physics.app-ph": "Applied Physics",
    "cond-mat.mtrl-sci": "Materials Science",
    "eess.SY": "Systems and Control",
}
