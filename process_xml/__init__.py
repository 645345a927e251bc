"""
Process XML Filters

XML import/export filters for workflow processes, including tagging of
operators generated or exported by the AutoModel wizard.
"""

__version__ = "1.0.0"
